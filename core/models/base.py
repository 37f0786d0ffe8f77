"""
Base classes shared by every report model.

Reports are request-scoped data contracts for the dashboard UI. Python
attributes are snake_case; JSON output uses the camelCase names the UI reads.
"""

from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# TTL as reported to the UI: seconds, "PERSIST" for keys without expiry,
# None when the TTL could not be read
TTLValue = Optional[Union[int, Literal["PERSIST"]]]

# One INFO section: field name -> number or text
InfoSection = dict[str, Union[int, float, str]]


class ReportModel(BaseModel):
    """Base model with camelCase JSON aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_response(self) -> dict:
        """JSON-compatible payload using the UI field names."""
        return self.model_dump(mode="json", by_alias=True)


class ErrorKind(str, Enum):
    """Why a report could not be built."""
    VALIDATION = "validation"
    CONNECTIVITY = "connectivity"


class ErrorReport(ReportModel):
    """Request-level failure: no usable data."""

    ok: Literal[False] = False
    error: str
    kind: ErrorKind


__all__ = ["ErrorKind", "ErrorReport", "InfoSection", "ReportModel", "TTLValue"]
