"""Drupal cache report models."""

from typing import Optional

from pydantic import Field

from core.constants import ALL_BINS, DRUPAL_REPORT_NOTE

from .base import ReportModel, TTLValue


class BinSummary(ReportModel):
    bin: str
    count: int = 0
    total_bytes: int = 0
    avg_ttl: Optional[int] = Field(default=None, alias="avgTTL")
    max_bytes: int = 0
    max_key: Optional[str] = None


class RouteSummary(ReportModel):
    route: str
    bytes: int = 0
    count: int = 0
    url: Optional[str] = None
    theme: Optional[str] = None


class ThemeSummary(ReportModel):
    theme: str
    bytes: int = 0
    count: int = 0


class LanguageSummary(ReportModel):
    lang_content: str
    bytes: int = 0
    count: int = 0


class AuthVsAnon(ReportModel):
    auth_count: int = 0
    anon_count: int = 0


class DrupalReport(ReportModel):
    """
    Aggregated view of every scanned key under the Drupal prefix.

    `scanned` counts keys visited, which is below the namespace size when the
    scan cap was hit.
    """

    ok: bool = True
    scanned: int
    prefix: str
    bins: list[BinSummary] = Field(default_factory=list)
    top_routes: list[RouteSummary] = Field(default_factory=list)
    themes: list[ThemeSummary] = Field(default_factory=list)
    languages: list[LanguageSummary] = Field(default_factory=list)
    auth_vs_anon: AuthVsAnon = Field(default_factory=AuthVsAnon)
    note: str = DRUPAL_REPORT_NOTE


class SearchResultRow(ReportModel):
    key: str
    bin: str
    cid: str
    ttl: TTLValue = None
    type: str
    size: Optional[int] = None


class SearchReport(ReportModel):
    """Keys whose CID exactly equals the query."""

    ok: bool = True
    cid: str
    bin: str = ALL_BINS
    count: int = 0
    keys: list[SearchResultRow] = Field(default_factory=list)
    pattern: str


__all__ = [
    "AuthVsAnon",
    "BinSummary",
    "DrupalReport",
    "LanguageSummary",
    "RouteSummary",
    "SearchReport",
    "SearchResultRow",
    "ThemeSummary",
]
