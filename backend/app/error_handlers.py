"""
Custom exception handlers for FastAPI.

Security:
- Request IDs are logged server-side for tracing but NOT exposed to clients
- Generic error messages for 500 errors to prevent information disclosure
"""

from typing import Union

import structlog
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from core.logging import get_logger
from core.models import ErrorKind, ErrorReport, ReportModel

logger = get_logger("backend.errors")

ERROR_STATUS_CODES = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONNECTIVITY: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _get_request_id() -> str:
    """
    Get the current request ID from context.

    Used for server-side logging only - NOT exposed to clients.
    """
    return structlog.contextvars.get_contextvars().get("request_id", "-")


def _response_payload(detail: str, status_code: int) -> dict:
    """
    Create error response payload.

    Security: Does NOT include request_id to prevent information disclosure.
    """
    return {
        "detail": detail,
        "status_code": status_code,
    }


def report_response(report: Union[ReportModel, ErrorReport]) -> Union[dict, JSONResponse]:
    """
    Render a service result.

    Successful reports are returned as plain payloads; an ErrorReport keeps its
    body and gets 400 (validation) or 500 (connectivity).
    """
    if isinstance(report, ErrorReport):
        status_code = ERROR_STATUS_CODES[report.kind]
        logger.warning(
            "report_failed",
            kind=report.kind.value,
            error=report.error,
            status_code=status_code,
            request_id=_get_request_id(),
        )
        return JSONResponse(status_code=status_code, content=report.to_response())
    return report.to_response()


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        logger.warning(
            "http_exception",
            detail=exc.detail,
            status_code=exc.status_code,
            request_id=_get_request_id(),
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=_response_payload(str(exc.detail), exc.status_code),
        )

    @app.exception_handler(ValidationError)
    async def validation_exception_handler(request: Request, exc: ValidationError):
        logger.warning(
            "validation_error",
            errors=exc.errors(),
            request_id=_get_request_id(),
        )
        return JSONResponse(
            status_code=422,
            content={
                **_response_payload("Validation error", 422),
                "errors": exc.errors(),
            },
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        # Full details stay in the server log
        logger.exception(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            request_id=_get_request_id(),
        )
        return JSONResponse(
            status_code=500,
            content=_response_payload("Internal server error", 500),
        )


__all__ = ["ERROR_STATUS_CODES", "register_exception_handlers", "report_response"]
