from __future__ import annotations

from typing import Any

import structlog
from fastapi import status
from fastapi.responses import JSONResponse

from app.metrics import search_errors_total

logger = structlog.get_logger()

APPLICATION_ERROR_MESSAGE = "There was an error processing your request"
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"


class SearchError(Exception):
    """Base error raised by the vector search pipeline."""

    def __init__(self, message: str, data: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.data = data


class UserError(SearchError):
    """The caller did something wrong: bad input or flagged content."""


class ApplicationError(SearchError):
    """A collaborator service failed; the caller did nothing wrong."""


def error_response(exc: Exception) -> JSONResponse:
    """Map an exception raised by the pipeline to a sanitized JSON response.

    ``UserError`` data is surfaced to the caller. ``ApplicationError`` data and
    unexpected exception details are logged and never returned.

    Args:
        exc: The exception caught at the route boundary.

    Returns:
        A JSONResponse with status 400 or 500 and an ``error`` field.
    """
    if isinstance(exc, UserError):
        search_errors_total.labels(kind="user").inc()
        logger.info("user_error", error=exc.message, data=exc.data)
        content: dict[str, Any] = {"error": exc.message}
        if exc.data is not None:
            content["data"] = exc.data
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=content)

    if isinstance(exc, ApplicationError):
        search_errors_total.labels(kind="application").inc()
        logger.error("application_error", error=exc.message, data=exc.data)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": APPLICATION_ERROR_MESSAGE},
        )

    search_errors_total.labels(kind="unexpected").inc()
    logger.error("unexpected_error", error=str(exc), error_type=type(exc).__name__, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": UNEXPECTED_ERROR_MESSAGE},
    )
