"""Interface layer error handling.

Maps domain errors raised by the rating core onto HTTP responses.
"""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from stars.domain.error import (
    BusinessRuleViolationError,
    DomainError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)

# Checked in order; the first matching base class wins
_STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (ValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (BusinessRuleViolationError, status.HTTP_409_CONFLICT),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (PersistenceError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def status_for(error: DomainError) -> int:
    """HTTP status code for a domain error."""
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return code
    return status.HTTP_400_BAD_REQUEST


async def handle_domain_error(request: Request, exc: Exception) -> JSONResponse:
    """Render a domain error as a JSON error response."""
    code = status_for(exc) if isinstance(exc, DomainError) else 500
    if code >= 500:
        logfire.error("Request failed", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=code,
        content={"detail": str(exc), "error": type(exc).__name__},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the domain error handler on an application."""
    app.add_exception_handler(DomainError, handle_domain_error)
