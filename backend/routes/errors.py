"""Map domain errors to HTTP responses with a ``{"detail": ...}`` body."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from core.errors import (
    ClubError,
    Forbidden,
    NameExists,
    NotFound,
    PreconditionRequired,
    ValidationFailed,
    VersionInvalid,
    VersionOutdated,
)

logger = logging.getLogger(__name__)

# Most specific first; the first isinstance match wins.
_STATUS_BY_ERROR = (
    (NotFound, status.HTTP_404_NOT_FOUND),
    (NameExists, 422),  # Unprocessable Content
    (PreconditionRequired, status.HTTP_428_PRECONDITION_REQUIRED),
    (VersionInvalid, status.HTTP_412_PRECONDITION_FAILED),
    (VersionOutdated, status.HTTP_412_PRECONDITION_FAILED),
    (Forbidden, status.HTTP_403_FORBIDDEN),
    (ValidationFailed, status.HTTP_400_BAD_REQUEST),
)


def status_for(exc: ClubError) -> int:
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ClubError)
    async def club_error_handler(request: Request, exc: ClubError):  # type: ignore[override]
        code = status_for(exc)
        logger.debug("%s %s -> %d: %s", request.method, request.url.path, code, exc.message)
        payload = {"detail": exc.message}
        if isinstance(exc, ValidationFailed):
            payload["violations"] = exc.violations
        return JSONResponse(status_code=code, content=payload)
