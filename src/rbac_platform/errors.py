"""
rbac_platform.errors

Service-layer exception taxonomy and its HTTP translation.

Responsibilities:
- Give services a small set of exceptions that carry their HTTP status.
- Register FastAPI exception handlers that render them as `{"detail": ...}`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
)

from rbac_platform.observability.logging import get_logger

if TYPE_CHECKING:
    from fastapi import Request

log = get_logger(__name__)


class ServiceError(Exception):
    """Base class for errors raised by the service layer."""

    status_code: int = HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(ServiceError):
    status_code = HTTP_404_NOT_FOUND


class ConflictError(ServiceError):
    # Duplicate names/emails, or deleting something still referenced.
    status_code = HTTP_409_CONFLICT


class AuthenticationFailed(ServiceError):
    status_code = HTTP_401_UNAUTHORIZED


def install_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
        log.info(
            "service_error",
            error=type(exc).__name__,
            status_code=exc.status_code,
            message=exc.message,
        )
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})
