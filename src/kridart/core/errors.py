"""Application error taxonomy and the handlers that render it.

Each error carries the HTTP status it maps to. Route code raises these; the
handlers installed by :func:`register_exception_handlers` turn them into
``{"message": ...}`` bodies.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class KridartError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, *, detail: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail

    @property
    def headers(self) -> dict[str, str] | None:
        return None


class ValidationError(KridartError):
    """Missing or malformed client input."""

    status_code = status.HTTP_400_BAD_REQUEST


class InvalidCredentials(KridartError):
    """Unknown username or wrong password at login."""

    status_code = status.HTTP_401_UNAUTHORIZED


class Unauthenticated(KridartError):
    """Missing, invalid or expired bearer token."""

    status_code = status.HTTP_403_FORBIDDEN


class RateLimited(KridartError):
    """Too many attempts from one client within the current window."""

    status_code = status.HTTP_429_TOO_MANY_REQUESTS

    def __init__(self, message: str, *, retry_after: int) -> None:
        super().__init__(message)
        self.retry_after = retry_after

    @property
    def headers(self) -> dict[str, str]:
        return {"Retry-After": str(self.retry_after)}


class StoreError(KridartError):
    """Underlying persistence or blob storage failure."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def _render(request: Request, exc: KridartError) -> JSONResponse:
    content: dict[str, str] = {"message": exc.message}
    debug = getattr(request.app.state, "debug", False)
    if exc.detail and debug and exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        content["error"] = exc.detail
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


async def kridart_error_handler(request: Request, exc: KridartError) -> JSONResponse:
    """Render a :class:`KridartError` raised anywhere in a route."""
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(
            "%s %s failed: %s (%s)",
            request.method,
            request.url.path,
            exc.message,
            exc.detail,
            exc_info=exc.__cause__ is not None,
        )
    else:
        logger.info(
            "%s %s rejected with %d: %s",
            request.method,
            request.url.path,
            exc.status_code,
            exc.message,
        )
    return _render(request, exc)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed bodies as 400s in the application's error shape."""
    logger.info("%s %s rejected malformed input", request.method, request.url.path)
    return _render(request, ValidationError("Invalid request body", detail=str(exc.errors())))


async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Last-resort handler for store errors a route did not translate."""
    logger.error("Unhandled store error on %s %s", request.method, request.url.path, exc_info=exc)
    return _render(request, StoreError("Internal server error", detail=str(exc)))


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the application's exception handlers to ``app``."""
    app.add_exception_handler(KridartError, kridart_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_error_handler)  # type: ignore[arg-type]
