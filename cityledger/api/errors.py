"""Centralized API exception definitions and handlers."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base domain/application error."""

    code = "Error"

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NotFoundError(AppError):
    """Raised when required resource does not exist."""

    code = "NotFound"

    def __init__(self, message: str) -> None:
        super().__init__(message=message, status_code=404)


class ValidationError(AppError):
    """Raised when domain-level validation fails."""

    code = "ValidationError"

    def __init__(self, message: str) -> None:
        super().__init__(message=message, status_code=422)


class ConflictError(AppError):
    """Raised when operation conflicts with current state."""

    code = "Conflict"

    def __init__(self, message: str) -> None:
        super().__init__(message=message, status_code=409)


class CityHasClientsError(AppError):
    """Raised when deleting a city that still owns active clients."""

    code = "CityHasClients"

    def __init__(self, message: str = "Cannot delete city with active clients. Archive or delete clients first.") -> None:
        super().__init__(message=message, status_code=400)


async def app_error_handler(_request: Request, exc: AppError) -> JSONResponse:
    """Render typed application exceptions as JSON responses."""

    return JSONResponse(
        status_code=exc.status_code,
        content={"ok": False, "error": exc.code, "message": exc.message},
    )


async def request_validation_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies, queries and path ids are client errors."""

    return JSONResponse(
        status_code=400,
        content={"ok": False, "error": "ValidationError", "details": jsonable_encoder(exc.errors())},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all exception handler for non-domain errors."""

    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"ok": False, "error": "InternalServerError"})


def register_exception_handlers(app: FastAPI) -> None:
    """Attach API exception handlers once during startup."""

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
