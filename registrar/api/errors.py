"""Exception handlers: every error leaves the API as JSON ``{"message": ...}``."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from registrar.core.errors import AuthError, InternalError, RegistrarError

logger = logging.getLogger(__name__)

BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


def _message_response(
    status_code: int, message: str, headers: dict[str, str] | None = None
) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message}, headers=headers)


async def registrar_error_handler(request: Request, exc: RegistrarError) -> JSONResponse:
    headers = BEARER_CHALLENGE if isinstance(exc, AuthError) else None
    if exc.status_code >= 500:
        logger.error(
            "Request failed",
            extra={"method": request.method, "path": request.url.path, "error": type(exc).__name__},
        )
    return _message_response(exc.status_code, exc.message, headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed."
    return _message_response(exc.status_code, message, getattr(exc, "headers", None))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # exc.errors() carries raw input values, passwords included; only the count is logged.
    logger.info(
        "Rejected malformed request",
        extra={"method": request.method, "path": request.url.path, "error_count": len(exc.errors())},
    )
    return _message_response(status.HTTP_400_BAD_REQUEST, "Invalid request.")


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled error",
        exc_info=exc,
        extra={"method": request.method, "path": request.url.path},
    )
    return _message_response(status.HTTP_500_INTERNAL_SERVER_ERROR, InternalError().message)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the JSON error handlers to ``app``."""
    app.add_exception_handler(RegistrarError, registrar_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
