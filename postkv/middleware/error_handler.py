"""
Global error handling.

Maps core exceptions to HTTP status codes and formats every error as
the standard ``{"success": false, "error": ...}`` envelope. Unexpected
exceptions are caught by ErrorHandlerMiddleware and logged.
"""

import traceback
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from postkv.core.config import settings
from postkv.core.exceptions import (
    InvalidContentError,
    MalformedQueryError,
    NotFoundError,
    PostKVError,
    StoreUnavailableError,
)
from postkv.core.logging import get_logger

logger = get_logger(__name__)

STATUS_CODES: dict[type[PostKVError], int] = {
    InvalidContentError: status.HTTP_400_BAD_REQUEST,
    MalformedQueryError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    StoreUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def error_response(
    message: str,
    status_code: int,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    """
    Build an error envelope response.

    Args:
        message: Human-readable error message
        status_code: HTTP status code
        details: Additional error details, included when non-empty

    Returns:
        JSON response with success=False
    """
    content: dict[str, Any] = {"success": False, "error": message}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def status_code_for(exc: PostKVError) -> int:
    """Resolve the HTTP status for a core exception, walking its MRO."""
    for cls in type(exc).__mro__:
        if cls in STATUS_CODES:
            return STATUS_CODES[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def handle_postkv_error(request: Request, exc: PostKVError) -> JSONResponse:
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
    else:
        logger.warning(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
    return error_response(exc.message, status_code, exc.details if settings.DEBUG else None)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Request validation failures are client errors (400)."""
    errors = exc.errors()
    message = "Invalid request parameters"

    for err in errors:
        loc = tuple(err.get("loc", ()))
        if err.get("type") == "json_invalid" or loc == ("body",):
            message = "Invalid JSON payload"
            break
        if loc and loc[0] == "query":
            message = f'Invalid query parameter "{loc[-1]}"'
            break
        if loc and loc[0] == "body":
            message = "Invalid request body"

    logger.warning(f"Validation error on {request.url.path}: {message}")
    return error_response(message, status.HTTP_400_BAD_REQUEST)


async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unknown routes get the envelope instead of Starlette's default body."""
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        api_prefix = settings.API_PREFIX.rstrip("/") + "/"
        message = (
            "API endpoint not found"
            if request.url.path.startswith(api_prefix)
            else "Endpoint not found"
        )
    else:
        message = str(exc.detail)
    return error_response(message, exc.status_code)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the envelope exception handlers on an application."""
    app.add_exception_handler(PostKVError, handle_postkv_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Middleware for unexpected exceptions.

    Anything that escapes the exception handlers becomes a 500 with an
    error id; details are only exposed in debug mode.
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        try:
            return await call_next(request)
        except PostKVError as e:
            return await handle_postkv_error(request, e)
        except Exception as e:
            error_id = datetime.now(UTC).isoformat()

            logger.error(
                f"Unhandled exception [{error_id}]: {str(e)}",
                extra={
                    "path": request.url.path,
                    "method": request.method,
                    "error_type": type(e).__name__,
                    "traceback": traceback.format_exc(),
                },
            )

            error_details: dict[str, Any] = {"error_id": error_id}
            if settings.DEBUG:
                error_details["message"] = str(e)
                error_details["type"] = type(e).__name__

            return error_response(
                "Internal server error",
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                error_details,
            )
