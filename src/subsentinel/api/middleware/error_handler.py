"""Global error handling.

Every exception that reaches the API boundary is converted to the same JSON
envelope, ``{"success": false, "error": ..., "error_code": ...}``, with an
HTTP status chosen from the exception type. Stack traces are never returned
to the caller.
"""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from subsentinel.config import settings
from subsentinel.core.errors import get_message
from subsentinel.core.exceptions import AppError

logger = logging.getLogger(__name__)


def error_response(status_code: int, error_code: str, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message, "error_code": error_code},
        headers=headers,
    )


async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    """Handle domain exceptions raised by services and dependencies.

    Args:
        request: The incoming request
        exc: The domain exception

    Returns:
        JSONResponse with the exception's status and message
    """
    extra = {"error_code": exc.error_code, "path": request.url.path, "method": request.method}
    if settings.debug:
        extra["details"] = exc.details

    if exc.http_status >= 500:
        logger.error(f"Request error: {exc.error_code}", extra=extra)
    else:
        logger.info(f"Request rejected: {exc.error_code}", extra=extra)

    headers = {"WWW-Authenticate": "Bearer"} if exc.http_status == status.HTTP_401_UNAUTHORIZED else None
    return error_response(exc.http_status, exc.error_code, exc.message, headers)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle Pydantic validation errors.

    Args:
        request: The incoming request
        exc: The validation error

    Returns:
        JSONResponse (400) listing the offending fields
    """
    error_messages = []
    for error in exc.errors():
        field = ".".join(str(x) for x in error.get("loc", []))
        msg = error.get("msg", "Invalid value")
        error_messages.append(f"{field}: {msg}")

    logger.warning(
        f"Validation error on {request.url.path}",
        extra={"path": request.url.path, "method": request.method, "error_code": "VAL_001"},
    )

    return error_response(
        status.HTTP_400_BAD_REQUEST,
        "VAL_001",
        " | ".join(error_messages) or get_message("VAL_001"),
    )


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Wrap framework HTTP errors (unknown route, wrong method) in the envelope."""
    message = exc.detail if isinstance(exc.detail, str) else get_message("SYS_001")
    return error_response(exc.status_code, f"HTTP_{exc.status_code}", message, getattr(exc, "headers", None))


async def handle_integrity_error(request: Request, exc: IntegrityError) -> JSONResponse:
    """Handle database integrity errors.

    Args:
        request: The incoming request
        exc: The integrity error

    Returns:
        409 for uniqueness violations, 500 otherwise
    """
    # Do not log str(exc): it can include SQL + bound parameters.
    if settings.debug:
        logger.exception(
            f"Database integrity error on {request.url.path}",
            extra={"path": request.url.path, "method": request.method},
        )
    else:
        logger.error(
            f"Database integrity error on {request.url.path}",
            extra={"path": request.url.path, "method": request.method},
        )

    error_msg = str(exc).lower()
    if "unique" in error_msg or "duplicate" in error_msg:
        return error_response(status.HTTP_409_CONFLICT, "DB_002", get_message("DB_002"))

    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "DB_001", get_message("DB_001"))


async def handle_generic_error(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions.

    Args:
        request: The incoming request
        exc: The unexpected exception

    Returns:
        JSONResponse with generic error message
    """
    # Traceback goes through the PII filter of JSONLogFormatter; str(exc) is never returned.
    extra = {"error_type": type(exc).__name__, "path": request.url.path, "method": request.method}
    logger.error(f"Unexpected error on {request.url.path}", extra=extra, exc_info=exc)

    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "SYS_001", get_message("SYS_001"))
