"""Error handling middleware.

Every error body is ``{"error": <message>}`` with no internal detail, and is
marked non-cacheable.
"""

import structlog
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from medtag.core.exceptions import AppException

NO_STORE_HEADERS = {"Cache-Control": "no-store"}

logger = structlog.get_logger()


def error_response(status_code: int, message: str) -> JSONResponse:
    """Build a non-cacheable JSON error response."""
    return JSONResponse(
        status_code=status_code,
        content={"error": message},
        headers=NO_STORE_HEADERS,
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """
    Handle custom application exceptions.

    Args:
        request: Request object
        exc: Application exception

    Returns:
        JSON error response
    """
    return error_response(exc.status_code, exc.message)


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """
    Handle HTTP exceptions.

    Args:
        request: Request object
        exc: HTTP exception

    Returns:
        JSON error response
    """
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return error_response(exc.status_code, message)


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Handle validation errors without echoing the offending input."""
    return error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, "Invalid request")


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected exceptions.

    Args:
        request: Request object
        exc: Exception

    Returns:
        JSON error response
    """
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        error_type=type(exc).__name__,
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")
