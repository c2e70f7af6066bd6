"""
Exception handlers.
Turn application errors into consistent JSON error responses.
"""

from datetime import datetime, timezone
from typing import Union

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from ghactivity.core.exceptions import (
    ConfigurationError,
    RateLimitError,
    UpstreamError,
)
from ghactivity.core.logger import get_logger

logger = get_logger(__name__)


async def handle_configuration_error(request: Request, error: ConfigurationError) -> JSONResponse:
    """Missing account configuration is the caller's problem: 400."""
    request_id = getattr(request.state, "request_id", "unknown")

    logger.warning(
        "Configuration error",
        extra={
            "request_id": request_id,
            "path": request.url.path,
            "error": error.message,
        },
    )

    return create_error_response(error.message, status.HTTP_400_BAD_REQUEST, request_id)


async def handle_upstream_error(request: Request, error: UpstreamError) -> JSONResponse:
    """Relay GitHub's status code and message."""
    request_id = getattr(request.state, "request_id", "unknown")

    logger.warning(
        "Rate limit exceeded" if isinstance(error, RateLimitError) else "GitHub API error",
        extra={
            "request_id": request_id,
            "path": request.url.path,
            "status_code": error.status_code,
            "error": error.message,
        },
    )

    return create_error_response(error.message, error.status_code, request_id)


async def handle_generic_error(request: Request, error: Exception) -> JSONResponse:
    """Handle all other unhandled exceptions."""
    request_id = getattr(request.state, "request_id", "unknown")

    logger.error(
        "Unhandled exception",
        extra={
            "request_id": request_id,
            "path": request.url.path,
            "error_type": type(error).__name__,
            "error": str(error),
        },
        exc_info=True,
    )

    return create_error_response(
        "An unexpected error occurred",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        request_id,
    )


def create_error_response(
    message: str,
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    request_id: str = "unknown",
    details: Union[str, dict, None] = None,
) -> JSONResponse:
    """
    Create a standardized error response.

    Args:
        message: Human-readable error message
        status_code: HTTP status code
        request_id: Request tracking ID
        details: Additional error details

    Returns:
        JSON error response
    """
    content = {
        "error": message,
        "request_id": request_id,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }

    if details:
        content["details"] = details

    return JSONResponse(status_code=status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ConfigurationError, handle_configuration_error)
    app.add_exception_handler(UpstreamError, handle_upstream_error)
    app.add_exception_handler(Exception, handle_generic_error)
