"""
Domain Exception Handler.

Translates ``LockInError`` subclasses raised by services into JSON responses
carrying the user-facing message.
"""

from fastapi import Request
from fastapi.responses import JSONResponse

from lockin.core.errors import LockInError, NotAuthenticatedError
from lockin.core.logging_config import get_logger

logger = get_logger(__name__)


async def lockin_error_handler(request: Request, exc: LockInError) -> JSONResponse:
    """
    Render a domain error as ``{"detail": message}`` with its status code.

    Args:
        request: The HTTP request that caused the exception
        exc: The domain error that was raised

    Returns:
        JSONResponse with the error message
    """
    logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    content = {"detail": exc.message}
    if exc.details is not None:
        content["details"] = exc.details
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, NotAuthenticatedError) else None
    return JSONResponse(status_code=exc.status_code, content=content, headers=headers)
