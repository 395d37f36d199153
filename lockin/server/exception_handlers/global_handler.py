"""
Fallback handler for exceptions no route or service translated.

Every unhandled exception is logged once with a short error id, the request
line and the client address; the caller receives the same id in a 500 body so
a bug report can be matched to the server log.
"""

from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from lockin.core.errors import LockInError
from lockin.core.logging_config import get_logger
from lockin.core.monitoring import log_error
from lockin.core.utils import new_id

from .domain_handler import lockin_error_handler

logger = get_logger(__name__)

ERROR_ID_LENGTH = 12


def _request_context(request: Request, exc: Exception, error_id: str) -> Dict[str, Any]:
    return {
        "error_id": error_id,
        "error_type": type(exc).__name__,
        "method": request.method,
        "path": request.url.path,
        "query_params": dict(request.query_params),
        "client": request.client.host if request.client else "unknown",
    }


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log an unexpected exception and answer 500 with a reference id."""
    error_id = new_id()[:ERROR_ID_LENGTH]
    context = _request_context(request, exc, error_id)

    logger.error(
        f"Unhandled exception [{error_id}] in {request.method} {request.url.path}: {exc}",
        exc_info=exc,
        extra=context,
    )
    log_error(context["error_type"], str(exc), {"error_id": error_id, "path": context["path"]})

    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "error_id": error_id, "error_type": context["error_type"]},
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register the domain error handler and the 500 fallback on ``app``."""
    app.add_exception_handler(LockInError, lockin_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)
    logger.debug("Exception handlers registered")
