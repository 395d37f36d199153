"""
Health and version endpoints.

``/health`` is polled by the load balancer and deploy checks; it reports the
database as unavailable (503) when a trivial query fails.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from lockin import __version__
from lockin.core.database.session import get_session
from lockin.core.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get(
    "/health",
    summary="Health Check",
    description="Report whether the API server and its database are reachable.",
)
async def health_check(session: AsyncSession = Depends(get_session)):
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning(f"Health check database query failed: {e}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unavailable", "database": "unreachable"},
        )
    return {"status": "ok", "database": "ok"}


@router.get("/version", summary="Get Version")
async def version():
    """Package version and the REST schema version."""
    return {"version": __version__, "schema_version": "v1"}
