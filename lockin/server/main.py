"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request logging), registers exception handlers and includes all API routers.
It serves as the root of the web server.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lockin import __version__
from lockin.core.database import init_db
from lockin.core.logging_config import get_logger, setup_logging
from lockin.core.monitoring import initialize_logfire

from .api.v1 import (
    goal_todos,
    goals,
    health,
    partners,
    shared_videos,
    storage,
    study_sessions,
    todos,
    users,
)
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import RequestLoggingMiddleware

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Creates the tables on startup when running against SQLite; Postgres
    deployments are migrated with Alembic instead.
    """
    # Startup
    try:
        logger.info("Starting up Lock In Server...")
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    yield

    # Shutdown
    logger.info("Shutting down Lock In Server...")


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    Lock In Server API

    Backend for the Lock In study app: goals with hours targets, goal to-dos
    (simple, hours-tracked and recurring), recorded study sessions, standalone
    to-dos, accountability partners with invites, and video sharing between
    partners.
    """,
    version=__version__,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

# Set all CORS enabled origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors.origins,
    allow_credentials=settings.cors.allow_credentials,
    allow_methods=settings.cors.allow_methods,
    allow_headers=settings.cors.allow_headers,
)
app.add_middleware(RequestLoggingMiddleware)

setup_exception_handlers(app)
initialize_logfire(app)

app.include_router(health.router, tags=["health"])
app.include_router(goals.router, prefix=f"{constant.API_V1_STR}/goals")
app.include_router(goal_todos.router, prefix=f"{constant.API_V1_STR}/goal-todos")
app.include_router(study_sessions.router, prefix=f"{constant.API_V1_STR}/study-sessions")
app.include_router(todos.router, prefix=f"{constant.API_V1_STR}/todos")
app.include_router(partners.router, prefix=f"{constant.API_V1_STR}/partners")
app.include_router(shared_videos.router, prefix=f"{constant.API_V1_STR}/shared-videos")
app.include_router(storage.router, prefix=f"{constant.API_V1_STR}/storage")
app.include_router(users.router, prefix=f"{constant.API_V1_STR}/users")
