"""Background task that reopens recurring goal to-dos."""

import asyncio
import time
from datetime import datetime
from typing import Optional

from celery import Task
from sqlalchemy.ext.asyncio import async_sessionmaker
from sqlalchemy.pool import NullPool

from lockin.core.database.repositories.bundle import build_sql_repos_from_session
from lockin.core.database.session import async_session_maker
from lockin.core.database.utils import create_engine, create_sessionmaker
from lockin.core.logging_config import get_logger
from lockin.core.monitoring import log_recurring_reset
from lockin.server.core.config import settings
from lockin.server.services.goal_todos import GoalTodoService

from .celery_app import celery_app

logger = get_logger(__name__)


class ResetTask(Task):
    """Base task that logs failures and retries."""

    def on_failure(self, exc, task_id, args, kwargs, einfo):
        logger.error(f"Task {task_id} failed: {exc}", exc_info=einfo)

    def on_retry(self, exc, task_id, args, kwargs, einfo):
        logger.warning(f"Task {task_id} retrying: {exc}")


async def run_recurring_reset(
    session_maker: Optional[async_sessionmaker] = None,
    *,
    now: Optional[datetime] = None,
    reset_timezone: Optional[str] = None,
) -> int:
    """
    Reset every due recurring goal to-do across all users.

    Args:
        session_maker: Session factory; defaults to the application's.
        now: Reference time (naive UTC); defaults to the current time.
        reset_timezone: Zone whose midnight starts a new day; defaults to settings.

    Returns:
        Number of to-dos that were reset.
    """
    started = time.perf_counter()
    async with (session_maker or async_session_maker)() as session:
        service = GoalTodoService(
            build_sql_repos_from_session(session=session),
            reset_timezone=reset_timezone or settings.scheduler.reset_timezone,
        )
        count = await service.reset_all_recurring(now=now)
    log_recurring_reset(count, (time.perf_counter() - started) * 1000)
    return count


async def reset_on_fresh_engine(database_url: str) -> int:
    """
    Run the reset on an engine that lives only as long as this call.

    Each Celery run drives its own event loop, and asyncpg connections are
    bound to the loop that opened them, so nothing may be pooled across runs.
    """
    engine = create_engine(database_url, poolclass=NullPool)
    try:
        return await run_recurring_reset(create_sessionmaker(engine))
    finally:
        await engine.dispose()


@celery_app.task(base=ResetTask, bind=True, name="lockin.scheduler.tasks.reset_recurring_goal_todos")
def reset_recurring_goal_todos(self) -> int:
    """Celery entry point for the hourly reset."""
    try:
        return asyncio.run(reset_on_fresh_engine(settings.database_url))
    except Exception as exc:
        logger.error(f"Recurring reset failed: {exc}")
        raise self.retry(exc=exc)
