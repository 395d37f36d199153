"""Celery application configuration for Lock In background tasks."""

from celery import Celery
from celery.schedules import crontab
from celery.signals import setup_logging as celery_setup_logging

from lockin.core.logging_config import get_logger, setup_logging
from lockin.server.core.config import settings

logger = get_logger(__name__)

celery_app = Celery(
    "lockin",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["lockin.scheduler.tasks"],
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    task_time_limit=300,  # 5 minutes max per task
    task_soft_time_limit=240,
    worker_prefetch_multiplier=1,
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    task_default_retry_delay=60,
    task_max_retries=3,
    broker_connection_retry_on_startup=True,
)

# Hourly, at the configured minute past the hour
celery_app.conf.beat_schedule = {
    "reset-recurring-goal-todos": {
        "task": "lockin.scheduler.tasks.reset_recurring_goal_todos",
        "schedule": crontab(minute=settings.scheduler.reset_minute),
    },
}


@celery_setup_logging.connect
def configure_worker_logging(**kwargs) -> None:
    """Use the Lock In handlers and levels instead of Celery's own root logger setup."""
    setup_logging()


logger.info(
    "Celery app configured with broker: %s",
    settings.redis_url.split("@")[-1] if "@" in settings.redis_url else settings.redis_url,
)
