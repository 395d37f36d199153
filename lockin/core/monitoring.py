"""
Optional Logfire tracing for the Lock In server and scheduler.

When ``LOGFIRE_ENABLED`` is on and a ``LOGFIRE_TOKEN`` is present,
:func:`initialize_logfire` configures Logfire and instruments SQLAlchemy,
httpx and the FastAPI app. The ``log_*`` helpers send structured events to
Logfire in that case and write a debug line to the standard logger otherwise.
Telemetry failures never propagate into request handling.
"""

import logging
from typing import Any, Callable, Optional

import logfire
from fastapi import FastAPI
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class MonitoringSettings(BaseSettings):
    """``LOGFIRE_*`` environment switches."""

    enabled: bool = False
    token: str = ""
    environment: str = "development"
    service_name: str = "lockin-server"
    service_version: str = "0.1.0"

    trace_sqlalchemy: bool = True
    trace_httpx: bool = True
    trace_fastapi: bool = True

    model_config = SettingsConfigDict(env_prefix="LOGFIRE_", env_file=".env", extra="ignore")


monitoring_settings = MonitoringSettings()


def _instrument(name: str, instrument: Callable[[], Any]) -> None:
    try:
        instrument()
        logger.info(f"Logfire: {name} instrumentation enabled")
    except Exception as e:
        logger.warning(f"Failed to instrument {name}: {e}")


def initialize_logfire(app: Optional[FastAPI] = None) -> bool:
    """
    Configure Logfire and instrument the libraries switched on in settings.

    Args:
        app: Application to instrument; FastAPI tracing is skipped without one.

    Returns:
        True when Logfire is active, False when it is disabled or could not be configured.
    """
    config = monitoring_settings
    if not config.enabled:
        logger.info("Logfire monitoring is disabled. Set LOGFIRE_ENABLED=true to enable.")
        return False
    if not config.token:
        logger.warning("Logfire is enabled but LOGFIRE_TOKEN is not set; monitoring stays off.")
        return False

    try:
        logfire.configure(
            token=config.token,
            service_name=config.service_name,
            service_version=config.service_version,
            environment=config.environment,
        )
    except Exception as e:
        logger.error(f"Failed to initialize Logfire: {e}", exc_info=True)
        return False

    if config.trace_sqlalchemy:
        _instrument("SQLAlchemy", logfire.instrument_sqlalchemy)
    if config.trace_httpx:
        _instrument("HTTPX", logfire.instrument_httpx)
    if config.trace_fastapi and app is not None:
        _instrument("FastAPI", lambda: logfire.instrument_fastapi(app=app))

    logger.info(f"Logfire monitoring initialized: environment={config.environment}, service={config.service_name}")
    return True


def _emit(send: Callable[[], Any], fallback: str) -> None:
    """Send one event to Logfire, or log ``fallback`` at debug when Logfire is off."""
    if not monitoring_settings.enabled:
        logger.debug(fallback)
        return
    try:
        send()
    except Exception as e:
        logger.debug(f"Could not send event to Logfire ({e}): {fallback}")


def log_api_request(method: str, path: str, status_code: int, duration_ms: float) -> None:
    _emit(
        lambda: logfire.info(
            "API request completed",
            method=method,
            path=path,
            status_code=status_code,
            duration_ms=duration_ms,
        ),
        f"{method} {path} -> {status_code} ({duration_ms:.2f}ms)",
    )


def log_recurring_reset(reset_count: int, duration_ms: float) -> None:
    """Record one run of the hourly recurring to-do reset."""
    _emit(
        lambda: logfire.info("Recurring to-do reset completed", reset_count=reset_count, duration_ms=duration_ms),
        f"Recurring reset finished: reset_count={reset_count} ({duration_ms:.2f}ms)",
    )


def log_error(error_type: str, error_message: str, context: Optional[dict] = None) -> None:
    """
    Record an unexpected error.

    Args:
        error_type: Exception class name
        error_message: Exception message
        context: Extra attributes such as the request path or error id
    """
    _emit(
        lambda: logfire.error(f"{error_type}: {error_message}", **(context or {})),
        f"{error_type}: {error_message}",
    )
