"""
Logging configuration for Lock In.

The API server and the scheduler worker call :func:`setup_logging` once
at start-up. It installs a console handler and an optional file handler
through ``logging.config.dictConfig``, then applies the per-package levels
below; modules obtain loggers with :func:`get_logger`.

Defaults come from the ``LOCKIN_LOG_*`` settings. Supported formats:

- ``simple``: level, logger and message
- ``detailed``: adds timestamp, source location and function (default)
- ``json``: one JSON object per line for log shippers
"""

import logging
import logging.config
from pathlib import Path
from typing import Any, Dict, Optional

from lockin.server.core.config import settings

LOG_LEVEL = settings.log_level.upper()
LOG_FORMAT = settings.log_format
LOG_FILE_DIR = settings.log_file_dir
ENABLE_FILE_LOGGING = settings.enable_file_logging

LOG_FILE_NAME = "lockin.log"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

SIMPLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"

DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s"

JSON_FORMAT = (
    '{"timestamp": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", '
    '"module": "%(filename)s", "function": "%(funcName)s", "line": %(lineno)d, '
    '"message": "%(message)s"}'
)

FORMATS: Dict[str, str] = {
    "simple": SIMPLE_FORMAT,
    "detailed": DETAILED_FORMAT,
    "json": JSON_FORMAT,
}

MODULE_LOG_LEVELS = {
    "lockin.core": "INFO",
    "lockin.core.database": "INFO",
    "lockin.core.services": "DEBUG",
    "lockin.server": "INFO",
    "lockin.server.api": "DEBUG",
    "lockin.server.auth": "INFO",
    "lockin.server.services": "DEBUG",
    "lockin.scheduler": "INFO",
    "lockin.client": "INFO",
    # Chatty third-party libraries
    "sqlalchemy": "WARNING",
    "sqlalchemy.engine": "WARNING",
    "sqlalchemy.pool": "WARNING",
    "httpx": "WARNING",
    "botocore": "WARNING",
    "asyncio": "WARNING",
    "celery": "INFO",
    "uvicorn": "INFO",
    "uvicorn.access": "INFO",
}


def _build_config(level: str, fmt: str, log_file: Optional[Path]) -> Dict[str, Any]:
    handlers: Dict[str, Dict[str, Any]] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": level,
            "formatter": "default",
        }
    }
    if log_file is not None:
        handlers["file"] = {
            "class": "logging.FileHandler",
            "level": "DEBUG",
            "formatter": "default",
            "filename": str(log_file),
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": FORMATS.get(fmt, DETAILED_FORMAT), "datefmt": DATE_FORMAT},
        },
        "handlers": handlers,
        # Root passes everything through; handlers do the filtering.
        "root": {"level": "DEBUG", "handlers": list(handlers)},
    }


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    enable_file: bool = True,
) -> None:
    """
    Configure logging for the current process.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        log_level: Console level override (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Format override (simple, detailed, json); unknown names fall back to detailed
        enable_file: Allow the file handler when file logging is switched on in settings
    """
    level = (log_level or LOG_LEVEL).upper()
    fmt = log_format or LOG_FORMAT

    log_file: Optional[Path] = None
    if enable_file and ENABLE_FILE_LOGGING:
        log_dir = Path(LOG_FILE_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / LOG_FILE_NAME

    logging.config.dictConfig(_build_config(level, fmt, log_file))
    # Levels only; dictConfig would also strip handlers that uvicorn and celery install
    for module_name, module_level in MODULE_LOG_LEVELS.items():
        logging.getLogger(module_name).setLevel(module_level)

    logging.getLogger(__name__).info(
        "Logging configured: level=%s, format=%s, file_logging=%s", level, fmt, log_file is not None
    )


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` (normally the caller's ``__name__``)."""
    return logging.getLogger(name)
