"""Unit tests for logging configuration module.

Tests verify that setup_logging wires handlers, formats and module levels the
way the server and scheduler expect.
"""

import logging
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from lockin.core.logging_config import (
    DETAILED_FORMAT,
    JSON_FORMAT,
    MODULE_LOG_LEVELS,
    SIMPLE_FORMAT,
    get_logger,
    setup_logging,
)


def _console_handler() -> logging.Handler:
    root_logger = logging.getLogger()
    return next(
        h
        for h in root_logger.handlers
        if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
    )


class TestSetupLoggingLogLevels:
    """Test setup_logging with different log levels."""

    @pytest.mark.parametrize(
        "log_level,expected_level",
        [
            ("DEBUG", logging.DEBUG),
            ("INFO", logging.INFO),
            ("WARNING", logging.WARNING),
            ("ERROR", logging.ERROR),
            ("debug", logging.DEBUG),  # Test lowercase
        ],
    )
    def test_setup_logging_with_different_levels(self, log_level, expected_level):
        setup_logging(log_level=log_level, enable_file=False)

        assert _console_handler().level == expected_level

    def test_root_logger_level_is_debug(self):
        setup_logging(log_level="ERROR", enable_file=False)

        assert logging.getLogger().level == logging.DEBUG


class TestSetupLoggingFormats:
    """Test setup_logging with different formats."""

    @pytest.mark.parametrize(
        "log_format,expected_format",
        [
            ("simple", SIMPLE_FORMAT),
            ("detailed", DETAILED_FORMAT),
            ("json", JSON_FORMAT),
            ("unknown", DETAILED_FORMAT),
        ],
    )
    def test_setup_logging_with_different_formats(self, log_format, expected_format):
        setup_logging(log_format=log_format, enable_file=False)

        assert _console_handler().formatter._fmt == expected_format


class TestSetupLoggingFileHandling:
    """Test file handler creation."""

    def test_file_handler_created_when_enabled(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            log_dir = Path(tmpdir) / "nested"
            with patch("lockin.core.logging_config.LOG_FILE_DIR", str(log_dir)):
                with patch("lockin.core.logging_config.ENABLE_FILE_LOGGING", True):
                    setup_logging(enable_file=True)

                    file_handlers = [h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)]
                    assert len(file_handlers) == 1
                    assert file_handlers[0].level == logging.DEBUG
                    assert (log_dir / "lockin.log").exists()

                    for handler in file_handlers:
                        handler.close()
                        logging.getLogger().removeHandler(handler)

    def test_no_file_handler_when_disabled(self):
        with patch("lockin.core.logging_config.ENABLE_FILE_LOGGING", True):
            setup_logging(enable_file=False)

        assert not any(isinstance(h, logging.FileHandler) for h in logging.getLogger().handlers)

    def test_no_file_handler_when_setting_off(self):
        with patch("lockin.core.logging_config.ENABLE_FILE_LOGGING", False):
            setup_logging(enable_file=True)

        assert not any(isinstance(h, logging.FileHandler) for h in logging.getLogger().handlers)


class TestSetupLoggingHandlerManagement:
    """Test handler replacement on repeated setup."""

    def test_setup_logging_removes_existing_handlers(self):
        root_logger = logging.getLogger()
        stale = logging.StreamHandler()
        root_logger.addHandler(stale)

        setup_logging(enable_file=False)

        assert stale not in root_logger.handlers

    def test_setup_logging_called_multiple_times(self):
        setup_logging(enable_file=False)
        setup_logging(enable_file=False)

        assert len(logging.getLogger().handlers) == 1


class TestModuleSpecificLevels:
    """Test per-module log levels."""

    @pytest.mark.parametrize(
        "module_name,expected_level",
        [
            ("lockin.core", logging.INFO),
            ("lockin.core.services", logging.DEBUG),
            ("lockin.server.api", logging.DEBUG),
            ("lockin.scheduler", logging.INFO),
            ("sqlalchemy", logging.WARNING),
            ("botocore", logging.WARNING),
        ],
    )
    def test_module_specific_log_levels(self, module_name, expected_level):
        setup_logging(enable_file=False)

        assert logging.getLogger(module_name).level == expected_level

    def test_all_module_log_levels_configured(self):
        setup_logging(enable_file=False)

        for module_name, level in MODULE_LOG_LEVELS.items():
            assert logging.getLogger(module_name).level == logging.getLevelName(level)


class TestGetLogger:
    """Test get_logger."""

    def test_get_logger_returns_named_logger(self):
        logger = get_logger("lockin.server.services.goals")

        assert isinstance(logger, logging.Logger)
        assert logger.name == "lockin.server.services.goals"

    def test_get_logger_same_name_returns_same_instance(self):
        assert get_logger("lockin.client") is get_logger("lockin.client")

    def test_logger_inherits_module_level(self):
        setup_logging(enable_file=False)

        logger = get_logger("lockin.server.api.v1.goals")

        assert logger.getEffectiveLevel() == logging.DEBUG

    def test_logger_can_be_used_for_logging(self, caplog):
        logger = get_logger("lockin.server.services.partners")

        with caplog.at_level(logging.INFO, logger="lockin.server.services.partners"):
            logger.info("Invite sent")

        assert "Invite sent" in caplog.text
