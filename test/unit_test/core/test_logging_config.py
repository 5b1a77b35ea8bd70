"""
Unit tests for the logging configuration module.

Covers level and format selection, file logging, handler replacement and the
per-module levels applied by ``setup_logging``.
"""

import logging
import logging.handlers
from unittest.mock import patch

import pytest

from bibliafs.core.logging_config import (
    DETAILED_FORMAT,
    JSON_FORMAT,
    MODULE_LOG_LEVELS,
    SIMPLE_FORMAT,
    get_logger,
    setup_logging,
)


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


def _console_handler() -> logging.Handler:
    return next(h for h in logging.getLogger().handlers if type(h) is logging.StreamHandler)


class TestSetupLoggingLevels:
    @pytest.mark.parametrize(
        "log_level,expected",
        [("DEBUG", logging.DEBUG), ("INFO", logging.INFO), ("warning", logging.WARNING), ("ERROR", logging.ERROR)],
    )
    def test_console_handler_uses_requested_level(self, log_level, expected):
        setup_logging(log_level=log_level, enable_file=False)

        assert _console_handler().level == expected

    def test_root_logger_captures_everything(self):
        setup_logging(log_level="ERROR", enable_file=False)

        assert logging.getLogger().level == logging.DEBUG


class TestSetupLoggingFormats:
    @pytest.mark.parametrize(
        "log_format,expected",
        [("simple", SIMPLE_FORMAT), ("detailed", DETAILED_FORMAT), ("json", JSON_FORMAT), ("other", DETAILED_FORMAT)],
    )
    def test_format_selection(self, log_format, expected):
        setup_logging(log_format=log_format, enable_file=False)

        assert _console_handler().formatter._fmt == expected


class TestSetupLoggingFileHandling:
    def test_file_handler_when_enabled(self, tmp_path):
        log_dir = tmp_path / "logs"
        with (
            patch("bibliafs.core.logging_config.LOG_FILE_DIR", str(log_dir)),
            patch("bibliafs.core.logging_config.ENABLE_FILE_LOGGING", True),
        ):
            setup_logging(enable_file=True)

        file_handlers = [h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)]
        assert log_dir.is_dir()
        assert len(file_handlers) == 1
        assert isinstance(file_handlers[0], logging.handlers.RotatingFileHandler)
        assert file_handlers[0].level == logging.DEBUG
        assert file_handlers[0].baseFilename.endswith("bibliafs.log")
        file_handlers[0].close()

    def test_no_file_handler_when_disabled_by_caller(self, tmp_path):
        with (
            patch("bibliafs.core.logging_config.LOG_FILE_DIR", str(tmp_path)),
            patch("bibliafs.core.logging_config.ENABLE_FILE_LOGGING", True),
        ):
            setup_logging(enable_file=False)

        assert not any(isinstance(h, logging.FileHandler) for h in logging.getLogger().handlers)


class TestSetupLoggingHandlers:
    def test_existing_handlers_are_replaced(self):
        stale = logging.NullHandler()
        logging.getLogger().addHandler(stale)

        setup_logging(enable_file=False)

        assert stale not in logging.getLogger().handlers
        assert len(logging.getLogger().handlers) == 1

    @pytest.mark.parametrize("module_name,level", sorted(MODULE_LOG_LEVELS.items()))
    def test_module_levels(self, module_name, level):
        setup_logging(enable_file=False)

        assert logging.getLogger(module_name).level == logging.getLevelName(level)

    def test_noisy_libraries_are_quieted(self):
        setup_logging(enable_file=False)

        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
        assert logging.getLogger("httpx").level == logging.WARNING


class TestGetLogger:
    def test_same_name_same_instance(self):
        assert get_logger("bibliafs.bible") is get_logger("bibliafs.bible")

    def test_returns_named_logger(self):
        logger = get_logger("bibliafs.server.api.v1.groups")

        assert isinstance(logger, logging.Logger)
        assert logger.name == "bibliafs.server.api.v1.groups"

    def test_child_inherits_module_level(self):
        setup_logging(enable_file=False)

        assert get_logger("bibliafs.server.api.v1.bible").getEffectiveLevel() == logging.DEBUG
        assert get_logger("bibliafs.payments.gateway").getEffectiveLevel() == logging.INFO
