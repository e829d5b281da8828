"""Tests for the logging setup."""

import json
import logging
import logging.handlers
from decimal import Decimal

import pytest

from labor_budget.config.logging_config import (
    ContextTextFormatter,
    JsonLineFormatter,
    LoggingConfig,
    configure_logging,
    reset_logging,
)
from labor_budget.config.settings import LaborBudgetConfig
from labor_budget.utils.logging_utils import LogContext


def _flush():
    for handler in logging.getLogger().handlers:
        handler.flush()


def _file_config(log_file, **overrides) -> LoggingConfig:
    options = {"console": False, "log_file": str(log_file)}
    options.update(overrides)
    return LoggingConfig(**options)


class TestLoggingConfig:
    """Test LoggingConfig defaults and resolution from settings."""

    def test_defaults(self):
        config = LoggingConfig()

        assert config.level == "INFO"
        assert config.json_format is False
        assert config.log_file is None
        assert config.console is True
        assert config.max_bytes == 10 * 1024 * 1024
        assert config.backup_count == 5

    def test_level_is_normalized(self):
        assert LoggingConfig(level="warning").level == "WARNING"

    def test_invalid_level(self):
        with pytest.raises(ValueError, match="Invalid log level"):
            LoggingConfig(level="VERBOSE")

    def test_from_settings(self, mock_env, tmp_path):
        log_file = str(tmp_path / "obra.log")
        settings = LaborBudgetConfig(
            DEBUG=False,
            LOG_LEVEL="warning",
            LOG_FORMAT="json",
            LOG_FILE=log_file,
            LOG_MAX_BYTES=2048,
            LOG_BACKUP_COUNT=2,
        )

        config = LoggingConfig.from_settings(settings)

        assert config.level == "WARNING"
        assert config.json_format is True
        assert config.log_file == log_file
        assert config.max_bytes == 2048
        assert config.backup_count == 2

    def test_debug_flag_forces_debug_level(self, mock_env):
        settings = LaborBudgetConfig(DEBUG=False, LOG_LEVEL="ERROR")
        assert LoggingConfig.from_settings(settings, debug=True).level == "DEBUG"

    def test_debug_setting_forces_debug_level(self, mock_env):
        settings = LaborBudgetConfig(DEBUG=True, LOG_LEVEL="ERROR")
        assert LoggingConfig.from_settings(settings).level == "DEBUG"


class TestConfigureLogging:
    """Test configure_logging function."""

    def test_console_handler(self):
        configure_logging(LoggingConfig(level="DEBUG"))

        root_logger = logging.getLogger()
        [handler] = root_logger.handlers
        assert type(handler) is logging.StreamHandler
        assert isinstance(handler.formatter, ContextTextFormatter)
        assert root_logger.level == logging.DEBUG

    def test_repeated_calls_do_not_stack_handlers(self):
        configure_logging(LoggingConfig())
        configure_logging(LoggingConfig())
        assert len(logging.getLogger().handlers) == 1

    def test_console_and_file(self, tmp_path):
        configure_logging(LoggingConfig(log_file=str(tmp_path / "obra.log")))
        assert len(logging.getLogger().handlers) == 2

    def test_no_handlers_without_console_or_file(self):
        configure_logging(LoggingConfig(console=False))
        assert logging.getLogger().handlers == []

    def test_file_handler_rotates(self, tmp_path):
        log_file = tmp_path / "nested" / "obra.log"
        configure_logging(_file_config(log_file, max_bytes=100, backup_count=2))

        [handler] = logging.getLogger().handlers
        assert isinstance(handler, logging.handlers.RotatingFileHandler)

        logger = logging.getLogger("labor_budget.store")
        for i in range(30):
            logger.info(f"Saved snapshot {i} with enough padding to fill the file")
        _flush()

        assert list(log_file.parent.glob("obra.log.*"))

    def test_text_line_carries_context(self, tmp_path):
        log_file = tmp_path / "obra.log"
        configure_logging(_file_config(log_file))

        with LogContext(report="costs", month="2024-01"):
            logging.getLogger("labor_budget.cli").info("Reconciling")
        logging.getLogger("labor_budget.cli").info("Done")
        _flush()

        with_context, without_context = log_file.read_text(encoding="utf-8").splitlines()
        assert with_context.endswith("labor_budget.cli: Reconciling [month=2024-01 report=costs]")
        assert without_context.endswith("labor_budget.cli: Done")

    def test_json_line_structure(self, tmp_path):
        log_file = tmp_path / "obra.log"
        configure_logging(_file_config(log_file, json_format=True))

        logging.getLogger("labor_budget.store").info(
            "Logged hours for José", extra={"hours": Decimal("7.5")}
        )
        _flush()

        entry = json.loads(log_file.read_text(encoding="utf-8").strip())
        assert entry["level"] == "INFO"
        assert entry["logger"] == "labor_budget.store"
        assert entry["message"] == "Logged hours for José"
        assert entry["hours"] == "7.5"

    def test_json_line_includes_exception(self, tmp_path):
        log_file = tmp_path / "obra.log"
        configure_logging(_file_config(log_file, json_format=True))

        try:
            raise ValueError("bad month")
        except ValueError:
            logging.getLogger("labor_budget.store").exception("Failed")
        _flush()

        entry = json.loads(log_file.read_text(encoding="utf-8").strip())
        assert "ValueError: bad month" in entry["exception"]
        assert isinstance(logging.getLogger().handlers[0].formatter, JsonLineFormatter)


class TestResetLogging:
    def test_reset_removes_handlers(self):
        configure_logging(LoggingConfig(level="DEBUG"))

        reset_logging()

        root_logger = logging.getLogger()
        assert root_logger.handlers == []
        assert root_logger.level == logging.WARNING
