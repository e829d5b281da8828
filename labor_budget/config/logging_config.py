"""Logging setup for the labor budget tracker.

Logging is driven by LaborBudgetConfig: LOG_LEVEL (or DEBUG / ``--debug``),
LOG_FORMAT and LOG_FILE. Console output goes to stderr so report tables on
stdout stay clean; setting LOG_FILE adds a rotating file. Fields attached with
LogContext (month, report, ...) show up in both formats: as a ``[key=value]``
suffix in text lines and as keys in JSON lines.
"""

import json
import logging
import logging.handlers
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from labor_budget.config.settings import LaborBudgetConfig
from labor_budget.utils.logging_utils import _ContextFilter

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Attributes every LogRecord has; anything else came from extra= or LogContext
_RECORD_ATTRIBUTES = set(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


def _context_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _RECORD_ATTRIBUTES and not key.startswith("_")
    }


class ContextTextFormatter(logging.Formatter):
    """Plain text lines, followed by the record's context fields."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = _context_fields(record)
        if not fields:
            return line
        suffix = " ".join(f"{key}={value}" for key, value in sorted(fields.items()))
        # Tracebacks come after the first line; keep the fields on it
        first, sep, rest = line.partition("\n")
        return f"{first} [{suffix}]{sep}{rest}"


class JsonLineFormatter(logging.Formatter):
    """One JSON object per record, context fields included as keys."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(_context_fields(record))
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        # Decimal hours and dates are written as strings
        return json.dumps(entry, default=str, ensure_ascii=False)


@dataclass
class LoggingConfig:
    """Resolved logging options.

    Attributes:
        level: Root logger level
        json_format: Write JSON lines instead of text
        log_file: Rotating log file, none when omitted
        max_bytes: Size at which the log file rotates
        backup_count: Number of rotated files kept
        console: Also log to stderr
    """

    level: str = "INFO"
    json_format: bool = False
    log_file: Optional[str] = None
    max_bytes: int = 10 * 1024 * 1024
    backup_count: int = 5
    console: bool = True

    def __post_init__(self):
        self.level = self.level.upper()
        if self.level not in LEVELS:
            raise ValueError(f"Invalid log level: {self.level}. Must be one of {', '.join(LEVELS)}")

    @classmethod
    def from_settings(cls, settings: LaborBudgetConfig, debug: bool = False) -> "LoggingConfig":
        """Build the logging options from the application settings.

        ``debug`` (the CLI flag) and the DEBUG setting both force DEBUG level.
        """
        return cls(
            level="DEBUG" if debug or settings.debug else settings.log_level,
            json_format=settings.log_format == "json",
            log_file=settings.log_file,
            max_bytes=settings.log_max_bytes,
            backup_count=settings.log_backup_count,
        )


def configure_logging(config: LoggingConfig) -> None:
    """Install the handlers described by config on the root logger.

    Handlers from an earlier call are replaced, not stacked.
    """
    reset_logging()
    root_logger = logging.getLogger()
    root_logger.setLevel(config.level)

    formatter = JsonLineFormatter() if config.json_format else ContextTextFormatter()

    handlers: List[logging.Handler] = []
    if config.console:
        handlers.append(logging.StreamHandler())
    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                log_path,
                maxBytes=config.max_bytes,
                backupCount=config.backup_count,
                encoding="utf-8",
            )
        )

    context_filter = _ContextFilter()
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)
        root_logger.addHandler(handler)


def reset_logging() -> None:
    """Remove all root handlers and restore the default WARNING level."""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.setLevel(logging.WARNING)
