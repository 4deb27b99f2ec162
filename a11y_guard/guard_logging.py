"""Centralized logging configuration for the accessibility guard.

Provides:
- Structured JSON logging support
- Optional rotating file handler
- Category loggers for engine, snapshot, config and CLI
"""

import json
import logging
import logging.handlers
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path

LOGGER_NAME = "a11y_guard"


class LogCategory(Enum):
    """Log categories for per-component debugging."""

    ENGINE = "engine"
    SNAPSHOT = "snapshot"
    CONFIG = "config"
    CLI = "cli"


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Produces one JSON object per record with consistent fields and
    support for evaluation context passed through ``extra``.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as JSON.

        Args:
            record: The log record to format.

        Returns:
            JSON string representation of the log entry.
        """
        log_entry: dict = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }

        extra_fields = ["duration_ms", "rule_id", "element_count", "violation_count"]
        for field in extra_fields:
            if hasattr(record, field):
                log_entry[field] = getattr(record, field)

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry)


def setup_logging(
    level: str = "INFO",
    quiet: bool = False,
    verbose: bool = False,
    log_file: Path | None = None,
    log_format: str = "text",
    rotation_count: int = 3,
    max_bytes: int = 10485760,
) -> "logging.Logger":
    """Setup global logging configuration.

    Args:
        level: Base log level (DEBUG, INFO, WARNING, ERROR).
        quiet: Suppress console output entirely.
        verbose: Enable debug-level console output.
        log_file: Optional log file path; enables a rotating file handler.
        log_format: File output format ("text" or "json").
        rotation_count: Number of backup files (default 3).
        max_bytes: Max file size before rotation (default 10MB).

    Returns:
        Configured logger instance.
    """
    import logging.config

    if verbose:
        effective_level = "DEBUG"
    else:
        effective_level = level

    config: dict = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "detailed": {
                "format": "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "simple": {"format": "%(levelname)s | %(message)s"},
            "json": {
                "()": JSONFormatter,
            },
        },
        "handlers": {},
        "loggers": {
            LOGGER_NAME: {"handlers": [], "level": "DEBUG", "propagate": False}
        },
    }

    file_formatter = "json" if log_format == "json" else "detailed"

    if not quiet:
        config["handlers"]["console"] = {
            "class": "logging.StreamHandler",
            "formatter": "simple",
            "level": effective_level,
            "stream": "ext://sys.stderr",
        }
        config["loggers"][LOGGER_NAME]["handlers"].append("console")

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        config["handlers"]["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": file_formatter,
            "level": "DEBUG",
            "filename": str(log_file),
            "maxBytes": max_bytes,
            "backupCount": rotation_count,
        }
        config["loggers"][LOGGER_NAME]["handlers"].append("file")

    if not config["loggers"][LOGGER_NAME]["handlers"]:
        config["handlers"]["null"] = {"class": "logging.NullHandler"}
        config["loggers"][LOGGER_NAME]["handlers"].append("null")

    logging.config.dictConfig(config)
    return logging.getLogger(LOGGER_NAME)


def get_logger() -> "logging.Logger":
    """Get the global logger instance."""
    return logging.getLogger(LOGGER_NAME)


def get_category_logger(category: LogCategory) -> "logging.Logger":
    """Get a logger for a specific category.

    Example:
        >>> logger = get_category_logger(LogCategory.ENGINE)
        >>> logger.info("Evaluation completed")
    """
    return logging.getLogger(f"{LOGGER_NAME}.{category.value}")
