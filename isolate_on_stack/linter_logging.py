"""Logging setup for the linter.

Library modules only log through category loggers; handlers are
attached by `setup_logging`, which the CLI calls once per run. Console
output goes to stderr so it never mixes with the lint report on stdout.
"""

import json
import logging
import logging.config
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path

ROOT_LOGGER_NAME = "isolate_on_stack"

# Record attributes passed through `extra=` that the JSON output keeps
LINT_CONTEXT_FIELDS = ("rule_id", "file_path", "selector", "duration_ms")

CONSOLE_FORMAT = "%(levelname)s | %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d - %(message)s"

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 3


class LogCategory(Enum):
    """Component loggers under the package logger."""

    PARSER = "parser"
    RULES = "rules"
    CONFIG = "config"
    CLI = "cli"


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with any lint context attached."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "line": record.lineno,
            "message": record.getMessage(),
        }
        for name in LINT_CONTEXT_FIELDS:
            if hasattr(record, name):
                entry[name] = getattr(record, name)
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def _console_handler(level: str) -> dict:
    return {
        "class": "logging.StreamHandler",
        "formatter": "console",
        "level": level,
        "stream": "ext://sys.stderr",
    }


def _file_handler(log_file: Path) -> dict:
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "formatter": "file",
        "level": "DEBUG",
        "filename": str(log_file),
        "maxBytes": LOG_FILE_MAX_BYTES,
        "backupCount": LOG_FILE_BACKUPS,
    }


def setup_logging(
    level: str = "WARNING",
    quiet: bool = False,
    verbose: bool = False,
    log_file: Path | None = None,
    log_format: str = "text",
) -> logging.Logger:
    """Attach console and file handlers to the package logger.

    Args:
        level: Console level when not verbose.
        quiet: Attach no console handler.
        verbose: Console shows debug records (parser and rule traces).
        log_file: Also log everything to this rotating file.
        log_format: "text" or "json" for the log file.

    Returns:
        The package logger.
    """
    handlers: dict[str, dict] = {}
    if not quiet:
        handlers["console"] = _console_handler("DEBUG" if verbose else level.upper())
    if log_file:
        handlers["file"] = _file_handler(log_file)

    file_formatter: dict = (
        {"()": JSONFormatter} if log_format == "json" else {"format": FILE_FORMAT}
    )
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"console": {"format": CONSOLE_FORMAT}, "file": file_formatter},
            "handlers": handlers,
            "loggers": {
                ROOT_LOGGER_NAME: {
                    "handlers": list(handlers),
                    "level": "DEBUG",
                    "propagate": False,
                }
            },
        }
    )
    return logging.getLogger(ROOT_LOGGER_NAME)


def get_category_logger(category: LogCategory) -> logging.Logger:
    """Logger for one component, e.g. ``isolate_on_stack.rules``."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{category.value}")
