"""
Logging setup for release-util.

Console logs go to stderr: stdout carries the command result and must stay
valid JSON (or a single warning line) so it can be piped into other tools.

Two formats:
- ContextFormatter: one readable line per record, structured fields appended
- JSONFormatter: one JSON object per record, for log files and log shippers

Structured fields reach both formatters either through log_with_context()
or through the extra= fields set by utils.error_handling.

Usage:
    from release_util.core.logging_config import get_logger, log_with_context

    logger = get_logger(__name__)
    log_with_context(logger, "info", "Deployments fetched", project="Fabrikam", deployment_count=42)
"""

import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

# Attributes every LogRecord has; anything else was passed through extra=
_RECORD_ATTRIBUTES = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


def structured_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Fields attached to a record via extra= or log_with_context()."""
    fields = {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRIBUTES}
    fields.update(fields.pop("extra_fields", None) or {})
    return fields


class JSONFormatter(logging.Formatter):
    """One JSON object per record, structured fields at the top level."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}:{record.funcName}:{record.lineno}",
        }
        log_data.update(structured_fields(record))

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class ContextFormatter(logging.Formatter):
    """
    Readable console line with the structured fields appended as key=value.

    Level names are coloured when stderr is a terminal.
    """

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        levelname = record.levelname
        if sys.stderr.isatty():
            record.levelname = f"{self.COLORS.get(levelname, '')}{levelname}{self.RESET}"

        try:
            line = super().format(record)
        finally:
            record.levelname = levelname

        fields = structured_fields(record)
        if not fields:
            return line

        first, newline, rest = line.partition("\n")
        details = " ".join(f"{key}={value}" for key, value in fields.items())
        return f"{first} [{details}]{newline}{rest}"


CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
CONSOLE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Chatty third-party loggers: the SDK and msrest log every request at INFO/DEBUG
QUIET_LOGGERS = ("azure.devops", "msrest", "urllib3")


def _console_handler(json_output: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    if json_output:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(ContextFormatter(fmt=CONSOLE_FORMAT, datefmt=CONSOLE_DATE_FORMAT))
    return handler


def _file_handler(log_file: Path) -> logging.Handler:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(JSONFormatter())
    return handler


def setup_logging(
    level: str = "WARNING",
    log_file: Path | None = None,
    json_output: bool = False,
) -> None:
    """
    Configure the root logger for one release-util run.

    Replaces any handlers already installed, so calling it twice is safe.

    Args:
        level: Log level name; unknown names fall back to WARNING
        log_file: Optional JSON log file, created with its parent directory
        json_output: JSON instead of readable lines on stderr

    Example:
        setup_logging(level="INFO", log_file=Path(".tmp/logs/release_util.log"))
    """
    log_level = getattr(logging, level.upper(), logging.WARNING)

    handlers = [_console_handler(json_output)]
    if log_file:
        handlers.append(_file_handler(log_file))

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()
    for handler in handlers:
        handler.setLevel(log_level)
        root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_with_context(logger: logging.Logger, level: str, message: str, **context: Any) -> None:
    """
    Log message with structured context fields.

    Example:
        log_with_context(logger, "info", "Deployments fetched", project="Fabrikam", deployment_count=42)
    """
    getattr(logger, level.lower())(message, extra={"extra_fields": context})
