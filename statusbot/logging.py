# statusbot/logging.py
"""
Structured logging for the airport status bot.

Log calls take an event name plus keyword fields:

    from statusbot.logging import get_logger
    logger = get_logger(__name__)
    logger.info("event_type_skipped", type_name="Deicing")

With LOG_JSON=true every line is one JSON object (timestamp, level, logger,
message, then the fields). Otherwise lines are plain text with the fields
appended as key=value pairs.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

QUIET_LIBRARIES = ("httpx", "httpcore", "uvicorn", "uvicorn.access")


def _fields(record: logging.LogRecord) -> Dict[str, Any]:
    return getattr(record, "structured_data", None) or {}


class StructuredLogFormatter(logging.Formatter):
    """Formats records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(_fields(record))

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        if record.levelno >= logging.ERROR:
            entry["source"] = {
                "file": record.filename,
                "line": record.lineno,
                "function": record.funcName,
            }

        return json.dumps(entry, default=str)


class KeyValueLogFormatter(logging.Formatter):
    """Plain text lines ending in key=value pairs, for local runs."""

    def __init__(self):
        super().__init__("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = _fields(record)
        if not fields:
            return line
        pairs = " ".join(f"{key}={value!r}" for key, value in fields.items())
        # Tracebacks stay at the end
        head, newline, rest = line.partition("\n")
        return f"{head} {pairs}{newline}{rest}"


class StructuredLogger:
    """
    Logger that accepts keyword fields.

    Example:
        logger = get_logger(__name__).with_fields(cycle=12)
        logger.info("cycle_finished", added=2, removed=1)
    """

    def __init__(self, name: str, fields: Optional[Dict[str, Any]] = None):
        self._logger = logging.getLogger(name)
        self._fields = dict(fields or {})

    @property
    def name(self) -> str:
        return self._logger.name

    def with_fields(self, **fields) -> "StructuredLogger":
        """Child logger that adds the given fields to every line."""
        return StructuredLogger(self._logger.name, {**self._fields, **fields})

    def _log(self, level: int, message: str, exc_info: bool = False, **kwargs):
        if not self._logger.isEnabledFor(level):
            return
        extra = {"structured_data": {**self._fields, **kwargs}}
        self._logger.log(level, message, exc_info=exc_info, extra=extra)

    def debug(self, message: str, **kwargs):
        self._log(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs):
        self._log(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs):
        self._log(logging.WARNING, message, **kwargs)

    def error(self, message: str, exc_info: bool = False, **kwargs):
        self._log(logging.ERROR, message, exc_info=exc_info, **kwargs)

    def exception(self, message: str, **kwargs):
        """ERROR with the active exception's traceback."""
        self._log(logging.ERROR, message, exc_info=True, **kwargs)


_configured = False


def configure_logging(
    level: str = "INFO",
    json_output: bool = True,
    log_file: Optional[str] = None,
):
    """
    Install stdout (and optional file) handlers on the root logger.

    Only the first call per process has an effect.

    Args:
        level: Log level name
        json_output: JSON lines (True) or key=value text (False) on stdout
        log_file: Optional file that always receives JSON lines
    """
    global _configured
    if _configured:
        return
    _configured = True

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for handler in list(root.handlers):
        root.removeHandler(handler)

    stdout = logging.StreamHandler(sys.stdout)
    stdout.setFormatter(StructuredLogFormatter() if json_output else KeyValueLogFormatter())
    root.addHandler(stdout)

    if log_file:
        to_file = logging.FileHandler(log_file)
        to_file.setFormatter(StructuredLogFormatter())
        root.addHandler(to_file)

    for name in QUIET_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> StructuredLogger:
    """Structured logger for a module (typically __name__)."""
    return StructuredLogger(name)


def get_ingestion_logger(source: str) -> StructuredLogger:
    """Logger for a feed or reference-data source."""
    return get_logger(f"statusbot.ingestion.{source}")


def get_status_logger(component: str) -> StructuredLogger:
    """Logger for a status parsing/rendering component."""
    return get_logger(f"statusbot.status.{component}")
