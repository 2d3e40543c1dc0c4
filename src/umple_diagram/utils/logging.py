"""Structured JSON logging for umple_diagram.

All log records are emitted as JSON lines on stderr. stdout is reserved for
the generation result (a plain path or the ``--json`` record), so logs never
interleave with what callers parse.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any


# Standard LogRecord attributes that are part of every record — NOT user "extra" fields.
_STANDARD_RECORD_ATTRS: frozenset[str] = frozenset({
    "args", "asctime", "created", "exc_info", "exc_text", "filename",
    "funcName", "id", "levelname", "levelno", "lineno", "module",
    "msecs", "message", "msg", "name", "pathname", "process",
    "processName", "relativeCreated", "stack_info", "thread",
    "threadName", "taskName",
})

DEFAULT_LEVEL: int = logging.WARNING


class _JSONFormatter(logging.Formatter):
    """Formats log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key not in _STANDARD_RECORD_ATTRS and not key.startswith("_"):
                log_obj[key] = value

        if record.exc_info:
            log_obj["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(log_obj, default=str)


class StructuredLogger:
    """Thin wrapper around stdlib Logger that emits JSON-formatted records.

    Usage::

        logger = get_logger("umple_diagram.pipeline")
        logger.info("umple finished", returncode=0, input_path="/tmp/model.ump")

    Keyword arguments are merged into the JSON output alongside the standard
    timestamp / level / name / message fields.
    """

    def __init__(self, name: str, level: int = DEFAULT_LEVEL) -> None:
        self._logger = logging.getLogger(name)
        if not self._logger.handlers:
            # Resolve sys.stderr lazily so pytest's capsys sees the records.
            handler = _StderrHandler()
            handler.setFormatter(_JSONFormatter())
            self._logger.addHandler(handler)
            self._logger.propagate = False
        self._logger.setLevel(level)

    def debug(self, msg: str, **extra: Any) -> None:
        self._logger.debug(msg, extra=extra or None)

    def info(self, msg: str, **extra: Any) -> None:
        self._logger.info(msg, extra=extra or None)

    def warning(self, msg: str, **extra: Any) -> None:
        self._logger.warning(msg, extra=extra or None)

    def set_level(self, level: int) -> None:
        self._logger.setLevel(level)

    @property
    def level(self) -> int:
        return self._logger.level

    @property
    def name(self) -> str:
        return self._logger.name


class _StderrHandler(logging.StreamHandler):
    """StreamHandler bound to whatever ``sys.stderr`` is at emit time."""

    def __init__(self) -> None:
        super().__init__(sys.stderr)

    @property
    def stream(self):  # type: ignore[override]
        return sys.stderr

    @stream.setter
    def stream(self, value) -> None:
        pass


# Module-level cache: reuse StructuredLogger instances by name
_loggers: dict[str, StructuredLogger] = {}


def get_logger(name: str, level: int | None = None) -> StructuredLogger:
    """Return a named StructuredLogger, creating it if it does not yet exist.

    Args:
        name: Logger name, typically the module's ``__name__``.
        level: Optional level applied to the logger. When omitted a new logger
               starts at WARNING and an existing one keeps its level.

    Returns:
        A StructuredLogger instance.
    """
    if name not in _loggers:
        _loggers[name] = StructuredLogger(name, level=DEFAULT_LEVEL if level is None else level)
    elif level is not None:
        _loggers[name].set_level(level)
    return _loggers[name]


def set_log_level(level: int) -> None:
    """Apply ``level`` to every logger created so far and to future defaults."""
    global DEFAULT_LEVEL
    DEFAULT_LEVEL = level
    for logger in _loggers.values():
        logger.set_level(level)
