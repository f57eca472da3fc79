"""Structured logging configuration.

Uses standard library logging with either a JSON formatter or a compact
console formatter. Both carry the same fields: timestamp, component (logger
name), severity and message, plus any `extra=` values passed at the call site.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

# Attributes every LogRecord carries; anything else came in through `extra=`.
_STANDARD_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

_LEVEL_ABBREVIATIONS: dict[str, str] = {
    "DEBUG": "DBG",
    "INFO": "INF",
    "WARNING": "WRN",
    "ERROR": "ERR",
    "CRITICAL": "CRT",
}

_QUIET_LOGGERS = ("httpx", "httpcore")


class _TeaFormatter(logging.Formatter):
    """Splits a record into the fields both output formats share."""

    @staticmethod
    def component(record: logging.LogRecord) -> str:
        return record.name.rsplit(".", 1)[-1] or "General"

    @staticmethod
    def extra_fields(record: logging.LogRecord) -> dict[str, Any]:
        return {
            key: value
            for key, value in vars(record).items()
            if key not in _STANDARD_RECORD_ATTRS and not key.startswith("_")
        }


class JsonFormatter(_TeaFormatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 (record)
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "component": self.component(record),
            "thread": record.threadName,
            "message": record.getMessage(),
        }
        if extra := self.extra_fields(record):
            payload["extra"] = extra
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


class ConsoleFormatter(_TeaFormatter):
    """Human-readable one-line format.

    Example::

        [14:03:07.512] [MainThread] [INF] [TeaMaker] MakeTea - START run_id=3f2a...
    """

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 (record)
        created = datetime.fromtimestamp(record.created)
        timestamp = created.strftime("%H:%M:%S.") + f"{int(record.msecs):03d}"
        level = _LEVEL_ABBREVIATIONS.get(record.levelname, record.levelname[:3])

        parts = [
            f"[{timestamp}] [{record.threadName}] [{level}] [{self.component(record)}]",
            record.getMessage(),
        ]
        parts.extend(f"{key}={value}" for key, value in self.extra_fields(record).items())
        line = " ".join(parts)
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


_FORMATTERS: dict[str, type[_TeaFormatter]] = {
    "console": ConsoleFormatter,
    "json": JsonFormatter,
}


def configure_logging(level: str, fmt: str = "console") -> None:
    """Send all logging to stdout in the chosen format.

    Re-configuring replaces the previous root handler. HTTP client libraries
    stay at WARNING or above.
    """

    levelno = logging.getLevelNamesMapping().get(level.upper())
    if levelno is None:
        raise ValueError(f"Unknown log level: {level!r}")
    if fmt not in _FORMATTERS:
        raise ValueError(f"Unknown log format: {fmt!r}")

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(_FORMATTERS[fmt]())

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(levelno)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(levelno, logging.WARNING))
