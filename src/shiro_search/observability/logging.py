"""Structured logging for index rebuilds and queries.

``JsonFormatter`` writes one orjson object per record, stamped with the trace
ids from ``observability.context``. Note and chapter bodies must never reach
a log sink, so extras named after document text fields are redacted.
"""

from __future__ import annotations

from datetime import datetime, timezone
import logging
from pathlib import Path
import sys
from typing import Any, TextIO

import orjson

from shiro_search.observability.context import get_trace_context


# Attributes every LogRecord carries; anything else arrived through ``extra=``
_STANDARD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}

PLAIN_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class JsonFormatter(logging.Formatter):
    """Render log records as single-line JSON."""

    DEFAULT_REDACTED = frozenset({"content", "body", "description", "password", "secret", "token"})

    def __init__(
        self,
        *,
        redact: frozenset[str] | None = None,
        max_message_length: int = 2000,
        max_value_length: int = 500,
    ) -> None:
        super().__init__()
        self.redact = self.DEFAULT_REDACTED if redact is None else frozenset(key.lower() for key in redact)
        self.max_message_length = max_message_length
        self.max_value_length = max_value_length

    def format(self, record: logging.LogRecord) -> str:
        ids = get_trace_context()
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "component": record.name.rpartition(".")[2],
            "message": _clip(record.getMessage(), self.max_message_length),
            "trace_id": ids.get("trace_id", ""),
            "span_id": ids.get("span_id", ""),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        entry.update(self._extras(record))
        return orjson.dumps(entry, default=_fallback).decode("utf-8")

    def _extras(self, record: logging.LogRecord) -> dict[str, Any]:
        extras: dict[str, Any] = {}
        for key, value in vars(record).items():
            if key in _STANDARD_ATTRS or key.startswith("_"):
                continue
            if key.lower() in self.redact:
                extras[key] = "[REDACTED]"
            elif isinstance(value, str):
                extras[key] = _clip(value, self.max_value_length)
            else:
                extras[key] = value
        return extras


def _clip(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


def _fallback(value: Any) -> Any:
    # orjson handles enums and datetimes itself; this covers the rest
    if isinstance(value, (set, frozenset)):
        try:
            return sorted(value)
        except TypeError:
            return list(value)
    if isinstance(value, (bytes, bytearray)):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, (Path, Exception)):
        return str(value)
    return repr(value)


def _level(name: str, default: int) -> int:
    resolved = logging.getLevelName(name.upper())
    return resolved if isinstance(resolved, int) else default


def configure_logging(
    level: str = "info",
    json_output: bool = False,
    *,
    logger_levels: dict[str, str] | None = None,
    stream: TextIO | None = None,
) -> None:
    """Replace the root handlers with a single stream handler.

    Output goes to stderr unless ``stream`` is given, so command line results
    on stdout stay machine-readable. Unknown level names fall back to INFO.
    """
    root = logging.getLogger()
    root.setLevel(_level(level, logging.INFO))
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(JsonFormatter() if json_output else logging.Formatter(PLAIN_FORMAT))
    root.addHandler(handler)

    for name, name_level in (logger_levels or {}).items():
        logging.getLogger(name).setLevel(_level(name_level, logging.INFO))
