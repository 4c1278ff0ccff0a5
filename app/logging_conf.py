"""JSON-lines logging for the token service and its smoke runner.

`setup_logging()` is idempotent, so importing the app repeatedly (reloads,
tests) never stacks handlers.
"""
from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from logging import Handler, LogRecord
from typing import Any

__all__ = ["JsonFormatter", "setup_logging", "get_logger"]

# Attributes every LogRecord carries; anything else on the record came from `extra=`.
_RESERVED_ATTRS = frozenset(vars(LogRecord("", 0, "", 0, "", (), None))) | {"message", "taskName"}

_SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


class JsonFormatter(logging.Formatter):
    """One JSON object per line: ts, level, logger, message, plus extras."""

    def format(self, record: LogRecord) -> str:  # type: ignore[override]
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS or key in payload:
                continue
            payload[key] = value

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def _make_stream_handler(level: int) -> Handler:
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(JsonFormatter())
    return handler


def setup_logging(level: str | int = "INFO", *, align_server_loggers: bool = True) -> None:
    """Attach a JSON stdout handler to the root logger if none is present.

    With `align_server_loggers`, uvicorn's loggers drop their own handlers and
    propagate to root so access logs come out as JSON too.
    """
    root = logging.getLogger()

    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    if root.handlers:
        return

    root.setLevel(level)
    root.addHandler(_make_stream_handler(level))

    if not align_server_loggers:
        return
    for name in _SERVER_LOGGERS:
        lg = logging.getLogger(name)
        lg.setLevel(level)
        lg.propagate = True
        for h in list(lg.handlers):
            lg.removeHandler(h)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a named logger, e.g. get_logger("service.tokens")."""
    return logging.getLogger(name if name else __name__)
