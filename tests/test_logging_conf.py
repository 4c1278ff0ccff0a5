from __future__ import annotations

import json
import logging

from app.logging_conf import JsonFormatter


def _record(msg: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord("service.tokens", logging.INFO, __file__, 1, msg, (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_emits_one_json_object_with_extras() -> None:
    line = JsonFormatter().format(_record("token.create", event="token_create", user_id="u1"))

    payload = json.loads(line)
    assert payload["message"] == "token.create"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "service.tokens"
    assert payload["event"] == "token_create"
    assert payload["user_id"] == "u1"
    assert "lineno" not in payload
    assert "\n" not in line


def test_formatter_does_not_let_extras_overwrite_core_keys() -> None:
    payload = json.loads(JsonFormatter().format(_record("hello", level="spoofed")))

    assert payload["level"] == "INFO"
