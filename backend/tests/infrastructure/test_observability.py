"""Structured logging — JSON formatter fields and request ids."""

import json
import logging
import re

from gym_tracker.infrastructure.observability import (
    JSONFormatter, generate_request_id, request_id_var,
)


def _record(msg: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord("gym_tracker.test", logging.INFO, __file__, 1, msg, (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formats_core_fields_and_extras():
    line = JSONFormatter().format(
        _record("hello", user_id="u-1", status_code=201, duration_ms=3.5),
    )
    data = json.loads(line)
    assert data["message"] == "hello"
    assert data["level"] == "INFO"
    assert data["logger"] == "gym_tracker.test"
    assert data["user_id"] == "u-1"
    assert data["status_code"] == 201
    assert data["duration_ms"] == 3.5


def test_request_id_picked_up_from_context():
    token = request_id_var.set("req-1-abc")
    try:
        data = json.loads(JSONFormatter().format(_record("inside request")))
    finally:
        request_id_var.reset(token)
    assert data["request_id"] == "req-1-abc"


def test_request_id_format():
    assert re.fullmatch(r"req-\d+-[0-9a-f]{9}", generate_request_id())
