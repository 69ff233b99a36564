"""Tests for structured logging."""

import json
import logging

from waitlist.core.request_context import clear_request_id, set_request_id
from waitlist.logging_config import ContextFilter, JSONFormatter


def _record(msg="Subscriber unsubscribed", **extra):
    record = logging.LogRecord("waitlist.test", logging.INFO, __file__, 10, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_extra_fields():
    record = _record(rows_changed=1)

    data = json.loads(JSONFormatter().format(record))

    assert data["severity"] == "INFO"
    assert data["message"] == "Subscriber unsubscribed"
    assert data["logger"] == "waitlist.test"
    assert data["rows_changed"] == 1


def test_context_filter_adds_request_id():
    record = _record()
    set_request_id("req-42")
    try:
        assert ContextFilter().filter(record)
    finally:
        clear_request_id()

    data = json.loads(JSONFormatter().format(record))
    assert data["request_id"] == "req-42"


def test_no_request_id_outside_requests():
    record = _record()
    ContextFilter().filter(record)

    data = json.loads(JSONFormatter().format(record))
    assert "request_id" not in data
