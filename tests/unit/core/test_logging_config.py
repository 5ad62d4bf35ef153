from __future__ import annotations

import json
import logging
import sys

from bizcrm.core.logging_config import JsonFormatter


def _record(**extra):
    record = logging.LogRecord("bizcrm.test", logging.INFO, __file__, 10, "invoice.created %s", ("INV-00001",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_carries_extra_fields():
    line = JsonFormatter().format(_record(event="invoice.created", total=266))
    payload = json.loads(line)

    assert payload["level"] == "INFO"
    assert payload["logger"] == "bizcrm.test"
    assert payload["message"] == "invoice.created INV-00001"
    assert payload["event"] == "invoice.created"
    assert payload["total"] == 266
    assert "args" not in payload
    assert "timestamp" in payload


def test_json_formatter_includes_exception():
    try:
        raise ValueError("boom")
    except ValueError:
        record = logging.LogRecord("bizcrm.test", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())

    payload = json.loads(JsonFormatter().format(record))
    assert "ValueError: boom" in payload["exception"]
