"""Structured Logging — JSON formatter fields and setup_logging handler swap."""

import json
import logging
import sys

import pytest

from users_api.infrastructure.observability import JSONFormatter, setup_logging


def _record(msg="hello", **extra):
    record = logging.LogRecord(
        "users_api.test", logging.ERROR, __file__, 1, msg, None, None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_base_fields():
    out = json.loads(JSONFormatter().format(_record()))
    assert out["level"] == "ERROR"
    assert out["logger"] == "users_api.test"
    assert out["message"] == "hello"
    assert "timestamp" in out


def test_json_formatter_surfaces_known_extras_only():
    record = _record(operation="insert", timeout=True, user_name="Alice", secret="x")
    out = json.loads(JSONFormatter().format(record))
    assert out["operation"] == "insert"
    assert out["timeout"] is True
    assert out["user_name"] == "Alice"
    assert "secret" not in out


def test_json_formatter_includes_exception():
    try:
        raise ValueError("bad")
    except ValueError:
        record = _record()
        record.exc_info = sys.exc_info()
    out = json.loads(JSONFormatter().format(record))
    assert "ValueError: bad" in out["exception"]


@pytest.fixture
def restore_root_logger():
    handlers = list(logging.root.handlers)
    level = logging.root.level
    yield
    logging.root.handlers[:] = handlers
    logging.root.setLevel(level)


def test_setup_logging_installs_single_json_handler(restore_root_logger):
    setup_logging("DEBUG", "json")
    setup_logging("WARNING", "json")

    assert len(logging.root.handlers) == 1
    assert isinstance(logging.root.handlers[0].formatter, JSONFormatter)
    assert logging.root.level == logging.WARNING


def test_setup_logging_text_format(restore_root_logger):
    setup_logging("info", "text")
    assert not isinstance(logging.root.handlers[0].formatter, JSONFormatter)
    assert logging.root.level == logging.INFO
