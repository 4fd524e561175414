"""Tests for logging configuration and formatters."""

import json
import logging
from datetime import datetime, timezone

import pytest

from jobdigest.domain.models import JobSource
from jobdigest.logging import ComponentLoggerAdapter, get_logger
from jobdigest.logging.config import (
    ContextualFilter,
    JSONFormatter,
    KeyValueFormatter,
    configure_logging,
)
from jobdigest.logging.context import clear_log_context, log_context


@pytest.fixture(autouse=True)
def clean_context():
    """Clear logging context before and after each test."""
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def restore_root_logger():
    """Put back the root logger handlers and level replaced by configure_logging."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield root_logger
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


@pytest.fixture
def logger():
    """Create a test logger with handler for capturing output."""
    test_logger = logging.getLogger("test_logger")
    test_logger.setLevel(logging.DEBUG)
    test_logger.handlers.clear()

    yield test_logger

    test_logger.handlers.clear()


def make_record(logger, message="Test message", **extra):
    return logger.makeRecord("test", logging.INFO, "test.py", 1, message, (), None, extra=extra or None)


def test_json_formatter_basic(logger):
    output = JSONFormatter().format(make_record(logger))

    log_obj = json.loads(output)
    assert log_obj["level"] == "INFO"
    assert log_obj["logger"] == "test"
    assert log_obj["message"] == "Test message"
    assert log_obj["timestamp"].endswith("Z")


def test_json_formatter_with_extra_fields(logger):
    record = make_record(logger, event="test.event", count=42, flag=True)

    log_obj = json.loads(JSONFormatter().format(record))

    assert log_obj["event"] == "test.event"
    assert log_obj["count"] == 42
    assert log_obj["flag"] is True


def test_json_formatter_serializes_rich_values(logger):
    record = make_record(
        logger,
        source=JobSource.WEB3CAREER,
        at=datetime(2025, 11, 4, 12, 0, tzinfo=timezone.utc),
        skills=("rust", "go"),
    )

    log_obj = json.loads(JSONFormatter().format(record))

    assert log_obj["source"] == "web3career"
    assert log_obj["at"] == "2025-11-04T12:00:00+00:00"
    assert log_obj["skills"] == ["rust", "go"]


def test_contextual_filter_adds_static_fields(logger):
    record = make_record(logger)

    ContextualFilter(service="test-service", environment="test").filter(record)

    assert record.service == "test-service"
    assert record.environment == "test"


def test_contextual_filter_adds_context_fields(logger):
    with log_context(run_id="abc123", source="remoteok"):
        record = make_record(logger)
        ContextualFilter().filter(record)

    assert record.run_id == "abc123"
    assert record.source == "remoteok"


def test_explicit_extra_wins_over_context(logger):
    with log_context(source="remoteok"):
        record = make_record(logger, source="web3career")
        ContextualFilter().filter(record)

    assert record.source == "web3career"


def test_json_formatter_with_context(logger):
    formatter = JSONFormatter()
    contextual_filter = ContextualFilter(service="job-digest", environment="test")

    with log_context(run_id="abc123", source="remoteok"):
        record = make_record(logger, "Fetching jobs", event="adapter.fetch.started")
        contextual_filter.filter(record)
        log_obj = json.loads(formatter.format(record))

    assert log_obj["event"] == "adapter.fetch.started"
    assert log_obj["service"] == "job-digest"
    assert log_obj["environment"] == "test"
    assert log_obj["run_id"] == "abc123"
    assert log_obj["source"] == "remoteok"


def test_key_value_formatter_with_extras(logger):
    formatter = KeyValueFormatter("[%(levelname)s] %(name)s: %(message)s")
    record = make_record(
        logger,
        event="test.event",
        count=42,
        flag=False,
        missing=None,
        reason="has spaces",
        service="hidden",
    )

    output = formatter.format(record)

    assert output.startswith("[INFO] test: Test message ")
    assert "event=test.event" in output
    assert "count=42" in output
    assert "flag=false" in output
    assert "missing=null" in output
    assert 'reason="has spaces"' in output
    assert "service=" not in output


def test_key_value_formatter_without_extras(logger):
    formatter = KeyValueFormatter("[%(levelname)s] %(message)s")

    assert formatter.format(make_record(logger)) == "[INFO] Test message"


def test_configure_logging_invalid_level():
    with pytest.raises(ValueError, match="Invalid log level"):
        configure_logging(level="INVALID")


def test_configure_logging_invalid_format():
    with pytest.raises(ValueError, match="Invalid log format"):
        configure_logging(format_type="invalid")


def test_configure_logging_json_format(restore_root_logger):
    configure_logging(level="DEBUG", format_type="json", environment="test")

    assert restore_root_logger.level == logging.DEBUG
    assert len(restore_root_logger.handlers) == 1
    handler = restore_root_logger.handlers[0]
    assert isinstance(handler.formatter, JSONFormatter)
    assert any(isinstance(f, ContextualFilter) for f in handler.filters)


def test_configure_logging_key_value_format(restore_root_logger):
    configure_logging(level="warning", format_type="key-value")

    assert restore_root_logger.level == logging.WARNING
    assert isinstance(restore_root_logger.handlers[0].formatter, KeyValueFormatter)


def test_get_logger_with_component():
    adapter = get_logger("jobdigest.test", component="pipeline")

    assert isinstance(adapter, ComponentLoggerAdapter)
    msg, kwargs = adapter.process("hello", {"extra": {"event": "x"}})
    assert kwargs["extra"] == {"component": "pipeline", "event": "x"}


def test_get_logger_call_extra_overrides_component():
    adapter = get_logger("jobdigest.test", component="pipeline")

    _, kwargs = adapter.process("hello", {"extra": {"component": "adapter"}})

    assert kwargs["extra"]["component"] == "adapter"


def test_get_logger_without_component():
    assert isinstance(get_logger("jobdigest.test"), logging.Logger)
