"""
Tests for the logging module.

Tests verify:
- configure_logging renders JSON lines with service and level fields
- DEBUG logs are suppressed at INFO level
- Context binding adds fields to every event
"""

import json
import logging

import pytest
import structlog
from structlog.testing import LogCapture

from rowspine.core.logging import (
    LogContext,
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    unbind_context,
)


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    clear_context()
    structlog.reset_defaults()


@pytest.fixture
def captured() -> LogCapture:
    capture = LogCapture()
    structlog.configure(processors=[structlog.contextvars.merge_contextvars, capture])
    return capture


def _rendered(caplog: pytest.LogCaptureFixture) -> list[dict]:
    return [json.loads(record.getMessage()) for record in caplog.records]


class TestConfigureLogging:
    def test_json_output(self, caplog):
        caplog.set_level(logging.DEBUG)
        configure_logging(level="INFO", json_format=True, service="school-app")
        get_logger("rowspine.test").info("statement_executed", sql="SELECT 1", params=0)

        event = _rendered(caplog)[-1]
        assert event["event"] == "statement_executed"
        assert event["sql"] == "SELECT 1"
        assert event["level"] == "info"
        assert event["logger"] == "rowspine.test"
        assert event["service"] == "school-app"
        assert "timestamp" in event

    def test_debug_suppressed_at_info(self, caplog):
        caplog.set_level(logging.DEBUG)
        configure_logging(level="INFO", json_format=True)
        get_logger("rowspine.test").debug("session_closed")
        assert not any("session_closed" in record.getMessage() for record in caplog.records)

    def test_without_timestamp(self, caplog):
        caplog.set_level(logging.DEBUG)
        configure_logging(level="DEBUG", json_format=True, add_timestamp=False)
        get_logger("rowspine.test").debug("session_closed", driver="sqlite")
        event = _rendered(caplog)[-1]
        assert "timestamp" not in event
        assert event["driver"] == "sqlite"


class TestContextManagement:
    def test_bind_and_unbind(self, captured):
        bind_context(unit_of_work="enrollment")
        get_logger().info("first")
        unbind_context("unit_of_work")
        get_logger().info("second")
        assert captured.entries[0]["unit_of_work"] == "enrollment"
        assert "unit_of_work" not in captured.entries[1]

    def test_log_context_scoped(self, captured):
        with LogContext(request_id="abc123"):
            get_logger().info("inside")
        get_logger().info("outside")
        assert captured.entries[0]["request_id"] == "abc123"
        assert "request_id" not in captured.entries[1]

    def test_log_context_nesting_restores_outer_value(self, captured):
        with LogContext(table="student"):
            with LogContext(table="audit_log", record_type="AuditEntry"):
                get_logger().info("inner")
            get_logger().info("outer")
        assert captured.entries[0]["table"] == "audit_log"
        assert captured.entries[1]["table"] == "student"
        assert "record_type" not in captured.entries[1]
