"""Unit tests for structlog configuration and the deadline processor."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime, timedelta

import pytest
import structlog

from httpdeadline.observability.logging import DeadlineProcessor, JsonLoggerFactory, get_logger
from httpdeadline.resilience.deadline import deadline_scope


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()


class TestDeadlineProcessor:
    def test_no_deadline_leaves_event_untouched(self) -> None:
        event = DeadlineProcessor()(None, "info", {"event": "hello"})
        assert event == {"event": "hello"}

    def test_injects_ambient_deadline(self) -> None:
        when = datetime.now(UTC) + timedelta(minutes=5)
        with deadline_scope(when):
            event = DeadlineProcessor()(None, "info", {"event": "hello"})
        assert event["deadline"] == when.isoformat()

    def test_does_not_override_explicit_field(self) -> None:
        with deadline_scope(datetime.now(UTC) + timedelta(minutes=5)):
            event = DeadlineProcessor()(None, "info", {"event": "e", "deadline": "mine"})
        assert event["deadline"] == "mine"


class TestJsonLoggerFactory:
    def test_emits_json_with_deadline(self, capsys: pytest.CaptureFixture[str]) -> None:
        JsonLoggerFactory.configure(level=logging.DEBUG)
        when = datetime.now(UTC) + timedelta(minutes=5)
        with deadline_scope(when):
            get_logger("test.logging").info("handler.start", route="/work")
        record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert record["event"] == "handler.start"
        assert record["route"] == "/work"
        assert record["deadline"] == when.isoformat()
        assert record["level"] == "info"
        assert record["logger"] == "test.logging"

    def test_deadline_injection_can_be_disabled(self, capsys: pytest.CaptureFixture[str]) -> None:
        JsonLoggerFactory.configure(include_deadline=False)
        with deadline_scope(datetime.now(UTC) + timedelta(minutes=5)):
            get_logger("test.logging").warning("no.deadline")
        record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert "deadline" not in record


class TestGetLogger:
    def test_binds_initial_values(self) -> None:
        logger = get_logger("test", component="deadline")
        assert structlog.get_context(logger)["component"] == "deadline"
