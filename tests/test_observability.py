"""Tests for structured logging."""

import io
import json
import logging

from addressbook.observability import (
    BookLogger,
    LogEvent,
    LogLevel,
    StructuredHandler,
    get_run_id,
    resolve_level,
    run_id_var,
    set_run_id,
)


def _capture(component, fmt="json", level=LogLevel.DEBUG):
    logger = BookLogger(component, level=level, fmt=fmt)
    stream = io.StringIO()
    for handler in logger.logger.handlers:
        if isinstance(handler, StructuredHandler):
            handler.stream = stream
            handler.fmt = fmt
    return logger, stream


class TestLogEvent:

    def test_empty_fields_dropped(self):
        event = LogEvent(timestamp="t", level="info", logger="x", message="m")
        assert event.to_dict() == {"timestamp": "t", "level": "info", "logger": "x", "message": "m"}

    def test_text_form(self):
        event = LogEvent(
            timestamp="t", level="info", logger="x", message="m", context={"b": 2, "a": 1}
        )
        assert event.to_text() == "t INFO     x: m a=1 b=2"


class TestBookLogger:

    def test_json_line(self):
        logger, stream = _capture("test-json")
        token = set_run_id("run-fixed")
        try:
            logger.debug("Registered address", label="alice", role="holder")
        finally:
            run_id_var.reset(token)

        record = json.loads(stream.getvalue().strip())
        assert record["message"] == "Registered address"
        assert record["level"] == "debug"
        assert record["logger"] == "addressbook.test-json"
        assert record["component"] == "test-json"
        assert record["run_id"] == "run-fixed"
        assert record["context"] == {"label": "alice", "role": "holder"}

    def test_text_line(self):
        logger, stream = _capture("test-text", fmt="text")
        logger.warning("Slow derivation", attempts=3)
        line = stream.getvalue().strip()
        assert "WARNING" in line
        assert "addressbook.test-text: Slow derivation attempts=3" in line

    def test_level_filters(self):
        logger, stream = _capture("test-level", level=LogLevel.ERROR)
        logger.info("hidden")
        logger.error("shown")
        lines = stream.getvalue().strip().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])["message"] == "shown"

    def test_level_from_config(self, monkeypatch):
        monkeypatch.setenv("ADDRESSBOOK_LOG_LEVEL", "warning")
        logger = BookLogger("test-config-level")
        assert logger.logger.level == logging.WARNING

    def test_unknown_level_name_means_info(self, monkeypatch):
        monkeypatch.setenv("ADDRESSBOOK_LOG_LEVEL", "verbose")
        logger = BookLogger("test-unknown-level")
        assert logger.logger.level == logging.INFO

    def test_resolve_level(self):
        assert resolve_level("WARNING") is LogLevel.WARNING
        assert resolve_level(" debug ") is LogLevel.DEBUG
        assert resolve_level("loud") is LogLevel.INFO

    def test_single_handler_per_component(self):
        BookLogger("test-once")
        logger = BookLogger("test-once")
        handlers = [h for h in logger.logger.handlers if isinstance(h, StructuredHandler)]
        assert len(handlers) == 1


class TestRunId:

    def test_generated_once(self):
        token = run_id_var.set("")
        try:
            first = get_run_id()
            assert first.startswith("run-")
            assert get_run_id() == first
        finally:
            run_id_var.reset(token)
