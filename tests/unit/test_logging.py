"""Unit tests for the logging infrastructure."""

from __future__ import annotations

import json
import logging

from eventsift.core.logging import (
    ContextualLogger,
    JSONFormatter,
    get_contextual_logger,
    get_logger,
    setup_logging,
)


class TestGetLogger:
    """Tests for logger naming."""

    def test_prefixed_name(self):
        """Named loggers live under the eventsift root."""
        assert get_logger("extract.transformer").name == "eventsift.extract.transformer"
        assert get_logger().name == "eventsift"


class TestJSONFormatter:
    """Tests for JSON line formatting."""

    def test_context_fields_included(self):
        """Known context attributes are copied into the JSON output."""
        record = logging.LogRecord("eventsift.test", logging.INFO, __file__, 1, "hello %s", ("world",), None)
        record.source_url = "https://example.org"
        record.score = 86

        data = json.loads(JSONFormatter().format(record))

        assert data["message"] == "hello world"
        assert data["level"] == "INFO"
        assert data["logger"] == "eventsift.test"
        assert data["source_url"] == "https://example.org"
        assert data["score"] == 86
        assert data["timestamp"].endswith("Z")


class TestContextualLogger:
    """Tests for the contextual adapter."""

    def test_process_adds_context(self):
        """Source URL and event id are added to extra."""
        adapter = get_contextual_logger("test", source_url="https://example.org", event_id="e1")

        _msg, kwargs = adapter.process("hi", {})

        assert kwargs["extra"] == {"source_url": "https://example.org", "event_id": "e1"}

    def test_with_context_keeps_existing(self):
        """with_context layers new context over the old."""
        adapter = ContextualLogger(get_logger("test"), source_url="https://example.org")

        child = adapter.with_context(event_id="e2")

        assert child.source_url == "https://example.org"
        assert child.event_id == "e2"


class TestSetupLogging:
    """Tests for logging setup."""

    def test_json_file_output(self, tmp_path):
        """File logs are written as JSON lines."""
        log_file = tmp_path / "logs" / "eventsift.jsonl"
        setup_logging(level="DEBUG", log_file=log_file, rich_console=False)

        get_contextual_logger("test", event_id="e1").info("hello")
        for handler in logging.getLogger("eventsift").handlers:
            handler.flush()

        line = log_file.read_text(encoding="utf-8").strip().splitlines()[-1]
        data = json.loads(line)

        assert data["message"] == "hello"
        assert data["event_id"] == "e1"
        assert data["logger"] == "eventsift.test"

    def test_replaces_handlers(self):
        """Calling setup twice does not stack handlers."""
        setup_logging(level="INFO")
        setup_logging(level="WARNING")

        logger = logging.getLogger("eventsift")

        assert len(logger.handlers) == 1
        assert logger.level == logging.WARNING
