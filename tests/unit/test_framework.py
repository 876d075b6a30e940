"""Unit tests for configuration, sinks and logging setup."""

import json
import logging
import threading

import pytest
import structlog
from structlog.testing import capture_logs

from eventlog import build_emitter
from eventlog.framework.config import EmitterConfig, ObservabilityConfig, TelemetryConfig
from eventlog.framework.sinks import EventRecord, ExecutorSink, InMemorySink, LoggingSink
from eventlog.utils.errors import ConfigurationError
from eventlog.utils.logging import setup_logging
from tests.fixtures.mock_sinks import BlockingSink, FailingSink


class TestTelemetryConfig:
    """Test environment-driven configuration."""

    def test_defaults(self, monkeypatch):
        """Test default values without environment overrides."""
        for name in [
            "EVENTLOG_ENABLED",
            "EVENTLOG_DEBUG",
            "EVENTLOG_REDACTION_MARKER",
            "EVENTLOG_FAIL_ON_UNBOUND_RULE",
            "EVENTLOG_LOG_LEVEL",
            "EVENTLOG_LOG_FORMAT",
            "EVENTLOG_METRICS_ENABLED",
        ]:
            monkeypatch.delenv(name, raising=False)

        config = TelemetryConfig.from_env("ide")

        assert config.to_dict() == {
            "service_name": "ide",
            "debug": False,
            "emitter": {
                "enabled": True,
                "redaction_marker": "<REDACTED>",
                "fail_on_unbound_rule": True,
            },
            "observability": {
                "log_level": "info",
                "log_format": "json",
                "metrics_enabled": True,
            },
        }

    def test_environment_overrides(self, monkeypatch):
        """Test values read from the environment."""
        monkeypatch.setenv("EVENTLOG_ENABLED", "false")
        monkeypatch.setenv("EVENTLOG_DEBUG", "TRUE")
        monkeypatch.setenv("EVENTLOG_REDACTION_MARKER", "[hidden]")
        monkeypatch.setenv("EVENTLOG_FAIL_ON_UNBOUND_RULE", "false")
        monkeypatch.setenv("EVENTLOG_LOG_FORMAT", "console")

        config = TelemetryConfig.from_env("ide")

        assert config.debug is True
        assert config.emitter.enabled is False
        assert config.emitter.redaction_marker == "[hidden]"
        assert config.emitter.fail_on_unbound_rule is False
        assert config.observability.log_format == "console"

    def test_empty_redaction_marker(self):
        """Test that the redaction marker cannot be empty."""
        with pytest.raises(ConfigurationError) as exc_info:
            EmitterConfig(redaction_marker="")
        assert exc_info.value.config_key == "EVENTLOG_REDACTION_MARKER"

    def test_invalid_log_settings(self):
        """Test log level and format validation."""
        with pytest.raises(ConfigurationError):
            ObservabilityConfig(log_level="verbose")
        with pytest.raises(ConfigurationError):
            ObservabilityConfig(log_format="xml")

    def test_service_name_required(self):
        """Test that a service name is mandatory."""
        with pytest.raises(ConfigurationError):
            TelemetryConfig(service_name="")


class TestSinks:
    """Test reference sinks."""

    def test_in_memory_sink(self):
        """Test record collection and clearing."""
        sink = InMemorySink()
        sink.record("ml.completion", 1, "a.changed", [("enabled", True)])

        assert sink.records == [EventRecord("ml.completion", 1, "a.changed", (("enabled", True),))]
        sink.clear()
        assert len(sink) == 0

    def test_event_record_to_dict(self):
        """Test record serialization keeps field order."""
        record = EventRecord("ml.completion", 1, "a.changed", (("b", 1), ("a", 2)))

        assert record.to_dict() == {
            "group_id": "ml.completion",
            "version": 1,
            "event_id": "a.changed",
            "fields": {"b": 1, "a": 2},
        }
        assert list(record.to_dict()["fields"]) == ["b", "a"]
        assert record.get("missing", "x") == "x"

    def test_logging_sink(self):
        """Test that the logging sink writes one structured event."""
        with capture_logs() as logs:
            LoggingSink().record("ml.completion", 1, "a.changed", [("enabled", True)])

        assert logs == [{
            "event": "Event recorded",
            "log_level": "info",
            "group_id": "ml.completion",
            "version": 1,
            "event_id": "a.changed",
            "fields": {"enabled": True},
        }]

    def test_executor_sink_does_not_block(self):
        """Test that records are handed off without waiting for the inner sink."""
        inner = BlockingSink()
        sink = ExecutorSink(inner)

        sink.record("ml.completion", 1, "a.changed", [("enabled", True)])
        assert inner.records == []

        inner.release.set()
        assert inner.recorded.wait(timeout=5)
        sink.shutdown()
        assert inner.records == [("ml.completion", 1, "a.changed", (("enabled", True),))]

    def test_executor_sink_counts_failures(self):
        """Test that inner sink failures are counted, not raised."""
        sink = ExecutorSink(FailingSink())

        sink.record("ml.completion", 1, "a.changed", [])
        sink.shutdown(wait=True)

        assert sink.failures == 1


class TestLogging:
    """Test logging setup."""

    @pytest.fixture(autouse=True)
    def reset_structlog(self):
        """Restore structlog defaults after each test."""
        yield
        structlog.reset_defaults()
        structlog.contextvars.clear_contextvars()

    def test_setup_logging(self, caplog):
        """Test that the service name is on log lines from every thread."""
        caplog.set_level(logging.INFO)
        setup_logging("ide", log_level="info", format_type="json")
        assert structlog.is_configured()

        structlog.get_logger("main-thread").info("From main")
        worker = threading.Thread(target=lambda: structlog.get_logger("worker-thread").info("From worker"))
        worker.start()
        worker.join(timeout=5)

        lines = [json.loads(record.getMessage()) for record in caplog.records]
        assert [line["event"] for line in lines] == ["From main", "From worker"]
        assert [line["service"] for line in lines] == ["ide", "ide"]

    def test_build_emitter(self, sink, monkeypatch):
        """Test wiring an emitter from configuration."""
        monkeypatch.setenv("EVENTLOG_DEBUG", "true")
        config = TelemetryConfig(service_name="ide")

        emitter = build_emitter(sink, config=config)

        assert emitter.validation_registry.debug is True
        assert emitter.metrics is not None
        assert emitter.config is config.emitter
