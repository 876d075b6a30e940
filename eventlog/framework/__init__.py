"""
Emission framework for telemetry events.

Provides the validating emitter, reference sinks, configuration
and Prometheus metrics.
"""

from .config import EmitterConfig, ObservabilityConfig, TelemetryConfig
from .emitter import REDACTED, Emitter
from .metrics import EmitterMetrics
from .sinks import EventRecord, EventSink, ExecutorSink, InMemorySink, LoggingSink

__all__ = [
    "EmitterConfig",
    "ObservabilityConfig",
    "TelemetryConfig",
    "REDACTED",
    "Emitter",
    "EmitterMetrics",
    "EventRecord",
    "EventSink",
    "ExecutorSink",
    "InMemorySink",
    "LoggingSink",
]
