"""
Privacy-aware telemetry emission core.

Declare versioned event schemas, bind free-text fields to allow-list
rules, and emit records where unknown values are redacted.
"""

from typing import Optional

from eventlog.framework import (
    REDACTED,
    Emitter,
    EmitterMetrics,
    EventRecord,
    InMemorySink,
    LoggingSink,
    TelemetryConfig,
)
from eventlog.framework.sinks import EventSink
from eventlog.schemas import (
    EventField,
    EventSchema,
    FieldKind,
    SchemaRegistry,
    boolean_field,
    define_schema,
    float_field,
    integer_field,
    string_field,
)
from eventlog.utils.logging import setup_logging
from eventlog.validation import (
    AllowListRule,
    Decision,
    DecisionType,
    ProviderAllowListSource,
    StaticAllowListSource,
    ValidationRegistry,
    ValidationRule,
)

__version__ = "0.1.0"


def build_emitter(
    sink: EventSink,
    config: Optional[TelemetryConfig] = None,
    validation_registry: Optional[ValidationRegistry] = None,
    schema_registry: Optional[SchemaRegistry] = None,
) -> Emitter:
    """
    Wire an emitter from configuration.

    Sets up logging, creates the registries that were not supplied, and
    attaches Prometheus counters when metrics are enabled.
    """
    config = config or TelemetryConfig.from_env("eventlog")
    setup_logging(
        config.service_name,
        log_level=config.observability.log_level,
        format_type=config.observability.log_format,
    )

    metrics = EmitterMetrics() if config.observability.metrics_enabled else None
    return Emitter(
        validation_registry=validation_registry or ValidationRegistry(debug=config.debug),
        sink=sink,
        config=config.emitter,
        schema_registry=schema_registry,
        metrics=metrics,
    )


__all__ = [
    "REDACTED",
    "Emitter",
    "EmitterMetrics",
    "EventRecord",
    "EventSink",
    "InMemorySink",
    "LoggingSink",
    "TelemetryConfig",
    "EventField",
    "EventSchema",
    "FieldKind",
    "SchemaRegistry",
    "boolean_field",
    "define_schema",
    "float_field",
    "integer_field",
    "string_field",
    "setup_logging",
    "AllowListRule",
    "Decision",
    "DecisionType",
    "ProviderAllowListSource",
    "StaticAllowListSource",
    "ValidationRegistry",
    "ValidationRule",
    "build_emitter",
]
