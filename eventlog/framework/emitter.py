"""
Event emitter.

Validates every bound field of an event, redacts values the validation
layer does not accept, and forwards the resolved record to the sink.

Structural problems (missing or undeclared fields, wrong value types,
unknown schemas, unbound rules) raise before anything reaches the sink.
Rejected values never raise: they are replaced with the redaction
marker so telemetry cannot break the host application's control flow.
"""

import threading
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union
import structlog

from eventlog.framework.config import DEFAULT_REDACTION_MARKER, EmitterConfig
from eventlog.framework.metrics import EmitterMetrics
from eventlog.framework.sinks import EventRecord, EventSink
from eventlog.schemas.events import EventDefinition
from eventlog.schemas.fields import EventField, FieldBinding
from eventlog.schemas.registry import SchemaRegistry
from eventlog.utils.errors import (
    DuplicateFieldError,
    FieldTypeError,
    MissingFieldError,
    NoRuleBoundError,
    UnknownFieldError,
    UnresolvedSchemaError,
)
from eventlog.validation.decision import Decision, DecisionType, EventContext
from eventlog.validation.registry import ValidationRegistry


REDACTED = DEFAULT_REDACTION_MARKER

Bindings = Union[Mapping[str, Any], Iterable[FieldBinding]]


class Emitter:
    """
    Validating event emitter.

    Features:
    - All-or-nothing emission: every declared field must be bound
    - Per-field rule dispatch through the validation registry
    - Redaction of rejected and undecidable values
    - Exactly one sink call per successful emission
    """

    def __init__(
        self,
        validation_registry: ValidationRegistry,
        sink: EventSink,
        config: Optional[EmitterConfig] = None,
        schema_registry: Optional[SchemaRegistry] = None,
        metrics: Optional[EmitterMetrics] = None,
    ):
        self.validation_registry = validation_registry
        self.sink = sink
        self.config = config or EmitterConfig()
        self.schema_registry = schema_registry
        self.metrics = metrics

        self.logger = structlog.get_logger("event-emitter")

        # Metrics
        self._lock = threading.Lock()
        self.emitted_count = 0
        self.redacted_count = 0
        self.sink_failure_count = 0
        self.decision_counts = {decision_type.value: 0 for decision_type in DecisionType}

    @property
    def redaction_marker(self) -> str:
        return self.config.redaction_marker

    def emit(self, definition: EventDefinition, bindings: Bindings) -> Optional[EventRecord]:
        """
        Validate and emit one event.

        Args:
            definition: Event definition to emit
            bindings: Mapping of field name to value, or FieldBinding items

        Returns:
            The record handed to the sink, or None when emission is disabled

        Raises:
            MissingFieldError: if a declared field has no value
            UnknownFieldError: if a value is bound to an undeclared field
            DuplicateFieldError: if two bindings name the same field
            FieldTypeError: if a value does not match its field kind
            UnresolvedSchemaError: if the schema registry does not know the definition
            NoRuleBoundError: if a field's rule id resolves to no rule
        """
        if self.schema_registry is not None and not self.schema_registry.contains(definition):
            raise UnresolvedSchemaError(definition.group_id, definition.version)

        values = self._collect_values(definition, bindings)

        resolved: List[Tuple[str, Any]] = []
        redacted = 0
        for event_field in definition.fields:
            value = values[event_field.name]
            if event_field.rule_id is not None:
                decision = self._validate(definition, event_field, value)
                if not decision.is_accepted:
                    value = self.redaction_marker
                    redacted += 1
            resolved.append((event_field.name, value))

        record = EventRecord(
            group_id=definition.group_id,
            version=definition.version,
            event_id=definition.event_id,
            fields=tuple(resolved),
        )

        with self._lock:
            self.redacted_count += redacted

        if not self.config.enabled:
            return None

        self._forward(record)
        return record

    def emit_values(self, definition: EventDefinition, *values: Any) -> Optional[EventRecord]:
        """Emit an event binding positional values to fields in declaration order."""
        if len(values) < len(definition.fields):
            raise MissingFieldError(
                definition.event_id,
                definition.field_names[len(values):],
            )
        if len(values) > len(definition.fields):
            raise UnknownFieldError(
                definition.event_id,
                [f"#{index}" for index in range(len(definition.fields), len(values))],
            )
        return self.emit(definition, dict(zip(definition.field_names, values)))

    def emit_event(
        self,
        group_id: str,
        version: int,
        event_id: str,
        bindings: Bindings,
    ) -> Optional[EventRecord]:
        """Emit an event looked up through the schema registry."""
        if self.schema_registry is None:
            raise UnresolvedSchemaError(group_id, version)
        definition = self.schema_registry.get_event(group_id, version, event_id)
        return self.emit(definition, bindings)

    def _collect_values(self, definition: EventDefinition, bindings: Bindings) -> Dict[str, Any]:
        """Check bindings against the definition and return values by field name."""
        if isinstance(bindings, Mapping):
            values = dict(bindings)
        else:
            values = {}
            for binding in bindings:
                if binding.field.name in values:
                    raise DuplicateFieldError(definition.event_id, binding.field.name)
                declared = binding.field.name in definition.field_names
                if declared and definition.get_field(binding.field.name) != binding.field:
                    raise UnknownFieldError(definition.event_id, [binding.field.name])
                values[binding.field.name] = binding.value

        declared_names = definition.field_names
        unknown = [name for name in values if name not in declared_names]
        if unknown:
            raise UnknownFieldError(definition.event_id, unknown)

        missing = [name for name in declared_names if name not in values]
        if missing:
            raise MissingFieldError(definition.event_id, missing)

        for event_field in definition.fields:
            value = values[event_field.name]
            if not event_field.accepts_value(value):
                raise FieldTypeError(event_field.name, event_field.kind.value, type(value).__name__)

        return values

    def _validate(self, definition: EventDefinition, event_field: EventField, value: Any) -> Decision:
        """Run the field's rule and count the decision."""
        context = EventContext(
            group_id=definition.group_id,
            version=definition.version,
            event_id=definition.event_id,
            field_name=event_field.name,
        )

        try:
            rule = self.validation_registry.resolve(event_field.rule_id)
        except NoRuleBoundError:
            if self.config.fail_on_unbound_rule:
                raise
            decision = Decision.unknown(f"no rule accepts '{event_field.rule_id}'")
        else:
            decision = rule.validate(value, context)

        self._record_decision(event_field.rule_id, decision)

        if not decision.is_accepted:
            # the rejected value itself is never logged
            self.logger.debug(
                "Field value redacted",
                group_id=definition.group_id,
                event_id=definition.event_id,
                field=event_field.name,
                rule_id=event_field.rule_id,
                decision=decision.type.value,
                reason=decision.reason,
            )
        return decision

    def _record_decision(self, rule_id: str, decision: Decision) -> None:
        with self._lock:
            self.decision_counts[decision.type.value] += 1
        if self.metrics is not None:
            self.metrics.record_decision(rule_id, decision.type.value)

    def _forward(self, record: EventRecord) -> None:
        """Hand the record to the sink. Sink failures are logged, not raised."""
        try:
            self.sink.record(record.group_id, record.version, record.event_id, record.fields)
        except Exception as e:
            with self._lock:
                self.sink_failure_count += 1
            if self.metrics is not None:
                self.metrics.record_sink_failure(record.group_id, record.event_id)
            self.logger.error(
                "Sink failed to record event",
                group_id=record.group_id,
                event_id=record.event_id,
                error=str(e),
                exc_info=True,
            )
            return

        with self._lock:
            self.emitted_count += 1
        if self.metrics is not None:
            self.metrics.record_emitted(record.group_id, record.event_id)

    def get_metrics(self) -> Dict[str, Any]:
        """Get emitter metrics."""
        with self._lock:
            return {
                "emitted_count": self.emitted_count,
                "redacted_count": self.redacted_count,
                "sink_failure_count": self.sink_failure_count,
                "decisions": dict(self.decision_counts),
            }
