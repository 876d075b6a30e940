"""Prometheus metrics for the event emitter."""

from typing import Optional

from prometheus_client import CollectorRegistry, Counter


class EmitterMetrics:
    """Counters for emitted events, field decisions and sink failures."""

    def __init__(self, namespace: str = "eventlog", registry: Optional[CollectorRegistry] = None):
        self.namespace = namespace
        self.registry = registry or CollectorRegistry()

        self.events_emitted = Counter(
            f"{namespace}_events_emitted_total",
            "Total number of event records handed to the sink",
            ["group_id", "event_id"],
            registry=self.registry
        )

        self.field_decisions = Counter(
            f"{namespace}_field_decisions_total",
            "Total number of validated field values by decision",
            ["rule_id", "decision"],
            registry=self.registry
        )

        self.sink_failures = Counter(
            f"{namespace}_sink_failures_total",
            "Total number of records the sink failed to accept",
            ["group_id", "event_id"],
            registry=self.registry
        )

    def record_emitted(self, group_id: str, event_id: str) -> None:
        self.events_emitted.labels(group_id=group_id, event_id=event_id).inc()

    def record_decision(self, rule_id: str, decision: str) -> None:
        self.field_decisions.labels(rule_id=rule_id, decision=decision).inc()

    def record_sink_failure(self, group_id: str, event_id: str) -> None:
        self.sink_failures.labels(group_id=group_id, event_id=event_id).inc()
