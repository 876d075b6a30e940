"""
Validation rules for free-text field values.

Rules are selected by the rule id a field declares. The reference rule
is ``AllowListRule``: whitelist equality against a live, externally owned
set that is re-read on every call, with no fallback and no caching, so a
provider added or removed is reflected by the very next emitted event.
"""

from abc import ABC, abstractmethod
from typing import Any
import structlog

from .decision import ACCEPTED, REJECTED, Decision, EventContext
from .sources import AllowListSource


logger = structlog.get_logger("validation-rules")


class ValidationRule(ABC):
    """
    Base class for custom validation rules.

    Subclasses implement ``accepts`` and ``do_validate``. Rules hold no
    per-event state and must be safe to call from several threads.
    """

    @abstractmethod
    def accepts(self, rule_id: str) -> bool:
        """Return True if this rule handles ``rule_id``. Must be cheap and pure."""

    def validate(self, value: Any, context: EventContext) -> Decision:
        """Classify ``value``; only strings reach ``do_validate``."""
        if not isinstance(value, str):
            return Decision.unknown(f"expected a string value, got {type(value).__name__}")
        return self.do_validate(value, context)

    @abstractmethod
    def do_validate(self, value: str, context: EventContext) -> Decision:
        """Classify a string value."""

    @property
    def name(self) -> str:
        return type(self).__name__


class AllowListRule(ValidationRule):
    """
    Accepts a value only when it exactly equals an allow-list entry.

    Comparison is case-sensitive with no normalisation and no prefix
    matching. The event context is not consulted.
    """

    def __init__(self, rule_id: str, source: AllowListSource):
        self.rule_id = rule_id
        self.source = source

    def accepts(self, rule_id: str) -> bool:
        return rule_id == self.rule_id

    def do_validate(self, value: str, context: EventContext) -> Decision:
        try:
            snapshot = self.source.current_values()
        except Exception as e:
            logger.warning(
                "Allow-list source unavailable",
                rule_id=self.rule_id,
                group_id=context.group_id,
                event_id=context.event_id,
                field=context.field_name,
                error=str(e),
                exc_info=True,
            )
            return Decision.unknown(f"allow-list source unavailable: {e}")

        # A bare string would turn membership into a substring test
        if isinstance(snapshot, str):
            logger.warning(
                "Allow-list source returned a string instead of a collection",
                rule_id=self.rule_id,
                event_id=context.event_id,
                field=context.field_name,
            )
            return Decision.unknown("allow-list source returned a bare string")

        if value in frozenset(snapshot):
            return ACCEPTED
        return REJECTED

    @property
    def name(self) -> str:
        return f"{type(self).__name__}({self.rule_id})"

    def __repr__(self) -> str:
        return f"AllowListRule(rule_id={self.rule_id!r}, source={self.source!r})"
