"""
Validation rule registry.

Maps rule ids to rule instances by asking each registered rule whether
it accepts the id. The first registered rule that accepts wins.

Rules may be registered while other threads resolve (plugins loading
late). Registration builds a new tuple and publishes it under the lock,
so ``resolve`` only ever sees fully registered rules.
"""

import threading
from typing import Set, Tuple
import structlog

from .rules import ValidationRule
from eventlog.utils.errors import NoRuleBoundError, RuleConflictError


class ValidationRegistry:
    """
    In-memory registry of validation rules.
    Thread-safe for concurrent registration and resolution.

    Usage:
        registry = ValidationRegistry()
        registry.register(AllowListRule("model_id", source))

        registry.resolve("model_id")   # AllowListRule
        registry.resolve("other")      # raises NoRuleBoundError
    """

    def __init__(self, debug: bool = False):
        self.debug = debug
        self.logger = structlog.get_logger("validation-registry")
        self._rules: Tuple[ValidationRule, ...] = ()
        self._lock = threading.Lock()
        self._reported_conflicts: Set[str] = set()

    def register(self, rule: ValidationRule) -> None:
        """Register a rule. Later registrations lose ties to earlier ones."""
        if not isinstance(rule, ValidationRule):
            raise TypeError(f"Expected a ValidationRule, got {type(rule).__name__}")

        with self._lock:
            self._rules = self._rules + (rule,)
            self._reported_conflicts.clear()

        self.logger.info("Validation rule registered", rule=rule.name)

    def unregister(self, rule: ValidationRule) -> bool:
        """Remove a rule. Returns False if it was not registered."""
        with self._lock:
            if rule not in self._rules:
                return False
            self._rules = tuple(r for r in self._rules if r is not rule)
            self._reported_conflicts.clear()

        self.logger.info("Validation rule unregistered", rule=rule.name)
        return True

    def resolve(self, rule_id: str) -> ValidationRule:
        """
        Find the rule for ``rule_id``.

        Raises:
            NoRuleBoundError: if no registered rule accepts the id
            RuleConflictError: in debug mode, if more than one rule accepts it
        """
        with self._lock:
            rules = self._rules

        for index, rule in enumerate(rules):
            if rule.accepts(rule_id):
                self._check_conflicts(rule_id, rule, rules[index + 1:])
                return rule

        raise NoRuleBoundError(rule_id)

    def _check_conflicts(
        self,
        rule_id: str,
        winner: ValidationRule,
        remaining: Tuple[ValidationRule, ...],
    ) -> None:
        """Flag other rules that also accept ``rule_id``."""
        if not self.debug and rule_id in self._reported_conflicts:
            return

        shadowed = [rule.name for rule in remaining if rule.accepts(rule_id)]
        if not shadowed:
            return

        if self.debug:
            raise RuleConflictError(rule_id, [winner.name] + shadowed)

        with self._lock:
            self._reported_conflicts.add(rule_id)
        self.logger.warning(
            "Several rules accept rule id, first registered wins",
            rule_id=rule_id,
            winner=winner.name,
            shadowed=shadowed,
        )

    def rules(self) -> Tuple[ValidationRule, ...]:
        """Return registered rules in registration order."""
        with self._lock:
            return self._rules

    def __len__(self) -> int:
        with self._lock:
            return len(self._rules)
