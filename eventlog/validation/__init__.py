"""
Validation layer for telemetry field values.

Provides:
- Decisions (accepted, rejected, unknown)
- Custom rules selected by rule id
- Allow-list sources backing the rules
- Rule registry with first-match dispatch
"""

from .decision import Decision, DecisionType, EventContext
from .rules import AllowListRule, ValidationRule
from .sources import AllowListSource, ProviderAllowListSource, StaticAllowListSource
from .registry import ValidationRegistry

__all__ = [
    "Decision",
    "DecisionType",
    "EventContext",
    "AllowListRule",
    "ValidationRule",
    "AllowListSource",
    "ProviderAllowListSource",
    "StaticAllowListSource",
    "ValidationRegistry",
]
