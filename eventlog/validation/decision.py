"""
Validation decisions.

A decision classifies one field value. It is not an error channel:
anything other than ACCEPTED is redacted by the emitter.
"""

from enum import Enum
from typing import Optional
from dataclasses import dataclass


class DecisionType(Enum):
    """Decision type enumeration."""
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Decision:
    """Outcome of validating a single value."""
    type: DecisionType
    reason: Optional[str] = None

    @classmethod
    def accepted(cls) -> "Decision":
        return ACCEPTED

    @classmethod
    def rejected(cls) -> "Decision":
        return REJECTED

    @classmethod
    def unknown(cls, reason: str) -> "Decision":
        return cls(DecisionType.UNKNOWN, reason)

    @property
    def is_accepted(self) -> bool:
        return self.type is DecisionType.ACCEPTED


ACCEPTED = Decision(DecisionType.ACCEPTED)
REJECTED = Decision(DecisionType.REJECTED)


@dataclass(frozen=True)
class EventContext:
    """Ambient information about the field being validated."""
    group_id: str
    version: int
    event_id: str
    field_name: str
