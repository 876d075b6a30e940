"""
Typed event fields.

A field is a named, typed slot that may carry the id of a validation
rule. Fields are immutable: binding a rule produces a derived field so a
single unbound field can be reused across several events.
"""

from enum import Enum
from typing import Any, NamedTuple, Optional, Tuple, Type
from dataclasses import dataclass, replace

from eventlog.utils.errors import SchemaDefinitionError


class FieldKind(Enum):
    """Field value kinds."""
    STRING = "string"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"


_KIND_TYPES = {
    FieldKind.STRING: (str,),
    FieldKind.BOOLEAN: (bool,),
    FieldKind.INTEGER: (int,),
    FieldKind.FLOAT: (int, float),
}


@dataclass(frozen=True)
class EventField:
    """Named, typed event slot with an optional validation rule id."""
    name: str
    kind: FieldKind
    rule_id: Optional[str] = None

    def __post_init__(self):
        if not self.name or not isinstance(self.name, str):
            raise SchemaDefinitionError("Field name must be a non-empty string")
        if not isinstance(self.kind, FieldKind):
            raise SchemaDefinitionError(
                f"Field '{self.name}' has invalid kind {self.kind!r}",
                details={"field": self.name},
            )

    def with_custom_rule(self, rule_id: str) -> "EventField":
        """Return a copy of this field bound to ``rule_id``."""
        if not rule_id or not isinstance(rule_id, str):
            raise SchemaDefinitionError(
                f"Rule id for field '{self.name}' must be a non-empty string",
                details={"field": self.name},
            )
        return replace(self, rule_id=rule_id)

    def with_value(self, value: Any) -> "FieldBinding":
        """Bind a value to this field for a single emission."""
        return FieldBinding(self, value)

    @property
    def python_types(self) -> Tuple[Type, ...]:
        return _KIND_TYPES[self.kind]

    def accepts_value(self, value: Any) -> bool:
        """Check that ``value`` matches the field kind."""
        # bool is an int subclass but only BOOLEAN fields take it
        if isinstance(value, bool):
            return self.kind is FieldKind.BOOLEAN
        return isinstance(value, self.python_types)


class FieldBinding(NamedTuple):
    """A field paired with the value supplied for one emission."""
    field: EventField
    value: Any


def string_field(name: str) -> EventField:
    """Create a string field."""
    return EventField(name, FieldKind.STRING)


def boolean_field(name: str) -> EventField:
    """Create a boolean field."""
    return EventField(name, FieldKind.BOOLEAN)


def integer_field(name: str) -> EventField:
    """Create an integer field."""
    return EventField(name, FieldKind.INTEGER)


def float_field(name: str) -> EventField:
    """Create a float field."""
    return EventField(name, FieldKind.FLOAT)
