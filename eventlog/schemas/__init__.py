"""
Schema definitions for emitted telemetry events.

Provides type-safe schemas for:
- Typed fields and rule bindings
- Versioned event groups
- Schema registry lookups
"""

from .fields import (
    EventField,
    FieldBinding,
    FieldKind,
    boolean_field,
    float_field,
    integer_field,
    string_field,
)
from .events import EventDefinition, EventSchema, define_schema
from .registry import SchemaRegistry

__all__ = [
    "EventField",
    "FieldBinding",
    "FieldKind",
    "boolean_field",
    "float_field",
    "integer_field",
    "string_field",
    "EventDefinition",
    "EventSchema",
    "define_schema",
    "SchemaRegistry",
]
