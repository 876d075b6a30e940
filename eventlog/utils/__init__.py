"""
Utility modules for the telemetry core.

Provides common utilities for:
- Structured logging
- Structural error taxonomy
"""

from .logging import setup_logging
from .errors import (
    TelemetryError,
    ConfigurationError,
    StructuralError,
    SchemaDefinitionError,
    DuplicateSchemaError,
    DuplicateEventError,
    DuplicateFieldError,
    MissingFieldError,
    UnknownFieldError,
    FieldTypeError,
    UnresolvedEventError,
    UnresolvedSchemaError,
    NoRuleBoundError,
    RuleConflictError,
)

__all__ = [
    "setup_logging",
    "TelemetryError",
    "ConfigurationError",
    "StructuralError",
    "SchemaDefinitionError",
    "DuplicateSchemaError",
    "DuplicateEventError",
    "DuplicateFieldError",
    "MissingFieldError",
    "UnknownFieldError",
    "FieldTypeError",
    "UnresolvedEventError",
    "UnresolvedSchemaError",
    "NoRuleBoundError",
    "RuleConflictError",
]
