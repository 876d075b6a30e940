"""
Error classes for the telemetry emission core.

Structural errors signal a schema or registration bug in the host
application and are always raised to the caller. Validation outcomes
(accepted, rejected, unknown) are not errors and never use this module.
"""

from typing import Optional, Dict, Any, Iterable


class TelemetryError(Exception):
    """Base exception for telemetry errors."""

    def __init__(
        self,
        message: str,
        error_code: str,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(TelemetryError):
    """Error raised when configuration is invalid."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            error_code="CONFIGURATION_ERROR",
            details=details or {}
        )
        self.config_key = config_key
        self.config_value = config_value

        if config_key:
            self.details["config_key"] = config_key
        if config_value is not None:
            self.details["config_value"] = str(config_value)


class StructuralError(TelemetryError):
    """Programmer or configuration error in schemas, bindings or rules."""

    error_code = "STRUCTURAL_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code=self.error_code,
            details=details
        )


class SchemaDefinitionError(StructuralError):
    """Error raised when a schema, event or field is declared with invalid values."""

    error_code = "SCHEMA_DEFINITION_ERROR"


class DuplicateSchemaError(StructuralError):
    """Error raised when a group id and version pair is registered twice."""

    error_code = "DUPLICATE_SCHEMA"

    def __init__(self, group_id: str, version: int):
        super().__init__(
            f"Schema '{group_id}' version {version} is already registered",
            details={"group_id": group_id, "version": version},
        )
        self.group_id = group_id
        self.version = version


class DuplicateEventError(StructuralError):
    """Error raised when an event id is defined twice in one schema."""

    error_code = "DUPLICATE_EVENT"

    def __init__(self, group_id: str, event_id: str):
        super().__init__(
            f"Event '{event_id}' is already defined in group '{group_id}'",
            details={"group_id": group_id, "event_id": event_id},
        )
        self.group_id = group_id
        self.event_id = event_id


class DuplicateFieldError(StructuralError):
    """Error raised when two fields in one event share a name."""

    error_code = "DUPLICATE_FIELD"

    def __init__(self, event_id: str, field_name: str):
        super().__init__(
            f"Field '{field_name}' appears more than once in event '{event_id}'",
            details={"event_id": event_id, "field": field_name},
        )
        self.event_id = event_id
        self.field_name = field_name


class MissingFieldError(StructuralError):
    """Error raised when an emission does not bind every declared field."""

    error_code = "MISSING_FIELD"

    def __init__(self, event_id: str, missing: Iterable[str]):
        self.missing = tuple(missing)
        super().__init__(
            f"Event '{event_id}' is missing values for: {', '.join(self.missing)}",
            details={"event_id": event_id, "missing": list(self.missing)},
        )
        self.event_id = event_id


class UnknownFieldError(StructuralError):
    """Error raised when an emission binds a field the event does not declare."""

    error_code = "UNKNOWN_FIELD"

    def __init__(self, event_id: str, unknown: Iterable[str]):
        self.unknown = tuple(unknown)
        super().__init__(
            f"Event '{event_id}' does not declare: {', '.join(self.unknown)}",
            details={"event_id": event_id, "unknown": list(self.unknown)},
        )
        self.event_id = event_id


class FieldTypeError(StructuralError):
    """Error raised when a bound value does not match the field kind."""

    error_code = "FIELD_TYPE_MISMATCH"

    def __init__(self, field_name: str, expected: str, actual: str):
        super().__init__(
            f"Field '{field_name}' expects {expected}, got {actual}",
            details={"field": field_name, "expected": expected, "actual": actual},
        )
        self.field_name = field_name


class UnresolvedEventError(StructuralError):
    """Error raised when an event id is not defined in a schema."""

    error_code = "UNRESOLVED_EVENT"

    def __init__(self, group_id: str, event_id: str):
        super().__init__(
            f"Event '{event_id}' is not defined in group '{group_id}'",
            details={"group_id": group_id, "event_id": event_id},
        )
        self.group_id = group_id
        self.event_id = event_id


class UnresolvedSchemaError(StructuralError):
    """Error raised when a schema is not known to the schema registry."""

    error_code = "UNRESOLVED_SCHEMA"

    def __init__(self, group_id: str, version: Optional[int] = None):
        label = f"version {version}" if version is not None else "any version"
        super().__init__(
            f"Schema '{group_id}' {label} is not registered",
            details={"group_id": group_id, "version": version},
        )
        self.group_id = group_id
        self.version = version


class NoRuleBoundError(StructuralError):
    """Error raised when no registered rule accepts a field's rule id."""

    error_code = "NO_RULE_BOUND"

    def __init__(self, rule_id: str):
        super().__init__(
            f"No validation rule accepts rule id '{rule_id}'",
            details={"rule_id": rule_id},
        )
        self.rule_id = rule_id


class RuleConflictError(StructuralError):
    """Error raised in debug mode when several rules accept the same rule id."""

    error_code = "RULE_CONFLICT"

    def __init__(self, rule_id: str, rules: Iterable[str]):
        self.rules = tuple(rules)
        super().__init__(
            f"Rule id '{rule_id}' is accepted by several rules: {', '.join(self.rules)}",
            details={"rule_id": rule_id, "rules": list(self.rules)},
        )
        self.rule_id = rule_id
