"""Unit tests for event schemas and fields."""

import pytest
from dataclasses import FrozenInstanceError

from eventlog.schemas.events import EventSchema, define_schema
from eventlog.schemas.fields import (
    EventField,
    FieldKind,
    boolean_field,
    float_field,
    integer_field,
    string_field,
)
from eventlog.schemas.registry import SchemaRegistry
from eventlog.utils.errors import (
    DuplicateEventError,
    DuplicateFieldError,
    DuplicateSchemaError,
    SchemaDefinitionError,
    StructuralError,
    UnresolvedEventError,
    UnresolvedSchemaError,
)


class TestEventField:
    """Test field declarations."""

    def test_factories_set_kind(self):
        """Test field factories."""
        assert string_field("a").kind is FieldKind.STRING
        assert boolean_field("b").kind is FieldKind.BOOLEAN
        assert integer_field("c").kind is FieldKind.INTEGER
        assert float_field("d").kind is FieldKind.FLOAT
        assert string_field("a").rule_id is None

    def test_with_custom_rule_derives_new_field(self):
        """Test that binding a rule leaves the original field untouched."""
        base = string_field("ranker_id")
        bound = base.with_custom_rule("model_id")

        assert bound.rule_id == "model_id"
        assert bound.name == "ranker_id"
        assert base.rule_id is None
        assert bound is not base

    def test_field_is_immutable(self):
        """Test that fields cannot be mutated."""
        event_field = boolean_field("enabled")
        with pytest.raises(FrozenInstanceError):
            event_field.rule_id = "x"

    def test_empty_rule_id_rejected(self):
        """Test that an empty rule id is a definition error."""
        with pytest.raises(SchemaDefinitionError):
            string_field("ranker_id").with_custom_rule("")

    def test_empty_name_rejected(self):
        """Test that an empty field name is a definition error."""
        with pytest.raises(SchemaDefinitionError):
            EventField("", FieldKind.STRING)

    def test_accepts_value(self):
        """Test value kind checks."""
        assert string_field("s").accepts_value("")
        assert not string_field("s").accepts_value(1)
        assert boolean_field("b").accepts_value(False)
        assert not boolean_field("b").accepts_value(0)
        assert integer_field("i").accepts_value(3)
        assert not integer_field("i").accepts_value(True)
        assert float_field("f").accepts_value(3)
        assert float_field("f").accepts_value(0.5)

    def test_with_value(self):
        """Test building a binding."""
        event_field = boolean_field("enabled")
        binding = event_field.with_value(True)
        assert binding.field is event_field
        assert binding.value is True


class TestEventSchema:
    """Test schema and event definitions."""

    def test_define_schema(self):
        """Test schema identity."""
        schema = define_schema("ml.completion", 1)
        assert isinstance(schema, EventSchema)
        assert schema.key == ("ml.completion", 1)
        assert len(schema) == 0

    @pytest.mark.parametrize("group_id,version", [("", 1), ("group", 0), ("group", True), ("group", "1")])
    def test_invalid_schema_identity(self, group_id, version):
        """Test that invalid group ids and versions are rejected."""
        with pytest.raises(SchemaDefinitionError):
            define_schema(group_id, version)

    def test_define_event(self):
        """Test event definition keeps field order."""
        schema = define_schema("ml.completion", 1)
        definition = schema.define_event(
            "ranking.settings.changed",
            string_field("ranker_id").with_custom_rule("model_id"),
            boolean_field("enabled"),
        )

        assert definition.group_id == "ml.completion"
        assert definition.version == 1
        assert definition.field_names == ["ranker_id", "enabled"]
        assert schema.get_event("ranking.settings.changed") is definition
        assert "ranking.settings.changed" in schema

    def test_event_without_fields(self):
        """Test that bare events are allowed."""
        schema = define_schema("ide.actions", 2)
        definition = schema.define_event("invoked")
        assert definition.fields == ()

    def test_duplicate_event(self):
        """Test that an event id can only be defined once."""
        schema = define_schema("ml.completion", 1)
        schema.define_event("decorating.settings.changed", boolean_field("enabled"))

        with pytest.raises(DuplicateEventError) as exc_info:
            schema.define_event("decorating.settings.changed", boolean_field("enabled"))

        assert exc_info.value.event_id == "decorating.settings.changed"
        assert isinstance(exc_info.value, StructuralError)
        assert schema.events == ["decorating.settings.changed"]

    def test_duplicate_field(self):
        """Test that field names must be unique within an event."""
        schema = define_schema("ml.completion", 1)

        with pytest.raises(DuplicateFieldError) as exc_info:
            schema.define_event(
                "ranking.settings.changed",
                boolean_field("enabled"),
                string_field("enabled"),
            )

        assert exc_info.value.field_name == "enabled"
        assert "ranking.settings.changed" not in schema

    def test_shared_field_across_events(self):
        """Test that one unbound field can be reused by several events."""
        enabled = boolean_field("enabled")
        schema = define_schema("ml.completion", 1)
        first = schema.define_event("a.changed", enabled)
        second = schema.define_event("b.changed", enabled, string_field("id").with_custom_rule("r"))

        assert first.get_field("enabled") is enabled
        assert second.get_field("enabled") is enabled
        assert enabled.rule_id is None

    def test_unknown_event(self):
        """Test lookup of an undefined event."""
        schema = define_schema("ml.completion", 1)
        with pytest.raises(UnresolvedEventError):
            schema.get_event("missing")

    def test_definitions_are_read_only(self):
        """Test that the definitions mapping cannot be mutated."""
        schema = define_schema("ml.completion", 1)
        schema.define_event("a.changed")
        with pytest.raises(TypeError):
            schema.definitions["b.changed"] = None

    def test_bind(self):
        """Test keyword binding helper."""
        schema = define_schema("ml.completion", 1)
        definition = schema.define_event("a.changed", boolean_field("enabled"), string_field("name"))

        bindings = definition.bind(name="x", enabled=True)
        assert [b.field.name for b in bindings] == ["enabled", "name"]


class TestSchemaRegistry:
    """Test SchemaRegistry functionality."""

    def test_schema_registration(self):
        """Test schema registration and lookup."""
        registry = SchemaRegistry()
        schema = define_schema("ml.completion", 1)
        definition = schema.define_event("a.changed", boolean_field("enabled"))

        registry.register_schema(schema)

        assert registry.get_schema("ml.completion", 1) is schema
        assert registry.get_event("ml.completion", 1, "a.changed") is definition
        assert registry.contains(definition)
        assert registry.get_supported_groups() == ["ml.completion"]

    def test_latest_version(self):
        """Test lookup without a version returns the latest."""
        registry = SchemaRegistry()
        registry.register_schema(define_schema("ml.completion", 1))
        latest = registry.register_schema(define_schema("ml.completion", 2))

        assert registry.get_schema("ml.completion") is latest
        assert registry.get_schema_versions("ml.completion") == [1, 2]

    def test_duplicate_schema(self):
        """Test that group id and version identify one schema."""
        registry = SchemaRegistry()
        registry.register_schema(define_schema("ml.completion", 1))

        with pytest.raises(DuplicateSchemaError):
            registry.register_schema(define_schema("ml.completion", 1))

    def test_schema_not_found(self):
        """Test handling of unknown schema."""
        registry = SchemaRegistry()

        with pytest.raises(UnresolvedSchemaError):
            registry.get_schema("unknown", 1)
        with pytest.raises(UnresolvedSchemaError):
            registry.get_schema("unknown")

    def test_contains_foreign_definition(self):
        """Test that a definition from an unregistered schema is not contained."""
        registry = SchemaRegistry()
        registry.register_schema(define_schema("ml.completion", 1))

        other = define_schema("ml.completion", 3).define_event("a.changed")
        assert not registry.contains(other)
