"""Pytest configuration and fixtures."""

import pytest

from eventlog.framework.config import EmitterConfig
from eventlog.framework.emitter import Emitter
from eventlog.framework.sinks import InMemorySink
from eventlog.schemas.events import define_schema
from eventlog.schemas.fields import boolean_field, string_field
from eventlog.validation.registry import ValidationRegistry
from eventlog.validation.rules import AllowListRule
from eventlog.validation.sources import StaticAllowListSource


MODEL_ID_RULE = "model_id"


@pytest.fixture
def sink():
    """In-memory sink fixture."""
    return InMemorySink()


@pytest.fixture
def model_source():
    """Allow-list of currently available rankers."""
    return StaticAllowListSource({"fast-ranker", "slow-ranker"})


@pytest.fixture
def validation_registry(model_source):
    """Validation registry with the model id rule registered."""
    registry = ValidationRegistry()
    registry.register(AllowListRule(MODEL_ID_RULE, model_source))
    return registry


@pytest.fixture
def emitter(validation_registry, sink):
    """Emitter fixture with default configuration."""
    return Emitter(validation_registry, sink, config=EmitterConfig(
        enabled=True,
        redaction_marker="<REDACTED>",
        fail_on_unbound_rule=True,
    ))


@pytest.fixture
def ml_schema():
    """Schema group ml.completion version 1."""
    return define_schema("ml.completion", 1)


@pytest.fixture
def ranking_event(ml_schema):
    """ranking.settings.changed event definition."""
    return ml_schema.define_event(
        "ranking.settings.changed",
        string_field("rankerId").with_custom_rule(MODEL_ID_RULE),
        boolean_field("enabled"),
        boolean_field("enabledByDefault"),
        boolean_field("usingCheckbox"),
    )


@pytest.fixture
def ranking_bindings():
    """Bindings for a valid ranking settings change."""
    return {
        "rankerId": "fast-ranker",
        "enabled": True,
        "enabledByDefault": False,
        "usingCheckbox": True,
    }
