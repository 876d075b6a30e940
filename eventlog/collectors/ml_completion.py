"""
ML completion settings collector.

Reports changes to the completion ranking settings. The ranker id is
free text chosen from the ranking-model providers installed at the
moment, so it is validated against the live provider list and redacted
when it names a provider the host does not know about.
"""

import threading
from dataclasses import dataclass
from typing import List, Optional

from eventlog.framework.emitter import Emitter
from eventlog.framework.sinks import EventRecord
from eventlog.schemas.events import EventSchema, define_schema
from eventlog.schemas.fields import boolean_field, string_field
from eventlog.validation.registry import ValidationRegistry
from eventlog.validation.rules import AllowListRule
from eventlog.validation.sources import ProviderAllowListSource


GROUP_ID = "ml.completion"
GROUP_VERSION = 1
# Used by both the ranker_id field and its rule, so the field always resolves
RANKER_ID_RULE = "completion_ranking_model_id"


@dataclass(frozen=True)
class RankerProvider:
    """A ranking model that can be selected in the completion settings."""
    id: str
    display_name: str


class RankerProviderRegistry:
    """Live list of installed ranking-model providers."""

    def __init__(self):
        self._providers: List[RankerProvider] = []
        self._lock = threading.Lock()

    def register(self, provider: RankerProvider) -> None:
        with self._lock:
            self._providers = self._providers + [provider]

    def unregister(self, provider: RankerProvider) -> None:
        with self._lock:
            self._providers = [p for p in self._providers if p != provider]

    def available_providers(self) -> List[RankerProvider]:
        with self._lock:
            return list(self._providers)


class RankingModelRule(AllowListRule):
    """Accepts ranker ids matching the display name of an installed provider."""

    def __init__(self, providers: RankerProviderRegistry):
        super().__init__(
            RANKER_ID_RULE,
            ProviderAllowListSource(providers.available_providers, "display_name"),
        )


class MLCompletionSettingsCollector:
    """Declares the ML completion event group and logs settings changes."""

    def __init__(self, emitter: Emitter, schema: Optional[EventSchema] = None):
        self.emitter = emitter
        self.schema = schema or define_schema(GROUP_ID, GROUP_VERSION)

        self.ranker_id_field = string_field("ranker_id").with_custom_rule(RANKER_ID_RULE)
        self.enabled_field = boolean_field("enabled")
        self.enabled_by_default_field = boolean_field("enabled_by_default")
        self.language_checkbox_used_field = boolean_field("using_language_checkbox")

        self.ranking_settings_changed_event = self.schema.define_event(
            "ranking.settings.changed",
            self.ranker_id_field,
            self.enabled_field,
            self.enabled_by_default_field,
            self.language_checkbox_used_field,
        )
        self.decoration_settings_changed_event = self.schema.define_event(
            "decorating.settings.changed",
            self.enabled_field,
        )

    def ranking_settings_changed(
        self,
        ranker_id: str,
        enabled: bool,
        enabled_by_default: bool,
        using_language_checkbox: bool,
    ) -> Optional[EventRecord]:
        return self.emitter.emit(
            self.ranking_settings_changed_event,
            [
                self.ranker_id_field.with_value(ranker_id),
                self.enabled_field.with_value(enabled),
                self.enabled_by_default_field.with_value(enabled_by_default),
                self.language_checkbox_used_field.with_value(using_language_checkbox),
            ],
        )

    def decoration_setting_changed(self, enabled: bool) -> Optional[EventRecord]:
        return self.emitter.emit_values(self.decoration_settings_changed_event, enabled)


def install(
    emitter: Emitter,
    providers: RankerProviderRegistry,
    validation_registry: Optional[ValidationRegistry] = None,
) -> MLCompletionSettingsCollector:
    """Register the ranking-model rule and the collector's schema."""
    registry = validation_registry or emitter.validation_registry
    registry.register(RankingModelRule(providers))

    collector = MLCompletionSettingsCollector(emitter)
    if emitter.schema_registry is not None:
        emitter.schema_registry.register_schema(collector.schema)
    return collector
