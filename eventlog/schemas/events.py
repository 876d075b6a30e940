"""
Event schema definitions.

An event schema is a named, versioned group of event definitions. The
group id and version together are the schema's external identity and
must stay stable across releases for downstream consumers.
"""

import threading
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Tuple
from dataclasses import dataclass, field
import structlog

from eventlog.schemas.fields import EventField, FieldBinding
from eventlog.utils.errors import (
    DuplicateEventError,
    DuplicateFieldError,
    SchemaDefinitionError,
    UnresolvedEventError,
)


logger = structlog.get_logger("event-schema")


@dataclass(frozen=True)
class EventDefinition:
    """One event shape: an id and an ordered tuple of fields."""
    group_id: str
    version: int
    event_id: str
    fields: Tuple[EventField, ...] = field(default_factory=tuple)

    def __post_init__(self):
        seen = set()
        for event_field in self.fields:
            if not isinstance(event_field, EventField):
                raise SchemaDefinitionError(
                    f"Event '{self.event_id}' received a non-field declaration: {event_field!r}",
                    details={"event_id": self.event_id},
                )
            if event_field.name in seen:
                raise DuplicateFieldError(self.event_id, event_field.name)
            seen.add(event_field.name)

    @property
    def field_names(self) -> List[str]:
        """Get field names in declaration order."""
        return [event_field.name for event_field in self.fields]

    def get_field(self, name: str) -> EventField:
        for event_field in self.fields:
            if event_field.name == name:
                return event_field
        raise KeyError(name)

    def bind(self, **values: Any) -> List[FieldBinding]:
        """Build field bindings from keyword values, in declaration order."""
        bindings = []
        for event_field in self.fields:
            if event_field.name in values:
                bindings.append(event_field.with_value(values[event_field.name]))
        return bindings


class EventSchema:
    """
    Named, versioned container of event definitions.

    Definitions can only be added; once defined they are never replaced
    or removed, so readers on other threads never need a lock.
    """

    def __init__(self, group_id: str, version: int):
        if not group_id or not isinstance(group_id, str):
            raise SchemaDefinitionError("Schema group id must be a non-empty string")
        if isinstance(version, bool) or not isinstance(version, int) or version < 1:
            raise SchemaDefinitionError(
                f"Schema '{group_id}' version must be a positive integer, got {version!r}",
                details={"group_id": group_id},
            )

        self.group_id = group_id
        self.version = version
        self._definitions: Dict[str, EventDefinition] = {}
        self._lock = threading.Lock()

    def define_event(self, event_id: str, *fields: EventField) -> EventDefinition:
        """
        Register one event shape in this schema.

        Args:
            event_id: Event identifier, unique within the schema
            fields: Field declarations in serialization order

        Returns:
            The new event definition

        Raises:
            DuplicateEventError: if ``event_id`` is already defined
            DuplicateFieldError: if two fields share a name
        """
        if not event_id or not isinstance(event_id, str):
            raise SchemaDefinitionError(
                f"Event id in group '{self.group_id}' must be a non-empty string",
                details={"group_id": self.group_id},
            )

        definition = EventDefinition(
            group_id=self.group_id,
            version=self.version,
            event_id=event_id,
            fields=tuple(fields),
        )

        with self._lock:
            if event_id in self._definitions:
                raise DuplicateEventError(self.group_id, event_id)
            self._definitions[event_id] = definition

        logger.debug(
            "Event defined",
            group_id=self.group_id,
            version=self.version,
            event_id=event_id,
            fields=definition.field_names,
        )
        return definition

    def get_event(self, event_id: str) -> EventDefinition:
        """Get an event definition by id."""
        definition = self._definitions.get(event_id)
        if definition is None:
            raise UnresolvedEventError(self.group_id, event_id)
        return definition

    @property
    def definitions(self) -> Mapping[str, EventDefinition]:
        """Read-only view of the event definitions."""
        return MappingProxyType(self._definitions)

    @property
    def events(self) -> List[str]:
        """Get event ids in definition order."""
        return list(self._definitions)

    @property
    def key(self) -> Tuple[str, int]:
        return (self.group_id, self.version)

    def __contains__(self, event_id: object) -> bool:
        return event_id in self._definitions

    def __iter__(self) -> Iterator[EventDefinition]:
        return iter(list(self._definitions.values()))

    def __len__(self) -> int:
        return len(self._definitions)

    def __repr__(self) -> str:
        return f"EventSchema(group_id={self.group_id!r}, version={self.version}, events={self.events!r})"


def define_schema(group_id: str, version: int) -> EventSchema:
    """Create an event schema container."""
    return EventSchema(group_id, version)
