"""
Schema registry for emitted events.

Process-scoped table of event schemas keyed by group id and version.
Built at startup and passed to the emitter as an explicit dependency.
"""

import threading
from typing import Dict, List, Optional, Tuple
import structlog

from .events import EventDefinition, EventSchema
from eventlog.utils.errors import DuplicateSchemaError, UnresolvedSchemaError


class SchemaRegistry:
    """
    Schema registry for event emission.

    Holds every schema version the host declares and resolves event
    definitions by group id, version and event id.
    """

    def __init__(self):
        self.logger = structlog.get_logger("schema-registry")
        self.schemas: Dict[Tuple[str, int], EventSchema] = {}
        self._lock = threading.Lock()

    def register_schema(self, schema: EventSchema) -> EventSchema:
        """Register a schema version."""
        with self._lock:
            if schema.key in self.schemas:
                raise DuplicateSchemaError(schema.group_id, schema.version)
            self.schemas[schema.key] = schema

        self.logger.info(
            "Schema registered",
            group_id=schema.group_id,
            version=schema.version,
            events=schema.events,
        )
        return schema

    def get_schema(self, group_id: str, version: Optional[int] = None) -> EventSchema:
        """Get schema for group and version, or the latest version when omitted."""
        with self._lock:
            if version is not None:
                schema = self.schemas.get((group_id, version))
            else:
                candidates = [s for (g, _), s in self.schemas.items() if g == group_id]
                schema = max(candidates, key=lambda s: s.version) if candidates else None

        if schema is None:
            raise UnresolvedSchemaError(group_id, version)
        return schema

    def get_event(self, group_id: str, version: int, event_id: str) -> EventDefinition:
        """Resolve an event definition."""
        return self.get_schema(group_id, version).get_event(event_id)

    def contains(self, definition: EventDefinition) -> bool:
        """Check that the definition belongs to a registered schema."""
        with self._lock:
            schema = self.schemas.get((definition.group_id, definition.version))
        if schema is None:
            return False
        return schema.definitions.get(definition.event_id) is definition

    def get_supported_groups(self) -> List[str]:
        """Get list of registered group ids."""
        with self._lock:
            return sorted({group_id for group_id, _ in self.schemas})

    def get_schema_versions(self, group_id: str) -> List[int]:
        """Get registered versions for a group."""
        with self._lock:
            return sorted(version for g, version in self.schemas if g == group_id)
