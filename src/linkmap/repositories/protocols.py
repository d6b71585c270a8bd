"""Protocol definition for the entity store.

The protocol mirrors the public methods of ``EntityStore`` exactly, so both
the sync in-memory store and the async SQL repository satisfy it.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from linkmap.core.types import EntityRef, EntityType
from linkmap.entities.models import Entity, Location


@runtime_checkable
class EntityRepository(Protocol):
    """Protocol for the four entity tables plus six junction tables."""

    def add_entity(self, entity: Entity) -> Entity: ...

    def get_entity(self, ref: EntityRef) -> Entity | None: ...

    def list_entities(self, entity_type: EntityType) -> list[Entity]: ...

    def link(self, a: EntityRef, b: EntityRef) -> None: ...

    def unlink(self, a: EntityRef, b: EntityRef) -> bool: ...

    def linked(self, ref: EntityRef, other_type: EntityType) -> list[Entity]: ...

    def find_locations_by_notes(
        self, text: str, category: str | None = None
    ) -> list[Location]: ...
