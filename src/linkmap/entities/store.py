"""In-memory entity store with symmetric junction tables."""

from __future__ import annotations

from linkmap.core.types import TYPE_ORDER, EntityRef, EntityType
from linkmap.entities.models import Entity, Location


def junction_key(a: EntityType, b: EntityType) -> tuple[EntityType, EntityType]:
    """Canonical (typeA, typeB) key of the junction table joining two types.

    Raises:
        ValueError: If both types are equal; same-type relations do not exist.
    """
    if a == b:
        raise ValueError(f"No junction table relates {a.value} to itself")
    return (a, b) if TYPE_ORDER.index(a) < TYPE_ORDER.index(b) else (b, a)


class EntityStore:
    """In-memory dict store for the four entity tables and six junction tables.

    Same read contract as the SQL repository, suitable for tests and
    single-instance development.
    """

    def __init__(self) -> None:
        self._entities: dict[tuple[EntityType, int], Entity] = {}
        # (typeA, typeB) -> set of (idA, idB) rows, in canonical type order
        self._junctions: dict[tuple[EntityType, EntityType], set[tuple[int, int]]] = {}

    # -- Entities --

    def add_entity(self, entity: Entity) -> Entity:
        self._entities[entity.ref.key] = entity
        return entity

    def get_entity(self, ref: EntityRef) -> Entity | None:
        return self._entities.get(ref.key)

    def list_entities(self, entity_type: EntityType) -> list[Entity]:
        return [
            e for (etype, _), e in sorted(self._entities.items(), key=lambda kv: kv[0][1])
            if etype == entity_type
        ]

    # -- Relations --

    def link(self, a: EntityRef, b: EntityRef) -> None:
        """Insert a junction row. Linking an existing pair is a no-op."""
        for ref in (a, b):
            if ref.key not in self._entities:
                raise KeyError(f"Entity {ref} not found")
        key = junction_key(a.entity_type, b.entity_type)
        first, second = (a, b) if a.entity_type == key[0] else (b, a)
        self._junctions.setdefault(key, set()).add((first.id, second.id))

    def unlink(self, a: EntityRef, b: EntityRef) -> bool:
        key = junction_key(a.entity_type, b.entity_type)
        first, second = (a, b) if a.entity_type == key[0] else (b, a)
        rows = self._junctions.get(key, set())
        if (first.id, second.id) not in rows:
            return False
        rows.discard((first.id, second.id))
        return True

    def linked(self, ref: EntityRef, other_type: EntityType) -> list[Entity]:
        """Entities of ``other_type`` sharing a junction row with ``ref``."""
        key = junction_key(ref.entity_type, other_type)
        rows = self._junctions.get(key, set())
        if ref.entity_type == key[0]:
            ids = sorted(b for a, b in rows if a == ref.id)
        else:
            ids = sorted(a for a, b in rows if b == ref.id)
        return [
            self._entities[(other_type, i)]
            for i in ids
            if (other_type, i) in self._entities
        ]

    def find_locations_by_notes(self, text: str, category: str | None = None) -> list[Location]:
        needle = text.lower()
        matches = []
        for entity in self.list_entities(EntityType.LOCATION):
            if category is not None and entity.category != category:
                continue
            if needle and needle in entity.notes.lower():
                matches.append(entity)
        return matches

    @property
    def entity_count(self) -> int:
        return len(self._entities)

    @property
    def relation_count(self) -> int:
        return sum(len(rows) for rows in self._junctions.values())
