"""Graph data models: neighborhoods, resolved results, markers and overrides."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from linkmap.core.types import EntityRef, EntityType, Tier
from linkmap.entities.models import Entity, Location


class Neighborhood(BaseModel):
    """Direct neighbors of one entity, partitioned by type. Never None."""

    persons: list[Entity] = Field(default_factory=list)
    vehicles: list[Entity] = Field(default_factory=list)
    properties: list[Entity] = Field(default_factory=list)
    locations: list[Entity] = Field(default_factory=list)

    def all(self) -> list[Entity]:
        """All neighbors in canonical type order."""
        return [*self.persons, *self.vehicles, *self.properties, *self.locations]

    def __len__(self) -> int:
        return len(self.persons) + len(self.vehicles) + len(self.properties) + len(self.locations)


class PartialResolutionWarning(BaseModel):
    """An intermediate hop whose lookup failed; its branch was skipped."""

    entity: EntityRef
    detail: str


class ResolvedEntry(BaseModel):
    """One distinct entity discovered from the seed."""

    entity: Entity
    tier: Tier
    provenance: list[EntityRef] = Field(default_factory=list)
    # Every distinct chain that reached this entity; the winning one first.
    paths: list[list[EntityRef]] = Field(default_factory=list)

    @property
    def ref(self) -> EntityRef:
        return self.entity.ref


class ResolvedResult(BaseModel):
    """Output of the graph resolver. At most one entry per (type, id)."""

    seed: Entity
    max_depth: int = 2
    entries: list[ResolvedEntry] = Field(default_factory=list)
    warnings: list[PartialResolutionWarning] = Field(default_factory=list)

    def get(self, ref: EntityRef) -> ResolvedEntry | None:
        for entry in self.entries:
            if entry.ref == ref:
                return entry
        return None

    def refs(self) -> set[EntityRef]:
        return {entry.ref for entry in self.entries}

    def by_type(self, entity_type: EntityType) -> list[ResolvedEntry]:
        return [e for e in self.entries if e.ref.entity_type == entity_type]

    @property
    def direct(self) -> list[ResolvedEntry]:
        return [e for e in self.entries if e.tier == Tier.DIRECT]

    @property
    def related(self) -> list[ResolvedEntry]:
        return [e for e in self.entries if e.tier == Tier.RELATED]

    @property
    def locations(self) -> list[ResolvedEntry]:
        return self.by_type(EntityType.LOCATION)

    @property
    def is_partial(self) -> bool:
        return bool(self.warnings)


class MarkerPopup(BaseModel):
    """Human-readable payload shown when a marker is clicked."""

    title: str
    category: str = ""
    timestamp: datetime | None = None
    notes: str = ""
    contributor_label: str = ""


class Marker(BaseModel):
    """A map-renderable projection of one location plus one contributing entity."""

    location_id: int
    lat: float
    lng: float
    contributing_entity_type: EntityType
    contributing_entity_id: int
    tier: Tier
    relation_label: str
    popup: MarkerPopup

    @property
    def contributor(self) -> EntityRef:
        return EntityRef(
            entity_type=self.contributing_entity_type,
            id=self.contributing_entity_id,
        )


class OverrideRule(BaseModel):
    """A known-important connection that must always be emphasized."""

    type_a: EntityType
    id_a: int
    type_b: EntityType
    id_b: int
    forced_label: str = ""

    @property
    def ref_a(self) -> EntityRef:
        return EntityRef(entity_type=self.type_a, id=self.id_a)

    @property
    def ref_b(self) -> EntityRef:
        return EntityRef(entity_type=self.type_b, id=self.id_b)


class ForcedEdge(BaseModel):
    """A connecting line the UI must draw between two override endpoints."""

    source: EntityRef
    target: EntityRef
    label: str = ""
    source_point: tuple[float, float] | None = None
    target_point: tuple[float, float] | None = None


class AugmentedResult(BaseModel):
    """Resolved result and markers after the override pass."""

    result: ResolvedResult
    markers: list[Marker] = Field(default_factory=list)
    forced_edges: list[ForcedEdge] = Field(default_factory=list)


def location_point(location: Location) -> tuple[float, float] | None:
    if not location.has_coordinates:
        return None
    return (location.lat, location.lng)  # type: ignore[return-value]
