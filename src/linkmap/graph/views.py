"""Rendering-layer view of a resolved graph."""

from __future__ import annotations

from pydantic import BaseModel, Field

from linkmap.core.types import GROUP_KEYS, EntityRef
from linkmap.entities.models import Entity
from linkmap.graph.models import (
    AugmentedResult,
    ForcedEdge,
    Marker,
    PartialResolutionWarning,
)


class RelatedItem(BaseModel):
    entity: Entity
    via: EntityRef | None = None


class DirectGroups(BaseModel):
    persons: list[Entity] = Field(default_factory=list)
    vehicles: list[Entity] = Field(default_factory=list)
    properties: list[Entity] = Field(default_factory=list)
    locations: list[Entity] = Field(default_factory=list)


class RelatedGroups(BaseModel):
    persons: list[RelatedItem] = Field(default_factory=list)
    vehicles: list[RelatedItem] = Field(default_factory=list)
    properties: list[RelatedItem] = Field(default_factory=list)
    locations: list[RelatedItem] = Field(default_factory=list)


class MapView(BaseModel):
    """Four-way partition consumed by the map/table UI."""

    seed: Entity
    direct: DirectGroups = Field(default_factory=DirectGroups)
    related: RelatedGroups = Field(default_factory=RelatedGroups)
    markers: list[Marker] = Field(default_factory=list)
    forced_edges: list[ForcedEdge] = Field(default_factory=list)
    warnings: list[PartialResolutionWarning] = Field(default_factory=list)


def build_map_view(augmented: AugmentedResult) -> MapView:
    result = augmented.result
    view = MapView(
        seed=result.seed,
        markers=augmented.markers,
        forced_edges=augmented.forced_edges,
        warnings=result.warnings,
    )
    for entry in result.direct:
        getattr(view.direct, GROUP_KEYS[entry.ref.entity_type]).append(entry.entity)
    for entry in result.related:
        # The intermediate the entity was reached through is the last hop.
        via = entry.provenance[-1] if entry.provenance else None
        getattr(view.related, GROUP_KEYS[entry.ref.entity_type]).append(
            RelatedItem(entity=entry.entity, via=via)
        )
    return view
