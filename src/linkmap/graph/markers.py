"""Marker projection of resolved locations."""

from __future__ import annotations

from linkmap.core.types import EntityRef, Tier
from linkmap.entities.models import Entity, Location
from linkmap.graph.models import Marker, MarkerPopup, ResolvedResult

LABEL_SEPARATOR = " → "


def relation_label(contributor: EntityRef, path: list[EntityRef]) -> str:
    """``"<ContributingType>"`` or ``"<ContributingType> → <RelatedToType>"``.

    The second form applies when the contributor was itself reached through
    another entity, i.e. the path holds at least two entities.
    """
    if len(path) >= 2:
        return f"{contributor.entity_type.value}{LABEL_SEPARATOR}{path[-2].entity_type.value}"
    return contributor.entity_type.value


def project(result: ResolvedResult) -> list[Marker]:
    """Flatten resolved locations into markers.

    Locations without both coordinates are dropped. A location reached
    through several contributing entities yields one marker per contributor,
    since each carries its own relation context.
    """
    labels = _entity_labels(result)
    markers: list[Marker] = []
    for entry in result.locations:
        location = entry.entity
        if not isinstance(location, Location) or not location.has_coordinates:
            continue
        seen: set[EntityRef] = set()
        for path in entry.paths:
            contributor = path[-1] if path else result.seed.ref
            if contributor in seen:
                continue
            seen.add(contributor)
            markers.append(
                Marker(
                    location_id=location.id,
                    lat=location.lat,
                    lng=location.lng,
                    contributing_entity_type=contributor.entity_type,
                    contributing_entity_id=contributor.id,
                    tier=Tier.DIRECT if not path else Tier.RELATED,
                    relation_label=relation_label(contributor, path),
                    popup=MarkerPopup(
                        title=location.category or "Ubicación",
                        category=location.category,
                        timestamp=location.timestamp,
                        notes=location.notes,
                        contributor_label=labels.get(contributor, str(contributor)),
                    ),
                )
            )
    return markers


def partition_by_tier(markers: list[Marker]) -> dict[Tier, list[Marker]]:
    """Split markers for rendering: solid icons for direct, hollow for related."""
    groups: dict[Tier, list[Marker]] = {Tier.DIRECT: [], Tier.RELATED: []}
    for marker in markers:
        groups[marker.tier].append(marker)
    return groups


def _entity_labels(result: ResolvedResult) -> dict[EntityRef, str]:
    entities: list[Entity] = [result.seed, *(e.entity for e in result.entries)]
    return {entity.ref: entity.label for entity in entities}
