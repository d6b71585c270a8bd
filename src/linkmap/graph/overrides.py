"""Special-case annotator for known-important connections.

Rules are loaded from YAML config and applied after resolution and marker
projection. For every rule whose two endpoints both appear in the resolved
result, both endpoints are promoted to ``direct`` and a forced edge is
recorded so the UI draws the connection regardless of traversal or dedup
outcomes.

Example ``config/override_rules.yml``::

    rules:
      - type_a: persona
        id_a: 1
        type_b: inmueble
        id_b: 3
        forced_label: Propietario del terreno
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from linkmap.core.types import EntityRef, EntityType, Tier
from linkmap.entities.models import Entity, Location
from linkmap.graph.models import (
    AugmentedResult,
    ForcedEdge,
    Marker,
    OverrideRule,
    ResolvedResult,
    location_point,
)

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[3] / "config" / "override_rules.yml"


def load_override_rules(path: str | Path | None = None) -> list[OverrideRule]:
    """Load override rules from YAML. A missing file means no rules."""
    config_path = Path(path) if path else _DEFAULT_CONFIG_PATH
    if not config_path.exists():
        logger.debug("No override rules at %s", config_path)
        return []
    with open(config_path) as fh:
        data = yaml.safe_load(fh) or {}
    return [OverrideRule(**raw) for raw in data.get("rules") or []]


def annotate(
    result: ResolvedResult,
    markers: list[Marker],
    rules: list[OverrideRule],
) -> AugmentedResult:
    """Apply override rules to a resolved result and its markers.

    Must run after projection. Inputs are left untouched; the returned
    AugmentedResult holds promoted copies.
    """
    augmented = result.model_copy(deep=True)
    out_markers = [m.model_copy(deep=True) for m in markers]
    edges: list[ForcedEdge] = []

    present = _present_refs(augmented)
    for rule in rules:
        a, b = rule.ref_a, rule.ref_b
        if a not in present or b not in present:
            continue
        promoted = {a, b}
        for entry in augmented.entries:
            if entry.ref in promoted:
                entry.tier = Tier.DIRECT
        for marker in out_markers:
            location_ref = EntityRef(entity_type=EntityType.LOCATION, id=marker.location_id)
            if location_ref in promoted or marker.contributor in promoted:
                marker.tier = Tier.DIRECT
        edges.append(
            ForcedEdge(
                source=a,
                target=b,
                label=rule.forced_label,
                source_point=_point_for(a, augmented, out_markers),
                target_point=_point_for(b, augmented, out_markers),
            )
        )
        logger.info("Override applied: %s <-> %s", a, b)

    return AugmentedResult(result=augmented, markers=out_markers, forced_edges=edges)


def _present_refs(result: ResolvedResult) -> set[EntityRef]:
    """Every ref anywhere in the result: seed, entries and provenance chains."""
    present = {result.seed.ref}
    for entry in result.entries:
        present.add(entry.ref)
        for path in entry.paths:
            present.update(path)
    return present


def _point_for(
    ref: EntityRef, result: ResolvedResult, markers: list[Marker]
) -> tuple[float, float] | None:
    entity: Entity | None = result.seed if result.seed.ref == ref else None
    if entity is None:
        entry = result.get(ref)
        entity = entry.entity if entry else None
    if isinstance(entity, Location):
        return location_point(entity)
    for marker in markers:
        if marker.contributor == ref:
            return (marker.lat, marker.lng)
    return None
