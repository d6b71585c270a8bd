"""Graph resolver: bounded breadth-first expansion from a seed entity.

Every entity linked to the seed through a junction table is ``direct``.
Entities reached through an intermediate entity are ``related`` and carry
the chain of intermediates as provenance. Identity is ``(type, id)``: the
first path to reach an entity wins, which makes direct always win over
related because the seed's own neighbors are merged before any deeper
level. Later paths are kept in ``paths`` for marker fan-out.

Locations are leaves and never expand. Entities on the deepest level
still contribute the locations linked to them, so a location can sit one
hop below ``max_depth``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from linkmap.core.types import EntityRef, EntityType, Tier, parse_ref
from linkmap.entities.models import Entity
from linkmap.graph.index import RelationIndex
from linkmap.graph.models import (
    Neighborhood,
    PartialResolutionWarning,
    ResolvedEntry,
    ResolvedResult,
)

logger = logging.getLogger(__name__)

# (provenance chain of the parent's children, entities found)
_Candidates = list[tuple[list[EntityRef], list[Entity]]]


class GraphResolver:
    """Computes everything connected to a seed entity.

    Stateless between calls: each ``resolve`` builds a fresh result.
    """

    def __init__(self, index: RelationIndex, max_depth: int = 2) -> None:
        if max_depth < 1:
            raise ValueError(f"max_depth must be >= 1, got {max_depth}")
        self._index = index
        self._max_depth = max_depth

    async def resolve(
        self,
        seed_type: Any,
        seed_id: Any,
        max_depth: int | None = None,
    ) -> ResolvedResult:
        """Resolve the direct and related entities of a seed.

        Args:
            seed_type: Entity type tag (``persona``, ``vehiculo``, ...).
            seed_id: Numeric entity id.
            max_depth: Entity hops to traverse. Defaults to the resolver's.

        Returns:
            A ResolvedResult with one entry per distinct entity.

        Raises:
            InvalidReferenceError: Malformed input, before any store access.
            NotFoundError: The seed entity does not exist.
            ValueError: ``max_depth`` is lower than 1.
        """
        seed_ref = parse_ref(seed_type, seed_id)
        depth = self._max_depth if max_depth is None else max_depth
        if depth < 1:
            raise ValueError(f"max_depth must be >= 1, got {depth}")

        seed = await self._index.get_entity(seed_ref)
        seed_neighbors = await self._index.neighbors_of(seed)

        entries: dict[tuple[EntityType, int], ResolvedEntry] = {}
        warnings: list[PartialResolutionWarning] = []

        frontier = self._merge(seed_ref, entries, [([], seed_neighbors.all())])
        level = 1
        while frontier:
            neighborhoods = await self._fetch_level(frontier, warnings)
            candidates: _Candidates = []
            for entry, neighborhood in neighborhoods:
                chain = [*entry.provenance, entry.ref]
                if level < depth:
                    candidates.append((chain, neighborhood.all()))
                else:
                    candidates.append((chain, list(neighborhood.locations)))
            next_frontier = self._merge(seed_ref, entries, candidates)
            frontier = next_frontier if level < depth else []
            level += 1

        result = ResolvedResult(
            seed=seed,
            max_depth=depth,
            entries=list(entries.values()),
            warnings=warnings,
        )
        logger.info(
            "Resolved %s: %d direct, %d related, %d warnings",
            seed_ref, len(result.direct), len(result.related), len(warnings),
        )
        return result

    async def _fetch_level(
        self,
        frontier: list[ResolvedEntry],
        warnings: list[PartialResolutionWarning],
    ) -> list[tuple[ResolvedEntry, Neighborhood]]:
        """Fetch every frontier neighborhood concurrently.

        A failed lookup drops that branch and records a warning; the rest
        of the level is returned in frontier order.
        """
        outcomes = await asyncio.gather(
            *(self._index.neighbors_of(entry.entity) for entry in frontier),
            return_exceptions=True,
        )
        fetched: list[tuple[ResolvedEntry, Neighborhood]] = []
        for entry, outcome in zip(frontier, outcomes):
            if isinstance(outcome, Exception):
                logger.warning(
                    "Skipping branch through %s: neighbor lookup failed: %s",
                    entry.ref, outcome,
                )
                warnings.append(
                    PartialResolutionWarning(entity=entry.ref, detail=str(outcome) or repr(outcome))
                )
                continue
            if isinstance(outcome, BaseException):
                raise outcome
            fetched.append((entry, outcome))
        return fetched

    @staticmethod
    def _merge(
        seed_ref: EntityRef,
        entries: dict[tuple[EntityType, int], ResolvedEntry],
        candidates: _Candidates,
    ) -> list[ResolvedEntry]:
        """Fold a complete level of candidates into ``entries``.

        Returns the newly discovered non-location entries, which form the
        next frontier.
        """
        discovered: list[ResolvedEntry] = []
        for chain, neighbors in candidates:
            for entity in neighbors:
                ref = entity.ref
                if ref == seed_ref or ref in chain:
                    continue
                existing = entries.get(ref.key)
                if existing is not None:
                    if chain not in existing.paths:
                        existing.paths.append(list(chain))
                    continue
                entry = ResolvedEntry(
                    entity=entity,
                    tier=Tier.DIRECT if not chain else Tier.RELATED,
                    provenance=list(chain),
                    paths=[list(chain)],
                )
                entries[ref.key] = entry
                if ref.entity_type != EntityType.LOCATION:
                    discovered.append(entry)
        return discovered
