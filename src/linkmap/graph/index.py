"""Relation index: one junction-table lookup per neighboring entity type."""

from __future__ import annotations

import logging

from linkmap.core.errors import NotFoundError
from linkmap.core.types import GROUP_KEYS, TYPE_ORDER, EntityRef, EntityType
from linkmap.entities.models import Entity, Location, Person, Property
from linkmap.graph.models import Neighborhood
from linkmap.repositories import maybe_await
from linkmap.repositories.protocols import EntityRepository

logger = logging.getLogger(__name__)

# Category of locations that record a person's home address.
HOME_CATEGORY = "Domicilio"


class RelationIndex:
    """Fetches the direct neighbors of an entity from the entity store.

    Works with both the in-memory store and the async SQL repository.
    """

    def __init__(self, repository: EntityRepository, match_addresses: bool = False) -> None:
        self._repository = repository
        self._match_addresses = match_addresses

    async def get_entity(self, ref: EntityRef) -> Entity:
        entity = await maybe_await(self._repository.get_entity(ref))
        if entity is None:
            raise NotFoundError(ref)
        return entity

    async def neighbors(self, ref: EntityRef) -> Neighborhood:
        """Return the neighbors of ``ref`` of every other type.

        Raises:
            NotFoundError: If ``ref`` does not exist in its table.
        """
        return await self.neighbors_of(await self.get_entity(ref))

    async def neighbors_of(self, entity: Entity) -> Neighborhood:
        """Neighbors of an already-loaded entity, skipping the existence check."""
        ref = entity.ref
        groups: dict[str, list[Entity]] = {key: [] for key in GROUP_KEYS.values()}
        for other_type in neighbor_types(ref.entity_type):
            groups[GROUP_KEYS[other_type]] = list(
                await maybe_await(self._repository.linked(ref, other_type))
            )

        if self._match_addresses:
            groups["locations"] = await self._with_address_matches(entity, groups["locations"])

        return Neighborhood(**groups)

    async def _with_address_matches(
        self, entity: Entity, locations: list[Entity]
    ) -> list[Entity]:
        """Add locations whose notes mention the entity's address."""
        if isinstance(entity, Person):
            needles = [(a, HOME_CATEGORY) for a in entity.addresses if a]
        elif isinstance(entity, Property):
            needles = [(entity.address, None)] if entity.address else []
        else:
            return locations

        seen = {loc.id for loc in locations}
        merged = list(locations)
        for text, category in needles:
            matches: list[Location] = await maybe_await(
                self._repository.find_locations_by_notes(text, category=category)
            )
            for loc in matches:
                if loc.id not in seen:
                    seen.add(loc.id)
                    merged.append(loc)
        if len(merged) > len(locations):
            logger.debug(
                "Address match added %d locations for %s",
                len(merged) - len(locations), entity.ref,
            )
        return merged


def neighbor_types(entity_type: EntityType) -> list[EntityType]:
    """The three types an entity of ``entity_type`` can be related to."""
    return [t for t in TYPE_ORDER if t != entity_type]
