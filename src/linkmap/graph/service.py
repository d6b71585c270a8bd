"""Relationship service: wires index, resolver, projector and annotator."""

from __future__ import annotations

from typing import Any

from linkmap.core.config import Settings
from linkmap.core.types import parse_ref
from linkmap.export.models import ExportBundle
from linkmap.export.renderer import build_export_bundle
from linkmap.graph.index import RelationIndex
from linkmap.graph.markers import project
from linkmap.graph.models import AugmentedResult, Neighborhood, OverrideRule
from linkmap.graph.overrides import annotate, load_override_rules
from linkmap.graph.resolver import GraphResolver
from linkmap.graph.views import MapView, build_map_view
from linkmap.repositories.protocols import EntityRepository


class RelationshipService:
    """Entry point used by the rendering and export layers.

    Holds no per-request state; every call resolves from the store afresh.
    """

    def __init__(
        self,
        repository: EntityRepository,
        settings: Settings | None = None,
        override_rules: list[OverrideRule] | None = None,
    ) -> None:
        if settings is None:
            settings = Settings()
        self._index = RelationIndex(
            repository, match_addresses=settings.resolver.match_addresses
        )
        self._resolver = GraphResolver(self._index, max_depth=settings.resolver.max_depth)
        if override_rules is None:
            override_rules = load_override_rules(settings.overrides.rules_path or None)
        self._rules = override_rules

    @property
    def resolver(self) -> GraphResolver:
        return self._resolver

    @property
    def override_rules(self) -> list[OverrideRule]:
        return list(self._rules)

    async def neighbors(self, seed_type: Any, seed_id: Any) -> Neighborhood:
        return await self._index.neighbors(parse_ref(seed_type, seed_id))

    async def augmented(
        self, seed_type: Any, seed_id: Any, max_depth: int | None = None
    ) -> AugmentedResult:
        result = await self._resolver.resolve(seed_type, seed_id, max_depth=max_depth)
        return annotate(result, project(result), self._rules)

    async def map_view(
        self, seed_type: Any, seed_id: Any, max_depth: int | None = None
    ) -> MapView:
        return build_map_view(await self.augmented(seed_type, seed_id, max_depth))

    async def export(
        self, seed_type: Any, seed_id: Any, max_depth: int | None = None
    ) -> ExportBundle:
        augmented = await self.augmented(seed_type, seed_id, max_depth)
        return build_export_bundle(augmented.result)
