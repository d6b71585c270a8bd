"""Tests for the relation index."""

from __future__ import annotations

import pytest

from linkmap.core.errors import NotFoundError
from linkmap.graph.index import RelationIndex
from tests.conftest import I, P, U, V, ref


class TestRelationIndex:
    async def test_neighbors_partitioned_by_type(self, index):
        hood = await index.neighbors(ref(V, 2))
        assert [e.id for e in hood.persons] == [4]
        assert hood.vehicles == []
        assert [e.id for e in hood.properties] == [5]
        assert [e.id for e in hood.locations] == [20, 21]

    async def test_reverse_direction(self, index):
        hood = await index.neighbors(ref(U, 13))
        assert [e.id for e in hood.properties] == [3]
        assert hood.persons == [] and hood.vehicles == []

    async def test_isolated_entity_has_empty_lists(self, index):
        hood = await index.neighbors(ref(I, 30))
        assert hood.persons == []
        assert hood.vehicles == []
        assert hood.properties == []
        assert hood.locations == []
        assert len(hood) == 0

    async def test_missing_entity_raises_not_found(self, index):
        with pytest.raises(NotFoundError) as exc_info:
            await index.neighbors(ref(P, 999))
        assert exc_info.value.ref == ref(P, 999)

    async def test_all_in_canonical_order(self, index):
        hood = await index.neighbors(ref(P, 4))
        assert [str(e.ref) for e in hood.all()] == ["vehiculo:2", "ubicacion:20"]


class TestAddressMatching:
    async def test_disabled_by_default(self, store):
        hood = await RelationIndex(store).neighbors(ref(P, 6))
        assert hood.locations == []

    async def test_person_home_address_matches_domicilio(self, store):
        hood = await RelationIndex(store, match_addresses=True).neighbors(ref(P, 6))
        assert [e.id for e in hood.locations] == [7]

    async def test_property_address_not_duplicated(self, store):
        hood = await RelationIndex(store, match_addresses=True).neighbors(ref(I, 5))
        assert [e.id for e in hood.locations] == [7]
