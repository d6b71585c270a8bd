"""Tests for export bundle building and rendering."""

from __future__ import annotations

import json

import pytest

from linkmap.core.types import Tier
from linkmap.export.renderer import ExportRenderer, build_export_bundle
from linkmap.graph.models import PartialResolutionWarning
from tests.conftest import V, ref


@pytest.fixture
def renderer():
    return ExportRenderer()


@pytest.fixture
async def bundle(resolver):
    return build_export_bundle(await resolver.resolve("persona", 4))


class TestBuildExportBundle:
    async def test_grouped_by_type(self, bundle):
        assert bundle.persons == []
        assert [r.entity.id for r in bundle.vehicles] == [2]
        assert [r.entity.id for r in bundle.properties] == [5]
        assert sorted(r.entity.id for r in bundle.locations) == [7, 20, 21]

    async def test_direct_rows_have_no_via(self, bundle):
        vehicle = bundle.vehicles[0]
        assert vehicle.tier == Tier.DIRECT
        assert vehicle.via_label == ""

    async def test_via_label_joins_entity_labels(self, bundle):
        prop = bundle.properties[0]
        assert prop.tier == Tier.RELATED
        assert prop.via_label == "ABC-123 - Toyota 2015 Rojo"
        deep = next(r for r in bundle.locations if r.entity.id == 7)
        assert deep.via_label == "ABC-123 - Toyota 2015 Rojo → Casa: Barrio Escalante 25"

    async def test_partial_flag(self, resolver):
        result = await resolver.resolve("persona", 4)
        assert build_export_bundle(result).partial is False
        result.warnings.append(PartialResolutionWarning(entity=ref(V, 2), detail="timeout"))
        assert build_export_bundle(result).partial is True


class TestExportRenderer:
    async def test_render_json(self, renderer, bundle):
        data = json.loads(renderer.render_json(bundle))
        assert data["seed"]["entity_type"] == "persona"
        assert data["seed"]["name"] == "Ana Solis"
        assert data["vehicles"][0]["entity"]["plate"] == "ABC-123"
        assert data["vehicles"][0]["tier"] == "direct"
        assert "generated_at" in data
