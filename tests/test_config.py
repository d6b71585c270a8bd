"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from linkmap.core.config import ResolverConfig, Settings
from linkmap.graph import overrides
from linkmap.graph.service import RelationshipService
from tests.conftest import build_case_store


def test_defaults():
    settings = Settings()
    assert settings.resolver.max_depth == 2
    assert settings.resolver.match_addresses is False
    assert settings.database.url.startswith("postgresql+asyncpg://")


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("LINKMAP_RESOLVER_MAX_DEPTH", "3")
    monkeypatch.setenv("LINKMAP_RESOLVER_MATCH_ADDRESSES", "true")
    monkeypatch.setenv("LINKMAP_DB_URL", "sqlite+aiosqlite:///:memory:")
    settings = Settings()
    assert settings.resolver.max_depth == 3
    assert settings.resolver.match_addresses is True
    assert settings.database.url == "sqlite+aiosqlite:///:memory:"


def test_depth_must_be_positive():
    with pytest.raises(ValidationError):
        ResolverConfig(max_depth=0)


async def test_service_uses_configured_depth(monkeypatch):
    monkeypatch.setenv("LINKMAP_RESOLVER_MAX_DEPTH", "3")
    service = RelationshipService(build_case_store(), settings=Settings(), override_rules=[])
    view = await service.map_view("persona", 4)
    assert [item.entity.id for item in view.related.persons] == [6]


def test_default_rules_path_independent_of_cwd(tmp_path, monkeypatch):
    path = tmp_path / "override_rules.yml"
    path.write_text("rules:\n  - {type_a: persona, id_a: 1, type_b: inmueble, id_b: 3}\n")
    monkeypatch.setattr(overrides, "_DEFAULT_CONFIG_PATH", path)
    monkeypatch.delenv("LINKMAP_OVERRIDES_RULES_PATH", raising=False)
    workdir = tmp_path / "elsewhere"
    workdir.mkdir()
    monkeypatch.chdir(workdir)

    settings = Settings()
    assert settings.overrides.rules_path == ""
    service = RelationshipService(build_case_store(), settings=settings)
    assert [r.ref_b.id for r in service.override_rules] == [3]


async def test_service_loads_rules_from_settings(tmp_path, monkeypatch):
    path = tmp_path / "rules.yml"
    path.write_text("rules:\n  - {type_a: persona, id_a: 4, type_b: inmueble, id_b: 5}\n")
    monkeypatch.setenv("LINKMAP_OVERRIDES_RULES_PATH", str(path))
    service = RelationshipService(build_case_store(), settings=Settings())
    assert len(service.override_rules) == 1
    augmented = await service.augmented("persona", 4)
    assert len(augmented.forced_edges) == 1
