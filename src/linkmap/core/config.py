"""Application configuration loaded from environment and config files."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class DatabaseConfig(BaseSettings):
    """Entity store database configuration."""

    model_config = {"env_prefix": "LINKMAP_DB_"}

    url: str = "postgresql+asyncpg://localhost/linkmap"
    echo: bool = False
    pool_size: int = 5


class ResolverConfig(BaseSettings):
    """Relationship resolution configuration."""

    model_config = {"env_prefix": "LINKMAP_RESOLVER_"}

    max_depth: int = Field(default=2, ge=1)
    match_addresses: bool = False


class OverrideConfig(BaseSettings):
    """Special-case override rules configuration."""

    model_config = {"env_prefix": "LINKMAP_OVERRIDES_"}

    # Empty means the repo-level config/override_rules.yml
    rules_path: str = ""


class Settings(BaseSettings):
    """Root application settings."""

    model_config = {"env_prefix": "LINKMAP_"}

    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    resolver: ResolverConfig = Field(default_factory=ResolverConfig)
    overrides: OverrideConfig = Field(default_factory=OverrideConfig)
