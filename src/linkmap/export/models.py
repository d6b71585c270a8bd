"""Export data models."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field

from linkmap.core.types import Tier
from linkmap.entities.models import Entity


class ExportRow(BaseModel):
    """One resolved entity as listed in a generated document."""

    entity: Entity
    tier: Tier
    via_label: str = ""


class ExportBundle(BaseModel):
    """Resolved set flattened into per-type lists for document generation."""

    seed: Entity
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    persons: list[ExportRow] = Field(default_factory=list)
    vehicles: list[ExportRow] = Field(default_factory=list)
    properties: list[ExportRow] = Field(default_factory=list)
    locations: list[ExportRow] = Field(default_factory=list)
    partial: bool = False
