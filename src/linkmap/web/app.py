"""FastAPI application for linkmap.

Exposes the relationship engine as JSON endpoints for the map/table UI
and the export layer.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from linkmap import __version__
from linkmap.core.config import Settings
from linkmap.db.engine import DatabaseManager
from linkmap.graph.models import OverrideRule
from linkmap.graph.service import RelationshipService
from linkmap.repositories.postgres.entities import PostgresEntityRepository
from linkmap.repositories.protocols import EntityRepository
from linkmap.web.graph_router import router as graph_router


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    service: str
    version: str = __version__


def create_app(
    settings: Settings | None = None,
    repository: EntityRepository | None = None,
    override_rules: list[OverrideRule] | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Uses the factory pattern so tests can create isolated app instances
    with an in-memory entity store.

    Args:
        settings: Application settings. Defaults to Settings().
        repository: Entity store. Defaults to the SQL repository built
            from ``settings.database``.
        override_rules: Optional rules; loaded from config when omitted.

    Returns:
        A configured FastAPI instance.
    """
    if settings is None:
        settings = Settings()

    logging.getLogger("linkmap").setLevel(settings.log_level.upper())

    app = FastAPI(
        title="linkmap",
        description="Relationship resolution for persons, vehicles, properties and locations",
        version=__version__,
    )

    # CORS for development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    db_manager: DatabaseManager | None = None
    if repository is None:
        db_manager = DatabaseManager.from_config(settings.database)
        repository = PostgresEntityRepository(db_manager)

    app.state.settings = settings
    app.state.db_manager = db_manager
    app.state.entity_repository = repository
    app.state.relationship_service = RelationshipService(
        repository,
        settings=settings,
        override_rules=override_rules,
    )

    app.include_router(graph_router)

    @app.get("/api/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", service="linkmap")

    return app
