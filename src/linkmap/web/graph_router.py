"""FastAPI router for relationship resolution endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Query, Request

from linkmap.core.errors import InvalidReferenceError, NotFoundError
from linkmap.graph.service import RelationshipService

router = APIRouter()


def _service(request: Request) -> RelationshipService:
    service = getattr(request.app.state, "relationship_service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Relationship service not available")
    return service


@router.get("/api/relaciones/{tipo}/{entity_id}")
async def get_relations(
    tipo: str,
    entity_id: str,
    request: Request,
    depth: int | None = Query(default=None, ge=1),
) -> dict[str, Any]:
    """Everything connected to an entity, grouped for the map/table UI."""
    service = _service(request)
    try:
        view = await service.map_view(tipo, entity_id, max_depth=depth)
    except InvalidReferenceError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return view.model_dump(mode="json")


@router.get("/api/relaciones/{tipo}/{entity_id}/export")
async def export_relations(
    tipo: str,
    entity_id: str,
    request: Request,
    depth: int | None = Query(default=None, ge=1),
) -> dict[str, Any]:
    """Resolved set flattened into per-type lists for document generation."""
    service = _service(request)
    try:
        bundle = await service.export(tipo, entity_id, max_depth=depth)
    except InvalidReferenceError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return bundle.model_dump(mode="json")


@router.get("/api/entidades/{tipo}/{entity_id}/vecinos")
async def get_neighbors(tipo: str, entity_id: str, request: Request) -> dict[str, Any]:
    """Direct neighbors of an entity, one list per type."""
    service = _service(request)
    try:
        neighborhood = await service.neighbors(tipo, entity_id)
    except InvalidReferenceError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return neighborhood.model_dump(mode="json")
