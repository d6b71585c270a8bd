"""PostgreSQL entity repository."""

from __future__ import annotations

from typing import Any

from sqlalchemy import delete, select

from linkmap.core.types import EntityRef, EntityType
from linkmap.db.engine import DatabaseManager
from linkmap.db.models import (
    ENTITY_ROWS,
    FK_COLUMNS,
    JUNCTION_ROWS,
    LocationRow,
    PersonRow,
    PropertyRow,
    VehicleRow,
)
from linkmap.entities.models import Entity, Location, Person, Property, Vehicle
from linkmap.entities.store import junction_key


class PostgresEntityRepository:
    """Postgres-backed entity and junction-table storage.

    Junction rows are stored once per pair; lookups filter on whichever
    foreign-key column belongs to the queried entity's type.
    """

    def __init__(self, db: DatabaseManager) -> None:
        self._db = db

    async def add_entity(self, entity: Entity) -> Entity:
        row_cls = ENTITY_ROWS[entity.ref.entity_type]
        values = self._entity_to_columns(entity)
        async with self._db.session() as db:
            existing = await db.get(row_cls, entity.id)
            if existing:
                for column, value in values.items():
                    setattr(existing, column, value)
            else:
                db.add(row_cls(id=entity.id, **values))
            await db.commit()
        return entity

    async def get_entity(self, ref: EntityRef) -> Entity | None:
        async with self._db.session() as db:
            row = await db.get(ENTITY_ROWS[ref.entity_type], ref.id)
            if row is None:
                return None
            return self._row_to_entity(row)

    async def list_entities(self, entity_type: EntityType) -> list[Entity]:
        row_cls = ENTITY_ROWS[entity_type]
        async with self._db.session() as db:
            result = await db.execute(select(row_cls).order_by(row_cls.id))
            return [self._row_to_entity(r) for r in result.scalars().all()]

    async def link(self, a: EntityRef, b: EntityRef) -> None:
        key = junction_key(a.entity_type, b.entity_type)
        row_cls = JUNCTION_ROWS[key]
        values = {FK_COLUMNS[a.entity_type]: a.id, FK_COLUMNS[b.entity_type]: b.id}
        async with self._db.session() as db:
            for ref in (a, b):
                if await db.get(ENTITY_ROWS[ref.entity_type], ref.id) is None:
                    raise KeyError(f"Entity {ref} not found")
            stmt = select(row_cls)
            for column, value in values.items():
                stmt = stmt.where(getattr(row_cls, column) == value)
            result = await db.execute(stmt)
            if result.scalar_one_or_none() is None:
                db.add(row_cls(**values))
                await db.commit()

    async def unlink(self, a: EntityRef, b: EntityRef) -> bool:
        row_cls = JUNCTION_ROWS[junction_key(a.entity_type, b.entity_type)]
        async with self._db.session() as db:
            result = await db.execute(
                delete(row_cls)
                .where(getattr(row_cls, FK_COLUMNS[a.entity_type]) == a.id)
                .where(getattr(row_cls, FK_COLUMNS[b.entity_type]) == b.id)
            )
            await db.commit()
            return result.rowcount > 0

    async def linked(self, ref: EntityRef, other_type: EntityType) -> list[Entity]:
        junction = JUNCTION_ROWS[junction_key(ref.entity_type, other_type)]
        own_col = getattr(junction, FK_COLUMNS[ref.entity_type])
        other_col = getattr(junction, FK_COLUMNS[other_type])
        row_cls = ENTITY_ROWS[other_type]
        async with self._db.session() as db:
            result = await db.execute(
                select(row_cls)
                .join(junction, other_col == row_cls.id)
                .where(own_col == ref.id)
                .order_by(row_cls.id)
            )
            return [self._row_to_entity(r) for r in result.scalars().all()]

    async def find_locations_by_notes(
        self, text: str, category: str | None = None
    ) -> list[Location]:
        if not text:
            return []
        async with self._db.session() as db:
            needle = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
            stmt = select(LocationRow).where(
                LocationRow.observaciones.ilike(f"%{needle}%", escape="\\")
            )
            if category is not None:
                stmt = stmt.where(LocationRow.tipo == category)
            result = await db.execute(stmt.order_by(LocationRow.id))
            return [self._row_to_entity(r) for r in result.scalars().all()]

    # -- Row mapping --

    @staticmethod
    def _entity_to_columns(entity: Entity) -> dict[str, Any]:
        if isinstance(entity, Person):
            return {
                "nombre": entity.name,
                "identificacion": entity.national_id,
                "alias": list(entity.aliases),
                "telefonos": list(entity.phones),
                "domicilios": list(entity.addresses),
            }
        if isinstance(entity, Vehicle):
            return {
                "placa": entity.plate,
                "marca": entity.brand,
                "modelo": entity.model,
                "color": entity.color,
                "tipo": entity.vehicle_type,
            }
        if isinstance(entity, Property):
            return {
                "tipo": entity.property_type,
                "propietario": entity.owner,
                "direccion": entity.address,
            }
        if isinstance(entity, Location):
            return {
                "latitud": entity.lat,
                "longitud": entity.lng,
                "tipo": entity.category,
                "fecha": entity.timestamp,
                "observaciones": entity.notes,
            }
        raise TypeError(f"Unsupported entity {entity!r}")

    @staticmethod
    def _row_to_entity(row: Any) -> Entity:
        if isinstance(row, PersonRow):
            return Person(
                id=row.id,
                name=row.nombre,
                national_id=row.identificacion or "",
                aliases=row.alias or [],
                phones=row.telefonos or [],
                addresses=row.domicilios or [],
            )
        if isinstance(row, VehicleRow):
            return Vehicle(
                id=row.id,
                plate=row.placa,
                brand=row.marca or "",
                model=row.modelo or "",
                color=row.color or "",
                vehicle_type=row.tipo or "",
            )
        if isinstance(row, PropertyRow):
            return Property(
                id=row.id,
                property_type=row.tipo or "",
                address=row.direccion,
                owner=row.propietario or "",
            )
        if isinstance(row, LocationRow):
            return Location(
                id=row.id,
                lat=row.latitud,
                lng=row.longitud,
                timestamp=row.fecha,
                category=row.tipo or "",
                notes=row.observaciones or "",
            )
        raise TypeError(f"Unsupported row {row!r}")
