"""SQLAlchemy ORM models for the entity and junction tables."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import JSONB as PG_JSONB
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import JSON

from linkmap.core.types import EntityType
from linkmap.db.base import Base


def _jsonb() -> type:
    """Return JSONB for Postgres, plain JSON for SQLite."""
    return JSON().with_variant(PG_JSONB(), "postgresql")


# ---------------------------------------------------------------------------
# Entity tables
# ---------------------------------------------------------------------------


class PersonRow(Base):
    __tablename__ = "personas"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nombre: Mapped[str] = mapped_column(String(256))
    identificacion: Mapped[str] = mapped_column(String(64), default="")
    alias: Mapped[list | None] = mapped_column(_jsonb(), nullable=True)
    telefonos: Mapped[list | None] = mapped_column(_jsonb(), nullable=True)
    domicilios: Mapped[list | None] = mapped_column(_jsonb(), nullable=True)


class VehicleRow(Base):
    __tablename__ = "vehiculos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    placa: Mapped[str] = mapped_column(String(32))
    marca: Mapped[str] = mapped_column(String(128), default="")
    modelo: Mapped[str | None] = mapped_column(String(128), nullable=True)
    color: Mapped[str] = mapped_column(String(64), default="")
    tipo: Mapped[str] = mapped_column(String(64), default="")


class PropertyRow(Base):
    __tablename__ = "inmuebles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    tipo: Mapped[str] = mapped_column(String(64), default="")
    propietario: Mapped[str] = mapped_column(String(256), default="")
    direccion: Mapped[str] = mapped_column(Text)


class LocationRow(Base):
    __tablename__ = "ubicaciones"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    latitud: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitud: Mapped[float | None] = mapped_column(Float, nullable=True)
    tipo: Mapped[str] = mapped_column(String(64), default="")
    fecha: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    observaciones: Mapped[str | None] = mapped_column(Text, nullable=True)


# ---------------------------------------------------------------------------
# Junction tables (one per unordered pair of distinct types)
# ---------------------------------------------------------------------------


class PersonVehicleRow(Base):
    __tablename__ = "personas_vehiculos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    persona_id: Mapped[int] = mapped_column(ForeignKey("personas.id", ondelete="CASCADE"))
    vehiculo_id: Mapped[int] = mapped_column(ForeignKey("vehiculos.id", ondelete="CASCADE"))

    __table_args__ = (
        UniqueConstraint("persona_id", "vehiculo_id"),
        Index("ix_personas_vehiculos_vehiculo", "vehiculo_id"),
    )


class PersonPropertyRow(Base):
    __tablename__ = "personas_inmuebles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    persona_id: Mapped[int] = mapped_column(ForeignKey("personas.id", ondelete="CASCADE"))
    inmueble_id: Mapped[int] = mapped_column(ForeignKey("inmuebles.id", ondelete="CASCADE"))

    __table_args__ = (
        UniqueConstraint("persona_id", "inmueble_id"),
        Index("ix_personas_inmuebles_inmueble", "inmueble_id"),
    )


class PersonLocationRow(Base):
    __tablename__ = "personas_ubicaciones"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    persona_id: Mapped[int] = mapped_column(ForeignKey("personas.id", ondelete="CASCADE"))
    ubicacion_id: Mapped[int] = mapped_column(ForeignKey("ubicaciones.id", ondelete="CASCADE"))

    __table_args__ = (
        UniqueConstraint("persona_id", "ubicacion_id"),
        Index("ix_personas_ubicaciones_ubicacion", "ubicacion_id"),
    )


class VehiclePropertyRow(Base):
    __tablename__ = "vehiculos_inmuebles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    vehiculo_id: Mapped[int] = mapped_column(ForeignKey("vehiculos.id", ondelete="CASCADE"))
    inmueble_id: Mapped[int] = mapped_column(ForeignKey("inmuebles.id", ondelete="CASCADE"))

    __table_args__ = (
        UniqueConstraint("vehiculo_id", "inmueble_id"),
        Index("ix_vehiculos_inmuebles_inmueble", "inmueble_id"),
    )


class VehicleLocationRow(Base):
    __tablename__ = "vehiculos_ubicaciones"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    vehiculo_id: Mapped[int] = mapped_column(ForeignKey("vehiculos.id", ondelete="CASCADE"))
    ubicacion_id: Mapped[int] = mapped_column(ForeignKey("ubicaciones.id", ondelete="CASCADE"))

    __table_args__ = (
        UniqueConstraint("vehiculo_id", "ubicacion_id"),
        Index("ix_vehiculos_ubicaciones_ubicacion", "ubicacion_id"),
    )


class PropertyLocationRow(Base):
    __tablename__ = "inmuebles_ubicaciones"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    inmueble_id: Mapped[int] = mapped_column(ForeignKey("inmuebles.id", ondelete="CASCADE"))
    ubicacion_id: Mapped[int] = mapped_column(ForeignKey("ubicaciones.id", ondelete="CASCADE"))

    __table_args__ = (
        UniqueConstraint("inmueble_id", "ubicacion_id"),
        Index("ix_inmuebles_ubicaciones_ubicacion", "ubicacion_id"),
    )


ENTITY_ROWS: dict[EntityType, type[Base]] = {
    EntityType.PERSON: PersonRow,
    EntityType.VEHICLE: VehicleRow,
    EntityType.PROPERTY: PropertyRow,
    EntityType.LOCATION: LocationRow,
}

# Junction row class keyed by canonical (typeA, typeB), see entities.store.junction_key
JUNCTION_ROWS: dict[tuple[EntityType, EntityType], type[Base]] = {
    (EntityType.PERSON, EntityType.VEHICLE): PersonVehicleRow,
    (EntityType.PERSON, EntityType.PROPERTY): PersonPropertyRow,
    (EntityType.PERSON, EntityType.LOCATION): PersonLocationRow,
    (EntityType.VEHICLE, EntityType.PROPERTY): VehiclePropertyRow,
    (EntityType.VEHICLE, EntityType.LOCATION): VehicleLocationRow,
    (EntityType.PROPERTY, EntityType.LOCATION): PropertyLocationRow,
}

# Foreign-key column name per entity type inside junction tables
FK_COLUMNS: dict[EntityType, str] = {
    EntityType.PERSON: "persona_id",
    EntityType.VEHICLE: "vehiculo_id",
    EntityType.PROPERTY: "inmueble_id",
    EntityType.LOCATION: "ubicacion_id",
}
