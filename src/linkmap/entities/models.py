"""Entity data models.

The four entity kinds form a tagged union discriminated by ``entity_type``,
so the resolver and projector can dispatch on the tag instead of probing
for fields.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter

from linkmap.core.types import EntityRef, EntityType


class _EntityBase(BaseModel):
    id: int

    @property
    def ref(self) -> EntityRef:
        return EntityRef(entity_type=self.entity_type, id=self.id)  # type: ignore[attr-defined]


class Person(_EntityBase):
    entity_type: Literal["persona"] = "persona"
    name: str
    national_id: str = ""
    aliases: list[str] = Field(default_factory=list)
    phones: list[str] = Field(default_factory=list)
    addresses: list[str] = Field(default_factory=list)

    @property
    def label(self) -> str:
        return f"{self.name} ({self.national_id})" if self.national_id else self.name


class Vehicle(_EntityBase):
    entity_type: Literal["vehiculo"] = "vehiculo"
    plate: str
    brand: str = ""
    model: str = ""
    color: str = ""
    vehicle_type: str = ""

    @property
    def label(self) -> str:
        desc = " ".join(p for p in (self.brand, self.model, self.color) if p)
        return f"{self.plate} - {desc}" if desc else self.plate


class Property(_EntityBase):
    entity_type: Literal["inmueble"] = "inmueble"
    property_type: str = ""
    address: str
    owner: str = ""

    @property
    def label(self) -> str:
        return f"{self.property_type}: {self.address}" if self.property_type else self.address


class Location(_EntityBase):
    entity_type: Literal["ubicacion"] = "ubicacion"
    lat: float | None = None
    lng: float | None = None
    timestamp: datetime | None = None
    category: str = ""
    notes: str = ""

    @property
    def has_coordinates(self) -> bool:
        return self.lat is not None and self.lng is not None

    @property
    def label(self) -> str:
        if self.has_coordinates:
            coords = f"{self.lat:.5f}, {self.lng:.5f}"
        else:
            coords = "sin coordenadas"
        return f"{self.category or 'Ubicación'} ({coords})"


Entity = Annotated[
    Union[Person, Vehicle, Property, Location],
    Field(discriminator="entity_type"),
]

ENTITY_CLASSES: dict[EntityType, type[_EntityBase]] = {
    EntityType.PERSON: Person,
    EntityType.VEHICLE: Vehicle,
    EntityType.PROPERTY: Property,
    EntityType.LOCATION: Location,
}

_entity_adapter: TypeAdapter[Entity] = TypeAdapter(Entity)


def parse_entity(data: dict) -> Entity:
    """Build the right entity variant from a tagged dict."""
    return _entity_adapter.validate_python(data)
