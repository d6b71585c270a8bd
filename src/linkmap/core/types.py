"""Core type definitions shared across all linkmap modules."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict

from linkmap.core.errors import InvalidReferenceError


class EntityType(StrEnum):
    """Entity kinds. Values are the wire tags used by clients."""

    PERSON = "persona"
    VEHICLE = "vehiculo"
    PROPERTY = "inmueble"
    LOCATION = "ubicacion"


class Tier(StrEnum):
    """Relation tier of a resolved entity or marker."""

    DIRECT = "direct"
    RELATED = "related"


# Table names from the records system are accepted as aliases.
_TYPE_ALIASES: dict[str, EntityType] = {
    "personas": EntityType.PERSON,
    "vehiculos": EntityType.VEHICLE,
    "inmuebles": EntityType.PROPERTY,
    "ubicaciones": EntityType.LOCATION,
}

# Canonical ordering used for junction tables and grouped output.
TYPE_ORDER: tuple[EntityType, ...] = (
    EntityType.PERSON,
    EntityType.VEHICLE,
    EntityType.PROPERTY,
    EntityType.LOCATION,
)

# Plural keys of the four-way partition consumed by the map/table UI.
GROUP_KEYS: dict[EntityType, str] = {
    EntityType.PERSON: "persons",
    EntityType.VEHICLE: "vehicles",
    EntityType.PROPERTY: "properties",
    EntityType.LOCATION: "locations",
}


class EntityRef(BaseModel):
    """Cross-type identity of an entity: ids are unique only within a type."""

    model_config = ConfigDict(frozen=True)

    entity_type: EntityType
    id: int

    @property
    def key(self) -> tuple[EntityType, int]:
        return (self.entity_type, self.id)

    def __str__(self) -> str:
        return f"{self.entity_type.value}:{self.id}"


def parse_entity_type(value: Any) -> EntityType:
    """Normalize a type tag, accepting plural table names and any casing."""
    if isinstance(value, EntityType):
        return value
    if not isinstance(value, str):
        raise InvalidReferenceError(f"Entity type must be a string, got {value!r}", value=value)
    tag = value.strip().lower()
    if tag in _TYPE_ALIASES:
        return _TYPE_ALIASES[tag]
    try:
        return EntityType(tag)
    except ValueError:
        raise InvalidReferenceError(
            f"Unknown entity type {value!r}. "
            f"Expected one of: {[t.value for t in EntityType]}",
            value=value,
        ) from None


def parse_entity_id(value: Any) -> int:
    """Normalize an entity id. Only non-negative integers are valid."""
    if isinstance(value, bool):
        raise InvalidReferenceError(f"Invalid entity id {value!r}", value=value)
    if isinstance(value, int):
        entity_id = value
    elif isinstance(value, float) and value.is_integer():
        entity_id = int(value)
    elif isinstance(value, str) and value.strip().isascii() and value.strip().isdecimal():
        entity_id = int(value.strip())
    else:
        raise InvalidReferenceError(f"Entity id must be numeric, got {value!r}", value=value)
    if entity_id < 0:
        raise InvalidReferenceError(f"Entity id must be non-negative, got {value!r}", value=value)
    return entity_id


def parse_ref(entity_type: Any, entity_id: Any) -> EntityRef:
    """Validate raw seed input and build an EntityRef.

    Raises:
        InvalidReferenceError: If the type tag is unknown or the id is not
            a non-negative integer.
    """
    return EntityRef(
        entity_type=parse_entity_type(entity_type),
        id=parse_entity_id(entity_id),
    )
