"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from linkmap.core.types import EntityRef, EntityType
from linkmap.entities.models import Location, Person, Property, Vehicle
from linkmap.entities.store import EntityStore
from linkmap.graph.index import RelationIndex
from linkmap.graph.resolver import GraphResolver


def ref(entity_type: EntityType, entity_id: int) -> EntityRef:
    return EntityRef(entity_type=entity_type, id=entity_id)


P = EntityType.PERSON
V = EntityType.VEHICLE
I = EntityType.PROPERTY  # noqa: E741
U = EntityType.LOCATION


def build_case_store() -> EntityStore:
    """Fixture data covering the reference scenarios.

    - Persona 1 owns Inmueble 3, which sits at Ubicacion 13.
    - Inmueble 30 has no relations at all.
    - Persona 4 was seen at Ubicacion 20 and drives Vehiculo 2, also
      seen at Ubicacion 20 and at Ubicacion 21 (no coordinates).
    - Vehiculo 2 is parked at Inmueble 5, located at Ubicacion 7;
      Persona 6 lives at Inmueble 5.
    """
    store = EntityStore()
    store.add_entity(Person(id=1, name="Pedro Mora", national_id="1-1111-1111"))
    store.add_entity(Person(id=4, name="Ana Solis", national_id="4-4444-4444", aliases=["La Flaca"]))
    store.add_entity(Person(id=6, name="Luis Vega", addresses=["Barrio Escalante 25"]))
    store.add_entity(Vehicle(id=2, plate="ABC-123", brand="Toyota", model="2015", color="Rojo"))
    store.add_entity(Property(id=3, property_type="Terreno", address="San Pedro, calle 5", owner="Pedro Mora"))
    store.add_entity(Property(id=5, property_type="Casa", address="Barrio Escalante 25", owner="Luis Vega"))
    store.add_entity(Property(id=30, property_type="Bodega", address="Pavas"))
    store.add_entity(Location(id=13, lat=9.9833, lng=-84.0833, category="Terreno"))
    store.add_entity(Location(id=20, lat=9.9350, lng=-84.0910, category="Avistamiento"))
    store.add_entity(Location(id=21, category="Avistamiento", notes="Sin GPS"))
    store.add_entity(
        Location(id=7, lat=9.9370, lng=-84.0620, category="Domicilio", notes="Barrio Escalante 25")
    )

    store.link(ref(P, 1), ref(I, 3))
    store.link(ref(I, 3), ref(U, 13))

    store.link(ref(P, 4), ref(U, 20))
    store.link(ref(P, 4), ref(V, 2))
    store.link(ref(V, 2), ref(U, 20))
    store.link(ref(V, 2), ref(U, 21))
    store.link(ref(V, 2), ref(I, 5))
    store.link(ref(I, 5), ref(U, 7))
    store.link(ref(P, 6), ref(I, 5))
    return store


@pytest.fixture
def store() -> EntityStore:
    return build_case_store()


@pytest.fixture
def index(store) -> RelationIndex:
    return RelationIndex(store)


@pytest.fixture
def resolver(index) -> GraphResolver:
    return GraphResolver(index)
