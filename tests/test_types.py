"""Tests for entity references and input validation."""

from __future__ import annotations

import pytest

from linkmap.core.errors import InvalidReferenceError
from linkmap.core.types import EntityRef, EntityType, parse_ref
from linkmap.entities.models import Location, Person, Vehicle, parse_entity


class TestParseRef:
    def test_singular_tags(self):
        assert parse_ref("persona", 1) == EntityRef(entity_type=EntityType.PERSON, id=1)
        assert parse_ref("vehiculo", 2).entity_type == EntityType.VEHICLE
        assert parse_ref("inmueble", 3).entity_type == EntityType.PROPERTY
        assert parse_ref("ubicacion", 4).entity_type == EntityType.LOCATION

    def test_plural_and_case_insensitive(self):
        assert parse_ref("Personas", 1).entity_type == EntityType.PERSON
        assert parse_ref("UBICACIONES", 9).entity_type == EntityType.LOCATION

    def test_numeric_string_id(self):
        assert parse_ref("persona", "42").id == 42

    def test_unknown_type_rejected(self):
        with pytest.raises(InvalidReferenceError) as exc_info:
            parse_ref("desconocido", 1)
        assert exc_info.value.value == "desconocido"

    @pytest.mark.parametrize("bad_id", ["abc", "1.5", "", None, True, -1, 2.5, [1], "²", "١٢"])
    def test_non_numeric_id_rejected(self, bad_id):
        with pytest.raises(InvalidReferenceError):
            parse_ref("persona", bad_id)

    def test_invalid_reference_is_value_error(self):
        with pytest.raises(ValueError):
            parse_ref(7, 1)


class TestEntityRef:
    def test_ids_unique_only_within_type(self):
        assert EntityRef(entity_type="persona", id=1) != EntityRef(entity_type="vehiculo", id=1)

    def test_hashable(self):
        refs = {EntityRef(entity_type="persona", id=1), EntityRef(entity_type="persona", id=1)}
        assert len(refs) == 1

    def test_str(self):
        assert str(EntityRef(entity_type="inmueble", id=3)) == "inmueble:3"


class TestEntities:
    def test_ref_carries_type_tag(self):
        person = Person(id=1, name="Pedro")
        assert person.ref == EntityRef(entity_type=EntityType.PERSON, id=1)

    def test_parse_entity_dispatches_on_tag(self):
        entity = parse_entity({"entity_type": "vehiculo", "id": 2, "plate": "ABC-123"})
        assert isinstance(entity, Vehicle)
        assert entity.plate == "ABC-123"

    def test_parse_entity_unknown_tag(self):
        with pytest.raises(ValueError):
            parse_entity({"entity_type": "barco", "id": 1})

    def test_location_coordinates(self):
        assert Location(id=1, lat=9.9, lng=-84.0).has_coordinates
        assert not Location(id=2, lat=9.9).has_coordinates

    def test_labels(self):
        assert Person(id=1, name="Pedro", national_id="1-1111").label == "Pedro (1-1111)"
        assert Vehicle(id=2, plate="ABC-123", brand="Toyota").label == "ABC-123 - Toyota"
