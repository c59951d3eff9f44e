import pytest
from sqlalchemy.exc import IntegrityError

from service import species_service
from service.repository_service import RecordValidationError


def test_insert_and_get_by_code(session):
    assert species_service.insert_species(session, {"code": "elf", "name": "Elf", "speed": 30}) == 1

    elf = species_service.get_by_code(session, {"code": "elf"})
    assert elf["name"] == "Elf"
    assert elf["speed"] == 30
    assert elf["description"] is None
    assert elf["created_at"] is not None


def test_get_by_code_missing_returns_none(session):
    assert species_service.get_by_code(session, {"code": "nope"}) is None


def test_get_all_ordered_by_name(session):
    species_service.insert_species(session, {"code": "orc", "name": "Orc"})
    species_service.insert_species(session, {"code": "dwarf", "name": "Dwarf"})
    species_service.insert_species(session, {"code": "elf", "name": "Elf"})

    assert [s["code"] for s in species_service.get_all(session)] == ["dwarf", "elf", "orc"]


def test_get_all_empty(session):
    assert species_service.get_all(session) == []


def test_update_only_provided_fields(session):
    species_service.insert_species(session, {"code": "elf", "name": "Elf", "size": "medium"})

    assert species_service.update_species(session, {"code": "elf", "speed": 35}) == 1

    elf = species_service.get_by_code(session, {"code": "elf"})
    assert elf["speed"] == 35
    assert elf["size"] == "medium"
    assert elf["name"] == "Elf"


def test_update_can_clear_optional_field(session):
    species_service.insert_species(session, {"code": "elf", "name": "Elf", "size": "medium"})

    species_service.update_species(session, {"code": "elf", "size": None})

    assert species_service.get_by_code(session, {"code": "elf"})["size"] is None


def test_update_unknown_code_changes_nothing(session):
    assert species_service.update_species(session, {"code": "nope", "name": "Nope"}) == 0


def test_delete(session):
    species_service.insert_species(session, {"code": "elf", "name": "Elf"})

    assert species_service.delete_species(session, {"code": "elf"}) == 1
    assert species_service.delete_species(session, {"code": "elf"}) == 0
    assert species_service.get_by_code(session, {"code": "elf"}) is None


def test_duplicate_code_is_integrity_error(session):
    species_service.insert_species(session, {"code": "elf", "name": "Elf"})

    with pytest.raises(IntegrityError):
        species_service.insert_species(session, {"code": "elf", "name": "High Elf"})

    # the session is usable after the failed statement
    assert species_service.get_by_code(session, {"code": "elf"})["name"] == "Elf"


@pytest.mark.parametrize(
    "species",
    [
        {"code": "elf"},
        {"name": "Elf"},
        {"code": "", "name": "Elf"},
        {"code": "elf", "name": "Elf", "speed": "30"},
        {"code": "elf", "name": "Elf", "wings": True},
        {"code": "elf", "name": None},
    ],
)
def test_insert_rejects_bad_shape(session, species):
    with pytest.raises(RecordValidationError):
        species_service.insert_species(session, species)


def test_update_rejects_null_name(session):
    species_service.insert_species(session, {"code": "elf", "name": "Elf"})

    with pytest.raises(RecordValidationError):
        species_service.update_species(session, {"code": "elf", "name": None})


def test_update_without_fields_is_rejected(session):
    with pytest.raises(RecordValidationError, match="no fields"):
        species_service.update_species(session, {"code": "elf"})
