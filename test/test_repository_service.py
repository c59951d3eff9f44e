import pytest
from sqlalchemy import insert, literal_column, select, text
from sqlalchemy.exc import IntegrityError

from model.base import CodeParams
from model.species import Species, SpeciesUpdate
from service.repository_service import (
    RecordValidationError,
    changes,
    execute,
    insert_returning,
    query,
    query_one,
    validate,
)

species_table = Species.__table__


def test_query_returns_dicts(session):
    execute(session, insert(species_table).values(code="elf", name="Elf"))

    rows = query(session, select(species_table.c.code, species_table.c.name))

    assert rows == [{"code": "elf", "name": "Elf"}]


def test_query_one_returns_none_when_empty(session):
    assert query_one(session, select(species_table)) is None


def test_labels_become_keys(session):
    execute(session, insert(species_table).values(code="elf", name="Elf"))

    row = query_one(session, select(species_table.c.name.label("species_name")))

    assert row == {"species_name": "Elf"}


def test_execute_returns_row_count(session):
    execute(session, insert(species_table).values([
        {"code": "elf", "name": "Elf"},
        {"code": "orc", "name": "Orc"},
    ]))

    assert execute(session, species_table.delete()) == 2


def test_insert_returning_gives_server_defaults(session):
    row = insert_returning(
        session,
        insert(species_table).values(code="elf", name="Elf").returning(*species_table.c),
    )

    assert row["code"] == "elf"
    assert row["created_at"] is not None


def test_database_errors_propagate_and_roll_back(session):
    execute(session, insert(species_table).values(code="elf", name="Elf"))

    with pytest.raises(IntegrityError):
        execute(session, insert(species_table).values(code="elf", name="Elf"))

    assert query(session, select(literal_column("1").label("one"))) == [{"one": 1}]


def test_foreign_keys_are_enforced(session):
    with pytest.raises(IntegrityError):
        session.exec(text(
            "INSERT INTO skills (code, name, attribute_code) VALUES ('stealth', 'Stealth', 'luck')"
        ))


def test_validate_returns_record():
    assert validate(CodeParams, {"code": "elf"}).code == "elf"


def test_validate_collects_field_errors():
    with pytest.raises(RecordValidationError) as excinfo:
        validate(SpeciesUpdate, {"code": "", "speed": "fast", "colour": "green"})

    locations = {error["loc"][0] for error in excinfo.value.errors}
    assert locations == {"code", "speed", "colour"}
    assert "Invalid SpeciesUpdate" in str(excinfo.value)


def test_validate_none_params():
    with pytest.raises(RecordValidationError):
        validate(CodeParams, None)


def test_validation_error_is_value_error():
    assert issubclass(RecordValidationError, ValueError)


def test_changes_excludes_keys_and_unset_fields():
    record = validate(SpeciesUpdate, {"code": "elf", "speed": 35, "size": None})

    assert changes(record, "code") == {"speed": 35, "size": None}


def test_changes_requires_a_field():
    with pytest.raises(RecordValidationError):
        changes(validate(SpeciesUpdate, {"code": "elf"}), "code")
