import asyncio
import json

import pytest

import server
from service.repository_service import RecordValidationError


@pytest.fixture(autouse=True)
def tool_database(database, seeded, monkeypatch):
    monkeypatch.setattr(server, "database", database)
    return database


def test_tools_are_registered():
    names = {tool.name for tool in asyncio.run(server.mcp.list_tools())}

    assert {
        "list_records", "get_record", "create_record", "update_record", "delete_record",
        "get_character_sheet", "set_character_attribute", "add_character_skill", "roll_dice",
    } <= names


def test_schema_resource_describes_tables():
    schema = {table["table_name"]: table for table in json.loads(server.get_schema())}

    assert "characters" in schema
    columns = {column["name"]: column for column in schema["characters"]["columns"]}
    assert columns["id"]["primary_key"] is True
    assert columns["species_code"]["foreign_keys"] == ["species.code"]


def test_list_and_get_records():
    species = json.loads(server.list_records("species"))

    assert len(species) == 10
    assert json.loads(server.get_record("species", "elf"))["name"] == "Elf"
    assert json.loads(server.get_record("species", "kobold")) is None


def test_unknown_table():
    with pytest.raises(ValueError, match="Unknown table"):
        server.list_records("spells")


def test_create_update_delete_code_record():
    created = json.loads(server.create_record("species", {"code": "kobold", "name": "Kobold"}))
    assert created["code"] == "kobold"

    updated = json.loads(server.update_record("species", "kobold", {"speed": 30}))
    assert updated["speed"] == 30

    assert json.loads(server.delete_record("species", "kobold")) == {"deleted": 1}
    assert json.loads(server.update_record("species", "kobold", {"speed": 25})) is None


def test_create_item_returns_id():
    item = json.loads(server.create_record("items", {"name": "Rope"}))

    assert json.loads(server.get_record("items", item["id"]))["name"] == "Rope"


def test_create_rejects_bad_shape():
    with pytest.raises(RecordValidationError):
        server.create_record("items", {"name": "Rope", "quantity": "3"})


def test_character_sheet():
    character = json.loads(server.create_record(
        "characters", {"name": "Tavi", "species_code": "elf", "class_code": "wizard"},
    ))
    character_id = character["id"]

    server.set_character_attribute(character_id, "intelligence", 17)
    server.add_character_skill(character_id, "arcana")
    skill = json.loads(server.update_character_skill(character_id, "arcana", 2))
    assert skill["proficiency_level"] == 2

    sheet = json.loads(server.get_character_sheet(character_id))
    assert sheet["class_name"] == "Wizard"
    assert [a["attribute_value"] for a in sheet["attributes"]] == [17]
    assert [s["skill_code"] for s in sheet["skills"]] == ["arcana"]

    assert json.loads(server.delete_character_attribute(character_id)) == {"deleted": 1}
    assert json.loads(server.remove_character_skill(character_id, "arcana")) == {"deleted": 1}
    assert json.loads(server.get_character_sheet(999)) is None


def test_roll_dice():
    result = json.loads(server.roll_dice(6, 3))

    assert result["sides"] == 6
    assert len(result["rolls"]) == 3
    assert result["total"] == sum(result["rolls"])


def test_writes_for_missing_character_return_null():
    assert json.loads(server.set_character_attribute(999, "strength", 10)) is None
    assert json.loads(server.add_character_skill(999, "history")) is None
    assert json.loads(server.update_character_skill(999, "history", 2)) is None
