import json
from typing import Any, Callable, NamedTuple, Optional, Union

from mcp.server.fastmcp import FastMCP
from sqlmodel import SQLModel

from service import (
    attribute_name_service,
    character_class_service,
    character_service,
    dice_service,
    item_service,
    skill_service,
    species_service,
)
from service import logging_service as log
from service.component_service import Database, Migrations
from service.settings import get_settings

mcp = FastMCP(
    "dm",
    instructions="""
        # Tabletop RPG record keeper

        ## Tables
        species, classes, attribute_names, skills : reference tables keyed by a text `code`.
        items : inventory items keyed by an integer `id`.
        characters : player and non-player characters keyed by an integer `id`.
          Each character points at a species (species_code) and a class (class_code).
          Attribute scores (0..30) and skill proficiencies hang off the character.

        ## Rules
        - Read schema://main before writing records so field names and types are right.
        - Values are not coerced: integers must be sent as numbers, not strings.
        - A character's species_code and class_code must already exist.
        - Use roll_dice for every random outcome instead of inventing one.
        """,
)

database = Database(get_settings().db_path)


def to_json(value: Any) -> str:
    return json.dumps(value, default=str)


class Table(NamedTuple):
    key: str
    get_all: Callable
    get_by_key: Callable
    insert: Callable
    update: Callable
    delete: Callable
    # code tables return a row count from insert, others the inserted row
    returns_row: bool = False


TABLES = {
    'species': Table(
        'code',
        species_service.get_all,
        species_service.get_by_code,
        species_service.insert_species,
        species_service.update_species,
        species_service.delete_species,
    ),
    'classes': Table(
        'code',
        character_class_service.get_all,
        character_class_service.get_by_code,
        character_class_service.insert_class,
        character_class_service.update_class,
        character_class_service.delete_class,
    ),
    'attribute_names': Table(
        'code',
        attribute_name_service.get_all,
        attribute_name_service.get_by_code,
        attribute_name_service.insert_attribute_name,
        attribute_name_service.update_attribute_name,
        attribute_name_service.delete_attribute_name,
    ),
    'skills': Table(
        'code',
        skill_service.get_all,
        skill_service.get_by_code,
        skill_service.insert_skill,
        skill_service.update_skill,
        skill_service.delete_skill,
    ),
    'items': Table(
        'id',
        item_service.get_all,
        item_service.get_by_id,
        item_service.insert_item,
        item_service.update_item,
        item_service.delete_item,
        returns_row=True,
    ),
    'characters': Table(
        'id',
        character_service.get_all,
        character_service.get_by_id,
        character_service.insert_character,
        character_service.update_character,
        character_service.delete_character,
        returns_row=True,
    ),
}


def _table(table: str) -> Table:
    if table not in TABLES:
        raise ValueError(f"Unknown table {table!r}, expected one of {', '.join(TABLES)}")
    return TABLES[table]


@mcp.resource("schema://main")
def get_schema() -> str:
    """
    Every table with its columns. Read this before creating or updating records.
    """

    result = []
    for table_name, table in SQLModel.metadata.tables.items():
        table_info = {
            "table_name": table_name,
            "columns": []
        }

        for column in table.columns:
            col_info = {
                "name": column.name,
                "type": str(column.type),
                "nullable": column.nullable,
                "primary_key": column.primary_key,
                "foreign_keys": [str(fk.target_fullname) for fk in column.foreign_keys],
                "default": str(column.server_default.arg) if column.server_default is not None else None
            }
            table_info["columns"].append(col_info)

        result.append(table_info)

    return json.dumps(result)


# region RECORDS

@mcp.tool()
def list_records(table: str) -> str:
    """
    All rows of a table: species, classes, attribute_names, skills, items or characters.
    """
    with database.session() as session:
        return to_json(_table(table).get_all(session))


@mcp.tool()
def get_record(table: str, key: Union[int, str]) -> str:
    """
    One row by key: `code` for species, classes, attribute_names and skills, `id` for items and characters.
    Returns null when there is no such row.
    """
    target = _table(table)
    with database.session() as session:
        return to_json(target.get_by_key(session, {target.key: key}))


@mcp.tool()
def create_record(table: str, record: dict[str, Any]) -> str:
    """
    Insert a row and return it as stored.
    Code tables need `code` and `name` (skills also `attribute_code`).
    Characters need `name`, `species_code` and `class_code`; items need `name`.
    """
    target = _table(table)
    with database.session() as session:
        if target.returns_row:
            return to_json(target.insert(session, record))
        target.insert(session, record)
        return to_json(target.get_by_key(session, {target.key: record.get(target.key)}))


@mcp.tool()
def update_record(table: str, key: Union[int, str], fields: dict[str, Any]) -> str:
    """
    Change the given fields of one row and return the row, or null when it does not exist.
    """
    target = _table(table)
    with database.session() as session:
        if target.update(session, {**fields, target.key: key}) == 0:
            return to_json(None)
        return to_json(target.get_by_key(session, {target.key: key}))


@mcp.tool()
def delete_record(table: str, key: Union[int, str]) -> str:
    """
    Delete one row. Deleting a character also deletes its attributes and skills.
    """
    target = _table(table)
    with database.session() as session:
        return to_json({'deleted': target.delete(session, {target.key: key})})


@mcp.tool()
def list_skills_for_attribute(attribute_code: str) -> str:
    """
    Skills that use the given attribute, e.g. every dexterity skill.
    """
    with database.session() as session:
        return to_json(skill_service.get_by_attribute(session, {'attribute_code': attribute_code}))


@mcp.tool()
def list_items_by_type(item_type: str) -> str:
    with database.session() as session:
        return to_json(item_service.get_by_type(session, {'item_type': item_type}))

# endregion


# region CHARACTER

@mcp.tool()
def get_character_sheet(character_id: int) -> str:
    """
    A character with species and class names, attribute scores and skill proficiencies.
    Returns null when the character does not exist.
    """
    with database.session() as session:
        character = character_service.get_with_details(session, {'id': character_id})
        if character is None:
            return to_json(None)

        params = {'character_id': character_id}
        return to_json({
            **character,
            'attributes': character_service.get_attributes(session, params),
            'skills': character_service.get_skills(session, params),
        })


@mcp.tool()
def set_character_attribute(character_id: int, attribute_code: str, attribute_value: int) -> str:
    """
    Set one attribute score (0..30) of a character, replacing any previous value.
    Returns null when the character does not exist.
    """
    key = {'character_id': character_id, 'attribute_code': attribute_code}
    with database.session() as session:
        if character_service.get_by_id(session, {'id': character_id}) is None:
            return to_json(None)
        character_service.set_attribute(session, {**key, 'attribute_value': attribute_value})
        return to_json(character_service.get_attribute(session, key))


@mcp.tool()
def delete_character_attribute(character_id: int, attribute_code: Optional[str] = None) -> str:
    """
    Remove one attribute score of a character, or all of them when attribute_code is omitted.
    """
    with database.session() as session:
        if attribute_code is None:
            deleted = character_service.delete_all_attributes(session, {'character_id': character_id})
        else:
            deleted = character_service.delete_attribute(
                session, {'character_id': character_id, 'attribute_code': attribute_code},
            )
        return to_json({'deleted': deleted})


@mcp.tool()
def add_character_skill(character_id: int, skill_code: str, proficiency_level: int = 1) -> str:
    """
    Make a character proficient in a skill. Fails if the character already has it.
    Returns null when the character does not exist.
    """
    key = {'character_id': character_id, 'skill_code': skill_code}
    with database.session() as session:
        if character_service.get_by_id(session, {'id': character_id}) is None:
            return to_json(None)
        character_service.add_skill(session, {**key, 'proficiency_level': proficiency_level})
        return to_json(character_service.get_skill(session, key))


@mcp.tool()
def update_character_skill(character_id: int, skill_code: str, proficiency_level: int) -> str:
    key = {'character_id': character_id, 'skill_code': skill_code}
    with database.session() as session:
        if character_service.update_skill_proficiency(session, {**key, 'proficiency_level': proficiency_level}) == 0:
            return to_json(None)
        return to_json(character_service.get_skill(session, key))


@mcp.tool()
def remove_character_skill(character_id: int, skill_code: Optional[str] = None) -> str:
    """
    Remove one skill proficiency of a character, or all of them when skill_code is omitted.
    """
    with database.session() as session:
        if skill_code is None:
            removed = character_service.remove_all_skills(session, {'character_id': character_id})
        else:
            removed = character_service.remove_skill(
                session, {'character_id': character_id, 'skill_code': skill_code},
            )
        return to_json({'deleted': removed})

# endregion


@mcp.tool()
def roll_dice(sides: int = 20, count: int = 1) -> str:
    """
    Roll `count` dice with `sides` faces. Use this for every random outcome.
    """
    rolls = dice_service.roll(sides, count)
    return to_json({'sides': sides, 'rolls': rolls, 'total': sum(rolls)})


def main() -> None:
    settings = get_settings()
    # stdout carries the MCP protocol, logs go to stderr
    log.configure_logging(settings.log_level, settings.log_format == 'json')
    database.start()
    Migrations(settings.migrations_dir, database).start()
    try:
        mcp.run()
    finally:
        database.stop()


if __name__ == "__main__":
    main()
