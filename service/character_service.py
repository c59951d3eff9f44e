"""
Characters and their per-character attributes and skills.

A character row is keyed by a generated integer id. Attribute scores live in
`character_attributes` (one row per character/attribute pair, upserted) and
skill proficiencies in `character_skills` (one row per character/skill
pair). Both cascade when the character is deleted.
"""

from typing import Any, Optional

from sqlalchemy import and_, delete, func, insert, select, update
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlmodel import Session

from model.attribute_name import AttributeName
from model.base import CharacterIdParams, IdParams
from model.character import Character, CharacterEntity, CharacterUpdate
from model.character_attribute import CharacterAttribute, CharacterAttributeKey, CharacterAttributeValue
from model.character_class import CharacterClass
from model.character_skill import CharacterSkill, CharacterSkillKey, CharacterSkillLevel
from model.skill import Skill
from model.species import Species
from service.repository_service import changes, execute, insert_returning, query, query_one, validate

characters_table = Character.__table__
character_attributes_table = CharacterAttribute.__table__
character_skills_table = CharacterSkill.__table__


# region CHARACTER

def get_all(session: Session, _params: Optional[dict] = None) -> list[dict[str, Any]]:
    return query(session, select(characters_table).order_by(characters_table.c.name))


def get_by_id(session: Session, params: dict) -> Optional[dict[str, Any]]:
    character_id = validate(IdParams, params).id
    return query_one(session, select(characters_table).where(characters_table.c.id == character_id))


def get_with_details(session: Session, params: dict) -> Optional[dict[str, Any]]:
    """
    The character plus `species_name` and `class_name`.

    Both names are None when the referenced row is missing.
    """
    character_id = validate(IdParams, params).id

    c = characters_table.alias('c')
    s = Species.__table__.alias('s')
    cl = CharacterClass.__table__.alias('cl')

    statement = (
        select(c, s.c.name.label('species_name'), cl.c.name.label('class_name'))
        .select_from(
            c.outerjoin(s, c.c.species_code == s.c.code)
            .outerjoin(cl, c.c.class_code == cl.c.code)
        )
        .where(c.c.id == character_id)
    )
    return query_one(session, statement)


def insert_character(session: Session, character: dict) -> dict[str, Any]:
    record = validate(CharacterEntity, character)
    return insert_returning(
        session,
        insert(characters_table)
        .values(**record.model_dump(exclude_unset=True))
        .returning(*characters_table.c),
    )


def update_character(session: Session, character: dict) -> int:
    """Update the provided fields and stamp `updated_at`."""
    record = validate(CharacterUpdate, character)
    return execute(
        session,
        update(characters_table)
        .where(characters_table.c.id == record.id)
        .values(**changes(record, 'id'), updated_at=func.current_timestamp()),
    )


def delete_character(session: Session, params: dict) -> int:
    character_id = validate(IdParams, params).id
    return execute(session, delete(characters_table).where(characters_table.c.id == character_id))

# endregion


# region ATTRIBUTES

def _attributes_select():
    ca = character_attributes_table.alias('ca')
    an = AttributeName.__table__.alias('an')
    statement = (
        select(ca, an.c.name.label('attribute_name'), an.c.abbreviation)
        .select_from(ca.join(an, ca.c.attribute_code == an.c.code))
    )
    return statement, ca, an


def get_attributes(session: Session, params: dict) -> list[dict[str, Any]]:
    """Attribute scores of a character with their names, in display order."""
    character_id = validate(CharacterIdParams, params).character_id
    statement, ca, an = _attributes_select()
    return query(
        session,
        statement.where(ca.c.character_id == character_id).order_by(an.c.display_order),
    )


def get_attribute(session: Session, params: dict) -> Optional[dict[str, Any]]:
    key = validate(CharacterAttributeKey, params)
    statement, ca, _ = _attributes_select()
    return query_one(
        session,
        statement.where(
            and_(ca.c.character_id == key.character_id, ca.c.attribute_code == key.attribute_code)
        ),
    )


def set_attribute(session: Session, params: dict) -> int:
    """
    Set an attribute score, inserting or replacing the (character, attribute) row.

    The 0..30 range is checked by the database, not here.
    """
    record = validate(CharacterAttributeValue, params)
    statement = sqlite_insert(character_attributes_table).values(
        character_id=record.character_id,
        attribute_code=record.attribute_code,
        attribute_value=record.attribute_value,
    )
    statement = statement.on_conflict_do_update(
        index_elements=['character_id', 'attribute_code'],
        set_={'attribute_value': statement.excluded.attribute_value},
    )
    return execute(session, statement)


def delete_attribute(session: Session, params: dict) -> int:
    key = validate(CharacterAttributeKey, params)
    return execute(
        session,
        delete(character_attributes_table).where(
            and_(
                character_attributes_table.c.character_id == key.character_id,
                character_attributes_table.c.attribute_code == key.attribute_code,
            )
        ),
    )


def delete_all_attributes(session: Session, params: dict) -> int:
    character_id = validate(CharacterIdParams, params).character_id
    return execute(
        session,
        delete(character_attributes_table).where(character_attributes_table.c.character_id == character_id),
    )

# endregion


# region SKILLS

def _skills_select():
    cs = character_skills_table.alias('cs')
    s = Skill.__table__.alias('s')
    statement = (
        select(cs, s.c.name.label('skill_name'), s.c.attribute_code)
        .select_from(cs.join(s, cs.c.skill_code == s.c.code))
    )
    return statement, cs, s


def get_skills(session: Session, params: dict) -> list[dict[str, Any]]:
    """Skill proficiencies of a character with skill names, ordered by skill name."""
    character_id = validate(CharacterIdParams, params).character_id
    statement, cs, s = _skills_select()
    return query(session, statement.where(cs.c.character_id == character_id).order_by(s.c.name))


def get_skill(session: Session, params: dict) -> Optional[dict[str, Any]]:
    key = validate(CharacterSkillKey, params)
    statement, cs, _ = _skills_select()
    return query_one(
        session,
        statement.where(and_(cs.c.character_id == key.character_id, cs.c.skill_code == key.skill_code)),
    )


def add_skill(session: Session, params: dict) -> int:
    """Add a proficiency. Adding the same skill twice violates the primary key."""
    record = validate(CharacterSkillLevel, params)
    return execute(session, insert(character_skills_table).values(**record.model_dump()))


def set_skill(session: Session, params: dict) -> int:
    """Set a proficiency level, inserting or replacing the (character, skill) row."""
    record = validate(CharacterSkillLevel, params)
    statement = sqlite_insert(character_skills_table).values(**record.model_dump())
    statement = statement.on_conflict_do_update(
        index_elements=['character_id', 'skill_code'],
        set_={'proficiency_level': statement.excluded.proficiency_level},
    )
    return execute(session, statement)


def _skill_row(key: CharacterSkillKey):
    return and_(
        character_skills_table.c.character_id == key.character_id,
        character_skills_table.c.skill_code == key.skill_code,
    )


def update_skill_proficiency(session: Session, params: dict) -> int:
    record = validate(CharacterSkillLevel, params)
    return execute(
        session,
        update(character_skills_table)
        .where(_skill_row(record))
        .values(proficiency_level=record.proficiency_level),
    )


def remove_skill(session: Session, params: dict) -> int:
    key = validate(CharacterSkillKey, params)
    return execute(session, delete(character_skills_table).where(_skill_row(key)))


def remove_all_skills(session: Session, params: dict) -> int:
    character_id = validate(CharacterIdParams, params).character_id
    return execute(
        session,
        delete(character_skills_table).where(character_skills_table.c.character_id == character_id),
    )

# endregion
