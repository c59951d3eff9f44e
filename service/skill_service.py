"""
Skill enumeration table.

Every skill belongs to one attribute (`attribute_code` references
`attribute_names.code`).
"""

from typing import Any, Optional

from sqlalchemy import delete, insert, select, update
from sqlmodel import Session

from model.base import CodeParams
from model.skill import Skill, SkillEntity, SkillsByAttributeParams, SkillUpdate
from service.repository_service import changes, execute, query, query_one, validate

skills_table = Skill.__table__


def get_all(session: Session, _params: Optional[dict] = None) -> list[dict[str, Any]]:
    return query(session, select(skills_table).order_by(skills_table.c.name))


def get_by_code(session: Session, params: dict) -> Optional[dict[str, Any]]:
    code = validate(CodeParams, params).code
    return query_one(session, select(skills_table).where(skills_table.c.code == code))


def get_by_attribute(session: Session, params: dict) -> list[dict[str, Any]]:
    """Skills governed by one attribute, ordered by name."""
    attribute_code = validate(SkillsByAttributeParams, params).attribute_code
    return query(
        session,
        select(skills_table)
        .where(skills_table.c.attribute_code == attribute_code)
        .order_by(skills_table.c.name),
    )


def insert_skill(session: Session, skill: dict) -> int:
    record = validate(SkillEntity, skill)
    return execute(session, insert(skills_table).values(**record.model_dump(exclude_unset=True)))


def update_skill(session: Session, skill: dict) -> int:
    record = validate(SkillUpdate, skill)
    return execute(
        session,
        update(skills_table)
        .where(skills_table.c.code == record.code)
        .values(**changes(record, 'code')),
    )


def delete_skill(session: Session, params: dict) -> int:
    code = validate(CodeParams, params).code
    return execute(session, delete(skills_table).where(skills_table.c.code == code))
