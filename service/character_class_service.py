"""Character class enumeration table (the `classes` table)."""

from typing import Any, Optional

from sqlalchemy import delete, insert, select, update
from sqlmodel import Session

from model.base import CodeParams
from model.character_class import CharacterClass, CharacterClassEntity, CharacterClassUpdate
from service.repository_service import changes, execute, query, query_one, validate

classes_table = CharacterClass.__table__


def get_all(session: Session, _params: Optional[dict] = None) -> list[dict[str, Any]]:
    return query(session, select(classes_table).order_by(classes_table.c.name))


def get_by_code(session: Session, params: dict) -> Optional[dict[str, Any]]:
    code = validate(CodeParams, params).code
    return query_one(session, select(classes_table).where(classes_table.c.code == code))


def insert_class(session: Session, class_data: dict) -> int:
    record = validate(CharacterClassEntity, class_data)
    return execute(session, insert(classes_table).values(**record.model_dump(exclude_unset=True)))


def update_class(session: Session, class_data: dict) -> int:
    record = validate(CharacterClassUpdate, class_data)
    return execute(
        session,
        update(classes_table)
        .where(classes_table.c.code == record.code)
        .values(**changes(record, 'code')),
    )


def delete_class(session: Session, params: dict) -> int:
    code = validate(CodeParams, params).code
    return execute(session, delete(classes_table).where(classes_table.c.code == code))
