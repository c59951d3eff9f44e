"""
Attribute name enumeration table.

Holds the six ability scores (strength, dexterity, ...) with their
abbreviation and the order they are shown in on a character sheet.
"""

from typing import Any, Optional

from sqlalchemy import delete, insert, select, update
from sqlmodel import Session

from model.attribute_name import AttributeName, AttributeNameEntity, AttributeNameUpdate
from model.base import CodeParams
from service.repository_service import changes, execute, query, query_one, validate

attribute_names_table = AttributeName.__table__


def get_all(session: Session, _params: Optional[dict] = None) -> list[dict[str, Any]]:
    """All attribute names in display order."""
    return query(
        session,
        select(attribute_names_table).order_by(attribute_names_table.c.display_order),
    )


def get_by_code(session: Session, params: dict) -> Optional[dict[str, Any]]:
    code = validate(CodeParams, params).code
    return query_one(
        session,
        select(attribute_names_table).where(attribute_names_table.c.code == code),
    )


def insert_attribute_name(session: Session, attribute_name: dict) -> int:
    record = validate(AttributeNameEntity, attribute_name)
    return execute(
        session,
        insert(attribute_names_table).values(**record.model_dump(exclude_unset=True)),
    )


def update_attribute_name(session: Session, attribute_name: dict) -> int:
    record = validate(AttributeNameUpdate, attribute_name)
    return execute(
        session,
        update(attribute_names_table)
        .where(attribute_names_table.c.code == record.code)
        .values(**changes(record, 'code')),
    )


def delete_attribute_name(session: Session, params: dict) -> int:
    code = validate(CodeParams, params).code
    return execute(
        session,
        delete(attribute_names_table).where(attribute_names_table.c.code == code),
    )
