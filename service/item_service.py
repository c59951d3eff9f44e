"""
Item table.

Items get a generated integer id; `insert_item` returns the stored row so
callers learn the id and the database defaults.
"""

from typing import Any, Optional

from sqlalchemy import delete, insert, select, update
from sqlmodel import Session

from model.base import IdParams
from model.item import Item, ItemEntity, ItemsByTypeParams, ItemUpdate
from service.repository_service import changes, execute, insert_returning, query, query_one, validate

items_table = Item.__table__


def get_all(session: Session, _params: Optional[dict] = None) -> list[dict[str, Any]]:
    return query(session, select(items_table).order_by(items_table.c.name))


def get_by_id(session: Session, params: dict) -> Optional[dict[str, Any]]:
    item_id = validate(IdParams, params).id
    return query_one(session, select(items_table).where(items_table.c.id == item_id))


def get_by_type(session: Session, params: dict) -> list[dict[str, Any]]:
    item_type = validate(ItemsByTypeParams, params).item_type
    return query(
        session,
        select(items_table)
        .where(items_table.c.item_type == item_type)
        .order_by(items_table.c.name),
    )


def insert_item(session: Session, item: dict) -> dict[str, Any]:
    record = validate(ItemEntity, item)
    return insert_returning(
        session,
        insert(items_table)
        .values(**record.model_dump(exclude_unset=True))
        .returning(*items_table.c),
    )


def update_item(session: Session, item: dict) -> int:
    record = validate(ItemUpdate, item)
    return execute(
        session,
        update(items_table)
        .where(items_table.c.id == record.id)
        .values(**changes(record, 'id')),
    )


def delete_item(session: Session, params: dict) -> int:
    item_id = validate(IdParams, params).id
    return execute(session, delete(items_table).where(items_table.c.id == item_id))
