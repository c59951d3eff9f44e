"""
Shared query helpers used by every table module.

Table modules build statements with the SQLAlchemy expression language and
hand them to the helpers below, which execute them on a SQLModel session and
map the result set to plain dicts keyed by column label.

Mutations commit immediately; a failed statement rolls the session back and
the database error propagates unchanged.
"""

import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from service import logging_service as log

P = TypeVar('P', bound=BaseModel)


class RecordValidationError(ValueError):
    """A parameter map does not have the shape a table operation expects."""

    def __init__(self, message: str, errors: Optional[list[dict]] = None):
        super().__init__(message)
        self.errors = errors or []


def create_sqlite_engine(db_path: Union[str, Path]) -> Engine:
    engine = create_engine(
        f'sqlite:///{db_path}',
        connect_args={'check_same_thread': False},
    )
    event.listen(engine, 'connect', _enable_foreign_keys)
    return engine


def _enable_foreign_keys(dbapi_connection, _connection_record) -> None:
    # SQLite ships with foreign keys off; ON DELETE CASCADE depends on this
    cursor = dbapi_connection.cursor()
    cursor.execute('PRAGMA foreign_keys = ON')
    cursor.close()


def get_engine_session(engine: Engine) -> Iterator[Session]:
    with Session(engine) as session:
        yield session


def validate(schema: Type[P], params: Any) -> P:
    """
    Check `params` against `schema` and return the parsed record.

    Raises RecordValidationError listing every offending field.
    """
    try:
        return schema.model_validate({} if params is None else params)
    except ValidationError as e:
        errors = e.errors(include_url=False, include_context=False, include_input=False)
        problems = '; '.join(
            f"{'.'.join(str(part) for part in error['loc']) or '(root)'}: {error['msg']}"
            for error in errors
        )
        raise RecordValidationError(f'Invalid {schema.__name__}: {problems}', errors) from e


def changes(record: BaseModel, *keys: str) -> dict[str, Any]:
    """Fields present in an update record, minus its key fields."""
    values = record.model_dump(exclude_unset=True, exclude=set(keys))
    if not values:
        raise RecordValidationError(f'{type(record).__name__} has no fields to update')
    return values


def _statement_name(statement) -> str:
    table = getattr(statement, 'table', None)
    if table is not None:
        return f'{statement.__visit_name__} {table.name}'
    return statement.__visit_name__


@contextmanager
def _logged(session: Session, statement) -> Iterator[None]:
    name = _statement_name(statement)
    start = time.perf_counter()
    try:
        yield
    except SQLAlchemyError as e:
        session.rollback()
        log.db_error(name, e)
        raise
    log.db_query(name, round((time.perf_counter() - start) * 1000, 2))


def query(session: Session, statement) -> list[dict[str, Any]]:
    """Run a SELECT and return every row, [] when there are none."""
    with _logged(session, statement):
        rows = session.exec(statement).mappings().all()
    return [dict(row) for row in rows]


def query_one(session: Session, statement) -> Optional[dict[str, Any]]:
    """Run a SELECT and return the first row, or None."""
    with _logged(session, statement):
        row = session.exec(statement).mappings().first()
    return dict(row) if row is not None else None


def execute(session: Session, statement) -> int:
    """Run an INSERT, UPDATE or DELETE, commit, and return the affected row count."""
    with _logged(session, statement):
        result = session.exec(statement)
        session.commit()
    return result.rowcount


def insert_returning(session: Session, statement) -> dict[str, Any]:
    """Run an INSERT ... RETURNING, commit, and return the inserted row."""
    with _logged(session, statement):
        row = session.exec(statement).mappings().one()
        session.commit()
    return dict(row)
