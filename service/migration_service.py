"""
SQL migration runner.

Migrations are files named `NNN-description.up.sql` in the migrations
directory, applied in file name order. A file may hold several statements
separated by a line reading `-- ;;`. Applied migration ids are recorded in
the `_migrations` table, so running the migrations again only applies new
files.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from sqlalchemy import text
from sqlalchemy.engine import Engine

from service import logging_service as log

logger = log.get_logger(__name__)

STATEMENT_SEPARATOR = '-- ;;'
UP_SUFFIX = '.up.sql'


@dataclass(frozen=True)
class Migration:
    id: str
    statements: tuple[str, ...]


def split_statements(sql: str) -> tuple[str, ...]:
    chunks = (chunk.strip() for chunk in sql.split(STATEMENT_SEPARATOR))
    return tuple(chunk for chunk in chunks if chunk)


def load_migrations(migrations_dir: Union[str, Path]) -> list[Migration]:
    migrations_dir = Path(migrations_dir)
    if not migrations_dir.is_dir():
        raise FileNotFoundError(f'Migrations directory not found: {migrations_dir}')

    return [
        Migration(id=path.name[:-len(UP_SUFFIX)], statements=split_statements(path.read_text(encoding='utf-8')))
        for path in sorted(migrations_dir.glob(f'*{UP_SUFFIX}'))
    ]


def applied_migrations(engine: Engine) -> set[str]:
    with engine.begin() as conn:
        _ensure_tracking_table(conn)
        return {row[0] for row in conn.execute(text('SELECT id FROM _migrations'))}


def _ensure_tracking_table(conn) -> None:
    conn.execute(text("""
        CREATE TABLE IF NOT EXISTS _migrations (
            id TEXT PRIMARY KEY,
            applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """))


def migrate(engine: Engine, migrations_dir: Union[str, Path]) -> list[str]:
    """
    Apply every pending migration, each in its own transaction.

    Returns the ids of the migrations applied by this call.
    """
    log.migration_start(str(migrations_dir))

    migrations = load_migrations(migrations_dir)
    done = applied_migrations(engine)
    applied = []

    for migration in migrations:
        if migration.id in done:
            logger.debug('migration_already_applied', migration=migration.id)
            continue

        logger.info('applying_migration', migration=migration.id)
        with engine.begin() as conn:
            for statement in migration.statements:
                conn.exec_driver_sql(statement)
            conn.execute(text('INSERT INTO _migrations (id) VALUES (:id)'), {'id': migration.id})
        applied.append(migration.id)

    log.migration_complete(str(migrations_dir), len(applied))
    return applied
