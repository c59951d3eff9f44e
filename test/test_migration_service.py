import pytest
from sqlalchemy import inspect, text
from sqlalchemy.exc import OperationalError

from service.migration_service import applied_migrations, load_migrations, migrate, split_statements
from service.repository_service import create_sqlite_engine
from service.settings import MIGRATIONS_DIR


@pytest.fixture
def engine(tmp_path):
    engine = create_sqlite_engine(tmp_path / "migrate.db")
    yield engine
    engine.dispose()


def test_split_statements():
    sql = "CREATE TABLE a (x);\n-- ;;\n\nCREATE TABLE b (y);\n-- ;;\n"

    assert split_statements(sql) == ("CREATE TABLE a (x);", "CREATE TABLE b (y);")


def test_load_migrations_in_order(tmp_path):
    (tmp_path / "002-second.up.sql").write_text("CREATE TABLE b (y);")
    (tmp_path / "001-first.up.sql").write_text("CREATE TABLE a (x);")
    (tmp_path / "001-first.down.sql").write_text("DROP TABLE a;")

    assert [m.id for m in load_migrations(tmp_path)] == ["001-first", "002-second"]


def test_load_migrations_missing_dir(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_migrations(tmp_path / "nope")


def test_migrate_creates_every_table(engine):
    assert migrate(engine, MIGRATIONS_DIR) == ["001-initial-schema"]

    tables = set(inspect(engine).get_table_names())
    assert {
        "species", "classes", "attribute_names", "skills",
        "characters", "character_attributes", "character_skills", "items",
    } <= tables


def test_migrate_twice_is_a_no_op(engine):
    migrate(engine, MIGRATIONS_DIR)

    assert migrate(engine, MIGRATIONS_DIR) == []
    assert applied_migrations(engine) == {"001-initial-schema"}


def test_migrate_applies_only_new_files(engine, tmp_path):
    migrations = tmp_path / "migrations"
    migrations.mkdir()
    (migrations / "001-first.up.sql").write_text("CREATE TABLE a (x INTEGER);")
    migrate(engine, migrations)

    (migrations / "002-second.up.sql").write_text(
        "CREATE TABLE b (y INTEGER);\n-- ;;\nINSERT INTO b (y) VALUES (1);"
    )

    assert migrate(engine, migrations) == ["002-second"]
    with engine.connect() as conn:
        assert conn.execute(text("SELECT y FROM b")).scalar_one() == 1


def test_failed_migration_is_not_recorded(engine, tmp_path):
    (tmp_path / "001-broken.up.sql").write_text("CREATE TABLE a (x);\n-- ;;\nNOT SQL AT ALL;")

    with pytest.raises(OperationalError):
        migrate(engine, tmp_path)

    assert applied_migrations(engine) == set()
