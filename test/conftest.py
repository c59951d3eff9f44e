"""Shared fixtures: a fresh migrated SQLite database per test."""

import pytest

from service.component_service import Database
from service.migration_service import migrate
from service.reference_service import seed_reference_data
from service.settings import MIGRATIONS_DIR, reset_settings


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    for name in ("DM_DB_PATH", "DM_HTTP_PORT", "DM_LOG_LEVEL", "DM_LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def database(tmp_path):
    db = Database(tmp_path / "test.db").start()
    migrate(db.get_engine(), MIGRATIONS_DIR)
    yield db
    db.stop()


@pytest.fixture
def session(database):
    with database.session() as session:
        yield session


@pytest.fixture
def seeded(session):
    seed_reference_data(session)
    return session


@pytest.fixture
def character(seeded):
    from service import character_service

    return character_service.insert_character(
        seeded, {"name": "Tavi", "species_code": "elf", "class_code": "wizard"},
    )
