import socket

import httpx
import pytest

from service.component_service import Component, Database, HttpServer, Migrations, System, new_system
from service.settings import MIGRATIONS_DIR, Settings


def free_port() -> int:
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def test_database_start_is_idempotent(tmp_path):
    database = Database(tmp_path / "dm.db")

    database.start()
    engine = database.get_engine()
    database.start()

    assert database.get_engine() is engine
    database.stop()


def test_database_not_started(tmp_path):
    database = Database(tmp_path / "dm.db")

    with pytest.raises(RuntimeError, match="not started"):
        database.get_engine()

    database.stop()


def test_database_can_restart(tmp_path):
    database = Database(tmp_path / "dm.db").start()
    database.stop()

    database.start()
    with database.session() as session:
        assert session.get_bind() is database.get_engine()
    database.stop()


def test_migrations_apply_once(tmp_path):
    database = Database(tmp_path / "dm.db").start()
    migrations = Migrations(MIGRATIONS_DIR, database)

    migrations.start()
    assert migrations.applied == ["001-initial-schema"]
    migrations.start()
    assert migrations.applied == ["001-initial-schema"]

    assert Migrations(MIGRATIONS_DIR, database).start().applied == []
    database.stop()


class Recorder(Component):
    def __init__(self, name, events, fail=False):
        self.name = name
        self.events = events
        self.fail = fail

    def start(self):
        if self.fail:
            raise RuntimeError(f"{self.name} failed")
        self.events.append(f"start {self.name}")
        return self

    def stop(self):
        self.events.append(f"stop {self.name}")
        return self


def test_system_starts_in_order_and_stops_in_reverse():
    events = []
    system = System(a=Recorder("a", events), b=Recorder("b", events))

    with system:
        assert system["b"].name == "b"

    assert events == ["start a", "start b", "stop b", "stop a"]


def test_system_stops_started_components_when_start_fails():
    events = []
    system = System(a=Recorder("a", events), b=Recorder("b", events, fail=True))

    with pytest.raises(RuntimeError, match="b failed"):
        system.start()

    assert events == ["start a", "stop a"]


def test_new_system_without_http(tmp_path):
    settings = Settings(db_path=tmp_path / "dm.db")

    with new_system(settings, with_http=False) as system:
        assert list(system.components) == ["database", "migrations"]
        assert system["migrations"].applied == ["001-initial-schema"]

    assert system["database"].engine is None


def test_http_server_serves_health(tmp_path):
    database = Database(tmp_path / "dm.db").start()
    Migrations(MIGRATIONS_DIR, database).start()
    port = free_port()
    server = HttpServer("127.0.0.1", port, 5.0, database)

    server.start()
    try:
        response = httpx.get(f"http://127.0.0.1:{port}/health", timeout=5.0)
        assert response.status_code == 200
        assert response.json()["status"] == "ok"
    finally:
        server.stop()
        database.stop()

    assert server.server is None
