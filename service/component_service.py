"""
Component lifecycle.

A running dm system is a handful of components started in dependency order
and stopped in reverse:

    database -> migrations -> http

Starting an already started component is a no-op, as is stopping a stopped
one, so a System can be restarted after a stop.
"""

import threading
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

import uvicorn
from sqlalchemy.engine import Engine
from sqlmodel import Session

from service import logging_service as log
from service.migration_service import migrate
from service.repository_service import create_sqlite_engine
from service.settings import Settings
from web.app import create_app


class Component:
    name = 'Component'

    def start(self) -> 'Component':
        return self

    def stop(self) -> 'Component':
        return self


class Database(Component):
    name = 'Database'

    def __init__(self, db_path: Union[str, Path]):
        self.db_path = db_path
        self.engine: Optional[Engine] = None

    def start(self) -> 'Database':
        if self.engine is not None:
            log.component_skipped(self.name)
            return self

        log.component_start(self.name)
        self.engine = create_sqlite_engine(self.db_path)
        log.component_started(self.name, db_path=str(self.db_path))
        return self

    def stop(self) -> 'Database':
        if self.engine is not None:
            log.component_stop(self.name)
            self.engine.dispose()
            self.engine = None
            log.component_stopped(self.name)
        return self

    def get_engine(self) -> Engine:
        if self.engine is None:
            raise RuntimeError('Database is not started. Call start() first.')
        return self.engine

    @contextmanager
    def session(self) -> Iterator[Session]:
        with Session(self.get_engine()) as session:
            yield session


class Migrations(Component):
    name = 'Migrations'

    def __init__(self, migrations_dir: Union[str, Path], database: Database):
        self.migrations_dir = migrations_dir
        self.database = database
        self.applied: Optional[list[str]] = None

    def start(self) -> 'Migrations':
        if self.applied is not None:
            log.component_skipped(self.name)
            return self

        log.component_start(self.name)
        self.applied = migrate(self.database.get_engine(), self.migrations_dir)
        log.component_started(self.name, migrations_applied=len(self.applied))
        return self


class HttpServer(Component):
    """Serves the web app with uvicorn on a background thread."""

    name = 'HttpServer'

    def __init__(self, host: str, port: int, timeout: float, database: Database):
        self.host = host
        self.port = port
        self.timeout = timeout
        self.database = database
        self.server: Optional[uvicorn.Server] = None
        self.thread: Optional[threading.Thread] = None

    def start(self) -> 'HttpServer':
        if self.server is not None:
            log.component_skipped(self.name)
            return self

        log.component_start(self.name)
        config = uvicorn.Config(
            create_app(self.database),
            host=self.host,
            port=self.port,
            log_config=None,
            access_log=False,
        )
        self.server = uvicorn.Server(config)
        self.thread = threading.Thread(target=self.server.run, name='dm-http', daemon=True)
        self.thread.start()

        deadline = time.monotonic() + self.timeout
        while not self.server.started and self.thread.is_alive() and time.monotonic() < deadline:
            time.sleep(0.05)

        if not self.server.started:
            self.stop()
            raise RuntimeError(f'HTTP server did not start on {self.host}:{self.port}')

        log.component_started(self.name, host=self.host, port=self.port, timeout=self.timeout)
        return self

    def stop(self) -> 'HttpServer':
        if self.server is not None:
            log.component_stop(self.name)
            self.server.should_exit = True
            if self.thread is not None:
                self.thread.join(self.timeout)
            self.server = None
            self.thread = None
            log.component_stopped(self.name)
        return self


class System:
    """Named components, started in insertion order and stopped in reverse."""

    def __init__(self, **components: Component):
        self.components = components

    def __getitem__(self, name: str) -> Component:
        return self.components[name]

    def start(self) -> 'System':
        started = []
        try:
            for component in self.components.values():
                component.start()
                started.append(component)
        except Exception:
            for component in reversed(started):
                component.stop()
            raise
        return self

    def stop(self) -> 'System':
        for component in reversed(list(self.components.values())):
            component.stop()
        return self

    def __enter__(self) -> 'System':
        return self.start()

    def __exit__(self, *exc_info) -> None:
        self.stop()


def new_system(settings: Settings, with_http: bool = True) -> System:
    database = Database(settings.db_path)
    components: dict[str, Component] = {
        'database': database,
        'migrations': Migrations(settings.migrations_dir, database),
    }
    if with_http:
        components['http'] = HttpServer(
            settings.http_host,
            settings.http_port,
            settings.http_timeout,
            database,
        )
    return System(**components)
