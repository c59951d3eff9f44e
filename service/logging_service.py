"""
Structured logging for dm-records.

Every module logs through structlog:

    logger = get_logger(__name__)
    logger.info("species_inserted", code="elf")

`configure_logging` is called once at startup (CLI entry point or tool
server). Until then structlog's defaults apply, which is what the tests see.

The helpers at the bottom keep the event names of the recurring events
(component lifecycle, HTTP traffic, database statements, migrations) in one
place so they stay greppable.
"""

import logging
import sys
from typing import Any

import structlog


def configure_logging(level: str = 'INFO', json_format: bool | None = None) -> None:
    """
    Configure structlog and the standard library root logger.

    Args:
        level: DEBUG, INFO, WARNING or ERROR
        json_format: True for JSON lines, False for colored console output,
            None to pick JSON when stderr is not a terminal
    """
    if json_format is None:
        json_format = not sys.stderr.isatty()

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt='iso'),
        structlog.processors.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
    ]

    if json_format:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level.upper())),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    # structlog, uvicorn and sqlalchemy all end up in the root logger
    logging.basicConfig(
        format='%(message)s',
        stream=sys.stderr,
        level=getattr(logging, level.upper()),
    )


def get_logger(name: str | None = None) -> Any:
    if name is None:
        return structlog.get_logger()
    return structlog.get_logger(name)


_log = get_logger('dm')


def component_start(component: str) -> None:
    _log.info('component_starting', component=component, lifecycle='start')


def component_started(component: str, **data: Any) -> None:
    _log.info('component_started', component=component, lifecycle='started', **data)


def component_stop(component: str) -> None:
    _log.info('component_stopping', component=component, lifecycle='stop')


def component_stopped(component: str) -> None:
    _log.info('component_stopped', component=component, lifecycle='stopped')


def component_skipped(component: str) -> None:
    _log.debug('component_already_started', component=component)


def http_response(method: str, path: str, status: int, duration_ms: float) -> None:
    _log.info('http_response', method=method, path=path, status=status, duration_ms=duration_ms)


def db_query(statement: str, duration_ms: float) -> None:
    _log.debug('db_query', statement=statement, duration_ms=duration_ms)


def db_error(statement: str, error: Exception) -> None:
    _log.error('db_error', statement=statement, error_type=type(error).__name__, error_message=str(error))


def migration_start(migrations_dir: str) -> None:
    _log.info('migrations_running', migrations_dir=migrations_dir)


def migration_complete(migrations_dir: str, applied: int) -> None:
    _log.info('migrations_complete', migrations_dir=migrations_dir, migrations_applied=applied)
