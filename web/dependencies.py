from typing import Iterator

from fastapi import Request
from sqlmodel import Session

from service.repository_service import get_engine_session


def get_session(request: Request) -> Iterator[Session]:
    """One session per request, bound to the app's Database component."""
    yield from get_engine_session(request.app.state.database.get_engine())
