"""
FastAPI application factory.

The app serves the JSON API under /api, the HTML pages, and /health. It does
not own the database: `create_app` receives a started Database component
and keeps it on `app.state.database`.
"""

import time
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session

from service import logging_service as log
from service.repository_service import RecordValidationError
from service.settings import VERSION
from web import api, pages
from web.dependencies import get_session

logger = log.get_logger(__name__)


async def record_validation_error_handler(request: Request, exc: RecordValidationError) -> JSONResponse:
    logger.warning('invalid_record', path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=422,
        content={'detail': str(exc), 'errors': jsonable_encoder(exc.errors)},
    )


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning('integrity_error', path=request.url.path, error=str(exc.orig))
    return JSONResponse(status_code=409, content={'detail': str(exc.orig)})


async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    status = 500
    try:
        response = await call_next(request)
        status = response.status_code
        return response
    finally:
        log.http_response(
            request.method,
            request.url.path,
            status,
            round((time.perf_counter() - start) * 1000, 2),
        )


def health(session: Session = Depends(get_session)) -> JSONResponse:
    start = time.perf_counter()
    try:
        session.exec(text('SELECT 1')).one()
        database = {'status': 'ok'}
    except SQLAlchemyError as e:
        database = {'status': 'error', 'message': str(e)}
    database['latency_ms'] = round((time.perf_counter() - start) * 1000, 2)

    body = {
        'status': database['status'],
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'checks': {'database': database},
    }
    return JSONResponse(content=body, status_code=200 if database['status'] == 'ok' else 503)


def create_app(database) -> FastAPI:
    app = FastAPI(
        title='dm',
        description='Tabletop RPG records',
        version=VERSION,
    )
    app.state.database = database

    app.middleware('http')(log_requests)
    app.add_exception_handler(RecordValidationError, record_validation_error_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)

    app.add_api_route('/health', health, methods=['GET'], tags=['health'])
    app.include_router(api.router, prefix='/api')
    app.include_router(pages.router)

    return app
