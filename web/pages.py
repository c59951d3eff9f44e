"""
Read-only HTML pages: an index, one table page per entity, and a character sheet.
"""

from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from sqlmodel import Session

from service import (
    attribute_name_service,
    character_class_service,
    character_service,
    item_service,
    skill_service,
    species_service,
)
from web.dependencies import get_session

templates = Jinja2Templates(directory=str(Path(__file__).parent / 'templates'))

router = APIRouter(default_response_class=HTMLResponse)

# path -> (title, fetch, columns)
TABLES = {
    'species': ('Species', species_service.get_all, ['code', 'name', 'size', 'speed', 'description']),
    'classes': ('Classes', character_class_service.get_all, ['code', 'name', 'hit_die', 'primary_ability']),
    'attribute-names': (
        'Attributes',
        attribute_name_service.get_all,
        ['display_order', 'code', 'abbreviation', 'name'],
    ),
    'skills': ('Skills', skill_service.get_all, ['code', 'name', 'attribute_code']),
    'items': ('Items', item_service.get_all, ['id', 'name', 'item_type', 'quantity', 'weight', 'value_copper']),
    'characters': (
        'Characters',
        character_service.get_all,
        ['id', 'name', 'species_code', 'class_code', 'level', 'hit_points_current', 'hit_points_max'],
    ),
}


@router.get('/')
def index(request: Request):
    tables = [{'path': path, 'title': title} for path, (title, _, _) in TABLES.items()]
    return templates.TemplateResponse(request, 'index.html', {'tables': tables})


def table_page(path: str):
    title, fetch, columns = TABLES[path]

    def page(request: Request, session: Session = Depends(get_session)):
        return templates.TemplateResponse(
            request,
            'table.html',
            {'title': title, 'path': path, 'columns': columns, 'rows': fetch(session)},
        )

    return page


for _path in TABLES:
    router.add_api_route(f'/{_path}', table_page(_path), methods=['GET'], name=f'{_path}_page')


@router.get('/characters/{character_id}')
def character_sheet(character_id: int, request: Request, session: Session = Depends(get_session)):
    character = character_service.get_with_details(session, {'id': character_id})
    if character is None:
        raise HTTPException(status_code=404, detail='Character not found')

    return templates.TemplateResponse(
        request,
        'character.html',
        {
            'character': character,
            'attributes': character_service.get_attributes(session, {'character_id': character_id}),
            'skills': character_service.get_skills(session, {'character_id': character_id}),
        },
    )
