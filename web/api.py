"""
JSON API over the record tables.

Handlers only translate HTTP to table calls: path keys are merged into the
body, missing rows become 404, and validation and integrity errors are
turned into responses by the app's exception handlers.
"""

from typing import Any, Callable, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Response
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

router = APIRouter()

NO_CONTENT = 204


def found(record: Optional[dict], label: str) -> dict:
    if record is None:
        raise HTTPException(status_code=404, detail=f'{label} not found')
    return record


def changed(count: int, label: str) -> None:
    if count == 0:
        raise HTTPException(status_code=404, detail=f'{label} not found')


# region CODE TABLES

def register_code_table(
        path: str,
        label: str,
        get_all: Callable,
        get_by_code: Callable,
        insert: Callable,
        update: Callable,
        delete: Callable,
        with_list: bool = True,
) -> None:
    """Register list/get/create/update/delete routes for a table keyed by `code`."""

    def list_records(session: Session = Depends(get_session)) -> list[dict]:
        return get_all(session)

    def get_record(code: str, session: Session = Depends(get_session)) -> dict:
        return found(get_by_code(session, {'code': code}), label)

    def create_record(payload: dict[str, Any] = Body(...), session: Session = Depends(get_session)) -> dict:
        insert(session, payload)
        return found(get_by_code(session, {'code': payload['code']}), label)

    def update_record(
            code: str,
            payload: dict[str, Any] = Body(...),
            session: Session = Depends(get_session),
    ) -> dict:
        changed(update(session, {**payload, 'code': code}), label)
        return found(get_by_code(session, {'code': code}), label)

    def delete_record(code: str, session: Session = Depends(get_session)) -> Response:
        changed(delete(session, {'code': code}), label)
        return Response(status_code=NO_CONTENT)

    tag = path.strip('/')
    if with_list:
        router.add_api_route(path, list_records, methods=['GET'], tags=[tag], name=f'list_{tag}')
    router.add_api_route(path, create_record, methods=['POST'], status_code=201, tags=[tag], name=f'create_{tag}')
    router.add_api_route(f'{path}/{{code}}', get_record, methods=['GET'], tags=[tag], name=f'get_{tag}')
    router.add_api_route(f'{path}/{{code}}', update_record, methods=['PUT'], tags=[tag], name=f'update_{tag}')
    router.add_api_route(
        f'{path}/{{code}}', delete_record, methods=['DELETE'], status_code=NO_CONTENT, tags=[tag], name=f'delete_{tag}',
    )


@router.get('/skills', tags=['skills'])
def list_skills(attribute_code: Optional[str] = None, session: Session = Depends(get_session)) -> list[dict]:
    if attribute_code is None:
        return skill_service.get_all(session)
    return skill_service.get_by_attribute(session, {'attribute_code': attribute_code})


register_code_table(
    '/species', 'Species',
    species_service.get_all,
    species_service.get_by_code,
    species_service.insert_species,
    species_service.update_species,
    species_service.delete_species,
)
register_code_table(
    '/classes', 'Class',
    character_class_service.get_all,
    character_class_service.get_by_code,
    character_class_service.insert_class,
    character_class_service.update_class,
    character_class_service.delete_class,
)
register_code_table(
    '/attribute-names', 'Attribute name',
    attribute_name_service.get_all,
    attribute_name_service.get_by_code,
    attribute_name_service.insert_attribute_name,
    attribute_name_service.update_attribute_name,
    attribute_name_service.delete_attribute_name,
)
register_code_table(
    '/skills', 'Skill',
    skill_service.get_all,
    skill_service.get_by_code,
    skill_service.insert_skill,
    skill_service.update_skill,
    skill_service.delete_skill,
    with_list=False,
)

# endregion


# region ITEMS

@router.get('/items', tags=['items'])
def list_items(item_type: Optional[str] = None, session: Session = Depends(get_session)) -> list[dict]:
    if item_type is None:
        return item_service.get_all(session)
    return item_service.get_by_type(session, {'item_type': item_type})


@router.post('/items', status_code=201, tags=['items'])
def create_item(payload: dict[str, Any] = Body(...), session: Session = Depends(get_session)) -> dict:
    return item_service.insert_item(session, payload)


@router.get('/items/{item_id}', tags=['items'])
def get_item(item_id: int, session: Session = Depends(get_session)) -> dict:
    return found(item_service.get_by_id(session, {'id': item_id}), 'Item')


@router.put('/items/{item_id}', tags=['items'])
def update_item(item_id: int, payload: dict[str, Any] = Body(...), session: Session = Depends(get_session)) -> dict:
    changed(item_service.update_item(session, {**payload, 'id': item_id}), 'Item')
    return found(item_service.get_by_id(session, {'id': item_id}), 'Item')


@router.delete('/items/{item_id}', status_code=NO_CONTENT, tags=['items'])
def delete_item(item_id: int, session: Session = Depends(get_session)) -> Response:
    changed(item_service.delete_item(session, {'id': item_id}), 'Item')
    return Response(status_code=NO_CONTENT)

# endregion


# region CHARACTERS

def existing_character(character_id: int, session: Session) -> dict:
    return found(character_service.get_by_id(session, {'id': character_id}), 'Character')


@router.get('/characters', tags=['characters'])
def list_characters(session: Session = Depends(get_session)) -> list[dict]:
    return character_service.get_all(session)


@router.post('/characters', status_code=201, tags=['characters'])
def create_character(payload: dict[str, Any] = Body(...), session: Session = Depends(get_session)) -> dict:
    return character_service.insert_character(session, payload)


@router.get('/characters/{character_id}', tags=['characters'])
def get_character(character_id: int, details: bool = False, session: Session = Depends(get_session)) -> dict:
    if details:
        return found(character_service.get_with_details(session, {'id': character_id}), 'Character')
    return existing_character(character_id, session)


@router.put('/characters/{character_id}', tags=['characters'])
def update_character(
        character_id: int,
        payload: dict[str, Any] = Body(...),
        session: Session = Depends(get_session),
) -> dict:
    changed(character_service.update_character(session, {**payload, 'id': character_id}), 'Character')
    return existing_character(character_id, session)


@router.delete('/characters/{character_id}', status_code=NO_CONTENT, tags=['characters'])
def delete_character(character_id: int, session: Session = Depends(get_session)) -> Response:
    changed(character_service.delete_character(session, {'id': character_id}), 'Character')
    return Response(status_code=NO_CONTENT)


@router.get('/characters/{character_id}/attributes', tags=['characters'])
def list_character_attributes(character_id: int, session: Session = Depends(get_session)) -> list[dict]:
    existing_character(character_id, session)
    return character_service.get_attributes(session, {'character_id': character_id})


@router.delete('/characters/{character_id}/attributes', status_code=NO_CONTENT, tags=['characters'])
def delete_character_attributes(character_id: int, session: Session = Depends(get_session)) -> Response:
    existing_character(character_id, session)
    character_service.delete_all_attributes(session, {'character_id': character_id})
    return Response(status_code=NO_CONTENT)


@router.get('/characters/{character_id}/attributes/{attribute_code}', tags=['characters'])
def get_character_attribute(character_id: int, attribute_code: str, session: Session = Depends(get_session)) -> dict:
    key = {'character_id': character_id, 'attribute_code': attribute_code}
    return found(character_service.get_attribute(session, key), 'Character attribute')


@router.put('/characters/{character_id}/attributes/{attribute_code}', tags=['characters'])
def set_character_attribute(
        character_id: int,
        attribute_code: str,
        payload: dict[str, Any] = Body(...),
        session: Session = Depends(get_session),
) -> dict:
    existing_character(character_id, session)
    key = {'character_id': character_id, 'attribute_code': attribute_code}
    character_service.set_attribute(session, {**payload, **key})
    return found(character_service.get_attribute(session, key), 'Character attribute')


@router.delete('/characters/{character_id}/attributes/{attribute_code}', status_code=NO_CONTENT, tags=['characters'])
def delete_character_attribute(character_id: int, attribute_code: str, session: Session = Depends(get_session)) -> Response:
    key = {'character_id': character_id, 'attribute_code': attribute_code}
    changed(character_service.delete_attribute(session, key), 'Character attribute')
    return Response(status_code=NO_CONTENT)


@router.get('/characters/{character_id}/skills', tags=['characters'])
def list_character_skills(character_id: int, session: Session = Depends(get_session)) -> list[dict]:
    existing_character(character_id, session)
    return character_service.get_skills(session, {'character_id': character_id})


@router.post('/characters/{character_id}/skills', status_code=201, tags=['characters'])
def add_character_skill(
        character_id: int,
        payload: dict[str, Any] = Body(...),
        session: Session = Depends(get_session),
) -> dict:
    existing_character(character_id, session)
    character_service.add_skill(session, {**payload, 'character_id': character_id})
    key = {'character_id': character_id, 'skill_code': payload['skill_code']}
    return found(character_service.get_skill(session, key), 'Character skill')


@router.delete('/characters/{character_id}/skills', status_code=NO_CONTENT, tags=['characters'])
def delete_character_skills(character_id: int, session: Session = Depends(get_session)) -> Response:
    existing_character(character_id, session)
    character_service.remove_all_skills(session, {'character_id': character_id})
    return Response(status_code=NO_CONTENT)


@router.get('/characters/{character_id}/skills/{skill_code}', tags=['characters'])
def get_character_skill(character_id: int, skill_code: str, session: Session = Depends(get_session)) -> dict:
    key = {'character_id': character_id, 'skill_code': skill_code}
    return found(character_service.get_skill(session, key), 'Character skill')


@router.put('/characters/{character_id}/skills/{skill_code}', tags=['characters'])
def set_character_skill(
        character_id: int,
        skill_code: str,
        payload: dict[str, Any] = Body(...),
        session: Session = Depends(get_session),
) -> dict:
    existing_character(character_id, session)
    key = {'character_id': character_id, 'skill_code': skill_code}
    character_service.set_skill(session, {**payload, **key})
    return found(character_service.get_skill(session, key), 'Character skill')


@router.delete('/characters/{character_id}/skills/{skill_code}', status_code=NO_CONTENT, tags=['characters'])
def delete_character_skill(character_id: int, skill_code: str, session: Session = Depends(get_session)) -> Response:
    key = {'character_id': character_id, 'skill_code': skill_code}
    changed(character_service.remove_skill(session, key), 'Character skill')
    return Response(status_code=NO_CONTENT)

# endregion
