"""
Species enumeration table.

Species are keyed by a natural string code ("elf", "dwarf", ...).
"""

from typing import Any, Optional

from sqlalchemy import delete, insert, select, update
from sqlmodel import Session

from model.base import CodeParams
from model.species import Species, SpeciesEntity, SpeciesUpdate
from service.repository_service import changes, execute, query, query_one, validate

species_table = Species.__table__


def get_all(session: Session, _params: Optional[dict] = None) -> list[dict[str, Any]]:
    """All species ordered by name."""
    return query(session, select(species_table).order_by(species_table.c.name))


def get_by_code(session: Session, params: dict) -> Optional[dict[str, Any]]:
    code = validate(CodeParams, params).code
    return query_one(session, select(species_table).where(species_table.c.code == code))


def insert_species(session: Session, species: dict) -> int:
    record = validate(SpeciesEntity, species)
    return execute(session, insert(species_table).values(**record.model_dump(exclude_unset=True)))


def update_species(session: Session, species: dict) -> int:
    """
    Update the provided fields of the species with the given code.

    Returns the number of rows changed, 0 when the code is unknown.
    """
    record = validate(SpeciesUpdate, species)
    return execute(
        session,
        update(species_table)
        .where(species_table.c.code == record.code)
        .values(**changes(record, 'code')),
    )


def delete_species(session: Session, params: dict) -> int:
    code = validate(CodeParams, params).code
    return execute(session, delete(species_table).where(species_table.c.code == code))
