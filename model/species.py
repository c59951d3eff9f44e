from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field

from model.base import Code, Params, timestamp_field


class Species(SQLModel, table=True):
    __tablename__ = 'species'

    code: str = Field(primary_key=True)

    name: str = Field()
    description: Optional[str] = Field(default=None)
    size: Optional[str] = Field(default=None)
    speed: Optional[int] = Field(default=None)
    special_traits: Optional[str] = Field(default=None)

    created_at: Optional[datetime] = timestamp_field()


class SpeciesEntity(Params):
    code: Code
    name: str
    description: Optional[str] = None
    size: Optional[str] = None
    speed: Optional[int] = None
    special_traits: Optional[str] = None


class SpeciesUpdate(Params):
    code: Code
    name: str = None
    description: Optional[str] = None
    size: Optional[str] = None
    speed: Optional[int] = None
    special_traits: Optional[str] = None
