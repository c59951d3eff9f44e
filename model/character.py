from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field

from model.base import Params, timestamp_field


class Character(SQLModel, table=True):
    __tablename__ = 'characters'

    id: Optional[int] = Field(default=None, primary_key=True)

    name: str = Field()
    species_code: str = Field(foreign_key='species.code')
    class_code: str = Field(foreign_key='classes.code')

    armor_class: Optional[int] = Field(default=None)
    inspiration: Optional[bool] = Field(default=None)
    level: Optional[int] = Field(default=None)
    hit_points_max: Optional[int] = Field(default=None)
    hit_points_current: Optional[int] = Field(default=None)

    created_at: Optional[datetime] = timestamp_field()
    updated_at: Optional[datetime] = timestamp_field()


class CharacterEntity(Params):
    name: str
    species_code: str
    class_code: str
    armor_class: Optional[int] = None
    inspiration: Optional[bool] = None
    level: Optional[int] = None
    hit_points_max: Optional[int] = None
    hit_points_current: Optional[int] = None


class CharacterUpdate(Params):
    id: int
    name: str = None
    species_code: str = None
    class_code: str = None
    armor_class: Optional[int] = None
    inspiration: Optional[bool] = None
    level: Optional[int] = None
    hit_points_max: Optional[int] = None
    hit_points_current: Optional[int] = None
