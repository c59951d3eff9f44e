from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field

from model.base import Code, Params, timestamp_field


class CharacterClass(SQLModel, table=True):
    __tablename__ = 'classes'

    code: str = Field(primary_key=True)

    name: str = Field()
    description: Optional[str] = Field(default=None)
    hit_die: Optional[int] = Field(default=None)
    primary_ability: Optional[str] = Field(default=None)
    saving_throw_proficiencies: Optional[str] = Field(default=None)
    armor_proficiencies: Optional[str] = Field(default=None)
    weapon_proficiencies: Optional[str] = Field(default=None)

    created_at: Optional[datetime] = timestamp_field()


class CharacterClassEntity(Params):
    code: Code
    name: str
    description: Optional[str] = None
    hit_die: Optional[int] = None
    primary_ability: Optional[str] = None
    saving_throw_proficiencies: Optional[str] = None
    armor_proficiencies: Optional[str] = None
    weapon_proficiencies: Optional[str] = None


class CharacterClassUpdate(Params):
    code: Code
    name: str = None
    description: Optional[str] = None
    hit_die: Optional[int] = None
    primary_ability: Optional[str] = None
    saving_throw_proficiencies: Optional[str] = None
    armor_proficiencies: Optional[str] = None
    weapon_proficiencies: Optional[str] = None
