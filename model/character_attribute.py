from datetime import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field

from model.base import Params, timestamp_field


class CharacterAttribute(SQLModel, table=True):
    __tablename__ = 'character_attributes'
    __table_args__ = (UniqueConstraint('character_id', 'attribute_code'),)

    id: Optional[int] = Field(default=None, primary_key=True)

    character_id: int = Field(foreign_key='characters.id', ondelete='CASCADE')
    attribute_code: str = Field(foreign_key='attribute_names.code')

    attribute_value: int = Field()

    created_at: Optional[datetime] = timestamp_field()


class CharacterAttributeKey(Params):
    character_id: int
    attribute_code: str


class CharacterAttributeValue(CharacterAttributeKey):
    attribute_value: int
