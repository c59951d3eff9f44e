from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field

from model.base import Code, Params, timestamp_field


class AttributeName(SQLModel, table=True):
    __tablename__ = 'attribute_names'

    code: str = Field(primary_key=True)

    name: str = Field()
    abbreviation: Optional[str] = Field(default=None)
    description: Optional[str] = Field(default=None)
    display_order: Optional[int] = Field(default=None)

    created_at: Optional[datetime] = timestamp_field()


class AttributeNameEntity(Params):
    code: Code
    name: str
    abbreviation: Optional[str] = None
    description: Optional[str] = None
    display_order: Optional[int] = None


class AttributeNameUpdate(Params):
    code: Code
    name: str = None
    abbreviation: Optional[str] = None
    description: Optional[str] = None
    display_order: Optional[int] = None
