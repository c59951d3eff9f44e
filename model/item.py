from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field

from model.base import Params, timestamp_field


class Item(SQLModel, table=True):
    __tablename__ = 'items'

    id: Optional[int] = Field(default=None, primary_key=True)

    name: str = Field()
    description: Optional[str] = Field(default=None)
    item_type: Optional[str] = Field(default=None)
    quantity: Optional[int] = Field(default=None)
    weight: Optional[float] = Field(default=None)
    value_copper: Optional[int] = Field(default=None)
    properties: Optional[str] = Field(default=None)

    created_at: Optional[datetime] = timestamp_field()


class ItemEntity(Params):
    name: str
    description: Optional[str] = None
    item_type: Optional[str] = None
    quantity: Optional[int] = None
    weight: Optional[float] = None
    value_copper: Optional[int] = None
    properties: Optional[str] = None


class ItemUpdate(Params):
    id: int
    name: str = None
    description: Optional[str] = None
    item_type: Optional[str] = None
    quantity: Optional[int] = None
    weight: Optional[float] = None
    value_copper: Optional[int] = None
    properties: Optional[str] = None


class ItemsByTypeParams(Params):
    item_type: str
