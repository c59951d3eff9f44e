from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field

from model.base import Code, Params, timestamp_field


class Skill(SQLModel, table=True):
    __tablename__ = 'skills'

    code: str = Field(primary_key=True)

    name: str = Field()
    attribute_code: str = Field(foreign_key='attribute_names.code')
    description: Optional[str] = Field(default=None)

    created_at: Optional[datetime] = timestamp_field()


class SkillEntity(Params):
    code: Code
    name: str
    attribute_code: Code
    description: Optional[str] = None


class SkillUpdate(Params):
    code: Code
    name: str = None
    attribute_code: Code = None
    description: Optional[str] = None


class SkillsByAttributeParams(Params):
    attribute_code: Code
