from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field

from model.base import Params, timestamp_field


class CharacterSkill(SQLModel, table=True):
    __tablename__ = 'character_skills'

    character_id: int = Field(primary_key=True, foreign_key='characters.id', ondelete='CASCADE')
    skill_code: str = Field(primary_key=True, foreign_key='skills.code')

    proficiency_level: Optional[int] = Field(default=None)

    created_at: Optional[datetime] = timestamp_field()


class CharacterSkillKey(Params):
    character_id: int
    skill_code: str


class CharacterSkillLevel(CharacterSkillKey):
    proficiency_level: int
