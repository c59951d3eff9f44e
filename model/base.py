from typing import Annotated

from pydantic import BaseModel, ConfigDict, StringConstraints
from sqlalchemy import text
from sqlmodel import Field

Code = Annotated[str, StringConstraints(min_length=1)]


def timestamp_field():
    return Field(default=None, sa_column_kwargs={'server_default': text('CURRENT_TIMESTAMP')})


class Params(BaseModel):
    """
    Shape of a parameter map: no coercion, no unknown keys.
    """
    model_config = ConfigDict(strict=True, extra='forbid')


class CodeParams(Params):
    code: Code


class IdParams(Params):
    id: int


class CharacterIdParams(Params):
    character_id: int
