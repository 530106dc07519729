from typing import Optional

from pydantic import BaseModel, Field, NonNegativeInt, PositiveInt

from lifeup_agent.schemas.common import HexColor


class SkillEdit(BaseModel):
    # No id creates a new skill; with id the skill is edited (or deleted)
    id: Optional[PositiveInt] = None
    content: Optional[str] = Field(None, min_length=1, max_length=100)
    desc: Optional[str] = Field(None, max_length=500)
    icon: Optional[str] = Field(None, max_length=10)
    color: Optional[HexColor] = None
    type: Optional[NonNegativeInt] = None
    order: Optional[int] = None
    status: Optional[int] = None
    exp: Optional[NonNegativeInt] = None
    delete: Optional[bool] = None
