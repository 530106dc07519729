from typing import Optional

from pydantic import BaseModel, Field, NonNegativeInt, PositiveInt

from lifeup_agent.schemas.common import AchievementCondition, HexColor, ItemReward, SetType


class AchievementCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    category_id: PositiveInt
    desc: Optional[str] = Field(None, max_length=500)
    conditions_json: Optional[list[AchievementCondition]] = None
    exp: Optional[NonNegativeInt] = None
    coin: Optional[int] = Field(None, ge=0, le=999999)
    coin_var: Optional[NonNegativeInt] = None
    skills: Optional[list[PositiveInt]] = None
    items: Optional[list[ItemReward]] = None
    item_id: Optional[PositiveInt] = None
    item_amount: Optional[int] = Field(None, ge=1, le=99)
    secret: Optional[bool] = None
    color: Optional[HexColor] = None
    unlocked: bool = False
    write_feeling: Optional[bool] = None


class AchievementUpdate(BaseModel):
    edit_id: PositiveInt
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    category_id: Optional[PositiveInt] = None
    desc: Optional[str] = Field(None, max_length=500)
    # Not editable remotely; a non-empty list triggers delete + recreate
    conditions_json: Optional[list[AchievementCondition]] = None
    exp: Optional[int] = None
    exp_set_type: Optional[SetType] = None
    coin: Optional[int] = None
    coin_set_type: Optional[SetType] = None
    coin_var: Optional[NonNegativeInt] = None
    skills: Optional[list[PositiveInt]] = None
    items: Optional[list[ItemReward]] = None
    item_id: Optional[PositiveInt] = None
    item_amount: Optional[int] = Field(None, ge=1, le=99)
    secret: Optional[bool] = None
    color: Optional[HexColor] = None
    unlocked: Optional[bool] = None
    write_feeling: Optional[bool] = None


class AchievementDelete(BaseModel):
    edit_id: PositiveInt
