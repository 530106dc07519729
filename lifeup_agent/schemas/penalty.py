from typing import Literal, Optional

from pydantic import BaseModel, Field, PositiveInt


class PenaltyApply(BaseModel):
    type: Literal["coin", "exp", "item"]
    content: str = Field(..., min_length=1, max_length=200)
    number: int = Field(..., ge=1, le=999999)
    # Only meaningful for exp penalties
    skills: Optional[list[PositiveInt]] = None
    item_id: Optional[PositiveInt] = None
    item_name: Optional[str] = Field(None, min_length=1, max_length=100)
    silent: Optional[bool] = None
