"""Shared request fragments: reward items, unlock conditions, shop effects and value types."""

import re
from enum import Enum
from typing import Annotated, Any, Literal, Optional
from urllib.parse import urlparse

from pydantic import AfterValidator, BaseModel, Field

HEX_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")


class SetType(str, Enum):
    absolute = "absolute"
    relative = "relative"


def _check_hex_color(v: str) -> str:
    if not HEX_COLOR_RE.match(v):
        raise ValueError("Color must be hex format (e.g., #66CCFF)")
    return v


def _check_url(v: str) -> str:
    parsed = urlparse(v)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("Must be a valid http(s) URL")
    return v


HexColor = Annotated[str, AfterValidator(_check_hex_color)]
WebUrl = Annotated[str, AfterValidator(_check_url)]


class ItemReward(BaseModel):
    item_id: int = Field(..., gt=0)
    amount: int = Field(..., ge=1, le=99)


class AchievementCondition(BaseModel):
    type: int = Field(..., ge=0, le=20)
    target: int = Field(..., gt=0)
    related_id: Optional[int] = Field(None, gt=0)


class ItemEffect(BaseModel):
    type: int = Field(..., ge=0, le=9)
    info: Any = None


class PurchaseLimit(BaseModel):
    type: Literal["daily", "total"]
    value: int = Field(..., gt=0)
