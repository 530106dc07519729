from typing import Optional

from pydantic import BaseModel, Field, NonNegativeInt, PositiveInt

from lifeup_agent.schemas.common import HexColor, ItemEffect, PurchaseLimit, SetType, WebUrl


class ShopItemCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    desc: Optional[str] = Field(None, max_length=500)
    icon: Optional[WebUrl] = None
    title_color_string: Optional[HexColor] = None
    price: Optional[NonNegativeInt] = None
    # -1 means unlimited stock
    stock_number: Optional[int] = Field(None, ge=-1, le=99999)
    action_text: Optional[str] = Field(None, max_length=50)
    disable_purchase: Optional[bool] = None
    disable_use: Optional[bool] = None
    category: Optional[NonNegativeInt] = None
    order: Optional[int] = None
    purchase_limit: Optional[list[PurchaseLimit]] = None
    effects: Optional[list[ItemEffect]] = None
    own_number: Optional[NonNegativeInt] = None
    unlist: Optional[bool] = None


class ShopItemEdit(BaseModel):
    # Identification: id, or a fuzzy name match
    id: Optional[PositiveInt] = None
    name: Optional[str] = Field(None, min_length=1, max_length=100)

    set_name: Optional[str] = Field(None, min_length=1, max_length=100)
    set_desc: Optional[str] = Field(None, max_length=500)
    set_icon: Optional[WebUrl] = None
    set_price: Optional[int] = None
    set_price_type: Optional[SetType] = None
    own_number: Optional[int] = None
    own_number_type: Optional[SetType] = None
    stock_number: Optional[int] = None
    stock_number_type: Optional[SetType] = None
    disable_purchase: Optional[bool] = None
    disable_use: Optional[bool] = None
    action_text: Optional[str] = Field(None, max_length=50)
    title_color_string: Optional[HexColor] = None
    effects: Optional[list[ItemEffect]] = None
    purchase_limit: Optional[list[PurchaseLimit]] = None
    category_id: Optional[NonNegativeInt] = None
    order: Optional[int] = None
    unlist: Optional[bool] = None
