"""Read-only request shapes (search, history, achievement matching)."""

from typing import Literal, Optional

from pydantic import BaseModel, Field, NonNegativeInt, PositiveInt


class TaskSearch(BaseModel):
    model_config = {"populate_by_name": True}

    category_id: Optional[NonNegativeInt] = Field(None, alias="categoryId")
    search_query: Optional[str] = Field(None, max_length=200, alias="searchQuery")
    status: Literal["active", "completed", "all"] = "all"
    deadline_before: Optional[PositiveInt] = Field(None, alias="deadlineBefore")


class TaskHistoryQuery(BaseModel):
    offset: NonNegativeInt = 0
    limit: int = Field(100, ge=1, le=1000)


class AchievementMatchQuery(BaseModel):
    model_config = {"populate_by_name": True}

    task_name: str = Field(..., min_length=1, max_length=200, alias="taskName")
    category_id: Optional[PositiveInt] = Field(None, alias="categoryId")


class ShopItemSearch(BaseModel):
    model_config = {"populate_by_name": True}

    category_id: Optional[NonNegativeInt] = Field(None, alias="categoryId")
    search_query: Optional[str] = Field(None, max_length=200, alias="searchQuery")
    min_price: Optional[NonNegativeInt] = Field(None, alias="minPrice")
    max_price: Optional[NonNegativeInt] = Field(None, alias="maxPrice")
