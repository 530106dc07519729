from typing import Optional

from pydantic import BaseModel, Field, NonNegativeInt, PositiveInt

from lifeup_agent.schemas.common import HexColor, ItemReward, SetType, WebUrl


class SubtaskDefinition(BaseModel):
    todo: str = Field(..., min_length=1, max_length=200)
    remind_time: Optional[NonNegativeInt] = None
    order: Optional[int] = None
    coin: Optional[int] = Field(None, ge=0, le=999999)
    coin_var: Optional[NonNegativeInt] = None
    exp: Optional[int] = Field(None, ge=0, le=99999)
    auto_use_item: Optional[bool] = None
    item_id: Optional[PositiveInt] = None
    item_name: Optional[str] = Field(None, min_length=1, max_length=100)
    item_amount: Optional[int] = Field(None, ge=1, le=99)
    items: Optional[list[ItemReward]] = None


class TaskCreate(BaseModel):
    model_config = {"populate_by_name": True}

    name: str = Field(..., min_length=1, max_length=200)
    exp: Optional[NonNegativeInt] = None
    coin: Optional[NonNegativeInt] = None
    coin_var: Optional[NonNegativeInt] = Field(None, alias="coinVar")
    category_id: Optional[NonNegativeInt] = Field(None, alias="categoryId")
    deadline: Optional[PositiveInt] = None
    content: Optional[str] = Field(None, max_length=1000)
    skill_ids: Optional[list[PositiveInt]] = Field(None, alias="skillIds", max_length=20)
    frequency: Optional[int] = Field(None, ge=-1)
    auto_use_item: Optional[bool] = None
    # 0 normal, 1 count, 2 negative, 3 external
    task_type: Optional[int] = Field(None, ge=0, le=3)
    target_times: Optional[PositiveInt] = None
    is_affect_shop_reward: Optional[bool] = None
    item_id: Optional[PositiveInt] = None
    item_name: Optional[str] = Field(None, min_length=1, max_length=100)
    item_amount: Optional[int] = Field(None, ge=1, le=99)
    items: Optional[list[ItemReward]] = None
    subtasks: Optional[list[SubtaskDefinition]] = None


class TaskEdit(BaseModel):
    # Identification: at least one of id / gid / name
    id: Optional[PositiveInt] = None
    gid: Optional[PositiveInt] = None
    name: Optional[str] = Field(None, min_length=1, max_length=200)

    todo: Optional[str] = Field(None, min_length=1, max_length=200)
    notes: Optional[str] = Field(None, max_length=1000)
    # Relative adjustments may be negative; absolute bounds are checked per set type
    coin: Optional[int] = None
    coin_set_type: Optional[SetType] = None
    coin_var: Optional[NonNegativeInt] = None
    exp: Optional[int] = None
    exp_set_type: Optional[SetType] = None
    skills: Optional[list[PositiveInt]] = Field(None, max_length=20)
    category: Optional[NonNegativeInt] = None
    frequency: Optional[int] = Field(None, ge=-1)
    deadline: Optional[PositiveInt] = None
    remind_time: Optional[NonNegativeInt] = None
    start_time: Optional[NonNegativeInt] = None
    color: Optional[HexColor] = None
    background_url: Optional[WebUrl] = None
    background_alpha: Optional[float] = Field(None, ge=0, le=1)
    enable_outline: Optional[bool] = None
    use_light_remark_text_color: Optional[bool] = None
    item_id: Optional[PositiveInt] = None
    item_name: Optional[str] = Field(None, min_length=1, max_length=100)
    item_amount: Optional[int] = Field(None, ge=1, le=99)
    items: Optional[list[ItemReward]] = None
    auto_use_item: Optional[bool] = None
    frozen: Optional[bool] = None
    task_type: Optional[int] = Field(None, ge=0, le=3)
    target_times: Optional[PositiveInt] = None
    is_affect_shop_reward: Optional[bool] = None


class TaskDelete(BaseModel):
    id: PositiveInt


class SubtaskCreate(SubtaskDefinition):
    main_id: Optional[PositiveInt] = None
    main_gid: Optional[PositiveInt] = None
    main_name: Optional[str] = Field(None, min_length=1, max_length=200)


class SubtaskEdit(BaseModel):
    main_id: Optional[PositiveInt] = None
    main_gid: Optional[PositiveInt] = None
    main_name: Optional[str] = Field(None, min_length=1, max_length=200)

    edit_id: Optional[PositiveInt] = None
    edit_gid: Optional[PositiveInt] = None
    edit_name: Optional[str] = Field(None, min_length=1, max_length=200)

    todo: Optional[str] = Field(None, min_length=1, max_length=200)
    remind_time: Optional[NonNegativeInt] = None
    order: Optional[int] = None
    coin: Optional[int] = None
    coin_set_type: Optional[SetType] = None
    coin_var: Optional[NonNegativeInt] = None
    exp: Optional[int] = None
    exp_set_type: Optional[SetType] = None
    auto_use_item: Optional[bool] = None
    item_id: Optional[PositiveInt] = None
    item_name: Optional[str] = Field(None, min_length=1, max_length=100)
    item_amount: Optional[int] = Field(None, ge=1, le=99)
    items: Optional[list[ItemReward]] = None
