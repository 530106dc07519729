from lifeup_agent.schemas.common import (
    AchievementCondition,
    ItemEffect,
    ItemReward,
    PurchaseLimit,
    SetType,
)
from lifeup_agent.schemas.task import (
    SubtaskCreate,
    SubtaskDefinition,
    SubtaskEdit,
    TaskCreate,
    TaskDelete,
    TaskEdit,
)
from lifeup_agent.schemas.achievement import AchievementCreate, AchievementDelete, AchievementUpdate
from lifeup_agent.schemas.shop import ShopItemCreate, ShopItemEdit
from lifeup_agent.schemas.penalty import PenaltyApply
from lifeup_agent.schemas.skill import SkillEdit
from lifeup_agent.schemas.query import (
    AchievementMatchQuery,
    ShopItemSearch,
    TaskHistoryQuery,
    TaskSearch,
)
