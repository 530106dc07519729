"""Request encoder: validated requests -> ``lifeup://api/...`` command URLs.

Each builder lists its parameters as ordered ``(key, value)`` pairs in the
order LifeUp expects. ``encode_query`` is the single place where values are
rendered and percent-encoded:

* ``None`` and empty lists are omitted, never sent as empty values
* booleans render as ``true`` / ``false``
* lists of scalars become repeated parameters (``skills=1&skills=2``)
* lists of models become one parameter holding compact JSON
* spaces render as ``%20`` (not ``+``) and ``#`` as ``%23``
"""

import json
from enum import Enum
from typing import Any, Iterable
from urllib.parse import urlencode

from pydantic import BaseModel

from lifeup_agent.schemas import (
    AchievementCreate,
    AchievementDelete,
    AchievementUpdate,
    PenaltyApply,
    ShopItemCreate,
    ShopItemEdit,
    SkillEdit,
    SubtaskCreate,
    SubtaskDefinition,
    SubtaskEdit,
    TaskCreate,
    TaskDelete,
    TaskEdit,
)
from lifeup_agent.services.set_type import adjustment_pairs

TASK_CREATE_PATH = "lifeup://api/add_task"
TASK_EDIT_PATH = "lifeup://api/edit_task"
TASK_DELETE_PATH = "lifeup://api/delete_task"
SUBTASK_CREATE_PATH = "lifeup://api/subtask"
SUBTASK_EDIT_PATH = "lifeup://api/edit_subtask"
ACHIEVEMENT_PATH = "lifeup://api/achievement"
ITEM_PATH = "lifeup://api/item"
PENALTY_PATH = "lifeup://api/penalty"
SKILL_PATH = "lifeup://api/skill"

Pairs = list[tuple[str, Any]]


# ---------------------------------------------------------------------------
# Canonical encoding
# ---------------------------------------------------------------------------


def _render(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _expand(pairs: Iterable[tuple[str, Any]]) -> list[tuple[str, str]]:
    out = []
    for key, value in pairs:
        if value is None:
            continue
        if isinstance(value, list):
            if not value:
                continue
            if isinstance(value[0], BaseModel):
                payload = [v.model_dump(exclude_none=True) for v in value]
                out.append((key, json.dumps(payload, separators=(",", ":"), ensure_ascii=False)))
            else:
                out.extend((key, _render(v)) for v in value)
            continue
        out.append((key, _render(value)))
    return out


def encode_query(pairs: Iterable[tuple[str, Any]]) -> str:
    # urlencode uses quote_plus: spaces become "+", a literal "+" becomes %2B
    return urlencode(_expand(pairs)).replace("+", "%20")


def build_url(path: str, pairs: Iterable[tuple[str, Any]]) -> str:
    query = encode_query(pairs)
    return f"{path}?{query}" if query else path


# ---------------------------------------------------------------------------
# Tasks and subtasks
# ---------------------------------------------------------------------------


def _item_reward_pairs(req: Any) -> Pairs:
    return [
        ("item_id", req.item_id),
        ("item_name", req.item_name),
        ("item_amount", req.item_amount),
        ("items", req.items),
    ]


def build_create_task_url(req: TaskCreate) -> str:
    pairs: Pairs = [
        ("todo", req.name),
        ("exp", req.exp),
        ("coin", req.coin),
        ("coin_var", req.coin_var),
        ("category", req.category_id),
        ("deadline", req.deadline),
        ("notes", req.content),
        ("skills", req.skill_ids),
        ("frequency", req.frequency),
        ("auto_use_item", req.auto_use_item),
        ("task_type", req.task_type),
        ("target_times", req.target_times),
        ("is_affect_shop_reward", req.is_affect_shop_reward),
    ]
    pairs += _item_reward_pairs(req)
    return build_url(TASK_CREATE_PATH, pairs)


def build_edit_task_url(req: TaskEdit) -> str:
    pairs: Pairs = [
        ("id", req.id),
        ("gid", req.gid),
        ("name", req.name),
        ("todo", req.todo),
        ("notes", req.notes),
    ]
    pairs += adjustment_pairs("coin", req.coin, req.coin_set_type, "coin_set_type")
    pairs.append(("coin_var", req.coin_var))
    pairs += adjustment_pairs("exp", req.exp, req.exp_set_type, "exp_set_type")
    pairs += [
        ("skills", req.skills),
        ("category", req.category),
        ("frequency", req.frequency),
        ("deadline", req.deadline),
        ("remind_time", req.remind_time),
        ("start_time", req.start_time),
        ("color", req.color),
        ("background_url", req.background_url),
        ("background_alpha", req.background_alpha),
        ("enable_outline", req.enable_outline),
        ("use_light_remark_text_color", req.use_light_remark_text_color),
    ]
    pairs += _item_reward_pairs(req)
    pairs += [
        ("auto_use_item", req.auto_use_item),
        ("frozen", req.frozen),
        ("task_type", req.task_type),
        ("target_times", req.target_times),
        ("is_affect_shop_reward", req.is_affect_shop_reward),
    ]
    return build_url(TASK_EDIT_PATH, pairs)


def build_delete_task_url(req: TaskDelete) -> str:
    return build_url(TASK_DELETE_PATH, [("id", req.id)])


def _subtask_body_pairs(req: SubtaskDefinition) -> Pairs:
    pairs: Pairs = [
        ("todo", req.todo),
        ("remind_time", req.remind_time),
        ("order", req.order),
        ("coin", req.coin),
        ("coin_var", req.coin_var),
        ("exp", req.exp),
        ("auto_use_item", req.auto_use_item),
    ]
    return pairs + _item_reward_pairs(req)


def build_create_subtask_url(req: SubtaskCreate) -> str:
    pairs: Pairs = [
        ("main_id", req.main_id),
        ("main_gid", req.main_gid),
        ("main_name", req.main_name),
    ]
    return build_url(SUBTASK_CREATE_PATH, pairs + _subtask_body_pairs(req))


def build_edit_subtask_url(req: SubtaskEdit) -> str:
    pairs: Pairs = [
        ("main_id", req.main_id),
        ("main_gid", req.main_gid),
        ("main_name", req.main_name),
        ("edit_id", req.edit_id),
        ("edit_gid", req.edit_gid),
        ("edit_name", req.edit_name),
        ("todo", req.todo),
        ("remind_time", req.remind_time),
        ("order", req.order),
    ]
    pairs += adjustment_pairs("coin", req.coin, req.coin_set_type, "coin_set_type")
    pairs.append(("coin_var", req.coin_var))
    pairs += adjustment_pairs("exp", req.exp, req.exp_set_type, "exp_set_type")
    pairs.append(("auto_use_item", req.auto_use_item))
    pairs += _item_reward_pairs(req)
    return build_url(SUBTASK_EDIT_PATH, pairs)


# ---------------------------------------------------------------------------
# Achievements
# ---------------------------------------------------------------------------


def _achievement_reward_pairs(req: Any) -> Pairs:
    return [
        ("skills", req.skills),
        ("items", req.items),
        ("item_id", req.item_id),
        ("item_amount", req.item_amount),
        ("secret", req.secret),
        ("unlocked", req.unlocked),
        ("write_feeling", req.write_feeling),
        ("color", req.color),
    ]


def build_create_achievement_url(req: AchievementCreate) -> str:
    pairs: Pairs = [
        ("name", req.name),
        ("category_id", req.category_id),
        ("desc", req.desc),
        ("exp", req.exp),
        ("coin", req.coin),
        ("coin_var", req.coin_var),
        ("conditions_json", req.conditions_json),
    ]
    return build_url(ACHIEVEMENT_PATH, pairs + _achievement_reward_pairs(req))


def build_update_achievement_url(req: AchievementUpdate) -> str:
    # conditions_json cannot be changed in place; see achievement_service.update_achievement
    pairs: Pairs = [
        ("edit_id", req.edit_id),
        ("name", req.name),
        ("category_id", req.category_id),
        ("desc", req.desc),
    ]
    pairs += adjustment_pairs("exp", req.exp, req.exp_set_type, "exp_set_type")
    pairs += adjustment_pairs("coin", req.coin, req.coin_set_type, "coin_set_type")
    pairs.append(("coin_var", req.coin_var))
    return build_url(ACHIEVEMENT_PATH, pairs + _achievement_reward_pairs(req))


def build_delete_achievement_url(req: AchievementDelete) -> str:
    return build_url(ACHIEVEMENT_PATH, [("edit_id", req.edit_id), ("delete", True)])


# ---------------------------------------------------------------------------
# Shop items, penalties, skills
# ---------------------------------------------------------------------------


def build_add_shop_item_url(req: ShopItemCreate) -> str:
    pairs: Pairs = [
        ("name", req.name),
        ("desc", req.desc),
        ("icon", req.icon),
        ("title_color_string", req.title_color_string),
        ("price", req.price),
        ("stock_number", req.stock_number),
        ("action_text", req.action_text),
        ("disable_purchase", req.disable_purchase),
        ("disable_use", req.disable_use),
        ("category", req.category),
        ("order", req.order),
        ("purchase_limit", req.purchase_limit),
        ("effects", req.effects),
        ("own_number", req.own_number),
        ("unlist", req.unlist),
    ]
    return build_url(ITEM_PATH, pairs)


def build_edit_shop_item_url(req: ShopItemEdit) -> str:
    pairs: Pairs = [
        ("id", req.id),
        ("name", req.name),
        ("set_name", req.set_name),
        ("set_desc", req.set_desc),
        ("set_icon", req.set_icon),
    ]
    pairs += adjustment_pairs("set_price", req.set_price, req.set_price_type, "set_price_type")
    pairs += adjustment_pairs("own_number", req.own_number, req.own_number_type, "own_number_type")
    pairs += adjustment_pairs("stock_number", req.stock_number, req.stock_number_type, "stock_number_type")
    pairs += [
        ("disable_purchase", req.disable_purchase),
        ("disable_use", req.disable_use),
        ("action_text", req.action_text),
        ("title_color_string", req.title_color_string),
        ("effects", req.effects),
        ("purchase_limit", req.purchase_limit),
        ("category_id", req.category_id),
        ("order", req.order),
        ("unlist", req.unlist),
    ]
    return build_url(ITEM_PATH, pairs)


def build_penalty_url(req: PenaltyApply) -> str:
    pairs: Pairs = [
        ("type", req.type),
        ("content", req.content),
        ("number", req.number),
        ("skills", req.skills),
        ("item_id", req.item_id),
        ("item_name", req.item_name),
        ("silent", req.silent),
    ]
    return build_url(PENALTY_PATH, pairs)


def build_skill_url(req: SkillEdit) -> str:
    pairs: Pairs = [
        ("id", req.id),
        ("content", req.content),
        ("desc", req.desc),
        ("icon", req.icon),
        ("color", req.color),
        ("type", req.type),
        ("order", req.order),
        ("status", req.status),
        ("exp", req.exp),
        # Only ever emitted as delete=true
        ("delete", True if req.delete else None),
    ]
    return build_url(SKILL_PATH, pairs)


BUILDERS = {
    "create_task": build_create_task_url,
    "edit_task": build_edit_task_url,
    "delete_task": build_delete_task_url,
    "create_subtask": build_create_subtask_url,
    "edit_subtask": build_edit_subtask_url,
    "create_achievement": build_create_achievement_url,
    "update_achievement": build_update_achievement_url,
    "delete_achievement": build_delete_achievement_url,
    "add_shop_item": build_add_shop_item_url,
    "edit_shop_item": build_edit_shop_item_url,
    "apply_penalty": build_penalty_url,
    "edit_skill": build_skill_url,
}


def build_command(operation: str, request: BaseModel) -> str:
    builder = BUILDERS.get(operation)
    if builder is None:
        raise ValueError(f"'{operation}' is not a mutating operation")
    return builder(request)
