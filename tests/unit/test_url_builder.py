"""Tests for the request encoder (lifeup:// command URLs)."""

from urllib.parse import parse_qs, urlsplit

import pytest

from lifeup_agent.schemas import (
    AchievementCreate,
    AchievementDelete,
    AchievementUpdate,
    PenaltyApply,
    ShopItemCreate,
    ShopItemEdit,
    SkillEdit,
    SubtaskCreate,
    SubtaskEdit,
    TaskDelete,
    TaskEdit,
)
from lifeup_agent.services import url_builder
from lifeup_agent.services.validation_engine import validate


def _query(url: str) -> str:
    return urlsplit(url).query


# ---------------------------------------------------------------------------
# Tasks
# ---------------------------------------------------------------------------


def test_create_task_scenario():
    request = validate("create_task", {"name": "Read Chapter 5", "exp": 50, "coin": 25, "skillIds": [1]}).value
    url = url_builder.build_command("create_task", request)
    assert url == "lifeup://api/add_task?todo=Read%20Chapter%205&exp=50&coin=25&skills=1"


def test_spaces_render_as_percent_20_never_plus():
    request = validate("create_task", {"name": "Morning run in the park"}).value
    url = url_builder.build_create_task_url(request)
    assert "+" not in url
    assert "todo=Morning%20run%20in%20the%20park" in url


def test_literal_plus_is_escaped():
    request = validate("create_task", {"name": "C++ basics"}).value
    assert "todo=C%2B%2B%20basics" in url_builder.build_create_task_url(request)


def test_skill_ids_are_repeated_params_in_order():
    request = validate("create_task", {"name": "Lift", "exp": 5, "skillIds": [3, 1, 2]}).value
    assert "skills=3&skills=1&skills=2" in url_builder.build_create_task_url(request)


def test_item_rewards_are_single_json_param():
    request = validate("create_task", {"name": "Lift", "items": [{"item_id": 5, "amount": 2}]}).value
    query = _query(url_builder.build_create_task_url(request))
    assert query.count("items=") == 1
    assert "items=%5B%7B%22item_id%22%3A5%2C%22amount%22%3A2%7D%5D" in query


def test_count_task_fields_and_booleans():
    request = validate(
        "create_task",
        {"name": "Pushups", "task_type": 1, "target_times": 30, "is_affect_shop_reward": False},
    ).value
    assert url_builder.build_create_task_url(request) == (
        "lifeup://api/add_task?todo=Pushups&task_type=1&target_times=30&is_affect_shop_reward=false"
    )


def test_content_maps_to_notes_and_category_to_category():
    request = validate("create_task", {"name": "A", "content": "page 10", "categoryId": 3}).value
    assert url_builder.build_create_task_url(request) == "lifeup://api/add_task?todo=A&category=3&notes=page%2010"


def test_edit_task_only_emits_supplied_fields():
    assert url_builder.build_edit_task_url(TaskEdit(id=5, todo="New")) == "lifeup://api/edit_task?id=5&todo=New"


def test_edit_task_color_is_escaped():
    url = url_builder.build_edit_task_url(TaskEdit(id=1, color="#66CCFF"))
    assert "color=%2366CCFF" in url
    assert "#" not in url


def test_edit_task_pairs_each_value_with_its_set_type():
    request = TaskEdit(id=2, coin=10, coin_set_type="relative", exp=5, skills=[1])
    query = _query(url_builder.build_edit_task_url(request))
    assert query == "id=2&coin=10&coin_set_type=relative&exp=5&exp_set_type=absolute&skills=1"


def test_set_type_without_value_is_dropped():
    request = TaskEdit(id=2, coin_set_type="relative")
    assert url_builder.build_edit_task_url(request) == "lifeup://api/edit_task?id=2"


def test_background_alpha_rendering():
    assert "background_alpha=0.5" in url_builder.build_edit_task_url(TaskEdit(id=1, background_alpha=0.5))
    assert "background_alpha=1&" not in url_builder.build_edit_task_url(TaskEdit(id=1, background_alpha=1.0))
    assert url_builder.build_edit_task_url(TaskEdit(id=1, background_alpha=1.0)).endswith("background_alpha=1")


def test_delete_task_uses_its_own_path():
    assert url_builder.build_delete_task_url(TaskDelete(id=42)) == "lifeup://api/delete_task?id=42"


def test_subtask_urls():
    create = SubtaskCreate(main_id=9, todo="Step 1", exp=5)
    assert url_builder.build_create_subtask_url(create) == "lifeup://api/subtask?main_id=9&todo=Step%201&exp=5"

    edit = SubtaskEdit(main_name="Trip", edit_id=3, coin=-2, coin_set_type="relative")
    assert url_builder.build_edit_subtask_url(edit) == (
        "lifeup://api/edit_subtask?main_name=Trip&edit_id=3&coin=-2&coin_set_type=relative"
    )


def test_unicode_values_round_trip():
    request = validate("create_task", {"name": "读书 30 分钟", "content": "第5章"}).value
    params = parse_qs(_query(url_builder.build_create_task_url(request)))
    assert params["todo"] == ["读书 30 分钟"]
    assert params["notes"] == ["第5章"]


def test_parsed_query_recovers_supplied_fields():
    data = {
        "name": "Read & summarise #3",
        "exp": 40,
        "coin": 10,
        "coinVar": 5,
        "deadline": 1735689600000,
        "skillIds": [1, 2],
        "auto_use_item": True,
    }
    request = validate("create_task", data).value
    params = parse_qs(_query(url_builder.build_create_task_url(request)))
    assert params == {
        "todo": ["Read & summarise #3"],
        "exp": ["40"],
        "coin": ["10"],
        "coin_var": ["5"],
        "deadline": ["1735689600000"],
        "skills": ["1", "2"],
        "auto_use_item": ["true"],
    }


# ---------------------------------------------------------------------------
# Achievements
# ---------------------------------------------------------------------------


def test_update_achievement_scenario():
    url = url_builder.build_command("update_achievement", AchievementUpdate(edit_id=109, secret=True))
    assert url == "lifeup://api/achievement?edit_id=109&secret=true"


def test_update_achievement_never_sends_conditions():
    request = AchievementUpdate(edit_id=7, conditions_json=[{"type": 1, "target": 3}], name="New")
    assert "conditions_json" not in url_builder.build_update_achievement_url(request)


def test_update_achievement_adjacent_markers():
    request = AchievementUpdate(edit_id=7, exp=100, exp_set_type="relative", coin=5, skills=[2])
    assert _query(url_builder.build_update_achievement_url(request)) == (
        "edit_id=7&exp=100&exp_set_type=relative&coin=5&coin_set_type=absolute&skills=2"
    )


def test_create_achievement_conditions_json():
    request = AchievementCreate(
        name="Bookworm",
        category_id=2,
        conditions_json=[{"type": 7, "target": 10}, {"type": 3, "target": 1, "related_id": 12}],
    )
    params = parse_qs(_query(url_builder.build_create_achievement_url(request)))
    assert params["conditions_json"] == ['[{"type":7,"target":10},{"type":3,"target":1,"related_id":12}]']
    assert params["unlocked"] == ["false"]
    assert list(params) == ["name", "category_id", "conditions_json", "unlocked"]


def test_empty_lists_are_omitted():
    request = AchievementCreate(name="A", category_id=1, conditions_json=[], items=[], skills=[])
    assert url_builder.build_create_achievement_url(request) == (
        "lifeup://api/achievement?name=A&category_id=1&unlocked=false"
    )


def test_delete_achievement_marker():
    url = url_builder.build_delete_achievement_url(AchievementDelete(edit_id=7))
    assert url == "lifeup://api/achievement?edit_id=7&delete=true"


# ---------------------------------------------------------------------------
# Shop, penalty, skill
# ---------------------------------------------------------------------------


def test_add_shop_item():
    request = ShopItemCreate(
        name="Movie night",
        price=300,
        stock_number=-1,
        disable_purchase=False,
        purchase_limit=[{"type": "daily", "value": 1}],
        title_color_string="#FF8800",
    )
    url = url_builder.build_add_shop_item_url(request)
    assert url.startswith("lifeup://api/item?name=Movie%20night&title_color_string=%23FF8800&price=300")
    assert "stock_number=-1" in url
    assert "disable_purchase=false" in url
    assert parse_qs(_query(url))["purchase_limit"] == ['[{"type":"daily","value":1}]']


def test_edit_shop_item_markers():
    request = ShopItemEdit(name="Coffee", set_price=-10, set_price_type="relative", stock_number=5)
    assert _query(url_builder.build_edit_shop_item_url(request)) == (
        "name=Coffee&set_price=-10&set_price_type=relative&stock_number=5&stock_number_type=absolute"
    )


def test_penalty_url():
    request = PenaltyApply(type="exp", content="Skipped workout", number=20, skills=[2], silent=True)
    assert url_builder.build_penalty_url(request) == (
        "lifeup://api/penalty?type=exp&content=Skipped%20workout&number=20&skills=2&silent=true"
    )


def test_skill_urls():
    assert url_builder.build_skill_url(SkillEdit(content="Strength", color="#AA0000")) == (
        "lifeup://api/skill?content=Strength&color=%23AA0000"
    )
    assert url_builder.build_skill_url(SkillEdit(id=3, delete=True)) == "lifeup://api/skill?id=3&delete=true"
    assert url_builder.build_skill_url(SkillEdit(id=3, delete=False)) == "lifeup://api/skill?id=3"


def test_build_command_rejects_read_operations():
    with pytest.raises(ValueError):
        url_builder.build_command("search_tasks", TaskDelete(id=1))
