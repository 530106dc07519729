"""Achievement MCP tools: list, match, create, update, delete."""

from typing import Literal, Optional

from lifeup_agent.mcp.server import mcp
from lifeup_agent.mcp.tools.helpers import denied, open_client, payload, respond, run_mutation
from lifeup_agent.services import achievement_service
from lifeup_agent.services.validation_engine import validate


@mcp.tool()
async def list_achievements() -> dict:
    """List achievements across all categories."""
    async with open_client() as client:
        result = await client.get_all_achievements()
    return respond(result)


@mcp.tool()
async def list_achievement_categories() -> dict:
    """List achievement categories."""
    async with open_client() as client:
        result = await client.get_achievement_categories()
    return respond(result)


@mcp.tool()
async def match_task_to_achievements(taskName: str, categoryId: Optional[int] = None) -> dict:
    """Suggest up to five achievements related to a task, with a 0-100 confidence each."""
    checked = validate("match_task_to_achievements", payload(taskName=taskName, categoryId=categoryId))
    if not checked.ok:
        return checked.to_dict()
    async with open_client() as client:
        result = await achievement_service.match_task(client, checked.value)
    return respond(result)


@mcp.tool()
async def create_achievement(
    name: str,
    category_id: int,
    desc: Optional[str] = None,
    conditions_json: Optional[list[dict]] = None,
    exp: Optional[int] = None,
    coin: Optional[int] = None,
    coin_var: Optional[int] = None,
    skills: Optional[list[int]] = None,
    items: Optional[list[dict]] = None,
    item_id: Optional[int] = None,
    item_amount: Optional[int] = None,
    secret: Optional[bool] = None,
    color: Optional[str] = None,
    unlocked: Optional[bool] = None,
    write_feeling: Optional[bool] = None,
) -> dict:
    """Create an achievement.

    conditions_json: [{"type": 0-20, "target": n, "related_id": id}] unlock conditions.
    exp requires skills. color is #RRGGBB.
    """
    return await run_mutation(
        "create_achievement",
        payload(
            name=name, category_id=category_id, desc=desc, conditions_json=conditions_json,
            exp=exp, coin=coin, coin_var=coin_var, skills=skills, items=items, item_id=item_id,
            item_amount=item_amount, secret=secret, color=color, unlocked=unlocked,
            write_feeling=write_feeling,
        ),
    )


@mcp.tool()
async def update_achievement(
    edit_id: int,
    name: Optional[str] = None,
    category_id: Optional[int] = None,
    desc: Optional[str] = None,
    conditions_json: Optional[list[dict]] = None,
    exp: Optional[int] = None,
    exp_set_type: Optional[Literal["absolute", "relative"]] = None,
    coin: Optional[int] = None,
    coin_set_type: Optional[Literal["absolute", "relative"]] = None,
    coin_var: Optional[int] = None,
    skills: Optional[list[int]] = None,
    items: Optional[list[dict]] = None,
    item_id: Optional[int] = None,
    item_amount: Optional[int] = None,
    secret: Optional[bool] = None,
    color: Optional[str] = None,
    unlocked: Optional[bool] = None,
    write_feeling: Optional[bool] = None,
) -> dict:
    """Update an achievement; only supplied fields change.

    Passing conditions_json deletes the achievement and recreates it (locked)
    with the new conditions, because LifeUp cannot edit conditions in place.
    """
    blocked = denied("update_achievement")
    if blocked:
        return blocked
    checked = validate(
        "update_achievement",
        payload(
            edit_id=edit_id, name=name, category_id=category_id, desc=desc,
            conditions_json=conditions_json, exp=exp, exp_set_type=exp_set_type, coin=coin,
            coin_set_type=coin_set_type, coin_var=coin_var, skills=skills, items=items,
            item_id=item_id, item_amount=item_amount, secret=secret, color=color,
            unlocked=unlocked, write_feeling=write_feeling,
        ),
    )
    if not checked.ok:
        return checked.to_dict()
    async with open_client() as client:
        result = await achievement_service.update_achievement(client, checked.value)
    return respond(result, edit_id=edit_id)


@mcp.tool()
async def delete_achievement(edit_id: int) -> dict:
    """Delete an achievement by id."""
    return await run_mutation("delete_achievement", {"edit_id": edit_id}, edit_id=edit_id)
