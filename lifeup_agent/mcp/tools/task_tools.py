"""Task MCP tools: create/edit/delete tasks and subtasks, list and search."""

from typing import Literal, Optional

from lifeup_agent.mcp.server import mcp
from lifeup_agent.mcp.tools.helpers import denied, open_client, payload, respond, run_mutation
from lifeup_agent.services import task_service
from lifeup_agent.services.validation_engine import validate

SetTypeArg = Literal["absolute", "relative"]


@mcp.tool()
async def create_task(
    name: str,
    exp: Optional[int] = None,
    coin: Optional[int] = None,
    coinVar: Optional[int] = None,
    categoryId: Optional[int] = None,
    deadline: Optional[int] = None,
    content: Optional[str] = None,
    skillIds: Optional[list[int]] = None,
    frequency: Optional[int] = None,
    auto_use_item: Optional[bool] = None,
    task_type: Optional[int] = None,
    target_times: Optional[int] = None,
    is_affect_shop_reward: Optional[bool] = None,
    item_id: Optional[int] = None,
    item_name: Optional[str] = None,
    item_amount: Optional[int] = None,
    items: Optional[list[dict]] = None,
    subtasks: Optional[list[dict]] = None,
) -> dict:
    """Create a LifeUp task, optionally with subtasks.

    exp requires skillIds (the skills that receive the experience).
    task_type: 0 normal, 1 count (needs target_times), 2 negative, 3 external.
    deadline is a unix timestamp in milliseconds. Subtasks are created one by
    one after the task; failures are reported per subtask.
    """
    blocked = denied("create_task")
    if blocked:
        return blocked
    checked = validate(
        "create_task",
        payload(
            name=name, exp=exp, coin=coin, coinVar=coinVar, categoryId=categoryId,
            deadline=deadline, content=content, skillIds=skillIds, frequency=frequency,
            auto_use_item=auto_use_item, task_type=task_type, target_times=target_times,
            is_affect_shop_reward=is_affect_shop_reward, item_id=item_id, item_name=item_name,
            item_amount=item_amount, items=items, subtasks=subtasks,
        ),
    )
    if not checked.ok:
        return checked.to_dict()
    async with open_client() as client:
        result = await task_service.create_task(client, checked.value)
    return respond(result, name=name)


@mcp.tool()
async def edit_task(
    id: Optional[int] = None,
    gid: Optional[int] = None,
    name: Optional[str] = None,
    todo: Optional[str] = None,
    notes: Optional[str] = None,
    coin: Optional[int] = None,
    coin_set_type: Optional[SetTypeArg] = None,
    coin_var: Optional[int] = None,
    exp: Optional[int] = None,
    exp_set_type: Optional[SetTypeArg] = None,
    skills: Optional[list[int]] = None,
    category: Optional[int] = None,
    frequency: Optional[int] = None,
    deadline: Optional[int] = None,
    remind_time: Optional[int] = None,
    start_time: Optional[int] = None,
    color: Optional[str] = None,
    background_url: Optional[str] = None,
    background_alpha: Optional[float] = None,
    enable_outline: Optional[bool] = None,
    use_light_remark_text_color: Optional[bool] = None,
    item_id: Optional[int] = None,
    item_name: Optional[str] = None,
    item_amount: Optional[int] = None,
    items: Optional[list[dict]] = None,
    auto_use_item: Optional[bool] = None,
    frozen: Optional[bool] = None,
    task_type: Optional[int] = None,
    target_times: Optional[int] = None,
    is_affect_shop_reward: Optional[bool] = None,
) -> dict:
    """Edit an existing task identified by id, gid or (fuzzy) name.

    Only supplied fields change. coin/exp use coin_set_type/exp_set_type:
    absolute (default) replaces the value, relative adds a signed delta.
    """
    return await run_mutation(
        "edit_task",
        payload(
            id=id, gid=gid, name=name, todo=todo, notes=notes, coin=coin,
            coin_set_type=coin_set_type, coin_var=coin_var, exp=exp, exp_set_type=exp_set_type,
            skills=skills, category=category, frequency=frequency, deadline=deadline,
            remind_time=remind_time, start_time=start_time, color=color,
            background_url=background_url, background_alpha=background_alpha,
            enable_outline=enable_outline, use_light_remark_text_color=use_light_remark_text_color,
            item_id=item_id, item_name=item_name, item_amount=item_amount, items=items,
            auto_use_item=auto_use_item, frozen=frozen, task_type=task_type,
            target_times=target_times, is_affect_shop_reward=is_affect_shop_reward,
        ),
    )


@mcp.tool()
async def delete_task(id: int) -> dict:
    """Delete a task by id."""
    return await run_mutation("delete_task", {"id": id}, task_id=id)


@mcp.tool()
async def create_subtask(
    todo: str,
    main_id: Optional[int] = None,
    main_gid: Optional[int] = None,
    main_name: Optional[str] = None,
    remind_time: Optional[int] = None,
    order: Optional[int] = None,
    coin: Optional[int] = None,
    coin_var: Optional[int] = None,
    exp: Optional[int] = None,
    auto_use_item: Optional[bool] = None,
    item_id: Optional[int] = None,
    item_name: Optional[str] = None,
    item_amount: Optional[int] = None,
    items: Optional[list[dict]] = None,
) -> dict:
    """Add a subtask to a parent task identified by main_id, main_gid or main_name."""
    return await run_mutation(
        "create_subtask",
        payload(
            todo=todo, main_id=main_id, main_gid=main_gid, main_name=main_name,
            remind_time=remind_time, order=order, coin=coin, coin_var=coin_var, exp=exp,
            auto_use_item=auto_use_item, item_id=item_id, item_name=item_name,
            item_amount=item_amount, items=items,
        ),
    )


@mcp.tool()
async def edit_subtask(
    main_id: Optional[int] = None,
    main_gid: Optional[int] = None,
    main_name: Optional[str] = None,
    edit_id: Optional[int] = None,
    edit_gid: Optional[int] = None,
    edit_name: Optional[str] = None,
    todo: Optional[str] = None,
    remind_time: Optional[int] = None,
    order: Optional[int] = None,
    coin: Optional[int] = None,
    coin_set_type: Optional[SetTypeArg] = None,
    coin_var: Optional[int] = None,
    exp: Optional[int] = None,
    exp_set_type: Optional[SetTypeArg] = None,
    auto_use_item: Optional[bool] = None,
    item_id: Optional[int] = None,
    item_name: Optional[str] = None,
    item_amount: Optional[int] = None,
    items: Optional[list[dict]] = None,
) -> dict:
    """Edit a subtask. Needs the parent (main_*) and the subtask (edit_*) identified."""
    return await run_mutation(
        "edit_subtask",
        payload(
            main_id=main_id, main_gid=main_gid, main_name=main_name, edit_id=edit_id,
            edit_gid=edit_gid, edit_name=edit_name, todo=todo, remind_time=remind_time,
            order=order, coin=coin, coin_set_type=coin_set_type, coin_var=coin_var, exp=exp,
            exp_set_type=exp_set_type, auto_use_item=auto_use_item, item_id=item_id,
            item_name=item_name, item_amount=item_amount, items=items,
        ),
    )


@mcp.tool()
async def list_all_tasks() -> dict:
    """List every task in LifeUp."""
    async with open_client() as client:
        result = await client.get_tasks()
    return respond(result)


@mcp.tool()
async def search_tasks(
    categoryId: Optional[int] = None,
    searchQuery: Optional[str] = None,
    status: Optional[Literal["active", "completed", "all"]] = None,
    deadlineBefore: Optional[int] = None,
) -> dict:
    """Search tasks by category, text (name/content/notes), status and deadline."""
    checked = validate(
        "search_tasks",
        payload(categoryId=categoryId, searchQuery=searchQuery, status=status, deadlineBefore=deadlineBefore),
    )
    if not checked.ok:
        return checked.to_dict()
    async with open_client() as client:
        result = await task_service.search_tasks(client, checked.value)
    return respond(result)


@mcp.tool()
async def get_task_history(offset: Optional[int] = None, limit: Optional[int] = None) -> dict:
    """Completed-task history, newest first (limit 1-1000, default 100)."""
    checked = validate("get_task_history", payload(offset=offset, limit=limit))
    if not checked.ok:
        return checked.to_dict()
    query = checked.value
    async with open_client() as client:
        result = await client.get_task_history(query.offset, query.limit)
    return respond(result)


@mcp.tool()
async def get_task_categories() -> dict:
    """List task categories (lists)."""
    async with open_client() as client:
        result = await client.get_task_categories()
    return respond(result)
