"""Penalty and skill MCP tools."""

from typing import Literal, Optional

from lifeup_agent.mcp.server import mcp
from lifeup_agent.mcp.tools.helpers import payload, run_mutation


@mcp.tool()
async def apply_penalty(
    type: Literal["coin", "exp", "item"],
    content: str,
    number: int,
    skills: Optional[list[int]] = None,
    item_id: Optional[int] = None,
    item_name: Optional[str] = None,
    silent: Optional[bool] = None,
) -> dict:
    """Deduct coins, experience or an item.

    skills only apply to exp penalties. An item penalty needs exactly one of
    item_id or item_name.
    """
    return await run_mutation(
        "apply_penalty",
        payload(
            type=type, content=content, number=number, skills=skills, item_id=item_id,
            item_name=item_name, silent=silent,
        ),
    )


@mcp.tool()
async def edit_skill(
    id: Optional[int] = None,
    content: Optional[str] = None,
    desc: Optional[str] = None,
    icon: Optional[str] = None,
    color: Optional[str] = None,
    type: Optional[int] = None,
    order: Optional[int] = None,
    status: Optional[int] = None,
    exp: Optional[int] = None,
    delete: Optional[bool] = None,
) -> dict:
    """Create a skill (no id, content required), edit one (id), or delete one (id + delete)."""
    return await run_mutation(
        "edit_skill",
        payload(
            id=id, content=content, desc=desc, icon=icon, color=color, type=type, order=order,
            status=status, exp=exp, delete=delete,
        ),
    )
