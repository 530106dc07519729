"""FastMCP server instance – mounted inside FastAPI."""

from fastmcp import FastMCP

mcp = FastMCP(
    name="LifeUpAgent",
    instructions=(
        "LifeUp tools for managing tasks, subtasks, achievements, shop items, skills and "
        "penalties in the LifeUp app, plus a matcher that suggests achievements for a task. "
        "Every tool returns a dict with a 'success' flag; failures carry a 'code', a "
        "user-facing 'message' and a 'recoverable' flag."
    ),
)

# Import tool modules to register @mcp.tool decorators
from lifeup_agent.mcp.tools import (
    achievement_tools,
    info_tools,
    mutation_tools,
    shop_tools,
    task_tools,
)  # noqa: E402, F401
