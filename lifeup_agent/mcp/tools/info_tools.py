"""Read-only MCP tools: connection status, profile, coins, skills."""

from lifeup_agent.config import get_settings
from lifeup_agent.mcp.server import mcp
from lifeup_agent.mcp.tools.helpers import open_client, respond


@mcp.tool()
async def check_lifeup_connection() -> dict:
    """Probe the LifeUp server (with retries) and report whether it is reachable."""
    settings = get_settings()
    async with open_client() as client:
        error = await client.ensure_healthy()
    if error:
        return {**error.to_dict(), "base_url": settings.base_url, "safe_mode": settings.SAFE_MODE}
    return {"success": True, "base_url": settings.base_url, "safe_mode": settings.SAFE_MODE}


@mcp.tool()
async def get_user_info() -> dict:
    """LifeUp profile and app information."""
    async with open_client() as client:
        result = await client.get_info()
    return respond(result)


@mcp.tool()
async def get_coin_balance() -> dict:
    """Current coin balance."""
    async with open_client() as client:
        result = await client.get_coin()
    return respond(result)


@mcp.tool()
async def list_skills() -> dict:
    """List skills with their levels and experience."""
    async with open_client() as client:
        result = await client.get_skills()
    return respond(result)
