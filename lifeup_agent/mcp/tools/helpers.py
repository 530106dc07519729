"""Shared plumbing for the tool modules: gate, validate, call, shape the reply."""

from typing import Any, Optional

from lifeup_agent.config import get_settings
from lifeup_agent.mcp.access import blocked_error
from lifeup_agent.services.command_service import execute_command
from lifeup_agent.services.lifeup_client import ApiResult, LifeUpClient
from lifeup_agent.services.validation_engine import validate


def payload(**fields: Any) -> dict:
    """Tool arguments as a request map; omitted (None) arguments are left out."""
    return {k: v for k, v in fields.items() if v is not None}


def open_client() -> LifeUpClient:
    return LifeUpClient(get_settings())


def denied(operation: str) -> Optional[dict]:
    error = blocked_error(operation, get_settings().SAFE_MODE)
    return error.to_dict() if error else None


def respond(result: ApiResult, **extra: Any) -> dict:
    if not result.ok:
        return result.error.to_dict()
    return {"success": True, **extra, "data": result.data}


async def run_mutation(operation: str, data: dict, **extra: Any) -> dict:
    """Gate -> validate -> health probe -> encode -> execute."""
    blocked = denied(operation)
    if blocked:
        return blocked
    checked = validate(operation, data)
    if not checked.ok:
        return checked.to_dict()
    async with open_client() as client:
        result = await execute_command(client, operation, checked.value)
    return respond(result, **extra)
