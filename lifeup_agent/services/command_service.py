"""Mutation pipeline: health probe -> build command -> execute."""

import logging

from pydantic import BaseModel

from lifeup_agent.services.lifeup_client import ApiResult, LifeUpClient
from lifeup_agent.services.url_builder import build_command

logger = logging.getLogger(__name__)


async def execute_command(client: LifeUpClient, operation: str, request: BaseModel) -> ApiResult:
    """Run one validated mutation. Never retried; only the health probe is."""
    error = await client.ensure_healthy()
    if error:
        return ApiResult(error=error)
    command = build_command(operation, request)
    result = await client.execute(command, context=operation)
    if result.ok:
        logger.info("LifeUp %s succeeded", operation)
    return result
