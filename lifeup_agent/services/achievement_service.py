"""Achievement operations: update (with recreate for unlock conditions) and matching."""

import logging
from typing import Any, Optional

from lifeup_agent.schemas import (
    AchievementCreate,
    AchievementDelete,
    AchievementMatchQuery,
    AchievementUpdate,
)
from lifeup_agent.schemas.common import HEX_COLOR_RE
from lifeup_agent.services import validation_engine
from lifeup_agent.services.achievement_matcher import find_matches
from lifeup_agent.services.command_service import execute_command
from lifeup_agent.services.error_classifier import (
    ACHIEVEMENT_NOT_FOUND,
    VALIDATION_ERROR,
    LifeUpError,
)
from lifeup_agent.services.lifeup_client import ApiResult, LifeUpClient
from lifeup_agent.services.set_type import is_absolute
from lifeup_agent.services.url_builder import (
    build_create_achievement_url,
    build_delete_achievement_url,
)

logger = logging.getLogger(__name__)

# Fields carried over from the existing achievement when it is recreated
_CARRIED_FIELDS = ("name", "category_id", "exp", "coin", "coin_var", "skills", "items", "color", "secret")


def _adjusted(original: Any, value: Optional[int], set_type: Any) -> Optional[int]:
    if value is None:
        return original
    if is_absolute(set_type):
        return value
    return max((original or 0) + value, 0)


def merge_for_recreate(original: dict, update: AchievementUpdate) -> dict:
    """Create payload: original fields overridden by the update, always locked."""
    merged = {key: original.get(key) for key in _CARRIED_FIELDS}
    merged["desc"] = original.get("description") or original.get("desc")
    if not isinstance(merged["color"], str) or not HEX_COLOR_RE.match(merged["color"]):
        merged["color"] = None

    supplied = update.model_dump(exclude_none=True, exclude={"edit_id", "exp_set_type", "coin_set_type"})
    supplied.pop("exp", None)
    supplied.pop("coin", None)
    merged.update(supplied)

    merged["exp"] = _adjusted(original.get("exp"), update.exp, update.exp_set_type)
    merged["coin"] = _adjusted(original.get("coin"), update.coin, update.coin_set_type)
    merged["unlocked"] = False
    return {k: v for k, v in merged.items() if v not in (None, "", [])}


async def update_achievement(client: LifeUpClient, request: AchievementUpdate) -> ApiResult:
    """Partial update, or delete + recreate when unlock conditions change.

    LifeUp cannot edit conditions in place, so a non-empty ``conditions_json``
    replaces the achievement with a new (locked) one.
    """
    if not request.conditions_json:
        return await execute_command(client, "update_achievement", request)

    error = await client.ensure_healthy()
    if error:
        return ApiResult(error=error)

    listing = await client.get_all_achievements()
    if not listing.ok:
        return listing
    original = next((a for a in listing.data if a.get("id") == request.edit_id), None)
    if original is None:
        return ApiResult(
            error=LifeUpError(
                ACHIEVEMENT_NOT_FOUND,
                f"Achievement #{request.edit_id} not found",
                f"Achievement #{request.edit_id} not found. List achievements to find a valid id.",
                recoverable=False,
            )
        )

    # Validate the replacement before anything is deleted
    checked = validation_engine.validate("create_achievement", merge_for_recreate(original, request))
    if not checked.ok:
        details = "; ".join(f"{v.field}: {v.message}" for v in checked.violations)
        return ApiResult(
            error=LifeUpError(
                VALIDATION_ERROR,
                f"Recreated achievement #{request.edit_id} would be invalid: {details}",
                f"The updated achievement would be invalid ({details}).",
                recoverable=False,
            )
        )
    replacement: AchievementCreate = checked.value

    deleted = await client.execute(
        build_delete_achievement_url(AchievementDelete(edit_id=request.edit_id)),
        context="delete_achievement",
    )
    if not deleted.ok:
        return deleted

    created = await client.execute(build_create_achievement_url(replacement), context="create_achievement")
    if not created.ok:
        logger.error(
            "Achievement #%d was deleted but could not be recreated: %s",
            request.edit_id, created.error.message,
        )
        return created

    logger.info("Achievement #%d recreated with new unlock conditions", request.edit_id)
    return ApiResult(
        data={
            "recreated": True,
            "previous_id": request.edit_id,
            "achievement": replacement.model_dump(exclude_none=True),
            "response": created.data,
        }
    )


async def match_task(client: LifeUpClient, query: AchievementMatchQuery) -> ApiResult:
    """Rank achievements (or, when none exist, achievement categories) for a task name."""
    listing = await client.get_all_achievements()
    if not listing.ok:
        return listing
    candidates = listing.data
    if not candidates:
        categories = await client.get_achievement_categories()
        if not categories.ok:
            return categories
        candidates = [{**c, "category_id": c.get("id")} for c in categories.data]

    matches = find_matches(query.task_name, candidates, query.category_id)
    return ApiResult(data=[m.to_dict() for m in matches])
