"""Safe-mode gate: static classification of every tool as read/create/edit/delete."""

import logging
from enum import Enum
from typing import Optional

from lifeup_agent.services.error_classifier import OPERATION_BLOCKED, LifeUpError

logger = logging.getLogger(__name__)


class OperationKind(str, Enum):
    read = "read"
    create = "create"
    edit = "edit"
    delete = "delete"


OPERATION_KINDS: dict[str, OperationKind] = {
    # Reads
    "check_lifeup_connection": OperationKind.read,
    "list_all_tasks": OperationKind.read,
    "search_tasks": OperationKind.read,
    "get_task_history": OperationKind.read,
    "get_task_categories": OperationKind.read,
    "list_achievements": OperationKind.read,
    "list_achievement_categories": OperationKind.read,
    "match_task_to_achievements": OperationKind.read,
    "list_skills": OperationKind.read,
    "get_user_info": OperationKind.read,
    "get_coin_balance": OperationKind.read,
    "list_shop_items": OperationKind.read,
    "get_shop_categories": OperationKind.read,
    "search_shop_items": OperationKind.read,
    # Creates
    "create_task": OperationKind.create,
    "create_achievement": OperationKind.create,
    "add_shop_item": OperationKind.create,
    # Edits (a subtask modifies its parent task)
    "edit_task": OperationKind.edit,
    "create_subtask": OperationKind.edit,
    "edit_subtask": OperationKind.edit,
    "update_achievement": OperationKind.edit,
    "edit_shop_item": OperationKind.edit,
    "apply_penalty": OperationKind.edit,
    "edit_skill": OperationKind.edit,
    # Deletes
    "delete_task": OperationKind.delete,
    "delete_achievement": OperationKind.delete,
}

SAFE_MODE_KINDS = (OperationKind.read, OperationKind.create)


def is_permitted(operation: str, safe_mode: bool) -> bool:
    kind = OPERATION_KINDS[operation]
    return not safe_mode or kind in SAFE_MODE_KINDS


def blocked_error(operation: str, safe_mode: bool) -> Optional[LifeUpError]:
    """None when the operation may run, otherwise an OPERATION_BLOCKED error."""
    if is_permitted(operation, safe_mode):
        return None
    kind = OPERATION_KINDS[operation]
    logger.info("Blocked %s (%s) in safe mode", operation, kind.value)
    return LifeUpError(
        OPERATION_BLOCKED,
        f"Access denied. Allowed kinds: {[k.value for k in SAFE_MODE_KINDS]}, "
        f"{operation} is: {kind.value}",
        f"'{operation}' is disabled because the server runs in safe mode, which only allows "
        "reading and creating. Set SAFE_MODE=false to enable edits and deletions.",
        recoverable=False,
    )
