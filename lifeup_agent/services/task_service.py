"""Task operations: creation with a subtask batch, lookup by name, search."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from lifeup_agent.schemas import SubtaskCreate, SubtaskDefinition, TaskCreate, TaskSearch
from lifeup_agent.services.command_service import execute_command
from lifeup_agent.services.lifeup_client import ApiResult, LifeUpClient
from lifeup_agent.services.url_builder import build_create_subtask_url

logger = logging.getLogger(__name__)

TASK_STATUS_ACTIVE = 0
TASK_STATUS_COMPLETED = 1

# Same-named tasks created this close together make a name lookup ambiguous
_DUPLICATE_WINDOW_MS = 5000


# ---------------------------------------------------------------------------
# Subtask batch
# ---------------------------------------------------------------------------


@dataclass
class SubtaskBatchResult:
    successes: list[dict] = field(default_factory=list)
    failures: list[dict] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"successes": self.successes, "failures": self.failures}


def extract_task_ids(data: Any) -> tuple[Optional[int], Optional[int]]:
    """(task_id, task_gid) from an add_task response, accepting camelCase keys."""
    if not isinstance(data, dict):
        return None, None
    task_id = data.get("task_id", data.get("taskId"))
    task_gid = data.get("task_gid", data.get("taskGid"))
    return task_id, task_gid


async def find_task_id_by_name(client: LifeUpClient, name: str) -> Optional[int]:
    """Newest task with exactly this name, or None."""
    result = await client.get_tasks()
    if not result.ok:
        return None
    matches = [t for t in result.data if t.get("name") == name]
    if not matches:
        return None

    matches.sort(key=lambda t: t.get("created_time") or 0, reverse=True)
    newest = matches[0]
    newest_time = newest.get("created_time") or 0
    recent = [t for t in matches if newest_time - (t.get("created_time") or 0) <= _DUPLICATE_WINDOW_MS]
    if len(recent) > 1:
        logger.warning(
            "%d tasks named %r were created within %d ms; using the newest (id=%s)",
            len(recent), name, _DUPLICATE_WINDOW_MS, newest.get("id"),
        )
    return newest.get("id")


async def create_subtasks(
    client: LifeUpClient,
    main_id: int,
    subtasks: list[SubtaskDefinition],
) -> SubtaskBatchResult:
    """Create subtasks one at a time, pausing between calls.

    A failed subtask is recorded and the batch continues.
    """
    batch = SubtaskBatchResult()
    for index, subtask in enumerate(subtasks):
        if index:
            await asyncio.sleep(client.settings.LIFEUP_SUBTASK_DELAY)
        request = SubtaskCreate(main_id=main_id, **subtask.model_dump(exclude_none=True))
        result = await client.execute(build_create_subtask_url(request), context="create_subtask")
        if result.ok:
            data = result.data if isinstance(result.data, dict) else {}
            batch.successes.append(
                {
                    "main_task_id": data.get("main_task_id", main_id),
                    "subtask_id": data.get("subtask_id"),
                    "subtask_gid": data.get("subtask_gid"),
                }
            )
        else:
            batch.failures.append(
                {"subtask": subtask.model_dump(exclude_none=True), "error": result.error.user_message}
            )

    if batch.failures:
        logger.warning(
            "Subtask batch for task %s: %d succeeded, %d failed",
            main_id, len(batch.successes), len(batch.failures),
        )
    return batch


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------


async def create_task(client: LifeUpClient, request: TaskCreate) -> ApiResult:
    """Create the main task, then its subtasks (if any) in a sequential batch."""
    result = await execute_command(client, "create_task", request)
    if not result.ok:
        return result

    task_id, task_gid = extract_task_ids(result.data)
    data: dict[str, Any] = {"task_id": task_id, "task_gid": task_gid}
    if not request.subtasks:
        return ApiResult(data=data)

    if task_id is None:
        task_id = await find_task_id_by_name(client, request.name)
        data["task_id"] = task_id

    if task_id is None:
        logger.warning("Task %r was created but its id could not be determined", request.name)
        batch = SubtaskBatchResult(
            failures=[
                {
                    "subtask": s.model_dump(exclude_none=True),
                    "error": "The parent task id could not be determined; subtask was not created.",
                }
                for s in request.subtasks
            ]
        )
    else:
        batch = await create_subtasks(client, task_id, request.subtasks)

    data["subtasks"] = batch.to_dict()
    return ApiResult(data=data)


def _task_deadline(task: dict) -> Optional[int]:
    return task.get("deadline") or task.get("due_date")


def filter_tasks(tasks: list[dict], query: TaskSearch) -> list[dict]:
    if query.status != "all":
        wanted = TASK_STATUS_ACTIVE if query.status == "active" else TASK_STATUS_COMPLETED
        tasks = [t for t in tasks if t.get("status") == wanted]

    if query.search_query:
        needle = query.search_query.lower()
        tasks = [
            t for t in tasks
            if any(needle in (t.get(key) or "").lower() for key in ("name", "content", "notes"))
        ]

    if query.deadline_before:
        tasks = [
            t for t in tasks
            if _task_deadline(t) and _task_deadline(t) < query.deadline_before
        ]
    return tasks


async def search_tasks(client: LifeUpClient, query: TaskSearch) -> ApiResult:
    result = await client.get_tasks(query.category_id)
    if not result.ok:
        return result
    return ApiResult(data=filter_tasks(result.data, query))
