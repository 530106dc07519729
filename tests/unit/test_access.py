"""Tests for the safe-mode gate and the shared mutation pipeline."""

import httpx
import pytest

from lifeup_agent.mcp import access
from lifeup_agent.mcp.access import OPERATION_KINDS, OperationKind, blocked_error, is_permitted
from lifeup_agent.mcp.tools import helpers
from lifeup_agent.services import error_classifier as ec
from lifeup_agent.services.lifeup_client import LifeUpClient
from lifeup_agent.services.url_builder import BUILDERS
from lifeup_agent.services.validation_engine import OPERATIONS


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "operation,kind",
    [
        ("search_tasks", OperationKind.read),
        ("match_task_to_achievements", OperationKind.read),
        ("create_task", OperationKind.create),
        ("add_shop_item", OperationKind.create),
        ("create_subtask", OperationKind.edit),
        ("update_achievement", OperationKind.edit),
        ("apply_penalty", OperationKind.edit),
        ("edit_skill", OperationKind.edit),
        ("delete_task", OperationKind.delete),
        ("delete_achievement", OperationKind.delete),
    ],
)
def test_operation_kinds(operation, kind):
    assert OPERATION_KINDS[operation] is kind


def test_every_validated_operation_is_classified():
    assert set(OPERATIONS) <= set(OPERATION_KINDS)


def test_every_command_builder_is_a_mutation():
    for operation in BUILDERS:
        assert OPERATION_KINDS[operation] is not OperationKind.read, operation


def test_safe_mode_allows_reads_and_creates_only():
    for operation, kind in OPERATION_KINDS.items():
        assert is_permitted(operation, safe_mode=False)
        expected = kind in (OperationKind.read, OperationKind.create)
        assert is_permitted(operation, safe_mode=True) is expected, operation


def test_blocked_error_shape():
    assert blocked_error("delete_task", safe_mode=False) is None
    error = blocked_error("delete_task", safe_mode=True)
    assert error.code == ec.OPERATION_BLOCKED
    assert error.recoverable is False
    assert "delete" in error.message
    assert "SAFE_MODE" in error.user_message


def test_unknown_operation_is_a_programming_error():
    with pytest.raises(KeyError):
        access.is_permitted("launch_rocket", safe_mode=True)


# ---------------------------------------------------------------------------
# run_mutation
# ---------------------------------------------------------------------------


@pytest.fixture
def wired(monkeypatch, settings, lifeup):
    """Point the tool helpers at the test settings and the in-memory LifeUp."""
    monkeypatch.setattr(helpers, "get_settings", lambda: settings)
    monkeypatch.setattr(
        helpers, "open_client", lambda: LifeUpClient(settings, transport=httpx.MockTransport(lifeup))
    )
    return lifeup


@pytest.mark.asyncio
async def test_mutation_success(wired):
    reply = await helpers.run_mutation("delete_task", {"id": 42}, id=42)
    assert reply == {"success": True, "id": 42, "data": None}
    assert wired.commands == ["lifeup://api/delete_task?id=42"]


@pytest.mark.asyncio
async def test_mutation_blocked_in_safe_mode(monkeypatch, settings, wired):
    safe = settings.model_copy(update={"SAFE_MODE": True})
    monkeypatch.setattr(helpers, "get_settings", lambda: safe)
    reply = await helpers.run_mutation("delete_task", {"id": 42})
    assert reply["success"] is False
    assert reply["code"] == ec.OPERATION_BLOCKED
    assert wired.requests == []


@pytest.mark.asyncio
async def test_create_allowed_in_safe_mode(monkeypatch, settings, wired):
    safe = settings.model_copy(update={"SAFE_MODE": True})
    monkeypatch.setattr(helpers, "get_settings", lambda: safe)
    reply = await helpers.run_mutation("add_shop_item", {"name": "Coffee", "price": 30})
    assert reply["success"] is True
    assert wired.commands == ["lifeup://api/item?name=Coffee&price=30"]


@pytest.mark.asyncio
async def test_validation_failure_makes_no_request(wired):
    reply = await helpers.run_mutation("edit_task", {"todo": "Renamed"})
    assert reply["code"] == "VALIDATION_ERROR"
    assert reply["violations"] == [
        {"field": "id,gid,name", "message": "At least one of id, gid, or name must be provided"}
    ]
    assert wired.requests == []


@pytest.mark.asyncio
async def test_remote_failure_is_returned_as_error_dict(wired):
    wired.command_replies = [httpx.Response(401)]
    reply = await helpers.run_mutation("apply_penalty", {"type": "coin", "content": "Late", "number": 5})
    assert reply["success"] is False
    assert reply["code"] == ec.UNAUTHORIZED


def test_payload_drops_omitted_arguments():
    assert helpers.payload(id=1, name=None, delete=False) == {"id": 1, "delete": False}
