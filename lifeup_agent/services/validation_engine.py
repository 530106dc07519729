"""Validation engine: field constraints + cross-field rules per operation.

Field-level checks come from the pydantic request models in
``lifeup_agent.schemas``. Cross-field rules are plain functions over a
field-name -> value mapping so they still run (and report) when some
individual fields are invalid. Nothing here performs I/O.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional

from pydantic import BaseModel, ValidationError

from lifeup_agent.schemas import (
    AchievementCreate,
    AchievementDelete,
    AchievementMatchQuery,
    AchievementUpdate,
    PenaltyApply,
    ShopItemCreate,
    ShopItemEdit,
    ShopItemSearch,
    SkillEdit,
    SubtaskCreate,
    SubtaskEdit,
    TaskCreate,
    TaskDelete,
    TaskEdit,
    TaskHistoryQuery,
    TaskSearch,
)
from lifeup_agent.services.error_classifier import VALIDATION_ERROR
from lifeup_agent.services.set_type import is_absolute

logger = logging.getLogger(__name__)

COUNT_TASK_TYPE = 1


# ---------------------------------------------------------------------------
# Result objects
# ---------------------------------------------------------------------------


@dataclass
class Violation:
    field: str
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


@dataclass
class ValidationResult:
    """Either a typed request (``value``) or a non-empty list of violations."""

    value: Optional[BaseModel] = None
    violations: list[Violation] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.violations

    def to_dict(self) -> dict:
        return {
            "success": False,
            "code": VALIDATION_ERROR,
            "message": "; ".join(f"{v.field}: {v.message}" for v in self.violations),
            "recoverable": True,
            "violations": [v.to_dict() for v in self.violations],
        }


Rule = Callable[[Mapping[str, Any]], Optional[Violation]]


# ---------------------------------------------------------------------------
# Cross-field rules
# ---------------------------------------------------------------------------


def at_least_one(*fields: str, message: str) -> Rule:
    def rule(data: Mapping[str, Any]) -> Optional[Violation]:
        if any(data.get(f) not in (None, "") for f in fields):
            return None
        return Violation(",".join(fields), message)

    return rule


def exp_requires_skills(skills_field: str, skills_path: str) -> Rule:
    def rule(data: Mapping[str, Any]) -> Optional[Violation]:
        if data.get("exp") is None or data.get(skills_field):
            return None
        return Violation(
            f"exp,{skills_path}",
            f"When exp is specified, {skills_path} must be provided as a non-empty array",
        )

    return rule


def count_requires_target(data: Mapping[str, Any]) -> Optional[Violation]:
    task_type = data.get("task_type")
    # Missing, or already reported as a field error
    if not isinstance(task_type, int):
        return None
    target_times = data.get("target_times")
    if task_type == COUNT_TASK_TYPE:
        if target_times is None or not isinstance(target_times, int) or target_times <= 0:
            return Violation(
                "target_times",
                "When task_type is 1 (count task), target_times must be provided and must be positive",
            )
        return None
    if target_times is not None:
        return Violation("target_times", "target_times is only valid when task_type is 1 (count task)")
    return None


def absolute_bounds(
    value_field: str,
    type_field: str,
    lo: Optional[int] = None,
    hi: Optional[int] = None,
) -> Rule:
    """Bound a value only when it replaces the remote value (absolute set type)."""

    def rule(data: Mapping[str, Any]) -> Optional[Violation]:
        value = data.get(value_field)
        if not isinstance(value, int):
            return None
        try:
            absolute = is_absolute(data.get(type_field))
        except ValueError:
            # Bad marker is already reported as a field error
            return None
        if not absolute:
            return None
        if (lo is not None and value < lo) or (hi is not None and value > hi):
            if hi is None:
                bound = f"at least {lo}"
            elif lo is None:
                bound = f"at most {hi}"
            else:
                bound = f"between {lo} and {hi}"
            return Violation(value_field, f"{value_field} must be {bound} when {type_field} is absolute")
        return None

    return rule


def penalty_item_target(data: Mapping[str, Any]) -> Optional[Violation]:
    if data.get("type") != "item":
        return None
    has_id = data.get("item_id") is not None
    has_name = bool(data.get("item_name"))
    if has_id == has_name:
        return Violation(
            "item_id,item_name",
            "Exactly one of item_id or item_name must be provided when type is item",
        )
    return None


def penalty_skills_only_for_exp(data: Mapping[str, Any]) -> Optional[Violation]:
    if data.get("skills") and data.get("type") != "exp":
        return Violation("skills", "skills can only be used with exp penalties")
    return None


def skill_create_requires_content(data: Mapping[str, Any]) -> Optional[Violation]:
    if data.get("id") is None and not data.get("delete") and not data.get("content"):
        return Violation("content", "When creating a skill, content (name) is required")
    return None


def skill_delete_requires_id(data: Mapping[str, Any]) -> Optional[Violation]:
    if data.get("delete") and data.get("id") is None:
        return Violation("id", "Deleting a skill requires its id")
    return None


def price_range(data: Mapping[str, Any]) -> Optional[Violation]:
    lo, hi = data.get("min_price"), data.get("max_price")
    if isinstance(lo, int) and isinstance(hi, int) and lo > hi:
        return Violation("minPrice,maxPrice", "minPrice cannot exceed maxPrice")
    return None


# ---------------------------------------------------------------------------
# Operation table
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class OperationRules:
    model: type[BaseModel]
    # Disjunction rules; any failure skips the remaining cross-field rules
    identification: tuple[Rule, ...] = ()
    rules: tuple[Rule, ...] = ()


_TASK_ID = at_least_one("id", "gid", "name", message="At least one of id, gid, or name must be provided")
_MAIN_TASK_ID = at_least_one(
    "main_id", "main_gid", "main_name",
    message="At least one of main_id, main_gid, or main_name must be provided",
)
_SUBTASK_ID = at_least_one(
    "edit_id", "edit_gid", "edit_name",
    message="At least one of edit_id, edit_gid, or edit_name must be provided",
)

OPERATIONS: dict[str, OperationRules] = {
    "create_task": OperationRules(
        TaskCreate,
        rules=(exp_requires_skills("skill_ids", "skillIds"), count_requires_target),
    ),
    "edit_task": OperationRules(
        TaskEdit,
        identification=(_TASK_ID,),
        rules=(
            exp_requires_skills("skills", "skills"),
            count_requires_target,
            absolute_bounds("coin", "coin_set_type", 0, 999999),
            absolute_bounds("exp", "exp_set_type", 0),
        ),
    ),
    "delete_task": OperationRules(TaskDelete),
    "create_subtask": OperationRules(SubtaskCreate, identification=(_MAIN_TASK_ID,)),
    "edit_subtask": OperationRules(
        SubtaskEdit,
        identification=(_MAIN_TASK_ID, _SUBTASK_ID),
        rules=(
            absolute_bounds("coin", "coin_set_type", 0, 999999),
            absolute_bounds("exp", "exp_set_type", 0, 99999),
        ),
    ),
    "create_achievement": OperationRules(
        AchievementCreate,
        rules=(exp_requires_skills("skills", "skills"),),
    ),
    "update_achievement": OperationRules(
        AchievementUpdate,
        rules=(
            exp_requires_skills("skills", "skills"),
            absolute_bounds("exp", "exp_set_type", 0),
            absolute_bounds("coin", "coin_set_type", 0, 999999),
        ),
    ),
    "delete_achievement": OperationRules(AchievementDelete),
    "add_shop_item": OperationRules(ShopItemCreate),
    "edit_shop_item": OperationRules(
        ShopItemEdit,
        identification=(at_least_one("id", "name", message="Either id or name must be provided"),),
        rules=(
            absolute_bounds("set_price", "set_price_type", 0),
            absolute_bounds("stock_number", "stock_number_type", -1, 99999),
            absolute_bounds("own_number", "own_number_type", 0),
        ),
    ),
    "apply_penalty": OperationRules(
        PenaltyApply,
        rules=(penalty_item_target, penalty_skills_only_for_exp),
    ),
    "edit_skill": OperationRules(
        SkillEdit,
        rules=(skill_create_requires_content, skill_delete_requires_id),
    ),
    "search_tasks": OperationRules(TaskSearch),
    "get_task_history": OperationRules(TaskHistoryQuery),
    "match_task_to_achievements": OperationRules(AchievementMatchQuery),
    "search_shop_items": OperationRules(ShopItemSearch, rules=(price_range,)),
}


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


def _field_path(loc: tuple) -> str:
    return ".".join(str(part) for part in loc) or "input"


def _from_pydantic(exc: ValidationError) -> list[Violation]:
    violations = []
    for err in exc.errors():
        if err["type"] == "value_error" and "error" in err.get("ctx", {}):
            message = str(err["ctx"]["error"])
        else:
            message = err["msg"]
        violations.append(Violation(_field_path(err["loc"]), message))
    return violations


def _raw_view(model: type[BaseModel], data: Any) -> dict[str, Any]:
    """Map the raw input onto field names (accepting aliases) for rule evaluation."""
    if not isinstance(data, Mapping):
        return {}
    view = {}
    for name, info in model.model_fields.items():
        key = info.alias or name
        view[name] = data.get(key, data.get(name))
    return view


def validate(operation: str, data: Any) -> ValidationResult:
    """Validate ``data`` for ``operation`` and return a ValidationResult.

    All violations are aggregated: field errors first, then identification
    rules, then the remaining cross-field rules (skipped when no target can
    be identified).
    """
    entry = OPERATIONS.get(operation)
    if entry is None:
        raise ValueError(f"No validation rules for operation '{operation}'")
    if data is None:
        data = {}

    violations: list[Violation] = []
    value: Optional[BaseModel] = None
    try:
        value = entry.model.model_validate(data)
        view = value.model_dump()
    except ValidationError as exc:
        violations.extend(_from_pydantic(exc))
        view = _raw_view(entry.model, data)

    identification_failures = []
    for rule in entry.identification:
        violation = rule(view)
        if violation:
            identification_failures.append(violation)
    violations.extend(identification_failures)

    if not identification_failures:
        for rule in entry.rules:
            violation = rule(view)
            if violation:
                violations.append(violation)

    if violations:
        logger.debug("Validation failed for %s: %s", operation, violations)
        return ValidationResult(violations=violations)
    return ValidationResult(value=value)
