"""Field lookup and condition evaluation shared by filters, adaptation triggers and templates."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from models.audience import ScriptAudience
from models.strategy import ConditionOperator, ConditionType, InclusionCondition

MISSING: Any = object()


def resolve_path(obj: Any, path: str) -> Any:
    """Follow a dot path through dicts and attributes; MISSING when any hop is absent."""
    current = obj
    for key in path.split("."):
        if current is MISSING or current is None:
            return MISSING
        if isinstance(current, dict):
            current = current.get(key, MISSING)
        else:
            current = getattr(current, key, MISSING)
    return current


def compare(value: Any, operator: ConditionOperator, expected: Any) -> bool:
    """Evaluate one comparison. A MISSING value fails every operator, including exists."""
    if value is MISSING:
        return False
    if isinstance(value, Enum):
        value = value.value
    if isinstance(expected, Enum):
        expected = expected.value

    if operator is ConditionOperator.EXISTS:
        return value is not None
    if operator is ConditionOperator.EQUALS:
        return value == expected
    if operator is ConditionOperator.CONTAINS:
        if isinstance(value, (list, tuple, set, frozenset)):
            return expected in value
        return str(expected) in str(value)
    try:
        if operator is ConditionOperator.GREATER_THAN:
            return value > expected
        if operator is ConditionOperator.LESS_THAN:
            return value < expected
    except TypeError:
        return False
    return False


@dataclass
class ConditionContext:
    """Run-level facts a condition may test."""

    audience: ScriptAudience
    target_duration: float
    volumes: dict[str, int] = field(default_factory=dict)     # e.g. participants -> 4
    priority_score: float | None = None


def _volume(name: str, payload: Any, context: ConditionContext) -> int | None:
    if isinstance(payload, dict) and isinstance(payload.get(name), list):
        return len(payload[name])
    if isinstance(payload, list) and name in ("items", "participants"):
        return len(payload)
    return context.volumes.get(name)


def _bounds_hold(parameters: dict[str, Any], lookup) -> bool:
    for key, bound in parameters.items():
        if key.startswith("min_"):
            actual = lookup(key[4:])
            if actual is not None and actual < bound:
                return False
        elif key.startswith("max_"):
            actual = lookup(key[4:])
            if actual is not None and actual > bound:
                return False
    return True


def evaluate_condition(
    condition: InclusionCondition,
    context: ConditionContext,
    payload: Any = None,
) -> bool:
    params = condition.parameters

    if condition.type is ConditionType.AUDIENCE_TYPE:
        primary = context.audience.primary
        return primary is not None and compare(primary, ConditionOperator.EQUALS, params.get("audience"))

    if condition.type in (ConditionType.CONTENT_VOLUME, ConditionType.DATA_AVAILABILITY):
        return _bounds_hold(params, lambda name: _volume(name, payload, context))

    if condition.type is ConditionType.DURATION_CONSTRAINT:
        return _bounds_hold(
            params, lambda name: context.target_duration if name == "total" else None
        )

    if condition.type is ConditionType.PRIORITY_THRESHOLD:
        return _bounds_hold(
            params, lambda name: context.priority_score if name == "score" else None
        )

    return True


def all_conditions_hold(
    conditions,
    context: ConditionContext,
    payload: Any = None,
) -> bool:
    return all(evaluate_condition(condition, context, payload) for condition in conditions)
