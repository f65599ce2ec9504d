import pytest

from models.audience import AudienceType, ScriptAudience
from models.strategy import ConditionOperator, ConditionType, InclusionCondition
from services.conditions import (
    MISSING,
    ConditionContext,
    all_conditions_hold,
    compare,
    evaluate_condition,
    resolve_path,
)


def _context(**volumes: int) -> ConditionContext:
    return ConditionContext(
        audience=ScriptAudience(primary=AudienceType.ENGINEERING),
        target_duration=300,
        volumes=volumes,
    )


def test_resolve_path_walks_dicts_and_attributes() -> None:
    payload = {"stats": {"total_files": 4}}
    assert resolve_path(payload, "stats.total_files") == 4
    assert resolve_path(payload, "stats.missing") is MISSING
    assert resolve_path(_context(), "audience.primary") is AudienceType.ENGINEERING


@pytest.mark.parametrize(
    ("value", "operator", "expected", "result"),
    [
        ("low", ConditionOperator.EQUALS, "low", True),
        (5, ConditionOperator.GREATER_THAN, 3, True),
        (5, ConditionOperator.LESS_THAN, 3, False),
        ("commit_data", ConditionOperator.CONTAINS, "commit", True),
        (["a", "b"], ConditionOperator.CONTAINS, "b", True),
        (None, ConditionOperator.EXISTS, None, False),
        (0, ConditionOperator.EXISTS, None, True),
        ("text", ConditionOperator.GREATER_THAN, 3, False),
        (AudienceType.QA, ConditionOperator.EQUALS, "qa", True),
    ],
)
def test_compare(value, operator: ConditionOperator, expected, result: bool) -> None:
    assert compare(value, operator, expected) is result


def test_missing_fails_every_operator() -> None:
    for operator in ConditionOperator:
        assert compare(MISSING, operator, 1) is False


def test_audience_condition() -> None:
    condition = InclusionCondition(type=ConditionType.AUDIENCE_TYPE, parameters={"audience": "engineering"})
    assert evaluate_condition(condition, _context()) is True
    unset = ConditionContext(audience=ScriptAudience(), target_duration=300)
    assert evaluate_condition(condition, unset) is False


def test_volume_bounds_use_context_counts() -> None:
    condition = InclusionCondition(
        type=ConditionType.DATA_AVAILABILITY, parameters={"min_participants": 3}
    )
    assert evaluate_condition(condition, _context(participants=4)) is True
    assert evaluate_condition(condition, _context(participants=2)) is False


def test_payload_list_overrides_context_volume() -> None:
    condition = InclusionCondition(type=ConditionType.CONTENT_VOLUME, parameters={"max_commits": 2})
    assert evaluate_condition(condition, _context(commits=10), {"commits": [1, 2]}) is True


def test_duration_constraint() -> None:
    condition = InclusionCondition(type=ConditionType.DURATION_CONSTRAINT, parameters={"min_total": 540})
    assert evaluate_condition(condition, _context()) is False
    assert all_conditions_hold([], _context()) is True
