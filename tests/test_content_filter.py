from models.content import ContentItem, ContentType, PriorityTier
from models.strategy import ConditionOperator, FilterAction, FilterCriteria, FilteringRule
from services.content_filter import apply_filters, resolve_item_field


def _rule(action: FilterAction, field: str, operator: ConditionOperator, value=None, amount: float = 0.1):
    return FilteringRule(
        name=f"{action.value}_{field}",
        criteria=FilterCriteria(field=field, operator=operator, value=value),
        action=action,
        amount=amount,
    )


def _items() -> list[ContentItem]:
    return [
        ContentItem(
            type=ContentType.COMMIT_DATA,
            payload={"significance": "low"},
            priority_score=0.7,
            priority=PriorityTier.HIGH,
        ),
        ContentItem(
            type=ContentType.FILE_CHANGES,
            payload={"significance": "high"},
            priority_score=0.65,
            priority=PriorityTier.HIGH,
        ),
        ContentItem(
            type=ContentType.METRICS,
            payload={"total_commits": 3},
            priority_score=0.45,
            priority=PriorityTier.MEDIUM,
        ),
    ]


def test_resolve_item_field_prefers_item_attributes() -> None:
    item = _items()[0]
    assert resolve_item_field(item, "type") is ContentType.COMMIT_DATA
    assert resolve_item_field(item, "significance") == "low"


def test_exclude_removes_matching_items() -> None:
    kept = apply_filters(_items(), [_rule(FilterAction.EXCLUDE, "significance", ConditionOperator.EQUALS, "low")])
    assert [item.type for item in kept] == [ContentType.FILE_CHANGES, ContentType.METRICS]


def test_include_keeps_only_matching_items() -> None:
    kept = apply_filters(_items(), [_rule(FilterAction.INCLUDE, "significance", ConditionOperator.EXISTS)])
    assert [item.type for item in kept] == [ContentType.COMMIT_DATA, ContentType.FILE_CHANGES]


def test_boost_reorders_within_tier_only() -> None:
    rule = _rule(FilterAction.BOOST, "type", ConditionOperator.EQUALS, "file_changes", amount=0.2)
    result = apply_filters(_items(), [rule])
    assert [item.type for item in result][:2] == [ContentType.FILE_CHANGES, ContentType.COMMIT_DATA]
    assert result[0].priority is PriorityTier.HIGH


def test_demote_does_not_change_tier() -> None:
    rule = _rule(FilterAction.DEMOTE, "type", ConditionOperator.CONTAINS, "commit", amount=0.5)
    result = apply_filters(_items(), [rule])
    commit = next(item for item in result if item.type is ContentType.COMMIT_DATA)
    assert commit.priority_score == 0.7 - 0.5
    assert commit.priority is PriorityTier.HIGH
    # Tier still dominates ordering.
    assert result[-1].type is ContentType.METRICS


def test_rules_run_in_order() -> None:
    rules = [
        _rule(FilterAction.EXCLUDE, "type", ConditionOperator.EQUALS, "metrics"),
        _rule(FilterAction.INCLUDE, "significance", ConditionOperator.EQUALS, "high"),
    ]
    assert [item.type for item in apply_filters(_items(), rules)] == [ContentType.FILE_CHANGES]


def test_missing_field_never_matches() -> None:
    rule = _rule(FilterAction.EXCLUDE, "does.not.exist", ConditionOperator.EXISTS)
    assert len(apply_filters(_items(), [rule])) == 3
