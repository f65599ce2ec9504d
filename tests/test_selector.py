from models.content import ContentItem, ContentType, PriorityTier
from services.selector import select_for_duration


def _item(content_type: ContentType, tier: PriorityTier, seconds: float, score: float = 0.5) -> ContentItem:
    return ContentItem(
        type=content_type,
        payload={},
        priority=tier,
        priority_score=score,
        duration_impact_seconds=seconds,
    )


def test_critical_items_always_selected_even_over_budget() -> None:
    items = [
        _item(ContentType.COMMIT_DATA, PriorityTier.CRITICAL, 40),
        _item(ContentType.REVIEW_DATA, PriorityTier.CRITICAL, 40),
        _item(ContentType.METRICS, PriorityTier.HIGH, 5),
    ]
    selected = select_for_duration(items, target_duration=60)
    assert [item.type for item in selected] == [ContentType.COMMIT_DATA, ContentType.REVIEW_DATA]


def test_high_tier_limited_to_eighty_percent() -> None:
    items = [
        _item(ContentType.COMMIT_DATA, PriorityTier.CRITICAL, 40),
        _item(ContentType.FILE_CHANGES, PriorityTier.HIGH, 40, score=0.7),
        _item(ContentType.METRICS, PriorityTier.HIGH, 30, score=0.65),
    ]
    selected = select_for_duration(items, target_duration=100)
    # 40 + 40 = 80 fits; adding 30 more would not.
    assert [item.type for item in selected] == [ContentType.COMMIT_DATA, ContentType.FILE_CHANGES]


def test_skipped_items_do_not_block_smaller_ones() -> None:
    items = [
        _item(ContentType.COMMIT_DATA, PriorityTier.CRITICAL, 50),
        _item(ContentType.REVIEW_DATA, PriorityTier.MEDIUM, 60, score=0.55),
        _item(ContentType.METRICS, PriorityTier.LOW, 6, score=0.3),
    ]
    selected = select_for_duration(items, target_duration=100)
    assert [item.type for item in selected] == [ContentType.COMMIT_DATA, ContentType.METRICS]


def test_remaining_tiers_limited_to_ninety_five_percent() -> None:
    items = [
        _item(ContentType.COMMIT_DATA, PriorityTier.CRITICAL, 90),
        _item(ContentType.METRICS, PriorityTier.OPTIONAL, 5),
        _item(ContentType.TIMELINE_EVENTS, PriorityTier.OPTIONAL, 1),
    ]
    selected = select_for_duration(items, target_duration=100)
    assert [item.type for item in selected] == [ContentType.COMMIT_DATA, ContentType.METRICS]


def test_selection_is_deterministic() -> None:
    def build():
        return [
            _item(ContentType.PR_OVERVIEW, PriorityTier.HIGH, 10, score=0.6),
            _item(ContentType.PR_OVERVIEW, PriorityTier.HIGH, 10, score=0.6),
            _item(ContentType.IMPACT_ANALYSIS, PriorityTier.MEDIUM, 8),
        ]

    first = [(item.type, item.priority_score) for item in select_for_duration(build(), 30)]
    second = [(item.type, item.priority_score) for item in select_for_duration(build(), 30)]
    assert first == second
    assert len(first) == 3


def test_empty_input() -> None:
    assert select_for_duration([], 120) == []
