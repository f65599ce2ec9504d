import pytest

from models.audience import AudienceType, ScriptAudience
from models.content import ContentItem, ContentType
from models.strategy import (
    AdaptationAction,
    AdaptationActionType,
    ConditionType,
    ContentAdaptationRule,
    InclusionCondition,
)
from services.adaptation import adapt_item, adapt_items, estimate_duration
from services.conditions import ConditionContext

EXECUTIVE_ONLY = InclusionCondition(
    type=ConditionType.AUDIENCE_TYPE,
    parameters={"audience": "executive"},
)

SIMPLIFY = ContentAdaptationRule(
    name="simplify_for_non_technical",
    triggers=(EXECUTIVE_ONLY,),
    actions=(
        AdaptationAction(type=AdaptationActionType.SIMPLIFY_LANGUAGE, parameters={"level": "basic"}),
        AdaptationAction(type=AdaptationActionType.REDUCE_DETAIL, parameters={"max_items": 3}),
    ),
)


def _context(audience: AudienceType) -> ConditionContext:
    return ConditionContext(audience=ScriptAudience(primary=audience), target_duration=180)


def _commit_item() -> ContentItem:
    return ContentItem(
        type=ContentType.COMMIT_DATA,
        payload={
            "description": "First sentence. Second sentence with detail.",
            "commits": [{"sha": str(i)} for i in range(6)],
        },
        priority_score=0.9,
    )


@pytest.mark.parametrize(
    ("content_type", "seconds"),
    [
        (ContentType.PR_OVERVIEW, 10),
        (ContentType.COMMIT_DATA, 15),
        (ContentType.REVIEW_DATA, 18),
        (ContentType.METRICS, 6),
        (ContentType.CODE_SAMPLES, 20),
    ],
)
def test_estimate_duration(content_type: ContentType, seconds: float) -> None:
    assert estimate_duration(content_type) == seconds


def test_triggered_rule_applies_all_actions() -> None:
    item = adapt_item(_commit_item(), [SIMPLIFY], _context(AudienceType.EXECUTIVE))
    assert item.adaptations == ["language_simplified", "detail_reduced"]
    assert item.payload["description"] == "First sentence."
    assert item.payload["language"] == "basic"
    assert len(item.payload["commits"]) == 3
    assert item.rationale == (
        "Selected commit_data content for executive audience based on relevance and impact"
    )


def test_untriggered_rule_leaves_payload_alone() -> None:
    item = adapt_item(_commit_item(), [SIMPLIFY], _context(AudienceType.ENGINEERING))
    assert item.adaptations == []
    assert len(item.payload["commits"]) == 6


def test_adaptation_does_not_mutate_original_payload() -> None:
    original = _commit_item()
    payload = original.payload
    adapt_item(original, [SIMPLIFY], _context(AudienceType.EXECUTIVE))
    assert len(payload["commits"]) == 6
    assert "language" not in payload


def test_duration_is_independent_of_adaptation() -> None:
    adapted = adapt_item(_commit_item(), [SIMPLIFY], _context(AudienceType.EXECUTIVE))
    plain = adapt_item(_commit_item(), [], _context(AudienceType.EXECUTIVE))
    assert adapted.duration_impact_seconds == plain.duration_impact_seconds == 15


def test_reduce_detail_truncates_list_payload() -> None:
    rule = ContentAdaptationRule(
        name="trim",
        actions=(AdaptationAction(type=AdaptationActionType.REDUCE_DETAIL, parameters={"max_items": 2}),),
    )
    item = ContentItem(type=ContentType.PARTICIPANT_DATA, payload=[{"login": c} for c in "abcd"])
    adapted = adapt_item(item, [rule], _context(AudienceType.PRODUCT))
    assert [p["login"] for p in adapted.payload] == ["a", "b"]


def test_priority_threshold_trigger_uses_item_score() -> None:
    rule = ContentAdaptationRule(
        name="explain_important",
        triggers=(InclusionCondition(type=ConditionType.PRIORITY_THRESHOLD, parameters={"min_score": 0.8}),),
        actions=(AdaptationAction(type=AdaptationActionType.ADD_EXPLANATION, parameters={"text": "Why it matters"}),),
    )
    high = _commit_item()
    low = _commit_item()
    low.priority_score = 0.5
    adapted = adapt_items([high, low], [rule], _context(AudienceType.PRODUCT))
    assert adapted[0].payload["explanations"] == ["Why it matters"]
    assert "explanations" not in adapted[1].payload
