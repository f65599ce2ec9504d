import pytest
from pydantic import ValidationError

from models import (
    ContentItem,
    ContentType,
    NarrativeStyle,
    NarrativeTone,
    PriorityTier,
    QualityMetrics,
    ScriptGenerationConfig,
    ScriptAudience,
    StyleOverrides,
    TemplateType,
)
from models.strategy import (
    DEFAULT_SELECTION_STRATEGY,
    FilterAction,
    FilterCriteria,
    FilteringRule,
    ConditionOperator,
    SelectionStrategyOverrides,
)
from models.template import DurationAllocation


def test_priority_tier_rank_and_shift() -> None:
    assert PriorityTier.CRITICAL.rank == 0
    assert PriorityTier.OPTIONAL.rank == 4
    assert PriorityTier.MEDIUM.shifted(-1) is PriorityTier.HIGH
    assert PriorityTier.MEDIUM.shifted(1) is PriorityTier.LOW
    # Shifts saturate at both ends.
    assert PriorityTier.CRITICAL.shifted(-1) is PriorityTier.CRITICAL
    assert PriorityTier.OPTIONAL.shifted(3) is PriorityTier.OPTIONAL


def test_content_item_defaults() -> None:
    item = ContentItem(type=ContentType.METRICS, payload={"total_commits": 3})
    assert item.priority is PriorityTier.OPTIONAL
    assert item.adaptations == []
    assert item.duration_impact_seconds == 0.0


def test_quality_metrics_overall_is_mean_of_dimensions() -> None:
    metrics = QualityMetrics(
        coherence=1.0,
        engagement=0.5,
        accuracy=0.5,
        duration_compliance=0.0,
        audience_alignment=0.5,
    )
    assert metrics.overall == pytest.approx(0.5)


def test_quality_metrics_clamps_scores() -> None:
    metrics = QualityMetrics(1.4, -0.2, 0.9, 1.0, 0.9)
    assert metrics.coherence == 1.0
    assert metrics.engagement == 0.0
    assert 0.0 <= metrics.overall <= 1.0


def test_quality_metrics_zero() -> None:
    zero = QualityMetrics.zero()
    assert zero.overall == 0.0
    assert zero.details.strengths == []


def test_duration_allocation_rejects_inverted_bounds() -> None:
    with pytest.raises(ValidationError):
        DurationAllocation(min=30, max=10, preferred=20)


def test_style_overrides_only_replace_set_fields() -> None:
    base = NarrativeStyle()
    merged = StyleOverrides(tone=NarrativeTone.ENTHUSIASTIC).apply_to(base)
    assert merged.tone is NarrativeTone.ENTHUSIASTIC
    assert merged.pacing is base.pacing
    assert merged.approach is base.approach


def test_selection_overrides_merge_keeps_unset_fields() -> None:
    rule = FilteringRule(
        name="drop_metrics",
        criteria=FilterCriteria(field="type", operator=ConditionOperator.EQUALS, value="metrics"),
        action=FilterAction.EXCLUDE,
    )
    merged = SelectionStrategyOverrides(filtering=(rule,)).merge_into(DEFAULT_SELECTION_STRATEGY)
    assert merged.filtering == (rule,)
    assert merged.name == DEFAULT_SELECTION_STRATEGY.name
    assert merged.criteria == DEFAULT_SELECTION_STRATEGY.criteria
    # Base strategy is frozen and unchanged.
    assert DEFAULT_SELECTION_STRATEGY.filtering == ()


def test_generation_config_requires_positive_target() -> None:
    with pytest.raises(ValidationError):
        ScriptGenerationConfig(
            template_type=TemplateType.SUMMARY,
            target_duration_seconds=0,
            audience=ScriptAudience(),
        )


def test_generation_config_is_frozen() -> None:
    config = ScriptGenerationConfig(
        template_type=TemplateType.SUMMARY,
        target_duration_seconds=120,
        audience=ScriptAudience(),
    )
    with pytest.raises(ValidationError):
        config.target_duration_seconds = 300
