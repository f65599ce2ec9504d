import pytest

from models.audience import AudienceType, NarrativeStyle, ScriptAudience
from models.content import ContentItem, ContentType, PriorityTier
from models.duration import ContentCut, DurationConstraints, OptimizedSection, SectionBounds
from models.script import QualityMetrics, ScriptMetadata, ScriptSection, TimingWindow, VideoScript
from models.section import SectionType
from models.strategy import DurationAdaptation, DurationStrategy
from models.template import TemplateType
from services.conditions import ConditionContext
from services.duration_optimizer import (
    AGGRESSIVE_COMPRESSION,
    BALANCED_OPTIMIZATION,
    CONTENT_EXPANSION,
    calculate_compliance,
    count_entries,
    duration_optimizer,
    duration_warnings,
    generate_dynamic_duration,
    minimum_duration,
    section_for_item,
    select_strategy,
)


def _item(content_type: ContentType, tier: PriorityTier, seconds: float, payload=None) -> ContentItem:
    return ContentItem(
        type=content_type,
        payload=payload if payload is not None else {},
        priority=tier,
        duration_impact_seconds=seconds,
    )


def _context(participants: int = 1, audience: AudienceType = AudienceType.ENGINEERING) -> ConditionContext:
    return ConditionContext(
        audience=ScriptAudience(primary=audience),
        target_duration=180,
        volumes={"participants": participants},
    )


@pytest.mark.parametrize(
    ("actual", "target", "expected"),
    [(100, 100, 1.0), (90, 100, 0.9), (110, 100, 0.9), (250, 100, 0.0), (0, 60, 0.0)],
)
def test_calculate_compliance(actual: float, target: float, expected: float) -> None:
    assert calculate_compliance(actual, target) == pytest.approx(expected)


@pytest.mark.parametrize(
    ("target", "expected"),
    [
        (69, AGGRESSIVE_COMPRESSION),
        (71, BALANCED_OPTIMIZATION),
        (100, BALANCED_OPTIMIZATION),
        (129, BALANCED_OPTIMIZATION),
        (131, CONTENT_EXPANSION),
    ],
)
def test_strategy_boundaries(target: float, expected: str) -> None:
    assert select_strategy(target, 100).name == expected


def test_no_natural_duration_expands() -> None:
    assert select_strategy(60, 0).name == CONTENT_EXPANSION


def test_custom_adaptation_replaces_builtins() -> None:
    custom = DurationAdaptation(
        short_form=DurationStrategy(name="tiny"),
        medium_form=DurationStrategy(name="normal"),
        long_form=DurationStrategy(name="epic"),
    )
    assert select_strategy(50, 100, custom).name == "tiny"
    assert select_strategy(100, 100, custom).name == "normal"
    assert select_strategy(200, 100, custom).name == "epic"


def test_generate_dynamic_duration_caps_at_max_scale() -> None:
    assert generate_dynamic_duration(30, 8, 5, 2.5) == 70
    assert generate_dynamic_duration(30, 8, 20, 2.5) == 75


def test_minimum_duration_defaults() -> None:
    assert minimum_duration(SectionType.TECHNICAL_DETAILS) == 8
    assert minimum_duration(SectionType.CODE_CHANGES) == 6


def test_count_entries() -> None:
    items = [
        _item(ContentType.COMMIT_DATA, PriorityTier.HIGH, 15, {"commits": [1, 2, 3]}),
        _item(ContentType.COMMIT_DATA, PriorityTier.HIGH, 15, {"note": "no list"}),
        _item(ContentType.PARTICIPANT_DATA, PriorityTier.LOW, 8, [1, 2]),
    ]
    assert count_entries(items, ContentType.COMMIT_DATA) == 4
    assert count_entries(items, ContentType.PARTICIPANT_DATA) == 2
    assert count_entries(items, ContentType.FILE_CHANGES) == 0


def test_section_for_item_without_template_uses_defaults() -> None:
    assert section_for_item(ContentType.COMMIT_DATA, None, _context()) is SectionType.CODE_CHANGES
    assert section_for_item(ContentType.METRICS, None, _context()) is SectionType.KEY_INSIGHTS


def test_section_for_item_falls_back_to_accepting_section(registry) -> None:
    technical = registry.get_template(TemplateType.TECHNICAL)
    summary = registry.get_template(TemplateType.SUMMARY)
    # Technical has no overview section; intro accepts PR overviews.
    assert section_for_item(ContentType.PR_OVERVIEW, technical, _context()) is SectionType.INTRO
    # Summary collaboration needs three participants.
    assert section_for_item(ContentType.PARTICIPANT_DATA, summary, _context(participants=1)) is SectionType.OVERVIEW
    assert (
        section_for_item(ContentType.PARTICIPANT_DATA, summary, _context(participants=4))
        is SectionType.COLLABORATION
    )


def _compressed_result():
    items = [
        *[_item(ContentType.COMMIT_DATA, PriorityTier.CRITICAL, 15) for _ in range(4)],
        _item(ContentType.REVIEW_DATA, PriorityTier.HIGH, 18),
        _item(ContentType.METRICS, PriorityTier.MEDIUM, 6),
    ]
    return duration_optimizer.optimize_for_duration(items, 30)


def test_compression_clamps_sections_but_keeps_floors() -> None:
    result = _compressed_result()
    assert result.metadata.strategy == AGGRESSIVE_COMPRESSION
    durations = {section.section_type: section.optimized_duration for section in result.sections}
    assert durations == {
        SectionType.CODE_CHANGES: 27,
        SectionType.REVIEW_PROCESS: 5,
        SectionType.KEY_INSIGHTS: 4,
    }
    for section in result.sections:
        assert section.optimized_duration >= minimum_duration(section.section_type)
    assert result.total_duration == 36
    assert result.compliance == pytest.approx(0.8)


def test_compression_records_cuts_and_adjustments() -> None:
    result = _compressed_result()
    code = next(s for s in result.sections if s.section_type is SectionType.CODE_CHANGES)
    assert [cut.type for cut in code.content_cuts] == ["detail_reduction", "example_removal"]
    assert code.adjustment_rationale == "Duration reduced by 55.0% using aggressive_compression strategy"
    assert code.priority_adjustments == []

    review = next(s for s in result.sections if s.section_type is SectionType.REVIEW_PROCESS)
    assert review.priority_adjustments[0].to_tier is PriorityTier.MEDIUM

    assert result.warnings == [
        "Total duration 36.0s exceeds target by 20.0%",
        "2 sections have significant content cuts that may impact quality",
    ]


def test_sections_handed_budget_in_priority_order() -> None:
    result = _compressed_result()
    assert [s.priority for s in result.sections] == [
        PriorityTier.CRITICAL,
        PriorityTier.HIGH,
        PriorityTier.MEDIUM,
    ]


def test_balanced_keeps_natural_durations() -> None:
    items = [
        _item(ContentType.COMMIT_DATA, PriorityTier.CRITICAL, 15),
        _item(ContentType.IMPACT_ANALYSIS, PriorityTier.HIGH, 8),
    ]
    result = duration_optimizer.optimize_for_duration(items, 25)
    assert result.metadata.strategy == BALANCED_OPTIMIZATION
    assert result.total_duration == 23
    assert set(result.metadata.unoptimized_sections) == {
        SectionType.CODE_CHANGES,
        SectionType.IMPACT_ASSESSMENT,
    }
    assert result.metadata.quality_preservation == 1.0
    assert result.warnings == []


def test_expansion_fills_up_to_section_ceiling() -> None:
    items = [_item(ContentType.COMMIT_DATA, PriorityTier.CRITICAL, 15)]
    result = duration_optimizer.optimize_for_duration(items, 200)
    assert result.metadata.strategy == CONTENT_EXPANSION
    # Without a template the code changes ceiling is 40s.
    assert result.total_duration == 40
    assert "below target" in result.warnings[0]


def test_expansion_uses_dynamic_ceiling(registry) -> None:
    technical = registry.get_template(TemplateType.TECHNICAL)
    items = [
        _item(ContentType.COMMIT_DATA, PriorityTier.CRITICAL, 15, {"commits": list(range(12))}),
    ]
    result = duration_optimizer.optimize_for_duration(items, 600, technical, context=_context())
    # min(50 + 12 * 8, 50 * 3) = 146, below the declared max of 150.
    code = result.sections[0]
    assert code.section_type is SectionType.CODE_CHANGES
    assert code.optimized_duration == 150
    # Required intro and summary get their floors.
    assert result.total_duration == 155


def test_expansion_splits_gap_proportionally() -> None:
    items = [
        _item(ContentType.COMMIT_DATA, PriorityTier.CRITICAL, 15),
        _item(ContentType.IMPACT_ANALYSIS, PriorityTier.CRITICAL, 8),
    ]
    result = duration_optimizer.optimize_for_duration(items, 45)
    assert result.total_duration == pytest.approx(45, abs=0.02)
    for section in result.sections:
        assert section.optimized_duration > section.original_duration


def test_empty_items() -> None:
    result = duration_optimizer.optimize_for_duration([], 120)
    assert result.sections == []
    assert result.total_duration == 0
    assert result.compliance == 0.0


def test_empty_items_keep_required_framing_sections(registry) -> None:
    technical = registry.get_template(TemplateType.TECHNICAL)
    result = duration_optimizer.optimize_for_duration([], 120, technical, context=_context())
    assert [s.section_type for s in result.sections] == [SectionType.INTRO, SectionType.SUMMARY]
    assert [s.optimized_duration for s in result.sections] == [2, 3]
    assert all(s.priority is PriorityTier.CRITICAL and s.items == [] for s in result.sections)
    assert result.total_duration == 5


def test_framing_sections_only_fill_gaps(registry) -> None:
    summary = registry.get_template(TemplateType.SUMMARY)
    items = [_item(ContentType.PR_OVERVIEW, PriorityTier.CRITICAL, 10)]
    result = duration_optimizer.optimize_for_duration(items, 12, summary, context=_context())
    types = [s.section_type for s in result.sections]
    assert types.count(SectionType.OVERVIEW) == 1
    assert SectionType.HOOK in types
    overview = next(s for s in result.sections if s.section_type is SectionType.OVERVIEW)
    assert overview.items != []


HEAVY_CUT_WARNING = "significant content cuts"


def test_heavy_cut_warning_fires_when_both_cuts_apply() -> None:
    items = [_item(ContentType.REVIEW_DATA, PriorityTier.LOW, 18) for _ in range(5)]
    result = duration_optimizer.optimize_for_duration(items, 30)
    assert result.metadata.strategy == AGGRESSIVE_COMPRESSION
    review = result.sections[0]
    assert review.original_duration == 90
    assert [cut.type for cut in review.content_cuts] == ["detail_reduction", "example_removal"]
    assert "1 sections have significant content cuts that may impact quality" in result.warnings


def test_heavy_cut_warning_ignores_single_cut() -> None:
    section = OptimizedSection(
        section_type=SectionType.REVIEW_PROCESS,
        priority=PriorityTier.HIGH,
        items=[],
        original_duration=10,
        optimized_duration=6,
        content_cuts=[ContentCut("example_removal", "Removed secondary examples", 1.2, 0.1)],
    )
    assert not any(HEAVY_CUT_WARNING in warning for warning in duration_warnings([section], 6))


def test_optimization_is_deterministic() -> None:
    first = _compressed_result()
    second = _compressed_result()
    assert [(s.section_type, s.optimized_duration) for s in first.sections] == [
        (s.section_type, s.optimized_duration) for s in second.sections
    ]


def _script(durations: dict[SectionType, float]) -> VideoScript:
    sections = []
    start = 0.0
    for section_type, duration in durations.items():
        sections.append(
            ScriptSection(
                id=f"section_{section_type.value}",
                type=section_type,
                title=section_type.value,
                content="",
                voiceover="",
                visual_cues=[],
                duration_seconds=duration,
                timing_window=TimingWindow(start, start + duration),
                priority=PriorityTier.HIGH,
                source_items=[],
            )
        )
        start += duration
    return VideoScript(
        id="script_test",
        title="t",
        description="d",
        target_duration_seconds=120,
        sections=sections,
        audience=ScriptAudience(),
        style=NarrativeStyle(),
        metadata=ScriptMetadata(
            template_type=TemplateType.SUMMARY, strategy=BALANCED_OPTIMIZATION, quality=QualityMetrics.zero()
        ),
    )


def test_validate_duration_constraints_flags_total_and_sections() -> None:
    script = _script({SectionType.INTRO: 5, SectionType.CODE_CHANGES: 80})
    constraints = DurationConstraints(
        min_duration=30,
        max_duration=60,
        section_constraints={
            SectionType.INTRO: SectionBounds(min=8, max=15),
            SectionType.CODE_CHANGES: SectionBounds(min=10, max=60),
        },
    )
    result = duration_optimizer.validate_duration_constraints(script, constraints)
    assert result.is_valid is False
    assert [v.type for v in result.violations] == [
        "total_too_long",
        "section_too_short",
        "section_too_long",
    ]
    assert result.suggestions[0] == "Consider removing optional sections or reducing detail level"
    assert result.suggestions[2].startswith("Section section_code_changes could be shortened")


def test_section_violations_alone_are_warnings() -> None:
    script = _script({SectionType.INTRO: 5, SectionType.SUMMARY: 40})
    constraints = DurationConstraints(
        min_duration=30,
        max_duration=60,
        section_constraints={SectionType.INTRO: SectionBounds(min=8, max=15)},
    )
    result = duration_optimizer.validate_duration_constraints(script, constraints)
    assert result.is_valid is True
    assert result.violations[0].severity == "warning"
