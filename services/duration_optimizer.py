"""Fit selected content into a target running time.

The optimizer picks one of three strategies from the ratio of target to natural
duration, groups items into sections, scales each section by the strategy's
tier and section-type multipliers, then clamps (when over budget) or fills
(when expanding) while never dropping a section below its per-type floor.
Required framing sections that received no content are added at that floor.
"""

from __future__ import annotations

import logging
from typing import Iterable

from models.audience import ScriptAudience
from models.content import ContentItem, ContentType, PriorityTier
from models.duration import (
    ContentCut,
    DurationConstraints,
    DurationOptimizationMetadata,
    DurationOptimizationResult,
    DurationValidationResult,
    DurationViolation,
    OptimizedSection,
    PriorityAdjustment,
)
from models.script import VideoScript
from models.section import SectionType as S
from models.strategy import DurationAdaptation, DurationStrategy
from models.template import DurationAllocation, Template
from services.conditions import ConditionContext, all_conditions_hold

logger = logging.getLogger(__name__)

AGGRESSIVE_COMPRESSION = "aggressive_compression"
BALANCED_OPTIMIZATION = "balanced_optimization"
CONTENT_EXPANSION = "content_expansion"

COMPRESSION_THRESHOLD = 0.7
EXPANSION_THRESHOLD = 1.3
CLAMP_SHARE = 0.9            # share of remaining budget one section may take when over target
HEAVY_CUT_IMPACT = 0.3

# Required template sections that frame every script, even when no content maps to them.
FRAMING_SECTIONS = (S.INTRO, S.HOOK, S.OVERVIEW, S.SUMMARY)

BUILTIN_STRATEGIES: dict[str, DurationStrategy] = {
    AGGRESSIVE_COMPRESSION: DurationStrategy(
        name=AGGRESSIVE_COMPRESSION,
        priority_adjustments={
            PriorityTier.CRITICAL: 1.0,
            PriorityTier.HIGH: 0.7,
            PriorityTier.MEDIUM: 0.5,
            PriorityTier.LOW: 0.3,
            PriorityTier.OPTIONAL: 0.1,
        },
        duration_adjustments={
            S.INTRO: 0.8,
            S.OVERVIEW: 0.7,
            S.CODE_CHANGES: 0.6,
            S.REVIEW_PROCESS: 0.5,
            S.SUMMARY: 0.9,
            S.OUTRO: 0.7,
        },
    ),
    CONTENT_EXPANSION: DurationStrategy(
        name=CONTENT_EXPANSION,
        priority_adjustments={
            PriorityTier.CRITICAL: 1.0,
            PriorityTier.HIGH: 1.3,
            PriorityTier.MEDIUM: 1.2,
            PriorityTier.LOW: 1.1,
            PriorityTier.OPTIONAL: 1.0,
        },
        duration_adjustments={
            S.INTRO: 1.2,
            S.OVERVIEW: 1.3,
            S.TECHNICAL_DETAILS: 1.4,
            S.CODE_CHANGES: 1.3,
            S.SUMMARY: 1.1,
            S.OUTRO: 1.1,
        },
    ),
    BALANCED_OPTIMIZATION: DurationStrategy(
        name=BALANCED_OPTIMIZATION,
        priority_adjustments={
            PriorityTier.CRITICAL: 1.0,
            PriorityTier.HIGH: 1.0,
            PriorityTier.MEDIUM: 0.9,
            PriorityTier.LOW: 0.8,
            PriorityTier.OPTIONAL: 0.6,
        },
    ),
}

DEFAULT_SECTION_FOR_CONTENT: dict[ContentType, S] = {
    ContentType.PR_OVERVIEW: S.OVERVIEW,
    ContentType.COMMIT_DATA: S.CODE_CHANGES,
    ContentType.FILE_CHANGES: S.FILE_ANALYSIS,
    ContentType.REVIEW_DATA: S.REVIEW_PROCESS,
    ContentType.PARTICIPANT_DATA: S.COLLABORATION,
    ContentType.METRICS: S.KEY_INSIGHTS,
    ContentType.TIMELINE_EVENTS: S.TIMELINE,
    ContentType.IMPACT_ANALYSIS: S.IMPACT_ASSESSMENT,
}

MINIMUM_SECTION_DURATIONS: dict[S, float] = {
    S.INTRO: 2,
    S.HOOK: 3,
    S.OVERVIEW: 5,
    S.PROBLEM_STATEMENT: 3,
    S.SOLUTION_OVERVIEW: 4,
    S.TECHNICAL_DETAILS: 8,
    S.CODE_CHANGES: 6,
    S.FILE_ANALYSIS: 4,
    S.REVIEW_PROCESS: 5,
    S.COLLABORATION: 3,
    S.TIMELINE: 4,
    S.IMPACT_ASSESSMENT: 3,
    S.KEY_INSIGHTS: 4,
    S.SUMMARY: 3,
    S.CALL_TO_ACTION: 2,
    S.OUTRO: 2,
}
DEFAULT_MINIMUM_DURATION = 3.0

# Used as expansion ceilings for sections a template does not define.
DEFAULT_ALLOCATION = DurationAllocation(min=2, max=30, preferred=10, percentage=10)
DEFAULT_ALLOCATIONS: dict[S, DurationAllocation] = {
    S.INTRO: DurationAllocation(min=2, max=10, preferred=5, percentage=10),
    S.OVERVIEW: DurationAllocation(min=2, max=25, preferred=15, percentage=10),
    S.CODE_CHANGES: DurationAllocation(min=2, max=40, preferred=20, percentage=10),
    S.REVIEW_PROCESS: DurationAllocation(min=2, max=30, preferred=15, percentage=10),
    S.SUMMARY: DurationAllocation(min=2, max=15, preferred=8, percentage=10),
    S.OUTRO: DurationAllocation(min=2, max=8, preferred=3, percentage=10),
}

# Keys whose list length counts as "items" for dynamic duration rules.
ENTRY_KEYS = ("commits", "files", "reviews", "events")


def minimum_duration(section_type: S) -> float:
    return float(MINIMUM_SECTION_DURATIONS.get(section_type, DEFAULT_MINIMUM_DURATION))


def calculate_compliance(actual: float, target: float) -> float:
    return max(0.0, 1 - abs(actual - target) / target)


def generate_dynamic_duration(base: float, per_item: float, item_count: int, max_scale: float) -> float:
    return min(base + item_count * per_item, base * max_scale)


def select_strategy(
    target_duration: float,
    natural_duration: float,
    custom: DurationAdaptation | None = None,
) -> DurationStrategy:
    """Choose by ratio = target / natural: <0.7 compress, >1.3 expand, otherwise balance."""
    ratio = target_duration / natural_duration if natural_duration > 0 else float("inf")
    if ratio < COMPRESSION_THRESHOLD:
        return custom.short_form if custom else BUILTIN_STRATEGIES[AGGRESSIVE_COMPRESSION]
    if ratio > EXPANSION_THRESHOLD:
        return custom.long_form if custom else BUILTIN_STRATEGIES[CONTENT_EXPANSION]
    return custom.medium_form if custom else BUILTIN_STRATEGIES[BALANCED_OPTIMIZATION]


def count_entries(items: Iterable[ContentItem], content_type: ContentType) -> int:
    total = 0
    for item in items:
        if item.type is not content_type:
            continue
        payload = item.payload
        if isinstance(payload, list):
            total += len(payload)
        elif isinstance(payload, dict):
            entries = next((payload[key] for key in ENTRY_KEYS if isinstance(payload.get(key), list)), None)
            total += len(entries) if entries is not None else 1
    return total


def section_for_item(
    content_type: ContentType,
    template: Template | None,
    context: ConditionContext,
) -> S:
    """
    Default section for the content type, unless the template lacks it (or its
    conditions fail); then the template's first section that lists this content type.
    """
    default = DEFAULT_SECTION_FOR_CONTENT.get(content_type, S.OVERVIEW)
    if template is None:
        return default
    available = [
        definition
        for definition in template.sections
        if all_conditions_hold(definition.conditions, context)
    ]
    if any(definition.type is default for definition in available):
        return default
    for definition in available:
        if definition.accepts(content_type):
            return definition.type
    return default


def _highest_tier(items: list[ContentItem]) -> PriorityTier:
    return min((item.priority for item in items), key=lambda tier: tier.rank)


def _content_cuts(original: float, optimized: float) -> list[ContentCut]:
    time_to_save = original - optimized
    cuts: list[ContentCut] = []
    if time_to_save <= 0:
        return cuts
    if time_to_save > 5:
        cuts.append(
            ContentCut(
                type="detail_reduction",
                description="Reduced technical details for time constraints",
                time_saved=min(time_to_save * 0.6, 8),
                quality_impact=0.2,
            )
        )
    if time_to_save > 3:
        cuts.append(
            ContentCut(
                type="example_removal",
                description="Removed secondary examples",
                time_saved=min(time_to_save * 0.3, 5),
                quality_impact=0.1,
            )
        )
    return cuts


def _priority_adjustments(tier: PriorityTier, strategy: DurationStrategy) -> list[PriorityAdjustment]:
    multiplier = strategy.priority_multiplier(tier)
    if multiplier == 1:
        return []
    shifted = tier.shifted(-1 if multiplier > 1 else 1)
    if shifted is tier:
        return []
    return [PriorityAdjustment(from_tier=tier, to_tier=shifted, reason=f"Strategy {strategy.name} adjustment")]


def adjustment_rationale(original: float, optimized: float, strategy_name: str) -> str:
    change = (optimized - original) / original * 100 if original else 0.0
    if abs(change) < 5:
        return "Duration maintained within acceptable range"
    if change < 0:
        return f"Duration reduced by {abs(change):.1f}% using {strategy_name} strategy"
    return f"Duration expanded by {change:.1f}% using {strategy_name} strategy"


def duration_warnings(sections: list[OptimizedSection], target_duration: float) -> list[str]:
    warnings: list[str] = []
    total = sum(section.optimized_duration for section in sections)
    if total > target_duration * 1.1:
        warnings.append(
            f"Total duration {total:.1f}s exceeds target by {(total / target_duration - 1) * 100:.1f}%"
        )
    if total < target_duration * 0.9:
        warnings.append(
            f"Total duration {total:.1f}s is {(1 - total / target_duration) * 100:.1f}% below target"
        )
    heavily_cut = [s for s in sections if round(s.cut_impact, 6) >= HEAVY_CUT_IMPACT]
    if heavily_cut:
        warnings.append(
            f"{len(heavily_cut)} sections have significant content cuts that may impact quality"
        )
    return warnings


class DurationOptimizer:
    """Stateless; one instance can serve concurrent runs."""

    def optimize_for_duration(
        self,
        items: list[ContentItem],
        target_duration: float,
        template: Template | None = None,
        *,
        custom_adaptation: DurationAdaptation | None = None,
        context: ConditionContext | None = None,
    ) -> DurationOptimizationResult:
        context = context or ConditionContext(audience=ScriptAudience(), target_duration=target_duration)
        natural_total = sum(item.duration_impact_seconds for item in items)
        strategy = select_strategy(target_duration, natural_total, custom_adaptation)
        expanding = natural_total <= 0 or target_duration / natural_total > EXPANSION_THRESHOLD
        logger.info(
            "[duration_optimizer] natural=%.1fs target=%.1fs strategy=%s",
            natural_total,
            target_duration,
            strategy.name,
        )

        sections = self._build_sections(items, template, context, strategy)
        adjusted = [
            section.original_duration
            * strategy.priority_multiplier(section.priority)
            * strategy.duration_multiplier(section.section_type)
            for section in sections
        ]
        compression_needed = sum(adjusted) > target_duration

        durations: list[float] = []
        remaining = target_duration
        for section, duration in zip(sections, adjusted):
            if compression_needed:
                duration = min(duration, remaining * CLAMP_SHARE)
            duration = max(minimum_duration(section.section_type), duration)
            remaining = max(0.0, remaining - duration)
            durations.append(duration)

        if expanding and sum(durations) < target_duration:
            ceilings = [
                max(self._ceiling(section.section_type, template, items), duration)
                for section, duration in zip(sections, durations)
            ]
            durations = self._fill_towards(durations, ceilings, target_duration)

        for section, duration in zip(sections, durations):
            section.optimized_duration = round(duration, 2)
            section.content_cuts = _content_cuts(section.original_duration, section.optimized_duration)
            section.priority_adjustments = _priority_adjustments(section.priority, strategy)
            section.adjustment_rationale = adjustment_rationale(
                section.original_duration, section.optimized_duration, strategy.name
            )

        framing = self._framing_sections(sections, template, context)
        if framing:
            logger.info(
                "[duration_optimizer] Adding framing section(s) with no content: %s",
                ", ".join(section.section_type.value for section in framing),
            )
            sections.extend(framing)

        total = round(sum(section.optimized_duration for section in sections), 2)
        cut_impacts = [cut.quality_impact for s in sections for cut in s.content_cuts]
        metadata = DurationOptimizationMetadata(
            strategy=strategy.name,
            target_duration=target_duration,
            compression_ratio=total / natural_total if natural_total else 0.0,
            quality_preservation=(
                max(0.0, 1 - sum(cut_impacts) / len(cut_impacts)) if cut_impacts else 1.0
            ),
            unoptimized_sections=[
                s.section_type
                for s in sections
                if not s.content_cuts and s.original_duration == s.optimized_duration
            ],
        )
        compliance = calculate_compliance(total, target_duration)
        logger.info(
            "[duration_optimizer] total=%.1fs compliance=%.0f%%", total, compliance * 100
        )
        return DurationOptimizationResult(
            sections=sections,
            total_duration=total,
            compliance=compliance,
            metadata=metadata,
            warnings=duration_warnings(sections, target_duration),
        )

    def _build_sections(
        self,
        items: list[ContentItem],
        template: Template | None,
        context: ConditionContext,
        strategy: DurationStrategy,
    ) -> list[OptimizedSection]:
        grouped: dict[S, list[ContentItem]] = {}
        for item in items:
            grouped.setdefault(section_for_item(item.type, template, context), []).append(item)

        sections = [
            OptimizedSection(
                section_type=section_type,
                priority=_highest_tier(section_items),
                items=section_items,
                original_duration=sum(item.duration_impact_seconds for item in section_items),
            )
            for section_type, section_items in grouped.items()
        ]
        # Budget is handed out in priority order.
        return sorted(
            sections,
            key=lambda s: (s.priority.rank, -strategy.priority_multiplier(s.priority)),
        )

    @staticmethod
    def _framing_sections(
        sections: list[OptimizedSection],
        template: Template | None,
        context: ConditionContext,
    ) -> list[OptimizedSection]:
        """
        Required intro/hook/overview/summary sections that no selected item
        landed in, held at their floor duration. A template that frames nothing
        still gets an overview when the selection came back empty.
        """
        if template is None:
            return []
        present = {section.section_type for section in sections}
        missing = [
            definition.type
            for definition in template.required_sections
            if definition.type in FRAMING_SECTIONS
            and definition.type not in present
            and all_conditions_hold(definition.conditions, context)
        ]
        if not missing and not sections:
            missing = [S.OVERVIEW]
        return [
            OptimizedSection(
                section_type=section_type,
                priority=PriorityTier.CRITICAL,
                items=[],
                original_duration=minimum_duration(section_type),
                optimized_duration=minimum_duration(section_type),
                adjustment_rationale="Framing section held at its minimum duration",
            )
            for section_type in dict.fromkeys(missing)
        ]

    @staticmethod
    def _ceiling(section_type: S, template: Template | None, items: list[ContentItem]) -> float:
        definition = template.find_section(section_type) if template else None
        if definition is None:
            return DEFAULT_ALLOCATIONS.get(section_type, DEFAULT_ALLOCATION).max
        allocation = definition.duration
        if allocation.dynamic is None:
            return allocation.max
        rule = allocation.dynamic
        dynamic = generate_dynamic_duration(
            rule.base, rule.per_item, count_entries(items, rule.count_type), rule.max_scale
        )
        return max(allocation.max, dynamic)

    @staticmethod
    def _fill_towards(durations: list[float], ceilings: list[float], target: float) -> list[float]:
        """Grow sections proportionally toward target; each stops at its ceiling."""
        filled = list(durations)
        for _ in range(len(filled) + 1):
            gap = target - sum(filled)
            growable = [i for i, value in enumerate(filled) if value < ceilings[i]]
            if gap <= 1e-9 or not growable:
                break
            base = sum(filled[i] for i in growable)
            for i in growable:
                share = filled[i] / base * gap if base else gap / len(growable)
                filled[i] = min(ceilings[i], filled[i] + share)
        return filled

    def validate_duration_constraints(
        self,
        script: VideoScript,
        constraints: DurationConstraints,
    ) -> DurationValidationResult:
        violations: list[DurationViolation] = []
        total = script.total_duration

        if total < constraints.min_duration:
            violations.append(
                DurationViolation("total_too_short", None, constraints.min_duration, total, "error")
            )
        if total > constraints.max_duration:
            violations.append(
                DurationViolation("total_too_long", None, constraints.max_duration, total, "error")
            )

        for section in script.sections:
            bounds = constraints.section_constraints.get(section.type)
            if bounds is None:
                continue
            if section.duration_seconds < bounds.min:
                violations.append(
                    DurationViolation(
                        "section_too_short", section.id, bounds.min, section.duration_seconds, "warning"
                    )
                )
            if section.duration_seconds > bounds.max:
                violations.append(
                    DurationViolation(
                        "section_too_long", section.id, bounds.max, section.duration_seconds, "warning"
                    )
                )

        return DurationValidationResult(
            is_valid=not any(v.severity == "error" for v in violations),
            violations=violations,
            suggestions=[_violation_suggestion(v) for v in violations],
        )


def _violation_suggestion(violation: DurationViolation) -> str:
    if violation.type == "total_too_long":
        return "Consider removing optional sections or reducing detail level"
    if violation.type == "total_too_short":
        return "Consider adding examples or expanding key sections"
    if violation.type == "section_too_long":
        return f"Section {violation.section} could be shortened by reducing examples or details"
    return f"Section {violation.section} could benefit from additional context or examples"


duration_optimizer = DurationOptimizer()
