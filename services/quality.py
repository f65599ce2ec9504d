"""Heuristic quality scoring for an assembled script, plus follow-up suggestions."""

from __future__ import annotations

import logging
import math
from typing import Sequence

import numpy as np

from models.audience import AudienceType, NarrativePacing, ScriptAudience, StorytellingApproach, TechnicalLevel
from models.script import QualityDetails, QualityMetrics, ScriptSection, ScriptSuggestion
from models.section import TECHNICAL_SECTIONS, SectionType
from models.template import TemplateType

logger = logging.getLogger(__name__)

IDEAL_ORDER = [
    SectionType.INTRO,
    SectionType.OVERVIEW,
    SectionType.CODE_CHANGES,
    SectionType.REVIEW_PROCESS,
    SectionType.SUMMARY,
]

BASE_COHERENCE = 0.8
BASE_ENGAGEMENT = 0.6
BASE_ACCURACY = 0.85
BASE_ALIGNMENT = 0.7

IMPROVEMENT_SUGGESTIONS = [
    "Consider adding more transitional elements between sections",
    "Enhance visual variety to maintain engagement",
    "Optimize section durations for better pacing",
]


def is_logical_order(order: Sequence[SectionType]) -> bool:
    matches = sum(1 for actual, ideal in zip(order, IDEAL_ORDER) if actual is ideal)
    return matches >= len(IDEAL_ORDER) * 0.6


def duration_variation(durations: Sequence[float]) -> float:
    """Coefficient of variation (population std / mean); 0 for empty or zero-length input."""
    if not durations:
        return 0.0
    values = np.asarray(durations, dtype=float)
    mean = values.mean()
    if mean == 0:
        return 0.0
    return float(values.std() / mean)


def suggest_better_template(audience: ScriptAudience) -> TemplateType:
    if audience.primary is AudienceType.EXECUTIVE:
        return TemplateType.SUMMARY
    if audience.primary is AudienceType.ENGINEERING:
        return TemplateType.TECHNICAL if audience.technical_level is TechnicalLevel.EXPERT else TemplateType.DETAILED
    if audience.primary is AudienceType.PRODUCT:
        return TemplateType.DETAILED
    return TemplateType.SUMMARY


def suggest_duration(total: float, target: float) -> float:
    if total > target * 1.5:
        return math.ceil(total * 0.8)
    if total < target * 0.7:
        return math.floor(total * 1.2)
    return target


class QualityAssessor:
    def coherence(self, sections: Sequence[ScriptSection]) -> float:
        score = BASE_COHERENCE
        if is_logical_order([section.type for section in sections]):
            score += 0.1
        if duration_variation([section.duration_seconds for section in sections]) < 0.3:
            score += 0.1
        return score

    def engagement(self, sections: Sequence[ScriptSection]) -> float:
        score = BASE_ENGAGEMENT
        score += min(len({section.type for section in sections}) / 10, 0.2)
        if sections:
            average = sum(section.duration_seconds for section in sections) / len(sections)
            if 20 < average < 60:
                score += 0.1
        cue_types = {cue.type for section in sections for cue in section.visual_cues}
        score += min(len(cue_types) / 8, 0.1)
        return score

    def audience_alignment(self, sections: Sequence[ScriptSection], audience: ScriptAudience) -> float:
        score = BASE_ALIGNMENT
        technical = sum(1 for section in sections if section.type in TECHNICAL_SECTIONS)
        if audience.technical_level is TechnicalLevel.BEGINNER and technical < 2:
            score += 0.2
        elif audience.technical_level is TechnicalLevel.EXPERT and technical >= 3:
            score += 0.2
        return score

    def details(self, sections: Sequence[ScriptSection], target_duration: float) -> QualityDetails:
        strengths = []
        if len(sections) >= 5:
            strengths.append("Comprehensive section coverage")
        if any(len(section.visual_cues) > 2 for section in sections):
            strengths.append("Rich visual content")

        weaknesses = []
        total = sum(section.duration_seconds for section in sections)
        if abs(total - target_duration) > target_duration * 0.2:
            weaknesses.append("Duration significantly differs from target")

        risks = []
        if len(sections) > 8:
            risks.append("Too many sections may reduce coherence")

        return QualityDetails(
            strengths=strengths,
            weaknesses=weaknesses,
            suggestions=list(IMPROVEMENT_SUGGESTIONS),
            risks=risks,
        )

    def assess(
        self,
        sections: Sequence[ScriptSection],
        target_duration: float,
        compliance: float,
        audience: ScriptAudience,
    ) -> QualityMetrics:
        metrics = QualityMetrics(
            coherence=self.coherence(sections),
            engagement=self.engagement(sections),
            accuracy=BASE_ACCURACY,
            duration_compliance=compliance,
            audience_alignment=self.audience_alignment(sections, audience),
            details=self.details(sections, target_duration),
        )
        logger.info("[quality] overall=%.2f", metrics.overall)
        return metrics

    def suggestions(
        self,
        quality: QualityMetrics,
        sections: Sequence[ScriptSection],
        target_duration: float,
        template_type: TemplateType,
        audience: ScriptAudience,
    ) -> list[ScriptSuggestion]:
        suggestions: list[ScriptSuggestion] = []

        if quality.duration_compliance < 0.8:
            total = sum(section.duration_seconds for section in sections)
            suggestions.append(
                ScriptSuggestion(
                    type="duration_adjustment",
                    description="Consider adjusting target duration for better content fit",
                    changes={"target_duration_seconds": suggest_duration(total, target_duration)},
                    expected_improvement="Better pacing and content completeness",
                )
            )

        if quality.audience_alignment < 0.7:
            better = suggest_better_template(audience)
            if better is not template_type:
                suggestions.append(
                    ScriptSuggestion(
                        type="template_change",
                        description=f"{better.value} template may be better suited for this audience",
                        changes={"template_type": better.value},
                        expected_improvement="Improved audience alignment and engagement",
                    )
                )

        if quality.engagement < 0.6:
            suggestions.append(
                ScriptSuggestion(
                    type="style_modification",
                    description="Consider more dynamic pacing and storytelling approach",
                    changes={
                        "style": {
                            "pacing": NarrativePacing.DYNAMIC.value,
                            "approach": StorytellingApproach.JOURNEY.value,
                        }
                    },
                    expected_improvement="Higher audience engagement",
                )
            )

        return suggestions


quality_assessor = QualityAssessor()
