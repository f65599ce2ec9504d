"""Ready-made generation configs, config validation and a rough runtime estimate."""

from __future__ import annotations

import math

from models.audience import (
    AudienceType,
    CommunicationStyle,
    EmphasisStyle,
    LanguageComplexity,
    NarrativePacing,
    NarrativeTone,
    ProjectFamiliarity,
    ScriptAudience,
    StorytellingApproach,
    StyleOverrides,
    TechnicalLevel,
)
from models.config import ConfigValidation, ScriptGenerationConfig
from models.template import TemplateType

MIN_TARGET_SECONDS = 60
MAX_TARGET_SECONDS = 1200

BASE_GENERATION_MS = 1000
TEMPLATE_FACTORS = {
    TemplateType.SUMMARY: 1.0,
    TemplateType.DETAILED: 1.5,
    TemplateType.TECHNICAL: 2.0,
    TemplateType.EXECUTIVE: 0.8,
    TemplateType.CUSTOM: 1.2,
}
AUDIENCE_FACTORS = {
    AudienceType.GENERAL: 1.0,
    AudienceType.ENGINEERING: 1.3,
    AudienceType.PRODUCT: 1.1,
    AudienceType.EXECUTIVE: 0.9,
    AudienceType.QA: 1.2,
    AudienceType.DESIGN: 1.0,
    AudienceType.MARKETING: 0.9,
    AudienceType.EXTERNAL: 1.1,
}


def validate_config(config: ScriptGenerationConfig) -> ConfigValidation:
    errors: list[str] = []
    if config.target_duration_seconds < MIN_TARGET_SECONDS:
        errors.append("Target duration must be at least 60 seconds")
    if config.target_duration_seconds > MAX_TARGET_SECONDS:
        errors.append("Target duration should not exceed 20 minutes")
    if config.audience.primary is None:
        errors.append("Primary audience must be specified")
    if (
        config.template_type is TemplateType.TECHNICAL
        and config.audience.technical_level is TechnicalLevel.BEGINNER
    ):
        errors.append("Technical template is not suitable for beginner technical level")
    return ConfigValidation(is_valid=not errors, errors=errors)


def create_basic_config(
    template_type: TemplateType | str = TemplateType.SUMMARY,
    target_duration: float = 180,
    audience: AudienceType | str = AudienceType.GENERAL,
) -> ScriptGenerationConfig:
    return ScriptGenerationConfig(
        template_type=TemplateType(template_type),
        target_duration_seconds=target_duration,
        audience=ScriptAudience(
            primary=AudienceType(audience),
            technical_level=TechnicalLevel.INTERMEDIATE,
            project_familiarity=ProjectFamiliarity.BASIC,
            communication_style=CommunicationStyle.CONVERSATIONAL,
        ),
        style=StyleOverrides(
            tone=NarrativeTone.PROFESSIONAL,
            pacing=NarrativePacing.MODERATE,
            approach=StorytellingApproach.PROBLEM_SOLUTION,
            complexity=LanguageComplexity.MODERATE,
            emphasis=EmphasisStyle.IMPACT_FOCUSED,
        ),
    )


def create_engineering_config(
    target_duration: float = 600,
    technical_level: TechnicalLevel | str = TechnicalLevel.ADVANCED,
) -> ScriptGenerationConfig:
    level = TechnicalLevel(technical_level)
    return ScriptGenerationConfig(
        template_type=TemplateType.TECHNICAL if level is TechnicalLevel.EXPERT else TemplateType.DETAILED,
        target_duration_seconds=target_duration,
        audience=ScriptAudience(
            primary=AudienceType.ENGINEERING,
            technical_level=level,
            project_familiarity=ProjectFamiliarity.FAMILIAR,
            communication_style=CommunicationStyle.TECHNICAL,
        ),
        style=StyleOverrides(
            tone=NarrativeTone.EDUCATIONAL,
            pacing=NarrativePacing.MODERATE,
            approach=StorytellingApproach.ANALYTICAL,
            complexity=LanguageComplexity.TECHNICAL,
            emphasis=EmphasisStyle.METRICS_FOCUSED,
        ),
    )


def create_executive_config(target_duration: float = 120) -> ScriptGenerationConfig:
    return ScriptGenerationConfig(
        template_type=TemplateType.SUMMARY,
        target_duration_seconds=target_duration,
        audience=ScriptAudience(
            primary=AudienceType.EXECUTIVE,
            technical_level=TechnicalLevel.BEGINNER,
            project_familiarity=ProjectFamiliarity.BASIC,
            communication_style=CommunicationStyle.FORMAL,
        ),
        style=StyleOverrides(
            tone=NarrativeTone.PROFESSIONAL,
            pacing=NarrativePacing.FAST,
            approach=StorytellingApproach.PROBLEM_SOLUTION,
            complexity=LanguageComplexity.SIMPLE,
            emphasis=EmphasisStyle.IMPACT_FOCUSED,
        ),
    )


def estimate_generation_time(config: ScriptGenerationConfig) -> int:
    """Milliseconds; scales with template complexity, sqrt of target length, and audience."""
    estimate = BASE_GENERATION_MS
    estimate *= TEMPLATE_FACTORS.get(config.template_type, 1.0)
    estimate *= math.sqrt(config.target_duration_seconds / 180)
    estimate *= AUDIENCE_FACTORS.get(config.audience.primary, 1.0)
    return round(estimate)
