from .audience import (
    AudienceType,
    CommunicationStyle,
    NarrativePacing,
    NarrativeStyle,
    NarrativeTone,
    ScriptAudience,
    StyleOverrides,
    TechnicalLevel,
)
from .config import ConfigValidation, ScriptGenerationConfig
from .content import BASE_DURATIONS, TIER_ORDER, ContentItem, ContentType, PriorityTier
from .duration import (
    ContentCut,
    DurationConstraints,
    DurationOptimizationResult,
    DurationValidationResult,
    OptimizedSection,
    SectionBounds,
)
from .github import PRAggregate
from .script import (
    QualityMetrics,
    ScriptGenerationResult,
    ScriptSection,
    ScriptSuggestion,
    VideoScript,
    VisualCue,
)
from .section import SECTION_TITLES, SectionType
from .strategy import (
    DEFAULT_SELECTION_STRATEGY,
    DurationAdaptation,
    DurationStrategy,
    FilteringRule,
    PrioritizationRule,
    ScoringStrategy,
    SelectionStrategy,
)
from .template import Template, TemplateType
from .video import KeyMetrics, SceneType, VideoMetadata, VideoScene, VideoType

__all__ = [
    "AudienceType",
    "BASE_DURATIONS",
    "CommunicationStyle",
    "ConfigValidation",
    "ContentCut",
    "ContentItem",
    "ContentType",
    "DEFAULT_SELECTION_STRATEGY",
    "DurationAdaptation",
    "DurationConstraints",
    "DurationOptimizationResult",
    "DurationStrategy",
    "DurationValidationResult",
    "FilteringRule",
    "KeyMetrics",
    "NarrativePacing",
    "NarrativeStyle",
    "NarrativeTone",
    "OptimizedSection",
    "PRAggregate",
    "PrioritizationRule",
    "PriorityTier",
    "QualityMetrics",
    "SECTION_TITLES",
    "SceneType",
    "ScoringStrategy",
    "ScriptAudience",
    "ScriptGenerationConfig",
    "ScriptGenerationResult",
    "ScriptSection",
    "ScriptSuggestion",
    "SectionBounds",
    "SectionType",
    "SelectionStrategy",
    "StyleOverrides",
    "TechnicalLevel",
    "Template",
    "TemplateType",
    "TIER_ORDER",
    "VideoMetadata",
    "VideoScene",
    "VideoScript",
    "VideoType",
    "VisualCue",
]
