from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from .audience import NarrativeStyle, ScriptAudience
from .content import PriorityTier
from .section import SectionType
from .template import TemplateType, TransitionStyle
from .video import KeyMetrics

SCRIPT_VERSION = "1.0.0"


@dataclass(frozen=True)
class VisualCue:
    timestamp: float                       # seconds from section start
    type: str                              # code_highlight | chart | avatar | metric | animation | transition
    description: str
    duration: float
    properties: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class TimingWindow:
    start: float
    end: float


@dataclass(frozen=True)
class SectionTransition:
    style: TransitionStyle
    duration: float
    to_section: SectionType


@dataclass(frozen=True)
class ScriptSection:
    id: str
    type: SectionType
    title: str
    content: str
    voiceover: str
    visual_cues: list[VisualCue]
    duration_seconds: float
    timing_window: TimingWindow
    priority: PriorityTier
    source_items: list[str]                # content types that fed this section
    transition: SectionTransition | None = None


@dataclass(frozen=True)
class QualityDetails:
    strengths: list[str] = field(default_factory=list)
    weaknesses: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    risks: list[str] = field(default_factory=list)


def _clamp_unit(value: float) -> float:
    return max(0.0, min(float(value), 1.0))


@dataclass(frozen=True)
class QualityMetrics:
    """Five 0–1 scores; `overall` is derived on construction and cannot drift."""

    coherence: float
    engagement: float
    accuracy: float
    duration_compliance: float
    audience_alignment: float
    details: QualityDetails = field(default_factory=QualityDetails)
    overall: float = field(init=False)

    def __post_init__(self) -> None:
        for name in ("coherence", "engagement", "accuracy", "duration_compliance", "audience_alignment"):
            object.__setattr__(self, name, _clamp_unit(getattr(self, name)))
        dimensions = (
            self.coherence,
            self.engagement,
            self.accuracy,
            self.duration_compliance,
            self.audience_alignment,
        )
        object.__setattr__(self, "overall", sum(dimensions) / len(dimensions))

    @classmethod
    def zero(cls) -> "QualityMetrics":
        return cls(0.0, 0.0, 0.0, 0.0, 0.0)


@dataclass(frozen=True)
class ScriptMetadata:
    template_type: TemplateType
    strategy: str                          # duration strategy name
    quality: QualityMetrics
    selection_strategy: str = "default"
    key_metrics: KeyMetrics | None = None
    generated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: str = SCRIPT_VERSION


@dataclass(frozen=True)
class VideoScript:
    id: str
    title: str
    description: str
    target_duration_seconds: float
    sections: list[ScriptSection]
    audience: ScriptAudience
    style: NarrativeStyle
    metadata: ScriptMetadata

    @property
    def total_duration(self) -> float:
        return sum(section.duration_seconds for section in self.sections)


@dataclass
class GenerationPerformance:
    generation_time: float = 0.0           # ms, whole call
    processing_time: float = 0.0           # ms, duration optimization
    template_time: float = 0.0
    adaptation_time: float = 0.0
    quality_time: float = 0.0


@dataclass
class ScriptSuggestion:
    type: str                              # template_change | duration_adjustment | audience_refinement | style_modification
    description: str
    changes: dict[str, Any]
    expected_improvement: str


@dataclass
class ScriptGenerationResult:
    script: VideoScript
    success: bool
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    performance: GenerationPerformance = field(default_factory=GenerationPerformance)
    alternatives: list[ScriptSuggestion] = field(default_factory=list)
