from dataclasses import dataclass, field

from .content import ContentItem, PriorityTier
from .section import SectionType


@dataclass
class ContentCut:
    type: str                              # detail_reduction | example_removal
    description: str
    time_saved: float
    quality_impact: float                  # 0.0–1.0


@dataclass
class PriorityAdjustment:
    from_tier: PriorityTier
    to_tier: PriorityTier
    reason: str


@dataclass
class OptimizedSection:
    section_type: SectionType
    priority: PriorityTier                 # highest tier among its items
    items: list[ContentItem]
    original_duration: float               # sum of item durations
    optimized_duration: float = 0.0
    adjustment_rationale: str = ""
    content_cuts: list[ContentCut] = field(default_factory=list)
    priority_adjustments: list[PriorityAdjustment] = field(default_factory=list)

    @property
    def cut_impact(self) -> float:
        return sum(cut.quality_impact for cut in self.content_cuts)


@dataclass
class DurationOptimizationMetadata:
    strategy: str
    target_duration: float
    compression_ratio: float               # optimized total / natural total
    quality_preservation: float
    unoptimized_sections: list[SectionType] = field(default_factory=list)


@dataclass
class DurationOptimizationResult:
    sections: list[OptimizedSection]
    total_duration: float
    compliance: float
    metadata: DurationOptimizationMetadata
    warnings: list[str] = field(default_factory=list)


@dataclass
class SectionBounds:
    min: float
    max: float


@dataclass
class DurationConstraints:
    min_duration: float
    max_duration: float
    section_constraints: dict[SectionType, SectionBounds] = field(default_factory=dict)


@dataclass
class DurationViolation:
    type: str                              # total_too_short | total_too_long | section_too_short | section_too_long
    section: str | None
    expected: float
    actual: float
    severity: str                          # error | warning


@dataclass
class DurationValidationResult:
    is_valid: bool
    violations: list[DurationViolation] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
