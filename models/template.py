from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .audience import AudienceType, NarrativeStyle, ScriptAudience
from .content import ContentType, PriorityTier
from .section import SectionType
from .strategy import InclusionCondition, SelectionStrategy


class TemplateType(str, Enum):
    SUMMARY = "summary"
    DETAILED = "detailed"
    TECHNICAL = "technical"
    EXECUTIVE = "executive"
    CUSTOM = "custom"


class TransitionStyle(str, Enum):
    SMOOTH = "smooth"
    CUT = "cut"
    FADE = "fade"
    ZOOM = "zoom"
    SLIDE = "slide"


class DynamicDurationRule(BaseModel):
    """Duration that scales with how many items of `count_type` were selected."""

    model_config = ConfigDict(frozen=True)

    base: float
    per_item: float
    max_scale: float
    count_type: ContentType


class DurationAllocation(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: float
    max: float
    preferred: float
    percentage: float | None = None
    dynamic: DynamicDurationRule | None = None

    @model_validator(mode="after")
    def _check_bounds(self) -> "DurationAllocation":
        if self.min > self.max:
            raise ValueError(f"allocation min {self.min} exceeds max {self.max}")
        return self


class ContentRequirement(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: ContentType
    required: bool = False
    minimum: int | None = None
    maximum: int | None = None


class VisualRequirement(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str
    required: bool = False
    properties: dict[str, Any] = Field(default_factory=dict)


class SectionDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: SectionType
    name: str
    duration: DurationAllocation
    content_requirements: tuple[ContentRequirement, ...] = ()
    visual_requirements: tuple[VisualRequirement, ...] = ()
    priority: PriorityTier = PriorityTier.MEDIUM
    conditions: tuple[InclusionCondition, ...] = ()

    def accepts(self, content_type: ContentType) -> bool:
        return any(req.type is content_type for req in self.content_requirements)


class SectionOrderingRule(BaseModel):
    """Directed precedence edge: `before` should play ahead of `after`."""

    model_config = ConfigDict(frozen=True)

    before: SectionType
    after: SectionType
    priority: int
    conditions: tuple[InclusionCondition, ...] = ()


class TransitionRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    from_section: SectionType
    to_section: SectionType
    style: TransitionStyle
    duration: float


class DurationRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: float
    max: float
    default: float


class TemplateDefaults(BaseModel):
    model_config = ConfigDict(frozen=True)

    audience: ScriptAudience = Field(default_factory=ScriptAudience)
    style: NarrativeStyle = Field(default_factory=NarrativeStyle)
    content_selection: SelectionStrategy = Field(default_factory=SelectionStrategy)


class AudienceSuitability(BaseModel):
    model_config = ConfigDict(frozen=True)

    primary: tuple[AudienceType, ...] = ()
    secondary: tuple[AudienceType, ...] = ()
    unsuitable: tuple[AudienceType, ...] = ()
    threshold: float = 0.6


class Template(BaseModel):
    """Declarative video structure. Loaded from JSON, never mutated afterwards."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    type: TemplateType
    duration_range: DurationRange
    required_sections: tuple[SectionDefinition, ...]
    optional_sections: tuple[SectionDefinition, ...] = ()
    ordering_rules: tuple[SectionOrderingRule, ...] = ()
    transition_rules: tuple[TransitionRule, ...] = ()
    defaults: TemplateDefaults = Field(default_factory=TemplateDefaults)
    suitability: AudienceSuitability = Field(default_factory=AudienceSuitability)

    @property
    def sections(self) -> tuple[SectionDefinition, ...]:
        """Required then optional, in declared order."""
        return self.required_sections + self.optional_sections

    def find_section(self, section_type: SectionType) -> SectionDefinition | None:
        for definition in self.sections:
            if definition.type is section_type:
                return definition
        return None

    def declared_order(self) -> list[SectionType]:
        seen: list[SectionType] = []
        for definition in self.sections:
            if definition.type not in seen:
                seen.append(definition.type)
        return seen
