from enum import Enum

from pydantic import BaseModel, ConfigDict


class AudienceType(str, Enum):
    ENGINEERING = "engineering"
    PRODUCT = "product"
    EXECUTIVE = "executive"
    QA = "qa"
    DESIGN = "design"
    MARKETING = "marketing"
    GENERAL = "general"
    EXTERNAL = "external"


class TechnicalLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


class ProjectFamiliarity(str, Enum):
    UNFAMILIAR = "unfamiliar"
    BASIC = "basic"
    FAMILIAR = "familiar"
    EXPERT = "expert"


class CommunicationStyle(str, Enum):
    FORMAL = "formal"
    CASUAL = "casual"
    TECHNICAL = "technical"
    CONVERSATIONAL = "conversational"
    PRESENTATION = "presentation"


class NarrativeTone(str, Enum):
    PROFESSIONAL = "professional"
    ENTHUSIASTIC = "enthusiastic"
    EDUCATIONAL = "educational"
    COLLABORATIVE = "collaborative"
    CELEBRATORY = "celebratory"


class NarrativePacing(str, Enum):
    SLOW = "slow"
    MODERATE = "moderate"
    FAST = "fast"
    DYNAMIC = "dynamic"


class StorytellingApproach(str, Enum):
    CHRONOLOGICAL = "chronological"
    PROBLEM_SOLUTION = "problem_solution"
    JOURNEY = "journey"
    ANALYTICAL = "analytical"
    SHOWCASE = "showcase"


class LanguageComplexity(str, Enum):
    SIMPLE = "simple"
    MODERATE = "moderate"
    COMPLEX = "complex"
    TECHNICAL = "technical"


class EmphasisStyle(str, Enum):
    METRICS_FOCUSED = "metrics_focused"
    STORY_FOCUSED = "story_focused"
    IMPACT_FOCUSED = "impact_focused"
    PROCESS_FOCUSED = "process_focused"


class ScriptAudience(BaseModel):
    """Who the video is for. `primary` is optional so config validation can report it."""

    model_config = ConfigDict(frozen=True)

    primary: AudienceType | None = None
    secondary: tuple[AudienceType, ...] = ()
    technical_level: TechnicalLevel = TechnicalLevel.INTERMEDIATE
    project_familiarity: ProjectFamiliarity = ProjectFamiliarity.BASIC
    communication_style: CommunicationStyle = CommunicationStyle.CONVERSATIONAL


class NarrativeStyle(BaseModel):
    model_config = ConfigDict(frozen=True)

    tone: NarrativeTone = NarrativeTone.PROFESSIONAL
    pacing: NarrativePacing = NarrativePacing.MODERATE
    approach: StorytellingApproach = StorytellingApproach.ANALYTICAL
    complexity: LanguageComplexity = LanguageComplexity.MODERATE
    emphasis: EmphasisStyle = EmphasisStyle.PROCESS_FOCUSED


class StyleOverrides(BaseModel):
    """Partial NarrativeStyle supplied by a caller; unset fields fall back to the template."""

    model_config = ConfigDict(frozen=True)

    tone: NarrativeTone | None = None
    pacing: NarrativePacing | None = None
    approach: StorytellingApproach | None = None
    complexity: LanguageComplexity | None = None
    emphasis: EmphasisStyle | None = None

    def apply_to(self, base: NarrativeStyle) -> NarrativeStyle:
        return base.model_copy(update=self.model_dump(exclude_none=True))
