from pydantic import BaseModel, ConfigDict, Field

from .audience import ScriptAudience, StyleOverrides
from .strategy import DurationAdaptation, SelectionStrategyOverrides
from .template import TemplateType


class ScriptGenerationConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    template_type: TemplateType
    target_duration_seconds: float = Field(gt=0)
    audience: ScriptAudience
    style: StyleOverrides | None = None
    content_selection_overrides: SelectionStrategyOverrides | None = None
    adaptation_overrides: DurationAdaptation | None = None


class ConfigValidation(BaseModel):
    is_valid: bool
    errors: list[str] = Field(default_factory=list)
