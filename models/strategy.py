from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .content import ContentType, PriorityTier
from .section import SectionType


class ConditionType(str, Enum):
    DATA_AVAILABILITY = "data_availability"
    CONTENT_VOLUME = "content_volume"
    AUDIENCE_TYPE = "audience_type"
    DURATION_CONSTRAINT = "duration_constraint"
    PRIORITY_THRESHOLD = "priority_threshold"


class ConditionOperator(str, Enum):
    EQUALS = "equals"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    CONTAINS = "contains"
    EXISTS = "exists"


class FilterAction(str, Enum):
    INCLUDE = "include"
    EXCLUDE = "exclude"
    BOOST = "boost"
    DEMOTE = "demote"


class AdaptationActionType(str, Enum):
    SIMPLIFY_LANGUAGE = "simplify_language"
    ADD_EXPLANATION = "add_explanation"
    REDUCE_DETAIL = "reduce_detail"
    EXPAND_DETAIL = "expand_detail"


class ScoringStrategy(str, Enum):
    """Named scoring functions a PrioritizationRule can reference."""

    FIELD_VALUE = "field_value"      # numeric payload field, or parameters["default"]
    ITEM_COUNT = "item_count"        # len(list) / parameters["scale"], capped at 1
    CONSTANT = "constant"            # parameters["value"]


class RelevanceFactor(str, Enum):
    CHANGE_MAGNITUDE = "change_magnitude"
    FILE_IMPORTANCE = "file_importance"
    REVIEW_FEEDBACK = "review_feedback"
    PARTICIPANT_INVOLVEMENT = "participant_involvement"
    DISCUSSION_ACTIVITY = "discussion_activity"
    TIMELINE_SIGNIFICANCE = "timeline_significance"


class ScoringAlgorithm(str, Enum):
    WEIGHTED_SUM = "weighted_sum"
    NEURAL_RANKING = "neural_ranking"
    COMPOSITE_SCORE = "composite_score"


class NormalizationMethod(str, Enum):
    MIN_MAX = "min_max"
    Z_SCORE = "z_score"
    PERCENTILE_RANK = "percentile_rank"


class InclusionCondition(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: ConditionType
    parameters: dict[str, Any] = Field(default_factory=dict)
    operator: ConditionOperator = ConditionOperator.GREATER_THAN


class RelevanceScoring(BaseModel):
    model_config = ConfigDict(frozen=True)

    factors: tuple[RelevanceFactor, ...] = ()
    algorithm: ScoringAlgorithm = ScoringAlgorithm.WEIGHTED_SUM
    normalization: NormalizationMethod = NormalizationMethod.MIN_MAX


class SelectionCriteria(BaseModel):
    """
    Descriptive selection settings that travel with a strategy.

    No pipeline component reads these values. ``importance_threshold``, the
    relevance scoring settings and both weights are carried so that template and
    override documents round-trip. Selection cuts on the duration budget, not on
    a relevance floor.
    """

    model_config = ConfigDict(frozen=True)

    importance_threshold: float = 0.3
    relevance_scoring: RelevanceScoring = Field(default_factory=RelevanceScoring)
    freshness_weight: float = 0.2
    audience_alignment_weight: float = 0.4


class PrioritizationRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    content_types: tuple[ContentType, ...]
    scoring: ScoringStrategy
    parameters: dict[str, Any] = Field(default_factory=dict)
    weight: float


class FilterCriteria(BaseModel):
    model_config = ConfigDict(frozen=True)

    field: str = Field(description="Dot path into the item, then its payload")
    operator: ConditionOperator
    value: Any = None


class FilteringRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    criteria: FilterCriteria
    action: FilterAction
    amount: float = Field(default=0.1, description="priority_score delta for boost/demote")


class AdaptationAction(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: AdaptationActionType
    parameters: dict[str, Any] = Field(default_factory=dict)


class ContentAdaptationRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    triggers: tuple[InclusionCondition, ...] = ()
    actions: tuple[AdaptationAction, ...] = ()


class SelectionStrategy(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = "default"
    criteria: SelectionCriteria = Field(default_factory=SelectionCriteria)
    prioritization: tuple[PrioritizationRule, ...] = ()
    filtering: tuple[FilteringRule, ...] = ()
    adaptation: tuple[ContentAdaptationRule, ...] = ()


DEFAULT_SELECTION_STRATEGY = SelectionStrategy(
    name="default",
    criteria=SelectionCriteria(
        importance_threshold=0.3,
        relevance_scoring=RelevanceScoring(
            factors=(
                RelevanceFactor.CHANGE_MAGNITUDE,
                RelevanceFactor.PARTICIPANT_INVOLVEMENT,
                RelevanceFactor.REVIEW_FEEDBACK,
            ),
        ),
        freshness_weight=0.2,
        audience_alignment_weight=0.4,
    ),
)


class SelectionStrategyOverrides(BaseModel):
    """Caller overrides; any field left as None keeps the base strategy's value."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    criteria: SelectionCriteria | None = None
    prioritization: tuple[PrioritizationRule, ...] | None = None
    filtering: tuple[FilteringRule, ...] | None = None
    adaptation: tuple[ContentAdaptationRule, ...] | None = None

    def merge_into(self, base: SelectionStrategy) -> SelectionStrategy:
        update = {
            name: getattr(self, name)
            for name in type(self).model_fields
            if getattr(self, name) is not None
        }
        return base.model_copy(update=update)


class DurationStrategy(BaseModel):
    """Per-tier and per-section multipliers applied by the duration optimizer."""

    model_config = ConfigDict(frozen=True)

    name: str
    priority_adjustments: dict[PriorityTier, float] = Field(default_factory=dict)
    duration_adjustments: dict[SectionType, float] = Field(default_factory=dict)

    def priority_multiplier(self, tier: PriorityTier) -> float:
        return self.priority_adjustments.get(tier, 1.0)

    def duration_multiplier(self, section_type: SectionType) -> float:
        return self.duration_adjustments.get(section_type, 1.0)


class DurationAdaptation(BaseModel):
    """Caller-supplied strategies replacing the built-in compression/balanced/expansion set."""

    model_config = ConfigDict(frozen=True)

    short_form: DurationStrategy
    medium_form: DurationStrategy
    long_form: DurationStrategy
