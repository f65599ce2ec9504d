from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ContentType(str, Enum):
    PR_OVERVIEW = "pr_overview"
    COMMIT_DATA = "commit_data"
    FILE_CHANGES = "file_changes"
    REVIEW_DATA = "review_data"
    PARTICIPANT_DATA = "participant_data"
    METRICS = "metrics"
    TIMELINE_EVENTS = "timeline_events"
    DISCUSSION_THREADS = "discussion_threads"
    CODE_SAMPLES = "code_samples"
    IMPACT_ANALYSIS = "impact_analysis"


class PriorityTier(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    OPTIONAL = "optional"

    @property
    def rank(self) -> int:
        """0 for critical up to 4 for optional; lower sorts first."""
        return TIER_ORDER.index(self)

    def shifted(self, steps: int) -> "PriorityTier":
        """Move toward critical (negative steps) or optional (positive steps)."""
        index = max(0, min(self.rank + steps, len(TIER_ORDER) - 1))
        return TIER_ORDER[index]


TIER_ORDER = [
    PriorityTier.CRITICAL,
    PriorityTier.HIGH,
    PriorityTier.MEDIUM,
    PriorityTier.LOW,
    PriorityTier.OPTIONAL,
]

# Lower bound of priority_score for each tier, checked top-down.
TIER_THRESHOLDS = [
    (0.8, PriorityTier.CRITICAL),
    (0.6, PriorityTier.HIGH),
    (0.4, PriorityTier.MEDIUM),
    (0.2, PriorityTier.LOW),
]

# Narration seconds per content item, before any section-level adjustment.
BASE_DURATIONS: dict[ContentType, float] = {
    ContentType.PR_OVERVIEW: 10,
    ContentType.COMMIT_DATA: 15,
    ContentType.FILE_CHANGES: 12,
    ContentType.REVIEW_DATA: 18,
    ContentType.PARTICIPANT_DATA: 8,
    ContentType.METRICS: 6,
    ContentType.TIMELINE_EVENTS: 10,
    ContentType.DISCUSSION_THREADS: 12,
    ContentType.CODE_SAMPLES: 20,
    ContentType.IMPACT_ANALYSIS: 8,
}
DEFAULT_BASE_DURATION = 10.0


@dataclass
class ContentItem:
    type: ContentType
    payload: Any                           # scene data (dict) or participant list
    relevance_score: float = 0.0           # 0.0–1.0
    priority_score: float = 0.0            # relevance + rule boosts, unbounded
    priority: PriorityTier = PriorityTier.OPTIONAL
    duration_impact_seconds: float = 0.0
    adaptations: list[str] = field(default_factory=list)
    rationale: str = ""
