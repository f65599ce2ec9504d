from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class SceneType(str, Enum):
    INTRO = "intro"
    OVERVIEW = "overview"
    COMMITS = "commits"
    FILES = "files"
    REVIEWS = "reviews"
    TIMELINE = "timeline"
    SUMMARY = "summary"
    OUTRO = "outro"


class VideoType(str, Enum):
    SUMMARY = "summary"
    DETAILED = "detailed"
    TECHNICAL = "technical"


@dataclass
class VideoScene:
    type: SceneType
    title: str
    duration: float                        # seconds
    data: dict[str, Any]                   # JSON-friendly scene payload
    priority: str = "medium"               # high | medium | low


@dataclass
class ParticipantSummary:
    login: str
    user_id: int
    role: str                              # author | reviewer | committer | commenter
    commits: int = 0
    reviews: int = 0
    comments: int = 0
    lines_added: int = 0
    lines_deleted: int = 0

    @property
    def total_contributions(self) -> int:
        return self.commits + self.reviews + self.comments


@dataclass
class KeyMetrics:
    total_commits: int
    total_files: int
    total_additions: int
    total_deletions: int
    total_reviews: int
    total_comments: int
    time_to_first_review_hours: float | None
    time_to_merge_hours: float | None
    participant_count: int
    primary_language: str


@dataclass
class VideoTheme:
    primary_color: str
    secondary_color: str
    background_color: str
    text_color: str
    style: str                             # modern | classic | minimal | corporate


@dataclass
class VideoMetadata:
    title: str
    subtitle: str
    description: str
    duration: float
    key_metrics: KeyMetrics
    theme: VideoTheme
    scenes: list[VideoScene] = field(default_factory=list)
    participants: list[ParticipantSummary] = field(default_factory=list)
