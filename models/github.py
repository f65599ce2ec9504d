"""Pull request aggregate as delivered by the data-acquisition layer.

Every field is taken as already validated; the engine never re-fetches.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class ReviewState(str, Enum):
    PENDING = "PENDING"
    COMMENTED = "COMMENTED"
    APPROVED = "APPROVED"
    CHANGES_REQUESTED = "CHANGES_REQUESTED"
    DISMISSED = "DISMISSED"


class GitHubUser(BaseModel):
    id: int
    login: str
    avatar_url: str = ""
    html_url: str = ""
    type: str = "User"
    name: str | None = None


class Repository(BaseModel):
    id: int = 0
    name: str
    full_name: str
    html_url: str = ""
    description: str | None = None
    language: str | None = None
    default_branch: str = "main"


class Label(BaseModel):
    name: str
    color: str = ""


class PullRequest(BaseModel):
    id: int = 0
    number: int
    title: str
    body: str | None = None
    state: str = "open"                    # open | closed
    merged: bool = False
    draft: bool = False
    user: GitHubUser
    labels: list[Label] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime | None = None
    closed_at: datetime | None = None
    merged_at: datetime | None = None


class Commit(BaseModel):
    sha: str
    message: str
    author: GitHubUser | None = None       # None when the email has no GitHub account
    author_name: str = ""
    author_email: str = ""
    date: datetime
    additions: int = 0
    deletions: int = 0
    files_changed: int = 0


class FileChange(BaseModel):
    filename: str
    status: str = "modified"
    additions: int = 0
    deletions: int = 0
    changes: int = 0
    patch: str | None = None


class Review(BaseModel):
    id: int
    user: GitHubUser
    body: str | None = None
    state: ReviewState
    submitted_at: datetime | None = None


class ReviewComment(BaseModel):
    id: int
    pull_request_review_id: int | None = None
    user: GitHubUser
    body: str = ""
    path: str = ""
    created_at: datetime


class IssueComment(BaseModel):
    id: int
    user: GitHubUser
    body: str = ""
    created_at: datetime


class TimelineEvent(BaseModel):
    event: str
    created_at: datetime
    actor: GitHubUser | None = None


class CodeStats(BaseModel):
    total_additions: int = 0
    total_deletions: int = 0
    total_files: int = 0
    language_breakdown: dict[str, int] = Field(default_factory=dict)   # language -> changed lines
    file_types: dict[str, int] = Field(default_factory=dict)


class ReviewStats(BaseModel):
    approvals: int = 0
    changes_requested: int = 0
    comments: int = 0
    average_review_time: float = 0.0      # hours


class TimelineStats(BaseModel):
    created_at: datetime
    first_review_at: datetime | None = None
    last_update_at: datetime | None = None
    merged_at: datetime | None = None
    closed_at: datetime | None = None
    total_duration: float = 0.0           # hours
    review_duration: float | None = None


class PRAggregate(BaseModel):
    pull_request: PullRequest
    repository: Repository
    commits: list[Commit] = Field(default_factory=list)
    files: list[FileChange] = Field(default_factory=list)
    reviews: list[Review] = Field(default_factory=list)
    review_comments: list[ReviewComment] = Field(default_factory=list)
    issue_comments: list[IssueComment] = Field(default_factory=list)
    timeline: list[TimelineEvent] = Field(default_factory=list)
    participants: list[GitHubUser] = Field(default_factory=list)
    code_stats: CodeStats = Field(default_factory=CodeStats)
    review_stats: ReviewStats = Field(default_factory=ReviewStats)
    timeline_stats: TimelineStats
