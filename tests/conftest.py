from datetime import timedelta

import pytest

from models.github import PRAggregate, TimelineEvent
from services.templates import TemplateRegistry, default_registry
from tests.factories import (
    AUTHOR,
    CREATED_AT,
    REVIEWERS,
    make_aggregate,
    make_commits,
    make_files,
    make_reviews,
)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def minimal_aggregate() -> PRAggregate:
    """Open PR with no commits, files or reviews."""
    return make_aggregate()


@pytest.fixture
def busy_aggregate() -> PRAggregate:
    """Merged PR: 12 large commits, 25 heavily changed files, 3 approvals."""
    return make_aggregate(
        commits=make_commits(12),
        files=make_files(25),
        reviews=make_reviews(),
        timeline=[
            TimelineEvent(event="review_requested", created_at=CREATED_AT + timedelta(hours=1)),
            TimelineEvent(event="approved", created_at=CREATED_AT + timedelta(hours=3)),
            TimelineEvent(event="merged", created_at=CREATED_AT + timedelta(hours=30)),
        ],
        participants=[AUTHOR, *REVIEWERS],
        merged=True,
    )


@pytest.fixture
def registry() -> TemplateRegistry:
    return default_registry()
