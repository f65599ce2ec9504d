"""Turn a raw PR aggregate into video scenes, participant summaries and key metrics."""

from __future__ import annotations

from collections import defaultdict
import logging
from typing import Any

from models.github import Commit, FileChange, PRAggregate, ReviewState
from models.video import (
    KeyMetrics,
    ParticipantSummary,
    SceneType,
    VideoMetadata,
    VideoScene,
    VideoTheme,
    VideoType,
)

logger = logging.getLogger(__name__)

LANGUAGE_BY_EXTENSION = {
    "js": "JavaScript",
    "jsx": "JavaScript",
    "ts": "TypeScript",
    "tsx": "TypeScript",
    "py": "Python",
    "java": "Java",
    "cpp": "C++",
    "c": "C",
    "cs": "C#",
    "php": "PHP",
    "rb": "Ruby",
    "go": "Go",
    "rs": "Rust",
    "swift": "Swift",
}

LANGUAGE_COLORS = {
    "JavaScript": "#f1e05a",
    "TypeScript": "#2b7489",
    "Python": "#3572A5",
    "Java": "#b07219",
    "C++": "#f34b7d",
    "C": "#555555",
    "C#": "#239120",
    "PHP": "#4F5D95",
    "Ruby": "#701516",
    "Go": "#00ADD8",
    "Rust": "#dea584",
    "Swift": "#ffac45",
}

THEMES = {
    "modern": VideoTheme("#0066CC", "#33CC33", "#1A1A1A", "#FFFFFF", "modern"),
    "corporate": VideoTheme("#2E86AB", "#A23B72", "#F8F9FA", "#212529", "corporate"),
    "minimal": VideoTheme("#6366F1", "#8B5CF6", "#FFFFFF", "#111827", "minimal"),
}

KEY_TIMELINE_EVENTS = {"closed", "merged", "reopened", "review_requested", "approved"}


def commit_significance(commit: Commit) -> str:
    changes = commit.additions + commit.deletions
    if changes > 500:
        return "major"
    if changes > 100:
        return "minor"
    return "patch"


def file_significance(file: FileChange) -> str:
    if file.changes > 200:
        return "high"
    if file.changes > 50:
        return "medium"
    return "low"


def file_language(filename: str) -> str:
    extension = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
    return LANGUAGE_BY_EXTENSION.get(extension, "Other")


def file_category(filename: str) -> str:
    if "test" in filename or "spec" in filename:
        return "test"
    if "config" in filename or ".json" in filename or ".yml" in filename:
        return "config"
    if "README" in filename or ".md" in filename:
        return "docs"
    if "assets" in filename or "images" in filename or ".png" in filename:
        return "assets"
    if ".js" in filename or ".ts" in filename or ".py" in filename:
        return "source"
    return "other"


def display_filename(filename: str) -> str:
    parts = filename.split("/")
    return f".../{'/'.join(parts[-2:])}" if len(parts) > 3 else filename


class PRVideoTransformer:
    """Build VideoMetadata from a PRAggregate. Stateless; safe to share."""

    def transform(
        self,
        aggregate: PRAggregate,
        video_type: VideoType = VideoType.SUMMARY,
    ) -> VideoMetadata:
        logger.info(
            "[pr_transformer] Transforming PR #%s for %s video",
            aggregate.pull_request.number,
            video_type.value,
        )
        scenes = self._build_scenes(aggregate, video_type)
        key_metrics = self.key_metrics(aggregate)
        return VideoMetadata(
            title=f"PR #{aggregate.pull_request.number}: {aggregate.pull_request.title}",
            subtitle=(
                f"{aggregate.repository.full_name} • {aggregate.code_stats.total_files} files • "
                f"{len(aggregate.participants)} contributors"
            ),
            description=self._description(aggregate),
            duration=sum(scene.duration for scene in scenes),
            key_metrics=key_metrics,
            theme=self._select_theme(key_metrics.primary_language),
            scenes=scenes,
            participants=self.participant_summaries(aggregate),
        )

    def _build_scenes(self, aggregate: PRAggregate, video_type: VideoType) -> list[VideoScene]:
        pr = aggregate.pull_request
        scenes = [
            VideoScene(
                type=SceneType.INTRO,
                title="Pull Request Introduction",
                duration=3,
                data={
                    "pr_number": pr.number,
                    "title": pr.title,
                    "author": pr.user.login,
                    "repository": aggregate.repository.full_name,
                    "created_at": pr.created_at.isoformat(),
                },
                priority="high",
            ),
            VideoScene(
                type=SceneType.OVERVIEW,
                title="PR Overview",
                duration=5,
                data={
                    "description": pr.body or "",
                    "stats": aggregate.code_stats.model_dump(),
                    "participants": len(aggregate.participants),
                    "status": pr.state,
                    "labels": [label.name for label in pr.labels],
                },
                priority="high",
            ),
        ]

        if aggregate.commits:
            count = len(aggregate.commits)
            scenes.append(
                VideoScene(
                    type=SceneType.COMMITS,
                    title="Code Changes",
                    duration=min(count * 2, 15),
                    data=self._commit_scene(aggregate.commits),
                    priority="high" if count > 5 else "medium",
                )
            )

        if aggregate.files:
            count = len(aggregate.files)
            scenes.append(
                VideoScene(
                    type=SceneType.FILES,
                    title="File Changes",
                    duration=min(count * 1.5, 12),
                    data=self._file_scene(aggregate.files),
                    priority="high" if count > 10 else "medium",
                )
            )

        # Summary videos skip the review walkthrough.
        if aggregate.reviews and video_type is not VideoType.SUMMARY:
            count = len(aggregate.reviews)
            scenes.append(
                VideoScene(
                    type=SceneType.REVIEWS,
                    title="Code Review",
                    duration=min(count * 3, 20),
                    data=self._review_scene(aggregate),
                    priority="high" if count > 2 else "medium",
                )
            )

        if video_type in (VideoType.DETAILED, VideoType.TECHNICAL):
            scenes.append(
                VideoScene(
                    type=SceneType.TIMELINE,
                    title="PR Timeline",
                    duration=8,
                    data={
                        "events": [
                            {"event": event.event, "created_at": event.created_at.isoformat()}
                            for event in aggregate.timeline
                        ],
                        "key_events": [
                            event.event
                            for event in aggregate.timeline
                            if event.event in KEY_TIMELINE_EVENTS
                        ],
                        "total_duration_hours": aggregate.timeline_stats.total_duration,
                    },
                )
            )

        scenes.append(
            VideoScene(
                type=SceneType.SUMMARY,
                title="Summary",
                duration=4,
                data={
                    "outcome": "merged" if pr.merged else pr.state,
                    "impact": self._impact(aggregate),
                    "key_achievements": self._key_achievements(aggregate),
                    "next_steps": self._next_steps(aggregate),
                },
                priority="high",
            )
        )
        scenes.append(
            VideoScene(
                type=SceneType.OUTRO,
                title="Thank You",
                duration=2,
                data={
                    "repository": aggregate.repository.full_name,
                    "contributors": [user.login for user in aggregate.participants[:5]],
                },
                priority="low",
            )
        )
        return scenes

    def _commit_scene(self, commits: list[Commit]) -> dict[str, Any]:
        summaries = []
        for commit in commits:
            first_line = commit.message.split("\n", 1)[0]
            summaries.append(
                {
                    "sha": commit.sha,
                    "short_sha": commit.sha[:7],
                    "message": commit.message,
                    "short_message": first_line[:50],
                    "author": commit.author.login if commit.author else commit.author_name,
                    "date": commit.date.isoformat(),
                    "additions": commit.additions,
                    "deletions": commit.deletions,
                    "files": commit.files_changed,
                    "significance": commit_significance(commit),
                }
            )
        return {
            "commits": summaries,
            "total_stats": {
                "additions": sum(c.additions for c in commits),
                "deletions": sum(c.deletions for c in commits),
                "files": sum(c.files_changed for c in commits),
            },
            "timeline": sorted(c.date.isoformat() for c in commits),
        }

    def _file_scene(self, files: list[FileChange]) -> dict[str, Any]:
        changes = [
            {
                "filename": file.filename,
                "display_name": display_filename(file.filename),
                "status": file.status,
                "language": file_language(file.filename),
                "category": file_category(file.filename),
                "changes": file.changes,
                "additions": file.additions,
                "deletions": file.deletions,
                "significance": file_significance(file),
            }
            for file in files
        ]
        return {
            "files": changes,
            "language_breakdown": self._breakdown(changes, "language"),
            "category_breakdown": self._breakdown(changes, "category"),
            "significant_changes": [c for c in changes if c["significance"] == "high"][:10],
        }

    @staticmethod
    def _breakdown(changes: list[dict[str, Any]], key: str) -> list[dict[str, Any]]:
        buckets: dict[str, dict[str, int]] = defaultdict(lambda: {"files": 0, "lines": 0})
        for change in changes:
            bucket = buckets[change[key]]
            bucket["files"] += 1
            bucket["lines"] += change["changes"]
        total = sum(bucket["lines"] for bucket in buckets.values())
        rows = []
        for name, bucket in buckets.items():
            row: dict[str, Any] = {
                key: name,
                "files": bucket["files"],
                "lines": bucket["lines"],
                "percentage": (bucket["lines"] / total * 100) if total else 0.0,
            }
            if key == "language":
                row["color"] = LANGUAGE_COLORS.get(name, "#cccccc")
            rows.append(row)
        return sorted(rows, key=lambda row: row["lines"], reverse=True)

    def _review_scene(self, aggregate: PRAggregate) -> dict[str, Any]:
        reviews = []
        for review in aggregate.reviews:
            reviews.append(
                {
                    "reviewer": review.user.login,
                    "state": review.state.value.lower(),
                    "date": review.submitted_at.isoformat() if review.submitted_at else None,
                    "comment_count": sum(
                        1
                        for comment in aggregate.review_comments
                        if comment.pull_request_review_id == review.id
                    ),
                    "key_points": [review.body[:100]] if review.body else [],
                }
            )
        return {
            "reviews": reviews,
            "consensus": self._review_consensus(aggregate),
        }

    @staticmethod
    def _review_consensus(aggregate: PRAggregate) -> str:
        states = [review.state for review in aggregate.reviews]
        if ReviewState.CHANGES_REQUESTED in states:
            return "blocked"
        if ReviewState.APPROVED in states:
            return "approved"
        if states:
            return "mixed"
        return "pending"

    def participant_summaries(self, aggregate: PRAggregate) -> list[ParticipantSummary]:
        by_id: dict[int, ParticipantSummary] = {
            user.id: ParticipantSummary(login=user.login, user_id=user.id, role="commenter")
            for user in aggregate.participants
        }

        for commit in aggregate.commits:
            participant = by_id.get(commit.author.id) if commit.author else None
            if participant:
                participant.commits += 1
                participant.lines_added += commit.additions
                participant.lines_deleted += commit.deletions
                participant.role = "committer"

        for review in aggregate.reviews:
            participant = by_id.get(review.user.id)
            if participant:
                participant.reviews += 1
                participant.role = "reviewer"

        for comment in [*aggregate.review_comments, *aggregate.issue_comments]:
            participant = by_id.get(comment.user.id)
            if participant:
                participant.comments += 1

        author = by_id.get(aggregate.pull_request.user.id)
        if author:
            author.role = "author"

        return sorted(by_id.values(), key=lambda p: p.total_contributions, reverse=True)

    def key_metrics(self, aggregate: PRAggregate) -> KeyMetrics:
        stats = aggregate.timeline_stats
        time_to_first_review = (
            (stats.first_review_at - stats.created_at).total_seconds() / 3600
            if stats.first_review_at
            else None
        )
        time_to_merge = (
            (stats.merged_at - stats.created_at).total_seconds() / 3600 if stats.merged_at else None
        )
        languages = aggregate.code_stats.language_breakdown
        primary_language = max(languages, key=languages.get) if languages else "Unknown"

        return KeyMetrics(
            total_commits=len(aggregate.commits),
            total_files=len(aggregate.files),
            total_additions=aggregate.code_stats.total_additions,
            total_deletions=aggregate.code_stats.total_deletions,
            total_reviews=len(aggregate.reviews),
            total_comments=len(aggregate.review_comments) + len(aggregate.issue_comments),
            time_to_first_review_hours=time_to_first_review,
            time_to_merge_hours=time_to_merge,
            participant_count=len(aggregate.participants),
            primary_language=primary_language,
        )

    @staticmethod
    def _select_theme(primary_language: str) -> VideoTheme:
        language = primary_language.lower()
        if language in ("javascript", "typescript", "react"):
            return THEMES["modern"]
        if language in ("java", "c#", "enterprise"):
            return THEMES["corporate"]
        return THEMES["minimal"]

    @staticmethod
    def _description(aggregate: PRAggregate) -> str:
        pr = aggregate.pull_request
        stats = aggregate.code_stats
        status = "Merged" if pr.merged else pr.state
        return (
            f"{status} pull request with {stats.total_additions} additions and "
            f"{stats.total_deletions} deletions across {stats.total_files} files."
        )

    @staticmethod
    def _impact(aggregate: PRAggregate) -> str:
        total = aggregate.code_stats.total_additions + aggregate.code_stats.total_deletions
        if total > 1000:
            return "Major"
        if total > 200:
            return "Medium"
        return "Minor"

    @staticmethod
    def _key_achievements(aggregate: PRAggregate) -> list[str]:
        achievements = []
        if aggregate.pull_request.merged:
            achievements.append("Successfully merged")
        if any(review.state is ReviewState.APPROVED for review in aggregate.reviews):
            achievements.append("Code review approved")
        if aggregate.code_stats.total_files > 10:
            achievements.append("Comprehensive changes")
        return achievements

    @staticmethod
    def _next_steps(aggregate: PRAggregate) -> list[str]:
        pr = aggregate.pull_request
        if pr.merged:
            return ["Monitor deployment", "Gather feedback", "Plan next iteration"]
        if pr.state == "open":
            return ["Address review feedback", "Complete testing", "Prepare for merge"]
        return ["Review and reopen if needed"]


pr_transformer = PRVideoTransformer()
