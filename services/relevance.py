"""Relevance scoring: audience/template affinity plus per-type heuristics."""

from __future__ import annotations

from typing import Any

from models.audience import AudienceType, ScriptAudience
from models.content import ContentType as C
from models.template import TemplateType

DEFAULT_AFFINITY = 0.5
NEUTRAL_HEURISTIC = 0.5
NORMALIZATION_CONSTANT = 3.0

AUDIENCE_AFFINITY: dict[AudienceType, dict[C, float]] = {
    AudienceType.ENGINEERING: {
        C.PR_OVERVIEW: 0.7,
        C.COMMIT_DATA: 0.9,
        C.FILE_CHANGES: 0.9,
        C.REVIEW_DATA: 0.8,
        C.PARTICIPANT_DATA: 0.6,
        C.METRICS: 0.8,
        C.TIMELINE_EVENTS: 0.7,
        C.DISCUSSION_THREADS: 0.8,
        C.CODE_SAMPLES: 0.9,
        C.IMPACT_ANALYSIS: 0.7,
    },
    AudienceType.PRODUCT: {
        C.PR_OVERVIEW: 0.9,
        C.COMMIT_DATA: 0.6,
        C.FILE_CHANGES: 0.5,
        C.REVIEW_DATA: 0.7,
        C.PARTICIPANT_DATA: 0.8,
        C.METRICS: 0.9,
        C.TIMELINE_EVENTS: 0.8,
        C.DISCUSSION_THREADS: 0.6,
        C.CODE_SAMPLES: 0.3,
        C.IMPACT_ANALYSIS: 0.9,
    },
    AudienceType.EXECUTIVE: {
        C.PR_OVERVIEW: 0.9,
        C.COMMIT_DATA: 0.4,
        C.FILE_CHANGES: 0.3,
        C.REVIEW_DATA: 0.5,
        C.PARTICIPANT_DATA: 0.7,
        C.METRICS: 0.9,
        C.TIMELINE_EVENTS: 0.6,
        C.DISCUSSION_THREADS: 0.4,
        C.CODE_SAMPLES: 0.1,
        C.IMPACT_ANALYSIS: 0.9,
    },
}

TEMPLATE_AFFINITY: dict[TemplateType, dict[C, float]] = {
    TemplateType.SUMMARY: {
        C.PR_OVERVIEW: 0.9,
        C.COMMIT_DATA: 0.5,
        C.FILE_CHANGES: 0.4,
        C.REVIEW_DATA: 0.3,
        C.PARTICIPANT_DATA: 0.6,
        C.METRICS: 0.8,
        C.TIMELINE_EVENTS: 0.2,
        C.DISCUSSION_THREADS: 0.2,
        C.CODE_SAMPLES: 0.1,
        C.IMPACT_ANALYSIS: 0.9,
    },
    TemplateType.DETAILED: {
        C.PR_OVERVIEW: 0.8,
        C.COMMIT_DATA: 0.8,
        C.FILE_CHANGES: 0.8,
        C.REVIEW_DATA: 0.8,
        C.PARTICIPANT_DATA: 0.7,
        C.METRICS: 0.8,
        C.TIMELINE_EVENTS: 0.7,
        C.DISCUSSION_THREADS: 0.6,
        C.CODE_SAMPLES: 0.6,
        C.IMPACT_ANALYSIS: 0.8,
    },
    TemplateType.TECHNICAL: {
        C.PR_OVERVIEW: 0.7,
        C.COMMIT_DATA: 0.9,
        C.FILE_CHANGES: 0.9,
        C.REVIEW_DATA: 0.8,
        C.PARTICIPANT_DATA: 0.6,
        C.METRICS: 0.7,
        C.TIMELINE_EVENTS: 0.6,
        C.DISCUSSION_THREADS: 0.8,
        C.CODE_SAMPLES: 0.9,
        C.IMPACT_ANALYSIS: 0.7,
    },
    TemplateType.EXECUTIVE: {
        C.PR_OVERVIEW: 0.9,
        C.COMMIT_DATA: 0.3,
        C.FILE_CHANGES: 0.2,
        C.REVIEW_DATA: 0.4,
        C.PARTICIPANT_DATA: 0.8,
        C.METRICS: 0.9,
        C.TIMELINE_EVENTS: 0.6,
        C.DISCUSSION_THREADS: 0.3,
        C.CODE_SAMPLES: 0.1,
        C.IMPACT_ANALYSIS: 0.9,
    },
    TemplateType.CUSTOM: {content_type: 0.7 for content_type in C},
}

CONSENSUS_SCORES = {"blocked": 0.3, "mixed": 0.2, "approved": 0.2, "pending": 0.1}


def audience_affinity(content_type: C, audience: ScriptAudience) -> float:
    return AUDIENCE_AFFINITY.get(audience.primary, {}).get(content_type, DEFAULT_AFFINITY)


def template_affinity(content_type: C, template_type: TemplateType) -> float:
    return TEMPLATE_AFFINITY.get(template_type, {}).get(content_type, DEFAULT_AFFINITY)


def _score_commits(payload: dict[str, Any]) -> float:
    score = 0.0
    commits = payload.get("commits") or []
    if commits:
        score += min(len(commits) / 10, 0.5)
        major = sum(1 for commit in commits if commit.get("significance") == "major")
        score += major / len(commits) * 0.3
    totals = payload.get("total_stats")
    if totals:
        score += min((totals.get("additions", 0) + totals.get("deletions", 0)) / 1000, 0.2)
    return score


def _score_files(payload: dict[str, Any]) -> float:
    score = 0.0
    files = payload.get("files") or []
    if files:
        score += min(len(files) / 20, 0.3)
        high = sum(1 for file in files if file.get("significance") == "high")
        score += high / len(files) * 0.4
    languages = payload.get("language_breakdown")
    if languages:
        score += min(len(languages) / 5, 0.3)
    return score


def _score_reviews(payload: dict[str, Any]) -> float:
    score = 0.0
    reviews = payload.get("reviews") or []
    if reviews:
        score += min(len(reviews) / 5, 0.3)
        comments = sum(review.get("comment_count", 0) for review in reviews)
        score += min(comments / 20, 0.4)
    score += CONSENSUS_SCORES.get(payload.get("consensus"), 0.0)
    return score


def _score_metrics(payload: dict[str, Any], audience: ScriptAudience) -> float:
    score = 0.5
    if audience.primary is AudienceType.EXECUTIVE:
        if payload.get("time_to_merge_hours") is not None:
            score += 0.2
        if payload.get("participant_count", 0) > 3:
            score += 0.2
    elif audience.primary is AudienceType.ENGINEERING:
        if payload.get("total_commits", 0) > 5:
            score += 0.2
        if payload.get("total_files", 0) > 10:
            score += 0.2
    return min(score, 1.0)


def item_heuristic(content_type: C, payload: Any, audience: ScriptAudience) -> float:
    if not isinstance(payload, dict):
        return NEUTRAL_HEURISTIC
    if content_type is C.COMMIT_DATA:
        return _score_commits(payload)
    if content_type is C.FILE_CHANGES:
        return _score_files(payload)
    if content_type is C.REVIEW_DATA:
        return _score_reviews(payload)
    if content_type is C.METRICS:
        return _score_metrics(payload, audience)
    return NEUTRAL_HEURISTIC


def score_relevance(
    content_type: C,
    payload: Any,
    audience: ScriptAudience,
    template_type: TemplateType,
) -> float:
    """Deterministic 0–1 relevance of one item for this audience and template."""
    raw = (
        audience_affinity(content_type, audience)
        + template_affinity(content_type, template_type)
        + item_heuristic(content_type, payload, audience)
    )
    return max(0.0, min(raw / NORMALIZATION_CONSTANT, 1.0))
