"""Group transformed PR scenes into typed content buckets."""

from __future__ import annotations

from dataclasses import asdict
import logging
from typing import Any

from models.content import ContentType
from models.video import SceneType, VideoMetadata

logger = logging.getLogger(__name__)

SCENE_CONTENT_TYPES: dict[SceneType, ContentType] = {
    SceneType.INTRO: ContentType.PR_OVERVIEW,
    SceneType.OVERVIEW: ContentType.PR_OVERVIEW,
    SceneType.COMMITS: ContentType.COMMIT_DATA,
    SceneType.FILES: ContentType.FILE_CHANGES,
    SceneType.REVIEWS: ContentType.REVIEW_DATA,
    SceneType.TIMELINE: ContentType.TIMELINE_EVENTS,
    SceneType.SUMMARY: ContentType.IMPACT_ANALYSIS,
}


def categorize(metadata: VideoMetadata) -> dict[ContentType, list[Any]]:
    """
    Map each scene onto its ContentType bucket.

    Overview-style scenes keep their scene type, title and duration in the payload.
    Scenes without a mapping (e.g. outro) are skipped. Participant summaries and key
    metrics are always appended as one item each.
    """
    buckets: dict[ContentType, list[Any]] = {}

    for scene in metadata.scenes:
        content_type = SCENE_CONTENT_TYPES.get(scene.type)
        if content_type is None:
            logger.debug("[categorizer] Dropping %s scene (no content mapping)", scene.type.value)
            continue
        payload = dict(scene.data)
        if content_type is ContentType.PR_OVERVIEW:
            payload.update(scene_type=scene.type.value, title=scene.title, duration=scene.duration)
        buckets.setdefault(content_type, []).append(payload)

    buckets.setdefault(ContentType.PARTICIPANT_DATA, []).append(
        [asdict(participant) for participant in metadata.participants]
    )
    buckets.setdefault(ContentType.METRICS, []).append(asdict(metadata.key_metrics))
    return buckets
