"""Categorize → score → prioritize → filter → adapt, for one generation run."""

from __future__ import annotations

import logging

from models.audience import ScriptAudience
from models.content import ContentItem
from models.strategy import SelectionStrategy
from models.template import TemplateType
from models.video import SceneType, VideoMetadata
from services.adaptation import adapt_items
from services.categorizer import categorize
from services.conditions import ConditionContext
from services.content_filter import apply_filters
from services.prioritizer import prioritize
from services.relevance import score_relevance

logger = logging.getLogger(__name__)


def content_volumes(metadata: VideoMetadata) -> dict[str, int]:
    """Counts that content_volume / data_availability conditions can reference."""
    metrics = metadata.key_metrics
    timeline_events = sum(
        len(scene.data.get("events", [])) for scene in metadata.scenes if scene.type is SceneType.TIMELINE
    )
    return {
        "participants": metrics.participant_count,
        "commits": metrics.total_commits,
        "files": metrics.total_files,
        "reviews": metrics.total_reviews,
        "comments": metrics.total_comments,
        "timeline_events": timeline_events,
        "discussion_threads": 0,
        "code_samples": 0,
    }


class ContentAdapter:
    """Produces the adapted, prioritized item list that the selector draws from."""

    def adapt_content(
        self,
        metadata: VideoMetadata,
        template_type: TemplateType,
        audience: ScriptAudience,
        target_duration: float,
        strategy: SelectionStrategy,
    ) -> list[ContentItem]:
        logger.info(
            "[content_adapter] Adapting content for %s template, %s audience (strategy=%s)",
            template_type.value,
            audience.primary.value if audience.primary else "unspecified",
            strategy.name,
        )
        buckets = categorize(metadata)

        items: list[ContentItem] = []
        for content_type, payloads in buckets.items():
            for payload in payloads:
                items.append(
                    ContentItem(
                        type=content_type,
                        payload=payload,
                        relevance_score=score_relevance(content_type, payload, audience, template_type),
                    )
                )

        items = prioritize(items, strategy.prioritization)
        items = apply_filters(items, strategy.filtering)
        context = ConditionContext(
            audience=audience,
            target_duration=target_duration,
            volumes=content_volumes(metadata),
        )
        items = adapt_items(items, strategy.adaptation, context)

        logger.info(
            "[content_adapter] %d item(s) across %d content type(s)",
            len(items),
            len({item.type for item in items}),
        )
        return items


content_adapter = ContentAdapter()
