"""Audience/template-triggered content adaptation and duration estimation."""

from __future__ import annotations

import copy
import logging
from typing import Any, Iterable

from models.audience import ScriptAudience
from models.content import BASE_DURATIONS, DEFAULT_BASE_DURATION, ContentItem, ContentType
from models.strategy import AdaptationAction, AdaptationActionType, ContentAdaptationRule
from services.conditions import ConditionContext, all_conditions_hold

logger = logging.getLogger(__name__)

ADAPTATION_TAGS = {
    AdaptationActionType.SIMPLIFY_LANGUAGE: "language_simplified",
    AdaptationActionType.REDUCE_DETAIL: "detail_reduced",
    AdaptationActionType.ADD_EXPLANATION: "explanation_added",
    AdaptationActionType.EXPAND_DETAIL: "detail_expanded",
}

DEFAULT_MAX_ITEMS = 5


def estimate_duration(content_type: ContentType) -> float:
    """Seconds of narration for one item. Adaptations do not change this estimate."""
    return float(BASE_DURATIONS.get(content_type, DEFAULT_BASE_DURATION))


def selection_rationale(content_type: ContentType, audience: ScriptAudience) -> str:
    audience_name = audience.primary.value if audience.primary else "general"
    return (
        f"Selected {content_type.value} content for {audience_name} audience "
        "based on relevance and impact"
    )


def _simplify_language(payload: Any, action: AdaptationAction) -> Any:
    if isinstance(payload, dict):
        description = payload.get("description")
        if isinstance(description, str) and "." in description:
            payload["description"] = description.split(".", 1)[0].strip() + "."
        payload["language"] = action.parameters.get("level", "simplified")
    return payload


def _reduce_detail(payload: Any, action: AdaptationAction) -> Any:
    limit = int(action.parameters.get("max_items", DEFAULT_MAX_ITEMS))
    if isinstance(payload, list):
        return payload[:limit]
    if isinstance(payload, dict):
        for key, value in payload.items():
            if isinstance(value, list) and len(value) > limit:
                payload[key] = value[:limit]
        payload["detail_level"] = "reduced"
    return payload


def _add_explanation(payload: Any, action: AdaptationAction) -> Any:
    if isinstance(payload, dict):
        note = action.parameters.get("text", "Background explanation for non-specialists")
        payload.setdefault("explanations", []).append(note)
    return payload


def _expand_detail(payload: Any, action: AdaptationAction) -> Any:
    if isinstance(payload, dict):
        payload["detail_level"] = action.parameters.get("level", "comprehensive")
    return payload


ACTION_HANDLERS = {
    AdaptationActionType.SIMPLIFY_LANGUAGE: _simplify_language,
    AdaptationActionType.REDUCE_DETAIL: _reduce_detail,
    AdaptationActionType.ADD_EXPLANATION: _add_explanation,
    AdaptationActionType.EXPAND_DETAIL: _expand_detail,
}


def adapt_item(
    item: ContentItem,
    rules: Iterable[ContentAdaptationRule],
    context: ConditionContext,
) -> ContentItem:
    """Apply every rule whose triggers all hold; the payload is copied before any change."""
    payload = copy.deepcopy(item.payload)
    adaptations = list(item.adaptations)
    item_context = ConditionContext(
        audience=context.audience,
        target_duration=context.target_duration,
        volumes=context.volumes,
        priority_score=item.priority_score,
    )

    for rule in rules:
        if not all_conditions_hold(rule.triggers, item_context, payload):
            continue
        for action in rule.actions:
            payload = ACTION_HANDLERS[action.type](payload, action)
            adaptations.append(ADAPTATION_TAGS[action.type])

    item.payload = payload
    item.adaptations = adaptations
    item.duration_impact_seconds = estimate_duration(item.type)
    item.rationale = selection_rationale(item.type, context.audience)
    return item


def adapt_items(
    items: Iterable[ContentItem],
    rules: Iterable[ContentAdaptationRule],
    context: ConditionContext,
) -> list[ContentItem]:
    rules = list(rules)
    adapted = [adapt_item(item, rules, context) for item in items]
    tagged = sum(1 for item in adapted if item.adaptations)
    if tagged:
        logger.info("[adaptation] Adapted %d of %d item(s)", tagged, len(adapted))
    return adapted
