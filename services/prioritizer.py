"""Rule-based priority scoring and tier assignment."""

from __future__ import annotations

from numbers import Number
from typing import Any, Iterable

from models.content import TIER_THRESHOLDS, ContentItem, PriorityTier
from models.strategy import PrioritizationRule, ScoringStrategy
from services.conditions import MISSING, resolve_path


def tier_for_score(score: float) -> PriorityTier:
    for threshold, tier in TIER_THRESHOLDS:
        if score >= threshold:
            return tier
    return PriorityTier.OPTIONAL


def _field_value(payload: Any, parameters: dict[str, Any]) -> float:
    default = float(parameters.get("default", 0.0))
    name = parameters.get("field")
    if not name:
        return default
    value = resolve_path(payload, name)
    if value is MISSING or isinstance(value, bool) or not isinstance(value, Number):
        return default
    return float(value)


def _item_count(payload: Any, parameters: dict[str, Any]) -> float:
    scale = float(parameters.get("scale", 10)) or 1.0
    name = parameters.get("field")
    target = payload if not name else resolve_path(payload, name)
    if not isinstance(target, (list, tuple)):
        return 0.0
    return min(len(target) / scale, 1.0)


def rule_score(rule: PrioritizationRule, item: ContentItem) -> float:
    if rule.scoring is ScoringStrategy.FIELD_VALUE:
        return _field_value(item.payload, rule.parameters)
    if rule.scoring is ScoringStrategy.ITEM_COUNT:
        return _item_count(item.payload, rule.parameters)
    if rule.scoring is ScoringStrategy.CONSTANT:
        return float(rule.parameters.get("value", 0.0))
    return 0.0


def sort_key(item: ContentItem) -> tuple[int, float, float]:
    """Tier first, then priority score, then relevance (both descending)."""
    return (item.priority.rank, -item.priority_score, -item.relevance_score)


def prioritize(
    items: Iterable[ContentItem],
    rules: Iterable[PrioritizationRule],
) -> list[ContentItem]:
    """
    Add weighted rule scores onto each item's relevance and classify it into a tier.

    Rules only touch items whose type they list; a rule for a content type that never
    shows up is simply never applied. Returns a new, stably sorted list.
    """
    rules = list(rules)
    prioritized: list[ContentItem] = []
    for item in items:
        score = item.relevance_score
        for rule in rules:
            if item.type in rule.content_types:
                score += rule_score(rule, item) * rule.weight
        item.priority_score = score
        item.priority = tier_for_score(score)
        prioritized.append(item)
    return sorted(prioritized, key=sort_key)
