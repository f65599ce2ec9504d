"""Ordered include/exclude/boost/demote rules over content items."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from models.content import ContentItem
from models.strategy import FilterAction, FilteringRule
from services.conditions import MISSING, compare, resolve_path
from services.prioritizer import sort_key

logger = logging.getLogger(__name__)


def resolve_item_field(item: ContentItem, path: str) -> Any:
    """Look the path up on the item itself first (type, priority...), then in its payload."""
    value = resolve_path(item, path)
    if value is MISSING:
        value = resolve_path(item.payload, path)
    return value


def matches(item: ContentItem, rule: FilteringRule) -> bool:
    criteria = rule.criteria
    return compare(resolve_item_field(item, criteria.field), criteria.operator, criteria.value)


def apply_filters(
    items: Iterable[ContentItem],
    rules: Iterable[FilteringRule],
) -> list[ContentItem]:
    """
    Run rules in order. Boost and demote only move priority_score; the tier assigned by
    the prioritizer is left as-is, so the effect is limited to ordering within a tier.
    """
    current = list(items)
    for rule in rules:
        if rule.action is FilterAction.EXCLUDE:
            kept = [item for item in current if not matches(item, rule)]
        elif rule.action is FilterAction.INCLUDE:
            kept = [item for item in current if matches(item, rule)]
        else:
            delta = rule.amount if rule.action is FilterAction.BOOST else -rule.amount
            for item in current:
                if matches(item, rule):
                    item.priority_score += delta
            kept = current
        if len(kept) != len(current):
            logger.info(
                "[content_filter] Rule %s removed %d item(s)", rule.name, len(current) - len(kept)
            )
        current = kept
    return sorted(current, key=sort_key)
