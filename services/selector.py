"""Greedy, tier-ordered selection of content items under a time budget."""

from __future__ import annotations

import logging
from typing import Iterable

from models.content import ContentItem, PriorityTier
from services.prioritizer import sort_key

logger = logging.getLogger(__name__)

HIGH_TIER_BUDGET = 0.8       # share of target high-tier items may fill
REMAINING_TIER_BUDGET = 0.95


def select_for_duration(items: Iterable[ContentItem], target_duration: float) -> list[ContentItem]:
    """
    Critical items are always taken. High items are then added while the running total
    stays within 80% of target, and everything else within 95%. Items that do not fit are
    skipped, not truncated; later smaller items may still fit.
    """
    ordered = sorted(items, key=sort_key)
    selected: list[ContentItem] = []
    accumulated = 0.0

    for item in ordered:
        if item.priority is PriorityTier.CRITICAL:
            selected.append(item)
            accumulated += item.duration_impact_seconds

    for item in ordered:
        if item.priority is not PriorityTier.HIGH:
            continue
        if accumulated + item.duration_impact_seconds <= target_duration * HIGH_TIER_BUDGET:
            selected.append(item)
            accumulated += item.duration_impact_seconds

    for item in ordered:
        if item.priority in (PriorityTier.CRITICAL, PriorityTier.HIGH):
            continue
        if accumulated + item.duration_impact_seconds <= target_duration * REMAINING_TIER_BUDGET:
            selected.append(item)
            accumulated += item.duration_impact_seconds

    logger.info(
        "[selector] Selected %d of %d item(s), %.1fs of %.1fs target",
        len(selected),
        len(ordered),
        accumulated,
        target_duration,
    )
    return selected
