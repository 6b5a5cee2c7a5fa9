"""
Message Generation.

Turns candidate items into short, contextual surfaceable items.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable

from ..core.logging import get_logger
from ..models import (
    CandidateItem,
    ItemAction,
    ItemCategory,
    ItemState,
    ItemType,
    SurfaceableItem,
)
from .rules import find_matching_rule

logger = get_logger(__name__)

DEFAULT_MAX_LENGTH = 100
ELLIPSIS = "..."


@dataclass(frozen=True)
class GeneratedMessage:
    """Rendered text for one item."""

    message: str
    subtext: str | None = None
    primary_action: ItemAction | None = None
    rule: str = "generic"


def generate_message(item: CandidateItem, now: datetime | None = None) -> GeneratedMessage:
    """
    Render message, subtext and call-to-action for an item.

    Args:
        item: Candidate to render
        now: Reference time for deadline phrasing

    Returns:
        GeneratedMessage from the first matching rule
    """
    now = now or datetime.now()
    rule = find_matching_rule(item, now)
    return GeneratedMessage(
        message=rule.message(item, now) or item.content,
        subtext=rule.subtext(item, now),
        primary_action=rule.action,
        rule=rule.name,
    )


def map_to_category(item_type: ItemType | str) -> ItemCategory:
    """Category for an item type; unknown types map to general."""
    value = item_type.value if isinstance(item_type, ItemType) else item_type
    try:
        category = ItemCategory(value)
    except ValueError:
        return ItemCategory.GENERAL
    # Only the five item types map one-to-one
    if category in (ItemCategory.MEETING_REMINDER, ItemCategory.GENERAL):
        return ItemCategory.GENERAL
    return category


def transform_to_bubble(
    item: CandidateItem, confidence_score: int, now: datetime | None = None
) -> SurfaceableItem:
    """Wrap a candidate as a new pending surfaceable item. The input is untouched."""
    generated = generate_message(item, now)
    logger.debug("Rendered %s with rule '%s'", item.id, generated.rule)
    return SurfaceableItem(
        id=f"bubble-{item.id}",
        candidate_id=item.id,
        message=generated.message,
        subtext=generated.subtext,
        primary_action=generated.primary_action,
        confidence_score=confidence_score,
        base_priority=item.priority,
        category=map_to_category(item.type),
        state=ItemState.PENDING,
        candidate=item,
    )


def transform_batch(
    scored: Iterable[tuple[CandidateItem, int]], now: datetime | None = None
) -> list[SurfaceableItem]:
    """Transform (item, score) pairs in order."""
    now = now or datetime.now()
    return [transform_to_bubble(item, score, now) for item, score in scored]


def truncate_message(message: str, max_length: int = DEFAULT_MAX_LENGTH) -> str:
    """Cut to max_length characters, ending in an ellipsis when shortened."""
    if len(message) <= max_length:
        return message
    return message[: max(0, max_length - len(ELLIPSIS))] + ELLIPSIS
