"""
Feedback and Adaptation.

Consumes user actions (dismiss, engage, defer) plus optional explicit
feedback, and returns an updated UserState. Category weights drift within
fixed bounds so that categories the user keeps acting on score higher.

Nothing here mutates its inputs.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Union

from ..core.constants import (
    DEFAULT_DEFER_HOURS,
    DEFAULT_WEIGHT_BOUNDS,
    ENGAGEMENT_ADJUSTMENT,
    HISTORY_LIMIT,
    MORNING_HOUR,
    TONIGHT_HOUR,
    WEIGHT_ADJUSTMENTS,
)
from ..core.formatters import to_local_naive
from ..core.logging import get_logger
from ..models import (
    DeferPreset,
    DeferredItem,
    Feedback,
    HistoryAction,
    HistoryEntry,
    ItemCategory,
    SurfaceableItem,
    UserState,
    WeightBounds,
)

logger = get_logger(__name__)

DeferOption = Union[DeferPreset, datetime, str]

# =============================================================================
# History
# =============================================================================


def create_history_entry(
    item: SurfaceableItem,
    action: HistoryAction,
    time_to_action: float | None,
    now: datetime | None = None,
) -> HistoryEntry:
    """
    Record one user action on an item.

    Args:
        item: Item acted on
        action: What the user did
        time_to_action: Seconds between surfacing and the action
        now: Action timestamp

    Returns:
        New HistoryEntry
    """
    return HistoryEntry(
        item_id=item.id,
        category=item.category,
        confidence_score=item.confidence_score,
        action=action,
        timestamp=now or datetime.now(),
        time_to_action=time_to_action,
        source=item.candidate.source if item.candidate is not None else "",
        was_engaged=action == HistoryAction.ENGAGED,
    )


def _append_history(history: list[HistoryEntry], entry: HistoryEntry) -> list[HistoryEntry]:
    """Append, keeping only the most recent HISTORY_LIMIT entries."""
    return [*history[-(HISTORY_LIMIT - 1):], entry]


# =============================================================================
# Category Weights
# =============================================================================


def _adjustment_for(feedback: Feedback | HistoryAction | str) -> float:
    if feedback == HistoryAction.ENGAGED:
        return ENGAGEMENT_ADJUSTMENT
    return WEIGHT_ADJUSTMENTS[Feedback(feedback)]


def adjust_category_weight(
    weights: dict[str, float],
    category: ItemCategory,
    feedback: Feedback | HistoryAction | str,
    bounds: WeightBounds = DEFAULT_WEIGHT_BOUNDS,
) -> dict[str, float]:
    """
    Nudge one category weight.

    Args:
        weights: Current weights keyed by category value
        category: Category to adjust
        feedback: Feedback tag, or HistoryAction.ENGAGED for implicit engagement
        bounds: Clamp bounds

    Returns:
        New weights dict; the adjusted value is clamped and rounded to 2 decimals
    """
    current = weights.get(category.value, bounds.default)
    updated = bounds.clamp(current + _adjustment_for(feedback))
    return {**weights, category.value: round(updated, 2)}


def get_category_weight(
    state: UserState, category: ItemCategory, bounds: WeightBounds = DEFAULT_WEIGHT_BOUNDS
) -> float:
    return state.category_weights.get(category.value, bounds.default)


def reset_category_weights(state: UserState) -> UserState:
    return state.model_copy(update={"category_weights": {}})


# =============================================================================
# Actions
# =============================================================================


def process_dismiss(
    state: UserState,
    item: SurfaceableItem,
    time_to_action: float | None,
    feedback: Feedback | None = None,
    now: datetime | None = None,
    bounds: WeightBounds = DEFAULT_WEIGHT_BOUNDS,
) -> UserState:
    """Dismissal: history entry, plus a weight change when feedback is given."""
    entry = create_history_entry(item, HistoryAction.DISMISSED, time_to_action, now)
    weights = (
        adjust_category_weight(state.category_weights, item.category, feedback, bounds)
        if feedback is not None
        else state.category_weights
    )
    return state.model_copy(
        update={
            "category_weights": weights,
            "history": _append_history(state.history, entry),
        }
    )


def process_engage(
    state: UserState,
    item: SurfaceableItem,
    time_to_action: float | None,
    now: datetime | None = None,
    bounds: WeightBounds = DEFAULT_WEIGHT_BOUNDS,
) -> UserState:
    """Engagement: history entry and a small boost for the category."""
    entry = create_history_entry(item, HistoryAction.ENGAGED, time_to_action, now)
    weights = adjust_category_weight(
        state.category_weights, item.category, HistoryAction.ENGAGED, bounds
    )
    return state.model_copy(
        update={
            "category_weights": weights,
            "history": _append_history(state.history, entry),
        }
    )


def process_defer(
    state: UserState,
    item: SurfaceableItem,
    time_to_action: float | None,
    until: DeferOption,
    now: datetime | None = None,
) -> UserState:
    """Deferral: history entry and a deferred record keyed by candidate id."""
    now = now or datetime.now()
    entry = create_history_entry(item, HistoryAction.DEFERRED, time_to_action, now)
    deferred = DeferredItem(
        item_id=item.candidate_id,
        deferred_at=now,
        deferred_until=calculate_defer_date(until, now),
    )
    remaining = [d for d in state.deferred if d.item_id != item.candidate_id]
    return state.model_copy(
        update={
            "history": _append_history(state.history, entry),
            "deferred": [*remaining, deferred],
        }
    )


def process_helpful_feedback(
    state: UserState, item: SurfaceableItem, bounds: WeightBounds = DEFAULT_WEIGHT_BOUNDS
) -> UserState:
    """Explicit positive feedback outside of a dismissal."""
    weights = adjust_category_weight(
        state.category_weights, item.category, Feedback.HELPFUL, bounds
    )
    return state.model_copy(update={"category_weights": weights})


# =============================================================================
# Deferral
# =============================================================================


def calculate_defer_date(option: DeferOption, now: datetime | None = None) -> datetime:
    """
    Resolve a defer option to a concrete time.

    Args:
        option: tonight / tomorrow / monday, or an explicit datetime
        now: Reference time

    Returns:
        tonight  -> 20:00 today, or tomorrow if already past 20:00
        tomorrow -> 09:00 next day
        monday   -> 09:00 next Monday, always strictly in the future
        datetime -> used as given, aware values converted to local time
        other    -> now + 24h
    """
    if isinstance(option, datetime):
        return to_local_naive(option)

    now = now or datetime.now()

    try:
        preset = DeferPreset(option)
    except ValueError:
        logger.debug("Unknown defer option %r, deferring %dh", option, DEFAULT_DEFER_HOURS)
        return now + timedelta(hours=DEFAULT_DEFER_HOURS)

    if preset == DeferPreset.TONIGHT:
        tonight = now.replace(hour=TONIGHT_HOUR, minute=0, second=0, microsecond=0)
        if tonight <= now:
            tonight += timedelta(days=1)
        return tonight

    if preset == DeferPreset.TOMORROW:
        tomorrow = now + timedelta(days=1)
        return tomorrow.replace(hour=MORNING_HOUR, minute=0, second=0, microsecond=0)

    # Monday is weekday 0
    days_until_monday = (7 - now.weekday()) % 7 or 7
    monday = now + timedelta(days=days_until_monday)
    return monday.replace(hour=MORNING_HOUR, minute=0, second=0, microsecond=0)


def is_item_deferred(state: UserState, candidate_id: str, now: datetime | None = None) -> bool:
    """True while a deferral for the candidate is still in the future."""
    now = now or datetime.now()
    return any(d.item_id == candidate_id and d.deferred_until > now for d in state.deferred)


def get_ready_deferred_items(state: UserState, now: datetime | None = None) -> list[DeferredItem]:
    """Deferrals whose time has come."""
    now = now or datetime.now()
    return [d for d in state.deferred if d.deferred_until <= now]


def cleanup_deferred_items(state: UserState, now: datetime | None = None) -> UserState:
    """Drop deferrals that have passed; future ones are kept."""
    now = now or datetime.now()
    return state.model_copy(
        update={"deferred": [d for d in state.deferred if d.deferred_until > now]}
    )


# =============================================================================
# Analytics
# =============================================================================


def get_category_engagement_rate(state: UserState, category: ItemCategory) -> float:
    """Fraction of a category's history that was engaged (0.5 with no data)."""
    entries = [h for h in state.history if h.category == category]
    if not entries:
        return 0.5
    return sum(1 for h in entries if h.was_engaged) / len(entries)


def get_category_response_time(state: UserState, category: ItemCategory) -> float | None:
    """Mean seconds to act on non-dismissed items of a category, or None."""
    times = [
        h.time_to_action
        for h in state.history
        if h.category == category
        and h.action != HistoryAction.DISMISSED
        and h.time_to_action is not None
    ]
    if not times:
        return None
    return sum(times) / len(times)
