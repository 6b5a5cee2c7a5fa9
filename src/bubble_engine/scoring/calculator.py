"""
Confidence Scoring.

Combines four factors into a 0-100 confidence score:

    raw      = priority*0.35 + time*0.25 + context*0.25 + history*0.15
    adjusted = raw * category_weight
    final    = round(clamp(adjusted, 0, 100))

All functions are pure and never raise for well-formed models.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Iterable, Sequence

from ..core.constants import (
    DEADLINE_SCORES,
    DECAY_AFTER_DAYS,
    DECAY_BASE_SCORE,
    DECAY_MAX_SCORE,
    DECAY_POINTS_PER_DAY,
    DEFAULT_THRESHOLDS,
    DEFAULT_WEIGHT_BOUNDS,
    DEFAULT_WEIGHTS,
    DISTANT_DEADLINE_SCORE,
    ENTITY_MATCH_POINTS,
    NEUTRAL_ENGAGEMENT_SCORE,
    NEUTRAL_TIME_SCORE,
    OPTIMAL_WINDOW_SCORE,
    PROJECT_MATCH_POINTS,
    TASK_MATCH_POINTS,
    TOPIC_MATCH_POINTS,
)
from ..core.formatters import hours_between
from ..models import (
    CandidateItem,
    ConfidenceWeights,
    HistoryAction,
    HistoryEntry,
    ScoreThresholds,
    TimeWindow,
    UserContext,
    UserState,
    VisualState,
    WeightBounds,
)

# =============================================================================
# Breakdown
# =============================================================================


@dataclass(frozen=True)
class ConfidenceBreakdown:
    """Every intermediate value behind a confidence score."""

    base_priority: float
    time_sensitivity: float
    context_relevance: float
    historical_engagement: float
    category_weight: float
    raw_score: float
    final_score: int
    weights: ConfidenceWeights = DEFAULT_WEIGHTS

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        data = asdict(self)
        data["raw_score"] = round(self.raw_score, 2)
        return data


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up."""
    return int(math.floor(value + 0.5))


def calculate_confidence_breakdown(
    item: CandidateItem,
    context: UserContext,
    history: Sequence[HistoryEntry],
    user_state: UserState,
    weights: ConfidenceWeights = DEFAULT_WEIGHTS,
    bounds: WeightBounds = DEFAULT_WEIGHT_BOUNDS,
) -> ConfidenceBreakdown:
    """
    Score an item against the current context and history.

    Args:
        item: Candidate to score
        context: Current user activity, including current_time
        history: Past user actions
        user_state: Source of the learned category weight
        weights: Factor weights
        bounds: Weight bounds; bounds.default is used for unseen categories

    Returns:
        ConfidenceBreakdown with final_score in [0, 100]
    """
    time_sensitivity = calculate_time_sensitivity(item, context.current_time)
    context_relevance = calculate_context_relevance(item, context)
    historical_engagement = calculate_historical_engagement(item, history)

    raw_score = (
        item.priority * weights.priority
        + time_sensitivity * weights.time_sensitivity
        + context_relevance * weights.context_relevance
        + historical_engagement * weights.historical_engagement
    )

    category_weight = user_state.category_weights.get(item.type.value, bounds.default)
    adjusted = raw_score * category_weight
    final_score = round_half_up(min(100.0, max(0.0, adjusted)))

    return ConfidenceBreakdown(
        base_priority=item.priority,
        time_sensitivity=time_sensitivity,
        context_relevance=context_relevance,
        historical_engagement=historical_engagement,
        category_weight=category_weight,
        raw_score=raw_score,
        final_score=final_score,
        weights=weights,
    )


def calculate_confidence_score(
    item: CandidateItem,
    context: UserContext,
    history: Sequence[HistoryEntry],
    user_state: UserState,
    weights: ConfidenceWeights = DEFAULT_WEIGHTS,
    bounds: WeightBounds = DEFAULT_WEIGHT_BOUNDS,
) -> int:
    """Final 0-100 score for an item."""
    return calculate_confidence_breakdown(
        item, context, history, user_state, weights, bounds
    ).final_score


# =============================================================================
# Factors
# =============================================================================


def calculate_time_sensitivity(item: CandidateItem, now: datetime) -> float:
    """
    Is now the right moment for this item?

    Deadline proximity wins, then an optimal window containing now, then
    upward decay for items known for more than a few days.
    """
    if item.deadline is not None:
        hours_until = hours_between(now, item.deadline)
        if hours_until <= 0:
            return 100
        for limit, score in DEADLINE_SCORES:
            if hours_until < limit:
                return score
        return DISTANT_DEADLINE_SCORE

    if item.optimal_window is not None and is_within_window(now, item.optimal_window):
        return OPTIMAL_WINDOW_SCORE

    if item.detected_at is not None:
        days_since = hours_between(item.detected_at, now) / 24
        if days_since > DECAY_AFTER_DAYS:
            return min(DECAY_MAX_SCORE, DECAY_BASE_SCORE + days_since * DECAY_POINTS_PER_DAY)

    return NEUTRAL_TIME_SCORE


def is_within_window(now: datetime, window: TimeWindow) -> bool:
    """Inclusive window check."""
    return window.contains(now)


def calculate_context_relevance(item: CandidateItem, context: UserContext) -> float:
    """Additive relevance to current activity, capped at 100."""
    score = 0

    if item.project and item.project == context.active_project:
        score += PROJECT_MATCH_POINTS

    if has_topic_overlap(item.topics, context.recent_topics):
        score += TOPIC_MATCH_POINTS

    if has_entity_overlap(item.entities, context.recent_entities):
        score += ENTITY_MATCH_POINTS

    if context.active_task and context.active_task in item.related_tasks:
        score += TASK_MATCH_POINTS

    return min(100, score)


def _has_overlap(left: Iterable[str] | None, right: Iterable[str] | None) -> bool:
    if not left or not right:
        return False
    lowered = {value.lower() for value in right}
    return any(value.lower() in lowered for value in left)


def has_topic_overlap(item_topics: Iterable[str] | None, context_topics: Iterable[str] | None) -> bool:
    """Case-insensitive topic intersection."""
    return _has_overlap(item_topics, context_topics)


def has_entity_overlap(
    item_entities: Iterable[str] | None, context_entities: Iterable[str] | None
) -> bool:
    """Case-insensitive entity intersection."""
    return _has_overlap(item_entities, context_entities)


def calculate_historical_engagement(
    item: CandidateItem, history: Sequence[HistoryEntry]
) -> float:
    """
    Engagement rate (0-100) among similar past items.

    Similar means same category or same source. No similar history is neutral.
    """
    similar = [
        entry
        for entry in history
        if entry.category.value == item.type.value or (item.source and entry.source == item.source)
    ]
    if not similar:
        return NEUTRAL_ENGAGEMENT_SCORE

    engaged = sum(
        1 for entry in similar if entry.was_engaged or entry.action == HistoryAction.ENGAGED
    )
    return round_half_up(engaged / len(similar) * 100)


# =============================================================================
# Presentation
# =============================================================================


def get_visual_state(score: float, thresholds: ScoreThresholds = DEFAULT_THRESHOLDS) -> VisualState:
    """Map a score onto the visual intensity hierarchy."""
    if score >= thresholds.priority:
        return VisualState.PRIORITY
    if score >= thresholds.active:
        return VisualState.ACTIVE
    if score >= thresholds.ready:
        return VisualState.READY
    if score >= thresholds.passive:
        return VisualState.PASSIVE
    return VisualState.SILENT


def format_confidence_breakdown(breakdown: ConfidenceBreakdown) -> str:
    """Multi-line human-readable breakdown."""
    w = breakdown.weights
    lines = [
        f"Confidence Score: {breakdown.final_score}%",
        "",
        "Components:",
        f"  Base Priority: {breakdown.base_priority:g}% (weight: {w.priority:.2f})",
        f"  Time Sensitivity: {breakdown.time_sensitivity:g}% (weight: {w.time_sensitivity:.2f})",
        f"  Context Relevance: {breakdown.context_relevance:g}% (weight: {w.context_relevance:.2f})",
        f"  Historical Engagement: {breakdown.historical_engagement:g}% "
        f"(weight: {w.historical_engagement:.2f})",
        "",
        f"Raw Score: {breakdown.raw_score:.1f}%",
        f"Category Weight: {breakdown.category_weight:.2f}x",
        f"Final Score: {breakdown.final_score}%",
    ]
    return "\n".join(lines)
