"""
Confidence Scoring

Decides how strongly an item deserves the user's attention right now.
"""

from .calculator import (
    ConfidenceBreakdown,
    calculate_confidence_breakdown,
    calculate_confidence_score,
    calculate_context_relevance,
    calculate_historical_engagement,
    calculate_time_sensitivity,
    format_confidence_breakdown,
    get_visual_state,
    has_entity_overlap,
    has_topic_overlap,
    is_within_window,
    round_half_up,
)

__all__ = [
    "ConfidenceBreakdown",
    "calculate_confidence_breakdown",
    "calculate_confidence_score",
    "calculate_context_relevance",
    "calculate_historical_engagement",
    "calculate_time_sensitivity",
    "format_confidence_breakdown",
    "get_visual_state",
    "has_entity_overlap",
    "has_topic_overlap",
    "is_within_window",
    "round_half_up",
]
