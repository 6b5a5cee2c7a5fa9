"""
Feedback and Adaptation

Turns user actions into history and learned category weights.
"""

from .handler import (
    DeferOption,
    adjust_category_weight,
    calculate_defer_date,
    cleanup_deferred_items,
    create_history_entry,
    get_category_engagement_rate,
    get_category_response_time,
    get_category_weight,
    get_ready_deferred_items,
    is_item_deferred,
    process_defer,
    process_dismiss,
    process_engage,
    process_helpful_feedback,
    reset_category_weights,
)

__all__ = [
    "DeferOption",
    "adjust_category_weight",
    "calculate_defer_date",
    "cleanup_deferred_items",
    "create_history_entry",
    "get_category_engagement_rate",
    "get_category_response_time",
    "get_category_weight",
    "get_ready_deferred_items",
    "is_item_deferred",
    "process_defer",
    "process_dismiss",
    "process_engage",
    "process_helpful_feedback",
    "reset_category_weights",
]
