"""
Message Generation

Rule-based rendering of candidate items into short user-facing messages.
"""

from .messages import (
    GeneratedMessage,
    generate_message,
    map_to_category,
    transform_batch,
    transform_to_bubble,
    truncate_message,
)
from .rules import RULE_REGISTRY, MessageRule, find_matching_rule, format_relative_time

__all__ = [
    "RULE_REGISTRY",
    "GeneratedMessage",
    "MessageRule",
    "find_matching_rule",
    "format_relative_time",
    "generate_message",
    "map_to_category",
    "transform_batch",
    "transform_to_bubble",
    "truncate_message",
]
