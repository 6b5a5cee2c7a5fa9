"""
Attention Budget

Interrupt budget accounting and focus mode filtering.
"""

from .focus_mode import (
    create_custom_focus_mode,
    filter_items_for_focus_mode,
    get_all_focus_modes,
    get_effective_visual_state,
    get_focus_mode,
    get_focus_mode_description,
    get_focus_mode_display_name,
    get_next_focus_mode,
    get_queued_items,
    is_haptic_enabled,
    is_sound_enabled,
    is_state_allowed,
    is_valid_focus_mode,
    should_surface_item,
    show_passive_indicators,
)
from .interrupt_budget import (
    apply_resets,
    calculate_cost,
    can_consume_budget,
    consume_budget,
    create_interrupt_budget,
    format_budget_status,
    get_budget_utilization,
    get_hourly_limit,
    reset_daily_budget,
    reset_hourly_budget,
    set_daily_total,
    set_emergency_bypass,
    should_reset_daily,
    should_reset_hourly,
)

__all__ = [
    # Interrupt budget
    "apply_resets",
    "calculate_cost",
    "can_consume_budget",
    "consume_budget",
    "create_interrupt_budget",
    "format_budget_status",
    "get_budget_utilization",
    "get_hourly_limit",
    "reset_daily_budget",
    "reset_hourly_budget",
    "set_daily_total",
    "set_emergency_bypass",
    "should_reset_daily",
    "should_reset_hourly",
    # Focus modes
    "create_custom_focus_mode",
    "filter_items_for_focus_mode",
    "get_all_focus_modes",
    "get_effective_visual_state",
    "get_focus_mode",
    "get_focus_mode_description",
    "get_focus_mode_display_name",
    "get_next_focus_mode",
    "get_queued_items",
    "is_haptic_enabled",
    "is_sound_enabled",
    "is_state_allowed",
    "is_valid_focus_mode",
    "should_surface_item",
    "show_passive_indicators",
]
