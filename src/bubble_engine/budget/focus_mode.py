"""
Focus Mode Filter.

Three tiers of interruption filtering:
- available: full experience, every non-silent intensity
- focused: passive and ready only, lower hourly cap, no sound/haptics
- dnd: nothing surfaces, everything is queued for later review
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Iterable

from ..core.constants import (
    DEFAULT_BUDGET,
    DEFAULT_THRESHOLDS,
    FOCUS_MODE_DESCRIPTIONS,
    FOCUS_MODE_DISPLAY_NAMES,
    FOCUS_MODES,
)
from ..models import (
    VISUAL_STATE_ORDER,
    FocusModeConfig,
    FocusModeName,
    ScoreThresholds,
    SurfaceableItem,
    VisualState,
)
from ..scoring.calculator import get_visual_state

FOCUS_MODE_CYCLE: list[FocusModeName] = [
    FocusModeName.AVAILABLE,
    FocusModeName.FOCUSED,
    FocusModeName.DND,
]


def _coerce(name: FocusModeName | str) -> FocusModeName | None:
    if isinstance(name, FocusModeName):
        return name
    try:
        return FocusModeName(name)
    except ValueError:
        return None


def get_focus_mode(name: FocusModeName | str) -> FocusModeConfig:
    """Look up a mode, falling back to available for unknown names."""
    mode = _coerce(name)
    return FOCUS_MODES[mode] if mode is not None else FOCUS_MODES[FocusModeName.AVAILABLE]


def get_all_focus_modes() -> list[FocusModeConfig]:
    return [FOCUS_MODES[name] for name in FOCUS_MODE_CYCLE]


def is_valid_focus_mode(name: FocusModeName | str) -> bool:
    return _coerce(name) is not None


def get_next_focus_mode(current: FocusModeName) -> FocusModeName:
    """Toggle order: available -> focused -> dnd -> available."""
    index = FOCUS_MODE_CYCLE.index(current)
    return FOCUS_MODE_CYCLE[(index + 1) % len(FOCUS_MODE_CYCLE)]


def is_state_allowed(state: VisualState, focus_mode: FocusModeName) -> bool:
    return state in get_focus_mode(focus_mode).allowed_states


def should_surface_item(
    item: SurfaceableItem,
    focus_mode: FocusModeName,
    emergency_threshold: int = DEFAULT_BUDGET.emergency_threshold,
    thresholds: ScoreThresholds = DEFAULT_THRESHOLDS,
) -> bool:
    """
    Whether the focus mode lets an item through.

    Emergency-level items pass everywhere except dnd. dnd holds everything.
    Otherwise the item's natural visual state must be allowed by the mode.
    """
    mode = get_focus_mode(focus_mode)

    if item.confidence_score >= emergency_threshold:
        return focus_mode != FocusModeName.DND

    if mode.queue_all:
        return False

    return get_visual_state(item.confidence_score, thresholds) in mode.allowed_states


def get_effective_visual_state(
    item: SurfaceableItem,
    focus_mode: FocusModeName,
    thresholds: ScoreThresholds = DEFAULT_THRESHOLDS,
) -> VisualState | None:
    """
    Visual state to render under a focus mode.

    The natural state when allowed, otherwise the highest allowed state below
    it. None when the mode allows nothing at or below the natural state.
    """
    mode = get_focus_mode(focus_mode)
    desired = get_visual_state(item.confidence_score, thresholds)

    if desired in mode.allowed_states:
        return desired

    for state in reversed(VISUAL_STATE_ORDER[: desired.rank + 1]):
        if state in mode.allowed_states:
            return state

    return None


def filter_items_for_focus_mode(
    items: Iterable[SurfaceableItem], focus_mode: FocusModeName
) -> list[SurfaceableItem]:
    return [item for item in items if should_surface_item(item, focus_mode)]


def get_queued_items(
    items: Iterable[SurfaceableItem],
    focus_mode: FocusModeName,
    emergency_threshold: int = DEFAULT_BUDGET.emergency_threshold,
) -> list[SurfaceableItem]:
    """Items held back by a queueing mode. Empty for non-queueing modes."""
    if not get_focus_mode(focus_mode).queue_all:
        return []
    return [item for item in items if item.confidence_score < emergency_threshold]


def show_passive_indicators(focus_mode: FocusModeName) -> bool:
    return get_focus_mode(focus_mode).passive_indicators


def is_sound_enabled(focus_mode: FocusModeName) -> bool:
    return get_focus_mode(focus_mode).sound_enabled


def is_haptic_enabled(focus_mode: FocusModeName) -> bool:
    return get_focus_mode(focus_mode).haptic_enabled


def get_focus_mode_description(focus_mode: FocusModeName | str) -> str:
    mode = _coerce(focus_mode)
    return FOCUS_MODE_DESCRIPTIONS.get(mode, "") if mode is not None else ""


def get_focus_mode_display_name(focus_mode: FocusModeName | str) -> str:
    mode = _coerce(focus_mode)
    return FOCUS_MODE_DISPLAY_NAMES.get(mode, "Unknown") if mode is not None else "Unknown"


def create_custom_focus_mode(name: FocusModeName, **overrides: Any) -> FocusModeConfig:
    """
    Derive a mode from a built-in one.

    Args:
        name: Built-in mode to start from
        **overrides: FocusModeConfig fields to replace

    Returns:
        New FocusModeConfig
    """
    if "allowed_states" in overrides:
        overrides["allowed_states"] = frozenset(overrides["allowed_states"])
    return replace(get_focus_mode(name), **overrides)
