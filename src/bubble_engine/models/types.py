"""
Shared Type Definitions.

Enums for item kinds, lifecycle states, focus modes, visual intensities,
feedback tags and budget decision reasons. Kept in one module so the scoring,
budget, feedback and engine modules can share them without circular imports.
"""

from __future__ import annotations

from enum import Enum


class ItemType(str, Enum):
    """Kind of candidate item supplied by the upstream source."""

    DEADLINE = "deadline"
    COMMITMENT = "commitment"
    REMINDER = "reminder"
    CONNECTION = "connection"
    PATTERN = "pattern"


class ItemCategory(str, Enum):
    """Category of a surfaceable item. Category weights are keyed on this."""

    DEADLINE = "deadline"
    COMMITMENT = "commitment"
    REMINDER = "reminder"
    CONNECTION = "connection"
    PATTERN = "pattern"
    MEETING_REMINDER = "meeting_reminder"
    GENERAL = "general"


class ItemState(str, Enum):
    """
    Lifecycle state of a surfaceable item.

    pending -> surfaced -> {dismissed | engaged | deferred}
    deferred -> pending (once the deferral window has passed)
    """

    PENDING = "pending"
    SURFACED = "surfaced"
    DISMISSED = "dismissed"
    ENGAGED = "engaged"
    DEFERRED = "deferred"

    @property
    def is_active(self) -> bool:
        """Pending and surfaced items are still candidates for the user's attention."""
        return self in (ItemState.PENDING, ItemState.SURFACED)


class HistoryAction(str, Enum):
    """User action recorded in history."""

    DISMISSED = "dismissed"
    ENGAGED = "engaged"
    DEFERRED = "deferred"


class Feedback(str, Enum):
    """Explicit feedback tags a user can attach to a dismissal."""

    HELPFUL = "helpful"
    LESS_LIKE_THIS = "less_like_this"
    WRONG_TIME = "wrong_time"
    NOT_RELEVANT = "not_relevant"


class FocusModeName(str, Enum):
    """User-selected interruption policy."""

    AVAILABLE = "available"
    FOCUSED = "focused"
    DND = "dnd"


class VisualState(str, Enum):
    """Visual intensity tier derived from the confidence score."""

    SILENT = "silent"  # No UI, retained only
    PASSIVE = "passive"  # Ambient indicator
    READY = "ready"  # Preview on hover/tap
    ACTIVE = "active"  # Surfaces with preview
    PRIORITY = "priority"  # Immediate

    @property
    def rank(self) -> int:
        """Position in the intensity hierarchy (silent lowest)."""
        return VISUAL_STATE_ORDER.index(self)


# Intensity hierarchy, lowest first
VISUAL_STATE_ORDER: list[VisualState] = [
    VisualState.SILENT,
    VisualState.PASSIVE,
    VisualState.READY,
    VisualState.ACTIVE,
    VisualState.PRIORITY,
]


class DeferPreset(str, Enum):
    """Symbolic defer options."""

    TONIGHT = "tonight"
    TOMORROW = "tomorrow"
    MONDAY = "monday"


class BudgetReason(str, Enum):
    """Why a budget authorization was granted or denied."""

    EMERGENCY_BYPASS = "emergency_bypass"
    WITHIN_BUDGET = "within_budget"
    DND_MODE = "dnd_mode"
    DAILY_BUDGET_EXHAUSTED = "daily_budget_exhausted"
    HOURLY_LIMIT_REACHED = "hourly_limit_reached"
