"""
Engine Events.

Synchronous, in-process notifications emitted by the engine after each state
change has been applied.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Protocol

from ..models import Feedback, FocusModeName, SurfaceableItem


class EngineEventType(str, Enum):
    """Kinds of engine events."""

    ITEM_SURFACED = "item_surfaced"
    ITEM_DISMISSED = "item_dismissed"
    ITEM_ENGAGED = "item_engaged"
    ITEM_DEFERRED = "item_deferred"
    FOCUS_MODE_CHANGED = "focus_mode_changed"
    BUDGET_CONSUMED = "budget_consumed"
    BUDGET_EXHAUSTED = "budget_exhausted"
    ITEMS_QUEUED = "items_queued"


@dataclass(frozen=True)
class EngineEvent:
    """
    One engine event.

    Only the fields relevant to the event type are set:
    item for item_* events, feedback for item_dismissed, until for
    item_deferred, remaining for budget_consumed, mode for
    focus_mode_changed, count for items_queued.
    """

    type: EngineEventType
    item: SurfaceableItem | None = None
    feedback: Feedback | None = None
    until: datetime | None = None
    remaining: int | None = None
    mode: FocusModeName | None = None
    count: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict, omitting unset fields."""
        data: dict[str, Any] = {"type": self.type.value}
        if self.item is not None:
            data["item_id"] = self.item.id
        if self.feedback is not None:
            data["feedback"] = self.feedback.value
        if self.until is not None:
            data["until"] = self.until.isoformat()
        if self.remaining is not None:
            data["remaining"] = self.remaining
        if self.mode is not None:
            data["mode"] = self.mode.value
        if self.count is not None:
            data["count"] = self.count
        return data


class EngineListener(Protocol):
    """Callable receiving engine events."""

    def __call__(self, event: EngineEvent) -> None: ...


Unsubscribe = Callable[[], None]
