"""
Candidate and Surfaceable Items.

CandidateItem is the validated input handed over by the upstream item source.
SurfaceableItem is the engine-owned wrapper carrying the generated message,
score and lifecycle state.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.formatters import to_local_naive
from .types import ItemCategory, ItemState, ItemType


class TimeWindow(BaseModel):
    """Window in which surfacing an item is most useful."""

    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime

    @field_validator("start", "end")
    @classmethod
    def local_naive(cls, v: datetime) -> datetime:
        return to_local_naive(v)

    def contains(self, moment: datetime) -> bool:
        """Inclusive containment check."""
        return self.start <= moment <= self.end


class CandidateItem(BaseModel):
    """
    Input fact eligible for surfacing.

    Optional collections accept ``None`` and come back as empty lists;
    priority is clamped to 0-100 instead of being rejected.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    type: ItemType
    content: str
    source: str = ""
    priority: float = Field(default=50.0, description="Base priority 0-100")
    deadline: datetime | None = None
    dependencies: list[str] = Field(default_factory=list)
    entities: list[str] = Field(default_factory=list)
    topics: list[str] = Field(default_factory=list)
    related_tasks: list[str] = Field(default_factory=list)
    optimal_window: TimeWindow | None = None
    detected_at: datetime | None = None
    project: str | None = None

    @field_validator("priority", mode="before")
    @classmethod
    def clamp_priority(cls, v: Any) -> Any:
        """Clamp numeric priorities into 0-100."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return max(0.0, min(100.0, float(v)))
        return v

    @field_validator("dependencies", "entities", "topics", "related_tasks", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        """Treat missing collections as empty."""
        return [] if v is None else v

    @field_validator("deadline", "detected_at")
    @classmethod
    def local_naive(cls, v: datetime | None) -> datetime | None:
        """Aware timestamps are converted to naive local time."""
        return to_local_naive(v) if v is not None else None


@dataclass(frozen=True)
class ItemAction:
    """Primary call-to-action attached to a surfaced item."""

    label: str


@dataclass
class SurfaceableItem:
    """
    A candidate wrapped for display.

    Owned and mutated exclusively by the engine. surfaced_at and
    deferred_until live on the item rather than in side tables.
    """

    id: str
    candidate_id: str
    message: str
    confidence_score: int
    base_priority: float
    category: ItemCategory
    state: ItemState = ItemState.PENDING
    subtext: str | None = None
    primary_action: ItemAction | None = None
    surfaced_at: datetime | None = None
    deferred_until: datetime | None = None
    candidate: CandidateItem | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "id": self.id,
            "candidate_id": self.candidate_id,
            "message": self.message,
            "subtext": self.subtext,
            "primary_action": self.primary_action.label if self.primary_action else None,
            "confidence_score": self.confidence_score,
            "base_priority": self.base_priority,
            "category": self.category.value,
            "state": self.state.value,
            "surfaced_at": self.surfaced_at.isoformat() if self.surfaced_at else None,
            "deferred_until": self.deferred_until.isoformat() if self.deferred_until else None,
        }
