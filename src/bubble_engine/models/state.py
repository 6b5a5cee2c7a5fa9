"""
Persisted User State.

UserState is the only entity that survives process restarts. Every model here
is frozen; updates produce new instances through ``model_copy(update=...)``.
Serialization is lossless through ``to_json`` / ``from_json``.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.formatters import to_local_naive
from .types import FocusModeName, HistoryAction, ItemCategory


class Preferences(BaseModel):
    """User interruption preferences."""

    model_config = ConfigDict(frozen=True)

    focus_mode: FocusModeName = FocusModeName.AVAILABLE
    daily_budget: int = 15
    sound_enabled: bool = True
    haptic_enabled: bool = True


class DailySnapshot(BaseModel):
    """Persisted daily budget counters."""

    model_config = ConfigDict(frozen=True)

    total: int = 15
    used: int = 0
    last_reset: datetime = Field(default_factory=datetime.now)

    @field_validator("last_reset")
    @classmethod
    def local_naive(cls, v: datetime) -> datetime:
        return to_local_naive(v)


class HourlySnapshot(BaseModel):
    """Persisted hourly window counters."""

    model_config = ConfigDict(frozen=True)

    current: int = 0
    window_start: datetime = Field(default_factory=datetime.now)

    @field_validator("window_start")
    @classmethod
    def local_naive(cls, v: datetime) -> datetime:
        return to_local_naive(v)


class BudgetSnapshot(BaseModel):
    """Persisted view of the interrupt budget."""

    model_config = ConfigDict(frozen=True)

    daily: DailySnapshot = Field(default_factory=DailySnapshot)
    hourly: HourlySnapshot = Field(default_factory=HourlySnapshot)


class DeferredItem(BaseModel):
    """A candidate the user pushed to a later time."""

    model_config = ConfigDict(frozen=True)

    item_id: str  # Candidate id
    deferred_at: datetime
    deferred_until: datetime

    @field_validator("deferred_at", "deferred_until")
    @classmethod
    def local_naive(cls, v: datetime) -> datetime:
        """Aware timestamps are converted to naive local time."""
        return to_local_naive(v)


class HistoryEntry(BaseModel):
    """Immutable record of one past user action."""

    model_config = ConfigDict(frozen=True)

    item_id: str
    category: ItemCategory
    confidence_score: int
    action: HistoryAction
    timestamp: datetime
    time_to_action: float | None = None  # Seconds from surfacing to action
    source: str = ""
    was_engaged: bool = False

    @field_validator("timestamp")
    @classmethod
    def local_naive(cls, v: datetime) -> datetime:
        return to_local_naive(v)


class UserState(BaseModel):
    """
    Everything the engine learns about a user.

    category_weights is keyed by ItemCategory value so the JSON form stays
    a plain string map.
    """

    model_config = ConfigDict(frozen=True)

    preferences: Preferences = Field(default_factory=Preferences)
    category_weights: dict[str, float] = Field(default_factory=dict)
    budget: BudgetSnapshot = Field(default_factory=BudgetSnapshot)
    deferred: list[DeferredItem] = Field(default_factory=list)
    history: list[HistoryEntry] = Field(default_factory=list)

    def to_json(self) -> str:
        """Serialize for the host application's persistence layer."""
        return self.model_dump_json()

    @classmethod
    def from_json(cls, data: str) -> UserState:
        """Inverse of ``to_json``."""
        return cls.model_validate_json(data)
