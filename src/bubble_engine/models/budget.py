"""
Interrupt Budget and Focus Mode Types.

All budget dataclasses are frozen; the budget manager returns updated copies
via ``dataclasses.replace``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .types import BudgetReason, FocusModeName, VisualState

# =============================================================================
# Interrupt Budget
# =============================================================================


@dataclass(frozen=True)
class DailyBudget:
    """Daily allowance. remaining is never negative."""

    total: int
    used: int
    remaining: int
    last_reset: datetime
    reset_hour: int = 0

    @property
    def reset_time(self) -> str:
        return f"{self.reset_hour}:00"


@dataclass(frozen=True)
class HourlyBudget:
    """Rolling hourly window with separate caps per mode."""

    available: int
    focused: int
    current: int
    window_start: datetime


@dataclass(frozen=True)
class EmergencyConfig:
    """Scores at or above threshold skip the budget when enabled."""

    enabled: bool = True
    threshold: int = 98


@dataclass(frozen=True)
class InterruptBudget:
    """Finite allowance of interruptions per day and per hour."""

    daily: DailyBudget
    hourly: HourlyBudget
    emergency: EmergencyConfig = field(default_factory=EmergencyConfig)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "daily": {
                "total": self.daily.total,
                "used": self.daily.used,
                "remaining": self.daily.remaining,
                "last_reset": self.daily.last_reset.isoformat(),
                "reset_time": self.daily.reset_time,
            },
            "hourly": {
                "available": self.hourly.available,
                "focused": self.hourly.focused,
                "current": self.hourly.current,
                "window_start": self.hourly.window_start.isoformat(),
            },
            "emergency": {
                "enabled": self.emergency.enabled,
                "threshold": self.emergency.threshold,
            },
        }


@dataclass(frozen=True)
class BudgetDecision:
    """Result of a budget authorization check."""

    allowed: bool
    cost: int
    reason: BudgetReason

    def to_dict(self) -> dict[str, Any]:
        return {"allowed": self.allowed, "cost": self.cost, "reason": self.reason.value}


@dataclass(frozen=True)
class BudgetUtilization:
    """Whole-number usage percentages."""

    daily: int
    hourly: int


# =============================================================================
# Focus Modes
# =============================================================================


@dataclass(frozen=True)
class FocusModeConfig:
    """
    Interruption policy for one focus mode.

    Attributes:
        name: Mode identifier
        allowed_states: Visual intensities the mode lets through
        hourly_limit: Max budget-consuming surfacings per hour
        passive_indicators: Whether ambient indicators are shown
        sound_enabled: Whether surfacing may play a sound
        haptic_enabled: Whether surfacing may vibrate
        queue_all: Hold every item instead of surfacing (dnd)
    """

    name: FocusModeName
    allowed_states: frozenset[VisualState]
    hourly_limit: int
    passive_indicators: bool
    sound_enabled: bool
    haptic_enabled: bool
    queue_all: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "name": self.name.value,
            "allowed_states": [
                s.value for s in sorted(self.allowed_states, key=lambda s: s.rank)
            ],
            "hourly_limit": self.hourly_limit,
            "passive_indicators": self.passive_indicators,
            "sound_enabled": self.sound_enabled,
            "haptic_enabled": self.haptic_enabled,
            "queue_all": self.queue_all,
        }
