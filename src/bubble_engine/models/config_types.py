"""
Tunable Engine Parameters.

Scoring weights, visual thresholds, budget defaults and weight bounds. Each
follows the same shape: ``from_dict`` for YAML input, ``to_dict`` for output
and ``validate`` returning a list of error messages.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ConfidenceWeights:
    """Factor weights for the confidence formula. Must sum to 1.0."""

    priority: float = 0.35
    time_sensitivity: float = 0.25
    context_relevance: float = 0.25
    historical_engagement: float = 0.15

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ConfidenceWeights:
        """Create from configuration dict."""
        if not data:
            return cls()
        return cls(
            priority=float(data.get("priority", 0.35)),
            time_sensitivity=float(data.get("time_sensitivity", 0.25)),
            context_relevance=float(data.get("context_relevance", 0.25)),
            historical_engagement=float(data.get("historical_engagement", 0.15)),
        )

    def to_dict(self) -> dict[str, float]:
        return {
            "priority": self.priority,
            "time_sensitivity": self.time_sensitivity,
            "context_relevance": self.context_relevance,
            "historical_engagement": self.historical_engagement,
        }

    def validate(self) -> list[str]:
        """
        Validate scoring weights.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []
        for name, value in self.to_dict().items():
            if value < 0 or value > 1:
                errors.append(f"weights.{name} must be between 0 and 1")
        total = sum(self.to_dict().values())
        if abs(total - 1.0) > 0.001:
            errors.append(f"weights must sum to 1.0 (got {total:.3f})")
        return errors


@dataclass(frozen=True)
class ScoreThresholds:
    """Lower score bound of each visual state. Below passive is silent."""

    passive: int = 40
    ready: int = 60
    active: int = 80
    priority: int = 95

    @property
    def minimum_surface(self) -> int:
        """Scores below this are never surfaced."""
        return self.passive

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ScoreThresholds:
        """Create from configuration dict."""
        if not data:
            return cls()
        return cls(
            passive=int(data.get("passive", 40)),
            ready=int(data.get("ready", 60)),
            active=int(data.get("active", 80)),
            priority=int(data.get("priority", 95)),
        )

    def to_dict(self) -> dict[str, int]:
        return {
            "passive": self.passive,
            "ready": self.ready,
            "active": self.active,
            "priority": self.priority,
        }

    def validate(self) -> list[str]:
        errors = []
        if not 0 < self.passive < self.ready < self.active < self.priority <= 100:
            errors.append("thresholds must satisfy 0 < passive < ready < active < priority <= 100")
        return errors


@dataclass(frozen=True)
class BudgetDefaults:
    """Interrupt budget limits."""

    default_daily: int = 15
    min_daily: int = 10
    max_daily: int = 30
    hourly_available: int = 5
    hourly_focused: int = 2
    emergency_threshold: int = 98
    reset_hour: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> BudgetDefaults:
        """Create from configuration dict."""
        if not data:
            return cls()
        return cls(
            default_daily=int(data.get("default_daily", 15)),
            min_daily=int(data.get("min_daily", 10)),
            max_daily=int(data.get("max_daily", 30)),
            hourly_available=int(data.get("hourly_available", 5)),
            hourly_focused=int(data.get("hourly_focused", 2)),
            emergency_threshold=int(data.get("emergency_threshold", 98)),
            reset_hour=int(data.get("reset_hour", 0)),
        )

    def clamp_daily(self, total: int) -> int:
        """Clamp a requested daily total into [min_daily, max_daily]."""
        return min(self.max_daily, max(self.min_daily, total))

    def to_dict(self) -> dict[str, int]:
        return {
            "default_daily": self.default_daily,
            "min_daily": self.min_daily,
            "max_daily": self.max_daily,
            "hourly_available": self.hourly_available,
            "hourly_focused": self.hourly_focused,
            "emergency_threshold": self.emergency_threshold,
            "reset_hour": self.reset_hour,
        }

    def validate(self) -> list[str]:
        """
        Validate budget limits.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []
        if self.min_daily < 0:
            errors.append("budget.min_daily must be non-negative")
        if self.min_daily > self.max_daily:
            errors.append("budget.min_daily must be <= budget.max_daily")
        if not self.min_daily <= self.default_daily <= self.max_daily:
            errors.append("budget.default_daily must be between min_daily and max_daily")
        if self.hourly_available < 0 or self.hourly_focused < 0:
            errors.append("budget hourly limits must be non-negative")
        if not 0 <= self.emergency_threshold <= 100:
            errors.append("budget.emergency_threshold must be between 0 and 100")
        if not 0 <= self.reset_hour <= 23:
            errors.append("budget.reset_hour must be between 0 and 23")
        return errors


@dataclass(frozen=True)
class WeightBounds:
    """Bounds for learned per-category weight multipliers."""

    min: float = 0.3
    max: float = 1.5
    default: float = 1.0

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> WeightBounds:
        """Create from configuration dict."""
        if not data:
            return cls()
        return cls(
            min=float(data.get("min", 0.3)),
            max=float(data.get("max", 1.5)),
            default=float(data.get("default", 1.0)),
        )

    def clamp(self, weight: float) -> float:
        return max(self.min, min(self.max, weight))

    def to_dict(self) -> dict[str, float]:
        return {"min": self.min, "max": self.max, "default": self.default}

    def validate(self) -> list[str]:
        errors = []
        if self.min <= 0:
            errors.append("weight_bounds.min must be positive")
        if not self.min <= self.default <= self.max:
            errors.append("weight_bounds must satisfy min <= default <= max")
        return errors
