"""
Engine Configuration.

Bundles the tunable scoring weights, visual thresholds, budget limits and
weight bounds. Values come from defaults, an optional YAML file and the
BUBBLE_* environment settings.

Example YAML:

    weights:
      priority: 0.4
      time_sensitivity: 0.2
      context_relevance: 0.25
      historical_engagement: 0.15
    thresholds:
      active: 75
    budget:
      default_daily: 20
      hourly_available: 6
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

from ..core.config import BubbleSettings, get_settings
from ..core.logging import get_logger
from ..models import BudgetDefaults, ConfidenceWeights, ScoreThresholds, WeightBounds

logger = get_logger(__name__)


class EngineConfigError(ValueError):
    """Engine configuration could not be loaded or failed validation."""


@dataclass(frozen=True)
class EngineConfig:
    """Complete engine configuration."""

    weights: ConfidenceWeights = field(default_factory=ConfidenceWeights)
    thresholds: ScoreThresholds = field(default_factory=ScoreThresholds)
    budget: BudgetDefaults = field(default_factory=BudgetDefaults)
    weight_bounds: WeightBounds = field(default_factory=WeightBounds)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> EngineConfig:
        """Create from configuration dict."""
        if not data:
            return cls()
        return cls(
            weights=ConfidenceWeights.from_dict(data.get("weights")),
            thresholds=ScoreThresholds.from_dict(data.get("thresholds")),
            budget=BudgetDefaults.from_dict(data.get("budget")),
            weight_bounds=WeightBounds.from_dict(data.get("weight_bounds")),
        )

    @classmethod
    def from_settings(cls, settings: BubbleSettings | None = None) -> EngineConfig:
        """
        Build configuration from environment settings.

        Loads BUBBLE_ENGINE_CONFIG when set, then applies BUBBLE_DAILY_BUDGET
        as the default daily allowance.

        Raises:
            FileNotFoundError: If the configured YAML file doesn't exist
            EngineConfigError: If the YAML file is invalid
        """
        settings = settings or get_settings()
        config = load_engine_config(settings.engine_config) if settings.engine_config else cls()

        daily = config.budget.clamp_daily(settings.daily_budget)
        if daily != config.budget.default_daily:
            config = replace(config, budget=replace(config.budget, default_daily=daily))
        return config

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for YAML serialization."""
        return {
            "weights": self.weights.to_dict(),
            "thresholds": self.thresholds.to_dict(),
            "budget": self.budget.to_dict(),
            "weight_bounds": self.weight_bounds.to_dict(),
        }

    def validate(self) -> list[str]:
        """
        Validate every section.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors: list[str] = []
        errors.extend(self.weights.validate())
        errors.extend(self.thresholds.validate())
        errors.extend(self.budget.validate())
        errors.extend(self.weight_bounds.validate())
        return errors


def load_engine_config(path: Path | str) -> EngineConfig:
    """
    Load engine configuration from a YAML file.

    Args:
        path: YAML file path

    Returns:
        Validated EngineConfig

    Raises:
        FileNotFoundError: If the file doesn't exist
        EngineConfigError: If the YAML is malformed, not a mapping, or invalid
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Engine config not found: {path}")

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise EngineConfigError(f"Invalid YAML in engine config {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise EngineConfigError(f"Engine config {path} must be a YAML mapping")

    try:
        config = EngineConfig.from_dict(data)
    except (TypeError, ValueError) as e:
        raise EngineConfigError(f"Invalid value in engine config {path}: {e}") from e

    errors = config.validate()
    if errors:
        raise EngineConfigError(f"Invalid engine config {path}: " + "; ".join(errors))

    logger.debug("Loaded engine config from %s", path)
    return config
