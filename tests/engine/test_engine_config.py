"""
Tests for engine configuration loading.
"""

from __future__ import annotations

import pytest

from bubble_engine.core.config import BubbleSettings
from bubble_engine.engine import EngineConfig, EngineConfigError, load_engine_config


class TestEngineConfig:
    """Tests for EngineConfig construction."""

    def test_defaults_valid(self):
        """The default configuration validates."""
        config = EngineConfig()

        assert config.validate() == []
        assert config.weights.priority == 0.35
        assert config.thresholds.priority == 95
        assert config.budget.default_daily == 15
        assert config.weight_bounds.max == 1.5

    def test_from_dict_sections(self):
        """Each section is read independently."""
        config = EngineConfig.from_dict(
            {"thresholds": {"active": 75}, "budget": {"hourly_available": 6}}
        )

        assert config.thresholds.active == 75
        assert config.thresholds.ready == 60
        assert config.budget.hourly_available == 6
        assert config.weights.priority == 0.35

    def test_to_dict_round_trip(self):
        """to_dict output loads back to the same config."""
        config = EngineConfig.from_dict({"budget": {"default_daily": 20}})
        assert EngineConfig.from_dict(config.to_dict()) == config


class TestLoadEngineConfig:
    """Tests for YAML loading."""

    def test_load_valid(self, tmp_path):
        """A valid YAML file loads."""
        path = tmp_path / "engine.yaml"
        path.write_text(
            "weights:\n"
            "  priority: 0.4\n"
            "  time_sensitivity: 0.2\n"
            "  context_relevance: 0.25\n"
            "  historical_engagement: 0.15\n"
            "budget:\n"
            "  default_daily: 20\n"
        )

        config = load_engine_config(path)

        assert config.weights.priority == 0.4
        assert config.budget.default_daily == 20

    def test_empty_file_is_default(self, tmp_path):
        """An empty file means defaults."""
        path = tmp_path / "engine.yaml"
        path.write_text("")
        assert load_engine_config(path) == EngineConfig()

    def test_missing_file(self, tmp_path):
        """Missing files raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_engine_config(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        """Malformed YAML raises EngineConfigError."""
        path = tmp_path / "engine.yaml"
        path.write_text("weights: [unclosed\n")

        with pytest.raises(EngineConfigError, match="Invalid YAML"):
            load_engine_config(path)

    def test_not_a_mapping(self, tmp_path):
        """Top-level lists are rejected."""
        path = tmp_path / "engine.yaml"
        path.write_text("- 1\n- 2\n")

        with pytest.raises(EngineConfigError, match="mapping"):
            load_engine_config(path)

    def test_bad_value_type(self, tmp_path):
        """Non-numeric values are rejected."""
        path = tmp_path / "engine.yaml"
        path.write_text("budget:\n  default_daily: lots\n")

        with pytest.raises(EngineConfigError, match="Invalid value"):
            load_engine_config(path)

    def test_validation_errors(self, tmp_path):
        """Weights that don't sum to 1.0 fail validation."""
        path = tmp_path / "engine.yaml"
        path.write_text("weights:\n  priority: 0.9\n")

        with pytest.raises(EngineConfigError, match="sum to 1.0"):
            load_engine_config(path)

    def test_error_is_value_error(self, tmp_path):
        """EngineConfigError can be caught as ValueError."""
        path = tmp_path / "engine.yaml"
        path.write_text("thresholds:\n  passive: 90\n")

        with pytest.raises(ValueError):
            load_engine_config(path)


class TestFromSettings:
    """Tests for settings-driven configuration."""

    def test_daily_budget_applied(self):
        """BUBBLE_DAILY_BUDGET sets the default daily allowance."""
        config = EngineConfig.from_settings(BubbleSettings(daily_budget=25))
        assert config.budget.default_daily == 25

    def test_daily_budget_clamped(self):
        """Out-of-range settings are clamped."""
        config = EngineConfig.from_settings(BubbleSettings(daily_budget=3))
        assert config.budget.default_daily == 10

    def test_loads_config_file(self, tmp_path):
        """BUBBLE_ENGINE_CONFIG is loaded before the daily budget applies."""
        path = tmp_path / "engine.yaml"
        path.write_text("budget:\n  hourly_available: 7\n")

        config = EngineConfig.from_settings(
            BubbleSettings(engine_config=path, daily_budget=18)
        )

        assert config.budget.hourly_available == 7
        assert config.budget.default_daily == 18

    def test_missing_config_file(self, tmp_path):
        """A configured but missing file raises."""
        with pytest.raises(FileNotFoundError):
            EngineConfig.from_settings(BubbleSettings(engine_config=tmp_path / "nope.yaml"))
