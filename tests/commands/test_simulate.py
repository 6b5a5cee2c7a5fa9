"""
Tests for the simulate command.
"""

from __future__ import annotations

import argparse

import pytest

from bubble_engine.commands.common import load_items_file
from bubble_engine.commands.simulate import cmd_simulate
from conftest import NOW

ITEMS_YAML = """\
context:
  active_project: launch
  recent_topics: [pricing]
  current_time: 2026-03-04T10:00:00
items:
  - id: quote
    type: deadline
    content: Send the quote
    priority: 100
    deadline: 2026-03-04T11:00:00
    project: launch
    topics: [Pricing]
  - id: water
    type: reminder
    content: Water the plants
    priority: 95
  - id: notes
    type: reminder
    content: Review quarterly notes
    priority: 50
  - id: bad
    content: Missing a type
"""


@pytest.fixture
def items_file(tmp_path):
    path = tmp_path / "items.yaml"
    path.write_text(ITEMS_YAML)
    return path


def _args(items_file, **overrides) -> argparse.Namespace:
    values = {
        "items_file": str(items_file),
        "focus_mode": None,
        "daily_budget": None,
        "config": None,
        "now": None,
    }
    values.update(overrides)
    return argparse.Namespace(**values)


class TestLoadItemsFile:
    """Tests for items file parsing."""

    def test_loads_context_and_items(self, items_file):
        """Valid items load; invalid ones are skipped and reported."""
        loaded = load_items_file(items_file)

        assert loaded.context.active_project == "launch"
        assert loaded.context.current_time == NOW
        assert [item.id for item in loaded.items] == ["quote", "water", "notes"]
        assert loaded.skipped[0]["index"] == 3
        assert loaded.skipped[0]["id"] == "bad"

    def test_now_overrides_context_time(self, items_file):
        """An explicit time replaces the file's current_time."""
        later = NOW.replace(hour=15)
        assert load_items_file(items_file, later).context.current_time == later

    def test_not_a_mapping(self, tmp_path):
        """Top-level lists are rejected."""
        path = tmp_path / "items.yaml"
        path.write_text("- id: x\n")

        with pytest.raises(ValueError, match="mapping"):
            load_items_file(path)


class TestCmdSimulate:
    """Tests for cmd_simulate."""

    def test_available(self, items_file):
        """Non-silent items surface in available mode."""
        result = cmd_simulate(_args(items_file))

        assert result["focus_mode"] == "available"
        assert result["item_count"] == 3
        assert result["surfaced"] == ["bubble-quote", "bubble-water"]
        assert result["queued"] == []
        assert result["budget"] == {"daily": 13, "hourly": 40, "remaining": 13}
        assert result["budget_status"] == "Daily: 2/15 (13%) | Hourly: 2/5"
        assert len(result["skipped"]) == 1

    def test_item_details(self, items_file):
        """Each item reports its score, state and visual state."""
        result = cmd_simulate(_args(items_file))
        items = {item["candidate_id"]: item for item in result["items"]}

        assert items["quote"]["confidence_score"] == 85
        assert items["quote"]["visual_state"] == "active"
        assert items["water"]["visual_state"] == "passive"
        assert items["notes"]["state"] == "pending"
        assert items["notes"]["visual_state"] is None

    def test_events(self, items_file):
        """Events are reported in emission order."""
        result = cmd_simulate(_args(items_file))

        assert [e["type"] for e in result["events"]] == [
            "item_surfaced",
            "budget_consumed",
            "item_surfaced",
            "budget_consumed",
        ]

    def test_dnd(self, items_file):
        """dnd surfaces nothing and queues everything."""
        result = cmd_simulate(_args(items_file, focus_mode="dnd"))

        assert result["surfaced"] == []
        assert result["queued"] == ["bubble-quote", "bubble-water", "bubble-notes"]
        assert result["budget"]["remaining"] == 15

    def test_focused(self, items_file):
        """Focused mode holds the active-level item."""
        result = cmd_simulate(_args(items_file, focus_mode="focused"))
        assert result["surfaced"] == ["bubble-water"]

    def test_daily_budget_option(self, items_file):
        """--daily-budget is clamped and applied."""
        result = cmd_simulate(_args(items_file, daily_budget=50))
        assert result["budget_status"].startswith("Daily: 2/30")

    def test_utc_timestamps(self, tmp_path):
        """Files written with Z timestamps simulate like naive ones."""
        path = tmp_path / "items.yaml"
        path.write_text(
            ITEMS_YAML.replace("2026-03-04T10:00:00", "2026-03-04T10:00:00Z").replace(
                "2026-03-04T11:00:00", "2026-03-04T11:00:00Z"
            )
        )

        result = cmd_simulate(_args(path, now="2026-03-04T10:00:00Z"))

        assert result["surfaced"] == ["bubble-quote", "bubble-water"]
        scores = {item["candidate_id"]: item["confidence_score"] for item in result["items"]}
        assert scores["quote"] == 85

    def test_missing_file(self, tmp_path):
        """A missing items file is reported."""
        result = cmd_simulate(_args(tmp_path / "missing.yaml"))
        assert result["error"] == "file_not_found"

    def test_invalid_now(self, items_file):
        """An unparseable --now is reported."""
        result = cmd_simulate(_args(items_file, now="yesterday-ish"))
        assert result["error"] == "invalid_input"

    def test_invalid_config(self, items_file, tmp_path):
        """An invalid engine config is reported."""
        config = tmp_path / "engine.yaml"
        config.write_text("weights:\n  priority: 0.9\n")

        result = cmd_simulate(_args(items_file, config=str(config)))

        assert result["error"] == "invalid_input"
        assert "sum to 1.0" in result["message"]
