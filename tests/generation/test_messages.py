"""
Tests for message generation and item transformation.
"""

from __future__ import annotations

from datetime import timedelta

import pytest

from bubble_engine.generation import (
    generate_message,
    map_to_category,
    transform_batch,
    transform_to_bubble,
    truncate_message,
)
from bubble_engine.models import ItemCategory, ItemState, ItemType, TimeWindow
from conftest import NOW, make_candidate


class TestDeadlineMessages:
    """Tests for deadline phrasing."""

    def test_critical(self):
        """Under two hours shows minutes and the project."""
        item = make_candidate(
            type="deadline",
            content="Send the quote",
            deadline=NOW + timedelta(hours=1),
            project="launch",
        )
        generated = generate_message(item, NOW)

        assert generated.message == '"Send the quote" due in 60 minutes'
        assert generated.subtext == "Project: launch"
        assert generated.primary_action.label == "Focus Now"
        assert generated.rule == "critical"

    def test_overdue(self):
        """Recently overdue items offer to reschedule."""
        item = make_candidate(
            type="deadline", content="File taxes", deadline=NOW - timedelta(hours=3)
        )
        generated = generate_message(item, NOW)

        assert generated.message == '"File taxes" is now overdue'
        assert generated.subtext == "Would you like to reschedule or mark complete?"
        assert generated.primary_action.label == "Handle Now"

    def test_today_without_project(self):
        """Later today without a project says so."""
        item = make_candidate(
            type="deadline", content="Submit report", deadline=NOW + timedelta(hours=5)
        )
        generated = generate_message(item, NOW)

        assert generated.message == '"Submit report" due in 5 hours'
        assert generated.subtext == "Due today"
        assert generated.primary_action is None

    def test_soon(self):
        """Within three days uses a heads-up."""
        item = make_candidate(
            type="deadline", content="Book flights", deadline=NOW + timedelta(hours=30)
        )
        generated = generate_message(item, NOW)

        assert generated.message == 'Heads up: "Book flights" due tomorrow'
        assert generated.subtext == "Consider getting started"

    def test_later(self):
        """Distant deadlines show weeks."""
        item = make_candidate(
            type="deadline", content="Renew passport", deadline=NOW + timedelta(days=14)
        )
        assert generate_message(item, NOW).message == '"Renew passport" coming up in 2 weeks'

    def test_undated_deadline_uses_content(self):
        """No date means the plain content."""
        item = make_candidate(type="deadline", content="Finish slides")
        assert generate_message(item, NOW).message == "Finish slides"


class TestOtherMessages:
    """Tests for non-deadline templates."""

    def test_commitment_with_person(self):
        """Commitments to someone name them."""
        item = make_candidate(type="commitment", content="Send the deck", entities=["Dana"])
        generated = generate_message(item, NOW)

        assert generated.message == "You mentioned you'd send the deck to Dana"
        assert generated.subtext == "Ready to follow through?"

    def test_commitment_generic(self):
        """Commitments without a person cite the source."""
        item = make_candidate(type="commitment", content="Send the deck")
        generated = generate_message(item, NOW)

        assert generated.message == 'You committed to: "Send the deck"'
        assert generated.subtext == "From: notes"

    def test_reminder(self):
        """Plain reminders."""
        generated = generate_message(make_candidate(), NOW)

        assert generated.message == "Remember: Review quarterly notes"
        assert generated.subtext is None

    def test_meeting_reminder_best_time(self):
        """Meeting reminders suggest the window start."""
        window = TimeWindow(
            start=NOW.replace(hour=14, minute=30), end=NOW.replace(hour=15, minute=0)
        )
        item = make_candidate(content="Prep for meeting with Sam", optimal_window=window)
        generated = generate_message(item, NOW)

        assert generated.message == "Reminder: Prep for meeting with Sam"
        assert generated.subtext == "Best time: 14:30"

    def test_connection_with_topic(self):
        """Connections name the first topic."""
        item = make_candidate(type="connection", content="Old pricing memo", topics=["pricing"])
        generated = generate_message(item, NOW)

        assert generated.message == "This relates to pricing: Old pricing memo"
        assert generated.subtext == "Might be useful now"

    def test_pattern(self):
        """Patterns use the content as-is."""
        item = make_candidate(type="pattern", content="You usually review email now")
        generated = generate_message(item, NOW)

        assert generated.message == "You usually review email now"
        assert generated.subtext == "Based on your patterns"


class TestTransform:
    """Tests for wrapping candidates."""

    def test_transform_to_bubble(self):
        """New surfaceable items start pending and keep their candidate."""
        candidate = make_candidate(priority=70)
        item = transform_to_bubble(candidate, 52, NOW)

        assert item.id == "bubble-item-1"
        assert item.candidate_id == "item-1"
        assert item.confidence_score == 52
        assert item.base_priority == 70
        assert item.category == ItemCategory.REMINDER
        assert item.state == ItemState.PENDING
        assert item.surfaced_at is None
        assert item.candidate is candidate

    def test_transform_batch_keeps_order(self):
        """Batches are transformed in input order."""
        pairs = [(make_candidate(id=f"c{i}"), 40 + i) for i in range(3)]
        items = transform_batch(pairs, NOW)

        assert [i.candidate_id for i in items] == ["c0", "c1", "c2"]
        assert [i.confidence_score for i in items] == [40, 41, 42]

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("deadline", ItemCategory.DEADLINE),
            (ItemType.PATTERN, ItemCategory.PATTERN),
            ("newsletter", ItemCategory.GENERAL),
            ("meeting_reminder", ItemCategory.GENERAL),
        ],
    )
    def test_map_to_category(self, value, expected):
        """Item types map one-to-one; anything else is general."""
        assert map_to_category(value) == expected


class TestTruncate:
    """Tests for message truncation."""

    def test_short_unchanged(self):
        """Messages within the limit are untouched."""
        assert truncate_message("hello") == "hello"
        assert truncate_message("x" * 100) == "x" * 100

    def test_long_message(self):
        """Long messages end in an ellipsis within the limit."""
        result = truncate_message("x" * 150)

        assert len(result) == 100
        assert result.endswith("...")

    def test_custom_limit(self):
        """The limit is configurable."""
        assert truncate_message("abcdefghij", 8) == "abcde..."
