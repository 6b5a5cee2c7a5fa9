"""
Tests for focus mode filtering.
"""

from __future__ import annotations

import pytest

from bubble_engine.budget import (
    create_custom_focus_mode,
    filter_items_for_focus_mode,
    get_all_focus_modes,
    get_effective_visual_state,
    get_focus_mode,
    get_focus_mode_description,
    get_focus_mode_display_name,
    get_next_focus_mode,
    get_queued_items,
    is_haptic_enabled,
    is_sound_enabled,
    is_state_allowed,
    is_valid_focus_mode,
    should_surface_item,
    show_passive_indicators,
)
from bubble_engine.models import FocusModeName, VisualState
from conftest import make_surfaceable

AVAILABLE = FocusModeName.AVAILABLE
FOCUSED = FocusModeName.FOCUSED
DND = FocusModeName.DND


class TestModeRegistry:
    """Tests for the built-in mode table."""

    def test_lookup_by_name(self):
        """Modes are found by enum or string."""
        assert get_focus_mode("focused").name == FOCUSED
        assert get_focus_mode(DND).queue_all is True

    def test_unknown_falls_back_to_available(self):
        """Unknown names resolve to available."""
        assert get_focus_mode("meditating").name == AVAILABLE

    def test_all_modes_in_cycle_order(self):
        """All three modes are listed."""
        assert [m.name for m in get_all_focus_modes()] == [AVAILABLE, FOCUSED, DND]

    def test_is_valid(self):
        """Only built-in names are valid."""
        assert is_valid_focus_mode("dnd")
        assert is_valid_focus_mode(FocusModeName.FOCUSED)
        assert not is_valid_focus_mode("busy")

    def test_next_mode_cycles(self):
        """available -> focused -> dnd -> available."""
        assert get_next_focus_mode(AVAILABLE) == FOCUSED
        assert get_next_focus_mode(FOCUSED) == DND
        assert get_next_focus_mode(DND) == AVAILABLE

    def test_hourly_limits(self):
        """Mode hourly caps match the budget defaults."""
        assert get_focus_mode(AVAILABLE).hourly_limit == 5
        assert get_focus_mode(FOCUSED).hourly_limit == 2
        assert get_focus_mode(DND).hourly_limit == 0

    def test_feedback_channels(self):
        """Sound and haptics only in available; indicators off in dnd."""
        assert is_sound_enabled(AVAILABLE) and is_haptic_enabled(AVAILABLE)
        assert not is_sound_enabled(FOCUSED)
        assert not is_haptic_enabled(FOCUSED)
        assert show_passive_indicators(FOCUSED)
        assert not show_passive_indicators(DND)

    def test_descriptions(self):
        """Each mode has a display name and description."""
        assert get_focus_mode_display_name(DND) == "Do Not Disturb"
        assert "queued" in get_focus_mode_description(DND)
        assert get_focus_mode_display_name("nope") == "Unknown"
        assert get_focus_mode_description("nope") == ""

    def test_to_dict_orders_states(self):
        """Allowed states serialize lowest intensity first."""
        assert get_focus_mode(FOCUSED).to_dict()["allowed_states"] == ["passive", "ready"]


class TestStateAllowed:
    """Tests for per-mode visual state permissions."""

    @pytest.mark.parametrize(
        "state,mode,allowed",
        [
            (VisualState.PRIORITY, AVAILABLE, True),
            (VisualState.PASSIVE, AVAILABLE, True),
            (VisualState.SILENT, AVAILABLE, False),
            (VisualState.READY, FOCUSED, True),
            (VisualState.ACTIVE, FOCUSED, False),
            (VisualState.PASSIVE, DND, False),
        ],
    )
    def test_is_state_allowed(self, state, mode, allowed):
        """Each mode lets through its own set of intensities."""
        assert is_state_allowed(state, mode) is allowed


class TestShouldSurface:
    """Tests for the focus filter."""

    @pytest.mark.parametrize("score", [40, 60, 80, 95])
    def test_available_allows_non_silent(self, score):
        """Available lets every non-silent item through."""
        assert should_surface_item(make_surfaceable(score), AVAILABLE)

    def test_silent_never_surfaces(self):
        """Silent items are held in every mode."""
        for mode in (AVAILABLE, FOCUSED, DND):
            assert not should_surface_item(make_surfaceable(30), mode)

    def test_focused_allows_passive_and_ready(self):
        """Focused passes passive and ready only."""
        assert should_surface_item(make_surfaceable(45), FOCUSED)
        assert should_surface_item(make_surfaceable(70), FOCUSED)
        assert not should_surface_item(make_surfaceable(85), FOCUSED)
        assert not should_surface_item(make_surfaceable(96), FOCUSED)

    def test_emergency_passes_focused(self):
        """Emergency scores break through focused mode."""
        assert should_surface_item(make_surfaceable(98), FOCUSED)

    @pytest.mark.parametrize("score", [45, 85, 98, 100])
    def test_dnd_holds_everything(self, score):
        """dnd never surfaces, emergencies included."""
        assert not should_surface_item(make_surfaceable(score), DND)

    def test_custom_emergency_threshold(self):
        """The emergency threshold is configurable."""
        assert should_surface_item(make_surfaceable(90), FOCUSED, emergency_threshold=90)

    def test_filter_items(self):
        """Filtering keeps only items the mode shows."""
        items = [make_surfaceable(s, id=f"b{s}") for s in (30, 50, 70, 90)]
        kept = filter_items_for_focus_mode(items, FOCUSED)
        assert [i.id for i in kept] == ["b50", "b70"]


class TestEffectiveVisualState:
    """Tests for downgraded rendering."""

    def test_natural_state_when_allowed(self):
        """Allowed states render as-is."""
        assert get_effective_visual_state(make_surfaceable(85), AVAILABLE) == VisualState.ACTIVE

    def test_downgrade_in_focused(self):
        """Active and priority items render as ready in focused mode."""
        assert get_effective_visual_state(make_surfaceable(85), FOCUSED) == VisualState.READY
        assert get_effective_visual_state(make_surfaceable(97), FOCUSED) == VisualState.READY

    def test_nothing_in_dnd(self):
        """dnd renders nothing."""
        assert get_effective_visual_state(make_surfaceable(85), DND) is None

    def test_silent_has_no_rendering(self):
        """Silent items have no allowed state at or below them."""
        assert get_effective_visual_state(make_surfaceable(10), AVAILABLE) is None


class TestQueuedItems:
    """Tests for items held by dnd."""

    def test_dnd_queues_non_emergency(self):
        """dnd queues everything below the emergency threshold."""
        items = [make_surfaceable(s, id=f"b{s}") for s in (30, 70, 99)]
        assert [i.id for i in get_queued_items(items, DND)] == ["b30", "b70"]

    def test_other_modes_queue_nothing(self):
        """Only queueing modes hold items."""
        items = [make_surfaceable(70)]
        assert get_queued_items(items, AVAILABLE) == []
        assert get_queued_items(items, FOCUSED) == []


class TestCustomFocusMode:
    """Tests for derived modes."""

    def test_override_fields(self):
        """Overrides replace fields of the base mode."""
        mode = create_custom_focus_mode(
            FOCUSED, hourly_limit=1, allowed_states=[VisualState.PASSIVE]
        )

        assert mode.name == FOCUSED
        assert mode.hourly_limit == 1
        assert mode.allowed_states == frozenset({VisualState.PASSIVE})

    def test_base_untouched(self):
        """The built-in mode is not modified."""
        create_custom_focus_mode(AVAILABLE, sound_enabled=False)
        assert get_focus_mode(AVAILABLE).sound_enabled is True
