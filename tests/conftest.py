"""
Bubble Engine Test Suite - Shared Fixtures and Factories
"""

from __future__ import annotations

import random
from datetime import datetime, timedelta
from typing import Any

import pytest

from bubble_engine.core.config import reset_settings
from bubble_engine.core.logging import reset_logging
from bubble_engine.engine import BubbleEngine, EngineEvent
from bubble_engine.models import (
    CandidateItem,
    ItemCategory,
    ItemState,
    SurfaceableItem,
    UserContext,
    UserState,
)

# Wednesday
NOW = datetime(2026, 3, 4, 10, 0, 0)


# =============================================================================
# Factories
# =============================================================================


def make_candidate(**overrides: Any) -> CandidateItem:
    """
    Build a CandidateItem with sensible defaults.

    Defaults score 33 under an empty context (reminder, priority 50, no
    deadline, neutral history).
    """
    data: dict[str, Any] = {
        "id": "item-1",
        "type": "reminder",
        "content": "Review quarterly notes",
        "source": "notes",
        "priority": 50,
    }
    data.update(overrides)
    return CandidateItem.model_validate(data)


def make_surfaceable(score: int, **overrides: Any) -> SurfaceableItem:
    """Build a SurfaceableItem with a given confidence score."""
    data: dict[str, Any] = {
        "id": "bubble-item-1",
        "candidate_id": "item-1",
        "message": "Remember: Review quarterly notes",
        "confidence_score": score,
        "base_priority": 50.0,
        "category": ItemCategory.REMINDER,
        "state": ItemState.PENDING,
    }
    data.update(overrides)
    return SurfaceableItem(**data)


def make_user_state(**overrides: Any) -> UserState:
    """Build a UserState, accepting any UserState field."""
    return UserState.model_validate(overrides)


def make_focus_context(now: datetime = NOW) -> UserContext:
    """Context matching every field of make_matching_candidate()."""
    return UserContext(
        active_project="launch",
        recent_topics=["Pricing"],
        recent_entities=["dana"],
        active_task="send-quote",
        current_time=now,
    )


def make_matching_candidate(**overrides: Any) -> CandidateItem:
    """Candidate that overlaps make_focus_context() on every axis."""
    data: dict[str, Any] = {
        "id": "quote",
        "type": "deadline",
        "content": "Send the quote",
        "source": "email",
        "priority": 100,
        "deadline": NOW + timedelta(hours=1),
        "project": "launch",
        "topics": ["pricing"],
        "entities": ["Dana"],
        "related_tasks": ["send-quote"],
    }
    data.update(overrides)
    return CandidateItem.model_validate(data)


class FixedClock:
    """Manually advanced clock for engine tests."""

    def __init__(self, now: datetime = NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def engine(clock: FixedClock) -> BubbleEngine:
    """Engine with default config, available mode and a fixed clock."""
    return BubbleEngine(clock=clock)


@pytest.fixture
def events(engine: BubbleEngine) -> list[EngineEvent]:
    """Every event the engine fixture emits, in order."""
    captured: list[EngineEvent] = []
    engine.subscribe(captured.append)
    return captured


@pytest.fixture
def seeded_rng() -> random.Random:
    """
    Return a seeded Random instance for deterministic randomness in tests.

    Use this when you need reproducible random values without touching
    global state.
    """
    return random.Random(42)


@pytest.fixture(autouse=True)
def reset_all_singletons():
    """
    Reset module-level singletons between tests.

    Settings cache first (logging reads from settings), then logging so
    caplog can capture engine output.
    """
    reset_settings()
    reset_logging()
    yield
    reset_settings()
    reset_logging()
