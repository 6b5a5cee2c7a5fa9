"""
Bubble Engine Constants.

Default tunables, time-sensitivity buckets, feedback deltas and the built-in
focus mode registry.
"""

from __future__ import annotations

from ..models.budget import FocusModeConfig
from ..models.config_types import BudgetDefaults, ConfidenceWeights, ScoreThresholds, WeightBounds
from ..models.types import Feedback, FocusModeName, VisualState

# =============================================================================
# Defaults
# =============================================================================

DEFAULT_WEIGHTS = ConfidenceWeights()
DEFAULT_THRESHOLDS = ScoreThresholds()
DEFAULT_BUDGET = BudgetDefaults()
DEFAULT_WEIGHT_BOUNDS = WeightBounds()

# =============================================================================
# Time Sensitivity
# =============================================================================

# Deadline buckets in hours until the deadline, checked in order
CRITICAL_HOURS = 2
TODAY_HOURS = 24
SOON_HOURS = 72
THIS_WEEK_HOURS = 168

DEADLINE_SCORES: list[tuple[float, int]] = [
    (CRITICAL_HOURS, 100),
    (TODAY_HOURS, 80),
    (SOON_HOURS, 60),
    (THIS_WEEK_HOURS, 40),
]
DISTANT_DEADLINE_SCORE = 20

OPTIMAL_WINDOW_SCORE = 85
NEUTRAL_TIME_SCORE = 30

# Aged items without a deadline drift upward
DECAY_AFTER_DAYS = 3
DECAY_BASE_SCORE = 40
DECAY_POINTS_PER_DAY = 5
DECAY_MAX_SCORE = 70

# =============================================================================
# Context Relevance
# =============================================================================

PROJECT_MATCH_POINTS = 40
TOPIC_MATCH_POINTS = 30
ENTITY_MATCH_POINTS = 20
TASK_MATCH_POINTS = 10

# =============================================================================
# Historical Engagement
# =============================================================================

NEUTRAL_ENGAGEMENT_SCORE = 50
HISTORY_LIMIT = 100

# =============================================================================
# Feedback
# =============================================================================

WEIGHT_ADJUSTMENTS: dict[Feedback, float] = {
    Feedback.HELPFUL: 0.10,
    Feedback.LESS_LIKE_THIS: -0.15,
    Feedback.WRONG_TIME: -0.05,
    Feedback.NOT_RELEVANT: -0.10,
}
ENGAGEMENT_ADJUSTMENT = 0.05

# =============================================================================
# Deferral
# =============================================================================

TONIGHT_HOUR = 20
MORNING_HOUR = 9
DEFAULT_DEFER_HOURS = 24

# =============================================================================
# Focus Modes
# =============================================================================

FOCUS_MODES: dict[FocusModeName, FocusModeConfig] = {
    FocusModeName.AVAILABLE: FocusModeConfig(
        name=FocusModeName.AVAILABLE,
        allowed_states=frozenset(
            {VisualState.PASSIVE, VisualState.READY, VisualState.ACTIVE, VisualState.PRIORITY}
        ),
        hourly_limit=DEFAULT_BUDGET.hourly_available,
        passive_indicators=True,
        sound_enabled=True,
        haptic_enabled=True,
    ),
    FocusModeName.FOCUSED: FocusModeConfig(
        name=FocusModeName.FOCUSED,
        allowed_states=frozenset({VisualState.PASSIVE, VisualState.READY}),
        hourly_limit=DEFAULT_BUDGET.hourly_focused,
        passive_indicators=True,
        sound_enabled=False,
        haptic_enabled=False,
    ),
    FocusModeName.DND: FocusModeConfig(
        name=FocusModeName.DND,
        allowed_states=frozenset(),
        hourly_limit=0,
        passive_indicators=False,
        sound_enabled=False,
        haptic_enabled=False,
        queue_all=True,
    ),
}

FOCUS_MODE_DESCRIPTIONS: dict[FocusModeName, str] = {
    FocusModeName.AVAILABLE: "All bubbles can surface based on confidence scores",
    FocusModeName.FOCUSED: "Only passive indicators, no active interruptions",
    FocusModeName.DND: "All bubbles queued for later review",
}

FOCUS_MODE_DISPLAY_NAMES: dict[FocusModeName, str] = {
    FocusModeName.AVAILABLE: "Available",
    FocusModeName.FOCUSED: "Focused",
    FocusModeName.DND: "Do Not Disturb",
}
