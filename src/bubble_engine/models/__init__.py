"""
Bubble Engine Domain Models

Enums, input/persisted pydantic models and engine-owned dataclasses.
"""

from .budget import (
    BudgetDecision,
    BudgetUtilization,
    DailyBudget,
    EmergencyConfig,
    FocusModeConfig,
    HourlyBudget,
    InterruptBudget,
)
from .config_types import BudgetDefaults, ConfidenceWeights, ScoreThresholds, WeightBounds
from .context import UserContext
from .items import CandidateItem, ItemAction, SurfaceableItem, TimeWindow
from .state import (
    BudgetSnapshot,
    DailySnapshot,
    DeferredItem,
    HistoryEntry,
    HourlySnapshot,
    Preferences,
    UserState,
)
from .types import (
    VISUAL_STATE_ORDER,
    BudgetReason,
    DeferPreset,
    Feedback,
    FocusModeName,
    HistoryAction,
    ItemCategory,
    ItemState,
    ItemType,
    VisualState,
)

__all__ = [
    # Types
    "VISUAL_STATE_ORDER",
    "BudgetReason",
    "DeferPreset",
    "Feedback",
    "FocusModeName",
    "HistoryAction",
    "ItemCategory",
    "ItemState",
    "ItemType",
    "VisualState",
    # Items
    "CandidateItem",
    "ItemAction",
    "SurfaceableItem",
    "TimeWindow",
    "UserContext",
    # State
    "BudgetSnapshot",
    "DailySnapshot",
    "DeferredItem",
    "HistoryEntry",
    "HourlySnapshot",
    "Preferences",
    "UserState",
    # Budget
    "BudgetDecision",
    "BudgetUtilization",
    "DailyBudget",
    "EmergencyConfig",
    "FocusModeConfig",
    "HourlyBudget",
    "InterruptBudget",
    # Tunables
    "BudgetDefaults",
    "ConfidenceWeights",
    "ScoreThresholds",
    "WeightBounds",
]
