"""
Interrupt Budget Manager.

Limits how many proactive interruptions reach the user per day and per hour.
Resets are lazy: every read path first applies any reset that is due, so the
caller never has to run a timer for correctness.

Every function returns a new InterruptBudget; inputs are never mutated.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timedelta

from ..core.constants import DEFAULT_BUDGET, FOCUS_MODES
from ..core.logging import get_logger
from ..models import (
    BudgetDecision,
    BudgetDefaults,
    BudgetReason,
    BudgetUtilization,
    DailyBudget,
    EmergencyConfig,
    FocusModeName,
    HourlyBudget,
    InterruptBudget,
    SurfaceableItem,
)
from ..scoring.calculator import round_half_up

logger = get_logger(__name__)

HOUR = timedelta(hours=1)


def create_interrupt_budget(
    daily_total: int | None = None,
    now: datetime | None = None,
    defaults: BudgetDefaults = DEFAULT_BUDGET,
) -> InterruptBudget:
    """
    Create a fresh budget.

    Args:
        daily_total: Requested daily allowance, clamped to [min_daily, max_daily]
        now: Reset timestamp (defaults to current time)
        defaults: Budget limits

    Returns:
        New InterruptBudget with nothing used
    """
    now = now or datetime.now()
    total = defaults.clamp_daily(defaults.default_daily if daily_total is None else daily_total)

    return InterruptBudget(
        daily=DailyBudget(
            total=total,
            used=0,
            remaining=total,
            last_reset=now,
            reset_hour=defaults.reset_hour,
        ),
        hourly=HourlyBudget(
            available=defaults.hourly_available,
            focused=defaults.hourly_focused,
            current=0,
            window_start=now,
        ),
        emergency=EmergencyConfig(enabled=True, threshold=defaults.emergency_threshold),
    )


# =============================================================================
# Resets
# =============================================================================


def _budget_day(moment: datetime, reset_hour: int) -> date:
    """Calendar day a moment belongs to when days roll over at reset_hour."""
    return (moment - timedelta(hours=reset_hour)).date()


def should_reset_daily(budget: InterruptBudget, now: datetime | None = None) -> bool:
    """True when now falls on a different budget day than the last reset."""
    now = now or datetime.now()
    reset_hour = budget.daily.reset_hour
    return _budget_day(now, reset_hour) != _budget_day(budget.daily.last_reset, reset_hour)


def should_reset_hourly(budget: InterruptBudget, now: datetime | None = None) -> bool:
    """True once a full hour has passed since the window opened."""
    now = now or datetime.now()
    return now - budget.hourly.window_start >= HOUR


def reset_daily_budget(budget: InterruptBudget, now: datetime | None = None) -> InterruptBudget:
    now = now or datetime.now()
    daily = replace(budget.daily, used=0, remaining=budget.daily.total, last_reset=now)
    return replace(budget, daily=daily)


def reset_hourly_budget(budget: InterruptBudget, now: datetime | None = None) -> InterruptBudget:
    now = now or datetime.now()
    return replace(budget, hourly=replace(budget.hourly, current=0, window_start=now))


def apply_resets(budget: InterruptBudget, now: datetime | None = None) -> InterruptBudget:
    """
    Apply any due daily/hourly reset.

    Args:
        budget: Current budget
        now: Evaluation time (defaults to current time)

    Returns:
        Budget with due resets applied (same object if none were due)
    """
    now = now or datetime.now()
    result = budget

    if should_reset_daily(budget, now):
        logger.debug("Daily budget reset (%d used)", budget.daily.used)
        result = reset_daily_budget(result, now)

    if should_reset_hourly(budget, now):
        result = reset_hourly_budget(result, now)

    return result


# =============================================================================
# Authorization
# =============================================================================


def get_hourly_limit(budget: InterruptBudget, focus_mode: FocusModeName) -> int:
    """Hourly cap for a focus mode."""
    if focus_mode == FocusModeName.AVAILABLE:
        return budget.hourly.available
    if focus_mode == FocusModeName.FOCUSED:
        return budget.hourly.focused
    mode = FOCUS_MODES.get(focus_mode)
    return mode.hourly_limit if mode is not None else budget.hourly.available


def calculate_cost(score: int, emergency: EmergencyConfig | None = None) -> int:
    """Emergency-level scores are free; everything else costs one."""
    emergency = emergency or EmergencyConfig(threshold=DEFAULT_BUDGET.emergency_threshold)
    if emergency.enabled and score >= emergency.threshold:
        return 0
    return 1


def can_consume_budget(
    budget: InterruptBudget,
    item: SurfaceableItem,
    focus_mode: FocusModeName,
    now: datetime | None = None,
) -> BudgetDecision:
    """
    Decide whether surfacing an item fits the budget.

    Checked in order: emergency bypass (not in dnd), dnd block, daily
    allowance, hourly cap for the focus mode.

    Args:
        budget: Current budget (resets applied internally)
        item: Item about to surface
        focus_mode: Active focus mode
        now: Evaluation time

    Returns:
        BudgetDecision with the cost and a typed reason
    """
    current = apply_resets(budget, now)
    score = item.confidence_score

    if (
        focus_mode != FocusModeName.DND
        and current.emergency.enabled
        and score >= current.emergency.threshold
    ):
        return BudgetDecision(allowed=True, cost=0, reason=BudgetReason.EMERGENCY_BYPASS)

    if focus_mode == FocusModeName.DND:
        return BudgetDecision(allowed=False, cost=0, reason=BudgetReason.DND_MODE)

    cost = calculate_cost(score, current.emergency)

    if current.daily.remaining < cost:
        return BudgetDecision(allowed=False, cost=cost, reason=BudgetReason.DAILY_BUDGET_EXHAUSTED)

    if current.hourly.current + cost > get_hourly_limit(current, focus_mode):
        return BudgetDecision(allowed=False, cost=cost, reason=BudgetReason.HOURLY_LIMIT_REACHED)

    return BudgetDecision(allowed=True, cost=cost, reason=BudgetReason.WITHIN_BUDGET)


def consume_budget(
    budget: InterruptBudget,
    item: SurfaceableItem,
    focus_mode: FocusModeName,
    now: datetime | None = None,
) -> InterruptBudget:
    """
    Debit the budget for an item when authorized.

    Denied or free items only get resets applied.
    """
    now = now or datetime.now()
    decision = can_consume_budget(budget, item, focus_mode, now)
    current = apply_resets(budget, now)

    if not decision.allowed or decision.cost == 0:
        return current

    daily = replace(
        current.daily,
        used=current.daily.used + decision.cost,
        remaining=max(0, current.daily.remaining - decision.cost),
    )
    hourly = replace(current.hourly, current=current.hourly.current + decision.cost)
    return replace(current, daily=daily, hourly=hourly)


# =============================================================================
# Settings
# =============================================================================


def set_daily_total(
    budget: InterruptBudget, total: int, defaults: BudgetDefaults = DEFAULT_BUDGET
) -> InterruptBudget:
    """Change the daily allowance, keeping what was already used."""
    clamped = defaults.clamp_daily(total)
    daily = replace(
        budget.daily,
        total=clamped,
        remaining=max(0, clamped - budget.daily.used),
    )
    return replace(budget, daily=daily)


def set_emergency_bypass(budget: InterruptBudget, enabled: bool) -> InterruptBudget:
    return replace(budget, emergency=replace(budget.emergency, enabled=enabled))


# =============================================================================
# Reporting
# =============================================================================


def get_budget_utilization(
    budget: InterruptBudget, now: datetime | None = None
) -> BudgetUtilization:
    """Daily and hourly usage as whole percentages."""
    current = apply_resets(budget, now)

    daily_pct = current.daily.used / current.daily.total * 100 if current.daily.total > 0 else 0
    hourly_limit = current.hourly.available
    hourly_pct = current.hourly.current / hourly_limit * 100 if hourly_limit > 0 else 0

    return BudgetUtilization(daily=round_half_up(daily_pct), hourly=round_half_up(hourly_pct))


def format_budget_status(budget: InterruptBudget, now: datetime | None = None) -> str:
    """One-line status, e.g. ``Daily: 3/15 (20%) | Hourly: 1/5``."""
    current = apply_resets(budget, now)
    utilization = get_budget_utilization(current, now)
    return (
        f"Daily: {current.daily.used}/{current.daily.total} ({utilization.daily}%) | "
        f"Hourly: {current.hourly.current}/{current.hourly.available}"
    )
