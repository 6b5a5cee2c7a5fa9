"""
Message Rules.

Ordered rule lists per item type. The first rule whose predicate matches
produces the message; the last rule of every list matches anything.

Rule Registry:
| Type       | Rules (in order)                                         |
|------------|----------------------------------------------------------|
| deadline   | overdue, critical, today, soon, later, undated           |
| commitment | with_person, generic                                     |
| reminder   | meeting, generic                                         |
| connection | with_topic, with_entity, generic                         |
| pattern    | generic                                                  |
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from ..core.formatters import hours_between
from ..models import CandidateItem, ItemAction, ItemType
from ..scoring.calculator import round_half_up

Predicate = Callable[[CandidateItem, datetime], bool]
Render = Callable[[CandidateItem, datetime], "str | None"]


def _always(item: CandidateItem, now: datetime) -> bool:
    return True


def _nothing(item: CandidateItem, now: datetime) -> None:
    return None


@dataclass(frozen=True)
class MessageRule:
    """One message template and the condition under which it applies."""

    name: str
    matches: Predicate
    message: Render
    subtext: Render = _nothing
    action: ItemAction | None = None


# =============================================================================
# Time Helpers
# =============================================================================


def hours_until_deadline(item: CandidateItem, now: datetime) -> float | None:
    if item.deadline is None:
        return None
    return hours_between(now, item.deadline)


def format_relative_time(when: datetime, now: datetime | None = None) -> str:
    """
    Human phrase for the distance to a moment.

    Past: "overdue", "N hours overdue", "N days overdue".
    Future: "N minutes", "N hours", "tomorrow", "N days", "N weeks".
    """
    now = now or datetime.now()
    hours = hours_between(now, when)

    if hours < 0:
        overdue = abs(hours)
        if overdue < 1:
            return "overdue"
        if overdue < 24:
            return f"{round_half_up(overdue)} hours overdue"
        return f"{round_half_up(overdue / 24)} days overdue"

    if hours < 1:
        return f"{round_half_up(hours * 60)} minutes"
    if hours < 24:
        return f"{round_half_up(hours)} hours"
    if hours < 48:
        return "tomorrow"
    if hours < 168:
        return f"{round_half_up(hours / 24)} days"
    return f"{round_half_up(hours / 168)} weeks"


def _deadline_between(low: float | None, high: float | None) -> Predicate:
    """Predicate for low <= hours-until-deadline < high (open bounds as None)."""

    def check(item: CandidateItem, now: datetime) -> bool:
        hours = hours_until_deadline(item, now)
        if hours is None:
            return False
        if low is not None and hours < low:
            return False
        return high is None or hours < high

    return check


# =============================================================================
# Deadline
# =============================================================================


def _overdue_message(item: CandidateItem, now: datetime) -> str:
    hours = abs(hours_until_deadline(item, now) or 0)
    if hours < 24:
        return f'"{item.content}" is now overdue'
    return f'"{item.content}" was due {format_relative_time(item.deadline, now)}'


def _critical_message(item: CandidateItem, now: datetime) -> str:
    minutes = round_half_up((hours_until_deadline(item, now) or 0) * 60)
    return f'"{item.content}" due in {minutes} minutes'


def _today_message(item: CandidateItem, now: datetime) -> str:
    hours = round_half_up(hours_until_deadline(item, now) or 0)
    return f'"{item.content}" due in {hours} hours'


DEADLINE_RULES: list[MessageRule] = [
    MessageRule(
        name="overdue",
        matches=_deadline_between(None, 0),
        message=_overdue_message,
        subtext=lambda item, now: "Would you like to reschedule or mark complete?",
        action=ItemAction("Handle Now"),
    ),
    MessageRule(
        name="critical",
        matches=_deadline_between(0, 2),
        message=_critical_message,
        subtext=lambda item, now: f"Project: {item.project}" if item.project else None,
        action=ItemAction("Focus Now"),
    ),
    MessageRule(
        name="today",
        matches=_deadline_between(2, 24),
        message=_today_message,
        subtext=lambda item, now: f"Part of {item.project}" if item.project else "Due today",
    ),
    MessageRule(
        name="soon",
        matches=_deadline_between(24, 72),
        message=lambda item, now: (
            f'Heads up: "{item.content}" due {format_relative_time(item.deadline, now)}'
        ),
        subtext=lambda item, now: "Consider getting started",
    ),
    MessageRule(
        name="later",
        matches=_deadline_between(72, None),
        message=lambda item, now: (
            f'"{item.content}" coming up in {format_relative_time(item.deadline, now)}'
        ),
    ),
    MessageRule(
        name="undated",
        matches=_always,
        message=lambda item, now: item.content,
    ),
]

# =============================================================================
# Commitment
# =============================================================================

COMMITMENT_RULES: list[MessageRule] = [
    MessageRule(
        name="with_person",
        matches=lambda item, now: bool(item.entities),
        message=lambda item, now: (
            f"You mentioned you'd {item.content.lower()} to {item.entities[0]}"
        ),
        subtext=lambda item, now: "Ready to follow through?",
    ),
    MessageRule(
        name="generic",
        matches=_always,
        message=lambda item, now: f'You committed to: "{item.content}"',
        subtext=lambda item, now: f"From: {item.source}" if item.source else None,
    ),
]

# =============================================================================
# Reminder
# =============================================================================

REMINDER_RULES: list[MessageRule] = [
    MessageRule(
        name="meeting",
        matches=lambda item, now: "meeting" in item.content.lower(),
        message=lambda item, now: f"Reminder: {item.content}",
        subtext=lambda item, now: (
            f"Best time: {item.optimal_window.start.strftime('%H:%M')}"
            if item.optimal_window
            else None
        ),
    ),
    MessageRule(
        name="generic",
        matches=_always,
        message=lambda item, now: f"Remember: {item.content}",
    ),
]

# =============================================================================
# Connection
# =============================================================================

CONNECTION_RULES: list[MessageRule] = [
    MessageRule(
        name="with_topic",
        matches=lambda item, now: bool(item.topics),
        message=lambda item, now: f"This relates to {item.topics[0]}: {item.content}",
        subtext=lambda item, now: "Might be useful now",
    ),
    MessageRule(
        name="with_entity",
        matches=lambda item, now: bool(item.entities),
        message=lambda item, now: f"Regarding {item.entities[0]}: {item.content}",
    ),
    MessageRule(
        name="generic",
        matches=_always,
        message=lambda item, now: f"Connected: {item.content}",
    ),
]

# =============================================================================
# Pattern
# =============================================================================

PATTERN_RULES: list[MessageRule] = [
    MessageRule(
        name="generic",
        matches=_always,
        message=lambda item, now: item.content,
        subtext=lambda item, now: "Based on your patterns",
    ),
]

FALLBACK_RULES: list[MessageRule] = [
    MessageRule(name="generic", matches=_always, message=lambda item, now: item.content),
]

RULE_REGISTRY: dict[ItemType, list[MessageRule]] = {
    ItemType.DEADLINE: DEADLINE_RULES,
    ItemType.COMMITMENT: COMMITMENT_RULES,
    ItemType.REMINDER: REMINDER_RULES,
    ItemType.CONNECTION: CONNECTION_RULES,
    ItemType.PATTERN: PATTERN_RULES,
}


def get_rules_for_type(item_type: ItemType) -> list[MessageRule]:
    return RULE_REGISTRY.get(item_type, FALLBACK_RULES)


def find_matching_rule(item: CandidateItem, now: datetime) -> MessageRule:
    """First matching rule, or the catch-all at the end of the list."""
    rules = get_rules_for_type(item.type)
    for rule in rules:
        if rule.matches(item, now):
            return rule
    return rules[-1]
