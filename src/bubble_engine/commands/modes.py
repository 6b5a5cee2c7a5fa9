"""
Bubble Engine Focus Mode Commands

- modes: List focus modes with their limits
- defer-time: Resolve a defer option to a concrete time
"""

from __future__ import annotations

import argparse
from typing import Any

from ..budget.focus_mode import (
    get_all_focus_modes,
    get_focus_mode_description,
    get_focus_mode_display_name,
    get_next_focus_mode,
)
from ..core import format_datetime, get_utc_timestamp, parse_datetime
from ..feedback import calculate_defer_date
from ..models import DeferPreset
from .common import error_result, resolve_now

# =============================================================================
# Modes Command
# =============================================================================


def cmd_modes(args: argparse.Namespace) -> dict[str, Any]:
    """List focus modes."""
    modes = []
    for mode in get_all_focus_modes():
        entry = mode.to_dict()
        entry["display_name"] = get_focus_mode_display_name(mode.name)
        entry["description"] = get_focus_mode_description(mode.name)
        entry["next"] = get_next_focus_mode(mode.name).value
        modes.append(entry)

    return {
        "query_timestamp": get_utc_timestamp(),
        "modes": modes,
    }


# =============================================================================
# Defer Time Command
# =============================================================================


def cmd_defer_time(args: argparse.Namespace) -> dict[str, Any]:
    """
    Resolve a defer option.

    Accepts tonight, tomorrow, monday or an ISO timestamp. Anything else
    resolves to 24 hours from now.
    """
    try:
        now = resolve_now(getattr(args, "now", None))
    except ValueError as e:
        return error_result("invalid_input", str(e))

    option: Any = args.option
    explicit = parse_datetime(args.option)
    if explicit is not None:
        option = explicit

    resolved = calculate_defer_date(option, now)
    preset = args.option.lower() in {p.value for p in DeferPreset}

    return {
        "query_timestamp": get_utc_timestamp(),
        "option": args.option,
        "kind": "preset" if preset else "explicit" if explicit else "default",
        "defer_until": format_datetime(resolved),
    }


def register_parsers(subparsers: argparse._SubParsersAction) -> None:
    """Register focus mode command parsers."""
    modes_parser = subparsers.add_parser("modes", help="List focus modes")
    modes_parser.set_defaults(func=cmd_modes)

    defer_parser = subparsers.add_parser(
        "defer-time",
        help="Resolve tonight/tomorrow/monday or a timestamp to a defer time",
    )
    defer_parser.add_argument("option", help="tonight, tomorrow, monday or ISO timestamp")
    defer_parser.add_argument("--now", help="Reference time (ISO 8601)")
    defer_parser.set_defaults(func=cmd_defer_time)
