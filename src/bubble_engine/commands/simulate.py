"""
Bubble Engine Simulate Command

Runs every item in an items file through a fresh engine and reports what
surfaced, what was held back, the emitted events and the remaining budget.
"""

from __future__ import annotations

import argparse
from typing import Any

from ..budget.interrupt_budget import format_budget_status
from ..core import get_utc_timestamp
from ..engine import EngineConfigError, EngineEvent, create_bubble_engine, load_engine_config
from .common import error_result, load_items_file, resolve_now


def cmd_simulate(args: argparse.Namespace) -> dict[str, Any]:
    """
    Simulate surfacing for an items file.

    Args:
        args: Parsed arguments (items_file, --focus-mode, --daily-budget,
              --config, --now)

    Returns:
        Per-item outcome, events and budget status
    """
    try:
        now = resolve_now(getattr(args, "now", None))
        config = load_engine_config(args.config) if getattr(args, "config", None) else None
        loaded = load_items_file(args.items_file, now)
        fixed_now = loaded.context.current_time
        engine = create_bubble_engine(
            config=config,
            focus_mode=getattr(args, "focus_mode", None),
            context=loaded.context,
            clock=lambda: fixed_now,
        )
    except FileNotFoundError as e:
        return error_result("file_not_found", str(e))
    except (EngineConfigError, ValueError) as e:
        return error_result("invalid_input", str(e))

    if getattr(args, "daily_budget", None) is not None:
        engine.set_daily_budget(args.daily_budget)

    events: list[EngineEvent] = []
    engine.subscribe(events.append)
    engine.ingest_batch(loaded.items)

    items = []
    for item in engine.get_items():
        entry = item.to_dict()
        visual = engine.get_item_visual_state(item.id)
        entry["visual_state"] = visual.value if visual else None
        items.append(entry)

    surfaced = [item["id"] for item in items if item["state"] == "surfaced"]

    return {
        "query_timestamp": get_utc_timestamp(),
        "focus_mode": engine.get_focus_mode().name.value,
        "item_count": len(items),
        "surfaced_count": len(surfaced),
        "surfaced": surfaced,
        "queued": [item.id for item in engine.get_queued_items()],
        "items": items,
        "events": [event.to_dict() for event in events],
        "budget": engine.get_budget_status(),
        "budget_status": format_budget_status(engine.budget, fixed_now),
        "skipped": loaded.skipped,
    }


def register_parsers(subparsers: argparse._SubParsersAction) -> None:
    """Register simulate command parser."""
    parser = subparsers.add_parser(
        "simulate",
        help="Run an items file through the engine",
    )
    parser.add_argument("items_file", help="YAML/JSON file with context and items")
    parser.add_argument(
        "--focus-mode",
        dest="focus_mode",
        choices=["available", "focused", "dnd"],
        help="Focus mode to simulate (default: BUBBLE_FOCUS_MODE)",
    )
    parser.add_argument(
        "--daily-budget",
        dest="daily_budget",
        type=int,
        help="Daily interrupt budget (clamped to 10-30)",
    )
    parser.add_argument("--config", help="Engine config YAML file")
    parser.add_argument("--now", help="Evaluation time (ISO 8601)")
    parser.set_defaults(func=cmd_simulate)
