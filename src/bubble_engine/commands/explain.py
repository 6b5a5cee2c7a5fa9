"""
Bubble Engine Explain Command

Shows why an item scores the way it does: factor values, weights, category
weight and the resulting visual state and message.
"""

from __future__ import annotations

import argparse
from typing import Any

from ..core import get_utc_timestamp
from ..engine import EngineConfig, EngineConfigError, load_engine_config
from ..generation import generate_message
from ..models import UserState
from ..scoring import calculate_confidence_breakdown, format_confidence_breakdown, get_visual_state
from .common import error_result, load_items_file, resolve_now


def cmd_explain(args: argparse.Namespace) -> dict[str, Any]:
    """
    Explain the confidence score of one item.

    Args:
        args: Parsed arguments (items_file, item_id, --config, --now, --text)

    Returns:
        Breakdown dict, or empty dict when --text printed a report
    """
    try:
        now = resolve_now(getattr(args, "now", None))
        config = (
            load_engine_config(args.config) if getattr(args, "config", None) else EngineConfig()
        )
        loaded = load_items_file(args.items_file, now)
    except FileNotFoundError as e:
        return error_result("file_not_found", str(e))
    except (EngineConfigError, ValueError) as e:
        return error_result("invalid_input", str(e))

    candidate = next((item for item in loaded.items if item.id == args.item_id), None)
    if candidate is None:
        return error_result(
            "item_not_found",
            f"No valid item with id '{args.item_id}'",
            available=[item.id for item in loaded.items],
        )

    breakdown = calculate_confidence_breakdown(
        candidate,
        loaded.context,
        [],
        UserState(),
        config.weights,
        config.weight_bounds,
    )

    if getattr(args, "text", False):
        print(format_confidence_breakdown(breakdown))
        return {}

    generated = generate_message(candidate, loaded.context.current_time)
    return {
        "query_timestamp": get_utc_timestamp(),
        "item_id": candidate.id,
        "breakdown": breakdown.to_dict(),
        "visual_state": get_visual_state(breakdown.final_score, config.thresholds).value,
        "message": generated.message,
        "subtext": generated.subtext,
        "rule": generated.rule,
    }


def register_parsers(subparsers: argparse._SubParsersAction) -> None:
    """Register explain command parser."""
    parser = subparsers.add_parser(
        "explain",
        help="Show the confidence breakdown of one item",
    )
    parser.add_argument("items_file", help="YAML/JSON file with context and items")
    parser.add_argument("item_id", help="Candidate item id")
    parser.add_argument("--config", help="Engine config YAML file")
    parser.add_argument("--now", help="Evaluation time (ISO 8601)")
    parser.add_argument(
        "--text",
        action="store_true",
        help="Print a human-readable report instead of JSON",
    )
    parser.set_defaults(func=cmd_explain)
