#!/usr/bin/env python3
"""
Bubble Engine CLI Entry Point

Provides a command-line interface for inspecting surfacing decisions.
Run with: python -m bubble_engine <command> [args]
"""

import argparse
import json
import sys

from .core import get_utc_timestamp


def output_json(data: dict, indent: int = 2) -> None:
    """Print JSON output to stdout."""
    print(json.dumps(data, indent=indent, default=str))


def output_error(message: str, exit_code: int = 1, **kwargs) -> None:
    """Print error JSON and exit."""
    error_data = {
        "error": kwargs.pop("error_type", "error"),
        "message": message,
        "query_timestamp": get_utc_timestamp(),
    }
    error_data.update(kwargs)
    output_json(error_data)
    sys.exit(exit_code)


# =============================================================================
# Built-in Commands
# =============================================================================


def cmd_help(args: argparse.Namespace) -> dict:
    """Show help message."""
    help_text = """
═══════════════════════════════════════════════════════════════════
Bubble Engine - proactive surfacing
───────────────────────────────────────────────────────────────────

Simulation Commands:
  simulate <items.yaml> [opts]   Run items through a fresh engine
                                 --focus-mode available|focused|dnd
                                 --daily-budget N, --config <yaml>, --now <iso>
  explain <items.yaml> <id>      Confidence breakdown of one item
                                 --config <yaml>, --now <iso>, --text

Focus Mode Commands:
  modes                          List focus modes and their limits
  defer-time <option> [--now]    Resolve tonight|tomorrow|monday|<iso>

System Commands:
  help                           Show this help message

Environment:
  BUBBLE_LOG_LEVEL, BUBBLE_LOG_JSON, BUBBLE_ENGINE_CONFIG,
  BUBBLE_DAILY_BUDGET, BUBBLE_FOCUS_MODE

Examples:
  bubble-engine simulate items.yaml --focus-mode focused
  bubble-engine explain items.yaml deadline-1 --text
  bubble-engine defer-time monday --now 2026-03-04T10:00:00

═══════════════════════════════════════════════════════════════════
"""
    print(help_text)
    return {}


# =============================================================================
# Main Entry Point
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="bubble-engine",
        description="Bubble Engine - decide when to interrupt the user",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    help_parser = subparsers.add_parser("help", help="Show help message")
    help_parser.set_defaults(func=cmd_help)

    from .commands import explain, modes, simulate

    simulate.register_parsers(subparsers)
    explain.register_parsers(subparsers)
    modes.register_parsers(subparsers)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Default to help if no command
    if not args.command:
        cmd_help(args)
        return 0

    if not hasattr(args, "func"):
        output_error(
            f"Unknown command: {args.command}",
            error_type="unknown_command",
            hint="Run 'bubble-engine help' for usage",
        )

    try:
        result = args.func(args)

        if isinstance(result, dict) and result:
            output_json(result)

            if "error" in result:
                return 1

        return 0

    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130
    except Exception as e:
        output_error(str(e), error_type="command_error", command=args.command)
        return 1


if __name__ == "__main__":
    sys.exit(main())
