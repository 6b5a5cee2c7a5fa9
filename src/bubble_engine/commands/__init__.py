"""
Bubble Engine CLI Commands

Each module exposes cmd_* handlers and a register_parsers(subparsers) hook.
"""
