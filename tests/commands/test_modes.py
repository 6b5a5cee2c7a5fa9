"""
Tests for focus mode commands and the CLI entry point.
"""

from __future__ import annotations

import argparse
import json

import pytest

from bubble_engine.__main__ import build_parser, main
from bubble_engine.commands.modes import cmd_defer_time, cmd_modes


class TestCmdModes:
    """Tests for cmd_modes."""

    def test_lists_modes(self):
        """All three modes are listed with their limits."""
        result = cmd_modes(argparse.Namespace())
        modes = {mode["name"]: mode for mode in result["modes"]}

        assert list(modes) == ["available", "focused", "dnd"]
        assert modes["available"]["hourly_limit"] == 5
        assert modes["focused"]["allowed_states"] == ["passive", "ready"]
        assert modes["dnd"]["display_name"] == "Do Not Disturb"
        assert modes["dnd"]["queue_all"] is True
        assert modes["dnd"]["next"] == "available"


class TestCmdDeferTime:
    """Tests for cmd_defer_time."""

    def _run(self, option: str, now: str = "2026-03-04T10:00:00") -> dict:
        return cmd_defer_time(argparse.Namespace(option=option, now=now))

    @pytest.mark.parametrize(
        "option,expected",
        [
            ("tonight", "2026-03-04T20:00:00"),
            ("tomorrow", "2026-03-05T09:00:00"),
            ("monday", "2026-03-09T09:00:00"),
        ],
    )
    def test_presets(self, option, expected):
        """Presets resolve relative to --now."""
        result = self._run(option)

        assert result["kind"] == "preset"
        assert result["defer_until"] == expected

    def test_explicit(self):
        """ISO timestamps are used verbatim."""
        result = self._run("2026-04-01T07:30:00")

        assert result["kind"] == "explicit"
        assert result["defer_until"] == "2026-04-01T07:30:00"

    def test_unknown_defaults_to_a_day(self):
        """Anything else is 24 hours later."""
        result = self._run("later")

        assert result["kind"] == "default"
        assert result["defer_until"] == "2026-03-05T10:00:00"

    def test_invalid_now(self):
        """An unparseable --now is reported."""
        assert self._run("tonight", now="soon")["error"] == "invalid_input"


class TestMain:
    """Tests for the CLI entry point."""

    def test_parser_has_commands(self):
        """Every command is registered."""
        parser = build_parser()
        for command in (["modes"], ["simulate", "x.yaml"], ["explain", "x.yaml", "id"]):
            assert parser.parse_args(command).command == command[0]

    def test_modes_json(self, capsys):
        """main prints JSON and exits 0."""
        assert main(["modes"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert len(data["modes"]) == 3

    def test_error_exit_code(self, tmp_path, capsys):
        """Command errors exit 1."""
        assert main(["simulate", str(tmp_path / "missing.yaml")]) == 1
        assert json.loads(capsys.readouterr().out)["error"] == "file_not_found"

    def test_no_command_shows_help(self, capsys):
        """No command prints help."""
        assert main([]) == 0
        assert "simulate" in capsys.readouterr().out
