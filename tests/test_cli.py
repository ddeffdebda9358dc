"""
Tests for the gearratio command line.
"""

import json
import subprocess
import sys

import pytest

from gearratio.cli.main import build_parser, main


class TestParser:
    """Tests for argument parsing."""

    def test_edit_and_lock_keep_order(self):
        args = build_parser().parse_args(
            ["solve", "--edit", "left=20", "--lock", "LEFT", "--edit", "ratio=2"]
        )
        assert args.steps == [
            {"edit": "left", "value": 20.0},
            {"lock": "left"},
            {"edit": "ratio", "value": 2.0},
        ]

    @pytest.mark.parametrize("bad", ["left", "middle=3", "left=abc"])
    def test_bad_edit_rejected(self, bad):
        with pytest.raises(SystemExit) as exc:
            build_parser().parse_args(["solve", "--edit", bad])
        assert exc.value.code == 2

    def test_locked_normalized(self):
        args = build_parser().parse_args(["gui", "--locked", "Right"])
        assert args.locked == "right"


class TestSolve:
    """Tests for `gearratio solve`."""

    def test_default_summary(self, capsys):
        assert main(["solve", "--edit", "left=20"]) == 0

        out = capsys.readouterr().out
        assert "Right teeth:   30" in out
        assert "recomputed: right" in out

    def test_json_output(self, capsys):
        assert main(["solve", "--lock", "left", "--edit", "ratio=2", "--format", "json"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["state"]["right_teeth"] == 20
        assert data["recomputed"] == ["right"]
        assert data["valid"] is True

    def test_markdown_output(self, capsys):
        assert main(["solve", "--format", "markdown"]) == 0
        assert "# Gear Pair" in capsys.readouterr().out

    def test_editing_locked_slot_fails(self, capsys):
        assert main(["solve", "--edit", "ratio=2"]) == 1
        assert capsys.readouterr().err.startswith("Error:")

    def test_invalid_state_exits_nonzero(self, capsys):
        assert main(["solve", "--ratio", "150"]) == 1
        assert "[error] Given ratio 150 is outside" in capsys.readouterr().out

    def test_zero_teeth_rejected(self, capsys):
        assert main(["solve", "--left", "0"]) == 1
        assert "Error:" in capsys.readouterr().err


class TestGui:
    """Tests for `gearratio gui` argument checks (no window is opened)."""

    @pytest.mark.parametrize("ratio", ["200", "0.05"])
    def test_ratio_outside_field_range(self, capsys, ratio):
        assert main(["gui", "--ratio", ratio]) == 1
        assert "outside 0.1..100" in capsys.readouterr().err

    def test_zero_teeth(self, capsys):
        assert main(["gui", "--right", "0"]) == 1
        assert "right_teeth must be at least 1" in capsys.readouterr().err


class TestModuleEntry:
    """Tests for running the CLI module directly."""

    def test_help(self):
        result = subprocess.run(
            [sys.executable, "-m", "gearratio.cli.main", "--help"],
            capture_output=True,
            text=True,
        )
        assert result.returncode == 0
        assert "gearratio solve --edit left=20" in result.stdout
