"""``python -m runsummary`` dispatches to the CLI."""

from __future__ import annotations

import runpy
from pathlib import Path
from unittest.mock import patch

import pytest


def _run_module(*args: str) -> None:
    with patch("sys.argv", ["runsummary", *args]):
        runpy.run_module("runsummary", run_name="__main__")


def test_module_inspect_prints_plan_tree(data_dir: Path, capsys) -> None:
    _run_module("inspect", str(data_dir / "run_passing.yaml"))

    out = capsys.readouterr().out
    assert "1. TEST PLAN" in out
    assert "   + SmokeTests" in out
    assert "     - test_ping" in out
    assert "   Total: 4 events" in out


def test_module_without_arguments_prints_help(capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        _run_module()
    assert exc_info.value.code == 0
    assert "{report,inspect}" in capsys.readouterr().out


def test_module_report_exit_status_reflects_failures(data_dir: Path) -> None:
    with pytest.raises(SystemExit) as exc_info:
        _run_module("--quiet", "report", str(data_dir / "run_mixed.yaml"))
    assert exc_info.value.code == 1
