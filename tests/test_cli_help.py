from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

from git_fame.analysis_cli import _build_parser


def test_root_help_lists_options(tmp_path: Path) -> None:
    env = os.environ.copy()
    env["PYTHONPATH"] = str((Path(__file__).resolve().parents[1] / "src"))
    cmd = [sys.executable, "-m", "git_fame", "--help"]
    proc = subprocess.run(cmd, cwd=str(tmp_path), env=env, text=True, capture_output=True)
    assert proc.returncode == 0, proc.stderr
    out = proc.stdout
    assert "--order-by" in out
    assert "--use-committer" in out
    assert "--restrict-to" in out
    assert "Rank contributors" in out


def test_bad_order_by_is_a_usage_error(tmp_path: Path) -> None:
    env = os.environ.copy()
    env["PYTHONPATH"] = str((Path(__file__).resolve().parents[1] / "src"))
    cmd = [sys.executable, "-m", "git_fame", "--order-by", "authors"]
    proc = subprocess.run(cmd, cwd=str(tmp_path), env=env, text=True, capture_output=True)
    assert proc.returncode == 2
    assert proc.stdout == ""


def test_glob_help_describes_slash_matching() -> None:
    helps = {opt: a.help for a in _build_parser()._actions for opt in a.option_strings}
    assert "also matches '/'" in helps["--exclude"]
    assert "also matches '/'" in helps["--restrict-to"]
