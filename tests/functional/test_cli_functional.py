"""Functional tests for the `apisteps` command line wrapper."""

from __future__ import annotations

import subprocess
import sys
from typing import Any, List

import pytest

from apisteps import cli


def _command(argv: List[str]) -> List[str]:
    args, passthrough = cli.build_parser().parse_known_args(argv)
    return cli.behave_command(args, passthrough)


def test_default_command_uses_progress_formatter() -> None:
    assert _command([]) == [sys.executable, "-m", "behave", "--format", "progress"]


def test_options_and_paths_are_forwarded() -> None:
    cmd = _command(["-f", "pretty", "-t", "@smoke", "--tags", "~@slow", "--stop", "--no-capture", "features/users.feature"])
    assert cmd == [
        sys.executable,
        "-m",
        "behave",
        "--format",
        "pretty",
        "--tags",
        "@smoke",
        "--tags",
        "~@slow",
        "--stop",
        "--no-capture",
        "features/users.feature",
    ]


def test_main_returns_behave_exit_status(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    seen: List[Any] = []

    def fake_run(cmd, check):
        seen.append(cmd)
        return subprocess.CompletedProcess(cmd, 1)

    monkeypatch.setattr(cli.subprocess, "run", fake_run)

    assert cli.main(["features"]) == 1
    assert seen[0][-1] == "features"
