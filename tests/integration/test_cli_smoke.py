"""CLI entrypoint smoke tests."""

from __future__ import annotations

import subprocess
import sys


def test_cli_entrypoint_help() -> None:
    result = subprocess.run(
        [sys.executable, "-m", "cadence.cli", "--help"],
        capture_output=True,
        text=True,
        check=False,
    )
    assert result.returncode == 0
    assert "usage: cadence" in result.stdout.lower()


def test_cli_entrypoint_decode() -> None:
    result = subprocess.run(
        [sys.executable, "-m", "cadence.cli", "decode", "0" * 21 + "1"],
        capture_output=True,
        text=True,
        check=False,
    )
    assert result.returncode == 0
    assert result.stdout.strip() == "0" * 31 + "1"
