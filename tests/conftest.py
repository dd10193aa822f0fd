# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from pathlib import Path
from subprocess import CompletedProcess
from typing import Any

import pytest

from npmchain.process import CommandOptions

FAKE_NPM_SCRIPT = """#!/bin/sh
printf '%s\\n' "$*" >> "$NPM_LOG"
case "$1" in
  fail) exit 3 ;;
  where) pwd >> "$NPM_LOG" ;;
  env) printf 'NODE_ENV=%s\\n' "$NODE_ENV" >> "$NPM_LOG" ;;
  inherited) printf 'NPMCHAIN_SENTINEL=%s\\n' "${NPMCHAIN_SENTINEL-unset}" >> "$NPM_LOG" ;;
esac
exit 0
"""


@dataclass(slots=True)
class FakeNpm:
    """A stand-in ``npm`` executable that records its arguments."""

    bin_dir: Path
    log_path: Path

    def base_env(self) -> dict[str, str]:
        return {
            "PATH": f"{self.bin_dir}{os.pathsep}{os.environ.get('PATH', '')}",
            "NPM_LOG": str(self.log_path),
        }

    def calls(self) -> list[str]:
        if not self.log_path.exists():
            return []
        return self.log_path.read_text(encoding="utf-8").splitlines()


@pytest.fixture
def fake_npm(tmp_path: Path) -> FakeNpm:
    """Install a recording ``npm`` script into a temporary ``bin`` directory."""

    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    script = bin_dir / "npm"
    script.write_text(FAKE_NPM_SCRIPT, encoding="utf-8")
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return FakeNpm(bin_dir=bin_dir, log_path=tmp_path / "npm.log")


class RecordingRunner:
    """Replacement for ``run_command`` capturing every spawn request."""

    def __init__(self, returncode: int = 0) -> None:
        self.returncode = returncode
        self.calls: list[tuple[list[str], CommandOptions]] = []

    def __call__(self, args: Any, *, options: CommandOptions | None = None) -> CompletedProcess[str]:
        self.calls.append((list(args), options or CommandOptions()))
        return CompletedProcess(args=list(args), returncode=self.returncode, stdout="out", stderr="err")


@pytest.fixture
def recording_runner(monkeypatch: pytest.MonkeyPatch) -> RecordingRunner:
    """Patch the builder's process runner with a :class:`RecordingRunner`."""

    runner = RecordingRunner()
    monkeypatch.setattr("npmchain.npm.run_command", runner)
    return runner
