# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Frozen process-invocation descriptor produced by :class:`NpmEnv`."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from .errors import WorkingDirectoryError
from .shells import ShellSpec, select_shell


def current_directory() -> Path:
    """Return the process working directory.

    Raises:
        WorkingDirectoryError: If the directory was removed or is unreadable.
    """

    try:
        return Path.cwd()
    except OSError as exc:
        raise WorkingDirectoryError(f"Unable to determine the current working directory: {exc}") from exc


@dataclass(frozen=True, slots=True)
class Invocation:
    """Shell, working directory and environment used to spawn npm.

    Attributes:
        shell: Interpreter and inline flag receiving the joined command line.
        cwd: Working directory of the child process.
        environment: Complete environment handed to the child process.
        cleared: ``True`` when the inherited environment was discarded.
        quote_arguments: ``True`` when fragment arguments are shell-quoted;
            ``None`` picks the shell default (quoting only for POSIX shells).
    """

    shell: ShellSpec
    cwd: Path
    environment: Mapping[str, str] = field(default_factory=dict)
    cleared: bool = False
    quote_arguments: bool | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "environment", MappingProxyType(dict(self.environment)))
        if self.quote_arguments is None:
            object.__setattr__(self, "quote_arguments", self.shell.supports_quoting)
        elif self.quote_arguments and not self.shell.supports_quoting:
            raise ValueError(f"argument quoting is not supported for {self.shell.program}")

    @classmethod
    def capture(cls) -> Invocation:
        """Return an invocation for the platform shell, current directory and environment."""

        return cls(shell=select_shell(), cwd=current_directory(), environment=dict(os.environ))

    def argv(self, command_line: str) -> list[str]:
        """Return the argument vector that runs ``command_line`` through the shell."""

        return [self.shell.program, self.shell.inline_flag, command_line]


__all__ = ["Invocation", "current_directory"]
