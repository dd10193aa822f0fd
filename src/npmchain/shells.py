# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Platform selection of the shell used to run joined npm fragments."""

from __future__ import annotations

import os
import shlex
import subprocess  # nosec B404 - only used to quote the interpreter path
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Final, Literal

ShellFamily = Literal["windows", "posix"]

WINDOWS_OS_NAME: Final[str] = "nt"
WINDOWS_STRIP_QUOTES_FLAG: Final[str] = "/S"


@dataclass(frozen=True, slots=True)
class ShellSpec:
    """Shell interpreter paired with the flag that runs an inline command."""

    program: str
    inline_flag: str
    family: ShellFamily

    @property
    def supports_quoting(self) -> bool:
        """``True`` when :meth:`quote` can escape tokens for this shell.

        ``cmd.exe`` has no quoting rule that survives both its own parser and
        the re-parse done by the ``npm.cmd`` batch shim, so tokens are only
        quoted for POSIX shells.
        """

        return self.family == "posix"

    def quote(self, token: str) -> str:
        """Return ``token`` escaped for this shell.

        Tokens made only of shell-safe characters are returned unchanged.

        Args:
            token: Single argument to escape.

        Returns:
            str: Token safe to splice into an inline command line.

        Raises:
            ValueError: If this shell does not support quoting.
        """

        if not self.supports_quoting:
            raise ValueError(f"argument quoting is not supported for {self.program}")
        return shlex.quote(token)

    def render(self, argv: Sequence[str]) -> list[str] | str:
        """Return ``argv`` in the form handed to :func:`subprocess.run`.

        POSIX shells receive the vector unchanged. ``cmd.exe`` receives one
        verbatim string, ``"<cmd.exe>" /S /C "<command line>"``, so the command
        line is not re-quoted by :func:`subprocess.list2cmdline`; ``/S`` makes
        ``cmd.exe`` strip exactly the outer pair of quotes.

        Args:
            argv: ``[interpreter, inline flag, command line]``.

        Returns:
            list[str] | str: Spawn arguments for this shell.
        """

        if self.family == "posix":
            return list(argv)
        program, *flags, command_line = argv
        return " ".join(
            [subprocess.list2cmdline([program]), WINDOWS_STRIP_QUOTES_FLAG, *flags, f'"{command_line}"'],
        )


WINDOWS_SHELL: Final[ShellSpec] = ShellSpec(program="cmd.exe", inline_flag="/C", family="windows")
POSIX_SHELL: Final[ShellSpec] = ShellSpec(program="bash", inline_flag="-c", family="posix")


def select_shell(os_name: str | None = None) -> ShellSpec:
    """Return the shell for ``os_name`` (defaults to :data:`os.name`)."""

    name = os.name if os_name is None else os_name
    return WINDOWS_SHELL if name == WINDOWS_OS_NAME else POSIX_SHELL


__all__ = ["POSIX_SHELL", "WINDOWS_SHELL", "ShellFamily", "ShellSpec", "select_shell"]
