# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy raised by the npm builders."""

from __future__ import annotations

from collections.abc import Sequence


class NpmChainError(Exception):
    """Base class for every error raised by :mod:`npmchain`."""


class BuilderConsumedError(NpmChainError):
    """Raised when a builder is used after its terminal operation."""

    def __init__(self, builder: str, operation: str) -> None:
        """Initialise the error with the builder and terminal operation names.

        Args:
            builder: Class name of the consumed builder.
            operation: Terminal operation that consumed it.
        """

        super().__init__(f"{builder} was already consumed by {operation}() and cannot be reused")
        self.builder = builder
        self.operation = operation


class EmptyCommandError(NpmChainError, ValueError):
    """Raised when executing a builder that has no queued fragments."""


class NpmLaunchError(NpmChainError, OSError):
    """Raised when the shell cannot be located or started, or the OS rejects its environment."""


class NpmCommandError(NpmChainError):
    """Raised by :meth:`ExecutionStatus.check` when npm reported a failure."""

    def __init__(self, command: Sequence[str], returncode: int, stderr: str | None = None) -> None:
        """Initialise the error with the failing invocation metadata.

        Args:
            command: Argument vector passed to the shell.
            returncode: Exit status reported by the shell.
            stderr: Captured standard error, when output was captured.
        """

        super().__init__(
            f"Command '{command[-1] if command else ''}' exited with status {returncode}. stderr: {stderr or '<none>'}",
        )
        self.command = tuple(command)
        self.returncode = returncode
        self.stderr = stderr


class WorkingDirectoryError(NpmChainError):
    """Raised when the current working directory cannot be determined."""


class ConfigError(NpmChainError):
    """Raised when configuration input is invalid."""


class ProfileNotSetError(NpmChainError, KeyError):
    """Raised when the build profile variable is absent from the environment."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "build profile is not set"


__all__ = [
    "BuilderConsumedError",
    "ConfigError",
    "EmptyCommandError",
    "NpmChainError",
    "NpmCommandError",
    "NpmLaunchError",
    "ProfileNotSetError",
    "WorkingDirectoryError",
]
