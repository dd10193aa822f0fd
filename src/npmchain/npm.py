# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command builder that queues npm fragments and runs them as one shell call."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Self

from .constants import (
    FRAGMENT_SEPARATOR,
    NPM,
    NPM_INIT,
    NPM_INIT_DEFAULTS_FLAG,
    NPM_INSTALL,
    NPM_RUN,
    NPM_UNINSTALL,
    NPM_UPDATE,
)
from .errors import BuilderConsumedError, EmptyCommandError, NpmCommandError
from .invocation import Invocation
from .process import CommandOptions, run_command

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ExecutionStatus:
    """Completion status of a joined npm invocation.

    Attributes:
        args: Argument vector handed to the shell.
        command_line: Joined fragments passed to the shell.
        returncode: Raw status; negative values name a terminating POSIX signal.
        stdout: Captured standard output, when requested.
        stderr: Captured standard error, when requested.
    """

    args: tuple[str, ...]
    command_line: str
    returncode: int
    stdout: str | None = None
    stderr: str | None = None

    @property
    def success(self) -> bool:
        return self.returncode == 0

    @property
    def code(self) -> int | None:
        """Exit code, or ``None`` when the shell was killed by a signal."""

        return self.returncode if self.returncode >= 0 else None

    @property
    def signal(self) -> int | None:
        """Terminating signal number on POSIX, otherwise ``None``."""

        return -self.returncode if self.returncode < 0 else None

    def check(self) -> ExecutionStatus:
        """Return ``self`` when successful.

        Raises:
            NpmCommandError: If the invocation exited unsuccessfully.
        """

        if not self.success:
            raise NpmCommandError(self.args, self.returncode, self.stderr)
        return self


def _package_list(packages: Sequence[str] | None, operation: str) -> tuple[str, ...]:
    """Return ``packages`` as a tuple, treating ``None`` as empty.

    Raises:
        TypeError: If a bare string is supplied instead of a sequence.
    """

    if packages is None:
        return ()
    if isinstance(packages, str):
        raise TypeError(f"{operation}() expects a sequence of package names, not a single string")
    return tuple(packages)


class Npm:
    """Queue npm sub-commands and execute them in order.

    Fragments are joined with ``" && "`` so a fragment only runs when every
    earlier one succeeded.
    """

    def __init__(self, invocation: Invocation | None = None) -> None:
        """Create a builder for ``invocation`` (defaults to the current process context)."""

        self._invocation = invocation if invocation is not None else Invocation.capture()
        self._fragments: list[str] = []
        self._consumed = False

    @property
    def invocation(self) -> Invocation:
        return self._invocation

    @property
    def fragments(self) -> tuple[str, ...]:
        return tuple(self._fragments)

    @property
    def command_line(self) -> str:
        """Queued fragments joined in append order."""

        return FRAGMENT_SEPARATOR.join(self._fragments)

    def argv(self) -> list[str]:
        """Return the shell argument vector :meth:`execute` would spawn."""

        return self._invocation.argv(self.command_line)

    def _ensure_active(self) -> None:
        if self._consumed:
            raise BuilderConsumedError(type(self).__name__, "execute")

    def _append(self, subcommand: str, args: Sequence[str] = ()) -> Self:
        self._ensure_active()
        tokens = [subcommand, *args]
        if self._invocation.quote_arguments:
            tokens = [self._invocation.shell.quote(token) for token in tokens]
        fragment = " ".join([NPM, *tokens])
        self._fragments.append(fragment)
        LOGGER.debug("queued fragment %r", fragment)
        return self

    def init(self) -> Self:
        """Queue ``npm init -y``, creating a default ``package.json``."""

        return self._append(NPM_INIT, (NPM_INIT_DEFAULTS_FLAG,))

    def install(self, packages: Sequence[str] | None = None) -> Self:
        """Queue ``npm install``.

        Args:
            packages: Packages to install; ``None`` or empty installs every
                dependency listed in ``package.json``.

        Returns:
            Self: This builder for chaining.
        """

        return self._append(NPM_INSTALL, _package_list(packages, NPM_INSTALL))

    def uninstall(self, packages: Sequence[str]) -> Self:
        """Queue ``npm uninstall`` for exactly ``packages``."""

        return self._append(NPM_UNINSTALL, _package_list(packages, NPM_UNINSTALL))

    def update(self, packages: Sequence[str] | None = None) -> Self:
        """Queue ``npm update``; ``None`` or empty updates every local dependency."""

        return self._append(NPM_UPDATE, _package_list(packages, NPM_UPDATE))

    def run(self, script: str) -> Self:
        """Queue ``npm run <script>`` for a script declared in ``package.json``."""

        return self._append(NPM_RUN, (script,))

    def custom(self, command: str, args: Sequence[str] | None = None) -> Self:
        """Queue ``npm <command> [args...]`` for sub-commands without a helper.

        Example::

            Npm().custom("audit").execute()  # npm audit
        """

        return self._append(command, _package_list(args, command))

    def execute(self, *, allow_empty: bool = False, capture_output: bool = False) -> ExecutionStatus:
        """Run every queued fragment in one shell invocation and wait for it.

        A non-zero exit status is reported through the returned status, never
        raised.

        Args:
            allow_empty: Invoke the shell with an empty command when nothing
                was queued instead of raising.
            capture_output: Capture stdout/stderr instead of inheriting them.

        Returns:
            ExecutionStatus: Completion status of the shell.

        Raises:
            EmptyCommandError: If no fragment was queued and ``allow_empty`` is false.
            NpmLaunchError: If the shell cannot be located or started.
            BuilderConsumedError: If the builder already executed.
        """

        self._ensure_active()
        if not self._fragments and not allow_empty:
            raise EmptyCommandError("no npm commands were queued before execute()")
        self._consumed = True
        command_line = self.command_line
        args = self._invocation.argv(command_line)
        completed = run_command(
            args,
            options=CommandOptions(
                cwd=self._invocation.cwd,
                env=self._invocation.environment,
                capture_output=capture_output,
                shell=self._invocation.shell,
            ),
        )
        return ExecutionStatus(
            args=tuple(args),
            command_line=command_line,
            returncode=completed.returncode,
            stdout=completed.stdout if capture_output else None,
            stderr=completed.stderr if capture_output else None,
        )


__all__ = ["ExecutionStatus", "Npm"]
