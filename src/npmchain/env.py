# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Environment configurator producing :class:`Npm` command builders.

:class:`NpmEnv` captures a snapshot of the inherited environment and the
current directory when it is created. Every ``with_*`` call mutates that
snapshot and returns the same configurator so calls can be chained. Calling
:meth:`NpmEnv.init_env` freezes the configuration into an
:class:`~npmchain.invocation.Invocation` and hands it to a new :class:`Npm`;
the configurator rejects any further use afterwards.

Example::

    status = (
        NpmEnv()
        .with_node_env(NodeEnv.PRODUCTION)
        .with_env("FOO", "bar")
        .init_env()
        .install()
        .run("build")
        .execute()
    )
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Self, TypeAlias

from .constants import NODE_ENV_VAR
from .errors import BuilderConsumedError
from .invocation import Invocation, current_directory
from .node_env import NodeEnv, node_env_value
from .npm import Npm
from .shells import ShellSpec, select_shell

LOGGER = logging.getLogger(__name__)

EnvToken: TypeAlias = str | os.PathLike[str]
EnvPairs: TypeAlias = Mapping[str, EnvToken] | Iterable[tuple[EnvToken, EnvToken]]


def _coerce_env_token(value: object, role: str) -> str:
    """Return ``value`` as an environment string.

    Args:
        value: Key or value supplied by the caller.
        role: ``"key"`` or ``"value"``, used in error messages.

    Returns:
        str: Filesystem-encoded string form of ``value``.

    Raises:
        TypeError: If ``value`` is neither a string nor path-like.
    """

    if isinstance(value, str):
        return value
    if isinstance(value, os.PathLike):
        return os.fspath(value)
    raise TypeError(f"environment {role} must be a str or os.PathLike, got {type(value).__name__}")


class NpmEnv:
    """Configure the environment in which npm commands execute."""

    def __init__(
        self,
        *,
        base_env: Mapping[str, str] | None = None,
        cwd: str | os.PathLike[str] | None = None,
        shell: ShellSpec | None = None,
    ) -> None:
        """Capture the inherited environment and working directory.

        Args:
            base_env: Environment to inherit; defaults to a copy of :data:`os.environ`.
            cwd: Working directory; defaults to the current directory.
            shell: Shell override; defaults to the platform shell.

        Raises:
            WorkingDirectoryError: If ``cwd`` is omitted and the current
                directory cannot be determined.
        """

        self._shell = shell if shell is not None else select_shell()
        self._cwd = Path(cwd) if cwd is not None else current_directory()
        self._environment: dict[str, str] = dict(os.environ if base_env is None else base_env)
        self._cleared = False
        self._quote_arguments: bool | None = None
        self._consumed = False

    @property
    def shell(self) -> ShellSpec:
        return self._shell

    @property
    def cwd(self) -> Path:
        return self._cwd

    @property
    def environment(self) -> Mapping[str, str]:
        """Read-only view of the environment the child process will receive."""

        return MappingProxyType(self._environment)

    @property
    def cleared(self) -> bool:
        return self._cleared

    def _ensure_active(self) -> None:
        if self._consumed:
            raise BuilderConsumedError(type(self).__name__, "init_env")

    def with_node_env(self, node_env: NodeEnv | str = NodeEnv.DEVELOPMENT) -> Self:
        """Insert or update the ``NODE_ENV`` variable."""

        return self.with_env(NODE_ENV_VAR, node_env_value(node_env))

    def with_env(self, key: EnvToken, value: EnvToken) -> Self:
        """Insert or update one environment variable mapping."""

        self._ensure_active()
        self._environment[_coerce_env_token(key, "key")] = _coerce_env_token(value, "value")
        return self

    def with_envs(self, pairs: EnvPairs) -> Self:
        """Insert or update several mappings in order; later duplicates win.

        Args:
            pairs: Mapping or iterable of ``(key, value)`` pairs.

        Returns:
            Self: This configurator for chaining.
        """

        self._ensure_active()
        items = pairs.items() if isinstance(pairs, Mapping) else pairs
        for key, value in items:
            self.with_env(key, value)
        return self

    def clear_envs(self) -> Self:
        """Discard inherited and previously configured variables."""

        self._ensure_active()
        self._environment.clear()
        self._cleared = True
        return self

    def remove_env(self, key: EnvToken) -> Self:
        """Remove one mapping; absent keys are ignored."""

        self._ensure_active()
        self._environment.pop(_coerce_env_token(key, "key"), None)
        return self

    def set_path(self, path: str | os.PathLike[str]) -> Self:
        """Set the working directory; existence is checked only when spawning."""

        self._ensure_active()
        self._cwd = Path(path)
        return self

    def quote_arguments(self, enabled: bool = True) -> Self:
        """Choose whether fragment arguments are shell-quoted.

        Quoting is on by default for POSIX shells and unavailable for
        ``cmd.exe``. When disabled, arguments are concatenated verbatim and
        escaping shell metacharacters becomes the caller's responsibility.

        Raises:
            ValueError: If quoting is enabled for a shell that does not support it.
        """

        self._ensure_active()
        if enabled and not self._shell.supports_quoting:
            raise ValueError(f"argument quoting is not supported for {self._shell.program}")
        self._quote_arguments = enabled
        return self

    def copy(self) -> NpmEnv:
        """Return an independent configurator with the same state."""

        self._ensure_active()
        clone = NpmEnv(base_env=self._environment, cwd=self._cwd, shell=self._shell)
        clone._cleared = self._cleared
        clone._quote_arguments = self._quote_arguments
        return clone

    def init_env(self) -> Npm:
        """Finalize the configuration and return a command builder using it.

        Returns:
            Npm: Builder with an empty fragment sequence.

        Raises:
            BuilderConsumedError: If this configurator was already finalized.
        """

        self._ensure_active()
        self._consumed = True
        invocation = Invocation(
            shell=self._shell,
            cwd=self._cwd,
            environment=self._environment,
            cleared=self._cleared,
            quote_arguments=self._quote_arguments,
        )
        LOGGER.debug(
            "finalized npm environment in %s (%d variables, cleared=%s)",
            invocation.cwd,
            len(invocation.environment),
            invocation.cleared,
        )
        return Npm(invocation)


__all__ = ["EnvPairs", "EnvToken", "NpmEnv"]
