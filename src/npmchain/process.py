# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrapper around ``subprocess`` execution of the shell interpreter."""

from __future__ import annotations

import logging
import shutil

# Bandit: subprocess usage is intentional; the shell is resolved to an absolute
# path and receives the joined npm command line as a single argument.
import subprocess  # nosec B404
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from subprocess import CompletedProcess

from .errors import NpmLaunchError
from .shells import ShellSpec

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CommandOptions:
    """Immutable command execution options.

    ``shell`` renders the resolved argument vector into its spawn form; the
    vector is passed through unchanged when it is ``None``.
    """

    cwd: Path | None = None
    env: Mapping[str, str] | None = None
    capture_output: bool = False
    shell: ShellSpec | None = None


def _normalize_args(args: Sequence[str]) -> list[str]:
    """Resolve the executable of ``args`` to an absolute path.

    Args:
        args: Shell argument vector, interpreter first.

    Returns:
        list[str]: Argument list whose head is an absolute executable path.

    Raises:
        NpmLaunchError: If the executable cannot be found on ``PATH``.
    """

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        msg = f"Executable '{head}' was not found on PATH"
        raise NpmLaunchError(msg)
    return [resolved, *rest]


def run_command(args: Sequence[str], *, options: CommandOptions | None = None) -> CompletedProcess[str]:
    """Execute ``args`` after normalising the executable path.

    Args:
        args: Command and argument sequence to execute.
        options: Options configuring execution semantics.

    Returns:
        CompletedProcess: Subprocess execution metadata.

    Raises:
        NpmLaunchError: If the executable cannot be resolved or started, or the
            operating system rejects the working directory or environment.
    """

    resolved_options = options or CommandOptions()
    normalized = _normalize_args(args)
    spawn_args = resolved_options.shell.render(normalized) if resolved_options.shell is not None else normalized
    LOGGER.debug("spawning %s in %s", spawn_args, resolved_options.cwd or "<inherited cwd>")

    try:
        # Bandit: the joined command line is passed as one argument to the shell.
        completed: CompletedProcess[str] = subprocess.run(  # nosec B603
            spawn_args,
            cwd=str(resolved_options.cwd) if resolved_options.cwd is not None else None,
            env=dict(resolved_options.env) if resolved_options.env is not None else None,
            check=False,
            capture_output=resolved_options.capture_output,
            text=True,
        )
    except (OSError, ValueError) as exc:
        # ValueError: NUL bytes or "=" in environment keys.
        raise NpmLaunchError(f"Unable to start '{normalized[0]}': {exc}") from exc

    LOGGER.debug("'%s' exited with status %s", normalized[0], completed.returncode)
    return completed


__all__ = ["CommandOptions", "run_command"]
