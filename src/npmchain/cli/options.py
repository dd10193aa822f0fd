# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared CLI option declarations and their normalised form."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Annotated

import typer

ROOT_OPTION = Annotated[
    Path,
    typer.Option("--root", "-r", help="Project root containing package.json and configuration."),
]
ENV_OPTION = Annotated[
    list[str] | None,
    typer.Option("--env", "-e", help="Environment override as KEY=VALUE (repeatable)."),
]
NODE_ENV_OPTION = Annotated[
    str | None,
    typer.Option("--node-env", help="Value for NODE_ENV (development, production or custom)."),
]
CLEAR_ENV_OPTION = Annotated[
    bool,
    typer.Option("--clear-env/--inherit-env", help="Start npm with an empty environment."),
]
DRY_RUN_OPTION = Annotated[
    bool,
    typer.Option("--dry-run", help="Print the joined command line without running it."),
]
EMOJI_OPTION = Annotated[
    bool,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji in CLI output."),
]


@dataclass(slots=True)
class CommonOptions:
    """Normalised options shared by every npm sub-command."""

    root: Path
    env_overrides: list[tuple[str, str]] = field(default_factory=list)
    node_env: str | None = None
    clear_env: bool = False
    dry_run: bool = False
    use_emoji: bool = True


def parse_env_assignment(raw: str) -> tuple[str, str]:
    """Split a ``KEY=VALUE`` assignment.

    Raises:
        typer.BadParameter: If ``raw`` has no ``=`` or an empty key.
    """

    key, sep, value = raw.partition("=")
    if not sep or not key:
        raise typer.BadParameter(f"expected KEY=VALUE, got {raw!r}", param_hint="--env")
    return key, value


def build_common_options(
    root: Path,
    env: Sequence[str] | None,
    node_env: str | None,
    clear_env: bool,
    dry_run: bool,
    emoji: bool,
) -> CommonOptions:
    """Construct :class:`CommonOptions` from raw Typer parameters."""

    return CommonOptions(
        root=root.resolve(),
        env_overrides=[parse_env_assignment(item) for item in env or ()],
        node_env=node_env,
        clear_env=clear_env,
        dry_run=dry_run,
        use_emoji=emoji,
    )


__all__ = [
    "CLEAR_ENV_OPTION",
    "DRY_RUN_OPTION",
    "EMOJI_OPTION",
    "ENV_OPTION",
    "NODE_ENV_OPTION",
    "ROOT_OPTION",
    "CommonOptions",
    "build_common_options",
    "parse_env_assignment",
]
