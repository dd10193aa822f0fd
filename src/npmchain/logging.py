# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Rich status output for npm runs driven from the command line.

Diagnostics for library callers go through module loggers
(``logging.getLogger(__name__)``); this module only renders the
user-facing lines the CLI prints around a run.
"""

from __future__ import annotations

import sys
from functools import cache
from typing import TYPE_CHECKING, Final, Literal

from rich.console import Console
from rich.rule import Rule
from rich.text import Text

if TYPE_CHECKING:
    from .npm import ExecutionStatus, Npm

StatusKind = Literal["info", "ok", "warn", "fail"]

# kind -> (emoji prefix, colour style)
_STATUS_MARKERS: Final[dict[StatusKind, tuple[str, str]]] = {
    "info": ("ℹ️ ", "cyan"),
    "ok": ("✅ ", "green"),
    "warn": ("⚠️ ", "yellow"),
    "fail": ("❌ ", "red"),
}


def detect_tty() -> bool:
    """Return ``True`` when stdout appears to be backed by a terminal."""

    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


@cache
def get_console(*, color: bool, emoji: bool, tty: bool) -> Console:
    """Return the shared console for one ``(color, emoji, tty)`` combination.

    ``tty`` is part of the key because test runners swap ``sys.stdout``.
    """

    return Console(
        color_system="auto" if color and tty else None,
        force_terminal=tty,
        no_color=not (color and tty),
        emoji=emoji,
        soft_wrap=True,
    )


class StatusReporter:
    """Print the progress of an npm run.

    Args:
        use_emoji: Prefix each line with a status emoji.
        use_color: Colour output; ``None`` enables it only on a terminal.
        console: Console override, mainly for tests.
    """

    def __init__(
        self,
        *,
        use_emoji: bool = True,
        use_color: bool | None = None,
        console: Console | None = None,
    ) -> None:
        tty = detect_tty()
        self.use_emoji = use_emoji
        self.use_color = tty if use_color is None else use_color
        self._console = console or get_console(color=self.use_color, emoji=use_emoji, tty=tty)

    def _line(self, kind: StatusKind, msg: str) -> None:
        prefix, style = _STATUS_MARKERS[kind]
        text = Text(f"{prefix if self.use_emoji else ''}{msg}")
        if self.use_color:
            text.stylize(style)
        self._console.print(text)

    def info(self, msg: str) -> None:
        self._line("info", msg)

    def ok(self, msg: str) -> None:
        self._line("ok", msg)

    def warn(self, msg: str) -> None:
        self._line("warn", msg)

    def fail(self, msg: str) -> None:
        self._line("fail", msg)

    def section(self, title: str) -> None:
        """Print a header separating a group of queued steps."""

        if self.use_color:
            self._console.print()
            self._console.print(Rule(title))
        else:
            self._console.print(f"\n--- {title} ---")

    def dry_run(self, npm: Npm) -> None:
        self.info(f"DRY RUN: {npm.command_line}")

    def running(self, npm: Npm) -> None:
        self.info(f"Running {npm.command_line} in {npm.invocation.cwd}")

    def finished(self, status: ExecutionStatus) -> None:
        """Report the outcome of a completed run."""

        if status.success:
            self.ok("npm finished successfully.")
        elif status.signal is not None:
            self.fail(f"npm was terminated by signal {status.signal}.")
        else:
            self.fail(f"npm exited with status {status.returncode}.")


__all__ = ["StatusReporter", "detect_tty", "get_console"]
