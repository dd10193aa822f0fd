# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""CLI application wiring npm sub-commands onto the builder."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Annotated

import typer

from ..config import NpmChainConfig, load_config, queue_steps
from ..errors import ConfigError, NpmLaunchError
from ..logging import StatusReporter
from ..npm import Npm
from .options import (
    CLEAR_ENV_OPTION,
    DRY_RUN_OPTION,
    EMOJI_OPTION,
    ENV_OPTION,
    NODE_ENV_OPTION,
    ROOT_OPTION,
    CommonOptions,
    build_common_options,
)

app = typer.Typer(help="Run npm commands with a configured environment.", no_args_is_help=True)

PACKAGES_ARGUMENT = Annotated[list[str] | None, typer.Argument(help="Package names.", show_default=False)]
REQUIRED_PACKAGES_ARGUMENT = Annotated[list[str], typer.Argument(help="Package names.", show_default=False)]
SCRIPT_ARGUMENT = Annotated[str, typer.Argument(help="Script name from package.json.")]
COMMAND_ARGUMENT = Annotated[str, typer.Argument(help="npm sub-command to run.")]
ARGS_ARGUMENT = Annotated[list[str] | None, typer.Argument(help="Arguments for the sub-command.", show_default=False)]


@app.callback()
def main(
    ctx: typer.Context,
    root: ROOT_OPTION = Path("."),
    env: ENV_OPTION = None,
    node_env: NODE_ENV_OPTION = None,
    clear_env: CLEAR_ENV_OPTION = False,
    dry_run: DRY_RUN_OPTION = False,
    emoji: EMOJI_OPTION = True,
) -> None:
    """Run npm commands with a configured environment."""

    ctx.obj = build_common_options(root, env, node_env, clear_env, dry_run, emoji)


def _prepare(options: CommonOptions, reporter: StatusReporter) -> tuple[NpmChainConfig, Npm]:
    """Load configuration and apply CLI overrides, returning an empty builder.

    Raises:
        typer.Exit: When configuration resolution fails.
    """

    try:
        config = load_config(options.root)
        if options.clear_env:
            config = config.model_copy(update={"clear_env": True})
        npm_env = config.build_env(options.root)
    except ConfigError as exc:
        reporter.fail(f"Configuration invalid: {exc}")
        raise typer.Exit(code=1) from exc
    if options.node_env is not None:
        npm_env.with_node_env(options.node_env)
    npm_env.with_envs(options.env_overrides)
    return config, npm_env.init_env()


def _execute(npm: Npm, reporter: StatusReporter, *, dry_run: bool) -> None:
    """Run ``npm`` and translate its status into the CLI exit code.

    Raises:
        typer.Exit: Always, carrying npm's exit status (1 when launching failed).
    """

    if not npm.fragments:
        reporter.warn("No npm commands to run.")
        raise typer.Exit(code=0)
    if dry_run:
        reporter.dry_run(npm)
        raise typer.Exit(code=0)

    reporter.running(npm)
    try:
        status = npm.execute()
    except NpmLaunchError as exc:
        reporter.fail(str(exc))
        raise typer.Exit(code=1) from exc

    reporter.finished(status)
    raise typer.Exit(code=0 if status.success else status.code or 1)


def _reporter(options: CommonOptions) -> StatusReporter:
    return StatusReporter(use_emoji=options.use_emoji)


def _queue_and_execute(ctx: typer.Context, queue: Callable[[Npm], Npm]) -> None:
    options: CommonOptions = ctx.obj
    reporter = _reporter(options)
    _, npm = _prepare(options, reporter)
    _execute(queue(npm), reporter, dry_run=options.dry_run)


@app.command("install")
def install_command(ctx: typer.Context, packages: PACKAGES_ARGUMENT = None) -> None:
    """Install packages, or every dependency from package.json when none are given."""

    _queue_and_execute(ctx, lambda npm: npm.install(packages))


@app.command("uninstall")
def uninstall_command(ctx: typer.Context, packages: REQUIRED_PACKAGES_ARGUMENT) -> None:
    """Uninstall the named packages."""

    _queue_and_execute(ctx, lambda npm: npm.uninstall(packages))


@app.command("update")
def update_command(ctx: typer.Context, packages: PACKAGES_ARGUMENT = None) -> None:
    """Update the named packages, or every local dependency when none are given."""

    _queue_and_execute(ctx, lambda npm: npm.update(packages))


@app.command("run")
def run_script_command(ctx: typer.Context, script: SCRIPT_ARGUMENT) -> None:
    """Run a script declared in package.json."""

    _queue_and_execute(ctx, lambda npm: npm.run(script))


@app.command(
    "custom",
    context_settings={"ignore_unknown_options": True},
)
def custom_command(ctx: typer.Context, command: COMMAND_ARGUMENT, args: ARGS_ARGUMENT = None) -> None:
    """Run any npm sub-command, e.g. ``custom audit -- --json``."""

    _queue_and_execute(ctx, lambda npm: npm.custom(command, args))


@app.command("steps")
def steps_command(ctx: typer.Context) -> None:
    """Run the steps declared in the project configuration."""

    options: CommonOptions = ctx.obj
    reporter = _reporter(options)
    config, npm = _prepare(options, reporter)
    reporter.section("npm steps")
    _execute(queue_steps(npm, config.steps), reporter, dry_run=options.dry_run)


__all__ = ["app", "main"]
