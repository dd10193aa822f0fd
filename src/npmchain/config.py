# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and loaders for project-level npm settings.

Settings are layered with increasing precedence:

1. built-in defaults,
2. ``[tool.npmchain]`` in ``pyproject.toml``,
3. a standalone ``npmchain.toml`` next to it.

String values may reference ``${VAR}`` or ``$VAR`` which are expanded from
the environment at load time; unknown references are left untouched.
"""

from __future__ import annotations

import os
import re
import tomllib
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .constants import (
    CONFIG_FILENAME,
    NPM_INIT,
    NPM_INSTALL,
    NPM_RUN,
    NPM_UNINSTALL,
    NPM_UPDATE,
    PYPROJECT_FILENAME,
    PYPROJECT_SECTION_KEY,
    PYPROJECT_TOOL_KEY,
)
from .env import NpmEnv
from .errors import ConfigError
from .npm import Npm

_ENV_VAR_PATTERN: Final[re.Pattern[str]] = re.compile(r"\$(?:\{([^}]+)\}|([A-Za-z_][A-Za-z0-9_]*))")


class StepConfig(BaseModel):
    """One npm sub-command declared in configuration."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    command: str = Field(min_length=1)
    args: tuple[str, ...] = ()

    @model_validator(mode="after")
    def _validate_run_arguments(self) -> StepConfig:
        if self.command == NPM_RUN and len(self.args) != 1:
            raise ValueError("'run' steps require exactly one script name in args")
        return self

    def apply(self, npm: Npm) -> Npm:
        """Queue this step on ``npm`` and return the builder."""

        packages = list(self.args) or None
        if self.command == NPM_INIT and not self.args:
            return npm.init()
        if self.command == NPM_INSTALL:
            return npm.install(packages)
        if self.command == NPM_UNINSTALL:
            return npm.uninstall(list(self.args))
        if self.command == NPM_UPDATE:
            return npm.update(packages)
        if self.command == NPM_RUN:
            return npm.run(self.args[0])
        return npm.custom(self.command, packages)


class NpmChainConfig(BaseModel):
    """Project configuration for the npm environment and default steps."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    node_env: str | None = None
    path: Path | None = None
    clear_env: bool = False
    quote_arguments: bool | None = None
    env: dict[str, str] = Field(default_factory=dict)
    remove_env: list[str] = Field(default_factory=list)
    steps: list[StepConfig] = Field(default_factory=list)

    @field_validator("node_env")
    @classmethod
    def _reject_blank_node_env(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            raise ValueError("node_env must not be blank")
        return value

    def resolve_path(self, root: Path) -> Path:
        """Return the working directory for ``root``."""

        if self.path is None:
            return root
        return self.path if self.path.is_absolute() else root / self.path

    def build_env(self, root: Path, *, base_env: Mapping[str, str] | None = None) -> NpmEnv:
        """Return an :class:`NpmEnv` configured from these settings.

        The inherited environment is cleared first when ``clear_env`` is set,
        then ``env`` entries are applied and ``remove_env`` keys dropped.
        ``quote_arguments`` left unset keeps the shell default.

        Args:
            root: Project root used to resolve a relative ``path``.
            base_env: Environment to inherit; defaults to :data:`os.environ`.

        Returns:
            NpmEnv: Configurator ready for further overrides.

        Raises:
            ConfigError: If ``quote_arguments`` is enabled for a shell without quoting support.
        """

        npm_env = NpmEnv(base_env=base_env, cwd=self.resolve_path(root))
        if self.clear_env:
            npm_env.clear_envs()
        if self.node_env is not None:
            npm_env.with_node_env(self.node_env)
        npm_env.with_envs(self.env)
        for key in self.remove_env:
            npm_env.remove_env(key)
        if self.quote_arguments is not None:
            try:
                npm_env.quote_arguments(self.quote_arguments)
            except ValueError as exc:
                raise ConfigError(f"quote_arguments: {exc}") from exc
        return npm_env


def queue_steps(npm: Npm, steps: Sequence[StepConfig]) -> Npm:
    """Queue ``steps`` on ``npm`` in order."""

    for step in steps:
        step.apply(npm)
    return npm


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(value, Mapping):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _expand_env_value(value: Any, env: Mapping[str, str]) -> Any:
    if isinstance(value, str):
        return _ENV_VAR_PATTERN.sub(lambda match: env.get(match.group(1) or match.group(2), match.group(0)), value)
    if isinstance(value, Mapping):
        return {key: _expand_env_value(item, env) for key, item in value.items()}
    if isinstance(value, list):
        return [_expand_env_value(item, env) for item in value]
    return value


def _read_toml(path: Path) -> dict[str, Any]:
    """Return the TOML document at ``path`` or an empty mapping when absent.

    Raises:
        ConfigError: If the file cannot be read, decoded or parsed.
    """

    if not path.is_file():
        return {}
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except OSError as exc:
        raise ConfigError(f"Unable to read {path}: {exc}") from exc
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc


def _pyproject_section(document: Mapping[str, Any], path: Path) -> dict[str, Any]:
    tool_section = document.get(PYPROJECT_TOOL_KEY)
    if not isinstance(tool_section, Mapping):
        return {}
    section = tool_section.get(PYPROJECT_SECTION_KEY)
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise ConfigError(f"[{PYPROJECT_TOOL_KEY}.{PYPROJECT_SECTION_KEY}] in {path} must be a table")
    return dict(section)


def load_config(root: Path, *, env: Mapping[str, str] | None = None) -> NpmChainConfig:
    """Load layered configuration for the project at ``root``.

    Args:
        root: Directory containing ``pyproject.toml`` and/or ``npmchain.toml``.
        env: Environment used for ``${VAR}`` expansion; defaults to :data:`os.environ`.

    Returns:
        NpmChainConfig: Validated configuration.

    Raises:
        ConfigError: If a file is malformed or a value fails validation.
    """

    pyproject_path = root / PYPROJECT_FILENAME
    standalone_path = root / CONFIG_FILENAME
    merged = _deep_merge(
        _pyproject_section(_read_toml(pyproject_path), pyproject_path),
        _read_toml(standalone_path),
    )
    expanded = _expand_env_value(merged, os.environ if env is None else env)
    try:
        return NpmChainConfig.model_validate(expanded)
    except ValidationError as exc:
        raise ConfigError(f"Invalid npmchain configuration under {root}: {exc}") from exc


__all__ = ["NpmChainConfig", "StepConfig", "load_config", "queue_steps"]
