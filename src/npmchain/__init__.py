# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Fluent builder for configuring and running ``npm`` from Python."""

from __future__ import annotations

from importlib import metadata

from .env import NpmEnv
from .errors import (
    BuilderConsumedError,
    ConfigError,
    EmptyCommandError,
    NpmChainError,
    NpmCommandError,
    NpmLaunchError,
    ProfileNotSetError,
    WorkingDirectoryError,
)
from .invocation import Invocation
from .node_env import NodeEnv
from .npm import ExecutionStatus, Npm
from .shells import ShellSpec, select_shell

__all__ = [
    "BuilderConsumedError",
    "ConfigError",
    "EmptyCommandError",
    "ExecutionStatus",
    "Invocation",
    "NodeEnv",
    "Npm",
    "NpmChainError",
    "NpmCommandError",
    "NpmEnv",
    "NpmLaunchError",
    "ProfileNotSetError",
    "ShellSpec",
    "WorkingDirectoryError",
    "__version__",
    "select_shell",
]

try:
    __version__ = metadata.version("npmchain")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"
