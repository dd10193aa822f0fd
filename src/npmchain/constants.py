# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command and environment names shared across the package."""

from __future__ import annotations

from typing import Final

NPM: Final[str] = "npm"
NPM_INIT: Final[str] = "init"
NPM_INSTALL: Final[str] = "install"
NPM_UNINSTALL: Final[str] = "uninstall"
NPM_UPDATE: Final[str] = "update"
NPM_RUN: Final[str] = "run"
NPM_INIT_DEFAULTS_FLAG: Final[str] = "-y"

NODE_ENV_VAR: Final[str] = "NODE_ENV"
PROFILE_VAR: Final[str] = "PROFILE"

FRAGMENT_SEPARATOR: Final[str] = " && "

PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
CONFIG_FILENAME: Final[str] = "npmchain.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "npmchain"
