# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""``NODE_ENV`` values understood by the environment configurator."""

from __future__ import annotations

import os
from collections.abc import Mapping
from enum import Enum
from typing import Final

from .constants import PROFILE_VAR
from .errors import ProfileNotSetError

_DEBUG_PROFILE: Final[str] = "debug"
_RELEASE_PROFILE: Final[str] = "release"


class NodeEnv(str, Enum):
    """Well-known ``NODE_ENV`` values.

    Any other string is accepted wherever a :class:`NodeEnv` is expected and is
    passed through verbatim.
    """

    DEVELOPMENT = "development"
    PRODUCTION = "production"

    @classmethod
    def default(cls) -> NodeEnv:
        """Return the value used when no ``NODE_ENV`` preference is given."""

        return cls.DEVELOPMENT

    @classmethod
    def from_profile(
        cls,
        env: Mapping[str, str] | None = None,
        *,
        variable: str = PROFILE_VAR,
    ) -> NodeEnv | str:
        """Derive a ``NODE_ENV`` value from a build profile variable.

        ``debug`` maps to :attr:`DEVELOPMENT`, ``release`` maps to
        :attr:`PRODUCTION` and every other value is returned unchanged.

        Args:
            env: Environment to read from; defaults to :data:`os.environ`.
            variable: Name of the profile variable.

        Returns:
            NodeEnv | str: Matching member, or the raw profile for custom values.

        Raises:
            ProfileNotSetError: If ``variable`` is not present in ``env``.
        """

        source = os.environ if env is None else env
        try:
            profile = source[variable]
        except KeyError as exc:
            raise ProfileNotSetError(f"environment variable {variable} is not set") from exc
        if profile == _DEBUG_PROFILE:
            return cls.DEVELOPMENT
        if profile == _RELEASE_PROFILE:
            return cls.PRODUCTION
        return profile


def node_env_value(node_env: NodeEnv | str) -> str:
    """Return the literal ``NODE_ENV`` string for ``node_env``."""

    if isinstance(node_env, NodeEnv):
        return node_env.value
    return node_env


__all__ = ["NodeEnv", "node_env_value"]
