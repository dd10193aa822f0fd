# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for ``NODE_ENV`` resolution."""

from __future__ import annotations

import pytest

from npmchain import NodeEnv, ProfileNotSetError
from npmchain.node_env import node_env_value


def test_default_is_development() -> None:
    assert NodeEnv.default() is NodeEnv.DEVELOPMENT
    assert node_env_value(NodeEnv.default()) == "development"


@pytest.mark.parametrize(
    ("profile", "expected"),
    [
        ("debug", NodeEnv.DEVELOPMENT),
        ("release", NodeEnv.PRODUCTION),
        ("bench", "bench"),
    ],
)
def test_from_profile_maps_build_profiles(profile: str, expected: NodeEnv | str) -> None:
    assert NodeEnv.from_profile({"PROFILE": profile}) == expected


def test_from_profile_reads_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PROFILE", "release")
    assert NodeEnv.from_profile() is NodeEnv.PRODUCTION


def test_from_profile_honours_custom_variable() -> None:
    assert NodeEnv.from_profile({"BUILD_MODE": "debug"}, variable="BUILD_MODE") is NodeEnv.DEVELOPMENT


def test_from_profile_without_variable_raises() -> None:
    with pytest.raises(ProfileNotSetError, match="PROFILE"):
        NodeEnv.from_profile({})


def test_custom_value_passes_through() -> None:
    assert node_env_value("staging") == "staging"
