# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the :class:`Npm` command builder."""

from __future__ import annotations

from pathlib import Path

import pytest

from npmchain import (
    BuilderConsumedError,
    EmptyCommandError,
    ExecutionStatus,
    Invocation,
    Npm,
    NpmCommandError,
    NpmEnv,
)
from npmchain.shells import POSIX_SHELL, WINDOWS_SHELL


def _npm(tmp_path: Path, **env: str) -> Npm:
    return NpmEnv(base_env=env, cwd=tmp_path, shell=POSIX_SHELL).init_env()


def test_install_without_packages(tmp_path: Path) -> None:
    assert _npm(tmp_path).install().fragments == ("npm install",)
    assert _npm(tmp_path).install(None).fragments == ("npm install",)
    assert _npm(tmp_path).install([]).fragments == ("npm install",)


def test_install_specific_packages(tmp_path: Path) -> None:
    assert _npm(tmp_path).install(["a", "b"]).fragments == ("npm install a b",)


def test_uninstall_update_run_custom_and_init(tmp_path: Path) -> None:
    assert _npm(tmp_path).uninstall(["x"]).command_line == "npm uninstall x"
    assert _npm(tmp_path).update().command_line == "npm update"
    assert _npm(tmp_path).update(["react"]).command_line == "npm update react"
    assert _npm(tmp_path).run("build").command_line == "npm run build"
    assert _npm(tmp_path).custom("audit", None).command_line == "npm audit"
    assert _npm(tmp_path).custom("audit", ["--json"]).command_line == "npm audit --json"
    assert _npm(tmp_path).init().command_line == "npm init -y"


def test_fragments_join_in_call_order(tmp_path: Path) -> None:
    npm = _npm(tmp_path).install().run("build").custom("test").uninstall(["old"])

    assert npm.command_line == "npm install && npm run build && npm test && npm uninstall old"
    assert npm.argv() == ["bash", "-c", npm.command_line]


def test_bare_string_package_list_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(TypeError, match="install"):
        _npm(tmp_path).install("react")  # type: ignore[arg-type]


def test_arguments_are_quoted_by_default(tmp_path: Path) -> None:
    assert _npm(tmp_path).install(["left pad"]).command_line == "npm install 'left pad'"
    assert _npm(tmp_path).run("build; echo pwned").command_line == "npm run 'build; echo pwned'"


def test_windows_shell_leaves_arguments_unquoted(tmp_path: Path) -> None:
    npm = NpmEnv(base_env={}, cwd=tmp_path, shell=WINDOWS_SHELL).init_env().install(["react"]).run("build")

    assert not npm.invocation.quote_arguments
    assert npm.argv() == ["cmd.exe", "/C", "npm install react && npm run build"]


def test_windows_shell_rejects_quoting(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="cmd.exe"):
        NpmEnv(base_env={}, cwd=tmp_path, shell=WINDOWS_SHELL).quote_arguments(True)
    with pytest.raises(ValueError, match="cmd.exe"):
        Invocation(shell=WINDOWS_SHELL, cwd=tmp_path, quote_arguments=True)


def test_execute_passes_shell_for_rendering(tmp_path: Path, recording_runner) -> None:  # noqa: ANN001
    NpmEnv(base_env={}, cwd=tmp_path, shell=WINDOWS_SHELL).init_env().install().execute()

    (args, options), = recording_runner.calls
    assert args == ["cmd.exe", "/C", "npm install"]
    assert options.shell is WINDOWS_SHELL


def test_quoting_can_be_disabled(tmp_path: Path) -> None:
    npm = NpmEnv(base_env={}, cwd=tmp_path, shell=POSIX_SHELL).quote_arguments(False).init_env()
    assert npm.install(["left pad"]).command_line == "npm install left pad"


def test_default_builder_uses_process_context(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("NPMCHAIN_DEFAULT", "1")

    npm = Npm()

    assert npm.invocation.cwd == tmp_path
    assert npm.invocation.environment["NPMCHAIN_DEFAULT"] == "1"


def test_execute_spawns_joined_command(tmp_path: Path, recording_runner) -> None:  # noqa: ANN001
    npm = NpmEnv(base_env={"A": "1"}, cwd=tmp_path, shell=POSIX_SHELL).with_env("B", "2").init_env()

    status = npm.install().run("build").execute()

    (args, options), = recording_runner.calls
    assert args == ["bash", "-c", "npm install && npm run build"]
    assert options.cwd == tmp_path
    assert dict(options.env or {}) == {"A": "1", "B": "2"}
    assert options.shell is POSIX_SHELL
    assert not options.capture_output
    assert status.success
    assert status.code == 0
    assert status.command_line == "npm install && npm run build"
    assert status.stdout is None


def test_execute_reports_failure_without_raising(tmp_path: Path, recording_runner) -> None:  # noqa: ANN001
    recording_runner.returncode = 1

    status = _npm(tmp_path).install().execute()

    assert not status.success
    assert status.code == 1
    with pytest.raises(NpmCommandError, match="status 1"):
        status.check()


def test_execute_can_capture_output(tmp_path: Path, recording_runner) -> None:  # noqa: ANN001
    status = _npm(tmp_path).custom("ls").execute(capture_output=True)

    assert recording_runner.calls[0][1].capture_output
    assert (status.stdout, status.stderr) == ("out", "err")


def test_execute_without_fragments_is_rejected(tmp_path: Path, recording_runner) -> None:  # noqa: ANN001
    npm = _npm(tmp_path)

    with pytest.raises(EmptyCommandError):
        npm.execute()

    assert recording_runner.calls == []
    # the builder stays usable after the rejected call
    assert npm.install().execute().success


def test_execute_empty_when_allowed(tmp_path: Path, recording_runner) -> None:  # noqa: ANN001
    _npm(tmp_path).execute(allow_empty=True)
    assert recording_runner.calls[0][0] == ["bash", "-c", ""]


def test_builder_rejects_use_after_execute(tmp_path: Path, recording_runner) -> None:  # noqa: ANN001
    npm = _npm(tmp_path).install()
    npm.execute()

    with pytest.raises(BuilderConsumedError, match="execute"):
        npm.run("build")
    with pytest.raises(BuilderConsumedError):
        npm.execute()
    assert len(recording_runner.calls) == 1


def test_status_signal_and_code() -> None:
    killed = ExecutionStatus(args=("bash", "-c", "npm test"), command_line="npm test", returncode=-9)
    assert killed.code is None
    assert killed.signal == 9
    assert not killed.success
    assert ExecutionStatus(args=(), command_line="", returncode=0).check().success


def test_invocation_can_be_supplied_directly(tmp_path: Path) -> None:
    invocation = Invocation(shell=POSIX_SHELL, cwd=tmp_path, environment={"X": "1"})
    assert Npm(invocation).install().argv() == ["bash", "-c", "npm install"]
