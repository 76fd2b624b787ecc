from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from runners import __version__
from runners.cli.app import app
from runners.cli.commands import publish as publish_cmd
from runners.cli.commands._helpers import runner_error_code
from runners.cli.context import CLIContext
from runners.core.errors import ErrorCode
from runners.core.result import Err, Ok, Result
from runners.output.console import MockConsole
from runners.services.publish.errors import RunnerError
from runners.services.publish.manager import RunOutcome

runner = CliRunner()


class FakeManager:
    def __init__(self, result: Result[RunOutcome, RunnerError]) -> None:
        self.result = result
        self.calls: list[tuple[str, tuple[object, ...]]] = []

    def add_file_at_path_to_repo_if_needed(self, *args: object) -> Result[RunOutcome, RunnerError]:
        self.calls.append(("add_file", args))
        return self.result

    def push_if_changes_needed(self, *args: object) -> Result[RunOutcome, RunnerError]:
        self.calls.append(("push_file", args))
        return self.result

    def push_if_changes_needed_for_directory(
        self, *args: object
    ) -> Result[RunOutcome, RunnerError]:
        self.calls.append(("push_dir", args))
        return self.result


def _install(
    monkeypatch: pytest.MonkeyPatch, result: Result[RunOutcome, RunnerError]
) -> tuple[FakeManager, MockConsole]:
    manager = FakeManager(result)
    console = MockConsole()
    ctx = CLIContext(console=console, manager=manager)  # type: ignore[arg-type]
    monkeypatch.setattr(publish_cmd, "build_context", lambda: ctx)
    return manager, console


def test_version() -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_push_file_success(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    artifact = tmp_path / "data.json"
    artifact.write_text("{}", encoding="utf-8")
    outcome = RunOutcome(
        updated=True,
        git_directory=tmp_path / "clone",
        new_hash="abc",
        package_path=tmp_path / "clone" / "Acme.Data.1.0.0.nupkg",
    )
    manager, console = _install(monkeypatch, Ok(outcome))

    result = runner.invoke(
        app,
        [
            "push-file",
            str(artifact),
            "--name",
            "data.json",
            "--library",
            "Acme.Data",
            "--repo",
            "https://github.com/acme/acme.data",
        ],
    )

    assert result.exit_code == 0, result.output
    assert manager.calls == [
        (
            "push_file",
            (artifact.resolve(), "data.json", "Acme.Data", "https://github.com/acme/acme.data"),
        )
    ]
    assert "Acme.Data.1.0.0.nupkg" in console.text


def test_add_file_unchanged_exits_zero(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    manager, _ = _install(monkeypatch, Ok(RunOutcome(updated=False, git_directory=tmp_path)))

    result = runner.invoke(
        app,
        ["add-file", "data.json", "--name", "data.json", "--library", "L", "--repo", "uri"],
    )

    assert result.exit_code == 0, result.output
    assert manager.calls[0][0] == "add_file"


def test_push_dir_passes_resources_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    manager, _ = _install(monkeypatch, Ok(RunOutcome(updated=False, git_directory=tmp_path)))

    result = runner.invoke(
        app,
        [
            "push-dir",
            str(tmp_path),
            "--resources-dir",
            "Data",
            "--library",
            "Acme.Data",
            "--repo",
            "uri",
        ],
    )

    assert result.exit_code == 0, result.output
    assert manager.calls == [("push_dir", ("Data", tmp_path.resolve(), "Acme.Data", "uri"))]


def test_missing_environment_exits_with_env_error(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    error = RunnerError(
        kind="env_missing",
        message="missing required environment variable: GH__TOKEN",
        hint="Set: GH__TOKEN",
    )
    _, console = _install(monkeypatch, Err(error))

    result = runner.invoke(
        app,
        ["push-file", "f", "--name", "f", "--library", "L", "--repo", "uri"],
    )

    assert result.exit_code == int(ErrorCode.ENV_ERROR)
    assert console.has_error()
    assert "GH__TOKEN" in console.text


@pytest.mark.parametrize(
    ("kind", "code"),
    [
        ("env_missing", ErrorCode.ENV_ERROR),
        ("invalid_input", ErrorCode.USER_ERROR),
        ("package_failed", ErrorCode.BUILD_ERROR),
        ("git_failed", ErrorCode.NETWORK_ERROR),
        ("release_failed", ErrorCode.NETWORK_ERROR),
        ("registry_failed", ErrorCode.NETWORK_ERROR),
        ("hash_failed", ErrorCode.IO_ERROR),
        ("io_failed", ErrorCode.IO_ERROR),
    ],
)
def test_runner_error_code(kind: str, code: ErrorCode) -> None:
    assert runner_error_code(kind) == code  # type: ignore[arg-type]
