from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

import pytest

from runners.core.result import Err, Ok, Result
from runners.output.console import MockConsole
from runners.platform.process import ProcessError
from runners.services.publish import dotnet as dotnet_mod
from runners.services.publish.dotnet import DotnetCli
from runners.services.publish.packaging import PackageManager


class FakeRun:
    def __init__(self, fail_on: str | None = None) -> None:
        self.commands: list[list[str]] = []
        self._fail_on = fail_on

    def __call__(
        self,
        cmd: list[str],
        cwd: Path,
        env: Mapping[str, str] | None = None,
        *,
        timeout: float | None = None,
    ) -> Result[str, ProcessError]:
        del cwd, env, timeout
        self.commands.append(cmd)
        if self._fail_on is not None and self._fail_on in cmd:
            return Err(ProcessError(tuple(cmd), 1, "", f"{self._fail_on} exploded"))
        return Ok("")


def _clone(tmp_path: Path, library: str = "Acme.Data") -> Path:
    clone = tmp_path / "clone"
    (clone / "src").mkdir(parents=True)
    (clone / "src" / f"{library}.csproj").write_text("<Project />", encoding="utf-8")
    return clone


def _manager(console: MockConsole) -> PackageManager:
    return PackageManager(
        dotnet=DotnetCli(console=console),
        console=console,
        source="https://nuget.example/v3/index.json",
    )


def test_file_is_copied_then_built_packed_and_pushed(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    fake = FakeRun()
    monkeypatch.setattr(dotnet_mod, "run_process", fake)
    clone = _clone(tmp_path)
    artifact = tmp_path / "data.json"
    artifact.write_text("{}", encoding="utf-8")
    target = clone / "src" / "Resources" / "data.json"
    console = MockConsole()

    result = _manager(console).build_pack_and_push_file(
        clone, "Acme.Data", target, artifact, "1.2.3", "nuget-secret"
    )

    assert isinstance(result, Ok)
    assert result.value == clone / "Acme.Data.1.2.3.nupkg"
    assert target.read_text(encoding="utf-8") == "{}"
    assert [cmd[1] for cmd in fake.commands] == ["build", "pack", "nuget"]

    build, pack, push = fake.commands
    assert "-p:Version=1.2.3" in build
    assert "-p:PackageVersion=1.2.3" in pack
    assert pack[pack.index("--output") + 1] == str(clone)
    assert push[push.index("--source") + 1] == "https://nuget.example/v3/index.json"
    assert push[push.index("--api-key") + 1] == "nuget-secret"
    # The API key is never echoed.
    assert "nuget-secret" not in console.text


def test_directory_replaces_target_contents(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setattr(dotnet_mod, "run_process", FakeRun())
    clone = _clone(tmp_path)
    source = tmp_path / "resources"
    (source / "sub").mkdir(parents=True)
    (source / "sub" / "new.txt").write_text("new", encoding="utf-8")
    target = clone / "src" / "Resources" / "Data"
    target.mkdir(parents=True)
    (target / "stale.txt").write_text("old", encoding="utf-8")

    result = _manager(MockConsole()).build_pack_and_push_directory(
        clone, "Acme.Data", target, source, "1.2.3", "tok"
    )

    assert isinstance(result, Ok)
    assert (target / "sub" / "new.txt").read_text(encoding="utf-8") == "new"
    assert not (target / "stale.txt").exists()


def test_missing_project_fails_before_dotnet(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    fake = FakeRun()
    monkeypatch.setattr(dotnet_mod, "run_process", fake)
    clone = _clone(tmp_path, library="Other")
    artifact = tmp_path / "data.json"
    artifact.write_text("{}", encoding="utf-8")

    result = _manager(MockConsole()).build_pack_and_push_file(
        clone, "Acme.Data", clone / "src" / "Resources" / "data.json", artifact, "1.0.0", "tok"
    )

    assert isinstance(result, Err)
    assert result.error.kind == "package_failed"
    assert fake.commands == []


def test_build_failure_stops_before_push(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    fake = FakeRun(fail_on="build")
    monkeypatch.setattr(dotnet_mod, "run_process", fake)
    clone = _clone(tmp_path)
    artifact = tmp_path / "data.json"
    artifact.write_text("{}", encoding="utf-8")

    result = _manager(MockConsole()).build_pack_and_push_file(
        clone, "Acme.Data", clone / "src" / "Resources" / "data.json", artifact, "1.0.0", "tok"
    )

    assert isinstance(result, Err)
    assert result.error.kind == "package_failed"
    assert result.error.hint == "build exploded"
    assert len(fake.commands) == 1


def test_push_failure_is_registry_failed(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setattr(dotnet_mod, "run_process", FakeRun(fail_on="push"))

    result = DotnetCli(console=MockConsole()).nuget_push(
        tmp_path / "Acme.Data.1.0.0.nupkg",
        source="https://nuget.pkg.github.com/acme/index.json",
        api_key="tok",
    )

    assert isinstance(result, Err)
    assert result.error.kind == "registry_failed"
    assert "Acme.Data.1.0.0.nupkg" in result.error.message
