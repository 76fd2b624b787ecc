from __future__ import annotations

from pathlib import Path

from runners.core.result import Err, Ok, Result
from runners.output.console import ConsoleProtocol, Style
from runners.platform.process import run as run_process
from runners.services.publish.errors import RunnerError
from runners.services.publish.timeouts import (
    DOTNET_BUILD_TIMEOUT_SECONDS,
    DOTNET_PUSH_TIMEOUT_SECONDS,
)

_DOTNET_ENV = {
    "DOTNET_CLI_TELEMETRY_OPTOUT": "1",
    "DOTNET_NOLOGO": "1",
}


class DotnetCli:
    """Thin wrapper over the ``dotnet`` CLI: build, pack, nuget push."""

    def __init__(self, *, console: ConsoleProtocol) -> None:
        self._console = console

    def build(self, project: Path, *, version: str) -> Result[None, RunnerError]:
        cmd = [
            "dotnet",
            "build",
            str(project),
            "--configuration",
            "Release",
            f"-p:Version={version}",
        ]
        return self._run_build_step(cmd, cwd=project.parent, what="build")

    def pack(self, project: Path, *, version: str, output_dir: Path) -> Result[Path, RunnerError]:
        """Pack ``project`` into ``output_dir`` and return the .nupkg path."""
        cmd = [
            "dotnet",
            "pack",
            str(project),
            "--configuration",
            "Release",
            "--no-build",
            "--output",
            str(output_dir),
            f"-p:PackageVersion={version}",
        ]
        packed = self._run_build_step(cmd, cwd=project.parent, what="pack")
        if isinstance(packed, Err):
            return packed
        return Ok(output_dir / f"{project.stem}.{version}.nupkg")

    def nuget_push(
        self, package_path: Path, *, source: str, api_key: str
    ) -> Result[None, RunnerError]:
        self._console.print(f"dotnet nuget push {package_path.name} --source {source}", Style.DIM)
        result = run_process(
            [
                "dotnet",
                "nuget",
                "push",
                str(package_path),
                "--source",
                source,
                "--api-key",
                api_key,
                "--skip-duplicate",
            ],
            cwd=package_path.parent,
            env=_DOTNET_ENV,
            timeout=DOTNET_PUSH_TIMEOUT_SECONDS,
        )
        if isinstance(result, Err):
            return Err(
                RunnerError(
                    kind="registry_failed",
                    message=f"failed to push {package_path.name} to {source}",
                    hint=result.error.detail(),
                )
            )
        return Ok(None)

    def _run_build_step(self, cmd: list[str], *, cwd: Path, what: str) -> Result[None, RunnerError]:
        self._console.print(" ".join(cmd), Style.DIM)
        result = run_process(cmd, cwd=cwd, env=_DOTNET_ENV, timeout=DOTNET_BUILD_TIMEOUT_SECONDS)
        if isinstance(result, Err):
            return Err(
                RunnerError(
                    kind="package_failed",
                    message=f"dotnet {what} failed (exit {result.error.returncode})",
                    hint=result.error.detail(),
                )
            )
        return Ok(None)
