"""Building, packing and pushing the resource package."""

from __future__ import annotations

from pathlib import Path

from runners.core.result import Err, Ok, Result
from runners.output.console import ConsoleProtocol, Style
from runners.platform.files import copy_file, copy_tree
from runners.services.publish import config
from runners.services.publish.dotnet import DotnetCli
from runners.services.publish.errors import RunnerError


def project_path(git_directory: Path, library_name: str) -> Path:
    """Project file of ``library_name`` inside a cloned package repository."""
    return git_directory / "src" / f"{library_name}.csproj"


class PackageManager:
    """Puts the artifact into the package project, then builds, packs and pushes it.

    The package is packed into the clone root so the coordinator can find it
    afterwards as ``<clone>/<library>.<version>.nupkg``.
    """

    def __init__(
        self,
        *,
        dotnet: DotnetCli,
        console: ConsoleProtocol,
        source: str = config.DEFAULT_NUGET_SOURCE,
    ) -> None:
        self._dotnet = dotnet
        self._console = console
        self._source = source

    def build_pack_and_push_file(
        self,
        git_directory: Path,
        library_name: str,
        target_file_path: Path,
        file_path: Path,
        version: str,
        nuget_token: str,
    ) -> Result[Path, RunnerError]:
        self._console.print(f"copy {file_path} -> {target_file_path}", Style.DIM)
        try:
            copy_file(file_path, target_file_path, overwrite=True)
        except OSError as e:
            return Err(RunnerError(kind="io_failed", message=f"failed to copy {file_path}: {e}"))

        return self._build_pack_and_push(git_directory, library_name, version, nuget_token)

    def build_pack_and_push_directory(
        self,
        git_directory: Path,
        library_name: str,
        target_dir: Path,
        source_dir: Path,
        version: str,
        nuget_token: str,
    ) -> Result[Path, RunnerError]:
        self._console.print(f"copy {source_dir}/ -> {target_dir}/", Style.DIM)
        try:
            copy_tree(source_dir, target_dir)
        except OSError as e:
            return Err(RunnerError(kind="io_failed", message=f"failed to copy {source_dir}: {e}"))

        return self._build_pack_and_push(git_directory, library_name, version, nuget_token)

    def _build_pack_and_push(
        self, git_directory: Path, library_name: str, version: str, nuget_token: str
    ) -> Result[Path, RunnerError]:
        project = project_path(git_directory, library_name)
        if not project.is_file():
            return Err(
                RunnerError(
                    kind="package_failed",
                    message=f"project not found: {project}",
                    hint=f"Expected src/{library_name}.csproj in the package repository.",
                )
            )

        built = self._dotnet.build(project, version=version)
        if isinstance(built, Err):
            return built

        packed = self._dotnet.pack(project, version=version, output_dir=git_directory)
        if isinstance(packed, Err):
            return packed

        pushed = self._dotnet.nuget_push(packed.value, source=self._source, api_key=nuget_token)
        if isinstance(pushed, Err):
            return pushed

        return Ok(packed.value)
