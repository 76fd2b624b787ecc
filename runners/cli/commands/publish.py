from __future__ import annotations

from pathlib import Path

import typer

from runners.cli.commands._helpers import exit_on_error
from runners.cli.context import CLIContext, build_context
from runners.core.result import Err, Result
from runners.output.console import Style
from runners.services.publish.errors import RunnerError
from runners.services.publish.manager import RunOutcome


def _finish(result: Result[RunOutcome, RunnerError], ctx: CLIContext) -> None:
    exit_on_error(result, ctx)
    if isinstance(result, Err):
        return
    outcome = result.value
    ctx.console.print(f"clone: {outcome.git_directory}", Style.DIM)
    if outcome.package_path is not None:
        ctx.console.print(f"package: {outcome.package_path}", Style.DIM)


def add_file(
    file: Path = typer.Argument(..., help="Artifact file to add"),
    name: str = typer.Option(..., "--name", help="File name under src/Resources"),
    library: str = typer.Option(..., "--library", help="Library (package) name"),
    repo: str = typer.Option(..., "--repo", help="Git repository URI to clone"),
) -> None:
    """Copy a file into the repository and record its hash, if it changed."""
    ctx = build_context()
    result = ctx.manager.add_file_at_path_to_repo_if_needed(
        file.expanduser().resolve(), name, library, repo
    )
    _finish(result, ctx)


def push_file(
    file: Path = typer.Argument(..., help="Artifact file to package"),
    name: str = typer.Option(..., "--name", help="File name under src/Resources"),
    library: str = typer.Option(..., "--library", help="Library (package) name"),
    repo: str = typer.Option(..., "--repo", help="Git repository URI to clone"),
) -> None:
    """Build, publish and release a package for a file, if it changed."""
    ctx = build_context()
    result = ctx.manager.push_if_changes_needed(file.expanduser().resolve(), name, library, repo)
    _finish(result, ctx)


def push_dir(
    source_dir: Path = typer.Argument(..., help="Directory of resources to package"),
    resources_dir: str = typer.Option(
        ..., "--resources-dir", help="Directory under src/Resources to fill"
    ),
    library: str = typer.Option(..., "--library", help="Library (package) name"),
    repo: str = typer.Option(..., "--repo", help="Git repository URI to clone"),
) -> None:
    """Build and publish a package for a resource directory, if it changed."""
    ctx = build_context()
    result = ctx.manager.push_if_changes_needed_for_directory(
        resources_dir, source_dir.expanduser().resolve(), library, repo
    )
    _finish(result, ctx)
