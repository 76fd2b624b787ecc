"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

import typer

from runners.core.errors import ErrorCode
from runners.core.result import Err, Result
from runners.output.console import Style
from runners.services.publish.errors import RunnerError, RunnerErrorKind

if TYPE_CHECKING:
    from runners.cli.context import CLIContext

T = TypeVar("T")


def runner_error_code(kind: RunnerErrorKind) -> ErrorCode:
    match kind:
        case "env_missing":
            return ErrorCode.ENV_ERROR
        case "invalid_input":
            return ErrorCode.USER_ERROR
        case "package_failed":
            return ErrorCode.BUILD_ERROR
        case "git_failed" | "release_failed" | "registry_failed":
            return ErrorCode.NETWORK_ERROR
        case "hash_failed" | "io_failed":
            return ErrorCode.IO_ERROR
    # Fallback for exhaustiveness
    return ErrorCode.USER_ERROR


def exit_on_error(result: Result[T, RunnerError], ctx: CLIContext) -> None:
    """Print the error and exit with its mapped code if ``result`` is Err."""
    if isinstance(result, Err):
        error = result.error
        ctx.console.error(error.message)
        if error.hint:
            ctx.console.print(f"hint: {error.hint}", Style.DIM)
        raise typer.Exit(code=int(runner_error_code(error.kind)))
