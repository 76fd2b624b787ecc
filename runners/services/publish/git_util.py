from __future__ import annotations

from pathlib import Path

from runners.core.result import Err, Ok, Result
from runners.git.clone import clone_to_temp_directory
from runners.output.console import ConsoleProtocol, Style
from runners.services.publish.errors import RunnerError


class GitUtil:
    """Clones the package repository for one publish run."""

    def __init__(self, *, console: ConsoleProtocol) -> None:
        self._console = console

    def clone_to_temp_directory(self, uri: str) -> Result[Path, RunnerError]:
        self._console.print(f"git clone {uri}", Style.DIM)
        result = clone_to_temp_directory(uri)
        if isinstance(result, Err):
            return Err(
                RunnerError(
                    kind="git_failed",
                    message=f"failed to clone {uri}",
                    hint=result.error.message,
                )
            )

        self._console.print(f"cloned into {result.value}", Style.DIM)
        return Ok(result.value)
