from __future__ import annotations

import shutil
from pathlib import Path

from runners.core.result import Err, Ok, Result
from runners.output.console import ConsoleProtocol, Style
from runners.platform.process import run as run_process
from runners.services.publish.errors import RunnerError
from runners.services.publish.timeouts import GH_RELEASE_TIMEOUT_SECONDS


class ReleasesUtil:
    """Creates GitHub releases through the ``gh`` CLI."""

    def __init__(self, *, console: ConsoleProtocol) -> None:
        self._console = console

    def create(
        self,
        owner: str,
        repo: str,
        tag: str,
        title: str,
        body: str,
        asset_path: Path,
        *,
        draft: bool,
        prerelease: bool,
        token: str,
    ) -> Result[None, RunnerError]:
        if shutil.which("gh") is None:
            return Err(
                RunnerError(
                    kind="release_failed",
                    message="gh: missing",
                    hint="Install GitHub CLI: https://cli.github.com/",
                )
            )

        slug = f"{owner}/{repo}"
        cmd = [
            "gh",
            "release",
            "create",
            tag,
            str(asset_path),
            "--repo",
            slug,
            "--title",
            title,
            "--notes",
            body,
        ]
        if draft:
            cmd.append("--draft")
        if prerelease:
            cmd.append("--prerelease")

        self._console.print(f"gh release create {tag} --repo {slug}", Style.DIM)
        result = run_process(
            cmd,
            cwd=asset_path.parent,
            env={"GH_TOKEN": token, "GH_PROMPT_DISABLED": "1"},
            timeout=GH_RELEASE_TIMEOUT_SECONDS,
        )
        if isinstance(result, Err):
            return Err(
                RunnerError(
                    kind="release_failed",
                    message=f"failed to create release {tag} in {slug}",
                    hint=result.error.detail(),
                )
            )
        return Ok(None)
