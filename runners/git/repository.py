"""Git repository abstraction.

Only the handful of operations the publish flow needs: stage, commit with an
explicit identity, push with a token. All operations return Result types.

Credentials are handed to git through the ``GIT_CONFIG_*`` environment
variables (git >= 2.31) so they never show up in a command line, a process
listing or a :class:`ProcessError` message.

Usage:
    repo = Repository(clone_dir)
    repo.add_all()
    repo.commit("Automated update", identity=GitIdentity("ci", "ci@example.com"))
    repo.push(username="ci", token=token)
"""

from __future__ import annotations

import base64
from dataclasses import dataclass
from pathlib import Path

from runners.core.result import Err, Ok, Result
from runners.platform.process import ProcessError
from runners.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0
_GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0

# Username GitHub accepts together with any token for basic auth.
DEFAULT_TOKEN_USERNAME = "x-access-token"

__all__ = [
    "DEFAULT_TOKEN_USERNAME",
    "GitError",
    "GitIdentity",
    "Repository",
    "auth_env",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git subcommand that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1

    @classmethod
    def from_process(cls, command: str, error: ProcessError) -> GitError:
        return cls(
            command=command,
            message=error.detail() or f"git {command} failed",
            returncode=error.returncode,
        )


@dataclass(frozen=True, slots=True)
class GitIdentity:
    """Author and committer identity for automated commits."""

    name: str
    email: str


def auth_env(*, username: str | None, token: str) -> dict[str, str]:
    """Environment that makes git send ``token`` as HTTP basic auth."""
    user = username or DEFAULT_TOKEN_USERNAME
    basic = base64.b64encode(f"{user}:{token}".encode()).decode("ascii")
    return {
        "GIT_TERMINAL_PROMPT": "0",
        "GIT_CONFIG_COUNT": "1",
        "GIT_CONFIG_KEY_0": "http.extraheader",
        "GIT_CONFIG_VALUE_0": f"AUTHORIZATION: basic {basic}",
    }


class Repository:
    """A local git working tree.

    Attributes:
        path: Path to the repository root
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def add_all(self, paths: list[Path] | None = None) -> Result[None, GitError]:
        """Stage every change, or only changes under ``paths``."""
        args = ["add", "-A"]
        if paths:
            args += ["--", *(p.relative_to(self.path).as_posix() for p in paths)]
        result = self._run(args)
        if isinstance(result, Err):
            return Err(GitError.from_process("add", result.error))
        return Ok(None)

    def has_staged_changes(self) -> Result[bool, GitError]:
        """True if the index differs from HEAD."""
        result = self._run(["diff", "--cached", "--quiet"])
        match result:
            case Ok(_):
                return Ok(False)
            case Err(e) if e.returncode == 1:
                return Ok(True)
            case Err(e):
                return Err(GitError.from_process("diff --cached", e))

    def commit(self, message: str, *, identity: GitIdentity) -> Result[None, GitError]:
        result = self._run(
            [
                "-c",
                f"user.name={identity.name}",
                "-c",
                f"user.email={identity.email}",
                "commit",
                "-m",
                message,
            ]
        )
        if isinstance(result, Err):
            return Err(GitError.from_process("commit", result.error))
        return Ok(None)

    def push(self, *, username: str | None, token: str) -> Result[None, GitError]:
        """Push the current branch to its upstream."""
        result = self._run(["push"], env=auth_env(username=username, token=token))
        if isinstance(result, Err):
            return Err(GitError.from_process("push", result.error))
        return Ok(None)

    def _run(
        self, args: list[str], *, env: dict[str, str] | None = None
    ) -> Result[str, ProcessError]:
        command = next((a for a in args if not a.startswith("-") and "=" not in a), "")
        timeout = (
            _GIT_NETWORK_TIMEOUT_SECONDS
            if command in {"fetch", "pull", "push", "clone"}
            else _GIT_TIMEOUT_SECONDS
        )
        return run_process(
            ["git", "-C", str(self.path), *args], cwd=self.path, env=env, timeout=timeout
        )
