"""Cloning remote repositories into throwaway working directories."""

from __future__ import annotations

import shutil
import tempfile
from pathlib import Path

from runners.core.result import Err, Ok, Result
from runners.git.repository import GitError
from runners.platform.process import run as run_process

_CLONE_TIMEOUT_SECONDS = 15 * 60.0

__all__ = ["clone_to_temp_directory"]


def clone_to_temp_directory(uri: str, *, prefix: str = "runners-") -> Result[Path, GitError]:
    """Clone ``uri`` into a new temporary directory and return its path.

    The directory is removed again if the clone fails. On success the caller
    owns it.
    """
    tmp = Path(tempfile.mkdtemp(prefix=prefix))
    cmd = ["git", "clone", uri, str(tmp)]

    result = run_process(
        cmd, cwd=tmp.parent, env={"GIT_TERMINAL_PROMPT": "0"}, timeout=_CLONE_TIMEOUT_SECONDS
    )
    if isinstance(result, Err):
        shutil.rmtree(tmp, ignore_errors=True)
        return Err(GitError.from_process("clone", result.error))
    return Ok(tmp)
