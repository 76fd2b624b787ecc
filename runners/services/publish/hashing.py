"""Content hashing and comparison with the last published hash."""

from __future__ import annotations

import hashlib
from collections.abc import Callable
from pathlib import Path

from runners.core.result import Err, Ok, Result
from runners.output.console import ConsoleProtocol, Style
from runners.services.publish.errors import RunnerError
from runners.services.publish.protocols import HashCheck

_CHUNK_SIZE = 1024 * 1024


def sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
            h.update(chunk)
    return h.hexdigest()


def sha256_directory(root: Path) -> str:
    """Hash every file under ``root`` together with its relative path.

    Files are visited in sorted POSIX-path order so the result does not depend
    on the platform or on directory listing order. Renaming a file changes the
    hash even if its bytes do not.
    """
    h = hashlib.sha256()
    files = sorted(
        (p for p in root.rglob("*") if p.is_file()),
        key=lambda p: p.relative_to(root).as_posix(),
    )
    for path in files:
        rel = path.relative_to(root).as_posix()
        h.update(rel.encode("utf-8"))
        h.update(b"\0")
        h.update(sha256_file(path).encode("ascii"))
        h.update(b"\n")
    return h.hexdigest()


def read_recorded_hash(git_directory: Path, hash_filename: str) -> str | None:
    """Stripped contents of the recorded hash file, or None if absent/empty."""
    path = git_directory / hash_filename
    if not path.is_file():
        return None
    return path.read_text(encoding="utf-8").strip() or None


class HashChecker:
    """Decides whether an artifact changed since the last published version."""

    def __init__(self, *, console: ConsoleProtocol) -> None:
        self._console = console

    def check_for_hash_differences(
        self, git_directory: Path, file_path: Path, hash_filename: str
    ) -> Result[HashCheck, RunnerError]:
        if not file_path.is_file():
            return Err(
                RunnerError(
                    kind="invalid_input",
                    message=f"file not found: {file_path}",
                )
            )
        return self._compare(git_directory, hash_filename, lambda: sha256_file(file_path))

    def check_for_hash_differences_of_directory(
        self, git_directory: Path, source_dir: Path, hash_filename: str
    ) -> Result[HashCheck, RunnerError]:
        if not source_dir.is_dir():
            return Err(
                RunnerError(
                    kind="invalid_input",
                    message=f"directory not found: {source_dir}",
                )
            )
        return self._compare(git_directory, hash_filename, lambda: sha256_directory(source_dir))

    def _compare(
        self, git_directory: Path, hash_filename: str, compute: Callable[[], str]
    ) -> Result[HashCheck, RunnerError]:
        try:
            new_hash = compute()
            old_hash = read_recorded_hash(git_directory, hash_filename)
        except (OSError, UnicodeDecodeError) as e:
            return Err(RunnerError(kind="hash_failed", message=f"failed to hash artifact: {e}"))

        if old_hash is None:
            self._console.print(f"no recorded {hash_filename}; treating as changed", Style.DIM)
        else:
            self._console.print(f"recorded hash: {old_hash}", Style.DIM)
        self._console.print(f"current hash:  {new_hash}", Style.DIM)

        return Ok(HashCheck(changed=new_hash != old_hash, new_hash=new_hash))
