"""Recording the published hash back into the package repository.

Each save writes the hash file, commits it with the CI identity and pushes.
The ``as_file`` / ``as_directory`` variants first remove the artifact that was
copied under ``src/Resources``: the package already carries it, the repository
only keeps the hash.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from runners.core.result import Err, Ok, Result
from runners.git.repository import GitError, GitIdentity, Repository
from runners.output.console import ConsoleProtocol, Style
from runners.platform.files import atomic_write_text, clear_directory
from runners.services.publish import config
from runners.services.publish.errors import RunnerError


def _git_error(error: GitError) -> RunnerError:
    return RunnerError(
        kind="git_failed",
        message=f"git {error.command} failed",
        hint=error.message,
    )


class HashSaver:
    def __init__(
        self,
        *,
        console: ConsoleProtocol,
        repository_factory: Callable[[Path], Repository] = Repository,
    ) -> None:
        self._console = console
        self._repository_factory = repository_factory

    def save_hash_without_clearing_resources(
        self,
        git_directory: Path,
        new_hash: str,
        hash_filename: str,
        git_name: str,
        git_email: str,
        token: str,
    ) -> Result[None, RunnerError]:
        return self._commit_hash(
            git_directory,
            new_hash,
            hash_filename,
            identity=GitIdentity(name=git_name, email=git_email),
            username=None,
            token=token,
        )

    def save_hash_as_file(
        self,
        git_directory: Path,
        new_hash: str,
        file_name: str,
        hash_filename: str,
        git_name: str,
        git_email: str,
        username: str,
        token: str,
    ) -> Result[None, RunnerError]:
        resource = git_directory.joinpath(*config.RESOURCES_DIR_PARTS, file_name)
        self._console.print(f"remove {resource}", Style.DIM)
        try:
            resource.unlink(missing_ok=True)
        except OSError as e:
            return Err(RunnerError(kind="io_failed", message=f"failed to remove {resource}: {e}"))

        return self._commit_hash(
            git_directory,
            new_hash,
            hash_filename,
            identity=GitIdentity(name=git_name, email=git_email),
            username=username,
            token=token,
        )

    def save_hash_as_directory(
        self,
        git_directory: Path,
        new_hash: str,
        target_dir: Path,
        hash_filename: str,
        git_name: str,
        git_email: str,
        username: str,
        token: str,
    ) -> Result[None, RunnerError]:
        self._console.print(f"clear {target_dir}", Style.DIM)
        try:
            clear_directory(target_dir)
        except OSError as e:
            return Err(RunnerError(kind="io_failed", message=f"failed to clear {target_dir}: {e}"))

        return self._commit_hash(
            git_directory,
            new_hash,
            hash_filename,
            identity=GitIdentity(name=git_name, email=git_email),
            username=username,
            token=token,
        )

    def _commit_hash(
        self,
        git_directory: Path,
        new_hash: str,
        hash_filename: str,
        *,
        identity: GitIdentity,
        username: str | None,
        token: str,
    ) -> Result[None, RunnerError]:
        hash_path = git_directory / hash_filename
        self._console.print(f"write {hash_path}", Style.DIM)
        try:
            atomic_write_text(hash_path, new_hash)
        except OSError as e:
            return Err(RunnerError(kind="io_failed", message=f"failed to write {hash_path}: {e}"))

        repo = self._repository_factory(git_directory)

        added = repo.add_all()
        if isinstance(added, Err):
            return Err(_git_error(added.error))

        staged = repo.has_staged_changes()
        if isinstance(staged, Err):
            return Err(_git_error(staged.error))
        if not staged.value:
            self._console.print("nothing to commit", Style.DIM)
            return Ok(None)

        self._console.print(f"git commit -m {config.HASH_COMMIT_MESSAGE}", Style.DIM)
        committed = repo.commit(config.HASH_COMMIT_MESSAGE, identity=identity)
        if isinstance(committed, Err):
            return Err(_git_error(committed.error))

        self._console.print("git push", Style.DIM)
        pushed = repo.push(username=username, token=token)
        if isinstance(pushed, Err):
            return Err(_git_error(pushed.error))

        return Ok(None)
