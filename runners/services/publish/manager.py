"""Hash-gated publish flows.

Each operation clones the package repository, compares the artifact with the
hash recorded there and stops if nothing changed. Otherwise it reads the
credentials from the environment and runs the publish steps in a fixed order.
Any ``Err`` from a collaborator is returned as-is and ends the run.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from runners.core.result import Err, Ok, Result
from runners.output.console import ConsoleProtocol, Style
from runners.platform.files import copy_file
from runners.services.publish import config
from runners.services.publish.errors import RunnerError
from runners.services.publish.protocols import (
    GitUtilProtocol,
    HashCheckerProtocol,
    HashSaverProtocol,
    PackageManagerProtocol,
    RegistryPushProtocol,
    ReleasesUtilProtocol,
)
from runners.services.publish.settings import load_git_credentials, load_publish_settings


@dataclass(frozen=True, slots=True)
class RunOutcome:
    """What a publish run did.

    Attributes:
        updated: False when the artifact matched the recorded hash.
        git_directory: The temporary clone used for the run.
        new_hash: Hash of the artifact (None only if the check never ran).
        package_path: The pushed .nupkg, for flows that build one.
    """

    updated: bool
    git_directory: Path
    new_hash: str | None = None
    package_path: Path | None = None


def resources_path(git_directory: Path, *parts: str) -> Path:
    return git_directory.joinpath(*config.RESOURCES_DIR_PARTS, *parts)


def resolve_resource_target(
    git_directory: Path, relative: str, *, allow_root: bool = False
) -> Result[Path, RunnerError]:
    """Join ``relative`` onto the clone's resources directory.

    Absolute paths and ``..`` segments that leave ``src/Resources`` are
    rejected: the target is later cleared or unlinked.
    """
    root = resources_path(git_directory)
    target = resources_path(git_directory, relative)
    resolved_root = root.resolve()
    resolved = target.resolve()
    if not resolved.is_relative_to(resolved_root) or (
        resolved == resolved_root and not allow_root
    ):
        return Err(
            RunnerError(
                kind="invalid_input",
                message=f"resource path escapes {root}: {relative}",
                hint="Use a path relative to src/Resources without '..'",
            )
        )
    return Ok(target)


def package_file_path(git_directory: Path, library_name: str, version: str) -> Path:
    return git_directory / f"{library_name}.{version}.nupkg"


class RunnersManager:
    """Runs the hash-gated publish flows against injected collaborators."""

    def __init__(
        self,
        *,
        git_util: GitUtilProtocol,
        hash_checker: HashCheckerProtocol,
        hash_saver: HashSaverProtocol,
        package_manager: PackageManagerProtocol,
        releases_util: ReleasesUtilProtocol,
        registry: RegistryPushProtocol,
        console: ConsoleProtocol,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._git_util = git_util
        self._hash_checker = hash_checker
        self._hash_saver = hash_saver
        self._package_manager = package_manager
        self._releases_util = releases_util
        self._registry = registry
        self._console = console
        self._environ = environ

    def add_file_at_path_to_repo_if_needed(
        self,
        file_path: Path,
        file_name: str,
        library_name: str,
        git_repo_uri: str,
    ) -> Result[RunOutcome, RunnerError]:
        """Copy ``file_path`` into the repository and record its hash, if it changed."""
        self._console.info(
            f"Adding file to repo if changes are needed for {file_name} in {library_name} "
            f"from {git_repo_uri}..."
        )

        cloned = self._git_util.clone_to_temp_directory(git_repo_uri)
        if isinstance(cloned, Err):
            return cloned
        git_directory = cloned.value

        resolved_target = resolve_resource_target(git_directory, file_name)
        if isinstance(resolved_target, Err):
            return resolved_target
        target_file_path = resolved_target.value

        check = self._hash_checker.check_for_hash_differences(
            git_directory, file_path, config.HASH_FILENAME
        )
        if isinstance(check, Err):
            return check
        if not check.value.changed:
            return Ok(self._unchanged(git_directory, check.value.new_hash))
        new_hash = check.value.new_hash

        creds = load_git_credentials(self._env())
        if isinstance(creds, Err):
            return creds
        git = creds.value

        self._console.print(f"copy {file_path} -> {target_file_path}", Style.DIM)
        try:
            copy_file(file_path, target_file_path, overwrite=True)
        except OSError as e:
            return Err(RunnerError(kind="io_failed", message=f"failed to copy {file_path}: {e}"))

        saved = self._hash_saver.save_hash_without_clearing_resources(
            git_directory, new_hash, config.HASH_FILENAME, git.name, git.email, git.token
        )
        if isinstance(saved, Err):
            return saved

        self._console.success(f"{file_name} updated in {git_repo_uri}")
        return Ok(RunOutcome(updated=True, git_directory=git_directory, new_hash=new_hash))

    def push_if_changes_needed(
        self,
        file_path: Path,
        file_name: str,
        library_name: str,
        git_repo_uri: str,
    ) -> Result[RunOutcome, RunnerError]:
        """Publish a package containing ``file_path`` if the file changed.

        Order: build/pack/push to NuGet, save hash, GitHub release, GitHub Packages.
        """
        self._console.info(
            f"Pushing if changes are needed for {file_name} in {library_name} "
            f"from {git_repo_uri}..."
        )

        cloned = self._git_util.clone_to_temp_directory(git_repo_uri)
        if isinstance(cloned, Err):
            return cloned
        git_directory = cloned.value

        resolved_target = resolve_resource_target(git_directory, file_name)
        if isinstance(resolved_target, Err):
            return resolved_target
        target_file_path = resolved_target.value

        check = self._hash_checker.check_for_hash_differences(
            git_directory, file_path, config.HASH_FILENAME
        )
        if isinstance(check, Err):
            return check
        if not check.value.changed:
            return Ok(self._unchanged(git_directory, check.value.new_hash))
        new_hash = check.value.new_hash

        loaded = load_publish_settings(self._env())
        if isinstance(loaded, Err):
            return loaded
        settings = loaded.value
        git = settings.git

        packed = self._package_manager.build_pack_and_push_file(
            git_directory,
            library_name,
            target_file_path,
            file_path,
            settings.version,
            settings.nuget_token,
        )
        if isinstance(packed, Err):
            return packed

        saved = self._hash_saver.save_hash_as_file(
            git_directory,
            new_hash,
            file_name,
            config.HASH_FILENAME,
            git.name,
            git.email,
            git.username,
            git.token,
        )
        if isinstance(saved, Err):
            return saved

        released = self._create_github_release(
            file_path, library_name, settings.version, git.username, git.token
        )
        if isinstance(released, Err):
            return released

        published = self._publish_to_github_packages(
            git_directory, library_name, settings.version, settings.packages_owner, git.token
        )
        if isinstance(published, Err):
            return published

        self._console.success(f"{library_name} {settings.version} published")
        return Ok(
            RunOutcome(
                updated=True,
                git_directory=git_directory,
                new_hash=new_hash,
                package_path=published.value,
            )
        )

    def push_if_changes_needed_for_directory(
        self,
        resources_relative_dir: str,
        source_dir: Path,
        library_name: str,
        git_repo_uri: str,
    ) -> Result[RunOutcome, RunnerError]:
        """Publish a package containing the tree under ``source_dir`` if it changed.

        No GitHub release is cut for directory packages.
        """
        self._console.info(
            f"Pushing if changes are needed for {resources_relative_dir} in {library_name} "
            f"from {git_repo_uri}..."
        )

        cloned = self._git_util.clone_to_temp_directory(git_repo_uri)
        if isinstance(cloned, Err):
            return cloned
        git_directory = cloned.value

        resolved_dir = resolve_resource_target(
            git_directory, resources_relative_dir, allow_root=True
        )
        if isinstance(resolved_dir, Err):
            return resolved_dir
        target_dir = resolved_dir.value
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            return Err(RunnerError(kind="io_failed", message=f"failed to create {target_dir}: {e}"))

        check = self._hash_checker.check_for_hash_differences_of_directory(
            git_directory, source_dir, config.HASH_FILENAME
        )
        if isinstance(check, Err):
            return check
        if not check.value.changed:
            return Ok(self._unchanged(git_directory, check.value.new_hash))
        new_hash = check.value.new_hash

        loaded = load_publish_settings(self._env())
        if isinstance(loaded, Err):
            return loaded
        settings = loaded.value
        git = settings.git

        packed = self._package_manager.build_pack_and_push_directory(
            git_directory,
            library_name,
            target_dir,
            source_dir,
            settings.version,
            settings.nuget_token,
        )
        if isinstance(packed, Err):
            return packed

        saved = self._hash_saver.save_hash_as_directory(
            git_directory,
            new_hash,
            target_dir,
            config.HASH_FILENAME,
            git.name,
            git.email,
            git.username,
            git.token,
        )
        if isinstance(saved, Err):
            return saved

        published = self._publish_to_github_packages(
            git_directory, library_name, settings.version, settings.packages_owner, git.token
        )
        if isinstance(published, Err):
            return published

        self._console.success(f"{library_name} {settings.version} published")
        return Ok(
            RunOutcome(
                updated=True,
                git_directory=git_directory,
                new_hash=new_hash,
                package_path=published.value,
            )
        )

    def _env(self) -> Mapping[str, str]:
        return os.environ if self._environ is None else self._environ

    def _unchanged(self, git_directory: Path, new_hash: str) -> RunOutcome:
        self._console.info("No changes detected; nothing to publish")
        return RunOutcome(updated=False, git_directory=git_directory, new_hash=new_hash)

    def _create_github_release(
        self, file_path: Path, library_name: str, version: str, username: str, token: str
    ) -> Result[None, RunnerError]:
        return self._releases_util.create(
            username,
            library_name.lower(),
            version,
            version,
            config.RELEASE_BODY,
            file_path,
            draft=False,
            prerelease=False,
            token=token,
        )

    def _publish_to_github_packages(
        self, git_directory: Path, library_name: str, version: str, owner: str, token: str
    ) -> Result[Path, RunnerError]:
        package_path = package_file_path(git_directory, library_name, version)
        pushed = self._registry.nuget_push(
            package_path,
            source=config.GITHUB_PACKAGES_SOURCE.format(owner=owner),
            api_key=token,
        )
        if isinstance(pushed, Err):
            return pushed
        return Ok(package_path)
