"""Collaborator interfaces the publish coordinator depends on.

The default implementations live next to this module; tests substitute
recording fakes.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from runners.core.result import Result
from runners.services.publish.errors import RunnerError


@dataclass(frozen=True, slots=True)
class HashCheck:
    """Outcome of comparing an artifact with the last recorded hash.

    Attributes:
        changed: True if the artifact differs (or nothing was recorded yet).
        new_hash: Hash of the artifact as it is now.
    """

    changed: bool
    new_hash: str


class GitUtilProtocol(Protocol):
    def clone_to_temp_directory(self, uri: str) -> Result[Path, RunnerError]: ...


class HashCheckerProtocol(Protocol):
    def check_for_hash_differences(
        self, git_directory: Path, file_path: Path, hash_filename: str
    ) -> Result[HashCheck, RunnerError]: ...

    def check_for_hash_differences_of_directory(
        self, git_directory: Path, source_dir: Path, hash_filename: str
    ) -> Result[HashCheck, RunnerError]: ...


class HashSaverProtocol(Protocol):
    def save_hash_without_clearing_resources(
        self,
        git_directory: Path,
        new_hash: str,
        hash_filename: str,
        git_name: str,
        git_email: str,
        token: str,
    ) -> Result[None, RunnerError]: ...

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
    ) -> Result[None, RunnerError]: ...

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
    ) -> Result[None, RunnerError]: ...


class PackageManagerProtocol(Protocol):
    def build_pack_and_push_file(
        self,
        git_directory: Path,
        library_name: str,
        target_file_path: Path,
        file_path: Path,
        version: str,
        nuget_token: str,
    ) -> Result[Path, RunnerError]: ...

    def build_pack_and_push_directory(
        self,
        git_directory: Path,
        library_name: str,
        target_dir: Path,
        source_dir: Path,
        version: str,
        nuget_token: str,
    ) -> Result[Path, RunnerError]: ...


class ReleasesUtilProtocol(Protocol):
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
    ) -> Result[None, RunnerError]: ...


class RegistryPushProtocol(Protocol):
    def nuget_push(
        self, package_path: Path, *, source: str, api_key: str
    ) -> Result[None, RunnerError]: ...
