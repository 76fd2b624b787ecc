"""Git operations used by the publish flow.

Usage:
    from runners.git import Repository, clone_to_temp_directory

    match clone_to_temp_directory("https://github.com/org/repo"):
        case Ok(path):
            repo = Repository(path)
"""

from runners.git.clone import clone_to_temp_directory
from runners.git.repository import (
    DEFAULT_TOKEN_USERNAME,
    GitError,
    GitIdentity,
    Repository,
    auth_env,
)

__all__ = [
    "DEFAULT_TOKEN_USERNAME",
    "GitError",
    "GitIdentity",
    "Repository",
    "auth_env",
    "clone_to_temp_directory",
]
