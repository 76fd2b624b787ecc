from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

RunnerErrorKind = Literal[
    "env_missing",
    "invalid_input",
    "git_failed",
    "hash_failed",
    "io_failed",
    "package_failed",
    "release_failed",
    "registry_failed",
]


@dataclass(frozen=True, slots=True)
class RunnerError:
    """Canonical error payload returned by every publish collaborator.

    The coordinator hands these back to its caller untouched, so the CLI can
    render and map them without knowing which collaborator produced them.
    """

    kind: RunnerErrorKind
    message: str
    hint: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message
