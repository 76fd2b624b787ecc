"""Strict access to process environment variables.

CI runners hand credentials and the build version to this tool through the
environment. A required variable that is unset or blank is an error, never a
silent empty string.
"""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from .result import Err, Ok, Result

__all__ = ["EnvError", "get_variable", "get_variable_strict", "require_variables"]


@dataclass(frozen=True, slots=True)
class EnvError:
    """One or more required environment variables are missing.

    Attributes:
        names: Missing variable names, in the order they were requested.
    """

    names: tuple[str, ...]

    @property
    def message(self) -> str:
        return f"missing required environment variable: {self.names[0]}"

    @property
    def hint(self) -> str:
        return "Set: " + ", ".join(self.names)


def _source(environ: Mapping[str, str] | None) -> Mapping[str, str]:
    return os.environ if environ is None else environ


def get_variable(name: str, environ: Mapping[str, str] | None = None) -> str | None:
    """Return the stripped value of ``name``, or None if unset or blank."""
    value = _source(environ).get(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def get_variable_strict(
    name: str, environ: Mapping[str, str] | None = None
) -> Result[str, EnvError]:
    value = get_variable(name, environ)
    if value is None:
        return Err(EnvError(names=(name,)))
    return Ok(value)


def require_variables(
    names: Sequence[str], environ: Mapping[str, str] | None = None
) -> Result[dict[str, str], EnvError]:
    """Read every name in ``names``; fail if any of them is missing.

    All names are checked so the error can list every missing variable at once.
    """
    values: dict[str, str] = {}
    missing: list[str] = []
    for name in names:
        value = get_variable(name, environ)
        if value is None:
            missing.append(name)
        else:
            values[name] = value

    if missing:
        return Err(EnvError(names=tuple(missing)))
    return Ok(values)
