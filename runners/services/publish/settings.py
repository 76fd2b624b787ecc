"""Credentials and version read from the environment for one publish run."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from runners.core.environment import EnvError, get_variable, require_variables
from runners.core.result import Err, Ok, Result
from runners.git.repository import GitIdentity
from runners.services.publish import config
from runners.services.publish.errors import RunnerError

_GIT_VARIABLES = (
    config.ENV_GIT_NAME,
    config.ENV_GIT_EMAIL,
    config.ENV_GH_USERNAME,
    config.ENV_GH_TOKEN,
)

_PUBLISH_VARIABLES = (
    config.ENV_GIT_NAME,
    config.ENV_GIT_EMAIL,
    config.ENV_GH_USERNAME,
    config.ENV_NUGET_TOKEN,
    config.ENV_BUILD_VERSION,
    config.ENV_GH_TOKEN,
)


@dataclass(frozen=True, slots=True)
class GitCredentials:
    name: str
    email: str
    username: str
    token: str

    @property
    def identity(self) -> GitIdentity:
        return GitIdentity(name=self.name, email=self.email)


@dataclass(frozen=True, slots=True)
class PublishSettings:
    git: GitCredentials
    nuget_token: str
    version: str
    packages_owner: str


def _env_error(error: EnvError) -> RunnerError:
    return RunnerError(kind="env_missing", message=error.message, hint=error.hint)


def _git_credentials(values: Mapping[str, str]) -> GitCredentials:
    return GitCredentials(
        name=values[config.ENV_GIT_NAME],
        email=values[config.ENV_GIT_EMAIL],
        username=values[config.ENV_GH_USERNAME],
        token=values[config.ENV_GH_TOKEN],
    )


def load_git_credentials(
    environ: Mapping[str, str] | None = None,
) -> Result[GitCredentials, RunnerError]:
    values = require_variables(_GIT_VARIABLES, environ)
    if isinstance(values, Err):
        return Err(_env_error(values.error))
    return Ok(_git_credentials(values.value))


def load_publish_settings(
    environ: Mapping[str, str] | None = None,
) -> Result[PublishSettings, RunnerError]:
    """Read everything a package publish needs.

    ``GH__PACKAGES_OWNER`` is optional and falls back to the GitHub username.
    """
    values = require_variables(_PUBLISH_VARIABLES, environ)
    if isinstance(values, Err):
        return Err(_env_error(values.error))

    git = _git_credentials(values.value)
    return Ok(
        PublishSettings(
            git=git,
            nuget_token=values.value[config.ENV_NUGET_TOKEN],
            version=values.value[config.ENV_BUILD_VERSION],
            packages_owner=get_variable(config.ENV_GH_PACKAGES_OWNER, environ) or git.username,
        )
    )
