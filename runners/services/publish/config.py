from __future__ import annotations

# Hash of the last published artifact, stored at the clone root.
HASH_FILENAME = "hash.txt"

# Where artifacts land inside the cloned package repository.
RESOURCES_DIR_PARTS = ("src", "Resources")

HASH_COMMIT_MESSAGE = "Automated update"
RELEASE_BODY = "Automated release update"

DEFAULT_NUGET_SOURCE = "https://api.nuget.org/v3/index.json"
GITHUB_PACKAGES_SOURCE = "https://nuget.pkg.github.com/{owner}/index.json"

# Environment variables
ENV_GIT_NAME = "GIT__NAME"
ENV_GIT_EMAIL = "GIT__EMAIL"
ENV_GH_USERNAME = "GH__USERNAME"
ENV_GH_TOKEN = "GH__TOKEN"
ENV_NUGET_TOKEN = "NUGET__TOKEN"
ENV_BUILD_VERSION = "BUILD_VERSION"
ENV_GH_PACKAGES_OWNER = "GH__PACKAGES_OWNER"
ENV_NUGET_SOURCE = "NUGET__SOURCE"
