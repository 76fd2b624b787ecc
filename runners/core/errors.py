"""Exit codes for the runners CLI.

Every failure kind produced by the publish flow is mapped onto one of these
codes by the CLI layer. Values are process exit codes and must stay stable.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    - 0: Success (including "nothing to publish")
    - 1: User error (bad arguments, missing input file)
    - 2: Environment error (missing variables, missing tools)
    - 3: Build error (dotnet build/pack failed)
    - 4: Network error (clone, push, release or registry upload failed)
    - 5: I/O error (copy, hash read/write failed)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    BUILD_ERROR = 3
    NETWORK_ERROR = 4
    IO_ERROR = 5
