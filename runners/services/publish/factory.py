from __future__ import annotations

from collections.abc import Mapping

from runners.core.environment import get_variable
from runners.output.console import ConsoleProtocol
from runners.services.publish import config
from runners.services.publish.dotnet import DotnetCli
from runners.services.publish.git_util import GitUtil
from runners.services.publish.hash_saving import HashSaver
from runners.services.publish.hashing import HashChecker
from runners.services.publish.manager import RunnersManager
from runners.services.publish.packaging import PackageManager
from runners.services.publish.releases import ReleasesUtil


def create_runners_manager(
    *,
    console: ConsoleProtocol,
    environ: Mapping[str, str] | None = None,
) -> RunnersManager:
    """Wire the default git/hash/dotnet/gh collaborators into a RunnersManager."""
    dotnet = DotnetCli(console=console)
    source = get_variable(config.ENV_NUGET_SOURCE, environ) or config.DEFAULT_NUGET_SOURCE
    return RunnersManager(
        git_util=GitUtil(console=console),
        hash_checker=HashChecker(console=console),
        hash_saver=HashSaver(console=console),
        package_manager=PackageManager(dotnet=dotnet, console=console, source=source),
        releases_util=ReleasesUtil(console=console),
        registry=dotnet,
        console=console,
        environ=environ,
    )
