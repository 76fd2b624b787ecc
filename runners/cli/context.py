from __future__ import annotations

from dataclasses import dataclass

from runners.output.console import ConsoleProtocol, RichConsole
from runners.services.publish.factory import create_runners_manager
from runners.services.publish.manager import RunnersManager


@dataclass(frozen=True, slots=True)
class CLIContext:
    console: ConsoleProtocol
    manager: RunnersManager


def build_context() -> CLIContext:
    console = RichConsole()
    return CLIContext(console=console, manager=create_runners_manager(console=console))
