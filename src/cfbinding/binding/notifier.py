"""Notifiers that surface information and error notices to the user."""

from typing import List, Optional, Tuple

from rich.console import Console

from cfbinding.config.logging_config import get_logger

log = get_logger(__name__)


class LoggingNotifier:
    """Writes notices to the cfbinding log."""

    async def show_information(self, message: str) -> None:
        log.info(message)

    async def show_error(self, message: str) -> None:
        log.error(message)


class ConsoleNotifier:
    """Prints notices to a rich console, errors in red."""

    def __init__(self, console: Optional[Console] = None):
        self.console: Console = console or Console(stderr=True)

    async def show_information(self, message: str) -> None:
        self.console.print(f"[cyan]ℹ[/] {message}", highlight=False)

    async def show_error(self, message: str) -> None:
        self.console.print(f"[bold red]✗[/] {message}", highlight=False)


class RecordingNotifier:
    """Keeps notices in memory, for hosts that render them later."""

    def __init__(self):
        self.notices: List[Tuple[str, str]] = []

    async def show_information(self, message: str) -> None:
        self.notices.append(("info", message))

    async def show_error(self, message: str) -> None:
        self.notices.append(("error", message))

    @property
    def errors(self) -> List[str]:
        return [message for level, message in self.notices if level == "error"]

    @property
    def information(self) -> List[str]:
        return [message for level, message in self.notices if level == "info"]
