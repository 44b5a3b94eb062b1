"""Progress display utilities"""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.status import Status

from ...constants import EMOJI_ERROR, EMOJI_INFO, EMOJI_SUCCESS, EMOJI_WARNING
from ...core.reporter import StatusReporter


class RichStatusReporter(StatusReporter):
    """Spinner-based reporter on top of ``console.status``

    One status line is active at a time; starting a new one stops the
    previous spinner without a verdict.
    """

    def __init__(self, console: Console = None):
        self.console = console or Console()
        self._status: Optional[Status] = None
        self._text: Optional[str] = None

    def _stop_spinner(self) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None

    def _finish(self, icon: str, style: str, text: Optional[str]) -> None:
        message = text or self._text or ""
        self._stop_spinner()
        self._text = None
        if message:
            self.console.print(f"[{style}]{icon}[/{style}] {escape(message)}")

    def start(self, text: str) -> None:
        self._stop_spinner()
        self._text = text
        self._status = self.console.status(escape(text))
        self._status.start()

    def update(self, text: str) -> None:
        self._text = text
        if self._status is not None:
            self._status.update(escape(text))

    def succeed(self, text: Optional[str] = None) -> None:
        self._finish(EMOJI_SUCCESS, "green", text)

    def fail(self, text: Optional[str] = None) -> None:
        self._finish(EMOJI_ERROR, "red", text)

    def warn(self, text: Optional[str] = None) -> None:
        self._finish(EMOJI_WARNING, "yellow", text)

    def stop(self) -> None:
        self._stop_spinner()
        self._text = None

    def info(self, message: str) -> None:
        self.console.print(f"[blue]{EMOJI_INFO}[/blue] {escape(message)}")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]{EMOJI_WARNING} {escape(message)}[/yellow]")

    def success(self, message: str) -> None:
        self.console.print(f"[green]{EMOJI_SUCCESS} {escape(message)}[/green]")
