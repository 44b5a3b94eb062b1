"""Interactive utilities for CLI commands"""

from typing import Optional

from rich.console import Console
from rich.prompt import Confirm, Prompt

from ...core.reporter import Prompter


class RichPrompter(Prompter):
    """Terminal prompter using rich prompts"""

    def __init__(self, console: Console = None):
        self.console = console or Console()

    def confirm(self, question: str, default: bool = True) -> bool:
        return Confirm.ask(f"[cyan]{question}[/cyan]", default=default, console=self.console)

    def ask(self, question: str, default: Optional[str] = None) -> str:
        if default is None:
            answer = Prompt.ask(question, default="", show_default=False, console=self.console)
        else:
            answer = Prompt.ask(question, default=default, console=self.console)
        return answer or ""

    def ask_secret(self, question: str) -> str:
        return Prompt.ask(question, password=True, default="", show_default=False,
                          console=self.console) or ""


def choose_login_method(console: Console) -> str:
    """Ask whether to log in with an API key or email and password

    Returns:
        ``"1"`` for API key, ``"2"`` for email and password
    """
    console.print("\n[bold]LaunchPd Login[/bold]\n")
    console.print("Choose login method:")
    console.print("  [cyan]1.[/cyan] API Key [dim](from dashboard)[/dim]")
    console.print("  [cyan]2.[/cyan] Email & Password [dim](supports 2FA)[/dim]\n")
    return Prompt.ask("Enter choice", choices=["1", "2"], default="1", console=console)
