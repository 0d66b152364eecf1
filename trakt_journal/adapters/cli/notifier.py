"""
Notifications utilisateur affichees dans la console Rich.
"""

from rich.console import Console

from trakt_journal.adapters.cli import console as default_console
from trakt_journal.core.ports.storage import INotifier


class ConsoleNotifier(INotifier):
    """Affiche les notifications (info en vert, erreur en rouge)."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or default_console

    def info(self, message: str) -> None:
        self._console.print(f"[green]✓[/green] {message}")

    def error(self, message: str) -> None:
        self._console.print(f"[red]✗ {message}[/red]")
