"""
Commandes CLI de consultation et modification des parametres (config show/set).
"""

from typing import Annotated

import typer
from rich.table import Table

from trakt_journal.adapters.cli import console
from trakt_journal.adapters.cli.helpers import suppress_loguru
from trakt_journal.container import Container
from trakt_journal.core.exceptions import ConfigurationError

# Application Typer pour les commandes de configuration
config_app = typer.Typer(
    name="config",
    help="Consultation et modification des parametres",
    rich_markup_mode="rich",
)


@config_app.command("show")
def config_show() -> None:
    """Affiche les parametres actuels (secrets masques)."""
    container = Container()
    store = container.settings_store()
    settings = store.load()

    table = Table(title="Trakt Journal")
    table.add_column("Parametre", style="cyan")
    table.add_column("Valeur")

    for key, value in store.display_values(settings).items():
        table.add_row(key, value or "[dim]-[/dim]")

    connected = container.auth_service().is_connected()
    table.add_row("connected", "[green]oui[/green]" if connected else "[red]non[/red]")
    table.add_row("posters", "[green]TMDB[/green]" if settings.tmdb_enabled else "[dim]non[/dim]")

    console.print(table)
    console.print(f"[dim]Fichier : {store.env_file}[/dim]")


@config_app.command("set")
def config_set(
    key: Annotated[str, typer.Argument(help="Nom du parametre (ex: sort_order)")],
    value: Annotated[str, typer.Argument(help="Nouvelle valeur")],
) -> None:
    """Modifie un parametre dans le fichier .env."""
    container = Container()
    store = container.settings_store()

    try:
        with suppress_loguru():
            store.update({key: value})
    except ConfigurationError as e:
        container.notifier().error(e.notice)
        raise typer.Exit(code=1)

    container.notifier().info(f"{key} updated")
