"""
Point d'entrée CLI de Trakt Journal.

Initialise le container DI, configure le logging et fournit les commandes CLI.
"""

from typing import Annotated

import typer
from loguru import logger

from . import __version__
from .adapters.cli.commands import auth, config_app, connect, disconnect, sync
from .container import Container
from .logging_config import configure_logging, verbosity_to_level

app = typer.Typer(
    name="trakt-journal",
    help="Synchronisation de l'historique Trakt vers une note Markdown",
)
container = Container()

# Etat global pour les options de verbosite
state = {"verbose": 0, "quiet": False}


def _configure_logging(level: str | None = None) -> None:
    settings = container.config()
    configure_logging(
        log_level=level or settings.log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Augmenter la verbosite (-v, -vv)"
        ),
    ] = 0,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Mode silencieux (erreurs uniquement)"),
    ] = False,
) -> None:
    """Trakt Journal - Historique Trakt dans vos notes."""
    state["verbose"] = 0 if quiet else verbose
    state["quiet"] = quiet

    level = verbosity_to_level(verbose, quiet)
    if level is not None:
        _configure_logging(level)


app.command()(sync)
app.command()(connect)
app.command()(auth)
app.command()(disconnect)

# Monter config_app comme sous-commande
app.add_typer(config_app, name="config")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"trakt-journal v{__version__}")


def main() -> None:
    """Point d'entrée de l'application."""
    _configure_logging()

    logger.debug("Démarrage de Trakt Journal", version=__version__)

    app()


if __name__ == "__main__":
    main()
