"""
Commandes CLI de connexion au compte Trakt (connect, auth, disconnect).

Flux OAuth hors bande :
1. `trakt-journal connect` affiche l'URL d'autorisation
2. Trakt affiche un code apres validation
3. `trakt-journal auth CODE` echange le code et enregistre le token
"""

import asyncio
import webbrowser
from typing import Annotated

import typer

from trakt_journal.adapters.cli import console
from trakt_journal.adapters.cli.helpers import suppress_loguru, with_container
from trakt_journal.core.exceptions import TraktJournalError


def connect(
    open_browser: Annotated[
        bool,
        typer.Option("--open", "-o", help="Ouvre l'URL dans le navigateur"),
    ] = False,
) -> None:
    """Affiche l'URL d'autorisation Trakt."""
    asyncio.run(_connect_async(open_browser))


@with_container()
async def _connect_async(container, open_browser: bool) -> None:
    """Implementation async de la commande connect."""
    auth_service = container.auth_service()

    try:
        url = auth_service.authorization_url()
    except TraktJournalError as e:
        container.notifier().error(e.notice)
        raise typer.Exit(code=1)

    console.print("[bold]Autorisez Trakt Journal sur votre compte Trakt :[/bold]")
    console.print(url, soft_wrap=True)
    if open_browser:
        webbrowser.open(url)
    console.print(
        "\nCopiez ensuite le code affiche par Trakt : "
        "[cyan]trakt-journal auth CODE[/cyan]"
    )


def auth(
    code: Annotated[str, typer.Argument(help="Code d'autorisation affiche par Trakt")],
) -> None:
    """Echange le code d'autorisation et enregistre le token."""
    asyncio.run(_auth_async(code))


@with_container()
async def _auth_async(container, code: str) -> None:
    """Implementation async de la commande auth."""
    auth_service = container.auth_service()
    notifier = container.notifier()

    try:
        token = await auth_service.exchange_code(code)
    except TraktJournalError as e:
        notifier.error(e.notice)
        raise typer.Exit(code=1)

    notifier.info(
        f"Connected to Trakt (token valid until {token.expires_at:%Y-%m-%d %H:%M} UTC)"
    )


def disconnect() -> None:
    """Supprime le token Trakt enregistre."""
    asyncio.run(_disconnect_async())


@with_container()
async def _disconnect_async(container) -> None:
    """Implementation async de la commande disconnect."""
    auth_service = container.auth_service()

    with suppress_loguru():
        removed = auth_service.disconnect()

    if removed:
        container.notifier().info("Disconnected from Trakt")
    else:
        console.print("[yellow]Aucun compte Trakt connecte.[/yellow]")
