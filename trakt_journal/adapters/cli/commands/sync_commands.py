"""
Commande CLI de synchronisation de l'historique Trakt.
"""

import asyncio

import typer

from trakt_journal.adapters.cli import console
from trakt_journal.adapters.cli.helpers import with_container
from trakt_journal.core.exceptions import TraktJournalError


def sync() -> None:
    """Synchronise l'historique Trakt vers le fichier de notes."""
    asyncio.run(_sync_async())


@with_container()
async def _sync_async(container) -> None:
    """Implementation async de la commande sync."""
    sync_service = container.sync_service()

    try:
        report = await sync_service.run()
    except TraktJournalError:
        # Le service a deja notifie l'erreur
        raise typer.Exit(code=1)

    console.print(
        f"[dim]{report.seasons} saison(s), {report.bytes_written} octets ecrits[/dim]"
    )
