"""
Orchestration d'une synchronisation Trakt -> fichier de notes.

Ordre d'execution :
1. Verification de la configuration (aucun appel reseau si incomplete)
2. Token valide (rafraichi et persiste si expire)
3. Cache neuf pour l'execution
4. Recuperation concurrente des notes, series vues et films vus
5. Reconciliation et enrichissement (concurrence bornee)
6. Rendu Markdown puis ecriture du fichier (remplacement complet)

Chaque execution emet exactement une notification : un succes, ou une
erreur de classe « configuration », « authentication » ou « sync failed ».
Une seule synchronisation a la fois par instance.
"""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import httpx
from loguru import logger
from pydantic import ValidationError

from trakt_journal.adapters.api.cache import RunCache
from trakt_journal.adapters.api.retry import RateLimitError
from trakt_journal.config import Settings
from trakt_journal.core.entities.journal import JournalTree
from trakt_journal.core.exceptions import (
    ConfigurationError,
    OutputWriteError,
    SyncAlreadyRunningError,
    SyncFetchError,
    TraktJournalError,
)
from trakt_journal.core.ports.api_clients import IPosterClient, ITraktClient
from trakt_journal.core.ports.storage import INoteSink, INotifier
from trakt_journal.core.value_objects.options import RenderOptions
from trakt_journal.services.auth import AuthService
from trakt_journal.services.metadata_resolver import MetadataResolver
from trakt_journal.services.reconciler import ReconcilerService
from trakt_journal.services.renderer import JournalRenderer
from trakt_journal.utils.dates import parse_cutoff

_FETCH_ERRORS = (httpx.HTTPError, RateLimitError, ValidationError)


@dataclass(frozen=True)
class SyncReport:
    """Resume d'une synchronisation reussie."""

    output_file: Path
    shows: int
    seasons: int
    episodes: int
    movies: int
    bytes_written: int

    @classmethod
    def from_tree(cls, output_file: Path, tree: JournalTree, content: str) -> "SyncReport":
        return cls(
            output_file=output_file,
            shows=len(tree.shows),
            seasons=tree.season_count,
            episodes=tree.episode_count,
            movies=len(tree.movies),
            bytes_written=len(content.encode("utf-8")),
        )

    @property
    def summary(self) -> str:
        return (
            f"Trakt sync complete: {self.shows} show(s), {self.episodes} episode(s), "
            f"{self.movies} movie(s) -> {self.output_file}"
        )


class SyncService:
    """
    Service de synchronisation.

    Example:
        service = SyncService(settings, auth, trakt, tmdb, reconciler, renderer, sink, notifier)
        report = await service.run()
    """

    def __init__(
        self,
        settings: Settings,
        auth_service: AuthService,
        trakt_client: ITraktClient,
        poster_client: Optional[IPosterClient],
        reconciler: ReconcilerService,
        renderer: JournalRenderer,
        note_sink: INoteSink,
        notifier: INotifier,
        cache_factory: Callable[[], RunCache] = RunCache,
    ) -> None:
        self._settings = settings
        self._auth_service = auth_service
        self._trakt_client = trakt_client
        self._poster_client = poster_client
        self._reconciler = reconciler
        self._renderer = renderer
        self._note_sink = note_sink
        self._notifier = notifier
        self._cache_factory = cache_factory
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    async def run(self) -> SyncReport:
        """
        Execute une synchronisation complete.

        Returns:
            SyncReport de l'execution

        Raises:
            TraktJournalError: Sous-classe correspondant a la cause de l'echec,
                apres notification de l'utilisateur. Toute autre exception
                est convertie en SyncFetchError.
        """
        if self._running:
            error = SyncAlreadyRunningError("A sync is already in progress")
            self._notifier.error(error.notice)
            raise error

        self._running = True
        try:
            report = await self._run()
        except TraktJournalError as e:
            logger.error(f"Synchronisation interrompue: {e}")
            self._notifier.error(e.notice)
            raise
        except Exception as e:
            logger.exception(f"Erreur inattendue pendant la synchronisation: {e}")
            error = SyncFetchError(f"Unexpected error ({type(e).__name__}: {e})")
            self._notifier.error(error.notice)
            raise error from e
        finally:
            self._running = False

        self._notifier.info(report.summary)
        return report

    def _check_configuration(self) -> Path:
        if not self._settings.credentials_configured:
            raise ConfigurationError("Trakt client ID and secret are not set")
        if self._settings.output_file is None:
            raise ConfigurationError("Output file is not set")
        return self._settings.output_file

    async def _run(self) -> SyncReport:
        output_file = self._check_configuration()
        cutoff = parse_cutoff(self._settings.ignore_before)
        token = await self._auth_service.ensure_fresh_token()

        logger.info(f"Synchronisation Trakt (seuil {cutoff.date().isoformat()})")
        try:
            ratings, watched_shows, watched_movies = await asyncio.gather(
                self._trakt_client.get_ratings(token.access_token),
                self._trakt_client.get_watched_shows(token.access_token),
                self._trakt_client.get_watched_movies(token.access_token),
            )
        except _FETCH_ERRORS as e:
            raise SyncFetchError(f"Could not fetch Trakt history ({e})") from e

        logger.debug(
            f"Recu: {len(ratings)} note(s), {len(watched_shows)} serie(s), "
            f"{len(watched_movies)} film(s)"
        )

        async with self._cache_factory() as cache:
            resolver = MetadataResolver(self._trakt_client, self._poster_client, cache)
            tree = await self._reconciler.reconcile(
                watched_shows, watched_movies, ratings, cutoff, resolver
            )

        options = RenderOptions(
            sort_order=self._settings.sort_order,
            date_format=self._settings.date_format,
        )
        content = self._renderer.render(tree, options)

        try:
            self._note_sink.write(output_file, content)
        except OSError as e:
            raise OutputWriteError(f"Could not write {output_file} ({e})") from e

        return SyncReport.from_tree(output_file, tree, content)
