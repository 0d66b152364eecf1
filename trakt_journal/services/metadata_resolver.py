"""
Resolution des metadonnees auxiliaires (affiches, IDs d'episodes).

Deux recherches independantes, chacune mise en cache pour la duree d'une
seule synchronisation :
- poster_for(kind, tmdb_id) : URL de l'affiche, ou affiche de remplacement
- episode_ids_for(show) : table (saison, episode) -> ID Trakt de l'episode

Une seule tentative par recherche : un echec degrade l'enrichissement du
sujet concerne (affiche de remplacement, table vide) sans interrompre
la synchronisation.
"""

from typing import Optional

import httpx
from loguru import logger
from pydantic import ValidationError

from trakt_journal.adapters.api.cache import RunCache
from trakt_journal.adapters.api.retry import RateLimitError
from trakt_journal.core.ports.api_clients import IPosterClient, ITraktClient
from trakt_journal.core.value_objects.keys import SubjectKind
from trakt_journal.utils.constants import POSTER_ABSENT_URL, POSTER_ERROR_URL

EpisodeIdMap = dict[tuple[int, int], int]

# Erreurs recuperables localement (reseau, HTTP, reponse invalide)
_TRANSIENT_ERRORS = (httpx.HTTPError, RateLimitError, ValidationError, ValueError)


class MetadataResolver:
    """
    Cache-first sur les clients Trakt et TMDB.

    Le cache est fourni par l'execution en cours (RunCache) et n'est
    jamais partage entre deux synchronisations.
    """

    def __init__(
        self,
        trakt_client: ITraktClient,
        poster_client: Optional[IPosterClient],
        cache: RunCache,
    ) -> None:
        self._trakt_client = trakt_client
        self._poster_client = poster_client
        self._cache = cache

    async def poster_for(self, kind: SubjectKind, tmdb_id: Optional[int]) -> str:
        """
        Retourne l'URL de l'affiche d'un film ou d'une serie.

        Args:
            kind: SubjectKind.MOVIE ou SubjectKind.SHOW
            tmdb_id: ID TMDB (None si Trakt n'en connait pas)

        Returns:
            URL de l'affiche ; POSTER_ABSENT_URL si inconnue,
            POSTER_ERROR_URL si la recuperation a echoue
        """
        if tmdb_id is None or self._poster_client is None or not self._poster_client.enabled:
            return POSTER_ABSENT_URL

        cache_key = f"poster:{kind.value}:{tmdb_id}"
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        try:
            url = await self._poster_client.get_poster_url(kind, tmdb_id)
        except _TRANSIENT_ERRORS as e:
            logger.warning(f"Affiche indisponible pour {kind.value} tmdb:{tmdb_id}: {e}")
            url = POSTER_ERROR_URL
        else:
            url = url or POSTER_ABSENT_URL

        await self._cache.set(cache_key, url)
        return url

    async def episode_ids_for(self, show_id: str) -> EpisodeIdMap:
        """
        Retourne la table (saison, episode) -> ID Trakt pour une serie.

        Args:
            show_id: Slug ou ID Trakt de la serie

        Returns:
            Table des IDs d'episodes, vide en cas d'echec
        """
        cache_key = f"episodes:{show_id}"
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        try:
            seasons = await self._trakt_client.get_show_seasons(show_id)
        except _TRANSIENT_ERRORS as e:
            logger.warning(f"IDs d'episodes indisponibles pour {show_id}: {e}")
            id_map: EpisodeIdMap = {}
        else:
            id_map = {
                (episode.season, episode.number): episode.ids.trakt
                for season in seasons
                for episode in season.episodes
                if episode.ids.trakt is not None
            }

        await self._cache.set(cache_key, id_map)
        return id_map
