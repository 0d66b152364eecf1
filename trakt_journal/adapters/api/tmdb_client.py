"""
Client TMDB pour la resolution des affiches.

Trakt ne fournit pas d'images : l'affiche d'un film ou d'une serie est
recuperee sur TMDB a partir de l'ID TMDB present dans les IDs Trakt.

Usage:
    client = TMDBClient(api_key="your_key")
    url = await client.get_poster_url(SubjectKind.MOVIE, 27205)
    await client.close()
"""

from typing import Optional

import httpx

from trakt_journal.adapters.api.retry import request_with_retry
from trakt_journal.core.ports.api_clients import IPosterClient
from trakt_journal.core.value_objects.keys import SubjectKind


class TMDBClient(IPosterClient):
    """
    Client API TMDB limite aux affiches.

    Attributes:
        TMDB_BASE_URL: URL de base de l'API TMDB v3
        TMDB_IMAGE_BASE_URL: URL de base pour les images (posters)
    """

    TMDB_BASE_URL = "https://api.themoviedb.org/3"
    TMDB_IMAGE_BASE_URL = "https://image.tmdb.org/t/p/w500"

    _PATHS = {SubjectKind.MOVIE: "movie", SubjectKind.SHOW: "tv"}

    def __init__(self, api_key: Optional[str]) -> None:
        """
        Initialise le client TMDB.

        Args:
            api_key: Cle API TMDB (v3) ou Read Access Token (v4), None si non configuree
        """
        self._api_key = api_key
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def enabled(self) -> bool:
        return bool(self._api_key)

    def _get_client(self) -> httpx.AsyncClient:
        """
        Retourne le client HTTP, le cree si necessaire (lazy init).

        Supporte les deux modes d'authentification TMDB:
        - API Key v3 (32 caracteres hex) : passe en parametre api_key
        - Read Access Token v4 (long JWT) : passe en header Bearer
        """
        if self._client is None or self._client.is_closed:
            api_key = self._api_key or ""
            headers = {"Accept": "application/json"}
            params = {}
            if len(api_key) > 40:
                headers["Authorization"] = f"Bearer {api_key}"
            else:
                params["api_key"] = api_key

            self._client = httpx.AsyncClient(
                base_url=self.TMDB_BASE_URL,
                headers=headers,
                params=params,
                timeout=30.0,
            )
        return self._client

    async def get_poster_url(self, kind: SubjectKind, tmdb_id: int) -> Optional[str]:
        """
        Recupere l'URL de l'affiche d'un film ou d'une serie.

        Args:
            kind: SubjectKind.MOVIE ou SubjectKind.SHOW
            tmdb_id: ID TMDB du media

        Returns:
            URL complete de l'affiche, None si le media n'a pas d'affiche
            ou n'existe pas (404)

        Raises:
            RateLimitError: Sur 429, sans relance (une seule tentative)
            ValueError: Si le type de sujet n'a pas d'affiche (saison, episode)
            httpx.HTTPError: Pour les autres erreurs HTTP ou reseau
        """
        path = self._PATHS.get(kind)
        if path is None:
            raise ValueError(f"Pas d'affiche pour le type {kind.value}")

        try:
            response = await request_with_retry(
                self._get_client(), "GET", f"/{path}/{tmdb_id}", max_attempts=1
            )
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                return None
            raise

        poster_path = response.json().get("poster_path")
        return f"{self.TMDB_IMAGE_BASE_URL}{poster_path}" if poster_path else None

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
