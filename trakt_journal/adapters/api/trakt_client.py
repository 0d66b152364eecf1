"""
Client Trakt pour l'historique, les notes et l'authentification OAuth.

Implemente l'interface ITraktClient. Les reponses JSON sont validees
a la reception (modeles pydantic) : une reponse mal formee leve
pydantic.ValidationError, une erreur HTTP leve httpx.HTTPStatusError.

Usage:
    client = TraktClient(client_id="your_client_id")
    shows = await client.get_watched_shows(access_token)
    seasons = await client.get_show_seasons("futurama")
    await client.close()
"""

from typing import Optional

import httpx
from loguru import logger

from trakt_journal.adapters.api.retry import request_with_retry
from trakt_journal.core.entities.trakt import (
    RATINGS_ADAPTER,
    SHOW_SEASONS_ADAPTER,
    WATCHED_MOVIES_ADAPTER,
    WATCHED_SHOWS_ADAPTER,
    RatingRecord,
    ShowSeason,
    TokenGrant,
    WatchedMovie,
    WatchedShow,
)
from trakt_journal.core.ports.api_clients import ITraktClient
from trakt_journal.utils.constants import TRAKT_API_URL


class TraktClient(ITraktClient):
    """
    Client API Trakt (v2).

    Attributes:
        API_VERSION: Valeur du header trakt-api-version

    Example:
        client = TraktClient(client_id="xxx")
        ratings = await client.get_ratings(token.access_token)
        await client.close()
    """

    API_VERSION = "2"

    def __init__(self, client_id: Optional[str], base_url: str = TRAKT_API_URL) -> None:
        """
        Initialise le client Trakt.

        Args:
            client_id: Client ID de l'application Trakt (sert de cle API)
            base_url: URL de base de l'API
        """
        self._client_id = client_id or ""
        self._base_url = base_url
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, le cree si necessaire (lazy init)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers={
                    "Content-Type": "application/json",
                    "trakt-api-version": self.API_VERSION,
                    "trakt-api-key": self._client_id,
                },
                timeout=30.0,
            )
        return self._client

    @staticmethod
    def _auth(access_token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {access_token}"}

    async def _get_json(
        self,
        url: str,
        access_token: Optional[str] = None,
        max_attempts: int = 3,
        **params,
    ) -> object:
        headers = self._auth(access_token) if access_token else {}
        response = await request_with_retry(
            self._get_client(),
            "GET",
            url,
            max_attempts=max_attempts,
            headers=headers,
            params=params or None,
        )
        logger.debug(f"GET {url} -> {response.status_code}")
        return response.json()

    async def get_ratings(self, access_token: str) -> list[RatingRecord]:
        """Recupere toutes les notes (GET /sync/ratings/all)."""
        data = await self._get_json("/sync/ratings/all", access_token)
        return RATINGS_ADAPTER.validate_python(data)

    async def get_watched_shows(self, access_token: str) -> list[WatchedShow]:
        """Recupere les series vues (GET /sync/watched/shows)."""
        data = await self._get_json("/sync/watched/shows", access_token, extended="full")
        return WATCHED_SHOWS_ADAPTER.validate_python(data)

    async def get_watched_movies(self, access_token: str) -> list[WatchedMovie]:
        """Recupere les films vus (GET /sync/watched/movies)."""
        data = await self._get_json("/sync/watched/movies", access_token, extended="full")
        return WATCHED_MOVIES_ADAPTER.validate_python(data)

    async def get_show_seasons(self, show_id: str) -> list[ShowSeason]:
        """
        Recupere les saisons d'une serie avec leurs episodes.

        Endpoint public : seul le client ID est requis. Donnee auxiliaire,
        une seule tentative (un 429 leve RateLimitError sans relance).

        Args:
            show_id: Slug ou ID Trakt de la serie
        """
        data = await self._get_json(
            f"/shows/{show_id}/seasons", max_attempts=1, extended="episodes"
        )
        return SHOW_SEASONS_ADAPTER.validate_python(data)

    async def _post_token(self, payload: dict[str, str]) -> TokenGrant:
        response = await request_with_retry(
            self._get_client(), "POST", "/oauth/token", json=payload
        )
        return TokenGrant.model_validate(response.json())

    async def exchange_code(
        self, code: str, client_secret: str, redirect_uri: str
    ) -> TokenGrant:
        """Echange un code d'autorisation (grant_type=authorization_code)."""
        return await self._post_token(
            {
                "code": code,
                "client_id": self._client_id,
                "client_secret": client_secret,
                "redirect_uri": redirect_uri,
                "grant_type": "authorization_code",
            }
        )

    async def refresh_token(
        self, refresh_token: str, client_secret: str, redirect_uri: str
    ) -> TokenGrant:
        """Rafraichit le token (grant_type=refresh_token)."""
        return await self._post_token(
            {
                "refresh_token": refresh_token,
                "client_id": self._client_id,
                "client_secret": client_secret,
                "redirect_uri": redirect_uri,
                "grant_type": "refresh_token",
            }
        )

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
