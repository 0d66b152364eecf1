"""
Service d'authentification OAuth Trakt.

Gere le cycle de vie du token :
- URL d'autorisation (redirection hors bande, le code est affiche par Trakt)
- echange du code contre un token, persiste immediatement
- rafraichissement d'un token expire avant toute requete de donnees
- deconnexion (suppression du token stocke)

L'expiration est calculee comme « emission + expires_in » ; un token dont
l'expiration est anterieure a maintenant est invalide et rafraichi une fois.
"""

from collections.abc import Callable
from datetime import datetime, timezone
from urllib.parse import urlencode

import httpx
from loguru import logger
from pydantic import ValidationError

from trakt_journal.adapters.api.retry import RateLimitError
from trakt_journal.config import Settings
from trakt_journal.core.entities.trakt import OAuthToken
from trakt_journal.core.exceptions import AuthenticationError, ConfigurationError
from trakt_journal.core.ports.api_clients import ITraktClient
from trakt_journal.core.ports.storage import ITokenStore
from trakt_journal.utils.constants import TRAKT_AUTHORIZE_URL

_OAUTH_ERRORS = (httpx.HTTPError, RateLimitError, ValidationError)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AuthService:
    """
    Connexion a Trakt et maintien d'un token valide.

    Example:
        auth = AuthService(settings, trakt_client, token_store)
        print(auth.authorization_url())
        await auth.exchange_code(code)
        token = await auth.ensure_fresh_token()
    """

    def __init__(
        self,
        settings: Settings,
        trakt_client: ITraktClient,
        token_store: ITokenStore,
        now: Callable[[], datetime] = utc_now,
    ) -> None:
        self._settings = settings
        self._trakt_client = trakt_client
        self._token_store = token_store
        self._now = now

    def _require_credentials(self) -> None:
        if not self._settings.credentials_configured:
            raise ConfigurationError(
                "Trakt client ID and secret are not set "
                "(use `trakt-journal config set client_id ...`)"
            )

    def authorization_url(self) -> str:
        """
        Construit l'URL d'autorisation a ouvrir dans le navigateur.

        Raises:
            ConfigurationError: Si le client ID ou le secret est absent
        """
        self._require_credentials()
        query = urlencode(
            {
                "response_type": "code",
                "client_id": self._settings.client_id,
                "redirect_uri": self._settings.redirect_uri,
            }
        )
        return f"{TRAKT_AUTHORIZE_URL}?{query}"

    def is_connected(self) -> bool:
        return self._token_store.load() is not None

    async def exchange_code(self, code: str) -> OAuthToken:
        """
        Echange un code d'autorisation et persiste le token obtenu.

        Raises:
            ConfigurationError: Si les identifiants sont absents
            AuthenticationError: Si le code est vide ou l'echange echoue
        """
        self._require_credentials()
        code = code.strip()
        if not code:
            raise AuthenticationError("Authorization code is empty")

        issued_at = self._now()
        try:
            grant = await self._trakt_client.exchange_code(
                code, self._settings.client_secret, self._settings.redirect_uri
            )
        except _OAUTH_ERRORS as e:
            logger.error(f"Echec de l'echange du code d'autorisation: {e}")
            raise AuthenticationError(f"Code exchange failed ({e})") from e

        token = OAuthToken.from_grant(grant, issued_at)
        self._token_store.save(token)
        logger.info(f"Connecte a Trakt, token valide jusqu'au {token.expires_at.isoformat()}")
        return token

    async def ensure_fresh_token(self) -> OAuthToken:
        """
        Retourne un token valide, en le rafraichissant une fois s'il a expire.

        Le token rafraichi est persiste avant d'etre retourne.

        Raises:
            AuthenticationError: Si aucun token n'est stocke ou si le rafraichissement echoue
        """
        token = self._token_store.load()
        if token is None:
            raise AuthenticationError("Not connected (run `trakt-journal connect`)")

        now = self._now()
        if not token.is_expired(now):
            return token

        logger.info("Token Trakt expire, rafraichissement")
        try:
            grant = await self._trakt_client.refresh_token(
                token.refresh_token,
                self._settings.client_secret or "",
                self._settings.redirect_uri,
            )
        except _OAUTH_ERRORS as e:
            logger.error(f"Echec du rafraichissement du token: {e}")
            raise AuthenticationError(
                f"Token refresh failed, please reconnect ({e})"
            ) from e

        refreshed = OAuthToken.from_grant(grant, now)
        self._token_store.save(refreshed)
        logger.debug(f"Token rafraichi, expiration {refreshed.expires_at.isoformat()}")
        return refreshed

    def disconnect(self) -> bool:
        """Supprime le token stocke. Retourne False si aucun token n'existait."""
        removed = self._token_store.clear()
        if removed:
            logger.info("Token Trakt supprime")
        return removed
