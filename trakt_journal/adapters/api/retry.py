"""
Gestion du rate limiting (HTTP 429) des API Trakt et TMDB.

Trakt limite les appels authentifies (GET : 1000 appels / 5 minutes) et
renvoie 429 avec un header Retry-After. Seules ces reponses sont relancees :
toute autre erreur HTTP remonte immediatement a l'appelant, qui decide
s'il s'agit d'une erreur fatale (collections principales) ou d'une
degradation (affiches, IDs d'episodes).

Usage:
    response = await request_with_retry(client, "GET", "/sync/watched/movies")
"""

from typing import Optional

import httpx
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)


class RateLimitError(Exception):
    """
    Exception levee quand l'API retourne 429 Too Many Requests.

    Attributes:
        retry_after: Nombre de secondes a attendre (header Retry-After),
                     ou None si non specifie.
    """

    def __init__(self, retry_after: Optional[int] = None) -> None:
        self.retry_after = retry_after
        super().__init__(f"Rate limited. Retry after: {retry_after}s")


def _parse_retry_after(value: Optional[str]) -> Optional[int]:
    """Convertit le header Retry-After (secondes) ; ignore les formats date."""
    if not value:
        return None
    try:
        return max(0, int(value))
    except ValueError:
        return None


class wait_retry_after:
    """
    Strategie d'attente tenacity respectant Retry-After.

    Utilise la valeur annoncee par l'API (plafonnee a max_wait), sinon
    un backoff exponentiel avec jitter.
    """

    def __init__(self, max_wait: int) -> None:
        self._max_wait = max_wait
        self._fallback = wait_random_exponential(multiplier=1, min=1, max=max_wait)

    def __call__(self, retry_state: RetryCallState) -> float:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        if isinstance(exc, RateLimitError) and exc.retry_after is not None:
            return float(min(exc.retry_after, self._max_wait))
        return self._fallback(retry_state)


def with_retry(max_attempts: int = 3, max_wait: int = 30):
    """
    Decorateur pour relancer sur RateLimitError.

    Args:
        max_attempts: Nombre maximum de tentatives (defaut: 3)
        max_wait: Delai maximum entre les tentatives en secondes (defaut: 30)

    Returns:
        Decorateur a appliquer sur une fonction async
    """
    return retry(
        retry=retry_if_exception_type(RateLimitError),
        wait=wait_retry_after(max_wait),
        stop=stop_after_attempt(max_attempts),
        reraise=True,
    )


async def request_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    max_attempts: int = 3,
    max_wait: int = 30,
    **kwargs,
) -> httpx.Response:
    """
    Execute une requete HTTP avec relance sur 429.

    Args:
        client: Client httpx async a utiliser
        method: Methode HTTP (GET, POST)
        url: URL (relative a la base_url du client)
        max_attempts: Nombre maximum de tentatives
        max_wait: Attente maximale entre deux tentatives (secondes)
        **kwargs: Arguments supplementaires passes a client.request()

    Returns:
        httpx.Response en cas de succes

    Raises:
        RateLimitError: Si 429 apres epuisement des tentatives
        httpx.HTTPStatusError: Pour les autres erreurs HTTP
        httpx.TransportError: Pour les erreurs reseau (pas de relance)
    """

    @with_retry(max_attempts=max_attempts, max_wait=max_wait)
    async def _do_request() -> httpx.Response:
        response = await client.request(method, url, **kwargs)
        if response.status_code == 429:
            raise RateLimitError(_parse_retry_after(response.headers.get("Retry-After")))
        response.raise_for_status()
        return response

    return await _do_request()
