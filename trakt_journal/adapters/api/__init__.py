"""
Clients API externes.

- TraktClient : historique, notes, saisons et OAuth (api.trakt.tv)
- TMDBClient : affiches des films et series (api.themoviedb.org)

Infrastructure partagee:
- RunCache : cache propre a une synchronisation (diskcache, repertoire temporaire)
- RateLimitError / request_with_retry : relance sur HTTP 429
"""

from trakt_journal.adapters.api.cache import RunCache
from trakt_journal.adapters.api.retry import RateLimitError, request_with_retry, with_retry
from trakt_journal.adapters.api.tmdb_client import TMDBClient
from trakt_journal.adapters.api.trakt_client import TraktClient

__all__ = [
    "RateLimitError",
    "RunCache",
    "TMDBClient",
    "TraktClient",
    "request_with_retry",
    "with_retry",
]
