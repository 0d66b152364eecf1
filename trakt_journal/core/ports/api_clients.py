"""
Interfaces ports pour les clients API.

Interfaces abstraites (ports) définissant les contrats des APIs externes :
Trakt pour l'historique, les notes et l'authentification OAuth,
TMDB pour les affiches.
"""

from abc import ABC, abstractmethod
from typing import Optional

from trakt_journal.core.entities.trakt import (
    RatingRecord,
    ShowSeason,
    TokenGrant,
    WatchedMovie,
    WatchedShow,
)
from trakt_journal.core.value_objects.keys import SubjectKind


class ITraktClient(ABC):
    """
    Interface du client Trakt.

    Les réponses sont validées à la frontière : les implémentations
    retournent des modèles typés, jamais de dictionnaires bruts.
    """

    @abstractmethod
    async def get_ratings(self, access_token: str) -> list[RatingRecord]:
        """Récupère toutes les notes de l'utilisateur (films, séries, saisons, épisodes)."""
        ...

    @abstractmethod
    async def get_watched_shows(self, access_token: str) -> list[WatchedShow]:
        """Récupère les séries vues avec leurs saisons et épisodes."""
        ...

    @abstractmethod
    async def get_watched_movies(self, access_token: str) -> list[WatchedMovie]:
        """Récupère les films vus."""
        ...

    @abstractmethod
    async def get_show_seasons(self, show_id: str) -> list[ShowSeason]:
        """
        Récupère les saisons d'une série avec leurs épisodes.

        Args :
            show_id : Slug ou ID Trakt de la série

        Retourne :
            Saisons avec les IDs Trakt de chaque épisode
        """
        ...

    @abstractmethod
    async def exchange_code(
        self, code: str, client_secret: str, redirect_uri: str
    ) -> TokenGrant:
        """Échange un code d'autorisation contre un token."""
        ...

    @abstractmethod
    async def refresh_token(
        self, refresh_token: str, client_secret: str, redirect_uri: str
    ) -> TokenGrant:
        """Obtient un nouveau token à partir du refresh token."""
        ...


class IPosterClient(ABC):
    """Interface pour la résolution des affiches."""

    @property
    @abstractmethod
    def enabled(self) -> bool:
        """Indique si le client est configuré (clé API présente)."""
        ...

    @abstractmethod
    async def get_poster_url(self, kind: SubjectKind, tmdb_id: int) -> Optional[str]:
        """
        Récupère l'URL de l'affiche d'un film ou d'une série.

        Args :
            kind : SubjectKind.MOVIE ou SubjectKind.SHOW
            tmdb_id : ID TMDB du média

        Retourne :
            URL complète de l'affiche, ou None si le média n'en a pas
        """
        ...
