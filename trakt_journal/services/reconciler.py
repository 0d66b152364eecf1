"""
Service de reconciliation de l'historique Trakt.

Fusionne les trois collections recuperees independamment (series vues,
films vus, notes) en un arbre normalise :

- Les episodes vus avant le seuil sont exclus ; une saison sans episode
  retenu est supprimee, une serie sans saison retenue aussi.
- Chaque episode, saison, serie et film retenu est annote avec sa note.
  La note d'un episode passe par la table (saison, episode) -> ID Trakt
  du MetadataResolver ; si elle est indisponible, l'episode reste non note.
- Les notes sans enregistrement « vu » correspondant sont ignorees.
- Les films sont dedoublonnes par identite : l'enregistrement le plus
  recent gagne.

L'enrichissement (affiches, IDs d'episodes) est parallelise avec une
concurrence bornee et termine avant le retour ; l'ordre du resultat suit
l'ordre d'arrivee des collections, le tri final appartient au rendu.
"""

import asyncio
from collections.abc import Awaitable, Iterable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, TypeVar

from loguru import logger

from trakt_journal.core.entities.journal import (
    JournalTree,
    NormalizedEpisode,
    NormalizedMovie,
    NormalizedSeason,
    NormalizedShow,
)
from trakt_journal.core.entities.trakt import (
    MediaRef,
    RatingRecord,
    WatchedEpisode,
    WatchedMovie,
    WatchedShow,
)
from trakt_journal.core.value_objects.keys import (
    CompositeKey,
    SubjectKind,
    episode_key,
    movie_key,
    season_key,
    show_key,
)
from trakt_journal.services.metadata_resolver import MetadataResolver
from trakt_journal.services.rating_index import RatingIndex

T = TypeVar("T")


@dataclass
class _ShowCandidate:
    """Serie retenue apres filtrage, avant enrichissement."""

    show: MediaRef
    seasons: dict[int, dict[int, WatchedEpisode]] = field(default_factory=dict)


@dataclass
class _MovieCandidate:
    movie: MediaRef
    watched_at: datetime
    plays: Optional[int]


class ReconcilerService:
    """
    Construit l'arbre normalise a partir des collections brutes.

    Attributes:
        DEFAULT_CONCURRENCY: Nombre maximum d'enrichissements simultanes

    Example:
        reconciler = ReconcilerService(concurrency=4)
        tree = await reconciler.reconcile(shows, movies, ratings, cutoff, resolver)
    """

    DEFAULT_CONCURRENCY = 4

    def __init__(self, concurrency: int = DEFAULT_CONCURRENCY) -> None:
        self._concurrency = max(1, concurrency)

    async def reconcile(
        self,
        watched_shows: Iterable[WatchedShow],
        watched_movies: Iterable[WatchedMovie],
        ratings: Iterable[RatingRecord],
        cutoff: datetime,
        resolver: MetadataResolver,
    ) -> JournalTree:
        """
        Reconcilie les collections et enrichit les sujets retenus.

        Args:
            watched_shows: Collection /sync/watched/shows
            watched_movies: Collection /sync/watched/movies
            ratings: Collection /sync/ratings/all
            cutoff: Seuil (UTC) ; un visionnage strictement anterieur est exclu
            resolver: Resolution des affiches et IDs d'episodes (cache de l'execution)

        Returns:
            Arbre normalise, series et films dans l'ordre d'arrivee
        """
        index = RatingIndex.build(ratings)
        show_candidates = self.collect_shows(watched_shows, cutoff)
        movie_candidates = self.collect_movies(watched_movies, cutoff)

        logger.info(
            f"Reconciliation: {len(show_candidates)} serie(s), "
            f"{len(movie_candidates)} film(s), {len(index)} note(s)"
        )

        semaphore = asyncio.Semaphore(self._concurrency)
        resolve_episode_ids = index.has_kind(SubjectKind.EPISODE)

        shows = await asyncio.gather(
            *(
                self._bounded(
                    semaphore,
                    self._build_show(candidate, index, resolver, resolve_episode_ids),
                )
                for candidate in show_candidates
            )
        )
        movies = await asyncio.gather(
            *(
                self._bounded(semaphore, self._build_movie(candidate, index, resolver))
                for candidate in movie_candidates
            )
        )
        return JournalTree(shows=list(shows), movies=list(movies))

    @staticmethod
    async def _bounded(semaphore: asyncio.Semaphore, coro: Awaitable[T]) -> T:
        async with semaphore:
            return await coro

    def collect_shows(
        self, watched_shows: Iterable[WatchedShow], cutoff: datetime
    ) -> list[_ShowCandidate]:
        """
        Filtre les episodes par le seuil et regroupe par serie.

        Une serie sans ID Trakt est ignoree. Si une serie apparait plusieurs
        fois, ses episodes sont fusionnes (visionnage le plus recent conserve).
        """
        candidates: dict[CompositeKey, _ShowCandidate] = {}

        for watched in watched_shows:
            key = show_key(watched.show)
            if key is None:
                logger.debug(f"Serie sans ID Trakt ignoree: {watched.show.title}")
                continue

            for season in watched.seasons:
                for episode in season.episodes:
                    if episode.last_watched_at is None or episode.last_watched_at < cutoff:
                        continue

                    candidate = candidates.setdefault(key, _ShowCandidate(show=watched.show))
                    episodes = candidate.seasons.setdefault(season.number, {})
                    previous = episodes.get(episode.number)
                    if previous is None or previous.last_watched_at < episode.last_watched_at:
                        episodes[episode.number] = episode

        return list(candidates.values())

    def collect_movies(
        self, watched_movies: Iterable[WatchedMovie], cutoff: datetime
    ) -> list[_MovieCandidate]:
        """
        Filtre les films par le seuil et dedoublonne par identite.

        Le visionnage le plus recent est conserve, le nombre de lectures
        retenu est le maximum observe.
        """
        candidates: dict[CompositeKey, _MovieCandidate] = {}

        for watched in watched_movies:
            key = movie_key(watched.movie)
            if key is None:
                logger.debug(f"Film sans ID Trakt ignore: {watched.movie.title}")
                continue
            if watched.last_watched_at is None or watched.last_watched_at < cutoff:
                continue

            previous = candidates.get(key)
            if previous is None:
                candidates[key] = _MovieCandidate(
                    movie=watched.movie,
                    watched_at=watched.last_watched_at,
                    plays=watched.plays,
                )
                continue

            plays = max((p for p in (previous.plays, watched.plays) if p is not None), default=None)
            if watched.last_watched_at > previous.watched_at:
                previous.movie = watched.movie
                previous.watched_at = watched.last_watched_at
            previous.plays = plays

        return list(candidates.values())

    async def _build_show(
        self,
        candidate: _ShowCandidate,
        index: RatingIndex,
        resolver: MetadataResolver,
        resolve_episode_ids: bool,
    ) -> NormalizedShow:
        show = candidate.show
        show_id = show.ids.slug or str(show.ids.trakt)

        episode_ids = await resolver.episode_ids_for(show_id) if resolve_episode_ids else {}
        poster_url = await resolver.poster_for(SubjectKind.SHOW, show.ids.tmdb)

        seasons = []
        for number, episodes in candidate.seasons.items():
            seasons.append(
                NormalizedSeason(
                    number=number,
                    rating=index.get(season_key(show, number)),
                    episodes=[
                        NormalizedEpisode(
                            number=episode.number,
                            watched_at=episode.last_watched_at,
                            plays=episode.plays,
                            rating=index.get(episode_key(episode_ids.get((number, episode.number)))),
                        )
                        for episode in episodes.values()
                    ],
                )
            )

        return NormalizedShow(
            trakt_id=show.ids.trakt,
            slug=show.ids.slug,
            title=show.title,
            year=show.year,
            rating=index.get(show_key(show)),
            poster_url=poster_url,
            seasons=seasons,
        )

    async def _build_movie(
        self,
        candidate: _MovieCandidate,
        index: RatingIndex,
        resolver: MetadataResolver,
    ) -> NormalizedMovie:
        movie = candidate.movie
        return NormalizedMovie(
            trakt_id=movie.ids.trakt,
            slug=movie.ids.slug,
            title=movie.title,
            year=movie.year,
            watched_at=candidate.watched_at,
            plays=candidate.plays,
            rating=index.get(movie_key(movie)),
            poster_url=await resolver.poster_for(SubjectKind.MOVIE, movie.ids.tmdb),
        )
