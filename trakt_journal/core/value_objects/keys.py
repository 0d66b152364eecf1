"""
Cles composites pour la jointure des collections Trakt.

Les collections "vus" et "notes" decrivent les memes sujets (serie, saison,
episode, film) avec des identifiants differents. Une cle composite les unifie :
deux enregistrements designent le meme sujet si et seulement si leurs cles
sont egales. Les cles ne sont jamais persistees.

Formes :
- film    -> (MOVIE, trakt_id)
- serie   -> (SHOW, trakt_id)
- saison  -> (SEASON, show_trakt_id, season_number)
- episode -> (EPISODE, episode_trakt_id)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from trakt_journal.core.entities.trakt import (
    EpisodeRating,
    MediaRef,
    MovieRating,
    RatingRecord,
    SeasonRating,
    ShowRating,
    TraktIds,
)


class SubjectKind(Enum):
    """Type de sujet note ou regarde.

    Valeurs:
        MOVIE: Film
        SHOW: Serie
        SEASON: Saison d'une serie
        EPISODE: Episode d'une serie
    """

    MOVIE = "movie"
    SHOW = "show"
    SEASON = "season"
    EPISODE = "episode"


@dataclass(frozen=True)
class CompositeKey:
    """
    Cle de jointure (type + parties d'identite).

    Attributs:
        kind: Type de sujet
        parts: Identifiants numeriques, dans l'ordre de la forme du type
    """

    kind: SubjectKind
    parts: tuple[int, ...]

    @classmethod
    def movie(cls, trakt_id: int) -> "CompositeKey":
        return cls(SubjectKind.MOVIE, (trakt_id,))

    @classmethod
    def show(cls, trakt_id: int) -> "CompositeKey":
        return cls(SubjectKind.SHOW, (trakt_id,))

    @classmethod
    def season(cls, show_trakt_id: int, season_number: int) -> "CompositeKey":
        return cls(SubjectKind.SEASON, (show_trakt_id, season_number))

    @classmethod
    def episode(cls, episode_trakt_id: int) -> "CompositeKey":
        return cls(SubjectKind.EPISODE, (episode_trakt_id,))


def _trakt_id(ids: Optional[TraktIds]) -> Optional[int]:
    return ids.trakt if ids is not None else None


def movie_key(movie: MediaRef) -> Optional[CompositeKey]:
    trakt_id = _trakt_id(movie.ids)
    return CompositeKey.movie(trakt_id) if trakt_id is not None else None


def show_key(show: MediaRef) -> Optional[CompositeKey]:
    trakt_id = _trakt_id(show.ids)
    return CompositeKey.show(trakt_id) if trakt_id is not None else None


def season_key(show: MediaRef, season_number: Optional[int]) -> Optional[CompositeKey]:
    trakt_id = _trakt_id(show.ids)
    if trakt_id is None or season_number is None:
        return None
    return CompositeKey.season(trakt_id, season_number)


def episode_key(episode_trakt_id: Optional[int]) -> Optional[CompositeKey]:
    return CompositeKey.episode(episode_trakt_id) if episode_trakt_id is not None else None


def rating_key(record: RatingRecord) -> Optional[CompositeKey]:
    """
    Calcule la cle composite d'un enregistrement de note.

    Args:
        record: Note validee (film, serie, saison ou episode)

    Returns:
        La cle, ou None si les identifiants necessaires sont absents
        (l'appelant doit alors ignorer l'enregistrement)
    """
    if isinstance(record, MovieRating):
        return movie_key(record.movie)
    if isinstance(record, ShowRating):
        return show_key(record.show)
    if isinstance(record, SeasonRating):
        return season_key(record.show, record.season.number)
    if isinstance(record, EpisodeRating):
        return episode_key(record.episode.ids.trakt)
    return None
