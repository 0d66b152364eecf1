"""
Normalized journal tree.

Output of the reconciliation: watched shows and movies filtered by the cutoff
date, annotated with the user's ratings and poster references. Rebuilt from
scratch on every sync and consumed by the renderer.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Rating:
    """A 1-10 score and the moment it was given."""

    value: int
    rated_at: datetime


@dataclass
class NormalizedEpisode:
    number: int
    watched_at: datetime
    plays: Optional[int] = None
    rating: Optional[Rating] = None


@dataclass
class NormalizedSeason:
    """
    A season with at least one episode watched after the cutoff.

    Attributes:
        number: Season number (0 = specials)
        rating: Season rating, if any
        episodes: Qualifying episodes, in arrival order
    """

    number: int
    rating: Optional[Rating] = None
    episodes: list[NormalizedEpisode] = field(default_factory=list)


@dataclass
class NormalizedShow:
    """
    A show with at least one qualifying season.

    Attributes:
        trakt_id: Trakt numeric id
        slug: Trakt slug (used for web links)
        title: Show title
        year: Premiere year
        rating: Show rating, if any
        poster_url: Poster image URL (placeholder when unavailable)
        seasons: Qualifying seasons, in arrival order
    """

    trakt_id: int
    slug: Optional[str]
    title: str
    year: Optional[int] = None
    rating: Optional[Rating] = None
    poster_url: str = ""
    seasons: list[NormalizedSeason] = field(default_factory=list)


@dataclass
class NormalizedMovie:
    """A movie last watched on or after the cutoff."""

    trakt_id: int
    slug: Optional[str]
    title: str
    watched_at: datetime
    year: Optional[int] = None
    plays: Optional[int] = None
    rating: Optional[Rating] = None
    poster_url: str = ""


@dataclass
class JournalTree:
    shows: list[NormalizedShow] = field(default_factory=list)
    movies: list[NormalizedMovie] = field(default_factory=list)

    @property
    def season_count(self) -> int:
        return sum(len(show.seasons) for show in self.shows)

    @property
    def episode_count(self) -> int:
        return sum(
            len(season.episodes) for show in self.shows for season in show.seasons
        )
