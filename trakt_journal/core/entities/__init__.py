"""
Business entities of the journal domain.

Exports:
- WatchedShow, WatchedMovie, RatingRecord: validated Trakt payloads
- OAuthToken, TokenGrant: OAuth token contracts
- JournalTree and its Normalized* nodes: reconciled view consumed by the renderer
"""

from trakt_journal.core.entities.journal import (
    JournalTree,
    NormalizedEpisode,
    NormalizedMovie,
    NormalizedSeason,
    NormalizedShow,
    Rating,
)
from trakt_journal.core.entities.trakt import (
    EpisodeRating,
    MediaRef,
    MovieRating,
    OAuthToken,
    RatingRecord,
    SeasonRating,
    ShowRating,
    ShowSeason,
    TokenGrant,
    TraktIds,
    WatchedEpisode,
    WatchedMovie,
    WatchedSeason,
    WatchedShow,
)

__all__ = [
    "EpisodeRating",
    "JournalTree",
    "MediaRef",
    "MovieRating",
    "NormalizedEpisode",
    "NormalizedMovie",
    "NormalizedSeason",
    "NormalizedShow",
    "OAuthToken",
    "Rating",
    "RatingRecord",
    "SeasonRating",
    "ShowRating",
    "ShowSeason",
    "TokenGrant",
    "TraktIds",
    "WatchedEpisode",
    "WatchedMovie",
    "WatchedSeason",
    "WatchedShow",
]
