"""
Trakt API payload contracts.

Typed models for the responses of the Trakt sync endpoints. Payloads are
validated at the fetch boundary; services only ever see these shapes.

Endpoints covered:
- GET /sync/watched/shows -> list[WatchedShow]
- GET /sync/watched/movies -> list[WatchedMovie]
- GET /sync/ratings/all -> list[RatingRecord] (tagged by "type")
- GET /shows/{id}/seasons?extended=episodes -> list[ShowSeason]
- POST /oauth/token -> TokenGrant
"""

from datetime import datetime, timedelta, timezone
from typing import Annotated, Literal, Optional, Union

from pydantic import AfterValidator, BaseModel, Field, TypeAdapter


def _as_utc(value: datetime) -> datetime:
    """Normalize to UTC; a timestamp without offset is taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]


class TraktIds(BaseModel):
    """External identifiers attached to every Trakt object."""

    trakt: Optional[int] = None
    slug: Optional[str] = None
    tmdb: Optional[int] = None
    imdb: Optional[str] = None
    tvdb: Optional[int] = None


class MediaRef(BaseModel):
    """Show or movie identity (title, year, ids)."""

    title: str = ""
    year: Optional[int] = None
    ids: TraktIds = Field(default_factory=TraktIds)


class SeasonRef(BaseModel):
    number: int
    ids: TraktIds = Field(default_factory=TraktIds)


class EpisodeRef(BaseModel):
    season: Optional[int] = None
    number: Optional[int] = None
    title: Optional[str] = None
    ids: TraktIds = Field(default_factory=TraktIds)


class WatchedEpisode(BaseModel):
    number: int
    plays: Optional[int] = None
    last_watched_at: Optional[UtcDatetime] = None


class WatchedSeason(BaseModel):
    number: int
    episodes: list[WatchedEpisode] = Field(default_factory=list)


class WatchedShow(BaseModel):
    """
    Entry of /sync/watched/shows.

    Attributes:
        plays: Total plays across all episodes
        last_watched_at: Most recent play of any episode
        show: Show identity
        seasons: Watched seasons, each with its watched episodes
    """

    plays: Optional[int] = None
    last_watched_at: Optional[UtcDatetime] = None
    show: MediaRef
    seasons: list[WatchedSeason] = Field(default_factory=list)


class WatchedMovie(BaseModel):
    """Entry of /sync/watched/movies."""

    plays: Optional[int] = None
    last_watched_at: Optional[UtcDatetime] = None
    movie: MediaRef


class _RatingBase(BaseModel):
    rated_at: UtcDatetime
    rating: int = Field(ge=1, le=10)


class MovieRating(_RatingBase):
    type: Literal["movie"]
    movie: MediaRef


class ShowRating(_RatingBase):
    type: Literal["show"]
    show: MediaRef


class SeasonRating(_RatingBase):
    """Season rating. Seasons are identified by show id + season number."""

    type: Literal["season"]
    season: SeasonRef
    show: MediaRef


class EpisodeRating(_RatingBase):
    """Episode rating. The episode trakt id is not the (season, number) pair."""

    type: Literal["episode"]
    episode: EpisodeRef
    show: MediaRef


RatingRecord = Annotated[
    Union[MovieRating, ShowRating, SeasonRating, EpisodeRating],
    Field(discriminator="type"),
]


class ShowSeasonEpisode(BaseModel):
    season: int
    number: int
    title: Optional[str] = None
    ids: TraktIds = Field(default_factory=TraktIds)


class ShowSeason(BaseModel):
    """Entry of /shows/{id}/seasons?extended=episodes."""

    number: int
    ids: TraktIds = Field(default_factory=TraktIds)
    episodes: list[ShowSeasonEpisode] = Field(default_factory=list)


class TokenGrant(BaseModel):
    """Response of the OAuth token endpoint (code exchange or refresh)."""

    access_token: str
    refresh_token: str
    expires_in: int


class OAuthToken(BaseModel):
    """
    Stored OAuth token record.

    Attributes:
        access_token: Bearer token for the Trakt API
        refresh_token: Token used to obtain a new access token
        expires_at: Absolute expiry (issued-at + expires_in)
    """

    access_token: str
    refresh_token: str
    expires_at: UtcDatetime

    @classmethod
    def from_grant(cls, grant: TokenGrant, issued_at: datetime) -> "OAuthToken":
        return cls(
            access_token=grant.access_token,
            refresh_token=grant.refresh_token,
            expires_at=issued_at + timedelta(seconds=grant.expires_in),
        )

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at < now


WATCHED_SHOWS_ADAPTER = TypeAdapter(list[WatchedShow])
WATCHED_MOVIES_ADAPTER = TypeAdapter(list[WatchedMovie])
RATINGS_ADAPTER = TypeAdapter(list[RatingRecord])
SHOW_SEASONS_ADAPTER = TypeAdapter(list[ShowSeason])
