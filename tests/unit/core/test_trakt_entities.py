"""
Tests for the Trakt payload contracts.

Verifies that real Trakt responses validate into typed models, that rating
records are dispatched on their "type" tag and that OAuth expiry is computed
from issued-at + expires_in.
"""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from trakt_journal.core.entities.trakt import (
    RATINGS_ADAPTER,
    SHOW_SEASONS_ADAPTER,
    WATCHED_MOVIES_ADAPTER,
    WATCHED_SHOWS_ADAPTER,
    EpisodeRating,
    MovieRating,
    OAuthToken,
    SeasonRating,
    ShowRating,
    TokenGrant,
)
from tests.fixtures.trakt_responses import (
    TRAKT_RATINGS_RESPONSE,
    TRAKT_SHOW_SEASONS_RESPONSE,
    TRAKT_TOKEN_RESPONSE,
    TRAKT_WATCHED_MOVIES_RESPONSE,
    TRAKT_WATCHED_SHOWS_RESPONSE,
)


class TestWatchedPayloads:
    def test_watched_shows_validate(self):
        shows = WATCHED_SHOWS_ADAPTER.validate_python(TRAKT_WATCHED_SHOWS_RESPONSE)

        assert len(shows) == 1
        show = shows[0]
        assert show.show.title == "Futurama"
        assert show.show.ids.trakt == 614
        assert show.show.ids.slug == "futurama"
        assert [season.number for season in show.seasons] == [1, 9]
        episode = show.seasons[1].episodes[0]
        assert episode.number == 1
        assert episode.last_watched_at == datetime(2025, 1, 5, 20, 30, tzinfo=timezone.utc)

    def test_naive_timestamp_is_taken_as_utc(self):
        movies = WATCHED_MOVIES_ADAPTER.validate_python(
            [{"plays": 1, "last_watched_at": "2025-01-05T20:00:00", "movie": {"title": "X"}}]
        )

        assert movies[0].last_watched_at == datetime(2025, 1, 5, 20, 0, tzinfo=timezone.utc)
        assert movies[0].last_watched_at.tzinfo == timezone.utc

    def test_offset_timestamp_is_converted_to_utc(self):
        shows = WATCHED_SHOWS_ADAPTER.validate_python(
            [
                {
                    "show": {"title": "X"},
                    "seasons": [
                        {
                            "number": 1,
                            "episodes": [
                                {"number": 1, "last_watched_at": "2025-01-01T01:00:00+02:00"}
                            ],
                        }
                    ],
                }
            ]
        )

        watched_at = shows[0].seasons[0].episodes[0].last_watched_at
        assert watched_at == datetime(2024, 12, 31, 23, 0, tzinfo=timezone.utc)
        assert watched_at.tzinfo == timezone.utc

    def test_watched_movies_validate(self):
        movies = WATCHED_MOVIES_ADAPTER.validate_python(TRAKT_WATCHED_MOVIES_RESPONSE)

        assert movies[0].movie.title == "Inception"
        assert movies[0].movie.ids.tmdb == 27205
        assert movies[0].plays == 2

    def test_unknown_fields_are_ignored(self):
        """Extra keys such as last_updated_at do not break validation."""
        movies = WATCHED_MOVIES_ADAPTER.validate_python(
            [{"plays": 1, "last_watched_at": None, "reset_at": None, "movie": {"title": "X"}}]
        )
        assert movies[0].movie.ids.trakt is None

    def test_missing_identity_block_is_rejected(self):
        with pytest.raises(ValidationError):
            WATCHED_SHOWS_ADAPTER.validate_python([{"plays": 1, "seasons": []}])


class TestRatingPayloads:
    def test_ratings_are_dispatched_on_type(self):
        ratings = RATINGS_ADAPTER.validate_python(TRAKT_RATINGS_RESPONSE)

        assert [type(r) for r in ratings] == [
            EpisodeRating,
            ShowRating,
            SeasonRating,
            MovieRating,
        ]
        assert ratings[0].episode.ids.trakt == 11220871
        assert ratings[2].season.number == 9

    def test_unknown_rating_type_is_rejected(self):
        with pytest.raises(ValidationError):
            RATINGS_ADAPTER.validate_python(
                [{"type": "person", "rating": 5, "rated_at": "2025-01-01T00:00:00Z"}]
            )

    @pytest.mark.parametrize("value", [0, 11])
    def test_rating_out_of_range_is_rejected(self, value):
        with pytest.raises(ValidationError):
            RATINGS_ADAPTER.validate_python(
                [
                    {
                        "type": "movie",
                        "rating": value,
                        "rated_at": "2025-01-01T00:00:00Z",
                        "movie": {"title": "X", "ids": {"trakt": 1}},
                    }
                ]
            )


class TestShowSeasons:
    def test_episode_ids_are_exposed(self):
        seasons = SHOW_SEASONS_ADAPTER.validate_python(TRAKT_SHOW_SEASONS_RESPONSE)

        episodes = seasons[0].episodes
        assert [(e.season, e.number, e.ids.trakt) for e in episodes] == [
            (9, 1, 11220871),
            (9, 2, 11220872),
        ]


class TestOAuthToken:
    def test_expiry_is_issued_at_plus_expires_in(self):
        issued_at = datetime(2025, 1, 1, tzinfo=timezone.utc)
        grant = TokenGrant.model_validate(TRAKT_TOKEN_RESPONSE)

        token = OAuthToken.from_grant(grant, issued_at)

        assert token.expires_at == issued_at + timedelta(seconds=7776000)
        assert token.refresh_token == TRAKT_TOKEN_RESPONSE["refresh_token"]

    def test_token_expired_before_now(self):
        now = datetime(2025, 6, 1, tzinfo=timezone.utc)
        token = OAuthToken(
            access_token="a", refresh_token="r", expires_at=now - timedelta(seconds=1)
        )
        assert token.is_expired(now)

    def test_token_valid_until_expiry(self):
        now = datetime(2025, 6, 1, tzinfo=timezone.utc)
        token = OAuthToken(access_token="a", refresh_token="r", expires_at=now)
        assert not token.is_expired(now)
