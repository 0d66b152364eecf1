"""
Tests unitaires pour MetadataResolver.

Ces tests verifient:
- Cache-first : une seule recherche par sujet et par execution
- Affiche de remplacement distincte pour « absente » et « erreur »
- Table d'episodes vide en cas d'echec, sans interrompre l'appelant
"""

from pathlib import Path

import httpx
import pytest

from trakt_journal.adapters.api.cache import RunCache
from trakt_journal.adapters.api.retry import RateLimitError
from trakt_journal.core.entities.trakt import SHOW_SEASONS_ADAPTER
from trakt_journal.core.value_objects.keys import SubjectKind
from trakt_journal.services.metadata_resolver import MetadataResolver
from trakt_journal.utils.constants import POSTER_ABSENT_URL, POSTER_ERROR_URL
from tests.fixtures.trakt_responses import TRAKT_SHOW_SEASONS_RESPONSE

POSTER = "https://image.tmdb.org/t/p/w500/oYuLEt3zVCKq57qu2F8dT7NIa6f.jpg"


@pytest.fixture
def run_cache(tmp_path: Path):
    cache = RunCache(cache_dir=str(tmp_path / "run_cache"))
    yield cache
    cache.close()


@pytest.fixture
def resolver(mock_trakt_client, mock_poster_client, run_cache) -> MetadataResolver:
    return MetadataResolver(mock_trakt_client, mock_poster_client, run_cache)


class TestPosterFor:
    @pytest.mark.asyncio
    async def test_returns_poster_url(self, resolver, mock_poster_client):
        mock_poster_client.get_poster_url.return_value = POSTER

        url = await resolver.poster_for(SubjectKind.MOVIE, 27205)

        assert url == POSTER
        mock_poster_client.get_poster_url.assert_awaited_once_with(SubjectKind.MOVIE, 27205)

    @pytest.mark.asyncio
    async def test_poster_is_fetched_once_per_run(self, resolver, mock_poster_client):
        mock_poster_client.get_poster_url.return_value = POSTER

        await resolver.poster_for(SubjectKind.MOVIE, 27205)
        await resolver.poster_for(SubjectKind.MOVIE, 27205)

        assert mock_poster_client.get_poster_url.await_count == 1

    @pytest.mark.asyncio
    async def test_movie_and_show_cached_separately(self, resolver, mock_poster_client):
        mock_poster_client.get_poster_url.return_value = POSTER

        await resolver.poster_for(SubjectKind.MOVIE, 615)
        await resolver.poster_for(SubjectKind.SHOW, 615)

        assert mock_poster_client.get_poster_url.await_count == 2

    @pytest.mark.asyncio
    async def test_no_tmdb_id_returns_absent_placeholder(self, resolver, mock_poster_client):
        url = await resolver.poster_for(SubjectKind.SHOW, None)

        assert url == POSTER_ABSENT_URL
        mock_poster_client.get_poster_url.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_disabled_client_returns_absent_placeholder(
        self, resolver, mock_poster_client
    ):
        mock_poster_client.enabled = False

        url = await resolver.poster_for(SubjectKind.MOVIE, 27205)

        assert url == POSTER_ABSENT_URL
        mock_poster_client.get_poster_url.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_poster_returns_absent_placeholder(
        self, resolver, mock_poster_client
    ):
        mock_poster_client.get_poster_url.return_value = None

        assert await resolver.poster_for(SubjectKind.MOVIE, 999) == POSTER_ABSENT_URL

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            httpx.ConnectError("connection refused"),
            RateLimitError(retry_after=30),
            httpx.HTTPStatusError(
                "500",
                request=httpx.Request("GET", "https://api.themoviedb.org/3/movie/1"),
                response=httpx.Response(500),
            ),
        ],
    )
    async def test_fetch_error_returns_error_placeholder(
        self, resolver, mock_poster_client, error
    ):
        mock_poster_client.get_poster_url.side_effect = error

        url = await resolver.poster_for(SubjectKind.MOVIE, 1)

        assert url == POSTER_ERROR_URL

    @pytest.mark.asyncio
    async def test_no_poster_client(self, mock_trakt_client, run_cache):
        resolver = MetadataResolver(mock_trakt_client, None, run_cache)

        assert await resolver.poster_for(SubjectKind.MOVIE, 1) == POSTER_ABSENT_URL


class TestEpisodeIdsFor:
    @pytest.mark.asyncio
    async def test_maps_season_episode_to_trakt_id(self, resolver, mock_trakt_client):
        mock_trakt_client.get_show_seasons.return_value = SHOW_SEASONS_ADAPTER.validate_python(
            TRAKT_SHOW_SEASONS_RESPONSE
        )

        id_map = await resolver.episode_ids_for("futurama")

        assert id_map == {(9, 1): 11220871, (9, 2): 11220872}
        mock_trakt_client.get_show_seasons.assert_awaited_once_with("futurama")

    @pytest.mark.asyncio
    async def test_fetched_once_per_show(self, resolver, mock_trakt_client):
        mock_trakt_client.get_show_seasons.return_value = SHOW_SEASONS_ADAPTER.validate_python(
            TRAKT_SHOW_SEASONS_RESPONSE
        )

        await resolver.episode_ids_for("futurama")
        await resolver.episode_ids_for("futurama")

        assert mock_trakt_client.get_show_seasons.await_count == 1

    @pytest.mark.asyncio
    async def test_failure_returns_empty_map(self, resolver, mock_trakt_client):
        mock_trakt_client.get_show_seasons.side_effect = httpx.ReadTimeout("timeout")

        assert await resolver.episode_ids_for("futurama") == {}

    @pytest.mark.asyncio
    async def test_failure_is_not_retried_within_run(self, resolver, mock_trakt_client):
        """Une seule tentative : l'echec est lui aussi mis en cache."""
        mock_trakt_client.get_show_seasons.side_effect = httpx.ReadTimeout("timeout")

        await resolver.episode_ids_for("futurama")
        await resolver.episode_ids_for("futurama")

        assert mock_trakt_client.get_show_seasons.await_count == 1
