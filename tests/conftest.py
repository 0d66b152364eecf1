"""
Fixtures pytest partagees pour les tests Trakt Journal.

Ce module contient les fixtures communes utilisees dans les tests:
- Settings de test avec chemins temporaires
- Mocks des ports (ITraktClient, IPosterClient, INotifier, INoteSink)
- Collections Trakt validees depuis les fixtures JSON
"""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from trakt_journal.config import Settings
from trakt_journal.core.entities.trakt import (
    WATCHED_MOVIES_ADAPTER,
    WATCHED_SHOWS_ADAPTER,
    WatchedMovie,
    WatchedShow,
)
from trakt_journal.core.ports.api_clients import IPosterClient, ITraktClient
from trakt_journal.core.ports.storage import INoteSink, INotifier


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings de test avec chemins temporaires.

    Le fichier .env du projet est ignore (_env_file=None).
    """
    return Settings(
        _env_file=None,
        client_id="test-client-id",
        client_secret="test-client-secret",
        tmdb_api_key="test_api_key",
        ignore_before="2025.01.01",
        output_file=tmp_path / "vault" / "Trakt History.md",
        token_file=tmp_path / "token.json",
        log_file=tmp_path / "logs" / "trakt-journal.log",
    )


@pytest.fixture
def mock_trakt_client() -> AsyncMock:
    """
    Mock de ITraktClient.

    Collections vides par defaut, configurer le mock dans chaque test.
    """
    client = AsyncMock(spec=ITraktClient)
    client.get_ratings.return_value = []
    client.get_watched_shows.return_value = []
    client.get_watched_movies.return_value = []
    client.get_show_seasons.return_value = []
    return client


@pytest.fixture
def mock_poster_client() -> MagicMock:
    """Mock de IPosterClient active, sans affiche par defaut."""
    client = MagicMock(spec=IPosterClient)
    client.enabled = True
    client.get_poster_url = AsyncMock(return_value=None)
    return client


@pytest.fixture
def mock_notifier() -> MagicMock:
    return MagicMock(spec=INotifier)


@pytest.fixture
def mock_note_sink() -> MagicMock:
    return MagicMock(spec=INoteSink)


@pytest.fixture
def watched_shows_payload() -> list[WatchedShow]:
    from tests.fixtures.trakt_responses import TRAKT_WATCHED_SHOWS_RESPONSE

    return WATCHED_SHOWS_ADAPTER.validate_python(TRAKT_WATCHED_SHOWS_RESPONSE)


@pytest.fixture
def watched_movies_payload() -> list[WatchedMovie]:
    from tests.fixtures.trakt_responses import TRAKT_WATCHED_MOVIES_RESPONSE

    return WATCHED_MOVIES_ADAPTER.validate_python(TRAKT_WATCHED_MOVIES_RESPONSE)
