"""
Tests unitaires pour la taxonomie des erreurs.
"""

import pytest

from trakt_journal.core.exceptions import (
    AuthenticationError,
    ConfigurationError,
    OutputWriteError,
    SyncAlreadyRunningError,
    SyncFetchError,
    TraktJournalError,
)


class TestNoticeClasses:
    """Chaque erreur fatale se rattache a une classe de notification."""

    @pytest.mark.parametrize(
        "error_cls,expected",
        [
            (ConfigurationError, "Trakt configuration: boom"),
            (AuthenticationError, "Trakt authentication: boom"),
            (SyncFetchError, "Trakt sync failed: boom"),
            (OutputWriteError, "Trakt sync failed: boom"),
            (SyncAlreadyRunningError, "Trakt sync failed: boom"),
        ],
    )
    def test_notice(self, error_cls, expected) -> None:
        error = error_cls("boom")
        assert isinstance(error, TraktJournalError)
        assert error.notice == expected
