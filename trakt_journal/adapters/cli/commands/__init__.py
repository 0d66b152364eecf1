"""Sous-package CLI commands - re-exporte les commandes publiques."""

from trakt_journal.adapters.cli.commands.auth_commands import (
    auth,
    connect,
    disconnect,
)
from trakt_journal.adapters.cli.commands.config_commands import (
    config_app,
    config_set,
    config_show,
)
from trakt_journal.adapters.cli.commands.sync_commands import (
    sync,
)

__all__ = [
    # sync
    "sync",
    # auth
    "connect",
    "auth",
    "disconnect",
    # config
    "config_app",
    "config_show",
    "config_set",
]
