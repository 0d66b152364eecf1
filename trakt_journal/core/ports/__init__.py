"""
Ports (interfaces abstraites) de la couche domaine.

Les adaptateurs de adapters/ implementent ces contrats.
"""

from trakt_journal.core.ports.api_clients import IPosterClient, ITraktClient
from trakt_journal.core.ports.storage import INoteSink, INotifier, ITokenStore

__all__ = [
    "INoteSink",
    "INotifier",
    "IPosterClient",
    "ITokenStore",
    "ITraktClient",
]
