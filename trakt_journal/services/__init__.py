"""
Services applicatifs de Trakt Journal.

- ReconcilerService : reconciliation des collections Trakt en arbre normalise
- MetadataResolver : affiches et IDs d'episodes, caches le temps d'une execution
- JournalRenderer : rendu Markdown deterministe
- AuthService : cycle de vie du token OAuth
- SyncService : orchestration d'une synchronisation complete
"""

from .auth import AuthService
from .metadata_resolver import MetadataResolver
from .rating_index import RatingIndex
from .reconciler import ReconcilerService
from .renderer import JournalRenderer
from .sync import SyncReport, SyncService

__all__ = [
    "AuthService",
    "JournalRenderer",
    "MetadataResolver",
    "RatingIndex",
    "ReconcilerService",
    "SyncReport",
    "SyncService",
]
