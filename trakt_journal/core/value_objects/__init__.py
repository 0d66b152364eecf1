"""
Objets valeur immutables representant des concepts du domaine sans identite.

Exports :
- SubjectKind : Type de sujet (film, serie, saison, episode)
- CompositeKey : Cle de jointure entre collections Trakt
- SortOrder : Ordre de tri du document
- RenderOptions : Options de rendu (tri, format de date)
"""

from trakt_journal.core.value_objects.keys import (
    CompositeKey,
    SubjectKind,
    episode_key,
    movie_key,
    rating_key,
    season_key,
    show_key,
)
from trakt_journal.core.value_objects.options import RenderOptions, SortOrder

__all__ = [
    "CompositeKey",
    "RenderOptions",
    "SortOrder",
    "SubjectKind",
    "episode_key",
    "movie_key",
    "rating_key",
    "season_key",
    "show_key",
]
