"""
Index des notes par cle composite.

Construit une seule fois par synchronisation a partir de la collection
complete des notes. En cas de doublon, le dernier enregistrement gagne
(ordre de livraison de l'API). L'absence de note est un resultat normal.
"""

from collections.abc import Iterable
from typing import Optional

from loguru import logger

from trakt_journal.core.entities.journal import Rating
from trakt_journal.core.entities.trakt import RatingRecord
from trakt_journal.core.value_objects.keys import CompositeKey, SubjectKind, rating_key


class RatingIndex:
    """
    Table cle composite -> note.

    Example:
        index = RatingIndex.build(ratings)
        rating = index.get(CompositeKey.movie(12601))
    """

    def __init__(self) -> None:
        self._entries: dict[CompositeKey, Rating] = {}
        self._kinds: set[SubjectKind] = set()

    @classmethod
    def build(cls, records: Iterable[RatingRecord]) -> "RatingIndex":
        index = cls()
        skipped = 0
        for record in records:
            if not index.add(record):
                skipped += 1
        if skipped:
            logger.debug(f"{skipped} note(s) sans identifiant Trakt ignoree(s)")
        return index

    def add(self, record: RatingRecord) -> bool:
        """
        Ajoute une note (ecrase une note existante pour la meme cle).

        Returns:
            False si l'enregistrement n'a pas de cle (ignore)
        """
        key = rating_key(record)
        if key is None:
            return False
        self._entries[key] = Rating(value=record.rating, rated_at=record.rated_at)
        self._kinds.add(key.kind)
        return True

    def get(self, key: Optional[CompositeKey]) -> Optional[Rating]:
        if key is None:
            return None
        return self._entries.get(key)

    def has_kind(self, kind: SubjectKind) -> bool:
        """Indique si au moins une note porte sur ce type de sujet."""
        return kind in self._kinds

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
