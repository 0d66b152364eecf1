"""
Objets valeur pour les options de synchronisation et de rendu.
"""

from dataclasses import dataclass
from enum import Enum


class SortOrder(str, Enum):
    """Ordre des sections du document.

    Valeurs:
        CHRONOLOGICAL: Series dans l'ordre d'arrivee, films du plus recent au plus ancien
        ALPHABETICAL: Series et films tries par titre (insensible a la casse)
    """

    CHRONOLOGICAL = "chronological"
    ALPHABETICAL = "alphabetical"


@dataclass(frozen=True)
class RenderOptions:
    """
    Configuration du rendu Markdown.

    Attributs:
        sort_order: Ordre des series et des films
        date_format: Format des dates (jetons style moment : YYYY, MM, DD...)
    """

    sort_order: SortOrder = SortOrder.ALPHABETICAL
    date_format: str = "YYYY-MM-DD"
