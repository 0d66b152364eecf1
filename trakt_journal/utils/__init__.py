"""
Utilitaires et constantes pour Trakt Journal.
"""

from trakt_journal.utils.dates import (
    format_journal_date,
    normalize_ignore_before,
    parse_cutoff,
)

__all__ = [
    "format_journal_date",
    "normalize_ignore_before",
    "parse_cutoff",
]
