"""
Taxonomie des erreurs de synchronisation.

Chaque erreur porte la classe de notification affichee a l'utilisateur
("configuration", "authentication" ou "sync failed").
"""


class TraktJournalError(Exception):
    """Erreur de base de l'application."""

    notice_class = "sync failed"

    @property
    def notice(self) -> str:
        """Message unique a notifier a l'utilisateur."""
        return f"Trakt {self.notice_class}: {self}"


class ConfigurationError(TraktJournalError):
    """Identifiants ou chemin de sortie manquants. Levee avant tout appel reseau."""

    notice_class = "configuration"


class AuthenticationError(TraktJournalError):
    """Token absent, echec du rafraichissement ou de l'echange du code."""

    notice_class = "authentication"


class SyncFetchError(TraktJournalError):
    """Echec d'une des requetes principales (notes, series vues, films vus)."""


class OutputWriteError(TraktJournalError):
    """Echec de l'ecriture du fichier de notes."""


class SyncAlreadyRunningError(TraktJournalError):
    """Une synchronisation est deja en cours pour cette instance."""
