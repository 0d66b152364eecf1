"""
Interfaces ports pour la persistance et les notifications.

- INoteSink : écriture du fichier de notes (création ou remplacement complet)
- ITokenStore : enregistrement opaque du token OAuth
- INotifier : messages utilisateur (info / erreur)
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from trakt_journal.core.entities.trakt import OAuthToken


class INoteSink(ABC):
    """Destination du document généré."""

    @abstractmethod
    def write(self, path: Path, content: str) -> None:
        """
        Garantit que le fichier existe avec exactement ce contenu.

        Remplacement complet : aucun ajout ni fusion avec l'existant.
        """
        ...


class ITokenStore(ABC):
    """Stockage du token OAuth (remplacement de l'objet entier)."""

    @abstractmethod
    def load(self) -> Optional[OAuthToken]:
        """Retourne le token stocké, ou None si aucun compte n'est connecté."""
        ...

    @abstractmethod
    def save(self, token: OAuthToken) -> None:
        ...

    @abstractmethod
    def clear(self) -> bool:
        """Supprime le token. Retourne True si un token existait."""
        ...


class INotifier(ABC):
    """Notifications utilisateur, sans retour."""

    @abstractmethod
    def info(self, message: str) -> None:
        ...

    @abstractmethod
    def error(self, message: str) -> None:
        ...
