"""
Stockage du token OAuth Trakt dans un fichier JSON.

Le fichier contient l'enregistrement complet {access_token, refresh_token,
expires_at} ; chaque sauvegarde remplace l'objet entier. Le fichier est
cree avec des permissions restreintes a l'utilisateur (0600).
"""

from pathlib import Path
from typing import Optional

from loguru import logger
from pydantic import ValidationError

from trakt_journal.adapters.file_writer import write_text_atomic
from trakt_journal.core.entities.trakt import OAuthToken
from trakt_journal.core.ports.storage import ITokenStore


class JsonTokenStore(ITokenStore):
    """
    Token OAuth persiste en JSON.

    Example:
        store = JsonTokenStore(Path("~/.config/trakt-journal/token.json").expanduser())
        token = store.load()
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Optional[OAuthToken]:
        """
        Charge le token stocke.

        Un fichier illisible ou corrompu est traite comme « non connecte ».
        """
        if not self._path.exists():
            return None
        try:
            return OAuthToken.model_validate_json(self._path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as e:
            logger.warning(f"Token illisible, reconnexion necessaire: {self._path} ({e})")
            return None

    def save(self, token: OAuthToken) -> None:
        write_text_atomic(self._path, token.model_dump_json(indent=2), mode=0o600)

    def clear(self) -> bool:
        if not self._path.exists():
            return False
        self._path.unlink()
        return True
