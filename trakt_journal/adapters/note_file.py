"""
Fichier de notes Markdown (destination du document genere).

Politique de remplacement complet : le fichier est cree s'il n'existe pas,
sinon son contenu est integralement remplace par le nouveau rendu.
"""

from pathlib import Path

from loguru import logger

from trakt_journal.adapters.file_writer import write_text_atomic
from trakt_journal.core.ports.storage import INoteSink


class FileNoteSink(INoteSink):
    """Ecrit le document dans un fichier du coffre de notes."""

    def write(self, path: Path, content: str) -> None:
        existed = path.exists()
        write_text_atomic(path, content)
        logger.info(f"Note {'mise a jour' if existed else 'creee'}: {path}")
