"""
Ecriture atomique de fichiers texte.

Le contenu est ecrit dans un fichier temporaire du meme repertoire puis
renomme avec os.replace : un lecteur voit soit l'ancien contenu, soit le
nouveau, jamais un fichier tronque.
"""

import os
import uuid
from pathlib import Path
from typing import Optional


def write_text_atomic(path: Path, content: str, mode: Optional[int] = None) -> None:
    """
    Cree ou remplace un fichier avec exactement ce contenu.

    Cree les repertoires parents si necessaire.

    Args:
        path: Fichier cible
        content: Contenu complet (UTF-8)
        mode: Permissions du fichier temporaire, appliquees des sa creation
              (ex: 0o600). Par defaut, celles de l'umask.

    Raises:
        OSError: Si l'ecriture ou le renommage echoue
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    temp = path.with_name(f".tmp_{uuid.uuid4().hex}_{path.name}")
    try:
        if mode is None:
            handle = temp.open("w", encoding="utf-8", newline="")
        else:
            fd = os.open(temp, os.O_WRONLY | os.O_CREAT | os.O_EXCL, mode)
            handle = os.fdopen(fd, "w", encoding="utf-8", newline="")
        # newline="" : le contenu est ecrit octet pour octet, sans conversion
        with handle:
            handle.write(content)
        os.replace(temp, path)
    except Exception:
        if temp.exists():
            temp.unlink()
        raise
