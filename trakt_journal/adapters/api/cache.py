"""
Cache des metadonnees auxiliaires, limite a une synchronisation.

Chaque synchronisation cree son propre cache (diskcache dans un repertoire
temporaire) et le detruit a la fin : aucune donnee n'est reutilisee d'une
execution a l'autre, et deux executions ne partagent jamais le meme cache.
"""

import asyncio
import shutil
import tempfile
from functools import partial
from pathlib import Path
from typing import Any, Optional

from diskcache import Cache


class RunCache:
    """
    Cache asynchrone propre a une execution.

    Utilise diskcache pour le stockage et run_in_executor pour
    les operations asynchrones non-bloquantes.

    Example:
        async with RunCache() as cache:
            await cache.set("poster:movie:27205", url)
            url = await cache.get("poster:movie:27205")
    """

    def __init__(self, cache_dir: Optional[str] = None) -> None:
        """
        Initialise un cache vide.

        Args:
            cache_dir: Repertoire du cache ; un repertoire temporaire est cree
                       si non fourni. Son contenu est vide a l'ouverture.
        """
        self._directory = Path(cache_dir or tempfile.mkdtemp(prefix="trakt-journal-"))
        self._cache = Cache(str(self._directory))
        self._cache.clear()

    async def get(self, key: str) -> Optional[Any]:
        """
        Recupere une valeur du cache.

        Returns:
            La valeur stockee ou None si absente
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._cache.get, key)

    async def set(self, key: str, value: Any) -> None:
        """Stocke une valeur pour la duree de l'execution."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, partial(self._cache.set, key, value))

    def close(self) -> None:
        """Ferme le cache et supprime son repertoire."""
        self._cache.close()
        shutil.rmtree(self._directory, ignore_errors=True)

    async def __aenter__(self) -> "RunCache":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.close()
