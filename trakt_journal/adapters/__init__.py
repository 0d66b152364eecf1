"""
Couche adaptateurs (infrastructure).

Les adaptateurs implementent les ports definis dans core/ports/ :
- api/ : Clients Trakt et TMDB (httpx), cache par execution
- cli/ : Interface ligne de commande (Typer + Rich)
- note_file : Fichier de notes Markdown
- token_store : Token OAuth en JSON
- settings_store : Edition du fichier .env

Chaque adaptateur depend de core/ mais core/ ne depend jamais des adaptateurs.
"""

from trakt_journal.adapters.note_file import FileNoteSink
from trakt_journal.adapters.token_store import JsonTokenStore

__all__ = [
    "FileNoteSink",
    "JsonTokenStore",
]
