"""
Utilitaires partages pour les commandes CLI de Trakt Journal.

Ce module fournit :
- suppress_loguru : context manager pour desactiver/reactiver les logs loguru
- with_container : decorateur injectant un container initialise
- close_clients : fermeture des clients HTTP du container
"""

from contextlib import contextmanager
from functools import wraps

from loguru import logger as loguru_logger

from trakt_journal.container import Container


@contextmanager
def suppress_loguru():
    """
    Context manager pour desactiver les logs loguru pendant l'affichage Rich.

    Usage:
        with suppress_loguru():
            console.print(...)
    """
    loguru_logger.disable("trakt_journal")
    try:
        yield
    finally:
        loguru_logger.enable("trakt_journal")


def with_container():
    """
    Decorateur qui injecte un container initialise en premier argument.

    Usage:
        @with_container()
        async def my_command(container, ...):
            config = container.config()
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            container = Container()
            try:
                return await func(container, *args, **kwargs)
            finally:
                await close_clients(container)
        return wrapper
    return decorator


async def close_clients(container) -> None:
    """Ferme les clients HTTP crees pendant la commande."""
    await container.trakt_client().close()
    await container.tmdb_client().close()
