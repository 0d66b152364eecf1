"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour la CLI : clients API,
stockage du token, fichier de notes et services de synchronisation.
"""

from dependency_injector import containers, providers

from .adapters.api.tmdb_client import TMDBClient
from .adapters.api.trakt_client import TraktClient
from .adapters.cli.notifier import ConsoleNotifier
from .adapters.note_file import FileNoteSink
from .adapters.settings_store import SettingsStore
from .adapters.token_store import JsonTokenStore
from .config import Settings
from .services.auth import AuthService
from .services.reconciler import ReconcilerService
from .services.renderer import JournalRenderer
from .services.sync import SyncService


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        sync_service = container.sync_service()
        report = await sync_service.run()
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Edition du .env (commande config set)
    settings_store = providers.Singleton(SettingsStore)

    # Adapters - implementations concretes des ports
    token_store = providers.Singleton(
        JsonTokenStore,
        path=config.provided.token_file,
    )
    note_sink = providers.Singleton(FileNoteSink)
    notifier = providers.Singleton(ConsoleNotifier)

    # Clients API - Singleton, un seul client HTTP par processus
    trakt_client = providers.Singleton(
        TraktClient,
        client_id=config.provided.client_id,
    )

    # Si tmdb_api_key est absente, le client est desactive (enabled=False)
    # et les affiches de remplacement sont utilisees
    tmdb_client = providers.Singleton(
        TMDBClient,
        api_key=config.provided.tmdb_api_key,
    )

    # Services stateless - Singletons
    reconciler = providers.Singleton(
        ReconcilerService,
        concurrency=config.provided.enrichment_concurrency,
    )
    renderer = providers.Singleton(JournalRenderer)

    auth_service = providers.Singleton(
        AuthService,
        settings=config,
        trakt_client=trakt_client,
        token_store=token_store,
    )

    # Singleton : l'execution unique est garantie par instance de service
    sync_service = providers.Singleton(
        SyncService,
        settings=config,
        auth_service=auth_service,
        trakt_client=trakt_client,
        poster_client=tmdb_client,
        reconciler=reconciler,
        renderer=renderer,
        note_sink=note_sink,
        notifier=notifier,
    )
