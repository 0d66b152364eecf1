"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe
TRAKT_JOURNAL_, et peut optionnellement être fournie via un fichier .env.

Les identifiants Trakt sont optionnels au chargement : leur absence est signalée
comme erreur de configuration au moment de la synchronisation, avant tout appel réseau.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.value_objects.options import SortOrder
from .utils.constants import DEFAULT_DATE_FORMAT, DEFAULT_IGNORE_BEFORE, OOB_REDIRECT_URI
from .utils.dates import normalize_ignore_before

# Trouver le fichier .env à la racine du projet (parent de trakt_journal/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"

ENV_PREFIX = "TRAKT_JOURNAL_"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe TRAKT_JOURNAL_.
    Exemple : TRAKT_JOURNAL_SORT_ORDER=chronological

    Les chemins sont automatiquement étendus (~ -> répertoire home).
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Trakt (client ID = clé API)
    client_id: Optional[str] = Field(default=None)
    client_secret: Optional[str] = Field(default=None)
    redirect_uri: str = Field(default=OOB_REDIRECT_URI)

    # Clé TMDB pour les affiches (OPTIONNELLE - affiche de remplacement si absente)
    tmdb_api_key: Optional[str] = Field(default=None)

    # Synchronisation
    ignore_before: str = Field(default=DEFAULT_IGNORE_BEFORE)
    date_format: str = Field(default=DEFAULT_DATE_FORMAT)
    sort_order: SortOrder = Field(default=SortOrder.ALPHABETICAL)
    output_file: Optional[Path] = Field(default=Path("~/Notes/Trakt History.md"))
    token_file: Path = Field(default=Path("~/.config/trakt-journal/token.json"))
    enrichment_concurrency: int = Field(default=4, ge=1, le=32)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/trakt-journal.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("client_id", "client_secret", "tmdb_api_key", mode="before")
    @classmethod
    def empty_as_none(cls, v: Optional[str]) -> Optional[str]:
        """Une valeur vide dans le .env équivaut à une valeur absente."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("output_file", mode="before")
    @classmethod
    def expand_output_file(cls, v: Optional[str | Path]) -> Optional[Path]:
        """Étend ~ ; un chemin vide signifie « non configuré »."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return Path(v).expanduser()

    @field_validator("token_file", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @field_validator("ignore_before")
    @classmethod
    def validate_ignore_before(cls, v: str) -> str:
        """Normalise le seuil au format YYYY.MM.DD."""
        return normalize_ignore_before(v)

    @property
    def credentials_configured(self) -> bool:
        """Vérifie si le client ID et le secret Trakt sont renseignés."""
        return bool(self.client_id) and bool(self.client_secret)

    @property
    def tmdb_enabled(self) -> bool:
        """Vérifie si l'API TMDB est configurée."""
        return self.tmdb_api_key is not None
