"""
Modification des paramètres dans le fichier .env.

Les paramètres sont lus par pydantic-settings (config.Settings) ; ce module
gère l'écriture : chaque clé modifiée voit sa valeur entièrement remplacée,
les commentaires et les autres lignes sont préservés.
"""

from pathlib import Path

from pydantic import ValidationError

from trakt_journal.config import ENV_PREFIX, Settings, _ENV_FILE
from trakt_journal.core.exceptions import ConfigurationError
from trakt_journal.core.value_objects.options import SortOrder
from trakt_journal.utils.dates import normalize_ignore_before

# Champs éditables et leur type d'affichage
EDITABLE_FIELDS: dict[str, str] = {
    "client_id": "secret",
    "client_secret": "secret",
    "redirect_uri": "text",
    "tmdb_api_key": "secret",
    "ignore_before": "date",
    "date_format": "text",
    "sort_order": "select",
    "output_file": "path",
    "token_file": "path",
    "enrichment_concurrency": "number",
    "log_level": "select",
    "log_file": "path",
    "log_rotation_size": "text",
    "log_retention_count": "number",
}

_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def mask_secret(value: str | None) -> str:
    """Masque une clé en ne montrant que les 4 derniers caractères."""
    if not value:
        return ""
    if len(value) <= 4:
        return "••••"
    return "••••" + value[-4:]


class SettingsStore:
    """
    Lecture et écriture des paramètres persistés dans le .env.

    Example:
        store = SettingsStore()
        store.update({"sort_order": "chronological"})
        settings = store.load()
    """

    def __init__(self, env_file: Path = _ENV_FILE) -> None:
        self._env_file = env_file

    @property
    def env_file(self) -> Path:
        return self._env_file

    def load(self) -> Settings:
        """Charge les paramètres (variables d'environnement prioritaires sur le .env)."""
        return Settings(_env_file=self._env_file if self._env_file.exists() else None)

    def display_values(self, settings: Settings) -> dict[str, str]:
        """Valeurs affichables, secrets masqués."""
        values = {}
        for key, field_type in EDITABLE_FIELDS.items():
            value = getattr(settings, key, None)
            if hasattr(value, "value"):
                value = value.value
            text = str(value) if value is not None else ""
            values[key] = mask_secret(text) if field_type == "secret" else text
        return values

    def validate(self, key: str, value: str) -> str:
        """
        Valide et normalise une valeur avant écriture.

        Raises:
            ConfigurationError: Clé inconnue ou valeur invalide
        """
        if key not in EDITABLE_FIELDS:
            known = ", ".join(sorted(EDITABLE_FIELDS))
            raise ConfigurationError(f"Unknown setting '{key}' (expected one of: {known})")

        value = value.strip()
        field_type = EDITABLE_FIELDS[key]

        if field_type == "date":
            try:
                return normalize_ignore_before(value)
            except ValueError:
                raise ConfigurationError(
                    f"Invalid date for {key}: {value!r} (expected YYYY.MM.DD)"
                ) from None

        if field_type == "number":
            try:
                number = int(value)
            except ValueError:
                raise ConfigurationError(f"{key} must be an integer") from None
            if number < 1:
                raise ConfigurationError(f"{key} must be greater than 0")
            return str(number)

        if key == "log_level":
            if value.upper() not in _LOG_LEVELS:
                raise ConfigurationError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
            return value.upper()

        if key == "sort_order":
            try:
                SortOrder(value.lower())
            except ValueError:
                raise ConfigurationError(
                    "sort_order must be 'chronological' or 'alphabetical'"
                ) from None
            return value.lower()

        if field_type == "path" and key != "output_file" and not value:
            raise ConfigurationError(f"{key} cannot be empty")

        return value

    def _read_lines(self) -> list[str]:
        if self._env_file.exists():
            return self._env_file.read_text(encoding="utf-8").splitlines()
        return []

    def update(self, updates: dict[str, str]) -> Settings:
        """
        Met à jour le fichier .env en préservant commentaires et structure.

        Args:
            updates: Clés Settings (sans préfixe) -> nouvelles valeurs

        Returns:
            Les paramètres rechargés après écriture

        Raises:
            ConfigurationError: Si une valeur est invalide (rien n'est écrit)
        """
        updates = {key: self.validate(key, value) for key, value in updates.items()}

        updated_keys = set()
        new_lines = []
        for line in self._read_lines():
            stripped = line.strip()
            if stripped and not stripped.startswith("#") and "=" in stripped:
                key = stripped.split("=", 1)[0].strip()
                env_key = key[len(ENV_PREFIX):].lower() if key.upper().startswith(ENV_PREFIX) else None
                if env_key and env_key in updates:
                    new_lines.append(f"{key}={updates[env_key]}")
                    updated_keys.add(env_key)
                    continue
            new_lines.append(line)

        # Ajouter les clés manquantes à la fin
        for key, value in updates.items():
            if key not in updated_keys:
                new_lines.append(f"{ENV_PREFIX}{key.upper()}={value}")

        self._env_file.parent.mkdir(parents=True, exist_ok=True)
        self._env_file.write_text("\n".join(new_lines) + "\n", encoding="utf-8")

        try:
            return self.load()
        except ValidationError as e:
            raise ConfigurationError(f"Invalid settings after update: {e}") from e
