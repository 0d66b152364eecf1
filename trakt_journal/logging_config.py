"""
Configuration du logging de Trakt Journal via loguru.

Fournit un logging structuré avec :
- Sortie console : colorée, niveau réglable via -v / -q
- Sortie fichier : sérialisée en JSON, avec rotation, pour l'analyse historique

Les tokens OAuth et secrets ne doivent jamais apparaître dans les journaux :
un patcher masque les valeurs reconnues avant l'émission.
"""

import re
import sys
from pathlib import Path

from loguru import logger

# access_token / refresh_token / client_secret / Bearer xxx
_SECRET_PATTERN = re.compile(
    r"(?P<prefix>(?:access_token|refresh_token|client_secret|code)[\"']?\s*[:=]\s*[\"']?|Bearer\s+)"
    r"(?P<secret>[A-Za-z0-9._\-]{8,})"
)


def redact_secrets(message: str) -> str:
    """Masque les tokens d'un message en ne gardant que les 4 derniers caractères."""
    return _SECRET_PATTERN.sub(
        lambda m: f"{m.group('prefix')}••••{m.group('secret')[-4:]}", message
    )


def _patch_record(record: dict) -> None:
    record["message"] = redact_secrets(record["message"])


def verbosity_to_level(verbose: int, quiet: bool) -> str | None:
    """
    Convertit les options -v / -q de la CLI en niveau loguru.

    Retourne None si aucune option n'est passée (niveau de la configuration).
    """
    if quiet:
        return "ERROR"
    if verbose >= 2:
        return "TRACE"
    if verbose == 1:
        return "DEBUG"
    return None


def configure_logging(
    log_level: str = "INFO",
    log_file: Path = Path("logs/trakt-journal.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
) -> None:
    """Configure le logging de l'application.

    Args :
        log_level : Niveau de log minimum pour la sortie console (DEBUG, INFO, WARNING, ERROR)
        log_file : Chemin vers le fichier de log
        rotation_size : Taille maximale du fichier avant rotation (ex: "10 MB")
        retention_count : Nombre de fichiers rotatifs à conserver
    """
    logger.remove()
    logger.configure(patcher=_patch_record)

    logger.add(
        sys.stderr,
        level=log_level,
        format=(
            "<green>{time:HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan> | "
            "<level>{message}</level>"
        ),
        colorize=True,
    )

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",  # Capture tous les niveaux (requêtes API en DEBUG)
        format="{message}",
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        enqueue=True,
    )

    logger.debug("Logging configuré", log_file=str(log_file), rotation=rotation_size)
