"""
Fonctions de dates : seuil d'exclusion et formatage des dates du journal.

Le format d'affichage utilise des jetons style moment (YYYY, MM, DD, ...)
pour rester compatible avec les formats des notes journalieres.
"""

import re
from datetime import date, datetime, time, timezone

# Seuil accepte : YYYY.MM.DD, YYYY-MM-DD ou YYYY/MM/DD
IGNORE_BEFORE_PATTERN = re.compile(r"^\d{4}[-./]\d{2}[-./]\d{2}$")

_FORMAT_TOKENS = re.compile(r"\[[^\]]*\]|YYYY|YY|MMMM|MMM|MM|M|DD|D|dddd|ddd|HH|mm|ss")


def normalize_ignore_before(value: str) -> str:
    """
    Valide et normalise un seuil de date vers le format YYYY.MM.DD.

    Raises:
        ValueError: Si la valeur n'est pas une date au format attendu
    """
    value = value.strip()
    if not IGNORE_BEFORE_PATTERN.match(value):
        raise ValueError(f"Date invalide (attendu YYYY.MM.DD): {value!r}")
    normalized = value.replace("-", ".").replace("/", ".")
    # Verifie que la date existe (ex: 2024.02.30)
    datetime.strptime(normalized, "%Y.%m.%d")
    return normalized


def parse_cutoff(value: str) -> datetime:
    """
    Convertit le seuil configure en instant UTC (minuit, borne incluse).

    Args:
        value: Seuil au format YYYY.MM.DD (ou avec - et /)

    Returns:
        datetime UTC ; un enregistrement strictement anterieur est exclu
    """
    day = datetime.strptime(normalize_ignore_before(value), "%Y.%m.%d").date()
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def format_journal_date(moment: datetime | date, fmt: str) -> str:
    """
    Formate une date avec des jetons style moment.

    Jetons supportes : YYYY, YY, MMMM, MMM, MM, M, DD, D, dddd, ddd, HH, mm, ss.
    Le texte entre crochets est recopie tel quel (ex: "[Semaine] YYYY").
    """
    if isinstance(moment, datetime) and moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)

    def _replace(match: re.Match) -> str:
        token = match.group(0)
        if token.startswith("["):
            return token[1:-1]
        if token == "YYYY":
            return f"{moment.year:04d}"
        if token == "YY":
            return f"{moment.year % 100:02d}"
        if token == "MMMM":
            return moment.strftime("%B")
        if token == "MMM":
            return moment.strftime("%b")
        if token == "MM":
            return f"{moment.month:02d}"
        if token == "M":
            return str(moment.month)
        if token == "DD":
            return f"{moment.day:02d}"
        if token == "D":
            return str(moment.day)
        if token == "dddd":
            return moment.strftime("%A")
        if token == "ddd":
            return moment.strftime("%a")
        # Jetons horaires : 00 pour une date simple
        if not isinstance(moment, datetime):
            return "00"
        if token == "HH":
            return f"{moment.hour:02d}"
        if token == "mm":
            return f"{moment.minute:02d}"
        return f"{moment.second:02d}"

    return _FORMAT_TOKENS.sub(_replace, fmt)
