"""
Constantes partagees de Trakt Journal.
"""

# URLs Trakt
TRAKT_API_URL = "https://api.trakt.tv"
TRAKT_WEB_URL = "https://trakt.tv"
TRAKT_AUTHORIZE_URL = f"{TRAKT_WEB_URL}/oauth/authorize"

# Redirection hors bande : Trakt affiche le code a copier dans `trakt-journal auth`
OOB_REDIRECT_URI = "urn:ietf:wg:oauth:2.0:oob"

# Affiches de remplacement (absente / erreur de recuperation)
POSTER_ABSENT_URL = "https://placehold.co/300x450?text=No+Poster"
POSTER_ERROR_URL = "https://placehold.co/300x450?text=Poster+Unavailable"

# Rendu
NO_RATING_GLYPH = "☆"
RATING_GLYPH = "★"
SPECIALS_LABEL = "Specials"

DEFAULT_DATE_FORMAT = "YYYY-MM-DD"
DEFAULT_IGNORE_BEFORE = "1970.01.01"
