"""
Rendu Markdown du journal de visionnage.

Fonction pure : meme arbre + memes options -> document identique, octet
pour octet. Le rendu ne leve jamais d'exception sur un arbre vide ou
partiel : une section vide affiche une ligne « aucun resultat ».

Structure du document :

    # Shows
    ## [Futurama](https://trakt.tv/shows/futurama) (1999) · ★ 9/10
    ![Futurama poster](https://...)
    ### Season 9 · ☆
    - S09E01 on [[2025-01-05]] · ★ 8/10 · [Trakt](https://trakt.tv/shows/futurama/seasons/9/episodes/1)

    # Movies
    ## [Inception](https://trakt.tv/movies/inception-2010) (2010)
    ![Inception poster](https://...)
    - Watch #2 on [[2025-01-10]] · ☆ · [Trakt](https://trakt.tv/movies/inception-2010)
"""

from datetime import datetime, timezone
from typing import Optional

from trakt_journal.core.entities.journal import (
    JournalTree,
    NormalizedEpisode,
    NormalizedMovie,
    NormalizedSeason,
    NormalizedShow,
    Rating,
)
from trakt_journal.core.value_objects.options import RenderOptions, SortOrder
from trakt_journal.utils.constants import (
    NO_RATING_GLYPH,
    RATING_GLYPH,
    SPECIALS_LABEL,
    TRAKT_WEB_URL,
)
from trakt_journal.utils.dates import format_journal_date

SEPARATOR = " · "
NO_SHOWS_LINE = "_No shows found._"
NO_MOVIES_LINE = "_No movies found._"


def rating_indicator(rating: Optional[Rating]) -> str:
    """Indicateur de note : ★ 8/10, ou le glyphe neutre si non note."""
    if rating is None:
        return NO_RATING_GLYPH
    return f"{RATING_GLYPH} {rating.value}/10"


def escape_title(title: str) -> str:
    """Echappe les crochets qui casseraient le texte d'un lien Markdown."""
    return title.replace("[", "\\[").replace("]", "\\]")


def _trakt_path(slug: Optional[str], trakt_id: int) -> str:
    return slug or str(trakt_id)


def show_url(show: NormalizedShow) -> str:
    return f"{TRAKT_WEB_URL}/shows/{_trakt_path(show.slug, show.trakt_id)}"


def episode_url(show: NormalizedShow, season: int, episode: int) -> str:
    return f"{show_url(show)}/seasons/{season}/episodes/{episode}"


def movie_url(movie: NormalizedMovie) -> str:
    return f"{TRAKT_WEB_URL}/movies/{_trakt_path(movie.slug, movie.trakt_id)}"


def _title_sort_key(title: str, year: Optional[int], trakt_id: int) -> tuple:
    return (title.casefold(), year if year is not None else 0, trakt_id)


class JournalRenderer:
    """
    Serialise l'arbre normalise en Markdown.

    Ordre :
    - Series : par titre (alphabetique) ou ordre d'arrivee (chronologique)
    - Saisons : numero croissant, Specials (saison 0) en premier
    - Episodes : numero croissant
    - Films : par titre (alphabetique) ou date de visionnage decroissante
    """

    def render(self, tree: JournalTree, options: RenderOptions = RenderOptions()) -> str:
        lines: list[str] = ["# Shows", ""]

        shows = self._sort_shows(tree.shows, options.sort_order)
        if shows:
            for show in shows:
                lines.extend(self._render_show(show, options))
                lines.append("")
        else:
            lines.extend([NO_SHOWS_LINE, ""])

        lines.extend(["# Movies", ""])
        movies = self._sort_movies(tree.movies, options.sort_order)
        if movies:
            for movie in movies:
                lines.extend(self._render_movie(movie, options))
                lines.append("")
        else:
            lines.append(NO_MOVIES_LINE)

        document = "\n".join(line.rstrip() for line in lines)
        return document.rstrip() + "\n"

    @staticmethod
    def _sort_shows(shows: list[NormalizedShow], order: SortOrder) -> list[NormalizedShow]:
        if order == SortOrder.ALPHABETICAL:
            return sorted(shows, key=lambda s: _title_sort_key(s.title, s.year, s.trakt_id))
        return list(shows)

    @staticmethod
    def _sort_movies(movies: list[NormalizedMovie], order: SortOrder) -> list[NormalizedMovie]:
        if order == SortOrder.ALPHABETICAL:
            return sorted(movies, key=lambda m: _title_sort_key(m.title, m.year, m.trakt_id))
        # Tri stable : titre puis ID, puis date decroissante
        by_title = sorted(movies, key=lambda m: _title_sort_key(m.title, m.year, m.trakt_id))
        return sorted(by_title, key=lambda m: _utc_timestamp(m.watched_at), reverse=True)

    def _render_show(self, show: NormalizedShow, options: RenderOptions) -> list[str]:
        lines = [
            f"## {self._heading_link(show.title, show_url(show), show.year)}"
            f"{SEPARATOR}{rating_indicator(show.rating)}"
        ]
        if show.poster_url:
            lines.append(f"![{escape_title(show.title)} poster]({show.poster_url})")

        for season in sorted(show.seasons, key=lambda s: s.number):
            lines.append("")
            lines.append(f"### {self._season_label(season)}{SEPARATOR}{rating_indicator(season.rating)}")
            for episode in sorted(season.episodes, key=lambda e: e.number):
                lines.append(self._episode_line(show, season, episode, options))
        return lines

    @staticmethod
    def _season_label(season: NormalizedSeason) -> str:
        if season.number == 0:
            return SPECIALS_LABEL
        return f"Season {season.number}"

    @staticmethod
    def _episode_line(
        show: NormalizedShow,
        season: NormalizedSeason,
        episode: NormalizedEpisode,
        options: RenderOptions,
    ) -> str:
        code = f"S{season.number:02d}E{episode.number:02d}"
        date_ref = f"[[{format_journal_date(episode.watched_at, options.date_format)}]]"
        link = f"[Trakt]({episode_url(show, season.number, episode.number)})"
        return SEPARATOR.join(
            [f"- {code} on {date_ref}", rating_indicator(episode.rating), link]
        )

    def _render_movie(self, movie: NormalizedMovie, options: RenderOptions) -> list[str]:
        lines = [f"## {self._heading_link(movie.title, movie_url(movie), movie.year)}"]
        if movie.poster_url:
            lines.append(f"![{escape_title(movie.title)} poster]({movie.poster_url})")

        date_ref = f"[[{format_journal_date(movie.watched_at, options.date_format)}]]"
        watch = f"Watch #{movie.plays}" if movie.plays else "Watched"
        lines.append(
            SEPARATOR.join(
                [
                    f"- {watch} on {date_ref}",
                    rating_indicator(movie.rating),
                    f"[Trakt]({movie_url(movie)})",
                ]
            )
        )
        return lines

    @staticmethod
    def _heading_link(title: str, url: str, year: Optional[int]) -> str:
        text = f"[{escape_title(title) or 'Untitled'}]({url})"
        if year is not None:
            text += f" ({year})"
        return text


def _utc_timestamp(moment: datetime) -> float:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.timestamp()
