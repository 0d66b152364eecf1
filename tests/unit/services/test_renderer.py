"""
Tests unitaires pour JournalRenderer.

Ces tests verifient:
- Rendu deterministe (meme arbre + memes options -> meme document)
- Sections vides rendues avec une ligne « aucun resultat »
- Ordre des series, saisons (Specials en premier), episodes et films
- Glyphe neutre pour les sujets non notes, liens Trakt et dates
"""

import pytest

from trakt_journal.core.entities.journal import (
    JournalTree,
    NormalizedEpisode,
    NormalizedMovie,
    NormalizedSeason,
    NormalizedShow,
    Rating,
)
from trakt_journal.core.value_objects.options import RenderOptions, SortOrder
from trakt_journal.services.renderer import (
    JournalRenderer,
    escape_title,
    rating_indicator,
)
from tests.fixtures.builders import utc


@pytest.fixture
def renderer() -> JournalRenderer:
    return JournalRenderer()


def _rating(value: int) -> Rating:
    return Rating(value=value, rated_at=utc(2025, 1, 7))


def _futurama(*episodes: NormalizedEpisode, seasons=None) -> NormalizedShow:
    return NormalizedShow(
        trakt_id=614,
        slug="futurama",
        title="Futurama",
        year=1999,
        poster_url="https://image.tmdb.org/t/p/w500/futurama.jpg",
        seasons=seasons or [NormalizedSeason(number=9, episodes=list(episodes))],
    )


def _movie(title: str, trakt_id: int, watched_at, **kwargs) -> NormalizedMovie:
    return NormalizedMovie(
        trakt_id=trakt_id,
        slug=title.lower().replace(" ", "-"),
        title=title,
        watched_at=watched_at,
        **kwargs,
    )


class TestEmptyTree:
    def test_empty_tree_renders_none_found_sections(self, renderer):
        document = renderer.render(JournalTree())

        assert document == (
            "# Shows\n\n_No shows found._\n\n# Movies\n\n_No movies found._\n"
        )

    def test_empty_movies_with_shows(self, renderer):
        tree = JournalTree(shows=[_futurama(NormalizedEpisode(1, utc(2025, 1, 5)))])

        document = renderer.render(tree)

        assert "_No shows found._" not in document
        assert document.endswith("# Movies\n\n_No movies found._\n")


class TestDeterminism:
    def test_same_input_same_output(self, renderer):
        tree = JournalTree(
            shows=[_futurama(NormalizedEpisode(1, utc(2025, 1, 5), rating=_rating(8)))],
            movies=[_movie("Inception", 16662, utc(2025, 1, 10), plays=2)],
        )
        options = RenderOptions(sort_order=SortOrder.CHRONOLOGICAL)

        outputs = {renderer.render(tree, options) for _ in range(5)}

        assert len(outputs) == 1

    def test_document_ends_with_single_newline(self, renderer):
        document = renderer.render(JournalTree(movies=[_movie("Up", 1, utc(2025, 1, 2))]))

        assert document.endswith("\n")
        assert not document.endswith("\n\n")
        assert all(line == line.rstrip() for line in document.split("\n"))


class TestShowRendering:
    def test_unrated_episodes_use_neutral_glyph(self, renderer):
        """Futurama saison 9 : deux episodes non notes."""
        tree = JournalTree(
            shows=[
                _futurama(
                    NormalizedEpisode(1, utc(2025, 1, 5)),
                    NormalizedEpisode(2, utc(2025, 1, 6)),
                )
            ]
        )

        document = renderer.render(tree)

        assert "## [Futurama](https://trakt.tv/shows/futurama) (1999) · ☆" in document
        assert "![Futurama poster](https://image.tmdb.org/t/p/w500/futurama.jpg)" in document
        assert "### Season 9 · ☆" in document
        assert (
            "- S09E01 on [[2025-01-05]] · ☆ · "
            "[Trakt](https://trakt.tv/shows/futurama/seasons/9/episodes/1)"
        ) in document
        assert (
            "- S09E02 on [[2025-01-06]] · ☆ · "
            "[Trakt](https://trakt.tv/shows/futurama/seasons/9/episodes/2)"
        ) in document
        assert document.count("### ") == 1

    def test_rated_episode_shows_rating(self, renderer):
        tree = JournalTree(
            shows=[
                _futurama(
                    NormalizedEpisode(1, utc(2025, 1, 5), rating=_rating(8)),
                    NormalizedEpisode(2, utc(2025, 1, 6)),
                )
            ]
        )

        document = renderer.render(tree)

        assert "- S09E01 on [[2025-01-05]] · ★ 8/10 ·" in document
        assert "- S09E02 on [[2025-01-06]] · ☆ ·" in document

    def test_specials_first_then_seasons_ascending(self, renderer):
        show = _futurama(
            seasons=[
                NormalizedSeason(number=2, episodes=[NormalizedEpisode(1, utc(2025, 1, 5))]),
                NormalizedSeason(number=0, episodes=[NormalizedEpisode(3, utc(2025, 1, 5))]),
                NormalizedSeason(number=1, episodes=[NormalizedEpisode(1, utc(2025, 1, 5))]),
            ]
        )

        document = renderer.render(JournalTree(shows=[show]))

        specials = document.index("### Specials")
        season_1 = document.index("### Season 1")
        season_2 = document.index("### Season 2")
        assert specials < season_1 < season_2
        assert "- S00E03 on" in document

    def test_episodes_sorted_by_number(self, renderer):
        show = _futurama(
            NormalizedEpisode(10, utc(2025, 1, 5)),
            NormalizedEpisode(2, utc(2025, 1, 9)),
        )

        document = renderer.render(JournalTree(shows=[show]))

        assert document.index("S09E02") < document.index("S09E10")

    def test_alphabetical_order_is_case_insensitive(self, renderer):
        shows = [
            NormalizedShow(trakt_id=1, slug="severance", title="severance"),
            NormalizedShow(trakt_id=2, slug="andor", title="Andor"),
            NormalizedShow(trakt_id=3, slug="bluey", title="Bluey"),
        ]
        for show in shows:
            show.seasons = [NormalizedSeason(1, episodes=[NormalizedEpisode(1, utc(2025, 1, 5))])]

        document = renderer.render(JournalTree(shows=shows))

        assert document.index("[Andor]") < document.index("[Bluey]") < document.index("[severance]")

    def test_chronological_keeps_arrival_order(self, renderer):
        shows = [
            NormalizedShow(trakt_id=1, slug="severance", title="Severance"),
            NormalizedShow(trakt_id=2, slug="andor", title="Andor"),
        ]
        for show in shows:
            show.seasons = [NormalizedSeason(1, episodes=[NormalizedEpisode(1, utc(2025, 1, 5))])]

        document = renderer.render(
            JournalTree(shows=shows), RenderOptions(sort_order=SortOrder.CHRONOLOGICAL)
        )

        assert document.index("[Severance]") < document.index("[Andor]")

    def test_show_without_slug_links_by_trakt_id(self, renderer):
        show = NormalizedShow(
            trakt_id=614,
            slug=None,
            title="Futurama",
            seasons=[NormalizedSeason(9, episodes=[NormalizedEpisode(1, utc(2025, 1, 5))])],
        )

        document = renderer.render(JournalTree(shows=[show]))

        assert "[Futurama](https://trakt.tv/shows/614)" in document
        assert "https://trakt.tv/shows/614/seasons/9/episodes/1" in document


class TestMovieRendering:
    def test_movie_block(self, renderer):
        movie = _movie(
            "Inception",
            16662,
            utc(2025, 1, 10),
            year=2010,
            plays=2,
            rating=_rating(9),
            poster_url="https://image.tmdb.org/t/p/w500/inception.jpg",
        )
        movie.slug = "inception-2010"

        document = renderer.render(JournalTree(movies=[movie]))

        assert "## [Inception](https://trakt.tv/movies/inception-2010) (2010)" in document
        assert "![Inception poster](https://image.tmdb.org/t/p/w500/inception.jpg)" in document
        assert (
            "- Watch #2 on [[2025-01-10]] · ★ 9/10 · "
            "[Trakt](https://trakt.tv/movies/inception-2010)"
        ) in document

    def test_chronological_movies_newest_first(self, renderer):
        movies = [
            _movie("Alien", 1, utc(2025, 1, 2)),
            _movie("Zodiac", 2, utc(2025, 3, 1)),
            _movie("Heat", 3, utc(2025, 2, 1)),
        ]

        document = renderer.render(
            JournalTree(movies=movies), RenderOptions(sort_order=SortOrder.CHRONOLOGICAL)
        )

        assert document.index("[Zodiac]") < document.index("[Heat]") < document.index("[Alien]")

    def test_alphabetical_movies(self, renderer):
        movies = [
            _movie("Zodiac", 2, utc(2025, 3, 1)),
            _movie("alien", 1, utc(2025, 1, 2)),
        ]

        document = renderer.render(JournalTree(movies=movies))

        assert document.index("[alien]") < document.index("[Zodiac]")

    def test_custom_date_format(self, renderer):
        movie = _movie("Up", 1, utc(2025, 1, 2))

        document = renderer.render(
            JournalTree(movies=[movie]), RenderOptions(date_format="DD/MM/YYYY")
        )

        assert "[[02/01/2025]]" in document

    def test_movie_without_plays(self, renderer):
        document = renderer.render(JournalTree(movies=[_movie("Up", 1, utc(2025, 1, 2))]))

        assert "- Watched on [[2025-01-02]] · ☆ ·" in document


class TestHelpers:
    def test_rating_indicator(self):
        assert rating_indicator(None) == "☆"
        assert rating_indicator(_rating(7)) == "★ 7/10"

    def test_escape_title(self):
        assert escape_title("[REC]") == "\\[REC\\]"
