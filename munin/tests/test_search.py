"""Tests for the ranking engine.

Scores below come from the fixed weights: phrase 10, exact tag 8, fuzzy
tag 6, folder 8, term in title 5, term in text 3, fuzzy title word
4 x similarity, fuzzy content word 2 x similarity.
"""

from collections.abc import Callable

import pytest

from munin.notes.models import Note
from munin.search.models import SearchOptions
from munin.search.query import parse_query
from munin.search.tools import score_note, search


def ids(results) -> list[str]:
    return [r.note.key for r in results]


# =============================================================================
# Score Note Tests
# =============================================================================


class TestScoreNote:
    """Tests for single-note scoring."""

    def test_title_hit(self, make_note: Callable[..., Note]) -> None:
        """Test a term in the title scores 5."""
        assert score_note(make_note(1, "Cake"), parse_query("cake")) == 5

    def test_excluded_note_returns_none(self, make_note: Callable[..., Note]) -> None:
        """Test an exclusion match filters the note out."""
        note = make_note(1, "Cake", "with nuts")
        assert score_note(note, parse_query("cake -nuts")) is None

    def test_exclusion_matches_title(self, make_note: Callable[..., Note]) -> None:
        """Test exclusions look at the title as well as the content."""
        note = make_note(1, "Draft cake", "body")
        assert score_note(note, parse_query("body -draft")) is None

    def test_scores_accumulate(self, make_note: Callable[..., Note]) -> None:
        """Test phrase, tag, folder and term weights add up."""
        note = make_note(1, "Cake", "dark chocolate", folder="Recipes", tags=["dessert"])
        query = parse_query('"dark chocolate" tag:dessert folder:recipes cake')
        assert score_note(note, query) == 10 + 8 + 8 + 5


# =============================================================================
# Search Tests
# =============================================================================


class TestSearch:
    """Tests for search over a collection."""

    def test_term_ranking(self, sample_notes: list[Note]) -> None:
        """Test title hits outrank content hits and misses are dropped."""
        results = search(sample_notes, "cake")

        assert ids(results)[0] == "1"
        assert results[0].score == 5
        assert set(ids(results)) == {"1", "2", "journal-1"}
        assert all(r.score == 3 for r in results[1:])

    def test_case_insensitive(self, sample_notes: list[Note]) -> None:
        """Test query case does not matter."""
        assert ids(search(sample_notes, "CHOCOLATE")) == ["1"]

    def test_fuzzy_title_word(self, sample_notes: list[Note]) -> None:
        """Test a typo still finds the note through its title."""
        results = search(sample_notes, "brownys")

        assert ids(results) == ["2"]
        assert results[0].score == pytest.approx(4 * 0.75)

    def test_fuzzy_content_word(self, sample_notes: list[Note]) -> None:
        """Test a typo can match a content word at half the title weight."""
        results = search(sample_notes, "hirng")

        assert ids(results) == ["3"]
        assert results[0].score == pytest.approx(2 * (1 - 2 / 7))

    def test_fuzzy_threshold_respected(self, sample_notes: list[Note]) -> None:
        """Test a strict threshold disables the typo match."""
        assert search(sample_notes, "brownys", SearchOptions(fuzzy_threshold=0.9)) == []

    def test_single_term_miss_drops(self, sample_notes: list[Note]) -> None:
        """Test a single term with no hit of any kind returns nothing."""
        assert search(sample_notes, "zzzzqqq") == []

    def test_multi_term_is_lenient(self, sample_notes: list[Note]) -> None:
        """Test a missing term does not drop a note when other terms hit."""
        results = search(sample_notes, "chocolate zzzzqqq")

        assert ids(results) == ["1"]
        assert results[0].score == 5

    def test_exact_tag(self, sample_notes: list[Note]) -> None:
        """Test exact tag matches score 8 each."""
        results = search(sample_notes, "tag:recipe")

        assert set(ids(results)) == {"1", "2"}
        assert all(r.score == 8 for r in results)

    def test_fuzzy_tag(self, sample_notes: list[Note]) -> None:
        """Test a near-miss tag scores 6."""
        results = search(sample_notes, "tag:recipes")

        assert set(ids(results)) == {"1", "2"}
        assert all(r.score == 6 for r in results)

    def test_hash_tag(self, sample_notes: list[Note]) -> None:
        """Test #tag works like tag:tag."""
        assert ids(search(sample_notes, "#meeting")) == ["3"]

    def test_folder_substring(self, sample_notes: list[Note]) -> None:
        """Test folder filters match by substring."""
        results = search(sample_notes, "folder:rec")

        assert set(ids(results)) == {"1", "2"}
        assert all(r.score == 8 for r in results)

    def test_exact_phrase(self, sample_notes: list[Note]) -> None:
        """Test a quoted phrase must appear verbatim."""
        results = search(sample_notes, '"fudgy brownies"')

        assert ids(results) == ["2"]
        assert results[0].score == 10

    def test_missing_phrase_drops(self, sample_notes: list[Note]) -> None:
        """Test a phrase in the wrong order matches nothing."""
        assert search(sample_notes, '"brownies fudgy with"') == []

    def test_exclusion(self, sample_notes: list[Note]) -> None:
        """Test excluded terms remove otherwise matching notes."""
        assert set(ids(search(sample_notes, "cake -walnuts"))) == {"1", "journal-1"}

    def test_before_bound(self, sample_notes: list[Note]) -> None:
        """Test notes modified after the bound are dropped."""
        assert ids(search(sample_notes, "tag:recipe before:2025-03-09")) == ["2"]

    def test_after_bound(self, sample_notes: list[Note]) -> None:
        """Test notes modified before the bound are dropped."""
        assert ids(search(sample_notes, "tag:recipe after:2025-03-09")) == ["1"]

    def test_invalid_date_fails_open(self, sample_notes: list[Note]) -> None:
        """Test an unparseable date leaves every note eligible."""
        assert set(ids(search(sample_notes, "tag:recipe before:notadate"))) == {"1", "2"}

    def test_sort_by_date(self, sample_notes: list[Note]) -> None:
        """Test date sort orders by modified, newest first, ignoring score."""
        results = search(sample_notes, "cake", SearchOptions(sort_by="date"))
        assert ids(results) == ["journal-1", "1", "2"]

    def test_max_results(self, sample_notes: list[Note]) -> None:
        """Test results are truncated after sorting."""
        assert ids(search(sample_notes, "cake", SearchOptions(max_results=1))) == ["1"]


class TestSearchWithoutCriteria:
    """Tests for the no-criteria short-circuit."""

    @pytest.mark.parametrize("query", ["", "   ", None])
    def test_empty_query_returns_everything(
        self, sample_notes: list[Note], query: str | None
    ) -> None:
        """Test an empty query returns every note with score 0."""
        results = search(sample_notes, query)

        assert ids(results) == ["1", "2", "3", "journal-1"]
        assert all(r.score == 0 for r in results)

    def test_exclusion_alone_is_not_a_filter(self, sample_notes: list[Note]) -> None:
        """Test exclusions without criteria do not filter."""
        assert len(search(sample_notes, "-cake")) == 4

    def test_no_truncation(self, sample_notes: list[Note]) -> None:
        """Test max_results does not apply to the short-circuit."""
        assert len(search(sample_notes, "", SearchOptions(max_results=1))) == 4

    def test_empty_collection(self) -> None:
        """Test searching nothing returns nothing."""
        assert search([], "cake") == []


# =============================================================================
# Package Interface Tests
# =============================================================================


class TestPackageInterface:
    """Tests for the names exported at package level."""

    def test_library_operations_exported(self) -> None:
        """Test each library operation is reachable from its feature package."""
        import munin.analytics
        import munin.links
        import munin.search
        from munin.analytics import tools as analytics_tools
        from munin.links import tools as links_tools
        from munin.search import query as search_query
        from munin.search import tools as search_tools

        assert munin.search.parse_query is search_query.parse_query
        assert munin.search.search is search_tools.search
        assert munin.search.get_search_suggestions is search_tools.get_search_suggestions
        assert munin.search.highlight_search_terms is search_tools.highlight_search_terms
        assert munin.links.extract_note_links is links_tools.extract_note_links
        assert munin.links.build_backlink_index is links_tools.build_backlink_index
        assert munin.analytics.compute_analytics is analytics_tools.compute_analytics

    def test_exports_are_minimal(self) -> None:
        """Test packages export only their public operations."""
        import munin.links
        import munin.search

        assert sorted(munin.search.__all__) == [
            "get_search_suggestions",
            "highlight_search_terms",
            "parse_query",
            "search",
        ]
        assert sorted(munin.links.__all__) == ["build_backlink_index", "extract_note_links"]
