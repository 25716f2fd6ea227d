"""Tests for edit-distance similarity."""

import pytest

from munin.search.similarity import edit_distance, similarity


class TestEditDistance:
    """Tests for Levenshtein distance."""

    def test_classic_example(self) -> None:
        """Test kitten/sitting needs three edits."""
        assert edit_distance("kitten", "sitting") == 3

    def test_identical(self) -> None:
        """Test identical strings have distance zero."""
        assert edit_distance("recipe", "recipe") == 0

    def test_empty_strings(self) -> None:
        """Test distance to empty string is the other length."""
        assert edit_distance("", "") == 0
        assert edit_distance("", "abc") == 3
        assert edit_distance("abc", "") == 3

    def test_case_sensitive(self) -> None:
        """Test that case differences count as substitutions."""
        assert edit_distance("Cake", "cake") == 1

    def test_symmetric(self) -> None:
        """Test distance does not depend on argument order."""
        assert edit_distance("brownies", "brownys") == edit_distance("brownys", "brownies") == 2


class TestSimilarity:
    """Tests for normalized similarity."""

    def test_identity(self) -> None:
        """Test a string is fully similar to itself."""
        assert similarity("meeting", "meeting") == 1.0

    def test_both_empty(self) -> None:
        """Test two empty strings are identical."""
        assert similarity("", "") == 1.0

    def test_case_insensitive(self) -> None:
        """Test similarity ignores case."""
        assert similarity("Recipe", "RECIPE") == 1.0

    def test_one_edit(self) -> None:
        """Test one insertion over seven characters."""
        assert similarity("recipe", "recipes") == pytest.approx(6 / 7)

    def test_completely_different(self) -> None:
        """Test disjoint strings of equal length score zero."""
        assert similarity("abc", "xyz") == 0.0

    def test_symmetric(self) -> None:
        """Test similarity does not depend on argument order."""
        assert similarity("walnut", "Walnuts") == similarity("Walnuts", "walnut")

    @pytest.mark.parametrize(("a", "b"), [("a", ""), ("cake", "bake"), ("api", "roadmap")])
    def test_bounded(self, a: str, b: str) -> None:
        """Test results stay within [0, 1]."""
        assert 0.0 <= similarity(a, b) <= 1.0
