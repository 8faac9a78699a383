"""Tests for Levenshtein edit distance.

Feature: catalog-search
Properties: identity, symmetry, empty-string lengths, length bounds
"""

from hypothesis import given
from hypothesis import strategies as st

from catalog_search.retrieval.levenshtein import levenshtein_distance


class TestLevenshteinProperties:
    """Property-based tests for levenshtein_distance."""

    @given(st.text(max_size=30))
    def test_identity_is_zero(self, text):
        assert levenshtein_distance(text, text) == 0

    @given(st.text(max_size=20), st.text(max_size=20))
    def test_symmetric(self, a, b):
        assert levenshtein_distance(a, b) == levenshtein_distance(b, a)

    @given(st.text(max_size=30))
    def test_empty_string_yields_other_length(self, text):
        assert levenshtein_distance("", text) == len(text)
        assert levenshtein_distance(text, "") == len(text)

    @given(st.text(max_size=20), st.text(max_size=20))
    def test_bounded_by_lengths(self, a, b):
        distance = levenshtein_distance(a, b)
        assert abs(len(a) - len(b)) <= distance <= max(len(a), len(b))


class TestLevenshteinUnit:
    """Unit tests for known distances."""

    def test_single_deletion(self):
        assert levenshtein_distance("cannon", "canon") == 1

    def test_single_substitution(self):
        assert levenshtein_distance("sony", "sonx") == 1

    def test_classic_kitten_sitting(self):
        assert levenshtein_distance("kitten", "sitting") == 3

    def test_case_sensitive(self):
        assert levenshtein_distance("Canon", "canon") == 1
