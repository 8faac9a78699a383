"""Tests for the tiered field scorer.

Feature: catalog-search
Properties: score bounds, exact match dominance, typo tolerance boundary
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from catalog_search.retrieval.field_scorer import (
    CONTAINS_CEILING,
    FUZZY_CEILING,
    WORD_CEILING,
    field_score,
    word_score,
)


class TestFieldScorerProperties:
    """Property-based tests for field_score."""

    @given(st.text(max_size=30), st.text(max_size=30))
    def test_score_within_bounds(self, query, text):
        score = field_score(query, text)
        assert 0.0 <= score <= 1.0

    @given(st.text(min_size=1, max_size=30))
    def test_exact_match_scores_one(self, text):
        assert field_score(text, text) == 1.0

    @given(st.text(min_size=1, max_size=30), st.text(min_size=1, max_size=30))
    def test_non_exact_never_reaches_one(self, query, text):
        if query.lower().strip() != text.lower().strip():
            assert field_score(query, text) < 1.0


class TestFieldScorerUnit:
    """Unit tests for each scoring tier."""

    def test_exact_is_case_insensitive_and_trimmed(self):
        assert field_score("  CANON eos r5 ", "Canon EOS R5") == 1.0

    def test_contains_scales_with_coverage(self):
        assert field_score("canon", "canon eos") == pytest.approx(CONTAINS_CEILING * 5 / 9)
        assert field_score("canon eos", "canon eos r5") > field_score("canon", "canon eos r5")

    def test_fuzzy_within_two_edits(self):
        # distance 1 over max length 6
        assert field_score("cannon", "canon") == pytest.approx(FUZZY_CEILING * 5 / 6)

    def test_typo_tolerance_boundary(self):
        assert field_score("cannon", "canon") > 0
        assert field_score("xyzxyz", "canon") == 0

    def test_beyond_edit_limit_falls_through_to_word_tier(self):
        # "sonny" vs "sony a7" has no whole-string fuzzy match but matches by word
        score = field_score("sonny", "sony a7")
        assert 0 < score <= WORD_CEILING

    def test_word_level_contains(self):
        # "eos" and "mirrorles" are contained in text words, "body" matches nothing
        score = field_score("eos mirrorles body", "canon eos r5 mirrorless camera")
        expected = ((0.7 + 0.7) / 3) * WORD_CEILING
        assert score == pytest.approx(expected)

    def test_word_level_unmatched_words_dilute(self):
        full = word_score("canon", "canon eos")
        diluted = word_score("canon qqqqq", "canon eos")
        assert diluted == pytest.approx(full / 2)

    def test_short_query_words_not_fuzzy_matched(self):
        # "ab" is one edit from "ac" but is shorter than three characters
        assert word_score("ab zz", "ac yy") == 0

    def test_fuzzy_word_match(self):
        assert word_score("lens", "lenz kit") == pytest.approx(0.5 * WORD_CEILING)

    def test_no_match_is_zero(self):
        assert field_score("tripod", "canon eos r5") == 0
