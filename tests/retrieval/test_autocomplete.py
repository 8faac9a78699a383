"""Tests for type-balanced autocomplete.

Feature: catalog-search
Properties: suggestion cap, per-type quotas, minimum query length
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from catalog_search.models.item import ItemType
from catalog_search.retrieval.autocomplete import autocomplete, group_quotas, group_suggestions
from factories import catalog_strategy, make_item


def kit_catalog(products: int, bundlings: int):
    """Products and bundlings whose scores interleave pairwise.

    The i-th product and i-th bundling share a name length, so they tie on
    score and rank product first, bundling second.
    """
    items = [make_item(i, "Kit " + "p" * i) for i in range(1, products + 1)]
    items += [
        make_item(100 + i, "Kit " + "b" * i, type=ItemType.BUNDLING)
        for i in range(1, bundlings + 1)
    ]
    return items


class TestAutocompleteProperties:
    """Property-based tests for autocomplete."""

    @given(catalog_strategy(), st.text(min_size=2, max_size=10), st.integers(1, 12))
    @settings(max_examples=50)
    def test_never_exceeds_quotas(self, items, query, max_suggestions):
        groups = group_suggestions(items, query, max_suggestions)
        product_quota, bundling_quota = group_quotas(max_suggestions)

        assert len(groups.suggestions) <= max_suggestions
        assert all(r.type == ItemType.PRODUCT for r in groups.products)
        assert all(r.type == ItemType.BUNDLING for r in groups.bundlings)
        assert len(groups.products) <= product_quota
        assert len(groups.bundlings) <= bundling_quota

    @given(st.text(max_size=1))
    def test_short_query_returns_nothing(self, query):
        assert autocomplete([make_item(1, "Kit")], query) == []


class TestAutocompleteUnit:
    """Unit tests for quota allocation and merging."""

    def test_quotas_favor_products(self):
        assert group_quotas(8) == (5, 3)
        assert group_quotas(5) == (3, 2)
        assert group_quotas(1) == (1, 0)

    def test_balanced_split_with_plenty_of_both(self):
        groups = group_suggestions(kit_catalog(10, 10), "kit", 8)

        assert len(groups.suggestions) == 8
        assert sum(r.type == ItemType.PRODUCT for r in groups.suggestions) == 5
        assert sum(r.type == ItemType.BUNDLING for r in groups.suggestions) == 3

    def test_scarce_bundlings_leave_slots_empty(self):
        groups = group_suggestions(kit_catalog(10, 1), "kit", 8)

        assert len(groups.products) == 5
        assert len(groups.bundlings) == 1
        assert len(groups.suggestions) == 6

    def test_scarce_products_leave_slots_empty(self):
        groups = group_suggestions(kit_catalog(2, 10), "kit", 8)

        assert len(groups.products) == 2
        assert len(groups.bundlings) == 3
        assert len(groups.suggestions) == 5

    def test_candidates_limited_to_top_results(self):
        strong = [make_item(i, f"Kit Product {i:02d}") for i in range(1, 21)]
        weak = [
            make_item(100 + i, f"Kit Bundle With A Much Longer Name {i:02d}", type=ItemType.BUNDLING)
            for i in range(1, 4)
        ]

        groups = group_suggestions(strong + weak, "kit", 8)

        assert len(groups.products) == 5
        assert groups.bundlings == []

    def test_fewer_matches_than_cap(self, camera_catalog):
        suggestions = autocomplete(camera_catalog, "sony", 8)
        assert [s.id for s in suggestions] == [3]

    def test_merged_list_is_globally_ranked(self, camera_catalog):
        suggestions = autocomplete(camera_catalog, "canon", 8)
        scores = [s.score for s in suggestions]
        assert scores == sorted(scores, reverse=True)

    def test_minimum_length_counts_trimmed_query(self, camera_catalog):
        assert autocomplete(camera_catalog, " c ") == []
        assert autocomplete(camera_catalog, "ca") != []

    def test_zero_cap(self, camera_catalog):
        assert autocomplete(camera_catalog, "canon", 0) == []
