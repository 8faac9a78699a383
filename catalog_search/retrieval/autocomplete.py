"""Type-balanced autocomplete suggestions."""

import math
from collections.abc import Iterable
from dataclasses import dataclass, field

from catalog_search.models.item import ItemType, SearchableItem
from catalog_search.models.search import SearchResult
from catalog_search.retrieval.ranker import rank_results
from catalog_search.retrieval.search_engine import DEFAULT_CONFIG, SearchConfig, search

MIN_QUERY_LENGTH = 2
DEFAULT_MAX_SUGGESTIONS = 8
PRODUCT_SHARE = 0.6
BUNDLING_SHARE = 0.4
CANDIDATE_POOL_FACTOR = 2


@dataclass
class SuggestionGroups:
    """Autocomplete output, merged and per type."""

    suggestions: list[SearchResult] = field(default_factory=list)
    products: list[SearchResult] = field(default_factory=list)
    bundlings: list[SearchResult] = field(default_factory=list)


def group_quotas(max_suggestions: int) -> tuple[int, int]:
    """Return (product quota, bundling quota); products round up."""
    return (
        math.ceil(max_suggestions * PRODUCT_SHARE),
        math.floor(max_suggestions * BUNDLING_SHARE),
    )


def group_suggestions(
    items: Iterable[SearchableItem],
    query: str,
    max_suggestions: int = DEFAULT_MAX_SUGGESTIONS,
    *,
    config: SearchConfig = DEFAULT_CONFIG,
) -> SuggestionGroups:
    """Build autocomplete suggestions and keep the per-type groups.

    Candidates are the top ``max_suggestions * 2`` search results. Each type
    is trimmed to a fixed quota (about 60/40 in favor of products); a type
    that cannot fill its quota leaves the slots empty. The survivors are
    re-ranked together so the visible list follows global relevance rather
    than group order.

    Args:
        items: Catalog snapshot
        query: Raw user query
        max_suggestions: Cap on merged suggestions
        config: Scoring constants

    Returns:
        SuggestionGroups (empty for queries shorter than two characters)
    """
    if len(query.strip()) < MIN_QUERY_LENGTH or max_suggestions <= 0:
        return SuggestionGroups()

    pool = search(items, query, limit=max_suggestions * CANDIDATE_POOL_FACTOR, config=config)
    all_products = [r for r in pool if r.type == ItemType.PRODUCT]
    all_bundlings = [r for r in pool if r.type == ItemType.BUNDLING]

    product_quota, bundling_quota = group_quotas(max_suggestions)
    products = all_products[:product_quota]
    bundlings = all_bundlings[:bundling_quota]

    merged = rank_results(products + bundlings, query, config.score_epsilon)

    return SuggestionGroups(
        suggestions=merged[:max_suggestions],
        products=products,
        bundlings=bundlings,
    )


def autocomplete(
    items: Iterable[SearchableItem],
    query: str,
    max_suggestions: int = DEFAULT_MAX_SUGGESTIONS,
    *,
    config: SearchConfig = DEFAULT_CONFIG,
) -> list[SearchResult]:
    """Suggestion list capped at ``max_suggestions``, favoring products."""
    return group_suggestions(items, query, max_suggestions, config=config).suggestions
