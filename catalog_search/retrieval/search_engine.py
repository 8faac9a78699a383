"""Search engine façade: score, filter, rank and truncate."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from catalog_search.models.item import ItemType, SearchableItem
from catalog_search.models.search import SearchFilters, SearchResult
from catalog_search.retrieval.aggregator import DEFAULT_WEIGHTS, FieldWeights, aggregate_score
from catalog_search.retrieval.filters import passes_filters
from catalog_search.retrieval.ranker import SCORE_EPSILON, rank_results

logger = logging.getLogger(__name__)

MIN_SCORE = 0.1
DEFAULT_LIMIT = 20
BUNDLING_DISPLAY_PREFIX = "📦 "
ITEM_FIELDS = set(SearchableItem.model_fields)


@dataclass(frozen=True)
class SearchConfig:
    """Scoring constants used by one engine."""

    weights: FieldWeights = field(default_factory=lambda: DEFAULT_WEIGHTS)
    min_score: float = MIN_SCORE
    score_epsilon: float = SCORE_EPSILON


DEFAULT_CONFIG = SearchConfig()


def result_url(item: SearchableItem) -> str:
    """Navigation URL for an item."""
    if item.type == ItemType.PRODUCT:
        return f"/product/{item.slug}"
    return f"/bundling/{item.slug}"


def result_display(item: SearchableItem) -> str:
    """Display label for an item; bundlings carry a fixed marker."""
    if item.type == ItemType.BUNDLING:
        return f"{BUNDLING_DISPLAY_PREFIX}{item.name}"
    return item.name


def search(
    items: Iterable[SearchableItem],
    query: str,
    filters: SearchFilters | None = None,
    limit: int = DEFAULT_LIMIT,
    *,
    config: SearchConfig = DEFAULT_CONFIG,
) -> list[SearchResult]:
    """Rank catalog items against a query.

    Empty or whitespace-only queries return no results; search never falls
    back to browsing the whole catalog. The function is pure: the same
    inputs always give the same output.

    Args:
        items: Catalog snapshot
        query: Raw user query
        filters: Facet criteria, or None
        limit: Maximum number of results
        config: Scoring constants

    Returns:
        Results sorted best first, at most ``limit`` long
    """
    if not query.strip() or limit <= 0:
        return []

    candidates: list[SearchResult] = []
    for item in items:
        score, matched_fields = aggregate_score(item, query, config.weights)
        if score <= 0 or score < config.min_score:
            continue
        if not passes_filters(item, filters):
            continue

        candidates.append(
            SearchResult(
                **item.model_dump(include=ITEM_FIELDS),
                score=score,
                matched_fields=matched_fields,
                url=result_url(item),
                display=result_display(item),
            )
        )

    ranked = rank_results(candidates, query, config.score_epsilon)

    logger.debug(
        f"Search '{query}': {len(candidates)} candidates → returning {min(len(ranked), limit)}"
    )

    return ranked[:limit]

