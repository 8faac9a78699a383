"""Search engine bound to one scoring configuration."""

import logging
from collections.abc import Iterable

from catalog_search.models.item import SearchableItem
from catalog_search.models.search import SearchFilters, SearchResult
from catalog_search.retrieval.autocomplete import (
    DEFAULT_MAX_SUGGESTIONS,
    SuggestionGroups,
    autocomplete,
    group_suggestions,
)
from catalog_search.retrieval.search_engine import DEFAULT_CONFIG, DEFAULT_LIMIT, SearchConfig, search

logger = logging.getLogger(__name__)


class SearchEngine:
    """Single entry point for full search and autocomplete.

    Both call sites go through one engine so they always rank with the same
    constants.
    """

    def __init__(self, config: SearchConfig | None = None):
        """Initialize search engine.

        Args:
            config: Scoring constants (defaults to the tuned storefront values)
        """
        self.config = config or DEFAULT_CONFIG

        logger.info(
            f"Initialized SearchEngine: weights={self.config.weights}, "
            f"min_score={self.config.min_score}, epsilon={self.config.score_epsilon}"
        )

    def search(
        self,
        items: Iterable[SearchableItem],
        query: str,
        filters: SearchFilters | None = None,
        limit: int = DEFAULT_LIMIT,
    ) -> list[SearchResult]:
        return search(items, query, filters, limit, config=self.config)

    def autocomplete(
        self,
        items: Iterable[SearchableItem],
        query: str,
        max_suggestions: int = DEFAULT_MAX_SUGGESTIONS,
    ) -> list[SearchResult]:
        return autocomplete(items, query, max_suggestions, config=self.config)

    def group_suggestions(
        self,
        items: Iterable[SearchableItem],
        query: str,
        max_suggestions: int = DEFAULT_MAX_SUGGESTIONS,
    ) -> SuggestionGroups:
        return group_suggestions(items, query, max_suggestions, config=self.config)
