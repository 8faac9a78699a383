"""Stateful search surface consumed by rendering code."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from catalog_search.config import Settings
from catalog_search.errors import CatalogUnavailableError
from catalog_search.models.search import SearchFilters, SearchResult
from catalog_search.retrieval.autocomplete import SuggestionGroups
from catalog_search.retrieval.engine import SearchEngine
from catalog_search.services.query_controller import (
    AUTOCOMPLETE_DEBOUNCE_MS,
    SEARCH_DEBOUNCE_MS,
    QueryController,
)
from catalog_search.storage.catalog_cache import CatalogCache

logger = logging.getLogger(__name__)


class SearchStatus(str, Enum):
    """Lifecycle of the session's current query."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class SearchState:
    """Immutable view of a session published to subscribers.

    ``status == READY`` with no results means "no results"; ``status ==
    ERROR`` means search is temporarily unavailable. ``warning`` is set when
    results came from a stale catalog after a failed refresh.
    """

    query: str = ""
    filters: SearchFilters = field(default_factory=SearchFilters)
    status: SearchStatus = SearchStatus.IDLE
    results: list[SearchResult] = field(default_factory=list)
    suggestions: list[SearchResult] = field(default_factory=list)
    error: str | None = None
    warning: str | None = None

    @property
    def is_loading(self) -> bool:
        return self.status == SearchStatus.LOADING

    @property
    def total_results(self) -> int:
        return len(self.results)


class SearchSession:
    """Query, filters and results for one search box.

    Wraps a QueryController, the shared CatalogCache and a SearchEngine.
    Setters update the state immediately (query text, loading flag) and the
    results follow once the input has settled.
    """

    def __init__(
        self,
        cache: CatalogCache,
        engine: SearchEngine | None = None,
        debounce_ms: int = SEARCH_DEBOUNCE_MS,
        max_results: int = 50,
        max_suggestions: int = 8,
        on_change: Callable[[SearchState], None] | None = None,
    ):
        """Initialize search session.

        Args:
            cache: Shared catalog cache
            engine: Search engine (defaults to the tuned constants)
            debounce_ms: Debounce window for query changes
            max_results: Result cap for the full results list
            max_suggestions: Cap for autocomplete suggestions
            on_change: Subscriber called with each published state
        """
        self.cache = cache
        self.engine = engine or SearchEngine()
        self.max_results = max_results
        self.max_suggestions = max_suggestions
        self._on_change = on_change
        self._state = SearchState()
        self._controller = QueryController(
            evaluate=self._evaluate,
            on_result=self._apply_result,
            on_error=self._apply_error,
            delay_ms=debounce_ms,
            name=f"session:{debounce_ms}ms",
        )

    @classmethod
    def for_autocomplete(
        cls,
        cache: CatalogCache,
        settings: Settings,
        on_change: Callable[[SearchState], None] | None = None,
    ) -> "SearchSession":
        """Session tuned for the navbar autocomplete (short debounce)."""
        return cls(
            cache,
            SearchEngine(settings.search_config()),
            debounce_ms=settings.autocomplete_debounce_ms,
            max_results=settings.max_suggestions,
            max_suggestions=settings.max_suggestions,
            on_change=on_change,
        )

    @classmethod
    def for_results_page(
        cls,
        cache: CatalogCache,
        settings: Settings,
        on_change: Callable[[SearchState], None] | None = None,
    ) -> "SearchSession":
        """Session tuned for the full search results page."""
        return cls(
            cache,
            SearchEngine(settings.search_config()),
            debounce_ms=settings.search_debounce_ms,
            max_results=settings.max_results,
            max_suggestions=settings.max_suggestions,
            on_change=on_change,
        )

    @property
    def state(self) -> SearchState:
        return self._state

    @property
    def query(self) -> str:
        return self._state.query

    @property
    def filters(self) -> SearchFilters:
        return self._state.filters

    @property
    def results(self) -> list[SearchResult]:
        return self._state.results

    @property
    def suggestions(self) -> list[SearchResult]:
        return self._state.suggestions

    @property
    def status(self) -> SearchStatus:
        return self._state.status

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    @property
    def error(self) -> str | None:
        return self._state.error

    @property
    def warning(self) -> str | None:
        return self._state.warning

    @property
    def total_results(self) -> int:
        return self._state.total_results

    def set_query(self, query: str) -> None:
        """Record a keystroke; results follow after the debounce window."""
        if not query.strip():
            self._controller.cancel()
            self._publish(SearchState(query=query, filters=self._state.filters))
            return

        self._publish(
            SearchState(
                query=query,
                filters=self._state.filters,
                status=SearchStatus.LOADING,
                results=self._state.results,
                suggestions=self._state.suggestions,
            )
        )
        self._controller.submit((query, self._state.filters))

    def set_filters(self, filters: SearchFilters) -> None:
        """Replace the facet filters and re-run the current query."""
        self._state = SearchState(
            query=self._state.query,
            filters=filters,
            status=self._state.status,
            results=self._state.results,
            suggestions=self._state.suggestions,
            error=self._state.error,
            warning=self._state.warning,
        )
        self.set_query(self._state.query)

    def clear(self) -> None:
        """Reset query, filters and results."""
        self._controller.cancel()
        self._publish(SearchState())

    async def wait_settled(self) -> SearchState:
        """Wait for the pending evaluation (if any) and return the state."""
        await self._controller.flush()
        return self._state

    async def close(self) -> None:
        await self._controller.close()

    async def _evaluate(
        self, request: tuple[str, SearchFilters]
    ) -> tuple[list[SearchResult], SuggestionGroups]:
        query, filters = request
        items = await self.cache.get()
        results = self.engine.search(items, query, filters, self.max_results)
        groups = self.engine.group_suggestions(items, query, self.max_suggestions)
        return results, groups

    def _apply_result(
        self,
        request: tuple[str, SearchFilters],
        outcome: tuple[list[SearchResult], SuggestionGroups],
    ) -> None:
        query, filters = request
        results, groups = outcome
        last_error = self.cache.last_error
        self._publish(
            SearchState(
                query=query,
                filters=filters,
                status=SearchStatus.READY,
                results=results,
                suggestions=groups.suggestions,
                warning=f"Showing cached catalog: {last_error}" if last_error else None,
            )
        )

    def _apply_error(self, request: tuple[str, SearchFilters], exc: Exception) -> None:
        query, filters = request
        if isinstance(exc, CatalogUnavailableError):
            message = "Search is temporarily unavailable"
        else:
            message = f"Search failed: {exc}"
        logger.warning(f"Search for '{query}' failed: {exc}")
        self._publish(
            SearchState(
                query=query,
                filters=filters,
                status=SearchStatus.ERROR,
                error=message,
            )
        )

    def _publish(self, state: SearchState) -> None:
        self._state = state
        if self._on_change is not None:
            self._on_change(state)
