"""In-memory fuzzy search and ranking for the storefront catalog."""

from catalog_search.errors import (
    CatalogFetchError,
    CatalogSearchError,
    CatalogUnavailableError,
    ControllerClosedError,
)
from catalog_search.models import SearchableItem, SearchFilters, SearchResult, Segment
from catalog_search.retrieval import SearchEngine, autocomplete, highlight, search
from catalog_search.services import QueryController, SearchSession, SearchState, SearchStatus
from catalog_search.storage import CatalogCache

__version__ = "1.0.0"

__all__ = [
    "CatalogCache",
    "CatalogFetchError",
    "CatalogSearchError",
    "CatalogUnavailableError",
    "ControllerClosedError",
    "QueryController",
    "SearchEngine",
    "SearchFilters",
    "SearchResult",
    "SearchSession",
    "SearchState",
    "SearchStatus",
    "SearchableItem",
    "Segment",
    "autocomplete",
    "highlight",
    "search",
]
