"""Stateful services wrapping the search core."""

from catalog_search.services.query_controller import QueryController
from catalog_search.services.search_session import SearchSession, SearchState, SearchStatus

__all__ = [
    "QueryController",
    "SearchSession",
    "SearchState",
    "SearchStatus",
]
