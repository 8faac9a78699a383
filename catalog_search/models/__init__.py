"""Pydantic models for the catalog search engine."""

from catalog_search.models.api import (
    AutocompleteResponse,
    CatalogStatus,
    HighlightResponse,
    SearchResponse,
)
from catalog_search.models.error import ErrorResponse
from catalog_search.models.item import ItemType, SearchableItem, TaxonomyRef
from catalog_search.models.search import SearchFilters, SearchResult, Segment

__all__ = [
    # Catalog models
    "ItemType",
    "TaxonomyRef",
    "SearchableItem",
    # Search models
    "SearchResult",
    "SearchFilters",
    "Segment",
    # API models
    "SearchResponse",
    "AutocompleteResponse",
    "HighlightResponse",
    "CatalogStatus",
    # Error models
    "ErrorResponse",
]
