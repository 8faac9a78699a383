"""Request and response models for the HTTP surface."""

from pydantic import BaseModel, Field

from catalog_search.models.search import SearchResult, Segment


class SearchResponse(BaseModel):
    """Ranked results for the search results page."""

    query: str
    results: list[SearchResult]
    total: int = Field(ge=0, description="Number of results returned")


class AutocompleteResponse(BaseModel):
    """Suggestions for the navbar autocomplete."""

    query: str
    suggestions: list[SearchResult]
    products: list[SearchResult] = Field(default_factory=list)
    bundlings: list[SearchResult] = Field(default_factory=list)


class HighlightResponse(BaseModel):
    """Highlight segments for one display string."""

    text: str
    query: str
    segments: list[Segment]


class CatalogStatus(BaseModel):
    """Catalog cache state reported by health and refresh endpoints."""

    loaded: bool
    item_count: int = Field(ge=0)
    age_seconds: float | None = Field(default=None, ge=0.0)
    stale: bool
    last_error: str | None = None
