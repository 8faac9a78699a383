"""Search result, filter and highlight models."""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from catalog_search.models.item import ItemType, SearchableItem


class SearchResult(SearchableItem):
    """A searchable item with the fields derived for one query evaluation.

    Attributes:
        score: Aggregate relevance score (higher is better, unbounded above)
        matched_fields: Fields with a non-zero raw score, in evaluation order
        url: Navigation URL derived from type and slug
        display: Display label derived from the name
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    score: float = Field(ge=0.0)
    matched_fields: list[str] = Field(default_factory=list, alias="matchedFields")
    url: str
    display: str


class SearchFilters(BaseModel):
    """Facet criteria. Empty facets place no constraint on results."""

    model_config = ConfigDict(populate_by_name=True)

    category: list[str] = Field(default_factory=list, description="Category slugs")
    brand: list[str] = Field(default_factory=list, description="Brand slugs")
    type: list[ItemType] = Field(default_factory=list, description="Item types")
    price_range: tuple[float, float] | None = Field(
        default=None, alias="priceRange", description="Inclusive [min, max] price"
    )

    @model_validator(mode="after")
    def check_price_range(self) -> "SearchFilters":
        if self.price_range is not None and self.price_range[0] > self.price_range[1]:
            raise ValueError(
                f"price_range minimum ({self.price_range[0]}) must be <= "
                f"maximum ({self.price_range[1]})"
            )
        return self

    def is_empty(self) -> bool:
        """Return True when no facet is populated."""
        return not (self.category or self.brand or self.type or self.price_range)


class Segment(BaseModel):
    """Piece of a display string, flagged when it matched a query token."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    text: str
    is_match: bool = Field(default=False, alias="isMatch")
