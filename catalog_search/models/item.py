"""Searchable catalog item models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ItemType(str, Enum):
    """Kind of catalog entity an item was projected from."""

    PRODUCT = "product"
    BUNDLING = "bundling"


class TaxonomyRef(BaseModel):
    """Category or brand reference attached to an item."""

    model_config = ConfigDict(frozen=True)

    name: str
    slug: str


class SearchableItem(BaseModel):
    """Read-only projection of a product or bundling used for search.

    Optional references that arrive malformed from upstream are treated as
    absent rather than rejecting the whole item.
    """

    model_config = ConfigDict(frozen=True, use_enum_values=False)

    id: int
    name: str
    slug: str
    type: ItemType
    category: TaxonomyRef | None = None
    brand: TaxonomyRef | None = None
    description: str | None = None
    thumbnail: str | None = None
    price: float | None = Field(default=None, description="Used for facet filtering only")

    @field_validator("category", "brand", mode="before")
    @classmethod
    def drop_malformed_ref(cls, v: Any) -> Any:
        """Treat references without a string name and slug as absent."""
        if v is None or isinstance(v, TaxonomyRef):
            return v
        if isinstance(v, dict) and isinstance(v.get("name"), str) and isinstance(
            v.get("slug"), str
        ):
            return v
        return None

    @field_validator("description", "thumbnail", mode="before")
    @classmethod
    def drop_non_text(cls, v: Any) -> Any:
        return v if isinstance(v, str) else None

    @field_validator("price", mode="before")
    @classmethod
    def drop_non_numeric_price(cls, v: Any) -> Any:
        if isinstance(v, bool):
            return None
        if isinstance(v, (int, float)):
            return v
        if isinstance(v, str):
            try:
                return float(v)
            except ValueError:
                return None
        return None

    @property
    def key(self) -> tuple[str, int]:
        """Identity of the item within one catalog snapshot."""
        return (self.type.value, self.id)
