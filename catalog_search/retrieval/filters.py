"""Facet filter evaluation."""

from catalog_search.models.item import SearchableItem
from catalog_search.models.search import SearchFilters


def passes_filters(item: SearchableItem, filters: SearchFilters | None) -> bool:
    """Check an item against every populated facet.

    Facets combine with AND, values within a facet with OR. An item missing
    the reference or price a populated facet needs fails that facet.

    Args:
        item: Candidate item
        filters: Facet criteria, or None for no constraint

    Returns:
        True if the item satisfies all populated facets
    """
    if filters is None:
        return True

    if filters.category:
        if item.category is None or item.category.slug not in filters.category:
            return False

    if filters.brand:
        if item.brand is None or item.brand.slug not in filters.brand:
            return False

    if filters.type and item.type not in filters.type:
        return False

    if filters.price_range is not None:
        min_price, max_price = filters.price_range
        if item.price is None or not (min_price <= item.price <= max_price):
            return False

    return True
