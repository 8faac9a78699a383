"""Catalog snapshot storage."""

from catalog_search.storage.catalog_cache import CatalogCache, CatalogFetcher

__all__ = ["CatalogCache", "CatalogFetcher"]
