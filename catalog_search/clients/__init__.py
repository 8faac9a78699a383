"""Clients for upstream collaborators."""

from catalog_search.clients.catalog_client import CatalogClient, normalize_item

__all__ = ["CatalogClient", "normalize_item"]
