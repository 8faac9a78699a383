"""HTTP client that fetches the searchable catalog from the storefront API."""

import asyncio
import logging
from typing import Any

import httpx
from pydantic import ValidationError

from catalog_search.errors import CatalogFetchError
from catalog_search.models.item import ItemType, SearchableItem

logger = logging.getLogger(__name__)


def _first_photo(photos: Any) -> str | None:
    if isinstance(photos, list) and photos and isinstance(photos[0], dict):
        return photos[0].get("photo")
    return None


def normalize_item(raw: dict[str, Any], item_type: ItemType) -> SearchableItem:
    """Project a raw product or bundling payload onto a SearchableItem.

    Args:
        raw: One entry of the API ``data`` array
        item_type: Which endpoint the entry came from

    Returns:
        Normalized item

    Raises:
        ValidationError: If id, name or slug are missing or malformed
    """
    photos_key = "productPhotos" if item_type == ItemType.PRODUCT else "bundlingPhotos"
    return SearchableItem(
        id=raw.get("id"),
        name=raw.get("name"),
        slug=raw.get("slug"),
        type=item_type,
        category=raw.get("category"),
        brand=raw.get("brand"),
        description=raw.get("description"),
        thumbnail=raw.get("photo") or _first_photo(raw.get(photos_key)),
        price=raw.get("price"),
    )


class CatalogClient:
    """Async client for the storefront catalog endpoints.

    Fetches every product and bundling in one call each and normalizes them
    into searchable items. Pagination, authentication and retries belong to
    the upstream API; this client only asks for one large page.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 15.0,
        fetch_limit: int = 1000,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize catalog client.

        Args:
            base_url: Catalog API base URL (no trailing slash)
            timeout: Request timeout in seconds
            fetch_limit: Page size requested per endpoint
            http_client: Optional preconfigured httpx client (for tests)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.fetch_limit = fetch_limit
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

        logger.info(f"Initialized CatalogClient: base_url={self.base_url}, timeout={timeout}s")

    async def __call__(self) -> list[SearchableItem]:
        return await self.fetch_all()

    async def fetch_all(self) -> list[SearchableItem]:
        """Fetch products and bundlings concurrently.

        Returns:
            Products followed by bundlings

        Raises:
            CatalogFetchError: If either endpoint fails or returns bad JSON
        """
        products, bundlings = await asyncio.gather(
            self._fetch_list(
                "/products",
                {"limit": self.fetch_limit, "exclude_rental_includes": "true"},
                ItemType.PRODUCT,
            ),
            self._fetch_list("/bundlings", {"limit": self.fetch_limit}, ItemType.BUNDLING),
        )
        logger.info(f"Fetched catalog: {len(products)} products, {len(bundlings)} bundlings")
        return products + bundlings

    async def _fetch_list(
        self,
        path: str,
        params: dict[str, Any],
        item_type: ItemType,
    ) -> list[SearchableItem]:
        try:
            response = await self._http.get(f"{self.base_url}{path}", params=params)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as e:
            raise CatalogFetchError(f"GET {path} failed: {e}") from e
        except ValueError as e:
            raise CatalogFetchError(f"GET {path} returned invalid JSON: {e}") from e

        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, list):
            raise CatalogFetchError(f"GET {path} response has no 'data' list")

        items: list[SearchableItem] = []
        for raw in data:
            if not isinstance(raw, dict):
                logger.warning(f"Skipping non-object {item_type.value} entry from {path}")
                continue
            try:
                items.append(normalize_item(raw, item_type))
            except ValidationError as e:
                logger.warning(
                    f"Skipping malformed {item_type.value} id={raw.get('id')!r}: "
                    f"{e.error_count()} validation error(s)"
                )
        return items

    async def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._http.aclose()
