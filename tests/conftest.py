"""Pytest configuration and shared fixtures."""

import pytest

from catalog_search.models.item import ItemType, SearchableItem
from factories import make_item


@pytest.fixture
def camera_catalog() -> list[SearchableItem]:
    """Small storefront catalog of cameras, lenses and bundlings."""
    return [
        make_item(
            1,
            "Canon EOS R5",
            category=("Camera", "camera"),
            brand=("Canon", "canon"),
            description="Full frame mirrorless camera",
            price=450_000,
        ),
        make_item(
            2,
            "Canon EOS R6",
            category=("Camera", "camera"),
            brand=("Canon", "canon"),
            description="Full frame mirrorless camera",
            price=350_000,
        ),
        make_item(
            3,
            "Sony A7",
            category=("Camera", "camera"),
            brand=("Sony", "sony"),
            description="Compact full frame body",
            price=300_000,
        ),
        make_item(
            4,
            "Canon RF 50mm",
            category=("Lens", "lens"),
            brand=("Canon", "canon"),
            description="Prime lens",
            price=100_000,
        ),
        make_item(
            5,
            "Canon Wedding Package",
            type=ItemType.BUNDLING,
            description="Two bodies and three lenses",
            price=900_000,
        ),
        make_item(6, "Tripod", category=("Accessories", "accessories"), price=None),
    ]
