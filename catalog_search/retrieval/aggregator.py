"""Weighted aggregation of per-field scores into one item score."""

from dataclasses import dataclass

from catalog_search.models.item import SearchableItem
from catalog_search.retrieval.field_scorer import field_score


@dataclass(frozen=True)
class FieldWeights:
    """Multipliers applied to each field's raw score.

    Defaults are the empirically tuned storefront values.
    """

    name: float = 4.0
    category: float = 2.5
    brand: float = 2.5
    description: float = 1.0


DEFAULT_WEIGHTS = FieldWeights()


def searchable_fields(item: SearchableItem) -> list[tuple[str, str]]:
    """Return (field name, text) pairs in evaluation order.

    Absent or empty optional fields are skipped.
    """
    fields = [("name", item.name)]
    if item.category is not None and item.category.name:
        fields.append(("category", item.category.name))
    if item.brand is not None and item.brand.name:
        fields.append(("brand", item.brand.name))
    if item.description:
        fields.append(("description", item.description))
    return fields


def aggregate_score(
    item: SearchableItem,
    query: str,
    weights: FieldWeights = DEFAULT_WEIGHTS,
) -> tuple[float, list[str]]:
    """Combine field scores for one item.

    Args:
        item: Item to score
        query: Raw user query
        weights: Per-field multipliers

    Returns:
        Tuple of (weighted score, fields whose raw score was non-zero)
    """
    score = 0.0
    matched_fields: list[str] = []

    for field_name, text in searchable_fields(item):
        raw = field_score(query, text)
        if raw > 0:
            score += raw * getattr(weights, field_name)
            matched_fields.append(field_name)

    return score, matched_fields
