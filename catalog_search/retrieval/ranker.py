"""Deterministic ordering of search results."""

import unicodedata
from functools import cmp_to_key

from catalog_search.models.item import ItemType
from catalog_search.models.search import SearchResult
from catalog_search.retrieval.field_scorer import normalize

SCORE_EPSILON = 0.01


def collation_key(name: str) -> tuple[str, str]:
    """Locale-independent alphabetical key.

    Case and accents are ignored first, the raw name breaks remaining ties
    so distinct names never compare equal.
    """
    decomposed = unicodedata.normalize("NFKD", name.casefold())
    folded = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (folded, name)


def compare_results(
    a: SearchResult,
    b: SearchResult,
    query: str,
    epsilon: float = SCORE_EPSILON,
) -> int:
    """Compare two results; negative means ``a`` ranks first.

    Tie-break chain:
    1. Score, when the difference exceeds ``epsilon``
    2. Exact case-insensitive name match with the query
    3. Products before bundlings
    4. Alphabetical by name
    5. Type and id, so no two distinct results compare equal
    """
    if abs(a.score - b.score) > epsilon:
        return -1 if a.score > b.score else 1

    q = normalize(query)
    a_exact = normalize(a.name) == q
    b_exact = normalize(b.name) == q
    if a_exact != b_exact:
        return -1 if a_exact else 1

    if a.type != b.type:
        return -1 if a.type == ItemType.PRODUCT else 1

    a_key = collation_key(a.name)
    b_key = collation_key(b.name)
    if a_key != b_key:
        return -1 if a_key < b_key else 1

    if a.key != b.key:
        return -1 if a.key < b.key else 1
    return 0


def rank_results(
    results: list[SearchResult],
    query: str,
    epsilon: float = SCORE_EPSILON,
) -> list[SearchResult]:
    """Return results sorted best first.

    The epsilon comparison is not transitive, so the candidates are first put
    in a canonical order. The output then depends only on the set of results,
    never on the order they arrived in.
    """
    canonical = sorted(results, key=lambda r: (-r.score, r.key))
    return sorted(canonical, key=cmp_to_key(lambda a, b: compare_results(a, b, query, epsilon)))
