"""Tiered relevance scoring of a query against one text field."""

from catalog_search.retrieval.levenshtein import levenshtein_distance

# Tier ceilings; a higher tier always beats a lower one within a field
EXACT_SCORE = 1.0
CONTAINS_CEILING = 0.8
FUZZY_CEILING = 0.6
WORD_CEILING = 0.4

# Typo tolerance
MAX_FUZZY_EDITS = 2
MAX_WORD_EDITS = 1
MIN_FUZZY_WORD_LENGTH = 3

# Per-word scores inside the word-level tier
WORD_CONTAINS_SCORE = 0.7
WORD_FUZZY_SCORE = 0.5


def normalize(text: str) -> str:
    """Lowercase and trim text for comparison."""
    return text.lower().strip()


def field_score(query: str, text: str) -> float:
    """Score how well ``query`` matches ``text``.

    Tiers are evaluated in order and the first one that applies wins:

    1. Exact match: 1.0
    2. Text contains the query: 0.8 scaled by how much of the text it covers
    3. Whole-string fuzzy match within 2 edits: up to 0.6
    4. Word-level match: average of per-word best scores, scaled by 0.4
    5. Otherwise 0

    Args:
        query: Raw user query
        text: Field text to match against

    Returns:
        Score in [0, 1]
    """
    q = normalize(query)
    t = normalize(text)

    if q == t:
        return EXACT_SCORE

    if q in t:
        return CONTAINS_CEILING * (len(q) / len(t))

    distance = levenshtein_distance(q, t)
    if distance <= MAX_FUZZY_EDITS:
        max_length = max(len(q), len(t))
        return max(0.0, (max_length - distance) / max_length) * FUZZY_CEILING

    return word_score(q, t)


def word_score(query: str, text: str) -> float:
    """Word-level fallback tier over already normalized strings.

    Query words with no matching text word score zero and dilute the
    average, but are not otherwise penalized.
    """
    query_words = query.split()
    text_words = text.split()
    if not query_words or not text_words:
        return 0.0

    matched = 0
    total = 0.0
    for q_word in query_words:
        best = _best_word_match(q_word, text_words)
        if best > 0:
            matched += 1
            total += best

    if matched == 0:
        return 0.0
    return (total / len(query_words)) * WORD_CEILING


def _best_word_match(q_word: str, text_words: list[str]) -> float:
    best = 0.0
    for t_word in text_words:
        if t_word in q_word or q_word in t_word:
            return WORD_CONTAINS_SCORE
        if (
            len(q_word) >= MIN_FUZZY_WORD_LENGTH
            and levenshtein_distance(q_word, t_word) <= MAX_WORD_EDITS
        ):
            best = WORD_FUZZY_SCORE
    return best
