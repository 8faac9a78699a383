"""Structured match highlighting for display strings."""

import re

from catalog_search.models.search import Segment

MIN_KEYWORD_LENGTH = 2


def extract_keywords(query: str) -> list[str]:
    """Lowercased query words long enough to highlight, without duplicates."""
    keywords: list[str] = []
    for word in query.lower().split():
        if len(word) >= MIN_KEYWORD_LENGTH and word not in keywords:
            keywords.append(word)
    return keywords


def match_spans(text: str, keywords: list[str]) -> list[tuple[int, int]]:
    """Merged (start, end) spans of every case-insensitive keyword occurrence.

    Overlapping and touching occurrences collapse into one span.
    """
    spans: list[tuple[int, int]] = []
    for keyword in keywords:
        # Lookahead so overlapping occurrences are all reported
        pattern = re.compile(f"(?=({re.escape(keyword)}))", re.IGNORECASE)
        for match in pattern.finditer(text):
            if match.group(1):
                spans.append((match.start(1), match.end(1)))

    spans.sort()
    merged: list[tuple[int, int]] = []
    for start, end in spans:
        if merged and start <= merged[-1][1]:
            merged[-1] = (merged[-1][0], max(merged[-1][1], end))
        else:
            merged.append((start, end))
    return merged


def highlight(text: str, query: str) -> list[Segment]:
    """Split ``text`` into plain and matched segments.

    Joining the segment texts always gives back ``text`` unchanged. Rendering
    code decides how matched segments are emphasized.

    Args:
        text: Display string to highlight
        query: Raw user query

    Returns:
        Ordered segments; empty list for empty text
    """
    if not text:
        return []

    spans = match_spans(text, extract_keywords(query))
    if not spans:
        return [Segment(text=text, is_match=False)]

    segments: list[Segment] = []
    cursor = 0
    for start, end in spans:
        if start > cursor:
            segments.append(Segment(text=text[cursor:start], is_match=False))
        segments.append(Segment(text=text[start:end], is_match=True))
        cursor = end
    if cursor < len(text):
        segments.append(Segment(text=text[cursor:], is_match=False))

    return segments
