"""In-memory fuzzy search and ranking components."""

from catalog_search.retrieval.aggregator import FieldWeights, aggregate_score
from catalog_search.retrieval.autocomplete import SuggestionGroups, autocomplete, group_suggestions
from catalog_search.retrieval.engine import SearchEngine
from catalog_search.retrieval.field_scorer import field_score
from catalog_search.retrieval.filters import passes_filters
from catalog_search.retrieval.highlight import extract_keywords, highlight
from catalog_search.retrieval.levenshtein import levenshtein_distance
from catalog_search.retrieval.ranker import compare_results, rank_results
from catalog_search.retrieval.search_engine import SearchConfig, search

__all__ = [
    "FieldWeights",
    "SearchConfig",
    "SearchEngine",
    "SuggestionGroups",
    "aggregate_score",
    "autocomplete",
    "compare_results",
    "extract_keywords",
    "field_score",
    "group_suggestions",
    "highlight",
    "levenshtein_distance",
    "passes_filters",
    "rank_results",
    "search",
]
