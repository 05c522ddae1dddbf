"""Search and indexing engine: tries, inverted index, matching and ranking."""

__version__ = "0.1.0"

# Re-export main components for convenient imports
from engine.cancellation import CancellationToken
from engine.content_cache import CacheEntry, ContentCache, FetchOutcome
from engine.edit_distance import INCOMPARABLE, edit_distance
from engine.frequency_count import FrequencyCountEngine
from engine.inverted_index import InvertedIndex, UrlOccurrence
from engine.ledger import FrequencyLedger, SearchFrequency
from engine.matching import (
    contains,
    count_occurrences,
    count_whole_word_occurrences,
    exact_match,
    find_occurrences,
    kmp_contains,
)
from engine.page_ranking import PageRankingEngine
from engine.results import FrequencyCountResult, PageRankingResult, SearchResult
from engine.search_engine import SearchEngine
from engine.trie import PrefixTrie, Trie, WordTrie

__all__ = [
    # Version
    "__version__",
    # Matching
    "find_occurrences",
    "count_occurrences",
    "count_whole_word_occurrences",
    "contains",
    "exact_match",
    "kmp_contains",
    "edit_distance",
    "INCOMPARABLE",
    # Structures
    "Trie",
    "PrefixTrie",
    "WordTrie",
    "InvertedIndex",
    "UrlOccurrence",
    "ContentCache",
    "CacheEntry",
    "FetchOutcome",
    "FrequencyLedger",
    "SearchFrequency",
    "CancellationToken",
    # Engines
    "SearchEngine",
    "PageRankingEngine",
    "FrequencyCountEngine",
    "SearchResult",
    "PageRankingResult",
    "FrequencyCountResult",
]
