"""Shared plumbing for engines that scan product pages for a keyword."""

import threading
from typing import List, Optional, Tuple

from catalog.config import (
    AUTOCOMPLETE_MAX_RESULTS,
    AUTOCOMPLETE_MIN_LENGTH,
    KEYWORD_SUGGESTION_LIMIT,
)
from catalog.csv_utils import ProductSource
from catalog.logging_config import get_logger
from catalog.models import Product
from engine.cancellation import CancellationToken
from engine.content_cache import ContentCache
from engine.indexer import IndexBuild, build_keyword_index
from engine.spellcheck import closest_matches
from engine.trie import WordTrie

__all__ = ["KeywordEngine", "normalize_keyword"]

logger = get_logger("engine.keyword")


def normalize_keyword(keyword: Optional[str]) -> str:
    return keyword.strip().lower() if keyword else ""


class KeywordEngine:
    """Product snapshot, shared content cache and published vocabulary.

    Subclasses call ``_build()`` for a fresh, call-local index. When a
    build scans every page, its vocabulary replaces the one autocomplete
    reads from.
    """

    name = "keyword"

    def __init__(self, source: ProductSource, cache: Optional[ContentCache] = None) -> None:
        self._source = source
        self.cache = cache if cache is not None else ContentCache()
        self._lock = threading.Lock()
        self._products: Tuple[Product, ...] = ()
        self._vocabulary = WordTrie()
        self.reload()

    def reload(self) -> int:
        """Take a fresh product snapshot. Returns the number of products."""
        products = tuple(self._source.load_all())
        with self._lock:
            self._products = products
        logger.info(f"{self.name}: loaded {len(products)} products")
        return len(products)

    def _snapshot(self) -> Tuple[Product, ...]:
        with self._lock:
            return self._products

    def _build(self, keyword: str, cancel: Optional[CancellationToken]) -> IndexBuild:
        build = build_keyword_index(keyword, self._snapshot(), self.cache, cancel)
        if not build.cancelled:
            with self._lock:
                self._vocabulary = build.vocabulary
        return build

    @staticmethod
    def _suggest(keyword: str, build: IndexBuild) -> List[str]:
        return closest_matches(keyword, build.vocabulary.get_all(), KEYWORD_SUGGESTION_LIMIT)

    def autocomplete(self, prefix: Optional[str]) -> List[str]:
        """Up to 5 page words starting with ``prefix`` (3+ characters)."""
        with self._lock:
            vocabulary = self._vocabulary
        return vocabulary.search_by_prefix(prefix, AUTOCOMPLETE_MIN_LENGTH, AUTOCOMPLETE_MAX_RESULTS)

    @property
    def vocabulary_size(self) -> int:
        with self._lock:
            return len(self._vocabulary)

    @property
    def product_count(self) -> int:
        return len(self._snapshot())

    def clear_cache(self) -> None:
        """Drop cached page content and the published vocabulary."""
        self.cache.clear()
        with self._lock:
            self._vocabulary = WordTrie()
