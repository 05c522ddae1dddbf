"""Product-name search: exact match, autocomplete and did-you-mean."""

import threading
from typing import List, Optional, Sequence, Tuple

from catalog.config import (
    AUTOCOMPLETE_MAX_RESULTS,
    AUTOCOMPLETE_MIN_LENGTH,
    SEARCH_SUGGESTION_LIMIT,
)
from catalog.csv_utils import ProductSource
from catalog.logging_config import get_logger
from catalog.models import Product
from engine.ledger import FrequencyLedger, SearchFrequency
from engine.matching import exact_match
from engine.results import SearchResult
from engine.spellcheck import closest_matches
from engine.trie import PrefixTrie

__all__ = ["SearchEngine"]

logger = get_logger("engine.search")

MSG_EMPTY_QUERY = "Please enter a search query"
MSG_EXACT_MATCH = "Exact match found"
MSG_DID_YOU_MEAN = "No exact match. Did you mean:"
MSG_NO_PRODUCTS = "No products found"
MSG_ERROR = "Search failed; please try again"


class SearchEngine:
    """Looks products up by model name.

    Holds an immutable product snapshot and a PrefixTrie over its model
    names; both are replaced together by ``reload()``. Successful lookups
    are counted in the frequency ledger.
    """

    def __init__(self, source: ProductSource, ledger: Optional[FrequencyLedger] = None) -> None:
        self._source = source
        self.ledger = ledger if ledger is not None else FrequencyLedger()
        self._lock = threading.Lock()
        self._products: Tuple[Product, ...] = ()
        self._trie = PrefixTrie()
        self.reload()

    def reload(self) -> int:
        """Take a fresh snapshot from the product source and rebuild the trie.

        Returns:
            Number of products loaded
        """
        products = tuple(self._source.load_all())
        trie = PrefixTrie()
        for product in products:
            if product.model_name:
                trie.insert_product(product)

        with self._lock:
            self._products = products
            self._trie = trie

        logger.info(f"Loaded {len(products)} products into the name trie")
        return len(products)

    def _snapshot(self) -> Tuple[Tuple[Product, ...], PrefixTrie]:
        with self._lock:
            return self._products, self._trie

    @property
    def product_count(self) -> int:
        return len(self._snapshot()[0])

    def autocomplete(self, prefix: Optional[str]) -> List[Product]:
        """Up to 5 products whose name starts with ``prefix`` (3+ characters)."""
        _, trie = self._snapshot()
        return trie.search_by_prefix(prefix, AUTOCOMPLETE_MIN_LENGTH, AUTOCOMPLETE_MAX_RESULTS)

    def search(self, query: Optional[str]) -> SearchResult:
        """Exact name match, else the closest names by edit distance."""
        if query is None or not query.strip():
            return SearchResult(matched=False, message=MSG_EMPTY_QUERY)

        try:
            return self._search(query.strip())
        except Exception:
            logger.exception(f"Search failed for query '{query}'")
            return SearchResult(matched=False, message=MSG_ERROR)

    def _search(self, query: str) -> SearchResult:
        products, trie = self._snapshot()

        # First match in snapshot order wins, even if names repeat
        product = self._find_by_name(products, query)
        if product is not None:
            self.ledger.increment(product.model_name)
            return SearchResult(matched=True, product=product, message=MSG_EXACT_MATCH)

        suggestions = self._suggest(query, trie.get_all())
        if suggestions:
            return SearchResult(matched=False, suggestions=suggestions, message=MSG_DID_YOU_MEAN)
        return SearchResult(matched=False, message=MSG_NO_PRODUCTS)

    def search_by_product_name(self, name: Optional[str]) -> Optional[Product]:
        """Case-insensitive exact lookup for a picked suggestion; counts a hit."""
        if name is None or not name.strip():
            return None

        products, _ = self._snapshot()
        product = self._find_by_name(products, name)
        if product is not None:
            self.ledger.increment(product.model_name)
        return product

    def top_searches(self, limit: int = 10) -> List[SearchFrequency]:
        return self.ledger.top(limit)

    @staticmethod
    def _find_by_name(products: Sequence[Product], name: str) -> Optional[Product]:
        for product in products:
            if product.model_name and exact_match(product.model_name, name):
                return product
        return None

    @staticmethod
    def _suggest(query: str, pool: Sequence[Product]) -> List[str]:
        names = [p.model_name for p in pool if p.model_name]
        suggestions = closest_matches(query, names, SEARCH_SUGGESTION_LIMIT)
        logger.info(f"Found {len(suggestions)} spell check suggestions for '{query}'")
        return suggestions
