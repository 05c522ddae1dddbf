"""Prefix tries for autocomplete and spell-check candidate pools.

Two flavours share one implementation:
 - PrefixTrie maps product model names to the Product itself
 - WordTrie stores the words seen in fetched product pages

Keys are lowercased and trimmed on the way in. Children are kept in
insertion order, so traversal order (and therefore which results fill a
capped list) follows the order keys were first inserted.
"""

from typing import Dict, Generic, Iterable, List, Optional, TypeVar

from catalog.config import AUTOCOMPLETE_MAX_RESULTS, AUTOCOMPLETE_MIN_LENGTH
from catalog.models import Product

__all__ = ["Trie", "PrefixTrie", "WordTrie"]

T = TypeVar("T")


def _normalize(key: Optional[str]) -> str:
    return key.lower().strip() if key else ""


class _TrieNode(Generic[T]):
    """One character step. ``payload`` is set only on terminal nodes."""

    __slots__ = ("children", "is_terminal", "payload")

    def __init__(self) -> None:
        self.children: Dict[str, "_TrieNode[T]"] = {}
        self.is_terminal = False
        self.payload: Optional[T] = None


class Trie(Generic[T]):
    """Character trie with one payload per distinct normalized key."""

    def __init__(self) -> None:
        self._root: _TrieNode[T] = _TrieNode()

    # insertion -----------------------------------------------------
    def insert(self, key: Optional[str], payload: T) -> None:
        """Store ``payload`` under the normalized key.

        Empty keys are ignored. A key that already exists keeps its position
        in traversal order but takes the new payload (last insert wins).
        """
        normalized = _normalize(key)
        if not normalized:
            return

        node = self._root
        for ch in normalized:
            nxt = node.children.get(ch)
            if nxt is None:
                nxt = _TrieNode()
                node.children[ch] = nxt
            node = nxt
        node.is_terminal = True
        node.payload = payload

    # search/traversal ---------------------------------------------------------
    def _find(self, normalized: str) -> Optional[_TrieNode[T]]:
        node = self._root
        for ch in normalized:
            nxt = node.children.get(ch)
            if nxt is None:
                return None
            node = nxt
        return node

    def search_by_prefix(
        self,
        prefix: Optional[str],
        min_length: int = AUTOCOMPLETE_MIN_LENGTH,
        max_results: int = AUTOCOMPLETE_MAX_RESULTS,
    ) -> List[T]:
        """Payloads whose key starts with ``prefix``, at most ``max_results``.

        Returns [] when the prefix is missing, shorter than ``min_length``
        after normalizing, or not present in the trie.
        """
        normalized = _normalize(prefix)
        if len(normalized) < min_length or max_results <= 0:
            return []

        start = self._find(normalized)
        if start is None:
            return []
        return self._collect(start, max_results)

    def get_all(self) -> List[T]:
        """Every payload, in traversal order."""
        return self._collect(self._root, None)

    def _collect(self, start: _TrieNode[T], limit: Optional[int]) -> List[T]:
        """Pre-order DFS with an explicit stack; stops once ``limit`` is reached."""
        results: List[T] = []
        stack = [start]
        while stack:
            node = stack.pop()
            if node.is_terminal:
                results.append(node.payload)
                if limit is not None and len(results) >= limit:
                    break
            # Reversed so the first-inserted child is visited first
            stack.extend(reversed(list(node.children.values())))
        return results

    def clear(self) -> None:
        self._root = _TrieNode()


class PrefixTrie(Trie[Product]):
    """Product model names -> Product, for name autocomplete."""

    def insert_product(self, product: Product) -> None:
        self.insert(product.model_name, product)


class WordTrie(Trie[str]):
    """Vocabulary of page words; the payload is the canonical lowercase word."""

    def __init__(self) -> None:
        super().__init__()
        self._size = 0

    def insert(self, key: Optional[str], payload: Optional[str] = None) -> None:
        normalized = _normalize(key)
        if not normalized:
            return
        if not self.contains(normalized):
            self._size += 1
        super().insert(normalized, normalized)

    def insert_all(self, words: Iterable[str]) -> None:
        for word in words:
            self.insert(word)

    def contains(self, word: Optional[str]) -> bool:
        normalized = _normalize(word)
        if not normalized:
            return False
        node = self._find(normalized)
        return node is not None and node.is_terminal

    def __len__(self) -> int:
        return self._size

    def clear(self) -> None:
        super().clear()
        self._size = 0
