"""Word -> URL -> occurrence count index with top-K queries."""

import heapq
from typing import Dict, List, NamedTuple, Optional, Set, Tuple

__all__ = ["UrlOccurrence", "InvertedIndex"]


class UrlOccurrence(NamedTuple):
    """A page and how often the keyword occurs on it."""

    url: str
    count: int

    def to_dict(self) -> Dict[str, object]:
        return {"url": self.url, "count": self.count}


class InvertedIndex:
    """Maps each word to the pages it occurs on and its count per page.

    Words are stored and looked up lowercased. Only positive counts are
    recorded. The two top-K queries return the same set of counts; how ties
    are ordered differs between them and is only stable within one run.

    Instances are meant to be built per query and thrown away; use
    ``clear()`` if one is reused.
    """

    def __init__(self) -> None:
        self._index: Dict[str, Dict[str, int]] = {}

    def add_entry(self, word: Optional[str], url: Optional[str], count: int) -> None:
        """Set the count for (word, url); ignored for missing keys or count <= 0."""
        if word is None or url is None or count <= 0:
            return
        self._index.setdefault(word.lower(), {})[url] = count

    def get_urls(self, word: Optional[str]) -> Dict[str, int]:
        """URL -> count for ``word`` (a copy; empty if unknown)."""
        if word is None:
            return {}
        return dict(self._index.get(word.lower(), {}))

    def get_total_occurrences(self, word: Optional[str]) -> int:
        return sum(self.get_urls(word).values())

    def get_url_count(self, word: Optional[str]) -> int:
        return len(self.get_urls(word))

    def get_top_urls_exact(self, word: Optional[str], n: int) -> List[UrlOccurrence]:
        """Top ``n`` pages by count using a full sort."""
        if n <= 0:
            return []
        occurrences = [UrlOccurrence(url, count) for url, count in self.get_urls(word).items()]
        occurrences.sort(key=lambda o: o.count, reverse=True)
        return occurrences[:n]

    def get_top_urls_bounded(self, word: Optional[str], n: int) -> List[UrlOccurrence]:
        """Top ``n`` pages by count, scanning once with a size-``n`` min-heap."""
        if n <= 0:
            return []

        heap: List[Tuple[int, str]] = []
        for url, count in self.get_urls(word).items():
            if len(heap) < n:
                heapq.heappush(heap, (count, url))
            elif count > heap[0][0]:
                heapq.heapreplace(heap, (count, url))

        ranked = sorted(heap, key=lambda entry: entry[0], reverse=True)
        return [UrlOccurrence(url, count) for count, url in ranked]

    def contains(self, word: Optional[str]) -> bool:
        return word is not None and word.lower() in self._index

    def all_words(self) -> Set[str]:
        return set(self._index)

    def clear(self) -> None:
        self._index.clear()

    def __len__(self) -> int:
        return len(self._index)
