"""Did-you-mean suggestions and page tokenization."""

import re
from typing import Iterable, List, Optional

from catalog.config import MIN_TOKEN_LENGTH
from engine.edit_distance import edit_distance

__all__ = ["closest_matches", "tokenize"]

# Runs of letters and digits (underscore excluded)
_WORD_RE = re.compile(r"[^\W_]+")


def closest_matches(query: Optional[str], candidates: Iterable[str], limit: int) -> List[str]:
    """The ``limit`` candidates nearest to ``query`` by edit distance.

    There is no distance cutoff: the closest candidates are returned even
    when they are far away. Equal distances keep candidate order.
    """
    if query is None or limit <= 0:
        return []

    scored = [(edit_distance(query, candidate), candidate) for candidate in candidates]
    scored.sort(key=lambda pair: pair[0])
    return [candidate for _, candidate in scored[:limit]]


def tokenize(text: Optional[str], min_length: int = MIN_TOKEN_LENGTH) -> List[str]:
    """Lowercased alphanumeric words of at least ``min_length`` characters."""
    if not text:
        return []
    return [word for word in _WORD_RE.findall(text.lower()) if len(word) >= min_length]
