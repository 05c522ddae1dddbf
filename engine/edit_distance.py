"""Levenshtein edit distance."""

import sys
from typing import List, Optional

__all__ = ["INCOMPARABLE", "edit_distance"]

# Returned when either side is missing
INCOMPARABLE = sys.maxsize


def edit_distance(a: Optional[str], b: Optional[str]) -> int:
    """Minimum number of single-character edits turning ``a`` into ``b``.

    Inputs are trimmed and lowercased first. Insertions, deletions and
    substitutions all cost 1. Empty strings are valid inputs; only None
    yields INCOMPARABLE.
    """
    if a is None or b is None:
        return INCOMPARABLE

    s1 = a.strip().lower()
    s2 = b.strip().lower()

    # Two rolling rows of the classic DP table
    previous: List[int] = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1, start=1):
        current = [i] + [0] * len(s2)
        for j, c2 in enumerate(s2, start=1):
            if c1 == c2:
                current[j] = previous[j - 1]
            else:
                current[j] = 1 + min(
                    previous[j - 1],  # substitute
                    previous[j],      # delete
                    current[j - 1],   # insert
                )
        previous = current

    return previous[len(s2)]
