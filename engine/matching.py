"""Case-insensitive string matching used by the keyword engines.

Occurrence search uses the bad-character rule of Boyer-Moore only (no
good-suffix table). That keeps it correct and simple, though not
worst-case optimal.
"""

from typing import Dict, List, Optional

__all__ = [
    "find_occurrences",
    "count_occurrences",
    "count_whole_word_occurrences",
    "contains",
    "exact_match",
    "kmp_contains",
]


def _bad_character_table(pattern: str) -> Dict[str, int]:
    """Rightmost index of each character in the pattern."""
    return {ch: i for i, ch in enumerate(pattern)}


def _prepare(text: Optional[str], pattern: Optional[str]):
    if not text or not pattern:
        return None
    text, pattern = text.lower(), pattern.lower()
    if len(pattern) > len(text):
        return None
    return text, pattern


def find_occurrences(text: Optional[str], pattern: Optional[str]) -> List[int]:
    """Return every index where ``pattern`` starts in ``text`` (overlaps included).

    After a full match the window moves by the bad-character shift of the
    character just past the match, so overlapping matches are still found.
    """
    prepared = _prepare(text, pattern)
    if prepared is None:
        return []
    text, pattern = prepared

    m, n = len(pattern), len(text)
    last = _bad_character_table(pattern)
    occurrences: List[int] = []

    shift = 0
    while shift <= n - m:
        j = m - 1
        while j >= 0 and pattern[j] == text[shift + j]:
            j -= 1

        if j < 0:
            occurrences.append(shift)
            if shift + m < n:
                shift += m - last.get(text[shift + m], -1)
            else:
                shift += 1
        else:
            shift += max(1, j - last.get(text[shift + j], -1))

    return occurrences


def count_occurrences(text: Optional[str], pattern: Optional[str]) -> int:
    """Count substring occurrences of ``pattern`` in ``text``."""
    return len(find_occurrences(text, pattern))


def count_whole_word_occurrences(text: Optional[str], word: Optional[str]) -> int:
    """Count occurrences of ``word`` bounded by non-alphanumerics or string edges.

    >>> count_whole_word_occurrences("Dolby Atmos and Dolby Vision", "dolby")
    2
    >>> count_whole_word_occurrences("Dolby Atmos", "dolbyatmos")
    0
    """
    positions = find_occurrences(text, word)
    if not positions:
        return 0

    lowered = text.lower()
    width = len(word)
    count = 0
    for pos in positions:
        if pos > 0 and lowered[pos - 1].isalnum():
            continue
        end = pos + width
        if end < len(lowered) and lowered[end].isalnum():
            continue
        count += 1
    return count


def contains(text: Optional[str], pattern: Optional[str]) -> bool:
    """True if ``pattern`` occurs anywhere in ``text``; stops at the first hit."""
    prepared = _prepare(text, pattern)
    if prepared is None:
        return False
    text, pattern = prepared

    m, n = len(pattern), len(text)
    last = _bad_character_table(pattern)

    shift = 0
    while shift <= n - m:
        j = m - 1
        while j >= 0 and pattern[j] == text[shift + j]:
            j -= 1
        if j < 0:
            return True
        shift += max(1, j - last.get(text[shift + j], -1))
    return False


def exact_match(a: Optional[str], b: Optional[str]) -> bool:
    """Trimmed, case-insensitive whole-string equality."""
    if a is None or b is None:
        return False
    return a.strip().lower() == b.strip().lower()


def _lps_table(pattern: str) -> List[int]:
    """Longest proper prefix that is also a suffix, for each prefix of pattern."""
    lps = [0] * len(pattern)
    length = 0
    i = 1
    while i < len(pattern):
        if pattern[i] == pattern[length]:
            length += 1
            lps[i] = length
            i += 1
        elif length:
            length = lps[length - 1]
        else:
            lps[i] = 0
            i += 1
    return lps


def kmp_contains(text: Optional[str], pattern: Optional[str]) -> bool:
    """Knuth-Morris-Pratt containment check (case-insensitive)."""
    prepared = _prepare(text, pattern)
    if prepared is None:
        return False
    text, pattern = prepared

    lps = _lps_table(pattern)
    j = 0
    for ch in text:
        while j and ch != pattern[j]:
            j = lps[j - 1]
        if ch == pattern[j]:
            j += 1
            if j == len(pattern):
                return True
    return False
