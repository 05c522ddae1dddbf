"""Memoized page text, keyed by URL.

Each URL is fetched at most once per process (until invalidated). Failed
fetches are cached too and are not retried automatically; there is no
expiry, so content can be stale.
"""

import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional

from catalog.config import REQUEST_TIMEOUT
from catalog.fetch import fetch_page_text
from catalog.logging_config import get_logger

__all__ = ["FetchOutcome", "CacheEntry", "ContentCache", "Fetcher"]

logger = get_logger("engine.cache")

# (url, timeout seconds) -> page text, or None on failure
Fetcher = Callable[[str, float], Optional[str]]


class FetchOutcome(Enum):
    FETCHED = "fetched"
    FAILED = "failed"


@dataclass(frozen=True)
class CacheEntry:
    """Result of one fetch attempt."""

    url: str
    outcome: FetchOutcome
    text: Optional[str]
    fetched_at: float

    @property
    def ok(self) -> bool:
        return self.outcome is FetchOutcome.FETCHED


class _UrlLock:
    """Fetch lock for one URL plus the number of callers holding or waiting on it."""

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.users = 0


class ContentCache:
    """Thread-safe URL -> page text cache in front of a fetcher.

    Concurrent callers asking for the same uncached URL share one fetch;
    different URLs are fetched in parallel.
    """

    def __init__(
        self,
        fetcher: Fetcher = fetch_page_text,
        default_timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        self._fetcher = fetcher
        self._default_timeout = default_timeout
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._url_locks: Dict[str, _UrlLock] = {}

    @contextmanager
    def _url_guard(self, url: str):
        """Hold the fetch lock for ``url``; the lock is dropped once nobody waits on it."""
        with self._lock:
            slot = self._url_locks.get(url)
            if slot is None:
                slot = self._url_locks[url] = _UrlLock()
            slot.users += 1
        try:
            with slot.lock:
                yield
        finally:
            with self._lock:
                slot.users -= 1
                if slot.users == 0:
                    del self._url_locks[url]

    def lookup(self, url: str) -> Optional[CacheEntry]:
        """Cached entry for ``url`` without fetching (None = not yet known)."""
        with self._lock:
            return self._entries.get(url)

    def get_content(self, url: str, timeout: Optional[float] = None) -> Optional[str]:
        """Page text for ``url``, fetching it on first use.

        Returns None when the fetch failed now or on an earlier call.
        """
        entry = self.lookup(url)
        if entry is not None:
            logger.debug(f"Cache hit for {url}")
            return entry.text

        with self._url_guard(url):
            # Another thread may have fetched it while we waited
            entry = self.lookup(url)
            if entry is not None:
                return entry.text

            effective = self._default_timeout if timeout is None else min(timeout, self._default_timeout)
            entry = self._fetch(url, effective)

            # Failures are cached only when the fetch had the full default timeout
            if entry.ok or effective >= self._default_timeout:
                with self._lock:
                    self._entries[url] = entry
            return entry.text

    def _fetch(self, url: str, timeout: float) -> CacheEntry:
        logger.debug(f"Fetching content from {url}")
        try:
            text = self._fetcher(url, timeout)
        except Exception:
            # Errors from the fetcher are cached as failures
            logger.exception(f"Fetcher raised for {url}")
            text = None

        outcome = FetchOutcome.FETCHED if text is not None else FetchOutcome.FAILED
        if outcome is FetchOutcome.FAILED:
            logger.info(f"Caching failed fetch for {url}")
        return CacheEntry(url=url, outcome=outcome, text=text, fetched_at=time.time())

    def is_cached(self, url: str) -> bool:
        return self.lookup(url) is not None

    def invalidate(self, url: str) -> None:
        """Forget ``url`` so the next read fetches it again."""
        with self._lock:
            self._entries.pop(url, None)
        logger.info(f"Invalidated cache for {url}")

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
        logger.info("Content cache cleared")

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
