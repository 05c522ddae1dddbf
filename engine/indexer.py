"""Per-query keyword index build shared by the ranking and frequency engines.

Every call builds its own InvertedIndex and WordTrie, so overlapping
requests for different keywords never see each other's data.
"""

import time
from dataclasses import dataclass, field
from typing import Optional, Sequence, Set

from catalog.config import REQUEST_TIMEOUT
from catalog.logging_config import get_logger, log_search_event
from catalog.models import Product
from catalog.url_validation import is_usable_product_url, sanitize_url
from engine.cancellation import CancellationToken
from engine.content_cache import ContentCache
from engine.inverted_index import InvertedIndex
from engine.matching import count_whole_word_occurrences
from engine.spellcheck import tokenize
from engine.trie import WordTrie

__all__ = ["IndexBuild", "build_keyword_index"]

logger = get_logger("engine.indexer")


@dataclass
class IndexBuild:
    """Everything one keyword scan produced."""

    keyword: str
    index: InvertedIndex = field(default_factory=InvertedIndex)
    vocabulary: WordTrie = field(default_factory=WordTrie)
    urls_searched: int = 0
    urls_failed: int = 0
    cancelled: bool = False

    @property
    def urls_matched(self) -> int:
        return self.index.get_url_count(self.keyword)


def build_keyword_index(
    keyword: str,
    products: Sequence[Product],
    cache: ContentCache,
    cancel: Optional[CancellationToken] = None,
) -> IndexBuild:
    """Scan every usable product page for whole-word hits of ``keyword``.

    Pages are read through the shared cache and each distinct URL is scanned
    once, even when several products link to it. Each page's words (3+ chars)
    go into the build's vocabulary. If ``cancel`` fires, the scan stops
    before the next page and the partial build is returned.

    Args:
        keyword: Normalized (trimmed, lowercase) keyword
        products: Product snapshot to scan, in order
        cache: Shared content cache
        cancel: Optional token bounding the whole scan

    Returns:
        IndexBuild with the index, vocabulary and scan counters
    """
    build = IndexBuild(keyword=keyword)
    seen: Set[str] = set()
    started = time.monotonic()

    log_search_event("index_build_start", {
        "message": f"Building index for '{keyword}' across {len(products)} products",
        "keyword": keyword,
        "products": len(products),
    }, logger_name="engine.indexer")

    for product in products:
        if not is_usable_product_url(product.product_url):
            continue

        if cancel is not None and cancel.cancelled:
            build.cancelled = True
            logger.warning(
                f"Index build for '{keyword}' cancelled after {build.urls_searched} pages"
            )
            break

        url = sanitize_url(product.product_url)
        if url in seen:
            continue
        seen.add(url)
        build.urls_searched += 1

        timeout = cancel.bound_timeout(REQUEST_TIMEOUT) if cancel is not None else None
        content = cache.get_content(url, timeout=timeout)
        if content is None:
            build.urls_failed += 1
            continue

        build.vocabulary.insert_all(tokenize(content))
        build.index.add_entry(keyword, url, count_whole_word_occurrences(content, keyword))

    log_search_event("index_build_complete", {
        "message": (
            f"Index for '{keyword}' built: {build.urls_matched} matching pages, "
            f"{build.urls_failed} failed, {build.urls_searched} searched"
        ),
        "keyword": keyword,
        "urls_searched": build.urls_searched,
        "urls_failed": build.urls_failed,
        "urls_matched": build.urls_matched,
        "cancelled": build.cancelled,
        "elapsed_seconds": round(time.monotonic() - started, 3),
    }, logger_name="engine.indexer")

    return build
