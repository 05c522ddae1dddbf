"""Rank product pages by how often a keyword occurs on them."""

from typing import Optional

from catalog.config import TOP_RANKED_PAGES
from catalog.logging_config import get_logger
from engine.cancellation import CancellationToken
from engine.keyword_engine import KeywordEngine, normalize_keyword
from engine.results import PageRankingResult

__all__ = ["PageRankingEngine"]

logger = get_logger("engine.ranking")

MSG_EMPTY_KEYWORD = "Please enter a search keyword"
MSG_DID_YOU_MEAN = "No results found. Did you mean:"
MSG_ERROR = "Page ranking failed; please try again"


class PageRankingEngine(KeywordEngine):
    """Top 10 product pages by whole-word keyword count."""

    name = "page_ranking"

    def search(
        self,
        keyword: Optional[str],
        cancel: Optional[CancellationToken] = None,
    ) -> PageRankingResult:
        normalized = normalize_keyword(keyword)
        if not normalized:
            return PageRankingResult(success=False, message=MSG_EMPTY_KEYWORD)

        try:
            return self._rank(normalized, cancel)
        except Exception:
            logger.exception(f"Page ranking failed for '{normalized}'")
            return PageRankingResult(success=False, message=MSG_ERROR)

    def _rank(self, keyword: str, cancel: Optional[CancellationToken]) -> PageRankingResult:
        build = self._build(keyword, cancel)
        top_urls = build.index.get_top_urls_bounded(keyword, TOP_RANKED_PAGES)

        if not top_urls:
            return PageRankingResult(
                success=False,
                suggestions=self._suggest(keyword, build),
                message=MSG_DID_YOU_MEAN,
                partial=build.cancelled,
            )

        return PageRankingResult(
            success=True,
            top_urls=top_urls,
            message=f"Found {len(top_urls)} results",
            partial=build.cancelled,
        )
