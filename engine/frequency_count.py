"""Global occurrence statistics for a keyword across product pages."""

from typing import Optional

from catalog.logging_config import get_logger
from engine.cancellation import CancellationToken
from engine.keyword_engine import KeywordEngine, normalize_keyword
from engine.results import FrequencyCountResult

__all__ = ["FrequencyCountEngine"]

logger = get_logger("engine.frequency")

MSG_EMPTY_KEYWORD = "Please enter a search keyword"
MSG_DID_YOU_MEAN = "No results found. Did you mean:"
MSG_SUCCESS = "Search completed successfully"
MSG_ERROR = "Frequency count failed; please try again"


class FrequencyCountEngine(KeywordEngine):
    """Counts keyword occurrences over every product page.

    Reports the total number of whole-word hits, how many pages were
    searched, and on which pages the keyword was found. Every counter is
    per distinct URL: products that share a page contribute it once.
    """

    name = "frequency_count"

    def search(
        self,
        keyword: Optional[str],
        cancel: Optional[CancellationToken] = None,
    ) -> FrequencyCountResult:
        normalized = normalize_keyword(keyword)
        if not normalized:
            return FrequencyCountResult(success=False, message=MSG_EMPTY_KEYWORD)

        try:
            return self._count(normalized, cancel)
        except Exception:
            logger.exception(f"Frequency count failed for '{normalized}'")
            return FrequencyCountResult(success=False, message=MSG_ERROR)

    def _count(self, keyword: str, cancel: Optional[CancellationToken]) -> FrequencyCountResult:
        build = self._build(keyword, cancel)
        found = build.index.get_urls(keyword)

        if not found:
            return FrequencyCountResult(
                success=False,
                total_urls_searched=build.urls_searched,
                suggestions=self._suggest(keyword, build),
                message=MSG_DID_YOU_MEAN,
                partial=build.cancelled,
            )

        total = build.index.get_total_occurrences(keyword)
        logger.info(
            f"'{keyword}': {total} occurrences on {len(found)} of "
            f"{build.urls_searched} pages"
        )
        return FrequencyCountResult(
            success=True,
            total_occurrences=total,
            total_urls_searched=build.urls_searched,
            found_on_url_count=len(found),
            found_urls=list(found),
            message=MSG_SUCCESS,
            partial=build.cancelled,
        )
