"""Result objects returned by the search engines.

Engines never raise to their callers; every outcome, including bad input,
is one of these objects with a human-readable message.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from catalog.models import Product
from engine.inverted_index import UrlOccurrence

__all__ = [
    "SearchResult",
    "PageRankingResult",
    "FrequencyCountResult",
]


@dataclass
class SearchResult:
    """Outcome of a product-name search."""

    matched: bool
    product: Optional[Product] = None
    suggestions: List[str] = field(default_factory=list)
    message: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "matched": self.matched,
            "product": self.product.to_dict() if self.product else None,
            "suggestions": list(self.suggestions),
            "message": self.message,
        }


@dataclass
class PageRankingResult:
    """Top pages for a keyword, or did-you-mean words when none matched.

    ``partial`` is set when the build was cancelled before every page was
    scanned.
    """

    success: bool
    top_urls: List[UrlOccurrence] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)
    message: str = ""
    partial: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "topUrls": [o.to_dict() for o in self.top_urls],
            "suggestions": list(self.suggestions),
            "message": self.message,
            "partial": self.partial,
        }


@dataclass
class FrequencyCountResult:
    """Occurrence statistics for a keyword across all product pages."""

    success: bool
    total_occurrences: int = 0
    total_urls_searched: int = 0
    found_on_url_count: int = 0
    found_urls: List[str] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)
    message: str = ""
    partial: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "stats": {
                "totalOccurrences": self.total_occurrences,
                "totalUrlsSearched": self.total_urls_searched,
                "foundOnUrlCount": self.found_on_url_count,
                "foundUrls": list(self.found_urls),
            },
            "suggestions": list(self.suggestions),
            "message": self.message,
            "partial": self.partial,
        }
