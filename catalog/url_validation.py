"""URL hygiene for product links read from storage.

Stored product URLs come straight from crawlers, so they may carry stray
whitespace, control characters or the placeholder link crawlers write when a
listing has no detail page.
"""

import re
from typing import Optional

from catalog.config import PLACEHOLDER_PRODUCT_URL

__all__ = [
    "sanitize_url",
    "is_usable_product_url",
]


def sanitize_url(url: Optional[str]) -> str:
    """Sanitize a URL by stripping whitespace and control characters.

    Args:
        url: Raw URL string (may be None)

    Returns:
        Sanitized URL string ("" for missing input)
    """
    if not url:
        return ""

    url = url.strip()
    url = re.sub(r"[\x00-\x1f\x7f-\x9f]", "", url)
    url = url.replace("%00", "")

    return url


def is_usable_product_url(url: Optional[str]) -> bool:
    """Check whether a stored product URL is worth fetching.

    Missing, blank and placeholder URLs are skipped by the indexers.
    """
    cleaned = sanitize_url(url)
    return bool(cleaned) and cleaned != PLACEHOLDER_PRODUCT_URL
