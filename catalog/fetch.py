"""Fetch product pages and reduce them to plain text.

This is the content collaborator behind the engines' content cache: one
HTTP GET, then tag stripping. Every failure is logged and reported as None;
nothing is retried here.
"""

import threading
from typing import Optional

import requests  # type: ignore[import-untyped]
from bs4 import BeautifulSoup

from catalog.config import HEADERS, REQUEST_TIMEOUT
from catalog.logging_config import get_logger, log_search_event

__all__ = [
    "create_session",
    "html_to_text",
    "fetch_page_text",
]

logger = get_logger("fetch")

# Sessions are not thread-safe; keep one per worker thread
_local = threading.local()


def create_session() -> requests.Session:
    """Create a requests Session with connection pooling and browser-like headers."""
    session = requests.Session()
    session.headers.update(HEADERS)
    session.headers.setdefault("Accept-Encoding", "gzip, deflate")
    return session


def _get_session() -> requests.Session:
    """Get or create the session for the current thread."""
    session = getattr(_local, "session", None)
    if session is None:
        session = create_session()
        _local.session = session
    return session


def html_to_text(html: str) -> str:
    """Extract the visible body text of an HTML document.

    Scripts, styles and templates are dropped; remaining text nodes are
    joined with single spaces.
    """
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style", "noscript", "template"]):
        tag.decompose()

    root = soup.body or soup
    return " ".join(root.stripped_strings)


def fetch_page_text(
    url: str,
    timeout: Optional[float] = None,
    session: Optional[requests.Session] = None,
) -> Optional[str]:
    """GET a product page and return its plain text.

    Args:
        url: Page to fetch
        timeout: Request timeout in seconds (default: REQUEST_TIMEOUT)
        session: Optional requests.Session for connection reuse

    Returns:
        Extracted text, or None when the request times out, returns a
        non-200 status, or the body cannot be parsed.
    """
    sess = session or _get_session()
    effective_timeout = REQUEST_TIMEOUT if timeout is None else timeout

    try:
        resp = sess.get(url, timeout=effective_timeout)
        if resp.status_code != 200:
            logger.warning(f"HTTP {resp.status_code} fetching {url}")
            log_search_event("fetch_failed", {
                "url": url,
                "status_code": resp.status_code,
            }, logger_name="fetch")
            return None
        text = html_to_text(resp.text)

    except requests.exceptions.Timeout as e:
        logger.warning(f"Timeout after {effective_timeout:.1f}s fetching {url}: {e}")
        log_search_event("fetch_failed", {"url": url, "error": "timeout"}, logger_name="fetch")
        return None

    except requests.exceptions.RequestException as e:
        logger.warning(f"Request error fetching {url}: {e}")
        log_search_event("fetch_failed", {"url": url, "error": str(e)}, logger_name="fetch")
        return None

    except (ValueError, TypeError) as e:
        # Undecodable or malformed bodies
        logger.warning(f"Could not parse {url}: {e}")
        log_search_event("fetch_failed", {"url": url, "error": str(e)}, logger_name="fetch")
        return None

    logger.debug(f"Fetched {len(text)} characters from {url}")
    return text
