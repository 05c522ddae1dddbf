"""Configuration and constants for the product catalog and search engines."""

import os
from pathlib import Path

__all__ = [
    "PROJECT_ROOT",
    "DATA_DIR",
    "PRODUCTS_CSV_PATH",
    "LEDGER_PATH",
    "LOG_DIR",
    "HEADERS",
    "REQUEST_TIMEOUT",
    "PLACEHOLDER_PRODUCT_URL",
    "UNAVAILABLE",
    "AUTOCOMPLETE_MIN_LENGTH",
    "AUTOCOMPLETE_MAX_RESULTS",
    "SEARCH_SUGGESTION_LIMIT",
    "KEYWORD_SUGGESTION_LIMIT",
    "TOP_RANKED_PAGES",
    "MIN_TOKEN_LENGTH",
    "SEARCH_DEADLINE_SECONDS",
]

PROJECT_ROOT = Path(__file__).parent.parent

# Data files (allow env overrides for deployments and tests)
DATA_DIR = Path(os.getenv("THEATRECRAFT_DATA_DIR", str(PROJECT_ROOT / "data")))
PRODUCTS_CSV_PATH = os.getenv("PRODUCTS_CSV_PATH", str(DATA_DIR / "products.csv"))
LEDGER_PATH = os.getenv("SEARCH_FREQUENCY_PATH", str(DATA_DIR / "search_frequency.csv"))
LOG_DIR = Path(os.getenv("THEATRECRAFT_LOG_DIR", str(PROJECT_ROOT / "logs")))

# Product pages are fetched like a regular browser would
HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml",
}

# Request timeout for page content fetches (seconds)
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "10"))

# Crawlers write this URL when a listing has no detail page
PLACEHOLDER_PRODUCT_URL = "https://example.com/product"

# Spec fields the crawler could not find
UNAVAILABLE = "Unavailable"

# Autocomplete policy, shared by every trie call site
AUTOCOMPLETE_MIN_LENGTH = 3
AUTOCOMPLETE_MAX_RESULTS = 5

# Did-you-mean sizes
SEARCH_SUGGESTION_LIMIT = 5  # product names
KEYWORD_SUGGESTION_LIMIT = 3  # page vocabulary words

# Page ranking
TOP_RANKED_PAGES = 10
MIN_TOKEN_LENGTH = 3

# Upper bound for one ranking/frequency request; 0 disables the deadline
SEARCH_DEADLINE_SECONDS = float(os.getenv("SEARCH_DEADLINE_SECONDS", "60"))
