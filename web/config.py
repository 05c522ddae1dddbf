"""Centralized configuration for the search web app."""

import os

# Flask app settings (allow env overrides; default debug off for safety)
# Hosting platforms set PORT dynamically; fall back to FLASK_PORT or 5000 for local.
FLASK_HOST = os.getenv("FLASK_HOST", "0.0.0.0")
FLASK_PORT = int(os.getenv("FLASK_PORT", os.getenv("PORT", "5000")))
FLASK_DEBUG = os.getenv("FLASK_DEBUG", "False").lower() == "true"

# Free-text search input shorter than this is rejected with a 400
MIN_KEYWORD_LENGTH = 3

# Default page sizes for listing endpoints
TOP_SEARCHES_DEFAULT = int(os.getenv("TOP_SEARCHES_DEFAULT", "10"))
LATEST_PRODUCTS_DEFAULT = int(os.getenv("LATEST_PRODUCTS_DEFAULT", "12"))

# JSONL request log next to the console log
LOG_TO_FILE = os.getenv("LOG_TO_FILE", "True").lower() == "true"
