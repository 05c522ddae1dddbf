"""Flask HTTP surface for the search engines."""
