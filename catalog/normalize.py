"""Normalization helpers for raw scraped product fields.

Crawlers hand over whatever text the retailer's page shows; these helpers
turn it into the values stored in the product file.
"""

import re
from typing import Optional

__all__ = [
    "parse_price",
    "normalize_system_type",
    "normalize_category",
    "clean_features",
    "MAX_FEATURE_LENGTH",
]

MAX_FEATURE_LENGTH = 500

# Checked in order; the first hit wins
_SYSTEM_TYPES = [
    ("7.1", "7.1"),
    ("5.1", "5.1"),
    ("3.1", "3.1"),
    ("2.1", "2.1"),
    ("soundbar", "Soundbar"),
]


def _combined(name: Optional[str], extra_text: Optional[str]) -> str:
    return f"{name or ''} {extra_text or ''}".lower().strip()


def parse_price(price_text: Optional[str]) -> Optional[float]:
    """Extract the numeric value of a price string.

    "$999.99" -> 999.99, "From $1,299.00" -> 1299.0. Returns None when no
    number can be read.
    """
    if not price_text or not price_text.strip():
        return None

    cleaned = re.sub(r"[^0-9.]", "", price_text)
    if not cleaned:
        return None
    try:
        return float(cleaned)
    except ValueError:
        return None


def normalize_system_type(name: Optional[str], extra_text: Optional[str] = None) -> str:
    """Classify a product's speaker layout ("7.1", "5.1", ..., "Soundbar" or "Unknown")."""
    combined = _combined(name, extra_text)
    for needle, system_type in _SYSTEM_TYPES:
        if needle in combined:
            return system_type
    return "Unknown"


def normalize_category(name: Optional[str], extra_text: Optional[str] = None) -> str:
    """Map a product to HOME_THEATER, SOUNDBAR or AUDIO_SYSTEM."""
    combined = _combined(name, extra_text)
    if "home theater" in combined or "home theatre" in combined:
        return "HOME_THEATER"
    if "soundbar" in combined:
        return "SOUNDBAR"
    return "AUDIO_SYSTEM"


def clean_features(raw_text: Optional[str]) -> Optional[str]:
    """Collapse whitespace and cap feature text at MAX_FEATURE_LENGTH characters."""
    if not raw_text or not raw_text.strip():
        return None

    cleaned = re.sub(r"\s+", " ", raw_text).strip()
    if len(cleaned) > MAX_FEATURE_LENGTH:
        cleaned = cleaned[:MAX_FEATURE_LENGTH] + "..."
    return cleaned
