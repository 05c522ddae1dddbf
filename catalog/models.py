"""Data models for products."""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional

from catalog.config import UNAVAILABLE

__all__ = ["Brand", "Product", "parse_brand"]


class Brand(Enum):
    """Retailers the catalog is crawled from."""

    BOSE = "Bose"
    SONOS = "Sonos"
    SAMSUNG = "Samsung"
    LG = "LG"
    JBL = "JBL"

    @property
    def display_name(self) -> str:
        return self.value


def parse_brand(value: Optional[str]) -> Optional[Brand]:
    """Resolve a stored brand tag (e.g. 'BOSE' or 'bose') to a Brand, or None."""
    if not value:
        return None
    try:
        return Brand[value.strip().upper()]
    except KeyError:
        return None


@dataclass(frozen=True)
class Product:
    """A single home-theatre listing scraped from a brand's site.

    Products are read-only once loaded: the search engines only enumerate
    them. Spec fields the crawler could not find hold ``UNAVAILABLE``.
    """

    # Identity
    id: str
    brand: Optional[Brand]
    source_site: str
    model_name: str

    # Classification
    system_type: str = ""
    category: str = ""

    # Numeric fields are None when the site did not show them
    price: Optional[float] = None
    rating: Optional[float] = None

    image_url: str = ""
    product_url: str = ""

    # Free-text specs
    channel: str = UNAVAILABLE
    audio_format: str = UNAVAILABLE
    wifi_format: str = UNAVAILABLE
    bluetooth_version: str = UNAVAILABLE
    weight_kg: str = UNAVAILABLE
    power: str = UNAVAILABLE

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready representation (brand as its enum name)."""
        data = asdict(self)
        data["brand"] = self.brand.name if self.brand else None
        return data
