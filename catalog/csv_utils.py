"""Semicolon-delimited CSV storage for product records."""

import csv
import os
from typing import Dict, Iterable, List, Optional, Protocol, Sequence

import pandas as pd

from catalog.config import PRODUCTS_CSV_PATH, UNAVAILABLE
from catalog.logging_config import get_logger
from catalog.models import Product, parse_brand

__all__ = [
    "CSV_COLUMNS",
    "ProductSource",
    "ProductCsvRepository",
    "product_to_row",
    "row_to_product",
]

logger = get_logger("storage")

# Column order on disk; must match both load and save
CSV_COLUMNS: List[str] = [
    "id", "brand", "sourceSite", "modelName", "systemType", "category",
    "price", "rating", "imageUrl", "productUrl", "channel", "audioFormat",
    "wifiFormat", "bluetoothVersion", "weightKg", "power",
]

# CSV column -> Product attribute for the plain string fields
_TEXT_FIELDS: Dict[str, str] = {
    "id": "id",
    "sourceSite": "source_site",
    "modelName": "model_name",
    "systemType": "system_type",
    "category": "category",
    "imageUrl": "image_url",
    "productUrl": "product_url",
}

_SPEC_FIELDS: Dict[str, str] = {
    "channel": "channel",
    "audioFormat": "audio_format",
    "wifiFormat": "wifi_format",
    "bluetoothVersion": "bluetooth_version",
    "weightKg": "weight_kg",
    "power": "power",
}


class ProductSource(Protocol):
    """Anything that can hand the engines an ordered product snapshot."""

    def load_all(self) -> Sequence[Product]:
        ...


def _parse_number(value: str) -> Optional[float]:
    """Parse a stored price/rating; blanks and garbage become None."""
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _clean(value: Optional[str]) -> str:
    """Make a value safe for the semicolon-delimited format."""
    if value is None:
        return ""
    return str(value).replace(";", ",").replace("\n", " ")


def row_to_product(row: Dict[str, str]) -> Product:
    """Build a Product from one CSV row.

    Unknown brands and unparsable numbers degrade to None instead of
    dropping the record.
    """
    kwargs = {attr: row.get(col, "") for col, attr in _TEXT_FIELDS.items()}
    kwargs.update({attr: row.get(col) or UNAVAILABLE for col, attr in _SPEC_FIELDS.items()})

    return Product(
        brand=parse_brand(row.get("brand")),
        price=_parse_number(row.get("price", "")),
        rating=_parse_number(row.get("rating", "")),
        **kwargs,
    )


def product_to_row(product: Product) -> Dict[str, str]:
    """Convert a Product into a CSV-ready row."""
    row = {col: _clean(getattr(product, attr)) for col, attr in _TEXT_FIELDS.items()}
    row.update({col: _clean(getattr(product, attr)) for col, attr in _SPEC_FIELDS.items()})
    row["brand"] = product.brand.name if product.brand else ""
    row["price"] = "" if product.price is None else str(product.price)
    row["rating"] = "" if product.rating is None else str(product.rating)
    return row


class ProductCsvRepository:
    """Loads and saves the product list as ``data/products.csv``.

    Usage:
        repo = ProductCsvRepository("data/products.csv")
        products = repo.load_all()
    """

    def __init__(self, path: str = PRODUCTS_CSV_PATH) -> None:
        self.path = path

    def load_all(self) -> List[Product]:
        """Load every well-formed product, in file order.

        Missing files yield an empty list. Rows with missing columns are
        skipped and logged.
        """
        if not os.path.exists(self.path):
            logger.info(f"No product file at {self.path}; starting empty")
            return []

        try:
            df = pd.read_csv(
                self.path,
                sep=";",
                dtype=str,
                keep_default_na=False,
                on_bad_lines="skip",
                engine="python",
            )
        except (OSError, ValueError, pd.errors.ParserError) as e:
            logger.error(f"Could not read products from {self.path}: {e}")
            return []

        missing_columns = [col for col in CSV_COLUMNS if col not in df.columns]
        if missing_columns:
            logger.error(f"Product file {self.path} lacks columns: {missing_columns}")
            return []

        # Short rows are padded with NaN by pandas; treat them as malformed
        complete = df.dropna(subset=CSV_COLUMNS)
        skipped = len(df) - len(complete)
        if skipped:
            logger.warning(f"Skipped {skipped} malformed product rows in {self.path}")

        products = [row_to_product(row) for row in complete.to_dict(orient="records")]
        logger.info(f"Loaded {len(products)} products from {self.path}")
        return products

    def save_all(self, products: Iterable[Product]) -> int:
        """Rewrite the whole product file.

        Returns:
            Number of products written
        """
        rows = [product_to_row(p) for p in products]

        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        with open(self.path, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=CSV_COLUMNS, delimiter=";")
            writer.writeheader()
            for row in rows:
                writer.writerow(row)

        logger.info(f"Saved {len(rows)} products to {self.path}")
        return len(rows)
