"""Shared test fixtures for the catalog test suite."""

import pytest

from catalog.csv_utils import CSV_COLUMNS
from catalog.models import Brand, Product


@pytest.fixture
def sample_products():
    """Three products across two brands."""
    return [
        Product(
            id="1",
            brand=Brand.BOSE,
            source_site="bose.com",
            model_name="Bose Smart Soundbar 600",
            system_type="Soundbar",
            category="SOUNDBAR",
            price=499.0,
            rating=4.5,
            product_url="https://www.bose.com/p/soundbar-600",
        ),
        Product(
            id="2",
            brand=Brand.SONOS,
            source_site="sonos.com",
            model_name="Sonos Arc",
            system_type="5.1",
            category="HOME_THEATER",
            price=899.0,
            product_url="https://www.sonos.com/arc",
            audio_format="Dolby Atmos",
        ),
        Product(
            id="3",
            brand=Brand.BOSE,
            source_site="bose.com",
            model_name="Bose TV Speaker",
            product_url="https://example.com/product",
        ),
    ]


@pytest.fixture
def write_products_csv(tmp_path):
    """Write raw semicolon-delimited rows under the standard header."""

    def _write(rows, header=None, name="products.csv"):
        path = tmp_path / name
        lines = [";".join(header or CSV_COLUMNS)] + rows
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return str(path)

    return _write
