"""Shared test fixtures for the engine test suite."""

import pytest

from catalog.models import Brand, Product
from engine.content_cache import ContentCache
from engine.ledger import FrequencyLedger


class StaticSource:
    """Product source returning a fixed, replaceable list."""

    def __init__(self, products):
        self.products = list(products)
        self.loads = 0

    def load_all(self):
        self.loads += 1
        return list(self.products)


class PageFetcher:
    """Fetcher stub serving page text from a dict; missing URLs fail."""

    def __init__(self, pages):
        self.pages = dict(pages)
        self.calls = []

    def __call__(self, url, timeout):
        self.calls.append((url, timeout))
        return self.pages.get(url)


def make_product(pid, model_name, url="", brand=Brand.BOSE):
    return Product(
        id=str(pid),
        brand=brand,
        source_site="test",
        model_name=model_name,
        product_url=url,
    )


@pytest.fixture
def catalog_products():
    """Products used by the name-search tests."""
    return [
        make_product(1, "Bose Smart Soundbar 600", "https://bose.test/600"),
        make_product(2, "Bose Smart Soundbar 900", "https://bose.test/900"),
        make_product(3, "Sonos Arc", "https://sonos.test/arc", Brand.SONOS),
        make_product(4, "Sonos Beam", "https://sonos.test/beam", Brand.SONOS),
        make_product(5, "JBL Bar 500", "https://jbl.test/bar500", Brand.JBL),
        make_product(6, "LG Sound Bar S95QR", "https://example.com/product", Brand.LG),
    ]


@pytest.fixture
def source(catalog_products):
    return StaticSource(catalog_products)


@pytest.fixture
def ledger(tmp_path):
    return FrequencyLedger(str(tmp_path / "search_frequency.csv"))


@pytest.fixture
def pages():
    """Page text per product URL."""
    return {
        "https://bose.test/600": "Smart Soundbar 600 with Dolby Atmos. Atmos height channels.",
        "https://bose.test/900": (
            "Atmos Atmos atmos! Dolby Atmos and Dolby Vision ready. "
            "Atmospheric sound, atmos-enabled."
        ),
        "https://sonos.test/arc": "Sonos Arc brings Dolby Atmos to your living room.",
        "https://sonos.test/beam": "Compact soundbar for TV, music and more.",
        "https://jbl.test/bar500": None,
    }


@pytest.fixture
def fetcher(pages):
    return PageFetcher({url: text for url, text in pages.items() if text is not None})


@pytest.fixture
def cache(fetcher):
    return ContentCache(fetcher=fetcher, default_timeout=10)


@pytest.fixture
def product_factory():
    """Build a Product from (id, model_name, url, brand)."""
    return make_product


@pytest.fixture
def source_factory():
    """Build a product source from a list of products."""
    return StaticSource


@pytest.fixture
def fetcher_factory():
    """Build a page fetcher stub from a url -> text dict."""
    return PageFetcher
