"""Shared test fixtures for the web test suite."""

import pytest

from catalog.csv_utils import ProductCsvRepository
from catalog.models import Brand, Product
from engine.content_cache import ContentCache
from web.services import build_services, reset_services, set_services

PAGES = {
    "https://bose.test/600": "Smart Soundbar 600 with Dolby Atmos. Atmos height channels.",
    "https://bose.test/900": "Atmos Atmos atmos! Dolby Atmos and Dolby Vision ready.",
    "https://sonos.test/arc": "Sonos Arc brings Dolby Atmos to your living room.",
}


def _product(pid, brand, name, url):
    return Product(id=pid, brand=brand, source_site="test", model_name=name, product_url=url)


@pytest.fixture
def sample_products():
    """Four products; one has the placeholder URL."""
    return [
        _product("1", Brand.BOSE, "Bose Smart Soundbar 600", "https://bose.test/600"),
        _product("2", Brand.BOSE, "Bose Smart Soundbar 900", "https://bose.test/900"),
        _product("3", Brand.SONOS, "Sonos Arc", "https://sonos.test/arc"),
        _product("4", Brand.LG, "LG Sound Bar S95QR", "https://example.com/product"),
    ]


@pytest.fixture
def page_fetches():
    """URLs requested through the shared content cache."""
    return []


@pytest.fixture
def services(tmp_path, sample_products, page_fetches):
    """Engines wired to a temporary catalog and an offline page fetcher."""
    products_path = str(tmp_path / "products.csv")
    ProductCsvRepository(products_path).save_all(sample_products)

    def fetch(url, timeout):
        page_fetches.append(url)
        return PAGES.get(url)

    built = build_services(
        products_path=products_path,
        ledger_path=str(tmp_path / "search_frequency.csv"),
        cache=ContentCache(fetcher=fetch, default_timeout=10),
    )
    set_services(built)
    yield built
    reset_services()


@pytest.fixture
def client(services):
    """Create Flask test client."""
    from web.app import app
    app.config["TESTING"] = True

    with app.test_client() as test_client:
        yield test_client
