"""Home-theatre product catalog: records, storage and page fetching."""

__version__ = "0.1.0"

# Re-export main components for convenient imports
from catalog.config import PRODUCTS_CSV_PATH, UNAVAILABLE
from catalog.crawl import CrawlService, ProductCrawler, UnknownBrandError
from catalog.csv_utils import ProductCsvRepository, ProductSource
from catalog.fetch import fetch_page_text
from catalog.models import Brand, Product, parse_brand

__all__ = [
    # Version
    "__version__",
    # Config
    "PRODUCTS_CSV_PATH",
    "UNAVAILABLE",
    # Models
    "Brand",
    "Product",
    "parse_brand",
    # Storage
    "ProductCsvRepository",
    "ProductSource",
    # Collaborators
    "fetch_page_text",
    "CrawlService",
    "ProductCrawler",
    "UnknownBrandError",
]
