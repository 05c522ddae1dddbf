"""Brand crawler interface and the in-memory product list it refreshes.

Site-specific crawlers (browser automation, popup handling, field
extraction) live outside this package. They plug in by implementing
``ProductCrawler`` and are selected by the brand they identify as.
"""

import threading
from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Protocol

from catalog.csv_utils import ProductCsvRepository
from catalog.logging_config import get_logger, log_search_event
from catalog.models import Brand, Product
from catalog.normalize import normalize_category, normalize_system_type

__all__ = [
    "ProductCrawler",
    "UnknownBrandError",
    "CrawlService",
]

logger = get_logger("crawl")


class ProductCrawler(Protocol):
    """Capability every brand crawler provides."""

    def identify(self) -> Brand:
        """Brand this crawler scrapes."""
        ...

    def crawl(self) -> List[Product]:
        """Scrape the brand's current listings."""
        ...


class UnknownBrandError(KeyError):
    """Raised when no crawler is registered for a brand."""
    pass


class CrawlService:
    """Holds the loaded product list and refreshes it one brand at a time.

    Usage:
        service = CrawlService(ProductCsvRepository(), [BoseCrawler()])
        service.crawl_brand(Brand.BOSE)
    """

    def __init__(
        self,
        repository: ProductCsvRepository,
        crawlers: Optional[Iterable[ProductCrawler]] = None,
    ) -> None:
        self.repository = repository
        self._crawlers: Dict[Brand, ProductCrawler] = {}
        for crawler in crawlers or []:
            self.register(crawler)
        self._lock = threading.Lock()
        self._products: List[Product] = repository.load_all()
        logger.info(f"Loaded {len(self._products)} products from storage")

    def register(self, crawler: ProductCrawler) -> None:
        """Register (or replace) the crawler for its brand."""
        self._crawlers[crawler.identify()] = crawler

    @property
    def brands(self) -> List[Brand]:
        return list(self._crawlers)

    def products(self) -> List[Product]:
        with self._lock:
            return list(self._products)

    def products_by_brand(self, brand: Brand) -> List[Product]:
        with self._lock:
            return [p for p in self._products if p.brand == brand]

    def latest(self, limit: int) -> List[Product]:
        with self._lock:
            return self._products[:max(limit, 0)]

    def crawl_brand(self, brand: Brand) -> List[Product]:
        """Crawl one brand and replace its products in storage.

        Blank system types and categories are filled in from the model name.

        Raises:
            UnknownBrandError: If no crawler is registered for the brand
        """
        crawler = self._crawlers.get(brand)
        if crawler is None:
            raise UnknownBrandError(f"No crawler found for brand: {brand.name}")

        crawled = [_fill_classification(p) for p in crawler.crawl()]

        with self._lock:
            self._products = [p for p in self._products if p.brand != brand] + list(crawled)
            self.repository.save_all(self._products)
            total = len(self._products)

        logger.info(f"Crawled {len(crawled)} products for brand {brand.name}")
        log_search_event("crawl_complete", {
            "brand": brand.name,
            "products_crawled": len(crawled),
            "products_total": total,
        }, logger_name="crawl")
        return crawled


def _fill_classification(product: Product) -> Product:
    """Derive system type and category from the model name when a crawler left them blank."""
    if product.system_type and product.category:
        return product
    return replace(
        product,
        system_type=product.system_type or normalize_system_type(product.model_name),
        category=product.category or normalize_category(product.model_name),
    )
