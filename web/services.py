"""Process-wide engine instances shared by every request.

Engines are built lazily on first use so that importing the app stays cheap
and tests can install their own instances with ``set_services()``.
"""

import threading
from dataclasses import dataclass
from typing import Optional

from catalog.config import LEDGER_PATH, PRODUCTS_CSV_PATH
from catalog.crawl import CrawlService
from catalog.csv_utils import ProductCsvRepository
from catalog.logging_config import get_logger
from engine.content_cache import ContentCache
from engine.frequency_count import FrequencyCountEngine
from engine.ledger import FrequencyLedger
from engine.page_ranking import PageRankingEngine
from engine.search_engine import SearchEngine

__all__ = ["Services", "build_services", "get_services", "set_services", "reset_services"]

logger = get_logger("web.services")


@dataclass
class Services:
    repository: ProductCsvRepository
    cache: ContentCache
    ledger: FrequencyLedger
    search: SearchEngine
    ranking: PageRankingEngine
    frequency: FrequencyCountEngine
    crawl: CrawlService

    def reload_all(self) -> int:
        """Give every engine a fresh product snapshot."""
        count = self.search.reload()
        self.ranking.reload()
        self.frequency.reload()
        return count


def build_services(
    products_path: str = PRODUCTS_CSV_PATH,
    ledger_path: Optional[str] = LEDGER_PATH,
    cache: Optional[ContentCache] = None,
) -> Services:
    """Wire the repository, ledger, shared cache and engines together."""
    repository = ProductCsvRepository(products_path)
    cache = cache if cache is not None else ContentCache()
    ledger = FrequencyLedger(ledger_path)
    return Services(
        repository=repository,
        cache=cache,
        ledger=ledger,
        search=SearchEngine(repository, ledger),
        ranking=PageRankingEngine(repository, cache),
        frequency=FrequencyCountEngine(repository, cache),
        crawl=CrawlService(repository),
    )


_services: Optional[Services] = None
_lock = threading.Lock()


def get_services() -> Services:
    global _services
    if _services is None:
        with _lock:
            if _services is None:
                _services = build_services()
                logger.info("Search services initialized")
    return _services


def set_services(services: Optional[Services]) -> None:
    global _services
    with _lock:
        _services = services


def reset_services() -> None:
    set_services(None)
