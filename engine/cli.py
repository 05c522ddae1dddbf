"""Command-line interface for the search engines."""

import argparse
import json
import logging
from typing import Any, List, Optional

__all__ = ["main", "parse_args", "show_stats"]

from catalog.config import LEDGER_PATH, PRODUCTS_CSV_PATH, SEARCH_DEADLINE_SECONDS
from catalog.csv_utils import ProductCsvRepository
from catalog.logging_config import setup_logging
from engine.cancellation import CancellationToken
from engine.content_cache import ContentCache
from engine.frequency_count import FrequencyCountEngine
from engine.ledger import FrequencyLedger
from engine.page_ranking import PageRankingEngine
from engine.search_engine import SearchEngine


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="theatrecraft",
        description="Search, autocomplete and rank home-theatre products",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Look up a product by name (suggests close names on a miss)
  theatrecraft search "Bose Smart Soundbar 600"

  # Rank product pages by how often a word appears on them
  theatrecraft rank atmos --deadline 30

  # Most searched products
  theatrecraft top-searches --limit 5
        """,
    )

    parser.add_argument(
        "--products",
        default=PRODUCTS_CSV_PATH,
        help=f"Product CSV path (default: {PRODUCTS_CSV_PATH})",
    )
    parser.add_argument(
        "--ledger",
        default=LEDGER_PATH,
        help=f"Search frequency CSV path (default: {LEDGER_PATH})",
    )
    parser.add_argument(
        "--deadline",
        type=float,
        default=SEARCH_DEADLINE_SECONDS,
        help=f"Seconds allowed for a page scan (default: {SEARCH_DEADLINE_SECONDS:g})",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show debug logging",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("search", help="Exact product-name search with did-you-mean")
    p.add_argument("query")

    p = sub.add_parser("autocomplete", help="Product names starting with a prefix")
    p.add_argument("prefix")

    p = sub.add_parser("rank", help="Top product pages for a keyword")
    p.add_argument("keyword")

    p = sub.add_parser("frequency", help="Keyword occurrence counts across product pages")
    p.add_argument("keyword")

    p = sub.add_parser("top-searches", help="Most frequently found products")
    p.add_argument("--limit", type=int, default=10)

    sub.add_parser("stats", help="Show product and ledger statistics")

    return parser.parse_args(argv)


def show_stats(repository: ProductCsvRepository, ledger: FrequencyLedger) -> None:
    """Display product and ledger statistics."""
    products = repository.load_all()

    print(f"\n{'='*50}")
    print(f"Products: {repository.path}")
    print(f"{'='*50}")
    print(f"\nTotal products: {len(products)}")

    by_brand = {}
    for product in products:
        key = product.brand.display_name if product.brand else "Unknown"
        by_brand[key] = by_brand.get(key, 0) + 1

    print("\nProducts by brand:")
    for brand, count in sorted(by_brand.items()):
        print(f"  {brand}: {count}")

    print(f"\nSearch frequency entries: {len(ledger)}")
    print()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    args = parse_args(argv)
    setup_logging(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        log_to_file=False,
    )

    repository = ProductCsvRepository(args.products)
    ledger = FrequencyLedger(args.ledger)

    if args.command == "stats":
        show_stats(repository, ledger)
        return 0

    if args.command in ("search", "autocomplete", "top-searches"):
        engine = SearchEngine(repository, ledger)
        if args.command == "search":
            result = engine.search(args.query)
            _print_json(result.to_dict())
            return 0 if result.matched else 1
        if args.command == "autocomplete":
            _print_json([p.model_name for p in engine.autocomplete(args.prefix)])
            return 0
        _print_json([row.to_dict() for row in engine.top_searches(args.limit)])
        return 0

    cancel = CancellationToken(timeout=args.deadline)
    cache = ContentCache()
    if args.command == "rank":
        result = PageRankingEngine(repository, cache).search(args.keyword, cancel=cancel)
    else:
        result = FrequencyCountEngine(repository, cache).search(args.keyword, cancel=cancel)
    _print_json(result.to_dict())
    return 0 if result.success else 1


if __name__ == "__main__":
    raise SystemExit(main())
