"""HTTP endpoints for product search, page ranking and frequency counting.

Routes (all under /api):
- /search, /search/product, /search/autocomplete, /search/frequencies, /search/reload
- /pageranking/search, /pageranking/autocomplete, /pageranking/health
- /frequencycount/search, /frequencycount/autocomplete, /frequencycount/health
- /products, /products/latest, /products/crawl/<brand>

The three search endpoints reject input shorter than MIN_KEYWORD_LENGTH with
a 400 before any engine runs. Engines never raise; their result objects are
returned as JSON.
"""

from typing import Any, Dict, Optional, Tuple, Union

from flask import Blueprint, Response, jsonify, request

from catalog.config import SEARCH_DEADLINE_SECONDS
from catalog.crawl import UnknownBrandError
from catalog.logging_config import get_logger, log_search_event
from catalog.models import parse_brand
from engine.cancellation import CancellationToken
from engine.keyword_engine import KeywordEngine

from .config import LATEST_PRODUCTS_DEFAULT, MIN_KEYWORD_LENGTH, TOP_SEARCHES_DEFAULT
from .services import get_services
from .timing import get_timings, reset_timings, timer

__all__ = ["api"]

logger = get_logger("web.api")

api = Blueprint("api", __name__, url_prefix="/api")

ApiResponse = Union[Response, Tuple[Response, int]]


def _param(name: str) -> Optional[str]:
    """Read a parameter from the query string, falling back to a JSON body."""
    value = request.args.get(name)
    if value is None:
        body = request.get_json(silent=True)
        if isinstance(body, dict):
            value = body.get(name)
    if value is not None and not isinstance(value, str):
        return None
    return value


def _validate_keyword(name: str) -> Tuple[Optional[str], Optional[ApiResponse]]:
    value = (_param(name) or "").strip()
    if len(value) < MIN_KEYWORD_LENGTH:
        return None, (
            jsonify({"error": f"{name} must be at least {MIN_KEYWORD_LENGTH} characters"}),
            400,
        )
    return value, None


def _int_param(name: str, default: int) -> Optional[int]:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return None


def _log_request(endpoint: str, data: Dict[str, Any]) -> None:
    log_search_event("search_request", {
        "endpoint": endpoint,
        **data,
        "timings": get_timings(),
    }, logger_name="web.api")


# ---------- PRODUCT NAME SEARCH ----------


@api.route("/search", methods=["POST"])
def search() -> ApiResponse:
    """Exact product-name search with did-you-mean suggestions.

    Request: ``?query=`` or JSON ``{"query": "..."}``

    Response JSON:
        {"matched": bool, "product": {...} | null, "suggestions": [...], "message": "..."}
    """
    query, error = _validate_keyword("query")
    if error:
        return error

    reset_timings()
    with timer("product_search"):
        result = get_services().search.search(query)

    _log_request("search", {"query": query, "matched": result.matched})
    return jsonify(result.to_dict())


@api.route("/search/product", methods=["GET"])
def search_product() -> ApiResponse:
    """Look up a product by its exact name (used when a suggestion is picked)."""
    name = (request.args.get("name") or "").strip()
    if not name:
        return jsonify({"error": "name is required"}), 400

    product = get_services().search.search_by_product_name(name)
    if product is None:
        return jsonify({"error": f"No product named '{name}'"}), 404
    return jsonify(product.to_dict())


@api.route("/search/autocomplete", methods=["GET"])
def search_autocomplete() -> Response:
    products = get_services().search.autocomplete(request.args.get("prefix", ""))
    return jsonify({"suggestions": [p.to_dict() for p in products]})


@api.route("/search/frequencies", methods=["GET"])
def search_frequencies() -> ApiResponse:
    limit = _int_param("limit", TOP_SEARCHES_DEFAULT)
    if limit is None or limit < 0:
        return jsonify({"error": "limit must be a non-negative integer"}), 400

    rows = get_services().search.top_searches(limit)
    return jsonify({"frequencies": [row.to_dict() for row in rows]})


@api.route("/search/reload", methods=["POST"])
def search_reload() -> Response:
    """Take a fresh product snapshot for every engine."""
    count = get_services().reload_all()
    logger.info(f"Reloaded {count} products")
    return jsonify({"products": count, "message": f"Reloaded {count} products"})


# ---------- KEYWORD ENGINES ----------


def _keyword_search(engine: KeywordEngine, endpoint: str) -> ApiResponse:
    keyword, error = _validate_keyword("keyword")
    if error:
        return error

    reset_timings()
    cancel = CancellationToken(timeout=SEARCH_DEADLINE_SECONDS)
    with timer(endpoint):
        result = engine.search(keyword, cancel=cancel)

    _log_request(endpoint, {
        "keyword": keyword,
        "success": result.success,
        "partial": result.partial,
    })
    return jsonify(result.to_dict())


def _keyword_health(engine: KeywordEngine) -> Response:
    return jsonify({
        "status": "ok",
        "engine": engine.name,
        "products": engine.product_count,
        "vocabulary": engine.vocabulary_size,
        "cachedPages": len(engine.cache),
    })


@api.route("/pageranking/search", methods=["POST"])
def pageranking_search() -> ApiResponse:
    """Top 10 product pages for ``keyword`` by whole-word occurrence count."""
    return _keyword_search(get_services().ranking, "page_ranking")


@api.route("/pageranking/autocomplete", methods=["GET"])
def pageranking_autocomplete() -> Response:
    words = get_services().ranking.autocomplete(request.args.get("prefix", ""))
    return jsonify({"suggestions": words})


@api.route("/pageranking/health", methods=["GET"])
def pageranking_health() -> Response:
    return _keyword_health(get_services().ranking)


@api.route("/frequencycount/search", methods=["POST"])
def frequencycount_search() -> ApiResponse:
    """Occurrence totals for ``keyword`` across all product pages."""
    return _keyword_search(get_services().frequency, "frequency_count")


@api.route("/frequencycount/autocomplete", methods=["GET"])
def frequencycount_autocomplete() -> Response:
    words = get_services().frequency.autocomplete(request.args.get("prefix", ""))
    return jsonify({"suggestions": words})


@api.route("/frequencycount/health", methods=["GET"])
def frequencycount_health() -> Response:
    return _keyword_health(get_services().frequency)


# ---------- PRODUCT LISTINGS ----------


@api.route("/products", methods=["GET"])
def list_products() -> ApiResponse:
    """All products, optionally filtered by ``?brand=`` (enum name, any case)."""
    crawl = get_services().crawl
    brand_param = request.args.get("brand")
    if brand_param:
        brand = parse_brand(brand_param)
        if brand is None:
            return jsonify({"error": f"Unknown brand: {brand_param}"}), 400
        products = crawl.products_by_brand(brand)
    else:
        products = crawl.products()
    return jsonify({"products": [p.to_dict() for p in products]})


@api.route("/products/latest", methods=["GET"])
def latest_products() -> ApiResponse:
    limit = _int_param("limit", LATEST_PRODUCTS_DEFAULT)
    if limit is None or limit < 0:
        return jsonify({"error": "limit must be a non-negative integer"}), 400
    products = get_services().crawl.latest(limit)
    return jsonify({"products": [p.to_dict() for p in products]})


@api.route("/products/crawl/<brand_name>", methods=["POST"])
def crawl_products(brand_name: str) -> ApiResponse:
    """Re-crawl one brand, then refresh every engine's snapshot."""
    brand = parse_brand(brand_name)
    if brand is None:
        return jsonify({"error": f"Unknown brand: {brand_name}"}), 400

    services = get_services()
    try:
        crawled = services.crawl.crawl_brand(brand)
    except UnknownBrandError:
        return jsonify({"error": f"No crawler registered for {brand.display_name}"}), 404

    services.reload_all()
    return jsonify({
        "brand": brand.name,
        "crawled": len(crawled),
        "products": [p.to_dict() for p in crawled],
    })


@api.errorhandler(500)
def internal_error(e: Exception) -> ApiResponse:
    logger.error(f"Unhandled API error: {e}")
    return jsonify({"error": "Internal server error"}), 500
