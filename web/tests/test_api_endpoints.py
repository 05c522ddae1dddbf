"""Test API endpoints."""

from catalog.models import Brand, Product


class TestIndex:
    """Test GET / service description."""

    def test_lists_api_endpoints(self, client):
        """Test that the index advertises the API routes."""
        response = client.get("/")
        assert response.status_code == 200
        assert "/api/search" in response.json["endpoints"]
        assert "/api/pageranking/search" in response.json["endpoints"]


class TestSearchEndpoint:
    """Test POST /api/search and its companions."""

    def test_exact_match(self, client, services):
        """Test that an exact name returns the product and counts the search."""
        response = client.post("/api/search", query_string={"query": "Sonos Arc"})

        assert response.status_code == 200
        data = response.json
        assert data["matched"] is True
        assert data["product"]["brand"] == "SONOS"
        assert services.ledger.get("Sonos Arc") == 1

    def test_query_in_json_body(self, client):
        """Test that the query may also come in a JSON body."""
        response = client.post("/api/search", json={"query": "sonos arc"})
        assert response.json["matched"] is True

    def test_did_you_mean(self, client):
        """Test suggestions for a misspelled name."""
        response = client.post("/api/search", query_string={"query": "Sonos Ark"})

        data = response.json
        assert data["matched"] is False
        assert data["suggestions"][0] == "Sonos Arc"
        assert data["message"] == "No exact match. Did you mean:"

    def test_short_query_rejected(self, client, services):
        """Test that queries under three characters never reach the engine."""
        for query in ["", "ab", "  ab  "]:
            response = client.post("/api/search", query_string={"query": query})
            assert response.status_code == 400
            assert "error" in response.json
        assert len(services.ledger) == 0

    def test_missing_query_rejected(self, client):
        """Test that a missing query is a client error."""
        assert client.post("/api/search").status_code == 400

    def test_non_string_query_rejected(self, client):
        """Test that non-string JSON values are rejected."""
        response = client.post("/api/search", json={"query": 12345})
        assert response.status_code == 400

    def test_product_lookup(self, client, services):
        """Test picking a suggestion by exact name."""
        response = client.get("/api/search/product", query_string={"name": "bose smart soundbar 900"})

        assert response.status_code == 200
        assert response.json["id"] == "2"
        assert services.ledger.get("Bose Smart Soundbar 900") == 1

    def test_product_lookup_not_found(self, client):
        """Test 404 for unknown names."""
        assert client.get("/api/search/product", query_string={"name": "Yamaha YAS"}).status_code == 404
        assert client.get("/api/search/product").status_code == 400

    def test_autocomplete(self, client):
        """Test name autocomplete and the short-prefix rule."""
        names = [p["model_name"] for p in client.get("/api/search/autocomplete?prefix=bose").json["suggestions"]]
        assert names == ["Bose Smart Soundbar 600", "Bose Smart Soundbar 900"]

        response = client.get("/api/search/autocomplete?prefix=bo")
        assert response.status_code == 200
        assert response.json["suggestions"] == []

    def test_frequencies(self, client):
        """Test top searches after a few lookups."""
        client.post("/api/search", query_string={"query": "Sonos Arc"})
        client.post("/api/search", query_string={"query": "Sonos Arc"})
        client.post("/api/search", query_string={"query": "Bose Smart Soundbar 600"})

        data = client.get("/api/search/frequencies?limit=1").json

        assert data["frequencies"] == [{"searchTerm": "Sonos Arc", "count": 2}]

    def test_frequencies_bad_limit(self, client):
        """Test that a non-numeric limit is rejected."""
        assert client.get("/api/search/frequencies?limit=ten").status_code == 400

    def test_reload(self, client, services, sample_products):
        """Test that reload picks up products written after startup."""
        extra = Product(id="9", brand=Brand.JBL, source_site="test", model_name="JBL Bar 1000")
        services.repository.save_all(sample_products + [extra])

        response = client.post("/api/search/reload")

        assert response.json["products"] == 5
        assert client.post("/api/search", query_string={"query": "JBL Bar 1000"}).json["matched"] is True


class TestPageRankingEndpoint:
    """Test /api/pageranking routes."""

    def test_ranking(self, client):
        """Test that pages come back ordered by keyword count."""
        response = client.post("/api/pageranking/search?keyword=atmos")

        assert response.status_code == 200
        data = response.json
        assert data["success"] is True
        assert [u["url"] for u in data["topUrls"]] == [
            "https://bose.test/900",
            "https://bose.test/600",
            "https://sonos.test/arc",
        ]
        assert data["partial"] is False

    def test_short_keyword_rejected(self, client, page_fetches):
        """Test that short keywords are rejected before any page is fetched."""
        response = client.post("/api/pageranking/search?keyword=at")

        assert response.status_code == 400
        assert page_fetches == []

    def test_no_results_suggestions(self, client):
        """Test did-you-mean words for a keyword missing from every page."""
        data = client.post("/api/pageranking/search?keyword=atmoss").json

        assert data["success"] is False
        assert data["suggestions"][0] == "atmos"

    def test_autocomplete_after_search(self, client):
        """Test page-word autocomplete once a scan has completed."""
        client.post("/api/pageranking/search?keyword=dolby")

        data = client.get("/api/pageranking/autocomplete?prefix=atm").json

        assert data["suggestions"] == ["atmos"]

    def test_health(self, client):
        """Test engine health summary."""
        data = client.get("/api/pageranking/health").json
        assert data["status"] == "ok"
        assert data["engine"] == "page_ranking"
        assert data["products"] == 4


class TestFrequencyCountEndpoint:
    """Test /api/frequencycount routes."""

    def test_counts(self, client):
        """Test occurrence statistics."""
        data = client.post("/api/frequencycount/search", json={"keyword": "Atmos"}).json

        assert data["success"] is True
        assert data["stats"]["totalOccurrences"] == 7
        assert data["stats"]["totalUrlsSearched"] == 3
        assert data["stats"]["foundOnUrlCount"] == 3

    def test_short_keyword_rejected(self, client):
        """Test that short keywords are a client error."""
        assert client.post("/api/frequencycount/search", query_string={"keyword": "  "}).status_code == 400

    def test_pages_shared_with_ranking(self, client, page_fetches):
        """Test that both keyword engines read through one cache."""
        client.post("/api/pageranking/search?keyword=atmos")
        client.post("/api/frequencycount/search?keyword=dolby")

        assert len(page_fetches) == 3

    def test_autocomplete_short_prefix(self, client):
        """Test that short prefixes return an empty list."""
        data = client.get("/api/frequencycount/autocomplete?prefix=a").json
        assert data["suggestions"] == []

    def test_health(self, client):
        """Test engine health summary."""
        data = client.get("/api/frequencycount/health").json
        assert data["engine"] == "frequency_count"


class TestProductsEndpoint:
    """Test /api/products listing routes."""

    def test_all_products(self, client):
        """Test listing every product."""
        data = client.get("/api/products").json
        assert len(data["products"]) == 4

    def test_filter_by_brand(self, client):
        """Test brand filtering by enum name in any case."""
        data = client.get("/api/products?brand=bose").json
        assert [p["id"] for p in data["products"]] == ["1", "2"]

    def test_unknown_brand(self, client):
        """Test that unknown brands are a client error."""
        assert client.get("/api/products?brand=yamaha").status_code == 400

    def test_latest(self, client):
        """Test the latest-products limit."""
        data = client.get("/api/products/latest?limit=2").json
        assert len(data["products"]) == 2

    def test_crawl_without_crawler(self, client):
        """Test that crawling a brand with no registered crawler is a 404."""
        assert client.post("/api/products/crawl/jbl").status_code == 404
        assert client.post("/api/products/crawl/yamaha").status_code == 400

    def test_crawl_refreshes_engines(self, client, services):
        """Test that a crawl persists products and reloads the search engines."""
        crawled = [Product(id="20", brand=Brand.JBL, source_site="jbl", model_name="JBL Bar 800")]

        class JblCrawler:
            def identify(self):
                return Brand.JBL

            def crawl(self):
                return crawled

        services.crawl.register(JblCrawler())

        response = client.post("/api/products/crawl/JBL")

        assert response.status_code == 200
        assert response.json["crawled"] == 1
        assert client.post("/api/search", query_string={"query": "JBL Bar 800"}).json["matched"] is True
