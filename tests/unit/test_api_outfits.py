"""
Tests for the outfit and health API endpoints.

The outfit engine dependency is bound to the in-memory Men catalog
(see conftest.client).
"""

import pytest

COMPOSE = "/api/outfits/compose"


class TestHealthEndpoints:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "outfit-api"}

    def test_live(self, client):
        response = client.get("/live")
        assert response.status_code == 200
        assert response.json()["status"] == "alive"

    def test_request_id_header(self, client):
        response = client.get("/health", headers={"X-Request-ID": "abc123"})
        assert response.headers["X-Request-ID"] == "abc123"

    def test_request_id_generated(self, client):
        response = client.get("/health")
        assert response.headers.get("X-Request-ID")


class DownCatalog:
    def get_item(self, product_id):
        raise ConnectionError("connection refused")

    def query(self, flt):
        raise ConnectionError("connection refused")

    def sample(self, flt, size, rng):
        raise ConnectionError("connection refused")


@pytest.fixture
def health_engine(app):
    """Setter binding the engine used by the catalog health checks."""
    from api.routes.health import get_health_engine

    def _bind(engine):
        app.dependency_overrides[get_health_engine] = lambda: engine
    return _bind


class TestCatalogHealth:
    def test_detailed_reports_connected_catalog(self, client, health_engine, outfit_engine):
        health_engine(outfit_engine)
        data = client.get("/health/detailed").json()
        assert data["status"] == "healthy"
        catalog = data["checks"]["catalog"]
        assert catalog["status"] == "connected"
        assert catalog["error"] is None
        assert catalog["table"]
        assert catalog["latency_ms"] >= 0

    def test_detailed_reports_failing_catalog(self, client, health_engine):
        from services.outfit_engine import OutfitEngine

        health_engine(OutfitEngine(DownCatalog()))
        data = client.get("/health/detailed").json()
        assert data["status"] == "degraded"
        assert data["checks"]["catalog"]["status"] == "error"
        assert "connection refused" in data["checks"]["catalog"]["error"]

    def test_detailed_without_catalog(self, client, health_engine):
        health_engine(None)
        data = client.get("/health/detailed").json()
        assert data["status"] == "degraded"
        assert data["checks"]["catalog"]["status"] == "not_configured"

    def test_ready(self, client, health_engine, outfit_engine):
        health_engine(outfit_engine)
        response = client.get("/ready")
        assert response.status_code == 200
        assert response.json() == {"status": "ready"}

    def test_not_ready_on_empty_catalog(self, client, health_engine):
        from outfits.catalog import InMemoryCatalog
        from services.outfit_engine import OutfitEngine

        health_engine(OutfitEngine(InMemoryCatalog([])))
        response = client.get("/ready")
        assert response.status_code == 503
        assert response.json() == {"status": "not_ready", "reason": "catalog_empty"}

    def test_not_ready_without_catalog(self, client, health_engine):
        health_engine(None)
        response = client.get("/ready")
        assert response.status_code == 503
        assert response.json()["reason"] == "catalog_not_configured"


class TestComposeEndpoint:
    def test_ranked_outfit(self, client):
        response = client.post(COMPOSE, json={"base_product_id": "base-shirt"})
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "ok"
        assert data["policy"] == "ranked"
        assert data["base"]["product_id"] == "base-shirt"
        assert data["product_ids"] == ["trousers-olive", "sneakers-white", "watch-silver"]

    def test_item_structure(self, client):
        data = client.post(COMPOSE, json={"base_product_id": "base-shirt"}).json()
        item = data["items"][0]
        for key in ("role", "suggested_category", "color_hint", "color_hex_hint", "reason", "product"):
            assert key in item
        assert item["role"] == "Bottom"
        assert item["product"]["price"] == 1799.0
        assert item["product"]["color"] == "Olive"

    def test_vibe(self, client):
        data = client.post(
            COMPOSE, json={"base_product_id": "base-shirt", "vibe": "office_casual"},
        ).json()
        assert data["product_ids"] == ["trousers-olive", "shoes-black", "watch-silver"]

    def test_sampled_with_excluded_ids(self, client):
        response = client.post(COMPOSE, json={
            "base_product_id": "base-shirt",
            "policy": "sampled",
            "excluded_ids": ["jeans-navy"],
        })
        assert response.status_code == 200
        data = response.json()
        assert data["policy"] == "sampled"
        assert data["title"] == "Style Studio Collection"
        assert "jeans-navy" not in data["product_ids"]
        assert "base-shirt" not in data["product_ids"]

    def test_blocked_base_is_not_an_error(self, client):
        response = client.post(COMPOSE, json={"base_product_id": "lipstick"})
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "blocked"
        assert data["items"] == []
        assert data["message"]

    def test_unknown_product(self, client):
        response = client.post(COMPOSE, json={"base_product_id": "nope"})
        assert response.status_code == 404

    def test_blank_product_id(self, client):
        response = client.post(COMPOSE, json={"base_product_id": "  "})
        assert response.status_code == 400

    @pytest.mark.parametrize("payload", [
        {},
        {"base_product_id": "base-shirt", "policy": "random"},
        {"base_product_id": "base-shirt", "excluded_ids": "jeans-navy"},
    ])
    def test_validation_errors(self, client, payload):
        assert client.post(COMPOSE, json=payload).status_code == 422

    def test_catalog_unavailable(self, app, client):
        from api.routes.outfits import get_engine
        from services.outfit_engine import OutfitEngine

        app.dependency_overrides[get_engine] = lambda: OutfitEngine(DownCatalog())
        response = client.post(COMPOSE, json={"base_product_id": "base-shirt"})
        assert response.status_code == 503
