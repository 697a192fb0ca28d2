"""
Unit Tests for API Routes

Tests FastAPI routes with TestClient. The client is used as a context
manager so the lifespan wiring (cache, index, service) runs.
"""

import pytest
from fastapi.testclient import TestClient

from content_cache.application.app import create_app
from content_cache.infrastructure.store.memory_store import InMemoryContentStore
from tests.test_fixtures import ContentTestFactory

BASE = "/api/v1"


@pytest.fixture
def client(test_settings, content_store):
    with TestClient(create_app(settings=test_settings, store=content_store)) as test_client:
        yield test_client


@pytest.fixture
def failing_client(test_settings, failing_store):
    with TestClient(create_app(settings=test_settings, store=failing_store)) as test_client:
        yield test_client


@pytest.mark.unit
class TestContentRoutes:
    """Test suite for content routes."""

    def test_industries(self, client):
        response = client.get(f"{BASE}/content/industries")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["count"] == 2
        assert {item["id"] for item in body["data"]} == {1, 2}

    def test_industries_served_from_cache(self, client, content_store):
        client.get(f"{BASE}/content/industries")
        client.get(f"{BASE}/content/industries")

        assert content_store.query_count == 2  # index load + one industries query

    def test_levels_with_language(self, client):
        response = client.get(f"{BASE}/content/levels", params={"industry_id": 1, "language": "french"})

        assert response.status_code == 200
        body = response.json()
        assert body["filters"] == {"language": "french", "industry_id": 1}
        assert [level["available_terms"] for level in body["data"]] == [2, 1]

    def test_flashcards(self, client):
        response = client.get(
            f"{BASE}/content/flashcards", params={"level_id": 2, "language": "french"}
        )

        assert response.status_code == 200
        assert response.json()["data"][0]["term"] == {"english": "term d", "french": "terme d"}

    def test_single_flashcard(self, client):
        response = client.get(f"{BASE}/content/flashcards/a")

        assert response.status_code == 200
        assert response.json()["data"]["id"] == "a"

    def test_random_is_not_read_as_an_id(self, client):
        response = client.get(f"{BASE}/content/flashcards/random", params={"level_id": 2})

        assert response.status_code == 200
        assert response.json()["data"]["id"] == "d"

    def test_unknown_flashcard_is_404_envelope(self, client):
        response = client.get(f"{BASE}/content/flashcards/missing")

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Flashcard not found"}

    def test_random_with_nothing_eligible_is_404(self, client):
        response = client.get(f"{BASE}/content/flashcards/random", params={"industry_id": 99})

        assert response.status_code == 404
        assert response.json()["error"] == "No flashcards found"

    def test_unsupported_language_is_422(self, client):
        response = client.get(f"{BASE}/content/flashcards", params={"language": "klingon"})

        assert response.status_code == 422

    def test_invalid_id_filter_is_422(self, client):
        response = client.get(f"{BASE}/content/flashcards", params={"level_id": 0})

        assert response.status_code == 422

    def test_store_failure_is_500_envelope(self, failing_client):
        response = failing_client.get(f"{BASE}/content/industries")

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Database unreachable"}

    def test_no_levels_is_404(self, test_settings):
        with TestClient(create_app(settings=test_settings, store=InMemoryContentStore())) as client:
            response = client.get(f"{BASE}/content/levels")

        assert response.status_code == 404
        assert response.json()["error"] == "No levels found"

    def test_request_id_echoed(self, client):
        response = client.get(f"{BASE}/content/industries", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"


@pytest.mark.unit
class TestAdminRoutes:
    """Test suite for admin routes."""

    def test_stats_use_camel_case_hit_rate(self, client):
        client.get(f"{BASE}/content/industries")
        client.get(f"{BASE}/content/industries")

        response = client.get(f"{BASE}/admin/cache/stats")

        assert response.status_code == 200
        assert response.json()["stats"] == {"keys": 1, "hits": 1, "misses": 1, "hitRate": 0.5}

    def test_clear_cache(self, client, content_store):
        client.get(f"{BASE}/content/industries")

        response = client.delete(f"{BASE}/admin/cache")

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Cache cleared successfully"}

        stats = client.get(f"{BASE}/admin/cache/stats").json()["stats"]
        assert stats["keys"] == 0
        assert stats["misses"] == 1

        queries = content_store.query_count
        client.get(f"{BASE}/content/industries")
        assert content_store.query_count == queries + 1

    def test_reset_stats(self, client):
        client.get(f"{BASE}/content/industries")

        response = client.post(f"{BASE}/admin/cache/stats/reset")

        assert response.status_code == 200
        stats = client.get(f"{BASE}/admin/cache/stats").json()["stats"]
        assert stats == {"keys": 1, "hits": 0, "misses": 0, "hitRate": 0.0}

    def test_shared_invalidation_without_shared_cache(self, client):
        response = client.delete(f"{BASE}/admin/cache/shared", params={"pattern": "cache:*"})

        assert response.status_code == 200
        assert response.json() == {"success": True, "pattern": "cache:*", "deleted": 0}

    def test_shared_invalidation_requires_pattern(self, client):
        assert client.delete(f"{BASE}/admin/cache/shared").status_code == 422

    def test_shared_invalidation(self, test_settings, content_store, shared_cache, fake_redis):
        fake_redis.data.update({"cache:GET:a": "1", "cache:GET:b": "2", "other": "3"})
        app = create_app(settings=test_settings, store=content_store, shared_cache=shared_cache)

        with TestClient(app) as client:
            response = client.delete(f"{BASE}/admin/cache/shared", params={"pattern": "cache:*"})

        assert response.json()["deleted"] == 2
        assert list(fake_redis.data) == ["other"]

    def test_index_rebuild(self, client, content_store):
        content_store.add_flashcard(ContentTestFactory.flashcard("e", level_id=2, industry_id=2))

        response = client.post(f"{BASE}/admin/index/rebuild")

        assert response.status_code == 200
        assert response.json() == {"success": True, "size": 5}

    def test_index_rebuild_with_failing_store(self, failing_client):
        response = failing_client.post(f"{BASE}/admin/index/rebuild")

        assert response.status_code == 200
        assert response.json()["size"] == 0

    def test_metrics(self, client):
        client.get(f"{BASE}/content/industries")

        response = client.get(f"{BASE}/admin/metrics")

        assert response.status_code == 200
        assert "content_cache_hits_total" in response.text


@pytest.mark.unit
class TestHealthRoutes:
    """Test suite for health check routes."""

    def test_health_without_shared_cache(self, client):
        response = client.get(f"{BASE}/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["components"]["shared_cache"] == {"status": "disabled"}
        assert body["components"]["random_index"]["size"] == 4

    def test_health_degraded_when_redis_down(self, test_settings, content_store, broken_shared_cache):
        app = create_app(settings=test_settings, store=content_store, shared_cache=broken_shared_cache)

        with TestClient(app) as client:
            response = client.get(f"{BASE}/health")

        assert response.status_code == 200
        assert response.json()["status"] == "degraded"
        assert response.json()["components"]["shared_cache"]["status"] == "unavailable"

    def test_liveness(self, client):
        assert client.get(f"{BASE}/health/live").json()["status"] == "alive"

    def test_readiness(self, client):
        response = client.get(f"{BASE}/health/ready")

        assert response.status_code == 200
        assert response.json()["status"] == "ready"

    def test_readiness_before_startup(self, test_settings):
        # No context manager: lifespan never runs
        client = TestClient(create_app(settings=test_settings))

        assert client.get(f"{BASE}/health/ready").status_code == 503

    def test_root(self, client):
        body = client.get("/").json()

        assert body["health"] == f"{BASE}/health"
