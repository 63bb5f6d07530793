"""
Tests for the HTTP endpoints.
"""
import pytest
from fastapi.testclient import TestClient

from main import app
from slug_app.config import settings
from slug_app.dependencies import get_slug_generator
from slug_app.services.slug_generator import SlugGenerator
from slug_app.services.slug_strategies import SlugStrategy


def create(client: TestClient, original_url="https://google.com") -> str:
    response = client.post("/api/v1/urls/", json={"original_url": original_url})
    assert response.status_code == 201
    return response.json()["slug"]


class TestListEndpoint:

    def test_lists_urls_with_analytics(self, client: TestClient):
        slug = create(client)

        response = client.get("/api/v1/urls/")
        assert response.status_code == 200

        entry = response.json()["data"][0]
        assert entry["slug"] == slug
        assert entry["original_url"] == "https://google.com"
        assert entry["shortened_link"] == f"{settings.base_url}/{slug}"
        assert entry["visits"] == 0
        assert entry["last_visit_at"] is None

    def test_pagination_metadata_for_first_page(self, client: TestClient, sql_store):
        for i in range(21):
            create(client, f"https://example.com/{i}")

        response = client.get("/api/v1/urls/", params={"page": 1, "per_page": 10})
        body = response.json()

        assert len(body["data"]) == 10
        assert body["meta"] == {
            "current_page": 1,
            "total_pages": 3,
            "total_count": 21,
            "per_page": 10,
        }

    def test_default_per_page(self, client: TestClient):
        for i in range(21):
            create(client, f"https://example.com/{i}")

        response = client.get("/api/v1/urls/")

        assert len(response.json()["data"]) == settings.default_per_page

    def test_newest_first(self, client: TestClient):
        first = create(client, "https://example.com/first")
        second = create(client, "https://example.com/second")

        slugs = [entry["slug"] for entry in client.get("/api/v1/urls/").json()["data"]]

        assert slugs == [second, first]

    def test_page_far_past_the_end_is_empty(self, client: TestClient):
        create(client)
        create(client, "https://example.org")

        response = client.get("/api/v1/urls/", params={"page": 2**62, "per_page": 10})

        assert response.status_code == 200
        body = response.json()
        assert body["data"] == []
        assert body["meta"]["total_count"] == 2

    def test_large_per_page_is_honoured(self, client: TestClient, sql_store):
        for i in range(150):
            create(client, f"https://example.com/{i}")

        body = client.get("/api/v1/urls/", params={"page": 1, "per_page": 150}).json()

        assert len(body["data"]) == 150
        assert body["meta"]["per_page"] == 150
        assert body["meta"]["total_pages"] == 1


class TestShowEndpoint:

    def test_returns_url_if_found(self, client: TestClient):
        slug = create(client, "https://www.python.org")

        response = client.get(f"/api/v1/urls/{slug}")
        assert response.status_code == 200

        data = response.json()
        assert data["slug"] == slug
        assert data["original_url"] == "https://www.python.org"
        assert data["visits"] == 0
        assert data["last_visit_at"] is None
        assert data["shortened_link"]

    def test_returns_404_if_not_found(self, client: TestClient):
        response = client.get("/api/v1/urls/non-existent-slug")

        assert response.status_code == 404
        assert response.json()["error"] == "Not found"


class TestCreateEndpoint:

    def test_creates_a_record(self, client: TestClient, sql_store):
        slug = create(client)

        assert sql_store.count() == 1
        assert sql_store.find_by_slug(slug).original_url == "https://google.com"

    def test_missing_original_url(self, client: TestClient, sql_store):
        response = client.post("/api/v1/urls/", json={"original_url": ""})

        assert response.status_code == 422
        assert response.json() == {"errors": ["Original url is not valid"]}
        assert sql_store.count() == 0

    def test_absent_original_url(self, client: TestClient, sql_store):
        response = client.post("/api/v1/urls/", json={})

        assert response.status_code == 422
        assert response.json() == {"errors": ["Original url is not valid"]}
        assert sql_store.count() == 0

    def test_missing_body(self, client: TestClient, sql_store):
        response = client.post("/api/v1/urls/")

        assert response.status_code == 422
        assert response.json() == {"errors": ["Original url is not valid"]}
        assert sql_store.count() == 0

    @pytest.mark.parametrize("payload", [["https://x.com"], "https://google.com", 42])
    def test_body_that_is_not_an_object(self, client: TestClient, sql_store, payload):
        response = client.post("/api/v1/urls/", json=payload)

        assert response.status_code == 422
        assert response.json() == {"errors": ["Original url is not valid"]}
        assert sql_store.count() == 0

    def test_invalid_url_format(self, client: TestClient, sql_store):
        response = client.post("/api/v1/urls/", json={"original_url": "test"})

        assert response.status_code == 422
        assert response.json()["errors"] == ["Original url is not valid"]
        assert sql_store.count() == 0

    def test_exhausted_slug_space_is_internal_error(self, client: TestClient, sql_store):
        class Constant(SlugStrategy):
            def generate(self):
                return "sameslug"

        app.dependency_overrides[get_slug_generator] = lambda: SlugGenerator(Constant(), max_attempts=2)
        create(client, "https://example.com/1")

        response = client.post("/api/v1/urls/", json={"original_url": "https://example.com/2"})

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}
        assert sql_store.count() == 1


class TestDeleteEndpoint:

    def test_deletes_the_record(self, client: TestClient, sql_store):
        slug = create(client)
        create(client, "https://example.org")

        response = client.delete(f"/api/v1/urls/{slug}")

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert sql_store.count() == 1
        assert client.get(f"/api/v1/urls/{slug}").status_code == 404

    def test_returns_404_with_message(self, client: TestClient, sql_store):
        create(client)

        response = client.delete("/api/v1/urls/non-existent-slug")

        assert response.status_code == 404
        assert response.json()["error"] == "URL not found"
        assert sql_store.count() == 1


class TestRedirect:

    def test_redirects_and_counts_visit(self, client: TestClient):
        slug = create(client, "https://www.github.com/")

        response = client.get(f"/{slug}", follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == "https://www.github.com/"

        data = client.get(f"/api/v1/urls/{slug}").json()
        assert data["visits"] == 1
        assert data["last_visit_at"] is not None

    def test_redirect_nonexistent_slug(self, client: TestClient):
        response = client.get("/nonexistent", follow_redirects=False)

        assert response.status_code == 404
        assert response.json()["error"] == "Not found"

    def test_redirect_after_delete(self, client: TestClient):
        slug = create(client)
        client.delete(f"/api/v1/urls/{slug}")

        response = client.get(f"/{slug}", follow_redirects=False)

        assert response.status_code == 404


class TestServiceEndpoints:

    def test_root(self, client: TestClient):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["version"] == settings.app_version

    def test_health(self, client: TestClient):
        response = client.get("/health")
        assert response.json() == {"status": "healthy", "environment": settings.environment}
