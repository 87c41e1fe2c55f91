"""
Integration tests for health checks, error bodies, middlewares and
rate limiting.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine

from app.api.deps import get_complaint_service
from app.db.session import Database
from app.main import create_app
from tests.conftest import TEST_PASSWORD


class TestHealth:

    @pytest.mark.parametrize("path", ["/", "/api/health"])
    def test_health(self, client, settings, path):
        response = client.get(path)

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "OK"
        assert body["version"] == settings.PROJECT_VERSION
        assert body["message"]


class TestMiddlewares:

    def test_request_id_generated_and_echoed(self, client):
        response = client.get("/api/health")
        assert response.headers["X-Request-ID"]
        assert "X-Process-Time" in response.headers
        assert response.headers["X-Content-Type-Options"] == "nosniff"

    def test_upstream_request_id_is_kept(self, client):
        response = client.get("/api/complaints", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"
        assert response.json()["request_id"] == "req-123"

    def test_error_body_shape(self, client):
        error = client.get("/api/complaints").json()["error"]
        assert set(error) == {"code", "message", "details", "timestamp"}

    def test_validation_errors_are_per_field(self, client, student, auth_headers):
        response = client.post("/api/complaints", json={"title": "Hi"}, headers=auth_headers(student))

        assert response.status_code == 400
        field_errors = response.json()["error"]["details"]["field_errors"]
        assert {"title", "description", "domainId"} <= set(field_errors)


class TestUnexpectedErrors:

    def _boom(self):
        raise RuntimeError("kaboom")

    def test_internal_error(self, app):
        app.dependency_overrides[get_complaint_service] = self._boom
        client = TestClient(app, raise_server_exceptions=False)

        response = client.get("/api/complaints/public")

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "INTERNAL_ERROR"
        assert response.json()["error"]["message"] == "kaboom"

    def test_message_redacted_in_production(self, settings, database):
        production = settings.model_copy(update={"ENVIRONMENT": "production"})
        app = create_app(settings=production, database=database)
        app.dependency_overrides[get_complaint_service] = self._boom
        client = TestClient(app, raise_server_exceptions=False)

        response = client.get("/api/complaints/public")

        assert response.status_code == 500
        assert response.json()["error"]["message"] == "Internal server error"

    def test_database_unreachable(self, settings):
        engine = create_engine("sqlite:////nonexistent-directory/grievances.db")
        client = TestClient(create_app(settings=settings, database=Database(engine)))

        response = client.get("/api/users/domains")

        assert response.status_code == 503
        assert response.json()["error"]["code"] == "CONNECTION_ERROR"


class TestRateLimiting:

    def test_auth_routes_limited(self, settings, database, student):
        strict = settings.model_copy(update={"RATE_LIMIT_AUTH": 2})
        client = TestClient(create_app(settings=strict, database=database))
        credentials = {"email": student.email, "password": TEST_PASSWORD}

        assert client.post("/api/auth/login", json=credentials).status_code == 200
        assert client.post("/api/auth/login", json={**credentials, "password": "bad"}).status_code == 401

        response = client.post("/api/auth/login", json=credentials)

        assert response.status_code == 429
        assert response.json()["error"]["code"] == "RATE_LIMIT_EXCEEDED"
        assert int(response.headers["Retry-After"]) > 0

    def test_global_limit(self, settings, database):
        tight = settings.model_copy(update={"RATE_LIMIT_DEFAULT": 2})
        client = TestClient(create_app(settings=tight, database=database))

        assert client.get("/api/users/domains").headers["X-RateLimit-Remaining"] == "1"
        client.get("/api/users/domains")
        response = client.get("/api/users/domains")

        assert response.status_code == 429
        assert "Retry-After" in response.headers
        # Health checks are never limited
        assert client.get("/api/health").status_code == 200

    def test_disabled(self, settings, database):
        relaxed = settings.model_copy(update={"RATE_LIMIT_ENABLED": False, "RATE_LIMIT_DEFAULT": 1})
        client = TestClient(create_app(settings=relaxed, database=database))

        assert all(client.get("/api/users/domains").status_code == 200 for _ in range(3))
