"""Beast tests for production hardening.

Tests cover: health checks, CORS, settings from the environment, error
response format, demo data seeding and the application lifespan.
"""

from __future__ import annotations

import signal

import pytest
from fastapi.testclient import TestClient

from materiality.app import create_app
from materiality.config import Settings, get_settings
from materiality.dependencies import get_narrative_client
from materiality.errors import ConfigurationError, DomainError, NotFoundError
from materiality.store import data_store


# ─── Test 1: Health check endpoints ──────────────────────────────────────────

class TestHealthChecks:
    """Tests for health check endpoints."""

    def test_basic_health_check(self, client):
        """GET /health should return healthy status."""
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["app_name"] == "Materiality Workbench"
        assert data["version"] == "1.0.0"
        assert {s["service"] for s in data["services"]} == {"app", "store"}

    def test_store_details_report_counts(self, client):
        client.post("/api/sessions")
        data = client.get("/health").json()
        store = next(s for s in data["services"] if s["service"] == "store")
        assert "1 open session(s)" in store["details"]

    def test_readiness_degraded_without_narrative(self, client):
        """An unconfigured narrative service degrades readiness."""
        data = client.get("/health/ready").json()
        assert data["status"] == "degraded"
        narrative = next(s for s in data["services"] if s["service"] == "narrative")
        assert narrative["status"] == "degraded"

    def test_readiness_healthy_with_narrative(self):
        settings = Settings(
            log_format="console",
            rate_limit_default="1000/minute",
            narrative_service_url="http://narrative.test/suggest",
        )
        client = TestClient(create_app(settings))
        assert client.get("/health/ready").json()["status"] == "healthy"

    def test_liveness_check(self, client):
        """GET /health/live should return alive status."""
        response = client.get("/health/live")
        assert response.status_code == 200
        assert response.json() == {"status": "alive"}

    def test_health_service_latency_reported(self, client):
        data = client.get("/health").json()
        for service in data["services"]:
            assert service["latency_ms"] is not None
            assert service["latency_ms"] >= 0


# ─── Test 2: CORS configuration ──────────────────────────────────────────────

class TestCORSConfiguration:
    """Tests for CORS middleware configuration."""

    def test_cors_allows_configured_origin(self, client):
        response = client.options(
            "/api/catalog/industries",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "PATCH",
            },
        )
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"
        assert "PATCH" in response.headers["access-control-allow-methods"]

    def test_cors_rejects_unconfigured_origin(self, client):
        response = client.options(
            "/health",
            headers={
                "Origin": "http://evil.example.com",
                "Access-Control-Request-Method": "GET",
            },
        )
        allow_origin = response.headers.get("access-control-allow-origin", "")
        assert "evil.example.com" not in allow_origin

    def test_allowed_origins_list_parsing(self):
        settings = Settings(allowed_origins="http://a.com, http://b.com,, http://c.com")
        assert settings.allowed_origins_list == ["http://a.com", "http://b.com", "http://c.com"]


# ─── Test 3: Settings ────────────────────────────────────────────────────────

class TestSettings:
    """Tests for environment-driven configuration."""

    def test_defaults(self):
        settings = Settings()
        assert settings.api_prefix == "/api"
        assert settings.narrative_service_url == ""
        assert settings.narrative_timeout_seconds == 10.0
        assert settings.seed_demo_data is False

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("MATERIALITY_NARRATIVE_SERVICE_URL", "http://proxy.internal/gen")
        monkeypatch.setenv("MATERIALITY_NARRATIVE_TIMEOUT_SECONDS", "3.5")
        monkeypatch.setenv("MATERIALITY_ENVIRONMENT", "staging")
        settings = get_settings()
        assert settings.narrative_service_url == "http://proxy.internal/gen"
        assert settings.narrative_timeout_seconds == 3.5
        assert settings.environment == "staging"

    def test_invalid_environment_rejected(self):
        with pytest.raises(ValueError):
            Settings(environment="qa")

    def test_invalid_log_format_rejected(self):
        with pytest.raises(ValueError):
            Settings(log_format="xml")

    @pytest.mark.parametrize("timeout", [0, -1, 500])
    def test_timeout_bounds(self, timeout):
        with pytest.raises(ValueError):
            Settings(narrative_timeout_seconds=timeout)

    def test_narrative_client_built_from_settings(self):
        settings = Settings(
            narrative_service_url="http://proxy.internal/gen/",
            narrative_api_key="k",
            narrative_timeout_seconds=2,
        )
        client = get_narrative_client(settings)
        assert client.service_url == "http://proxy.internal/gen"
        assert client.api_key == "k"
        assert client.timeout == 2

    def test_custom_api_prefix(self):
        settings = Settings(api_prefix="/v1", log_format="console", rate_limit_default="1000/minute")
        client = TestClient(create_app(settings))
        assert client.get("/v1/catalog/industries").status_code == 200
        assert client.get("/api/catalog/industries").status_code == 404


# ─── Test 4: Error responses ─────────────────────────────────────────────────

class TestErrorResponses:
    """Domain errors render as a uniform JSON body."""

    def test_not_found_body(self, client):
        response = client.get("/api/assessments/missing")
        assert response.status_code == 404
        error = response.json()["error"]
        assert error["code"] == "NOT_FOUND"
        assert "missing" in error["message"]
        assert error["details"] is None

    def test_error_hierarchy(self):
        assert issubclass(NotFoundError, DomainError)
        err = ConfigurationError("bad", details={"violations": ["x"]})
        assert err.status_code == 422
        assert err.details == {"violations": ["x"]}
        assert str(err) == "bad"


# ─── Test 5: Lifespan and demo data ──────────────────────────────────────────

class TestLifespan:
    """Tests for startup behaviour."""

    def test_demo_data_seeded_on_startup(self):
        settings = Settings(seed_demo_data=True, log_format="console", rate_limit_default="1000/minute")
        with TestClient(create_app(settings)) as client:
            items = client.get("/api/assessments").json()
        assert [i["id"] for i in items] == ["mock-1"]
        assert items[0]["status"] == "Finalized"
        assert items[0]["primary_industry"] == "Software & IT Services"

    def test_no_seed_by_default(self, settings):
        with TestClient(create_app(settings)) as client:
            assert client.get("/api/assessments").json() == []

    def test_seeding_is_not_repeated(self):
        settings = Settings(seed_demo_data=True, log_format="console", rate_limit_default="1000/minute")
        with TestClient(create_app(settings)):
            pass
        data_store.upsert(data_store.get("mock-1").model_copy(update={"version": 3}))
        with TestClient(create_app(settings)):
            pass
        assert data_store.get("mock-1").version == 3

    def test_lifespan_leaves_signal_handlers_alone(self, settings):
        before = signal.getsignal(signal.SIGTERM)
        with TestClient(create_app(settings)) as client:
            client.post("/api/sessions")
        assert signal.getsignal(signal.SIGTERM) is before
        assert len(data_store.sessions) == 1

    def test_seeded_assessment_opens_read_only(self):
        settings = Settings(seed_demo_data=True, log_format="console", rate_limit_default="1000/minute")
        with TestClient(create_app(settings)) as client:
            opened = client.post("/api/sessions", json={"assessment_id": "mock-1"}).json()
        assert opened["read_only"] is True
        assert len(opened["topics"]) == 3
