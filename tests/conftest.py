"""Shared test fixtures for the Materiality Workbench test suite."""

from __future__ import annotations

import httpx
import pytest
from fastapi.testclient import TestClient

from materiality.app import create_app
from materiality.config import Settings
from materiality.dependencies import get_narrative_client
from materiality.schemas.configuration import default_configuration
from materiality.services.narrative_client import NarrativeClient
from materiality.services.registry import AssessmentRegistry
from materiality.services.wizard import WizardService
from materiality.store import data_store

NARRATIVE_URL = "http://narrative.test/suggest"


def _test_settings() -> Settings:
    """Return settings suitable for testing."""
    return Settings(
        environment="development",
        debug=True,
        log_format="console",
        rate_limit_default="1000/minute",
        allowed_origins="http://localhost:3000,http://localhost:5173",
    )


def narrative_transport(text: str = "Rising data center energy costs could compress margins.", status: int = 200):
    """MockTransport answering every narrative request the same way."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, json={"text": text} if status == 200 else {"error": "boom"})

    return httpx.MockTransport(handler)


@pytest.fixture
def settings():
    """Test settings."""
    return _test_settings()


@pytest.fixture
def app(settings):
    """Create a fresh FastAPI app for testing."""
    return create_app(settings)


@pytest.fixture
def client(app):
    """HTTP test client."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def reset_store():
    """Reset the global data store before each test."""
    data_store.reset()
    yield
    data_store.reset()


@pytest.fixture
def use_narrative(app):
    """Point the app's narrative client at a mock transport.

    Returns a function taking an httpx transport.
    """

    def _install(transport: httpx.AsyncBaseTransport) -> None:
        app.dependency_overrides[get_narrative_client] = lambda: NarrativeClient(
            NARRATIVE_URL, api_key="test-key", transport=transport
        )

    yield _install
    app.dependency_overrides.clear()


@pytest.fixture
def registry():
    """Registry over the global store."""
    return AssessmentRegistry(data_store)


@pytest.fixture
def wizard(registry):
    """Wizard service with a narrative client that always succeeds."""
    return WizardService(
        data_store,
        registry,
        NarrativeClient(NARRATIVE_URL, transport=narrative_transport()),
    )


@pytest.fixture
def config():
    """Default threshold configuration."""
    return default_configuration()


@pytest.fixture
def scoped_session(client):
    """A session via the API with TC-SI primary and CG-AA secondary."""
    resp = client.post("/api/sessions")
    session_id = resp.json()["id"]
    client.put(f"/api/sessions/{session_id}/scope", json={
        "assessment_name": "Acme FY2025",
        "reporting_year": "2025",
        "primary_industry_code": "TC-SI",
        "secondary_industry_codes": ["CG-AA"],
    })
    return session_id


def complete_material(client, session_id: str, topic_id: str, magnitude="High", likelihood="Medium") -> None:
    """Mark a topic material and fill every required field."""
    client.post(f"/api/sessions/{session_id}/topics/{topic_id}/materiality", json={"is_material": True})
    client.patch(f"/api/sessions/{session_id}/topics/{topic_id}", json={
        "risk_description": "Regulatory fines for data breaches.",
        "value_chain": ["Direct Operations"],
        "scores": {"magnitude": magnitude, "likelihood": likelihood, "horizon": "Medium"},
        "ifrs_bridge": {"statement_link": "Profit & Loss", "fsli": "Operating expenses"},
    })


def complete_omitted(client, session_id: str, topic_id: str) -> None:
    """Mark a topic omitted with a reason and justification."""
    client.post(f"/api/sessions/{session_id}/topics/{topic_id}/materiality", json={"is_material": False})
    client.patch(f"/api/sessions/{session_id}/topics/{topic_id}", json={
        "omission_reason": "Not Applicable to Business Model",
        "justification": "We do not manufacture physical products.",
    })
