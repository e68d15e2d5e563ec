"""FastAPI dependencies — services injected via Depends()."""

from __future__ import annotations

from fastapi import Depends, Request

from materiality.config import Settings
from materiality.services.narrative_client import NarrativeClient
from materiality.services.registry import AssessmentRegistry
from materiality.services.wizard import WizardService
from materiality.store import DataStore, data_store


def get_store() -> DataStore:
    """The process-wide in-memory store."""
    return data_store


def get_settings_from_app(request: Request) -> Settings:
    return request.app.state.settings


def get_registry(store: DataStore = Depends(get_store)) -> AssessmentRegistry:
    return AssessmentRegistry(store)


def get_narrative_client(settings: Settings = Depends(get_settings_from_app)) -> NarrativeClient:
    return NarrativeClient(
        service_url=settings.narrative_service_url,
        api_key=settings.narrative_api_key,
        timeout=settings.narrative_timeout_seconds,
        context=settings.narrative_context,
    )


def get_wizard(
    store: DataStore = Depends(get_store),
    registry: AssessmentRegistry = Depends(get_registry),
    narrative_client: NarrativeClient = Depends(get_narrative_client),
) -> WizardService:
    return WizardService(store, registry, narrative_client)
