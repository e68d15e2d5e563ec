"""Wizard session endpoints — scope, configuration, topic records and dashboard."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from materiality.dependencies import get_wizard
from materiality.schemas.assessment import (
    AssessmentPatch,
    AssessmentRecord,
    ClassifyRequest,
    MaterialityRequest,
    ValidationIssue,
)
from materiality.schemas.configuration import ScoreLabels, ThresholdConfiguration
from materiality.schemas.dashboard import DashboardSummary
from materiality.schemas.narrative import NarrativeResponse
from materiality.schemas.saved import FinalizeResponse, SavedAssessment
from materiality.schemas.session import OpenSessionRequest, ScopeUpdate, SessionResponse
from materiality.services.wizard import WizardService

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.post("", response_model=SessionResponse, status_code=201)
async def open_session(
    request: OpenSessionRequest | None = None,
    wizard: WizardService = Depends(get_wizard),
) -> SessionResponse:
    """Start a new assessment, or open a saved one when an id is given."""
    if request is not None and request.assessment_id:
        session = wizard.open_session(request.assessment_id)
    else:
        session = wizard.new_session()
    return wizard.describe(session.id)


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(session_id: str, wizard: WizardService = Depends(get_wizard)) -> SessionResponse:
    """Session state with every in-scope topic."""
    return wizard.describe(session_id)


@router.delete("/{session_id}", status_code=204)
async def close_session(session_id: str, wizard: WizardService = Depends(get_wizard)) -> Response:
    """Tear a session down; pending narrative results for it are discarded."""
    wizard.close_session(session_id)
    return Response(status_code=204)


@router.put("/{session_id}/scope", response_model=SessionResponse)
async def update_scope(
    session_id: str,
    update: ScopeUpdate,
    wizard: WizardService = Depends(get_wizard),
) -> SessionResponse:
    """Update name, reporting period and industry selection."""
    wizard.update_scope(session_id, update)
    return wizard.describe(session_id)


@router.put("/{session_id}/config", response_model=ThresholdConfiguration)
async def update_config(
    session_id: str,
    config: ThresholdConfiguration,
    wizard: WizardService = Depends(get_wizard),
) -> ThresholdConfiguration:
    """Replace the threshold configuration."""
    return wizard.update_config(session_id, config)


@router.get("/{session_id}/labels", response_model=ScoreLabels)
async def get_labels(session_id: str, wizard: WizardService = Depends(get_wizard)) -> ScoreLabels:
    """Threshold-derived labels for each score bucket."""
    return wizard.labels(session_id)


@router.post("/{session_id}/topics/{topic_id}/materiality", response_model=AssessmentRecord)
async def set_materiality(
    session_id: str,
    topic_id: str,
    request: MaterialityRequest,
    wizard: WizardService = Depends(get_wizard),
) -> AssessmentRecord:
    """Mark a topic material or omitted."""
    return wizard.set_materiality(session_id, topic_id, request.is_material)


@router.patch("/{session_id}/topics/{topic_id}", response_model=AssessmentRecord)
async def update_topic(
    session_id: str,
    topic_id: str,
    patch: AssessmentPatch,
    wizard: WizardService = Depends(get_wizard),
) -> AssessmentRecord:
    """Merge fields into a topic's record."""
    return wizard.update_record(session_id, topic_id, patch)


@router.post("/{session_id}/topics/{topic_id}/classify", response_model=AssessmentRecord)
async def classify_topic(
    session_id: str,
    topic_id: str,
    request: ClassifyRequest,
    wizard: WizardService = Depends(get_wizard),
) -> AssessmentRecord:
    """Turn raw magnitude, likelihood and horizon values into score buckets."""
    return wizard.classify(session_id, topic_id, request)


@router.post("/{session_id}/topics/{topic_id}/narrative", response_model=NarrativeResponse)
async def suggest_narrative(
    session_id: str,
    topic_id: str,
    wizard: WizardService = Depends(get_wizard),
) -> NarrativeResponse:
    """Draft a risk description with the narrative service."""
    return await wizard.suggest_narrative(session_id, topic_id)


@router.get("/{session_id}/dashboard", response_model=DashboardSummary)
async def get_dashboard(session_id: str, wizard: WizardService = Depends(get_wizard)) -> DashboardSummary:
    """Counts, magnitude x likelihood matrix and disclosure roadmap."""
    return wizard.dashboard(session_id)


@router.get("/{session_id}/warnings", response_model=list[ValidationIssue])
async def get_warnings(session_id: str, wizard: WizardService = Depends(get_wizard)) -> list[ValidationIssue]:
    """Completeness problems that finalizing would report."""
    return wizard.warnings(session_id)


@router.post("/{session_id}/save", response_model=SavedAssessment)
async def save_session(session_id: str, wizard: WizardService = Depends(get_wizard)) -> SavedAssessment:
    """Save the session as a Draft assessment."""
    return wizard.save(session_id)


@router.post("/{session_id}/finalize", response_model=FinalizeResponse)
async def finalize_session(session_id: str, wizard: WizardService = Depends(get_wizard)) -> FinalizeResponse:
    """Finalize and lock the assessment, reporting any completeness warnings."""
    saved, warnings = wizard.finalize(session_id)
    return FinalizeResponse(assessment=saved, warnings=warnings, warning_count=len(warnings))
