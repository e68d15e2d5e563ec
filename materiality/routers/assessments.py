"""Saved assessment endpoints — list, detail and re-assessment requests."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from materiality.dependencies import get_registry
from materiality.schemas.saved import ReassessmentRequest, SavedAssessment, SavedAssessmentSummary
from materiality.services.registry import AssessmentRegistry

router = APIRouter(prefix="/assessments", tags=["assessments"])


def _summary(assessment: SavedAssessment) -> SavedAssessmentSummary:
    primary = assessment.data.primary_industry
    return SavedAssessmentSummary(
        id=assessment.id,
        assessment_name=assessment.assessment_name,
        reporting_year=assessment.reporting_year,
        timeline=assessment.timeline,
        version=assessment.version,
        status=assessment.status,
        last_modified=assessment.last_modified,
        re_assessment_reason=assessment.re_assessment_reason,
        primary_industry=primary.name if primary else "No Industry Selected",
    )


@router.get("", response_model=list[SavedAssessmentSummary])
async def list_assessments(
    registry: AssessmentRegistry = Depends(get_registry),
) -> list[SavedAssessmentSummary]:
    """All saved assessments, most recently modified first."""
    return [_summary(a) for a in registry.list()]


@router.get("/{assessment_id}", response_model=SavedAssessment)
async def get_assessment(
    assessment_id: str,
    registry: AssessmentRegistry = Depends(get_registry),
) -> SavedAssessment:
    """Full snapshot of a saved assessment."""
    return registry.get(assessment_id)


@router.post("/{assessment_id}/reassessment", response_model=SavedAssessment)
async def request_reassessment(
    assessment_id: str,
    request: ReassessmentRequest,
    registry: AssessmentRegistry = Depends(get_registry),
) -> SavedAssessment:
    """Reopen a finalized assessment for editing under a new version."""
    return registry.request_reassessment(assessment_id, request.reason)
