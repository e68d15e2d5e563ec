"""Schemas for saved assessments — versioned snapshots of a whole session."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, model_validator

from materiality.schemas.assessment import AssessmentRecord, ValidationIssue
from materiality.schemas.common import AssessmentStatus, utcnow
from materiality.schemas.configuration import ThresholdConfiguration, default_configuration
from materiality.schemas.reference import Industry

_PERIOD_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"


class ReportingTimeline(BaseModel):
    """Reporting period as a pair of YYYY-MM months."""

    start: str = Field(..., pattern=_PERIOD_PATTERN)
    end: str = Field(..., pattern=_PERIOD_PATTERN)

    @model_validator(mode="after")
    def _ordered(self) -> ReportingTimeline:
        if self.start > self.end:
            raise ValueError("timeline start must not be after its end")
        return self


class AssessmentData(BaseModel):
    """Industry scope, configuration and records of an assessment."""

    primary_industry: Industry | None = None
    secondary_industries: list[Industry] = Field(default_factory=list)
    config: ThresholdConfiguration = Field(default_factory=default_configuration)
    assessments: dict[str, AssessmentRecord] = Field(default_factory=dict)


class AssessmentSnapshot(BaseModel):
    """Everything the registry persists for one save or finalize."""

    assessment_name: str = ""
    reporting_year: str = "2025"
    timeline: ReportingTimeline | None = None
    data: AssessmentData = Field(default_factory=AssessmentData)


class SavedAssessment(BaseModel):
    """A saved assessment as held by the registry."""

    id: str
    assessment_name: str
    reporting_year: str
    timeline: ReportingTimeline | None = None
    version: int = Field(default=1, ge=1)
    status: AssessmentStatus = AssessmentStatus.DRAFT
    last_modified: datetime = Field(default_factory=utcnow)
    re_assessment_reason: str | None = None
    data: AssessmentData = Field(default_factory=AssessmentData)


class SavedAssessmentSummary(BaseModel):
    """List view of a saved assessment."""

    id: str
    assessment_name: str
    reporting_year: str
    timeline: ReportingTimeline | None = None
    version: int
    status: AssessmentStatus
    last_modified: datetime
    re_assessment_reason: str | None = None
    primary_industry: str = Field(..., description="Primary industry name, or 'No Industry Selected'")


class ReassessmentRequest(BaseModel):
    """Request to reopen a finalized assessment."""

    reason: str = Field(..., min_length=1, max_length=2000)


class FinalizeResponse(BaseModel):
    """Result of finalizing a session."""

    assessment: SavedAssessment
    warnings: list[ValidationIssue]
    warning_count: int
