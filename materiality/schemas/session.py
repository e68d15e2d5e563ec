"""Schemas for wizard sessions — the editable working copy of an assessment."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from materiality.schemas.assessment import AssessmentRecord, TopicAssessment
from materiality.schemas.common import AssessmentStatus, utcnow
from materiality.schemas.configuration import ThresholdConfiguration, default_configuration
from materiality.schemas.reference import Industry
from materiality.schemas.saved import ReportingTimeline

DEFAULT_ASSESSMENT_NAME = "[Company Name] Financial Materiality Assessment"
DEFAULT_REPORTING_YEAR = "2025"


class WizardSession(BaseModel):
    """Working state of one assessment while it is being edited."""

    id: str
    assessment_id: str | None = None
    assessment_name: str = DEFAULT_ASSESSMENT_NAME
    reporting_year: str = DEFAULT_REPORTING_YEAR
    timeline: ReportingTimeline | None = None
    primary_industry: Industry | None = None
    secondary_industries: list[Industry] = Field(default_factory=list)
    config: ThresholdConfiguration = Field(default_factory=default_configuration)
    assessments: dict[str, AssessmentRecord] = Field(default_factory=dict)
    status: AssessmentStatus = AssessmentStatus.DRAFT
    created_at: datetime = Field(default_factory=utcnow)

    @property
    def read_only(self) -> bool:
        return self.status == AssessmentStatus.FINALIZED

    @property
    def industry_codes(self) -> list[str]:
        if self.primary_industry is None:
            return []
        return [self.primary_industry.code] + [i.code for i in self.secondary_industries]


class OpenSessionRequest(BaseModel):
    """Start a new session, or open a saved assessment when an id is given."""

    assessment_id: str | None = None


class ScopeUpdate(BaseModel):
    """General settings and industry selection.

    Omitted fields are left unchanged.
    """

    model_config = {"extra": "forbid"}

    assessment_name: str | None = Field(default=None, max_length=255)
    reporting_year: str | None = Field(default=None, pattern=r"^\d{4}$")
    timeline: ReportingTimeline | None = None
    primary_industry_code: str | None = None
    secondary_industry_codes: list[str] | None = None


class SessionResponse(BaseModel):
    """A session with every in-scope topic and its derived state."""

    id: str
    assessment_id: str | None = None
    assessment_name: str
    reporting_year: str
    timeline: ReportingTimeline | None = None
    status: AssessmentStatus
    read_only: bool
    primary_industry: Industry | None = None
    secondary_industries: list[Industry]
    config: ThresholdConfiguration
    topics: list[TopicAssessment]
