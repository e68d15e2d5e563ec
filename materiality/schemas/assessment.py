"""Schemas for per-topic assessment records and their updates."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from materiality.schemas.common import (
    EffectType,
    FinancialStatement,
    OmissionReason,
    ScoreLevel,
    ValueChainStage,
    utcnow,
)

_STAGE_ORDER = list(ValueChainStage)


def _normalise_stages(stages: list[ValueChainStage]) -> list[ValueChainStage]:
    """Deduplicate value chain stages and keep them in canonical order."""
    unique = set(stages)
    return [s for s in _STAGE_ORDER if s in unique]


class AssessmentScores(BaseModel):
    """Categorical scores for a material topic."""

    magnitude: ScoreLevel = ScoreLevel.LOW
    likelihood: ScoreLevel = ScoreLevel.LOW
    horizon: ScoreLevel = ScoreLevel.LOW


class IfrsBridge(BaseModel):
    """Link between a sustainability risk and the financial statements."""

    statement_link: FinancialStatement | None = None
    fsli: str | None = None
    effect_type: EffectType | None = None


class AssessmentRecord(BaseModel):
    """Assessment state for a single topic.

    Fields from both branches are retained whatever ``is_material`` says; only
    the active branch is surfaced and validated.
    """

    topic_id: str
    is_material: bool | None = None

    # Omitted branch
    omission_reason: OmissionReason | None = None
    justification: str | None = None

    # Material branch
    risk_description: str | None = None
    value_chain: list[ValueChainStage] = Field(default_factory=list)
    scores: AssessmentScores = Field(default_factory=AssessmentScores)
    ifrs_bridge: IfrsBridge = Field(default_factory=IfrsBridge)

    last_updated: datetime = Field(default_factory=utcnow)

    @field_validator("value_chain")
    @classmethod
    def _canonical_stages(cls, value: list[ValueChainStage]) -> list[ValueChainStage]:
        return _normalise_stages(value)


class ScoresPatch(BaseModel):
    model_config = {"extra": "forbid"}

    magnitude: ScoreLevel | None = None
    likelihood: ScoreLevel | None = None
    horizon: ScoreLevel | None = None


class IfrsBridgePatch(BaseModel):
    model_config = {"extra": "forbid"}

    statement_link: FinancialStatement | None = None
    fsli: str | None = None
    effect_type: EffectType | None = None


class AssessmentPatch(BaseModel):
    """Partial update for an assessment record.

    Only fields explicitly present are applied. Unknown fields are rejected.
    Materiality itself changes through its own operation.
    """

    model_config = {"extra": "forbid"}

    omission_reason: OmissionReason | None = None
    justification: str | None = None
    risk_description: str | None = None
    value_chain: list[ValueChainStage] | None = None
    scores: ScoresPatch | None = None
    ifrs_bridge: IfrsBridgePatch | None = None

    @field_validator("value_chain")
    @classmethod
    def _dedupe_stages(cls, value: list[ValueChainStage] | None) -> list[ValueChainStage] | None:
        if value is None:
            return None
        return _normalise_stages(value)


class MaterialityRequest(BaseModel):
    """Request to mark a topic material or omitted."""

    is_material: bool


class ClassifyRequest(BaseModel):
    """Raw inputs to be classified into score buckets.

    Omitted inputs leave the corresponding bucket unchanged.
    """

    model_config = {"allow_inf_nan": False}

    magnitude_value: float | None = Field(default=None, description="Currency (M) or % of denominator")
    likelihood_value: float | None = Field(default=None, description="Probability in percent")
    horizon_years: float | None = Field(default=None, description="Years until the effect is expected")


class TopicAssessment(BaseModel):
    """A topic together with its record and derived state."""

    topic_id: str
    topic_name: str
    industry_code: str
    record: AssessmentRecord
    is_complete: bool
    status: str = Field(..., description="'undecided', 'omitted', 'incomplete' or 'complete'")


class ValidationIssue(BaseModel):
    """A non-fatal completeness problem reported at finalize time."""

    topic_id: str
    topic_name: str
    issue: str
