"""Shared enumerations and helpers for materiality schemas."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum


def utcnow() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


class ScoreLevel(str, Enum):
    """Three-tier categorical score."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


SCORE_ORDER = [ScoreLevel.LOW, ScoreLevel.MEDIUM, ScoreLevel.HIGH]


class MagnitudeType(str, Enum):
    ABSOLUTE = "ABSOLUTE"
    RELATIVE = "RELATIVE"


class OmissionReason(str, Enum):
    IMMATERIAL = "Immaterial (Financial)"
    NOT_APPLICABLE = "Not Applicable to Business Model"
    PROHIBITED = "Disclosure Prohibited by Law"
    SENSITIVE = "Commercially Sensitive Information"


class ValueChainStage(str, Enum):
    UPSTREAM = "Upstream"
    DIRECT_OPS = "Direct Operations"
    DOWNSTREAM = "Downstream"


class EffectType(str, Enum):
    CURRENT = "Current"
    ANTICIPATED = "Anticipated"


class FinancialStatement(str, Enum):
    BALANCE_SHEET = "Balance Sheet"
    PNL = "Profit & Loss"
    CASH_FLOW = "Cash Flow"


class AssessmentStatus(str, Enum):
    """Saved assessment lifecycle status."""

    DRAFT = "Draft"
    FINALIZED = "Finalized"
    RE_ASSESSMENT_REQUIRED = "Re-assessment Required"
