"""Threshold configuration — boundaries that turn raw inputs into score buckets."""

from __future__ import annotations

from pydantic import BaseModel, Field

from materiality.errors import ConfigurationError
from materiality.schemas.common import MagnitudeType


class MagnitudeThresholds(BaseModel):
    """Financial magnitude thresholds.

    ABSOLUTE values are in millions of the reporting currency. RELATIVE values
    are percentages of ``denominator`` (e.g. EBITDA).
    """

    type: MagnitudeType = MagnitudeType.RELATIVE
    denominator: str | None = "EBITDA"
    low_max: float
    medium_max: float
    cap: float | None = None

    @property
    def unit(self) -> str:
        return "%" if self.type == MagnitudeType.RELATIVE else "M"


class LikelihoodThresholds(BaseModel):
    """Probability thresholds, in percent."""

    low_max: float
    medium_max: float


class HorizonSettings(BaseModel):
    """Time horizon boundaries, in years."""

    short_term_years: int
    medium_term_years: int
    long_term_max: int | None = None


class ThresholdConfiguration(BaseModel):
    """Scoring configuration for one assessment."""

    magnitude: MagnitudeThresholds
    likelihood: LikelihoodThresholds
    horizons: HorizonSettings

    def violations(self) -> list[str]:
        """Return every ordering invariant this configuration breaks."""
        problems: list[str] = []
        mag = self.magnitude
        if not 0 < mag.low_max < mag.medium_max:
            problems.append("magnitude thresholds must satisfy 0 < low_max < medium_max")
        if mag.cap is not None and mag.cap <= mag.medium_max:
            problems.append("magnitude cap must exceed medium_max")
        if mag.type == MagnitudeType.RELATIVE and not (mag.denominator or "").strip():
            problems.append("relative magnitude requires a denominator")

        like = self.likelihood
        if not 0 < like.low_max < like.medium_max:
            problems.append("likelihood thresholds must satisfy 0 < low_max < medium_max")
        if like.medium_max > 100:
            problems.append("likelihood thresholds are percentages and cannot exceed 100")

        hz = self.horizons
        if not 0 < hz.short_term_years < hz.medium_term_years:
            problems.append("horizons must satisfy 0 < short_term_years < medium_term_years")
        if hz.long_term_max is not None and hz.long_term_max <= hz.medium_term_years:
            problems.append("long_term_max must exceed medium_term_years")
        return problems

    def validate_thresholds(self) -> ThresholdConfiguration:
        """Raise ConfigurationError unless every invariant holds."""
        problems = self.violations()
        if problems:
            raise ConfigurationError(
                "Invalid threshold configuration",
                details={"violations": problems},
            )
        return self


def default_configuration() -> ThresholdConfiguration:
    """Configuration a new assessment starts from."""
    return ThresholdConfiguration(
        magnitude=MagnitudeThresholds(
            type=MagnitudeType.RELATIVE,
            denominator="EBITDA",
            low_max=1,
            medium_max=5,
            cap=15,
        ),
        likelihood=LikelihoodThresholds(low_max=20, medium_max=60),
        horizons=HorizonSettings(short_term_years=1, medium_term_years=5, long_term_max=15),
    )


class ScoreLabels(BaseModel):
    """Threshold-derived display labels for each score bucket."""

    magnitude: dict[str, str] = Field(default_factory=dict)
    likelihood: dict[str, str] = Field(default_factory=dict)
    horizon: dict[str, str] = Field(default_factory=dict)
