"""Scoring/Classification Engine — raw inputs to Low/Medium/High buckets.

Scores are stored as buckets. Classification happens once, when a raw value
is entered, against the configuration in force at that moment; later
configuration edits change the labels shown but never reclassify stored
buckets.
"""

from __future__ import annotations

import math
from typing import Any

from materiality.schemas.common import ScoreLevel
from materiality.schemas.configuration import ScoreLabels, ThresholdConfiguration


def classify_value(value: float, low_max: float, medium_max: float) -> ScoreLevel:
    """Place a raw value into a three-tier bucket.

    ``value < low_max`` is Low, ``low_max <= value < medium_max`` is Medium,
    anything at or above ``medium_max`` is High. The thresholds are assumed
    valid; configuration edits are where ordering is enforced.

    Args:
        value: Non-negative raw measurement; NaN is rejected.
        low_max: Exclusive upper bound of the Low bucket.
        medium_max: Exclusive upper bound of the Medium bucket.

    Returns:
        The ScoreLevel for the value.
    """
    if math.isnan(value):
        raise ValueError("Raw score values must be numbers (got NaN)")
    if value < 0:
        raise ValueError(f"Raw score values cannot be negative (got {value})")
    if value < low_max:
        return ScoreLevel.LOW
    if value < medium_max:
        return ScoreLevel.MEDIUM
    return ScoreLevel.HIGH


def classify_magnitude(config: ThresholdConfiguration, value: float) -> ScoreLevel:
    """Classify a financial magnitude (currency millions or % of denominator)."""
    return classify_value(value, config.magnitude.low_max, config.magnitude.medium_max)


def classify_likelihood(config: ThresholdConfiguration, value: float) -> ScoreLevel:
    """Classify a probability given in percent."""
    if value > 100:
        raise ValueError(f"Likelihood is a percentage and cannot exceed 100 (got {value})")
    return classify_value(value, config.likelihood.low_max, config.likelihood.medium_max)


def classify_horizon(config: ThresholdConfiguration, years: float) -> ScoreLevel:
    """Classify the number of years until an effect is expected.

    Low is short term, Medium is medium term and High is long term.
    """
    return classify_value(
        years,
        config.horizons.short_term_years,
        config.horizons.medium_term_years,
    )


def classify_inputs(
    config: ThresholdConfiguration,
    magnitude_value: float | None = None,
    likelihood_value: float | None = None,
    horizon_years: float | None = None,
) -> dict[str, ScoreLevel]:
    """Classify whichever raw inputs were supplied.

    Returns:
        Dict of score field name to bucket, containing only the supplied inputs.
    """
    scores: dict[str, ScoreLevel] = {}
    if magnitude_value is not None:
        scores["magnitude"] = classify_magnitude(config, magnitude_value)
    if likelihood_value is not None:
        scores["likelihood"] = classify_likelihood(config, likelihood_value)
    if horizon_years is not None:
        scores["horizon"] = classify_horizon(config, horizon_years)
    return scores


def _fmt(value: Any) -> str:
    return f"{value:g}"


def score_labels(config: ThresholdConfiguration) -> ScoreLabels:
    """Build the threshold-derived labels shown next to each bucket."""
    unit = config.magnitude.unit
    mag_low = _fmt(config.magnitude.low_max)
    mag_med = _fmt(config.magnitude.medium_max)
    like_low = _fmt(config.likelihood.low_max)
    like_med = _fmt(config.likelihood.medium_max)
    short = config.horizons.short_term_years
    medium = config.horizons.medium_term_years

    return ScoreLabels(
        magnitude={
            ScoreLevel.LOW.value: f"Low (< {mag_low}{unit})",
            ScoreLevel.MEDIUM.value: f"Medium ({mag_low}{unit}-{mag_med}{unit})",
            ScoreLevel.HIGH.value: f"High (> {mag_med}{unit})",
        },
        likelihood={
            ScoreLevel.LOW.value: f"Low (< {like_low}%)",
            ScoreLevel.MEDIUM.value: f"Medium ({like_low}%-{like_med}%)",
            ScoreLevel.HIGH.value: f"High (> {like_med}%)",
        },
        horizon={
            ScoreLevel.LOW.value: f"Short (< {short}y)",
            ScoreLevel.MEDIUM.value: f"Medium ({short}-{medium}y)",
            ScoreLevel.HIGH.value: f"Long (> {medium}y)",
        },
    )
