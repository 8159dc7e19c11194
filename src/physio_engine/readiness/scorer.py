"""Readiness scorer: subjective wellness composite plus objective overrides.

Composite: weighted mean of six 1-10 inputs normalised to 0-1 (soreness,
fatigue and stress inverted) and scaled to 0-100.

Overrides, applied as caps on the final score:
    HRV ≤ −40% AND resting HR ≥ +8 bpm → REST (hard floor, not configurable)
    HRV more than 20% below baseline  → at most MINOR_MOD
    ACWR DANGER                       → at most MAJOR_MOD
    ACWR CAUTION or load spike        → at most MINOR_MOD

References:
    - McLean et al. (2010). IJSPP 5(3):367-383 (wellness questionnaire)
    - Plews et al. (2013). Sports Med 43(9):773-781 (HRV-guided training)
    - Buchheit (2014). Front Physiol 5:73 (resting HR and HRV monitoring)
"""

from __future__ import annotations

from physio_engine.models.enums import (
    HRV_REST_FLOOR_PCT,
    HRV_SUPPRESSED_PCT,
    READINESS_INVERTED_FIELDS,
    READINESS_MAJOR_MOD_MIN,
    READINESS_MINOR_MOD_MIN,
    READINESS_PROCEED_MIN,
    READINESS_WEIGHTS,
    RHR_REST_FLOOR_BPM,
    ReadinessCategory,
    RiskZone,
)
from physio_engine.models.load import LoadState
from physio_engine.models.readiness import ReadinessDecision, ReadinessInput

# Highest score allowed in each category, used when an override caps the score
_CATEGORY_CEILING = {
    ReadinessCategory.MINOR_MOD: READINESS_PROCEED_MIN - 1,
    ReadinessCategory.MAJOR_MOD: READINESS_MINOR_MOD_MIN - 1,
    ReadinessCategory.REST: READINESS_MAJOR_MOD_MIN - 1,
}

POOR_SLEEP_MAX = 3
HIGH_SORENESS_MIN = 8


def subjective_score(inputs: ReadinessInput) -> float:
    """Weighted subjective composite on a 0-100 scale.

    Raises:
        ValueError: Any subjective input outside 1-10.
    """
    total = 0.0
    for name, weight in READINESS_WEIGHTS.items():
        value = getattr(inputs, name)
        if not 1 <= value <= 10:
            raise ValueError(f"{name} must be between 1 and 10, got {value}")
        normalised = (value - 1) / 9.0
        if name in READINESS_INVERTED_FIELDS:
            normalised = 1.0 - normalised
        total += weight * normalised
    return total * 100.0


def categorize(score: float) -> ReadinessCategory:
    """Map a 0-100 score to a category: ≥70 / 50-69 / 30-49 / <30."""
    if score >= READINESS_PROCEED_MIN:
        return ReadinessCategory.PROCEED
    if score >= READINESS_MINOR_MOD_MIN:
        return ReadinessCategory.MINOR_MOD
    if score >= READINESS_MAJOR_MOD_MIN:
        return ReadinessCategory.MAJOR_MOD
    return ReadinessCategory.REST


def _cap(score: float, category: ReadinessCategory) -> float:
    return min(score, _CATEGORY_CEILING[category])


def score_readiness(inputs: ReadinessInput, load: LoadState | None = None) -> ReadinessDecision:
    """Compute the daily readiness decision.

    Args:
        inputs: Today's check-in, optionally with HRV/RHR and baselines.
        load: Recent LoadState; low-confidence load states are ignored.

    Returns:
        ReadinessDecision whose ``reasons`` list the subjective composite
        and one clause per override that applied.
    """
    raw = round(subjective_score(inputs), 1)
    score = raw
    reasons = [f"Subjective composite {raw:.1f}/100"]

    if inputs.sleep <= POOR_SLEEP_MAX:
        reasons.append(f"Poor sleep ({inputs.sleep:g}/10)")
    if inputs.soreness >= HIGH_SORENESS_MIN:
        reasons.append(f"High soreness ({inputs.soreness:g}/10)")

    hrv_pct = inputs.hrv_deviation_pct
    rhr_delta = inputs.rhr_deviation_bpm

    if (
        hrv_pct is not None
        and rhr_delta is not None
        and hrv_pct <= HRV_REST_FLOOR_PCT
        and rhr_delta >= RHR_REST_FLOOR_BPM
    ):
        score = _cap(score, ReadinessCategory.REST)
        reasons.append(
            f"HRV {hrv_pct:.0f}% from baseline with resting HR +{rhr_delta:.0f} bpm: rest required"
        )
    elif hrv_pct is not None and hrv_pct < HRV_SUPPRESSED_PCT:
        score = _cap(score, ReadinessCategory.MINOR_MOD)
        reasons.append(f"HRV {hrv_pct:.0f}% from baseline")

    if load is not None and not load.is_low_confidence:
        if load.zone == RiskZone.DANGER:
            score = _cap(score, ReadinessCategory.MAJOR_MOD)
            reasons.append(f"ACWR {load.ratio:.2f} in danger zone")
        elif load.zone == RiskZone.CAUTION:
            score = _cap(score, ReadinessCategory.MINOR_MOD)
            reasons.append(f"ACWR {load.ratio:.2f} in caution zone")
        if load.spike and load.zone != RiskZone.DANGER:
            score = _cap(score, ReadinessCategory.MINOR_MOD)
            reasons.append(f"Training load spike (ACWR {load.ratio:.2f})")

    return ReadinessDecision(
        score=round(score, 1),
        category=categorize(score),
        subjective_score=raw,
        reasons=tuple(reasons),
    )
