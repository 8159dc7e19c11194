"""Cross-training equivalency: convert running volume into a substitute modality.

Equivalent minutes = running minutes × (100 / retention%). Retention is the
share of running fitness a modality preserves; lower retention needs more
time to hold the same fitness.

Every recommendation consults the exclusion tables first (by injury type,
by body region and by movement restriction), so an excluded modality is
never returned.

References:
    - Eyestone et al. (1993). Med Sci Sports Exerc 25(5):616-623 (deep-water running)
    - Tanaka (1994). Sports Med 18(5):330-339 (cross-training effectiveness)
"""

from __future__ import annotations

from typing import Iterable

from physio_engine.exceptions import ModalityExcludedError
from physio_engine.models.enums import (
    CROSS_TRAINING_RETENTION_PCT,
    BodyRegion,
    InjuryType,
    Modality,
    MovementRestriction,
)
from physio_engine.models.injury import InjuryConstraint
from physio_engine.models.session import CrossTrainingRecommendation

EXCLUDED_BY_INJURY_TYPE: dict[InjuryType, frozenset[Modality]] = {
    InjuryType.PLANTAR_FASCIITIS: frozenset({Modality.CYCLING, Modality.ANTI_GRAVITY_TREADMILL}),
    InjuryType.ACHILLES_TENDINOPATHY: frozenset({Modality.CYCLING, Modality.ANTI_GRAVITY_TREADMILL}),
    InjuryType.IT_BAND_SYNDROME: frozenset({Modality.CYCLING}),
    InjuryType.PATELLOFEMORAL_SYNDROME: frozenset({Modality.CYCLING, Modality.ANTI_GRAVITY_TREADMILL}),
    InjuryType.SHIN_SPLINTS: frozenset(),
    # Stress fractures: deep-water running or swimming only
    InjuryType.STRESS_FRACTURE: frozenset({
        Modality.ANTI_GRAVITY_TREADMILL,
        Modality.ELLIPTICAL,
        Modality.CYCLING,
        Modality.ROWING,
    }),
    InjuryType.HAMSTRING_STRAIN: frozenset({Modality.CYCLING}),
    InjuryType.CALF_STRAIN: frozenset(),
    InjuryType.HIP_FLEXOR_STRAIN: frozenset({Modality.CYCLING}),
    InjuryType.OTHER: frozenset(),
}

# Lower-leg and foot injuries exclude impact-bearing and loaded-cycling substitutes
EXCLUDED_BY_REGION: dict[BodyRegion, frozenset[Modality]] = {
    BodyRegion.FOOT: frozenset({Modality.CYCLING, Modality.ANTI_GRAVITY_TREADMILL}),
    BodyRegion.ANKLE: frozenset({Modality.CYCLING, Modality.ANTI_GRAVITY_TREADMILL}),
    BodyRegion.LOWER_LEG: frozenset({Modality.CYCLING, Modality.ANTI_GRAVITY_TREADMILL}),
    BodyRegion.LOWER_BACK: frozenset({Modality.ROWING}),
    BodyRegion.UPPER_BODY: frozenset({Modality.SWIMMING, Modality.ROWING}),
}

EXCLUDED_BY_RESTRICTION: dict[MovementRestriction, frozenset[Modality]] = {
    MovementRestriction.NO_IMPACT: frozenset({Modality.ANTI_GRAVITY_TREADMILL}),
    MovementRestriction.NO_KNEE_FLEXION: frozenset({
        Modality.CYCLING,
        Modality.ROWING,
        Modality.ELLIPTICAL,
    }),
    MovementRestriction.NO_ANKLE_DORSIFLEXION: frozenset({Modality.CYCLING, Modality.ELLIPTICAL}),
    MovementRestriction.NO_HIP_FLEXION: frozenset({Modality.CYCLING, Modality.ROWING}),
    MovementRestriction.NO_UPPER_BODY_LOAD: frozenset({Modality.SWIMMING, Modality.ROWING}),
}

MODALITY_NOTES: dict[Modality, str] = {
    Modality.DEEP_WATER_RUNNING: "Use a flotation belt and keep running cadence.",
    Modality.ANTI_GRAVITY_TREADMILL: "Start at 60-70% body weight and progress as pain allows.",
    Modality.SWIMMING: "Keep effort continuous; pull buoy if kicking aggravates symptoms.",
    Modality.ELLIPTICAL: "Upright posture, no handles, match running heart rate.",
    Modality.CYCLING: "Raise saddle height to limit knee and hip flexion.",
    Modality.ROWING: "Prioritise technique; stop if the back or hips load up.",
}


def exclusion_reasons(injuries: Iterable[InjuryConstraint]) -> dict[Modality, list[str]]:
    """Which substitute modalities are excluded, and why.

    Only active injuries are considered.
    """
    reasons: dict[Modality, list[str]] = {}
    for injury in injuries:
        if not injury.active:
            continue
        if injury.injury_type is not None:
            for modality in EXCLUDED_BY_INJURY_TYPE.get(injury.injury_type, frozenset()):
                reasons.setdefault(modality, []).append(injury.injury_type.name)
        for modality in EXCLUDED_BY_REGION.get(injury.region, frozenset()):
            reasons.setdefault(modality, []).append(injury.region.name)
        for restriction in injury.movement_restrictions:
            for modality in EXCLUDED_BY_RESTRICTION.get(restriction, frozenset()):
                reasons.setdefault(modality, []).append(restriction.name)
    return reasons


def allowed_modalities(injuries: Iterable[InjuryConstraint] = ()) -> list[Modality]:
    """Admissible substitute modalities, highest retention first."""
    excluded = exclusion_reasons(injuries)
    candidates = [m for m in CROSS_TRAINING_RETENTION_PCT if m not in excluded]
    return sorted(candidates, key=lambda m: CROSS_TRAINING_RETENTION_PCT[m], reverse=True)


def equivalent_minutes(source_minutes: float, modality: Modality) -> float:
    """Minutes of ``modality`` equivalent to ``source_minutes`` of running.

    Raises:
        ValueError: Negative duration or a modality with no retention coefficient.
    """
    if source_minutes < 0:
        raise ValueError(f"Source duration must be non-negative, got {source_minutes}")
    if modality not in CROSS_TRAINING_RETENTION_PCT:
        raise ValueError(f"{modality.name} is not a cross-training substitute")
    return round(source_minutes * (100.0 / CROSS_TRAINING_RETENTION_PCT[modality]), 1)


def equivalent_volume(
    source_minutes: float,
    modality: Modality,
    injuries: Iterable[InjuryConstraint] = (),
) -> CrossTrainingRecommendation:
    """Equivalent volume of ``modality`` after checking the exclusion tables.

    Raises:
        ModalityExcludedError: ``modality`` is excluded by an active injury.
    """
    excluded = exclusion_reasons(injuries)
    if modality in excluded:
        raise ModalityExcludedError(
            f"{modality.name} is excluded by {', '.join(excluded[modality])}",
            modality=modality,
        )
    return CrossTrainingRecommendation(
        modality=modality,
        source_minutes=source_minutes,
        equivalent_minutes=equivalent_minutes(source_minutes, modality),
        retention_pct=CROSS_TRAINING_RETENTION_PCT[modality],
        notes=(MODALITY_NOTES[modality],),
    )


def recommend_substitute(
    source_minutes: float,
    injuries: Iterable[InjuryConstraint] = (),
) -> CrossTrainingRecommendation | None:
    """Best admissible substitute (highest retention), or None if all are excluded."""
    injuries = list(injuries)
    allowed = allowed_modalities(injuries)
    if not allowed:
        return None
    return equivalent_volume(source_minutes, allowed[0], injuries)
