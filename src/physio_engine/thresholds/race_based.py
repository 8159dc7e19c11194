"""Race-based strategy: back-estimate LT2 pace from a recent race.

LT2 pace (s/km) = race pace × distance coefficient. Shorter races are run
above LT2 (coefficient > 1 slows the pace), longer races below it.

Reference:
    Daniels (2014). Daniels' Running Formula, 3rd ed. Human Kinetics.
"""

from __future__ import annotations

from physio_engine.math.units import pace_to_speed
from physio_engine.models.enums import (
    LT1_FRACTION_OF_LT2,
    RACE_CONFIDENCE,
    RACE_DISTANCE_KM,
    RACE_LT2_PACE_FACTOR,
    ConfidenceTier,
    IntensityUnit,
    RaceDistance,
    ThresholdMethod,
)
from physio_engine.models.measurements import RaceResult
from physio_engine.models.thresholds import EstimateNote, ThresholdEstimate, ThresholdPair
from physio_engine.thresholds.base import ThresholdStrategy, downgrade


def race_pace(result: RaceResult) -> float:
    """Average race pace in seconds per km."""
    if result.finish_time_s <= 0:
        raise ValueError(f"Finish time must be positive, got {result.finish_time_s}")
    return result.finish_time_s / RACE_DISTANCE_KM[result.distance]


def lt2_pace_from_race(result: RaceResult) -> float:
    """LT2 pace in seconds per km for a race result."""
    return race_pace(result) * RACE_LT2_PACE_FACTOR[result.distance]


class RaceResultStrategy(ThresholdStrategy):
    """LT1/LT2 speed from a race result. Heart rate is not estimated."""

    method = ThresholdMethod.RACE_RESULT
    source_type = RaceResult

    def estimate(self, source: RaceResult) -> ThresholdPair:
        lt2_speed = pace_to_speed(lt2_pace_from_race(source))
        confidence = RACE_CONFIDENCE[source.distance]
        notes: list[EstimateNote] = []

        if source.distance == RaceDistance.MARATHON:
            notes.append(EstimateNote(
                code="MARATHON_BELOW_LT2",
                message="Marathon pace sits below true LT2; estimate is conservative.",
            ))

        if source.beginner:
            confidence = downgrade(confidence)
            notes.append(EstimateNote(
                code="BEGINNER_FADE",
                message=(
                    "Beginners are prone to late-race fade, which distorts the "
                    "apparent race pace."
                ),
            ))

        frozen_notes = tuple(notes)
        lt2 = ThresholdEstimate(
            intensity=lt2_speed,
            unit=IntensityUnit.KMH,
            confidence=confidence,
            method=self.method,
            notes=frozen_notes,
        )
        lt1 = ThresholdEstimate(
            intensity=lt2_speed * LT1_FRACTION_OF_LT2,
            unit=IntensityUnit.KMH,
            confidence=confidence,
            method=self.method,
            notes=frozen_notes,
        )
        return ThresholdPair(
            lt1=lt1,
            lt2=lt2,
            auto_apply=confidence != ConfidenceTier.LOW,
            measured_on=source.race_date,
        )
