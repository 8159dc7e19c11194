"""Field test strategy: LT2 from a single continuous effort (e.g. 30-min time trial).

LT2 heart rate = test average HR; LT2 pace/power = test average.
LT1 = 85% of LT2 heart rate and 85% of LT2 speed/power.

Validity gate: HR drift (end − start) above 10% of heart-rate reserve
means the effort was not controlled; the result is LOW confidence and must
not be auto-applied.

Reference:
    Friel (2009). The Triathlete's Training Bible, 3rd ed. (30-min field test)
"""

from __future__ import annotations

from physio_engine.config import EngineSettings
from physio_engine.math.units import pace_to_speed
from physio_engine.models.enums import (
    FIELD_TEST_MIN_DURATION_MIN,
    LT1_FRACTION_OF_LT2,
    ConfidenceTier,
    IntensityUnit,
    NoteKind,
    ThresholdMethod,
)
from physio_engine.models.measurements import FieldTestResult
from physio_engine.models.thresholds import EstimateNote, ThresholdEstimate, ThresholdPair
from physio_engine.thresholds.base import ThresholdStrategy, downgrade


class FieldTestStrategy(ThresholdStrategy):
    """LT1/LT2 from a single field-test summary."""

    method = ThresholdMethod.FIELD_TEST
    source_type = FieldTestResult

    def __init__(self, settings: EngineSettings | None = None) -> None:
        self.settings = settings or EngineSettings()

    def estimate(self, source: FieldTestResult) -> ThresholdPair:
        if source.duration_min <= 0:
            raise ValueError(f"Field test duration must be positive, got {source.duration_min}")
        if (source.average_pace_s_per_km is None) == (source.average_power_w is None):
            raise ValueError("Field test needs exactly one of average pace or average power")
        if source.hr_reserve <= 0:
            raise ValueError(
                f"Max HR ({source.max_hr}) must be above resting HR ({source.resting_hr})"
            )

        if source.average_pace_s_per_km is not None:
            unit = IntensityUnit.KMH
            lt2_intensity = pace_to_speed(source.average_pace_s_per_km)
        else:
            unit = IntensityUnit.WATTS
            lt2_intensity = float(source.average_power_w)  # type: ignore[arg-type]

        notes: list[EstimateNote] = []
        auto_apply = True
        drift_ceiling = self.settings.hr_drift_ceiling_fraction * source.hr_reserve

        if source.hr_drift > drift_ceiling:
            confidence = ConfidenceTier.LOW
            auto_apply = False
            notes.append(EstimateNote(
                code="HR_DRIFT_EXCEEDED",
                message=(
                    f"HR drift {source.hr_drift:.0f} bpm exceeds {drift_ceiling:.1f} bpm "
                    f"({self.settings.hr_drift_ceiling_fraction:.0%} of HR reserve); "
                    f"effort was not controlled."
                ),
                kind=NoteKind.DATA_QUALITY,
            ))
        else:
            confidence = ConfidenceTier.HIGH
            if source.duration_min < FIELD_TEST_MIN_DURATION_MIN:
                confidence = downgrade(confidence)
                notes.append(EstimateNote(
                    code="SHORT_EFFORT",
                    message=(
                        f"Effort lasted {source.duration_min:.0f} min; at least "
                        f"{FIELD_TEST_MIN_DURATION_MIN:.0f} min is needed for a reliable LT2."
                    ),
                ))

        frozen_notes = tuple(notes)
        lt2 = ThresholdEstimate(
            intensity=round(lt2_intensity, 2),
            unit=unit,
            confidence=confidence,
            method=self.method,
            heart_rate=round(source.average_hr, 1),
            notes=frozen_notes,
        )
        lt1 = ThresholdEstimate(
            intensity=round(lt2_intensity * LT1_FRACTION_OF_LT2, 2),
            unit=unit,
            confidence=confidence,
            method=self.method,
            heart_rate=round(source.average_hr * LT1_FRACTION_OF_LT2, 1),
            notes=frozen_notes,
        )
        return ThresholdPair(
            lt1=lt1,
            lt2=lt2,
            auto_apply=auto_apply,
            measured_on=source.test_date,
        )
