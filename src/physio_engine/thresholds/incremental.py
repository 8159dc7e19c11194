"""Incremental lactate test strategy: D-max for LT2, fixed 2.0 mmol/L for LT1.

D-max: LT2 is the point on the fitted lactate curve with the maximum
perpendicular distance from the straight line joining the first and last
stage. LT1 is the point on the curve nearest 2.0 mmol/L below LT2.

References:
    - Cheng et al. (1992). Int J Sports Med 13(7):518-522 (D-max)
    - Kindermann et al. (1979). Eur J Appl Physiol 42(1):25-34 (2 mmol/L)
"""

from __future__ import annotations

import numpy as np

from physio_engine.exceptions import InsufficientDataError, InvalidThresholdOrderError
from physio_engine.math.curve_fit import CubicFit, fit_cubic, interpolate
from physio_engine.models.enums import (
    DMAX_GRID_POINTS,
    DMAX_MIN_RELATIVE_DISTANCE,
    LACTATE_DROP_TOLERANCE_MMOL,
    LT1_LACTATE_MMOL,
    MIN_STAGES_FOR_FIT,
    R_SQUARED_HIGH,
    R_SQUARED_VERY_HIGH,
    ConfidenceTier,
    NoteKind,
    ThresholdMethod,
)
from physio_engine.models.measurements import IncrementalTest, StageSample
from physio_engine.models.thresholds import EstimateNote, ThresholdEstimate, ThresholdPair
from physio_engine.thresholds.base import ThresholdStrategy, downgrade


def confidence_from_r_squared(r2: float) -> ConfidenceTier:
    """VERY_HIGH above 0.95, HIGH above 0.85, MEDIUM otherwise."""
    if r2 > R_SQUARED_VERY_HIGH:
        return ConfidenceTier.VERY_HIGH
    if r2 > R_SQUARED_HIGH:
        return ConfidenceTier.HIGH
    return ConfidenceTier.MEDIUM


def lactate_drops(stages: tuple[StageSample, ...] | list[StageSample]) -> list[int]:
    """Indices of stages whose lactate fell more than the noise tolerance."""
    return [
        i
        for i in range(1, len(stages))
        if stages[i - 1].lactate - stages[i].lactate > LACTATE_DROP_TOLERANCE_MMOL
    ]


def dmax_point(
    fit: CubicFit, first: tuple[float, float], last: tuple[float, float]
) -> tuple[float, float, float]:
    """Locate the D-max point on a fitted curve.

    Args:
        fit: Cubic lactate curve.
        first: (intensity, lactate) of the first stage.
        last: (intensity, lactate) of the last stage.

    Returns:
        (intensity, lactate, perpendicular distance) at the D-max point.
    """
    xs, ys = fit.grid(DMAX_GRID_POINTS)
    slope = (last[1] - first[1]) / (last[0] - first[0])
    intercept = first[1] - slope * first[0]
    distances = np.abs(ys - (slope * xs + intercept)) / np.sqrt(1.0 + slope**2)
    idx = int(np.argmax(distances))
    return float(xs[idx]), float(ys[idx]), float(distances[idx])


def fixed_lactate_point(fit: CubicFit, target: float, below: float) -> tuple[float, float]:
    """Point on the curve nearest ``target`` lactate with intensity below ``below``."""
    xs, ys = fit.grid(DMAX_GRID_POINTS)
    mask = xs < below
    if not np.any(mask):
        raise InsufficientDataError("No curve points below LT2 to locate LT1")
    xs, ys = xs[mask], ys[mask]
    idx = int(np.argmin(np.abs(ys - target)))
    return float(xs[idx]), float(ys[idx])


class DmaxStrategy(ThresholdStrategy):
    """LT1/LT2 from an incremental lactate step test."""

    method = ThresholdMethod.DMAX
    source_type = IncrementalTest

    def estimate(self, source: IncrementalTest) -> ThresholdPair:
        """Fit the lactate curve and derive both thresholds.

        Raises:
            InsufficientDataError: Fewer than 4 stages.
            InvalidThresholdOrderError: LT1 not strictly below LT2.
        """
        if len(source.stages) < MIN_STAGES_FOR_FIT:
            raise InsufficientDataError(
                f"D-max needs at least {MIN_STAGES_FOR_FIT} stages, got {len(source.stages)}",
                required=MIN_STAGES_FOR_FIT,
                received=len(source.stages),
            )
        stages = sorted(source.stages, key=lambda s: s.intensity)
        intensities = [s.intensity for s in stages]
        lactates = [s.lactate for s in stages]
        heart_rates = [s.heart_rate for s in stages]

        fit = fit_cubic(intensities, lactates)
        lt2_x, lt2_lac, distance = dmax_point(
            fit, (intensities[0], lactates[0]), (intensities[-1], lactates[-1])
        )
        lt1_x, lt1_lac = fixed_lactate_point(fit, LT1_LACTATE_MMOL, below=lt2_x)

        if lt1_x >= lt2_x or lt1_lac >= lt2_lac:
            raise InvalidThresholdOrderError(
                f"LT1 ({lt1_x:.2f}, {lt1_lac:.2f} mmol/L) must be below "
                f"LT2 ({lt2_x:.2f}, {lt2_lac:.2f} mmol/L)"
            )

        confidence = confidence_from_r_squared(fit.r_squared)
        notes: list[EstimateNote] = []

        lactate_range = max(lactates) - min(lactates)
        relative = distance / lactate_range if lactate_range > 0 else 0.0
        if relative < DMAX_MIN_RELATIVE_DISTANCE:
            confidence = downgrade(confidence)
            notes.append(EstimateNote(
                code="CURVE_TOO_LINEAR",
                message=(
                    f"Lactate curve is nearly linear (D-max distance {relative:.1%} of range); "
                    f"breakpoint is poorly defined."
                ),
            ))

        if source.self_reported:
            confidence = downgrade(confidence)
            notes.append(EstimateNote(
                code="SELF_REPORTED",
                message="Lactate values were self-reported; coach approval required.",
            ))

        drops = lactate_drops(stages)
        if drops:
            notes.append(EstimateNote(
                code="NON_MONOTONIC_LACTATE",
                message=(
                    f"Lactate fell by more than {LACTATE_DROP_TOLERANCE_MMOL} mmol/L at "
                    f"stage(s) {', '.join(str(i + 1) for i in drops)}."
                ),
                kind=NoteKind.DATA_QUALITY,
            ))

        frozen_notes = tuple(notes)
        lt2 = ThresholdEstimate(
            intensity=round(lt2_x, 2),
            unit=source.unit,
            confidence=confidence,
            method=self.method,
            heart_rate=round(interpolate(lt2_x, intensities, heart_rates), 1),
            lactate=round(lt2_lac, 2),
            notes=frozen_notes,
        )
        lt1 = ThresholdEstimate(
            intensity=round(lt1_x, 2),
            unit=source.unit,
            confidence=confidence,
            method=self.method,
            heart_rate=round(interpolate(lt1_x, intensities, heart_rates), 1),
            lactate=round(lt1_lac, 2),
            notes=frozen_notes,
        )
        return ThresholdPair(
            lt1=lt1,
            lt2=lt2,
            r_squared=fit.r_squared,
            auto_apply=confidence != ConfidenceTier.LOW and not source.self_reported,
            measured_on=source.test_date,
        )
