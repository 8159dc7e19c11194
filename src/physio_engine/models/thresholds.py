"""Threshold estimates: LT1/LT2 with confidence tier and advisory notes."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from physio_engine.exceptions import DataQualityWarning, LowConfidenceWarning
from physio_engine.models.enums import (
    ConfidenceTier,
    IntensityUnit,
    NoteKind,
    ThresholdMethod,
)


@dataclass(frozen=True)
class EstimateNote:
    """Machine-readable advisory attached to an estimate.

    ``code`` is stable (e.g. "HR_DRIFT_EXCEEDED") so the approval workflow
    can key on it; ``message`` is for humans.
    """

    code: str
    message: str
    kind: NoteKind = NoteKind.LOW_CONFIDENCE

    @property
    def warning_class(self) -> type[UserWarning]:
        if self.kind == NoteKind.DATA_QUALITY:
            return DataQualityWarning
        return LowConfidenceWarning


@dataclass(frozen=True)
class ThresholdEstimate:
    """A single threshold (LT1 or LT2).

    ``intensity`` is speed in km/h or power in watts according to ``unit``.
    """

    intensity: float
    unit: IntensityUnit
    confidence: ConfidenceTier
    method: ThresholdMethod
    heart_rate: float | None = None
    lactate: float | None = None
    notes: tuple[EstimateNote, ...] = field(default_factory=tuple)

    @property
    def pace_s_per_km(self) -> float | None:
        """Pace in seconds per km, only meaningful for speed-based estimates."""
        if self.unit != IntensityUnit.KMH or self.intensity <= 0:
            return None
        return 3600.0 / self.intensity


@dataclass(frozen=True)
class ThresholdPair:
    """LT1 and LT2 produced together by one estimation strategy.

    ``auto_apply`` is False whenever the result must pass coach approval
    before it may replace the athlete's current zones.
    """

    lt1: ThresholdEstimate
    lt2: ThresholdEstimate
    r_squared: float | None = None
    auto_apply: bool = True
    measured_on: date | None = None

    @property
    def confidence(self) -> ConfidenceTier:
        return min(self.lt1.confidence, self.lt2.confidence)

    @property
    def method(self) -> ThresholdMethod:
        return self.lt2.method

    @property
    def unit(self) -> IntensityUnit:
        return self.lt2.unit

    @property
    def notes(self) -> tuple[EstimateNote, ...]:
        """All notes from both estimates, de-duplicated, order preserved."""
        seen: set[str] = set()
        combined: list[EstimateNote] = []
        for note in self.lt2.notes + self.lt1.notes:
            if note.code in seen:
                continue
            seen.add(note.code)
            combined.append(note)
        return tuple(combined)

    @property
    def has_heart_rate(self) -> bool:
        return self.lt1.heart_rate is not None and self.lt2.heart_rate is not None
