"""Raw measurements supplied by the coaching platform: test stages, field tests, races."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from physio_engine.models.enums import IntensityUnit, RaceDistance


@dataclass(frozen=True)
class StageSample:
    """One step of an incremental lactate test."""

    intensity: float  # km/h or watts
    heart_rate: float  # bpm at end of stage
    lactate: float  # mmol/L
    duration_min: float = 4.0


@dataclass(frozen=True)
class IncrementalTest:
    """A full incremental (step) test, stages ordered by increasing intensity.

    ``self_reported`` marks lactate collected by the athlete without a
    supervising coach; such results always require coach approval.
    """

    stages: tuple[StageSample, ...]
    unit: IntensityUnit = IntensityUnit.KMH
    self_reported: bool = False
    test_date: date | None = None

    @property
    def intensities(self) -> list[float]:
        return [s.intensity for s in self.stages]

    @property
    def lactates(self) -> list[float]:
        return [s.lactate for s in self.stages]

    @property
    def heart_rates(self) -> list[float]:
        return [s.heart_rate for s in self.stages]


@dataclass(frozen=True)
class FieldTestResult:
    """Summary of a single continuous-effort test (e.g. a 30-minute time trial).

    Exactly one of ``average_pace_s_per_km`` or ``average_power_w`` is expected.
    """

    duration_min: float
    start_hr: float
    average_hr: float
    end_hr: float
    max_hr: float
    resting_hr: float
    average_pace_s_per_km: float | None = None
    average_power_w: float | None = None
    test_date: date | None = None

    @property
    def hr_drift(self) -> float:
        return self.end_hr - self.start_hr

    @property
    def hr_reserve(self) -> float:
        return self.max_hr - self.resting_hr


@dataclass(frozen=True)
class RaceResult:
    """A recent race result over a standard distance."""

    distance: RaceDistance
    finish_time_s: float
    beginner: bool = False
    race_date: date | None = None
    notes: tuple[str, ...] = field(default_factory=tuple)
