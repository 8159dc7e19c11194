"""Daily wellness input and the resulting readiness decision."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from physio_engine.models.enums import ReadinessCategory


@dataclass(frozen=True)
class ReadinessInput:
    """One athlete's daily check-in.

    Subjective fields are 1-10. Soreness, fatigue and stress are
    "higher is worse"; the rest are "higher is better".
    """

    sleep: float
    soreness: float
    fatigue: float
    stress: float
    mood: float
    motivation: float
    hrv_ms: float | None = None
    hrv_baseline_ms: float | None = None
    resting_hr: float | None = None
    resting_hr_baseline: float | None = None
    day: date | None = None

    @property
    def hrv_deviation_pct(self) -> float | None:
        """HRV change from baseline in percent, rounded to 2 decimals."""
        if self.hrv_ms is None or not self.hrv_baseline_ms:
            return None
        return round((self.hrv_ms - self.hrv_baseline_ms) / self.hrv_baseline_ms * 100.0, 2)

    @property
    def rhr_deviation_bpm(self) -> float | None:
        if self.resting_hr is None or self.resting_hr_baseline is None:
            return None
        return self.resting_hr - self.resting_hr_baseline


@dataclass(frozen=True)
class ReadinessDecision:
    """Computed readiness answer; not persisted by the engine."""

    score: float
    category: ReadinessCategory
    subjective_score: float
    reasons: tuple[str, ...] = field(default_factory=tuple)

    @property
    def downgraded(self) -> bool:
        return self.score < self.subjective_score
