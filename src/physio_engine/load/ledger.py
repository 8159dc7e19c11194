"""Append-only daily load ledger, one series per athlete.

Writes are a last-writer-wins upsert keyed by (athlete, date): a same-day
resubmission replaces the earlier value, so recomputation never double
counts a corrected day.
"""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import Iterable

from physio_engine.models.load import LoadSample

logger = logging.getLogger(__name__)


class LoadLedger:
    """In-memory store of daily load samples keyed by athlete id."""

    def __init__(self) -> None:
        self._samples: dict[str, dict[date, float]] = {}

    def record(self, athlete_id: str, day: date, load: float) -> LoadSample:
        """Record (or correct) one day's load for an athlete.

        Raises:
            ValueError: Load is negative or not a finite number.
        """
        if not math.isfinite(load) or load < 0:
            raise ValueError(f"Daily load must be a non-negative number, got {load}")
        series = self._samples.setdefault(athlete_id, {})
        if day in series:
            logger.debug(
                "Replacing load for %s on %s: %.1f -> %.1f",
                athlete_id,
                day.isoformat(),
                series[day],
                load,
            )
        series[day] = float(load)
        return LoadSample(day=day, load=float(load))

    def record_many(self, athlete_id: str, samples: Iterable[LoadSample]) -> None:
        for sample in samples:
            self.record(athlete_id, sample.day, sample.load)

    def samples(self, athlete_id: str) -> tuple[LoadSample, ...]:
        """All recorded samples for an athlete, oldest first."""
        series = self._samples.get(athlete_id, {})
        return tuple(LoadSample(day=d, load=series[d]) for d in sorted(series))

    def latest_day(self, athlete_id: str) -> date | None:
        series = self._samples.get(athlete_id)
        if not series:
            return None
        return max(series)

    @property
    def athletes(self) -> list[str]:
        return sorted(self._samples)
