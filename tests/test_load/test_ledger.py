"""Tests for the per-athlete daily load ledger."""

from __future__ import annotations

from datetime import date

import pytest

from physio_engine.load.ledger import LoadLedger
from physio_engine.models.load import LoadSample


class TestLoadLedger:
    def setup_method(self) -> None:
        self.ledger = LoadLedger()

    def test_samples_sorted_oldest_first(self) -> None:
        self.ledger.record("runner-1", date(2026, 3, 2), 50.0)
        self.ledger.record("runner-1", date(2026, 3, 1), 40.0)
        days = [s.day for s in self.ledger.samples("runner-1")]
        assert days == [date(2026, 3, 1), date(2026, 3, 2)]

    def test_same_day_resubmission_replaces(self) -> None:
        self.ledger.record("runner-1", date(2026, 3, 1), 40.0)
        self.ledger.record("runner-1", date(2026, 3, 1), 65.0)
        assert self.ledger.samples("runner-1") == (LoadSample(date(2026, 3, 1), 65.0),)

    def test_negative_load_rejected(self) -> None:
        with pytest.raises(ValueError):
            self.ledger.record("runner-1", date(2026, 3, 1), -5.0)

    def test_non_finite_load_rejected(self) -> None:
        with pytest.raises(ValueError):
            self.ledger.record("runner-1", date(2026, 3, 1), float("inf"))

    def test_record_many_and_latest_day(self) -> None:
        self.ledger.record_many(
            "runner-1",
            [LoadSample(date(2026, 3, 1), 40.0), LoadSample(date(2026, 3, 4), 55.0)],
        )
        assert self.ledger.latest_day("runner-1") == date(2026, 3, 4)
        assert self.ledger.athletes == ["runner-1"]

    def test_unknown_athlete_is_empty(self) -> None:
        assert self.ledger.samples("nobody") == ()
        assert self.ledger.latest_day("nobody") is None
