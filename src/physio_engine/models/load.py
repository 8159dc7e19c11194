"""Daily load samples and the derived load/risk snapshot."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from physio_engine.models.enums import LoadConfidence, RiskZone


@dataclass(frozen=True)
class LoadSample:
    """Training stress for one calendar day."""

    day: date
    load: float


@dataclass(frozen=True)
class LoadState:
    """Acute/chronic load snapshot as of a given day.

    Derived from the ledger on demand; never stored as a source of truth.
    """

    as_of: date
    acute: float
    chronic: float
    ratio: float
    zone: RiskZone
    spike: bool
    confidence: LoadConfidence
    days_of_data: int
    monotony: float = 0.0
    strain: float = 0.0

    @property
    def is_low_confidence(self) -> bool:
        return self.confidence == LoadConfidence.LOW_CONFIDENCE
