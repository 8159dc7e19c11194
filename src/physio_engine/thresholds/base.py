"""Abstract base class for threshold estimation strategies."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from physio_engine.models.enums import ConfidenceTier, ThresholdMethod
from physio_engine.models.thresholds import ThresholdPair


def downgrade(tier: ConfidenceTier, steps: int = 1) -> ConfidenceTier:
    """Lower a confidence tier by ``steps``, never below LOW."""
    return ConfidenceTier(max(ConfidenceTier.LOW, tier - steps))


class ThresholdStrategy(ABC):
    """Base class for LT1/LT2 estimation strategies.

    Each strategy turns one kind of measurement into a ThresholdPair and
    attaches a note for every confidence downgrade it applies.

    Subclasses must define:
        method: ThresholdMethod tag stamped on every estimate
        source_type: the measurement class this strategy accepts
        estimate(): the estimation logic
    """

    method: ThresholdMethod
    source_type: type

    def accepts(self, source: Any) -> bool:
        return isinstance(source, self.source_type)

    @abstractmethod
    def estimate(self, source: Any) -> ThresholdPair:
        """Estimate LT1 and LT2 from ``source``."""
        ...
