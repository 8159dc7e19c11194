"""Threshold estimator: picks the strategy that matches the measurement supplied."""

from __future__ import annotations

import logging

from physio_engine.config import EngineSettings
from physio_engine.models.measurements import FieldTestResult, IncrementalTest, RaceResult
from physio_engine.models.thresholds import ThresholdPair
from physio_engine.thresholds.base import ThresholdStrategy
from physio_engine.thresholds.field_test import FieldTestStrategy
from physio_engine.thresholds.incremental import DmaxStrategy
from physio_engine.thresholds.race_based import RaceResultStrategy

logger = logging.getLogger(__name__)

ThresholdSource = IncrementalTest | FieldTestResult | RaceResult


class ThresholdEstimator:
    """Dispatches a measurement to the first strategy that accepts it.

    Usage:
        estimator = ThresholdEstimator()
        pair = estimator.estimate(incremental_test)
    """

    def __init__(
        self,
        settings: EngineSettings | None = None,
        strategies: list[ThresholdStrategy] | None = None,
    ) -> None:
        self.settings = settings or EngineSettings()
        self.strategies = strategies or [
            DmaxStrategy(),
            FieldTestStrategy(self.settings),
            RaceResultStrategy(),
        ]

    def strategy_for(self, source: ThresholdSource) -> ThresholdStrategy:
        for strategy in self.strategies:
            if strategy.accepts(source):
                return strategy
        raise TypeError(f"No threshold strategy accepts {type(source).__name__}")

    def estimate(self, source: ThresholdSource) -> ThresholdPair:
        """Estimate LT1/LT2 from any supported measurement.

        Raises:
            TypeError: No strategy handles this measurement type.
            InsufficientDataError: Too few samples (incremental tests).
            InvalidThresholdOrderError: Derived LT1 not below LT2.
        """
        strategy = self.strategy_for(source)
        pair = strategy.estimate(source)
        logger.info(
            "%s estimate: LT1=%.2f LT2=%.2f confidence=%s auto_apply=%s",
            strategy.method.name,
            pair.lt1.intensity,
            pair.lt2.intensity,
            pair.confidence.name,
            pair.auto_apply,
        )
        for note in pair.notes:
            logger.debug("Estimate note %s: %s", note.code, note.message)
        return pair
