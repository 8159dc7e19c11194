"""Threshold estimation strategies and the per-athlete threshold store."""

from physio_engine.thresholds.estimator import ThresholdEstimator
from physio_engine.thresholds.field_test import FieldTestStrategy
from physio_engine.thresholds.incremental import DmaxStrategy
from physio_engine.thresholds.race_based import RaceResultStrategy
from physio_engine.thresholds.store import (
    AthleteThresholdProfile,
    ProposalOutcome,
    ThresholdStore,
)

__all__ = [
    "AthleteThresholdProfile",
    "DmaxStrategy",
    "FieldTestStrategy",
    "ProposalOutcome",
    "RaceResultStrategy",
    "ThresholdEstimator",
    "ThresholdStore",
]
