"""Shared test fixtures: lactate tests, load histories, check-ins, injuries, snapshots."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Callable

import pytest

from physio_engine.math.zones import generate_zones
from physio_engine.models.enums import (
    BodyRegion,
    ConfidenceTier,
    InjuryType,
    IntensityUnit,
    ReadinessCategory,
    ThresholdMethod,
)
from physio_engine.models.injury import InjuryConstraint
from physio_engine.models.load import LoadSample
from physio_engine.models.measurements import IncrementalTest, StageSample
from physio_engine.models.readiness import ReadinessDecision, ReadinessInput
from physio_engine.models.snapshot import AthleteSnapshot
from physio_engine.models.thresholds import ThresholdEstimate, ThresholdPair

TODAY = date(2026, 3, 2)

SCENARIO_A_INTENSITIES = [10.0, 11.0, 12.0, 13.0, 14.0, 15.0, 16.0]
SCENARIO_A_LACTATES = [1.2, 1.8, 2.4, 3.1, 4.2, 6.1, 8.5]
SCENARIO_A_HEART_RATES = [140.0, 150.0, 158.0, 165.0, 172.0, 180.0, 188.0]


@pytest.fixture
def scenario_a_stages() -> tuple[StageSample, ...]:
    """Seven-stage treadmill test, 10-16 km/h, classic exponential lactate rise."""
    return tuple(
        StageSample(intensity=x, heart_rate=hr, lactate=lac)
        for x, lac, hr in zip(
            SCENARIO_A_INTENSITIES, SCENARIO_A_LACTATES, SCENARIO_A_HEART_RATES
        )
    )


@pytest.fixture
def scenario_a_test(scenario_a_stages: tuple[StageSample, ...]) -> IncrementalTest:
    return IncrementalTest(stages=scenario_a_stages, test_date=date(2026, 2, 20))


@pytest.fixture
def scenario_b_samples() -> list[LoadSample]:
    """60 stable days at 60, then three days at 125 ending on TODAY."""
    start = TODAY - timedelta(days=62)
    loads = [60.0] * 60 + [125.0] * 3
    return [LoadSample(day=start + timedelta(days=i), load=v) for i, v in enumerate(loads)]


@pytest.fixture
def stable_samples() -> list[LoadSample]:
    """42 days of identical load ending on TODAY."""
    start = TODAY - timedelta(days=41)
    return [LoadSample(day=start + timedelta(days=i), load=55.0) for i in range(42)]


@pytest.fixture
def fresh_check_in() -> ReadinessInput:
    """Best possible subjective answers, HRV and RHR on baseline."""
    return ReadinessInput(
        sleep=10,
        soreness=1,
        fatigue=1,
        stress=1,
        mood=10,
        motivation=10,
        hrv_ms=80.0,
        hrv_baseline_ms=80.0,
        resting_hr=48.0,
        resting_hr_baseline=48.0,
    )


@pytest.fixture
def scenario_c_check_in() -> ReadinessInput:
    """Poor sleep, high soreness, HRV -46% and resting HR +10 bpm."""
    return ReadinessInput(
        sleep=3,
        soreness=8,
        fatigue=8,
        stress=7,
        mood=4,
        motivation=3,
        hrv_ms=54.0,
        hrv_baseline_ms=100.0,
        resting_hr=60.0,
        resting_hr_baseline=50.0,
    )


_DEFAULT_SCORES = {
    ReadinessCategory.PROCEED: 82.0,
    ReadinessCategory.MINOR_MOD: 60.0,
    ReadinessCategory.MAJOR_MOD: 40.0,
    ReadinessCategory.REST: 20.0,
}


@pytest.fixture
def decision_factory() -> Callable[..., ReadinessDecision]:
    """Factory fixture for readiness decisions.

    Usage:
        rest = decision_factory(ReadinessCategory.REST)
        low = decision_factory(ReadinessCategory.MINOR_MOD, score=52.0)
    """

    def _make(category: ReadinessCategory, score: float | None = None) -> ReadinessDecision:
        value = _DEFAULT_SCORES[category] if score is None else score
        return ReadinessDecision(score=value, category=category, subjective_score=value)

    return _make


@pytest.fixture
def proceed(decision_factory: Callable[..., ReadinessDecision]) -> ReadinessDecision:
    return decision_factory(ReadinessCategory.PROCEED)


@pytest.fixture
def gait_affected_injury() -> InjuryConstraint:
    """Achilles tendinopathy with pain 4/10 that changes running gait."""
    return InjuryConstraint(
        region=BodyRegion.ANKLE,
        pain_level=4,
        gait_affected=True,
        injury_type=InjuryType.ACHILLES_TENDINOPATHY,
    )


@pytest.fixture
def minor_knee_niggle() -> InjuryConstraint:
    return InjuryConstraint(region=BodyRegion.KNEE, pain_level=2)


@pytest.fixture
def current_thresholds() -> ThresholdPair:
    """Lab-measured pair with heart rates, measured ten days before TODAY."""
    lt1 = ThresholdEstimate(
        intensity=11.4,
        unit=IntensityUnit.KMH,
        confidence=ConfidenceTier.VERY_HIGH,
        method=ThresholdMethod.DMAX,
        heart_rate=153.0,
        lactate=2.0,
    )
    lt2 = ThresholdEstimate(
        intensity=13.65,
        unit=IntensityUnit.KMH,
        confidence=ConfidenceTier.VERY_HIGH,
        method=ThresholdMethod.DMAX,
        heart_rate=169.6,
        lactate=3.8,
    )
    return ThresholdPair(lt1=lt1, lt2=lt2, r_squared=0.999, measured_on=TODAY - timedelta(days=10))


@pytest.fixture
def ready_snapshot(current_thresholds: ThresholdPair, proceed: ReadinessDecision) -> AthleteSnapshot:
    """Healthy, ready athlete with current zones: nothing should block."""
    return AthleteSnapshot(
        athlete_id="runner-1",
        as_of=TODAY,
        readiness=proceed,
        thresholds=current_thresholds,
        zones=generate_zones(current_thresholds, max_hr=195.0, resting_hr=48.0),
    )


@pytest.fixture
def today() -> date:
    return TODAY
