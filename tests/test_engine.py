"""Tests for the PhysioEngine facade and its owned state."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from physio_engine.engine import PhysioEngine
from physio_engine.models.enums import (
    Action,
    BodyRegion,
    ConfidenceTier,
    ModificationAction,
    RaceDistance,
    ReadinessCategory,
    RiskZone,
    SessionType,
    ThresholdMethod,
)
from physio_engine.models.injury import InjuryConstraint
from physio_engine.models.load import LoadSample
from physio_engine.models.measurements import FieldTestResult, IncrementalTest, RaceResult
from physio_engine.models.readiness import ReadinessInput
from physio_engine.models.session import PlannedSession
from physio_engine.models.snapshot import ScheduledTest

DRIFTING_FIELD_TEST = FieldTestResult(
    duration_min=30,
    start_hr=150,
    average_hr=168,
    end_hr=180,
    max_hr=190,
    resting_hr=50,
    average_pace_s_per_km=240,
)


class TestThresholdWorkflow:
    def setup_method(self) -> None:
        self.engine = PhysioEngine()

    def test_estimate_does_not_touch_profile(self, scenario_a_test: IncrementalTest) -> None:
        pair = self.engine.estimate_thresholds(scenario_a_test)
        assert pair.method == ThresholdMethod.DMAX
        assert self.engine.profile("runner-1") is None

    def test_submit_applies_confident_estimate(self, scenario_a_test: IncrementalTest) -> None:
        outcome = self.engine.submit_thresholds(
            "runner-1", scenario_a_test, max_hr=195, resting_hr=48
        )
        assert outcome.applied
        profile = self.engine.profile("runner-1")
        assert profile.thresholds.confidence == ConfidenceTier.VERY_HIGH
        assert profile.zones.heart_rate

    def test_held_estimate_can_be_approved(self) -> None:
        outcome = self.engine.submit_thresholds(
            "runner-1", DRIFTING_FIELD_TEST, max_hr=190
        )
        assert not outcome.applied
        pair = self.engine.estimate_thresholds(DRIFTING_FIELD_TEST)
        profile = self.engine.approve_thresholds("runner-1", pair, "coach-ana", max_hr=190)
        assert profile.approved_by == "coach-ana"
        assert self.engine.profile("runner-1") == profile

    def test_race_estimate_has_no_heart_rate_zones(self) -> None:
        outcome = self.engine.submit_thresholds(
            "runner-1", RaceResult(RaceDistance.TEN_K, 2730.0)
        )
        assert outcome.applied
        assert outcome.profile.zones.heart_rate == ()


class TestLoadWorkflow:
    def setup_method(self) -> None:
        self.engine = PhysioEngine()

    def test_record_session_stores_trimp(self, today: date) -> None:
        sample = self.engine.record_session(
            "runner-1", today, duration_min=60, avg_hr=150, max_hr=190, resting_hr=50
        )
        assert sample == LoadSample(today, 108.1)

    def test_load_state_from_ledger(
        self, scenario_b_samples: list[LoadSample], today: date
    ) -> None:
        for sample in scenario_b_samples:
            self.engine.record_load("runner-1", sample.day, sample.load)
        state = self.engine.load_state("runner-1", today)
        assert state.zone == RiskZone.CAUTION
        assert state.ratio == pytest.approx(1.345, abs=0.01)

    def test_projection_leaves_ledger_untouched(
        self, stable_samples: list[LoadSample]
    ) -> None:
        for sample in stable_samples:
            self.engine.record_load("runner-1", sample.day, sample.load)
        before = self.engine.ledger.samples("runner-1")
        self.engine.project_load("runner-1", 200.0)
        assert self.engine.ledger.samples("runner-1") == before


class TestReadinessAndModification:
    def setup_method(self) -> None:
        self.engine = PhysioEngine()

    def test_readiness_without_history(self, fresh_check_in: ReadinessInput) -> None:
        decision = self.engine.readiness("runner-1", fresh_check_in)
        assert decision.category == ReadinessCategory.PROCEED

    def test_readiness_folds_in_load(
        self,
        fresh_check_in: ReadinessInput,
        scenario_b_samples: list[LoadSample],
        today: date,
    ) -> None:
        for sample in scenario_b_samples:
            self.engine.record_load("runner-1", sample.day, sample.load)
        decision = self.engine.readiness("runner-1", fresh_check_in, as_of=today)
        assert decision.category == ReadinessCategory.MINOR_MOD
        assert decision.downgraded

    def test_modify_session(self, fresh_check_in: ReadinessInput) -> None:
        decision = self.engine.readiness("runner-1", fresh_check_in)
        session = PlannedSession(session_type=SessionType.THRESHOLD, duration_min=50.0)
        injury = InjuryConstraint(region=BodyRegion.FOOT, pain_level=6)
        mod = self.engine.modify_session(session, decision, [injury])
        assert mod.action == ModificationAction.CANCELLED


class TestSnapshotAndValidation:
    def setup_method(self) -> None:
        self.engine = PhysioEngine()

    def test_snapshot_without_state(self, today: date) -> None:
        snapshot = self.engine.build_snapshot("runner-1", today)
        assert snapshot.load is None
        assert snapshot.thresholds is None
        assert not self.engine.validate_action(snapshot, Action.THRESHOLD_WORKOUT).allowed
        assert self.engine.validate_action(snapshot, Action.EASY_RUN).allowed

    def test_snapshot_uses_owned_state(
        self,
        scenario_a_test: IncrementalTest,
        stable_samples: list[LoadSample],
        today: date,
    ) -> None:
        self.engine.submit_thresholds("runner-1", scenario_a_test, max_hr=195, resting_hr=48)
        for sample in stable_samples:
            self.engine.record_load("runner-1", sample.day, sample.load)
        snapshot = self.engine.build_snapshot(
            "runner-1",
            today,
            scheduled_tests=[ScheduledTest(scheduled_for=today + timedelta(days=3))],
        )
        assert snapshot.load.zone == RiskZone.OPTIMAL
        assert snapshot.zones == self.engine.profile("runner-1").zones
        assert self.engine.validate(snapshot).is_clear
