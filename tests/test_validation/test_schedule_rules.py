"""Tests for the schedule-tier rules: field-test preconditions and threshold age."""

from __future__ import annotations

from dataclasses import replace
from datetime import date, timedelta
from typing import Callable

from physio_engine.config import EngineSettings
from physio_engine.models.enums import Action, ReadinessCategory, Severity
from physio_engine.models.injury import InjuryConstraint
from physio_engine.models.readiness import ReadinessDecision
from physio_engine.models.snapshot import AthleteSnapshot, ScheduledTest
from physio_engine.validation.rules.schedule.field_test_schedule import (
    FieldTestScheduleRule,
    unmet_test_conditions,
)
from physio_engine.validation.rules.schedule.threshold_currency import ThresholdCurrencyRule


class TestFieldTestScheduleRule:
    def setup_method(self) -> None:
        self.rule = FieldTestScheduleRule()
        self.settings = EngineSettings()

    def _with_test(
        self, snapshot: AthleteSnapshot, in_days: int, **changes: object
    ) -> AthleteSnapshot:
        test = ScheduledTest(
            scheduled_for=snapshot.as_of + timedelta(days=in_days), name="30-min TT"
        )
        return replace(snapshot, scheduled_tests=(test,), **changes)

    def test_no_tests_not_applicable(self, ready_snapshot: AthleteSnapshot) -> None:
        assert not self.rule.has_required_data(ready_snapshot)

    def test_ready_athlete_can_test(self, ready_snapshot: AthleteSnapshot) -> None:
        assert self.rule.evaluate(self._with_test(ready_snapshot, 3), self.settings) is None

    def test_not_ready_blocks_upcoming_test(
        self,
        ready_snapshot: AthleteSnapshot,
        decision_factory: Callable[..., ReadinessDecision],
    ) -> None:
        snapshot = self._with_test(
            ready_snapshot, 2, readiness=decision_factory(ReadinessCategory.MINOR_MOD)
        )
        (blocker,) = self.rule.evaluate(snapshot, self.settings).blockers
        assert blocker.severity == Severity.MEDIUM
        assert blocker.blocked_actions == frozenset({Action.FIELD_TEST})
        assert blocker.reason == "30-min TT on 2026-03-04 while: readiness MINOR_MOD"

    def test_tests_beyond_horizon_ignored(
        self,
        ready_snapshot: AthleteSnapshot,
        decision_factory: Callable[..., ReadinessDecision],
    ) -> None:
        snapshot = self._with_test(
            ready_snapshot, 10, readiness=decision_factory(ReadinessCategory.REST)
        )
        assert self.rule.evaluate(snapshot, self.settings) is None

    def test_hard_session_the_day_before_blocks(self, ready_snapshot: AthleteSnapshot) -> None:
        snapshot = self._with_test(ready_snapshot, 3)
        test_day = snapshot.scheduled_tests[0].scheduled_for
        snapshot = replace(snapshot, last_hard_session=test_day - timedelta(days=1))
        problems = unmet_test_conditions(snapshot, snapshot.scheduled_tests[0], self.settings)
        assert problems == ["hard session within 48 h"]

    def test_hard_session_two_days_before_is_fine(self, ready_snapshot: AthleteSnapshot) -> None:
        snapshot = self._with_test(ready_snapshot, 3)
        test_day = snapshot.scheduled_tests[0].scheduled_for
        snapshot = replace(snapshot, last_hard_session=test_day - timedelta(days=2))
        assert unmet_test_conditions(snapshot, snapshot.scheduled_tests[0], self.settings) == []

    def test_painful_injury_listed(
        self, ready_snapshot: AthleteSnapshot, gait_affected_injury: InjuryConstraint
    ) -> None:
        snapshot = self._with_test(ready_snapshot, 1, injuries=(gait_affected_injury,))
        problems = unmet_test_conditions(snapshot, snapshot.scheduled_tests[0], self.settings)
        assert problems == ["injury pain 4/10 (max 2)"]


class TestThresholdCurrencyRule:
    def setup_method(self) -> None:
        self.rule = ThresholdCurrencyRule()
        self.settings = EngineSettings()

    def test_always_applicable(self, ready_snapshot: AthleteSnapshot) -> None:
        assert self.rule.has_required_data(replace(ready_snapshot, thresholds=None))

    def test_current_thresholds_pass(self, ready_snapshot: AthleteSnapshot) -> None:
        assert self.rule.evaluate(ready_snapshot, self.settings) is None

    def test_missing_thresholds_block_threshold_work(self, ready_snapshot: AthleteSnapshot) -> None:
        snapshot = replace(ready_snapshot, thresholds=None, zones=None)
        (blocker,) = self.rule.evaluate(snapshot, self.settings).blockers
        assert blocker.severity == Severity.HIGH
        assert blocker.blocked_actions == frozenset(
            {Action.THRESHOLD_WORKOUT, Action.START_PROTOCOL}
        )

    def test_stale_thresholds_warn(self, ready_snapshot: AthleteSnapshot) -> None:
        snapshot = replace(ready_snapshot, as_of=date(2026, 6, 1))
        findings = self.rule.evaluate(snapshot, self.settings)
        assert not findings.blockers
        (warning,) = findings.warnings
        assert warning.severity == Severity.LOW
        assert warning.reason == "Thresholds are 101 days old (limit 56)"
