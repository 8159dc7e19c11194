"""Tests for the multi-system validator: ordering, allowed actions, trace."""

from __future__ import annotations

from dataclasses import replace
from datetime import timedelta
from typing import Callable

import pytest

from physio_engine.models.decision_trace import RuleStatus
from physio_engine.models.enums import (
    Action,
    BodyRegion,
    ReadinessCategory,
    Severity,
    ValidationTier,
)
from physio_engine.models.injury import InjuryConstraint
from physio_engine.models.readiness import ReadinessDecision
from physio_engine.models.snapshot import AthleteSnapshot, ProtocolState, ScheduledTest
from physio_engine.validation.validator import ALL_CLEAR, MultiSystemValidator


@pytest.fixture(scope="module")
def validator() -> MultiSystemValidator:
    return MultiSystemValidator()


@pytest.fixture
def severe_knee() -> InjuryConstraint:
    return InjuryConstraint(region=BodyRegion.KNEE, pain_level=6)


class TestValidate:
    def test_ready_athlete_is_clear(
        self, validator: MultiSystemValidator, ready_snapshot: AthleteSnapshot
    ) -> None:
        result = validator.validate(ready_snapshot)
        assert result.is_clear
        assert result.recommendations == (ALL_CLEAR,)
        assert result.allowed_actions == frozenset(Action)

    def test_trace_records_every_rule(
        self, validator: MultiSystemValidator, ready_snapshot: AthleteSnapshot
    ) -> None:
        statuses = {
            r.rule_id: r.status for r in validator.validate(ready_snapshot).trace.rule_results
        }
        assert statuses == {
            "injury_state": RuleStatus.NOT_APPLICABLE,
            "protocol_compatibility": RuleStatus.NOT_APPLICABLE,
            "readiness_state": RuleStatus.SKIPPED,
            "training_load": RuleStatus.NOT_APPLICABLE,
            "field_test_schedule": RuleStatus.NOT_APPLICABLE,
            "threshold_currency": RuleStatus.SKIPPED,
        }

    def test_injury_outranks_everything(
        self,
        validator: MultiSystemValidator,
        ready_snapshot: AthleteSnapshot,
        severe_knee: InjuryConstraint,
        decision_factory: Callable[..., ReadinessDecision],
    ) -> None:
        snapshot = replace(
            ready_snapshot,
            injuries=(severe_knee,),
            readiness=decision_factory(ReadinessCategory.REST),
            protocol=ProtocolState(name="Norwegian double threshold", double_threshold=True),
        )
        result = validator.validate(snapshot)
        tiers = [b.tier for b in result.blockers]
        assert tiers[0] == ValidationTier.INJURY
        assert tiers == sorted(tiers)
        assert result.blockers[1].tier == ValidationTier.PROTOCOL
        assert result.blockers[1].severity == Severity.CRITICAL
        assert result.recommendations[0].startswith("Stop all running for the KNEE injury")
        assert result.trace.fired_rule_ids == [
            "injury_state",
            "protocol_compatibility",
            "readiness_state",
        ]

    def test_one_recommendation_per_blocker_in_order(
        self,
        validator: MultiSystemValidator,
        ready_snapshot: AthleteSnapshot,
        severe_knee: InjuryConstraint,
    ) -> None:
        snapshot = replace(ready_snapshot, injuries=(severe_knee,), thresholds=None)
        result = validator.validate(snapshot)
        resolutions = [b.required_resolution for b in result.blockers]
        assert list(result.recommendations[: len(resolutions)]) == resolutions

    def test_same_named_tests_each_get_a_recommendation(
        self,
        validator: MultiSystemValidator,
        ready_snapshot: AthleteSnapshot,
        decision_factory: Callable[..., ReadinessDecision],
    ) -> None:
        tests = tuple(
            ScheduledTest(scheduled_for=ready_snapshot.as_of + timedelta(days=d), name="30-min TT")
            for d in (2, 4)
        )
        snapshot = replace(
            ready_snapshot,
            scheduled_tests=tests,
            readiness=decision_factory(ReadinessCategory.MINOR_MOD),
        )
        result = validator.validate(snapshot)
        assert len(result.blockers) == 2
        resolutions = [b.required_resolution for b in result.blockers]
        assert list(result.recommendations[:2]) == resolutions
        assert resolutions[0] != resolutions[1]

    def test_injured_athlete_gets_cross_training_options(
        self,
        validator: MultiSystemValidator,
        ready_snapshot: AthleteSnapshot,
        gait_affected_injury: InjuryConstraint,
    ) -> None:
        result = validator.validate(replace(ready_snapshot, injuries=(gait_affected_injury,)))
        assert result.recommendations[-1].startswith(
            "Allowed cross-training: deep water running"
        )
        assert "anti gravity treadmill" not in result.recommendations[-1]

    def test_moderate_pain_blocks_running_not_cross_training(
        self, validator: MultiSystemValidator, ready_snapshot: AthleteSnapshot
    ) -> None:
        injury = InjuryConstraint(region=BodyRegion.KNEE, pain_level=4)
        result = validator.validate(replace(ready_snapshot, injuries=(injury,)))
        assert not result.is_allowed(Action.EASY_RUN)
        assert not result.is_allowed(Action.FIELD_TEST)
        assert not result.is_allowed(Action.PROGRAM_PROGRESSION)
        assert result.is_allowed(Action.CROSS_TRAINING)
        assert result.is_allowed(Action.CONTINUE_PROTOCOL)

    def test_severe_pain_also_blocks_protocols(
        self,
        validator: MultiSystemValidator,
        ready_snapshot: AthleteSnapshot,
        severe_knee: InjuryConstraint,
    ) -> None:
        result = validator.validate(replace(ready_snapshot, injuries=(severe_knee,)))
        assert Action.START_PROTOCOL in result.blocked_actions
        assert Action.CONTINUE_PROTOCOL in result.blocked_actions
        assert result.allowed_actions == frozenset({Action.CROSS_TRAINING})

    def test_warnings_leave_actions_allowed(
        self,
        validator: MultiSystemValidator,
        ready_snapshot: AthleteSnapshot,
        decision_factory: Callable[..., ReadinessDecision],
    ) -> None:
        snapshot = replace(ready_snapshot, readiness=decision_factory(ReadinessCategory.MINOR_MOD))
        result = validator.validate(snapshot)
        assert not result.blockers
        assert len(result.warnings) == 1
        assert result.allowed_actions == frozenset(Action)
        assert ALL_CLEAR not in result.recommendations

    def test_deterministic(
        self,
        validator: MultiSystemValidator,
        ready_snapshot: AthleteSnapshot,
        severe_knee: InjuryConstraint,
    ) -> None:
        snapshot = replace(ready_snapshot, injuries=(severe_knee,), thresholds=None)
        assert validator.validate(snapshot) == validator.validate(snapshot)


class TestValidateAction:
    def test_allowed_action(
        self, validator: MultiSystemValidator, ready_snapshot: AthleteSnapshot
    ) -> None:
        decision = validator.validate_action(ready_snapshot, Action.FIELD_TEST)
        assert decision.allowed
        assert decision.reasons == ()

    def test_denied_action_lists_only_relevant_blockers(
        self,
        validator: MultiSystemValidator,
        ready_snapshot: AthleteSnapshot,
        minor_knee_niggle: InjuryConstraint,
    ) -> None:
        snapshot = replace(ready_snapshot, thresholds=None, injuries=(minor_knee_niggle,))
        decision = validator.validate_action(snapshot, Action.THRESHOLD_WORKOUT)
        assert not decision.allowed
        assert decision.reasons == ("No threshold estimate on file",)
        assert validator.validate_action(snapshot, Action.EASY_RUN).allowed
