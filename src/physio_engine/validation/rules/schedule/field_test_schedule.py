"""SCHEDULE rule: a fitness test is scheduled while a valid test is impossible.

A field or lactate test is only meaningful when the athlete is pain free
(pain ≤ 2), fully ready, rested from hard work for 48 h and not in the
ACWR danger zone.
"""

from __future__ import annotations

from datetime import timedelta

from physio_engine.config import EngineSettings
from physio_engine.models.enums import (
    PAIN_FIELD_TEST_MAX,
    Action,
    ReadinessCategory,
    RiskZone,
    Severity,
    ValidationTier,
)
from physio_engine.models.snapshot import AthleteSnapshot, ScheduledTest
from physio_engine.models.validation import RuleFindings
from physio_engine.validation.rules.base import ValidationRule


def unmet_test_conditions(
    snapshot: AthleteSnapshot, test: ScheduledTest, settings: EngineSettings
) -> list[str]:
    """Reasons a valid test cannot be run on ``test.scheduled_for``."""
    problems: list[str] = []

    painful = [i for i in snapshot.active_injuries if i.pain_level > PAIN_FIELD_TEST_MAX]
    if painful:
        worst = max(i.pain_level for i in painful)
        problems.append(f"injury pain {worst:g}/10 (max {PAIN_FIELD_TEST_MAX})")

    readiness = snapshot.readiness
    if readiness is not None and readiness.category != ReadinessCategory.PROCEED:
        problems.append(f"readiness {readiness.category.name}")

    if snapshot.last_hard_session is not None:
        gap_hours = (test.scheduled_for - snapshot.last_hard_session).days * 24
        if 0 <= gap_hours < settings.hard_session_lookback_hours:
            problems.append(f"hard session within {settings.hard_session_lookback_hours} h")

    if snapshot.load is not None and snapshot.load.zone == RiskZone.DANGER:
        problems.append(f"ACWR {snapshot.load.ratio:.2f} in danger zone")

    return problems


class FieldTestScheduleRule(ValidationRule):
    """Blocks upcoming tests whose preconditions are not met."""

    rule_id = "field_test_schedule"
    version = "1.0.0"
    tier = ValidationTier.SCHEDULE
    required_data = ["scheduled_tests"]

    def evaluate(self, snapshot: AthleteSnapshot, settings: EngineSettings) -> RuleFindings | None:
        horizon = snapshot.as_of + timedelta(days=settings.field_test_horizon_days)
        upcoming = sorted(
            (t for t in snapshot.scheduled_tests if snapshot.as_of <= t.scheduled_for <= horizon),
            key=lambda t: t.scheduled_for,
        )

        blockers = []
        for test in upcoming:
            problems = unmet_test_conditions(snapshot, test, settings)
            if not problems:
                continue
            blockers.append(self.blocker(
                Severity.MEDIUM,
                f"{test.name} on {test.scheduled_for.isoformat()} while: {'; '.join(problems)}",
                frozenset({Action.FIELD_TEST}),
                f"Reschedule the {test.name} on {test.scheduled_for.isoformat()} until "
                f"conditions for a valid test are met.",
            ))

        if not blockers:
            return None
        return RuleFindings(blockers=tuple(blockers))
