"""SCHEDULE rule: thresholds must exist and be recent enough to trust zones."""

from __future__ import annotations

from physio_engine.config import EngineSettings
from physio_engine.models.enums import Action, Severity, ValidationTier
from physio_engine.models.snapshot import AthleteSnapshot
from physio_engine.models.validation import RuleFindings
from physio_engine.validation.rules.base import ValidationRule


class ThresholdCurrencyRule(ValidationRule):
    """Blocks threshold work without thresholds; warns when they are stale."""

    rule_id = "threshold_currency"
    version = "1.0.0"
    tier = ValidationTier.SCHEDULE
    required_data: list[str] = []

    def evaluate(self, snapshot: AthleteSnapshot, settings: EngineSettings) -> RuleFindings | None:
        thresholds = snapshot.thresholds
        if thresholds is None:
            return RuleFindings(blockers=(self.blocker(
                Severity.HIGH,
                "No threshold estimate on file",
                frozenset({Action.THRESHOLD_WORKOUT, Action.START_PROTOCOL}),
                "Complete a lactate test, field test or race to establish thresholds.",
            ),))

        if thresholds.measured_on is None:
            return None

        age_days = (snapshot.as_of - thresholds.measured_on).days
        if age_days > settings.threshold_stale_days:
            return RuleFindings(warnings=(self.warning(
                Severity.LOW,
                f"Thresholds are {age_days} days old (limit {settings.threshold_stale_days})",
                "Schedule a new threshold test to refresh training zones.",
            ),))
        return None
