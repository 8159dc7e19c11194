"""READINESS rule: act on today's readiness decision."""

from __future__ import annotations

from physio_engine.config import EngineSettings
from physio_engine.models.enums import Action, ReadinessCategory, Severity, ValidationTier
from physio_engine.models.snapshot import AthleteSnapshot
from physio_engine.models.validation import RuleFindings
from physio_engine.validation.rules.base import QUALITY_ACTIONS, ValidationRule


class ReadinessStateRule(ValidationRule):
    """REST blocks quality work; MAJOR_MOD and MINOR_MOD warn."""

    rule_id = "readiness_state"
    version = "1.0.0"
    tier = ValidationTier.READINESS
    required_data = ["readiness"]

    def evaluate(self, snapshot: AthleteSnapshot, settings: EngineSettings) -> RuleFindings | None:
        readiness = snapshot.readiness
        assert readiness is not None  # guaranteed by required_data
        summary = f"Readiness {readiness.score:.0f}/100 ({readiness.category.name})"

        if readiness.category == ReadinessCategory.REST:
            return RuleFindings(blockers=(self.blocker(
                Severity.HIGH,
                summary,
                QUALITY_ACTIONS
                | {Action.LONG_RUN, Action.FIELD_TEST, Action.PROGRAM_PROGRESSION},
                "Take a full rest day and reassess readiness tomorrow.",
            ),))

        if readiness.category == ReadinessCategory.MAJOR_MOD:
            return RuleFindings(warnings=(self.warning(
                Severity.HIGH,
                summary,
                "Replace today's session with active recovery.",
            ),))

        if readiness.category == ReadinessCategory.MINOR_MOD:
            return RuleFindings(warnings=(self.warning(
                Severity.MEDIUM,
                summary,
                f"Reduce today's volume and intensity by {settings.minor_mod_reduction:.0%}.",
            ),))

        return None
