"""INJURY rule: gate running, testing and protocols on active injuries.

Pain thresholds (University of Delaware soreness rules):
    pain > 5 or altered gait → CRITICAL blocker on all running, tests,
                               protocols and program progression
    pain 3-5                 → HIGH blocker on running, tests and progression
    pain < 3                 → warning; reduced running allowed

Reference:
    Silbernagel et al. (2007). Continued sports activity, using a
    pain-monitoring model, during rehabilitation in patients with Achilles
    tendinopathy. Am J Sports Med 35(6):897-906.
"""

from __future__ import annotations

from physio_engine.config import EngineSettings
from physio_engine.models.enums import (
    Action,
    Severity,
    ValidationTier,
)
from physio_engine.models.injury import InjuryConstraint
from physio_engine.models.snapshot import AthleteSnapshot
from physio_engine.models.validation import RuleFindings
from physio_engine.validation.rules.base import (
    PROTOCOL_ACTIONS,
    RUNNING_ACTIONS,
    ValidationRule,
)


def injury_label(injury: InjuryConstraint) -> str:
    if injury.injury_type is not None:
        return f"{injury.injury_type.name} ({injury.region.name})"
    return f"{injury.region.name} injury"


class InjuryStateRule(ValidationRule):
    """Blocks running-type actions according to pain level and gait."""

    rule_id = "injury_state"
    version = "1.0.0"
    tier = ValidationTier.INJURY
    required_data = ["injuries"]

    def evaluate(self, snapshot: AthleteSnapshot, settings: EngineSettings) -> RuleFindings | None:
        injuries = snapshot.active_injuries
        if not injuries:
            return None

        blockers = []
        warnings = []
        for injury in injuries:
            label = injury_label(injury)
            if injury.is_severe:
                gait = " with altered gait" if injury.gait_affected else ""
                blockers.append(self.blocker(
                    Severity.CRITICAL,
                    f"{label}: pain {injury.pain_level:g}/10{gait}",
                    RUNNING_ACTIONS
                    | PROTOCOL_ACTIONS
                    | {Action.FIELD_TEST, Action.PROGRAM_PROGRESSION},
                    f"Stop all running for the {label}; get a physiotherapist assessment "
                    f"before resuming.",
                ))
            elif injury.requires_cross_training:
                blockers.append(self.blocker(
                    Severity.HIGH,
                    f"{label}: pain {injury.pain_level:g}/10",
                    RUNNING_ACTIONS | {Action.FIELD_TEST, Action.PROGRAM_PROGRESSION},
                    f"Replace running with cross-training until {label} pain is below 3/10.",
                ))
            elif injury.is_lower_limb:
                warnings.append(self.warning(
                    Severity.MEDIUM,
                    f"{label}: pain {injury.pain_level:g}/10",
                    "Run at half volume, easy intensity, and stop if pain rises during the session.",
                ))
            else:
                warnings.append(self.warning(
                    Severity.LOW,
                    f"{label}: pain {injury.pain_level:g}/10",
                    f"Monitor the {label}; avoid loading it in cross-training.",
                ))

        return RuleFindings(blockers=tuple(blockers), warnings=tuple(warnings))
