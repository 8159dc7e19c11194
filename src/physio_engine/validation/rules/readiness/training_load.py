"""READINESS rule: injury risk from the Acute:Chronic Workload Ratio.

Reference:
    Gabbett (2016). The training-injury prevention paradox: should athletes
    be training smarter and harder? Br J Sports Med 50(5):273-280.

Thresholds:
    ACWR >= 1.5  → blocker on quality sessions, tests and progression
    ACWR 1.3-1.5 → warning
    spike (>=30% rise within 3 days) → warning, independent of zone
"""

from __future__ import annotations

from physio_engine.config import EngineSettings
from physio_engine.models.enums import (
    ACWR_CAUTION_HIGH,
    ACWR_DANGER_THRESHOLD,
    Action,
    RiskZone,
    Severity,
    ValidationTier,
)
from physio_engine.models.snapshot import AthleteSnapshot
from physio_engine.models.validation import RuleFindings
from physio_engine.validation.rules.base import QUALITY_ACTIONS, ValidationRule


class TrainingLoadRule(ValidationRule):
    """Blocks or warns on elevated ACWR and load spikes."""

    rule_id = "training_load"
    version = "1.0.0"
    tier = ValidationTier.READINESS
    required_data = ["load"]

    def evaluate(self, snapshot: AthleteSnapshot, settings: EngineSettings) -> RuleFindings | None:
        load = snapshot.load
        assert load is not None  # guaranteed by required_data
        if load.is_low_confidence:
            return None  # Too little history to judge risk

        blockers = []
        warnings = []

        if load.zone == RiskZone.DANGER:
            blockers.append(self.blocker(
                Severity.HIGH,
                f"ACWR {load.ratio:.2f} exceeds danger threshold ({ACWR_DANGER_THRESHOLD})",
                QUALITY_ACTIONS | {Action.FIELD_TEST, Action.PROGRAM_PROGRESSION},
                f"Reduce training load until ACWR falls below {ACWR_CAUTION_HIGH}.",
            ))
        elif load.zone == RiskZone.CAUTION:
            warnings.append(self.warning(
                Severity.MEDIUM,
                f"ACWR {load.ratio:.2f} in caution zone ({ACWR_CAUTION_HIGH}-{ACWR_DANGER_THRESHOLD})",
                "Hold training load steady this week.",
            ))

        if load.spike:
            warnings.append(self.warning(
                Severity.MEDIUM,
                f"Training load spike: ACWR rose at least {settings.spike_fraction:.0%} "
                f"within {settings.spike_window_days} days",
                "Keep the next sessions easy to let the load settle.",
            ))

        if not blockers and not warnings:
            return None
        return RuleFindings(blockers=tuple(blockers), warnings=tuple(warnings))
