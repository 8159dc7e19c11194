"""Abstract base class for all multi-system validation rules."""

from __future__ import annotations

from abc import ABC, abstractmethod

from physio_engine.config import EngineSettings
from physio_engine.models.enums import Action, Severity, ValidationTier
from physio_engine.models.snapshot import AthleteSnapshot
from physio_engine.models.validation import RuleFindings, ValidationBlocker, ValidationWarning

RUNNING_ACTIONS = frozenset({
    Action.EASY_RUN,
    Action.LONG_RUN,
    Action.THRESHOLD_WORKOUT,
    Action.INTERVAL_WORKOUT,
})

QUALITY_ACTIONS = frozenset({
    Action.THRESHOLD_WORKOUT,
    Action.INTERVAL_WORKOUT,
})

PROTOCOL_ACTIONS = frozenset({
    Action.START_PROTOCOL,
    Action.CONTINUE_PROTOCOL,
})


class ValidationRule(ABC):
    """Base class for validator rules.

    Each rule inspects one athlete system (injury, protocol, readiness,
    load, schedule) and contributes zero or more blockers and warnings.
    Rules are discovered automatically by the RuleRegistry and evaluated
    in tier order by the MultiSystemValidator.

    Subclasses must define:
        rule_id: unique identifier (e.g. "injury_state")
        version: semantic version string
        tier: ValidationTier (INJURY, PROTOCOL, READINESS, SCHEDULE)
        required_data: list of AthleteSnapshot field names needed by this rule
        evaluate(): the rule's decision logic
    """

    rule_id: str
    version: str
    tier: ValidationTier
    required_data: list[str]

    def has_required_data(self, snapshot: AthleteSnapshot) -> bool:
        """Check that all required AthleteSnapshot fields are present."""
        for field_name in self.required_data:
            value = getattr(snapshot, field_name, None)
            if value is None:
                return False
            # Also treat empty sequences as missing data
            if isinstance(value, (list, tuple)) and len(value) == 0:
                return False
        return True

    @abstractmethod
    def evaluate(self, snapshot: AthleteSnapshot, settings: EngineSettings) -> RuleFindings | None:
        """Evaluate this rule against the snapshot.

        Returns RuleFindings if the rule has something to say, or None.
        """
        ...

    def blocker(
        self,
        severity: Severity,
        reason: str,
        blocked_actions: frozenset[Action],
        required_resolution: str,
    ) -> ValidationBlocker:
        return ValidationBlocker(
            rule_id=self.rule_id,
            tier=self.tier,
            severity=severity,
            reason=reason,
            blocked_actions=frozenset(blocked_actions),
            required_resolution=required_resolution,
        )

    def warning(self, severity: Severity, reason: str, recommendation: str = "") -> ValidationWarning:
        return ValidationWarning(
            rule_id=self.rule_id,
            tier=self.tier,
            severity=severity,
            reason=reason,
            recommendation=recommendation,
        )
