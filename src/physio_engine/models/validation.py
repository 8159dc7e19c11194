"""Validator outputs: blockers, warnings and the combined result."""

from __future__ import annotations

from dataclasses import dataclass, field

from physio_engine.models.decision_trace import DecisionTrace
from physio_engine.models.enums import Action, Severity, ValidationTier


@dataclass(frozen=True)
class ValidationBlocker:
    """A hard finding that denies every action in ``blocked_actions``.

    ``required_resolution`` is the one actionable sentence emitted as a
    recommendation for this blocker.
    """

    rule_id: str
    tier: ValidationTier
    severity: Severity
    reason: str
    blocked_actions: frozenset[Action]
    required_resolution: str


@dataclass(frozen=True)
class ValidationWarning:
    """A soft, advisory finding."""

    rule_id: str
    tier: ValidationTier
    severity: Severity
    reason: str
    recommendation: str = ""


@dataclass(frozen=True)
class RuleFindings:
    """What a single rule contributed."""

    blockers: tuple[ValidationBlocker, ...] = field(default_factory=tuple)
    warnings: tuple[ValidationWarning, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not self.blockers and not self.warnings


@dataclass(frozen=True)
class ValidationResult:
    """Ephemeral reconciliation of all rules for one snapshot."""

    blockers: tuple[ValidationBlocker, ...]
    warnings: tuple[ValidationWarning, ...]
    recommendations: tuple[str, ...]
    allowed_actions: frozenset[Action]
    trace: DecisionTrace = field(default_factory=DecisionTrace)

    @property
    def blocked_actions(self) -> frozenset[Action]:
        return frozenset(Action) - self.allowed_actions

    @property
    def is_clear(self) -> bool:
        return not self.blockers and not self.warnings

    def is_allowed(self, action: Action) -> bool:
        return action in self.allowed_actions


@dataclass(frozen=True)
class ActionDecision:
    """Answer to "is this action currently allowed?"."""

    action: Action
    allowed: bool
    blockers: tuple[ValidationBlocker, ...] = field(default_factory=tuple)
    reasons: tuple[str, ...] = field(default_factory=tuple)
