"""MultiSystemValidator: reconciles injury, protocol, readiness and schedule state."""

from __future__ import annotations

import logging

from physio_engine.config import EngineSettings
from physio_engine.modification.cross_training import allowed_modalities
from physio_engine.models.decision_trace import DecisionTrace, RuleResult, RuleStatus
from physio_engine.models.enums import Action
from physio_engine.models.snapshot import AthleteSnapshot
from physio_engine.models.validation import (
    ActionDecision,
    ValidationBlocker,
    ValidationResult,
    ValidationWarning,
)
from physio_engine.validation.precedence import PrecedenceStrategy, TierThenSeverity
from physio_engine.validation.registry import RuleRegistry

logger = logging.getLogger(__name__)

ALL_CLEAR = "All systems clear: proceed with the planned session."


class MultiSystemValidator:
    """Evaluates every validation rule in tier order and merges the findings.

    Usage:
        validator = MultiSystemValidator()
        result = validator.validate(snapshot)
        decision = validator.validate_action(snapshot, Action.FIELD_TEST)
    """

    def __init__(
        self,
        registry: RuleRegistry | None = None,
        precedence: PrecedenceStrategy | None = None,
        settings: EngineSettings | None = None,
    ) -> None:
        self.registry = registry or RuleRegistry()
        self.precedence = precedence or TierThenSeverity()
        self.settings = settings or EngineSettings()

        # Auto-discover rules if using default registry
        if registry is None:
            self.registry.discover_rules()

    def validate(self, snapshot: AthleteSnapshot) -> ValidationResult:
        """Run all rules against ``snapshot``.

        Returns:
            ValidationResult with blockers and warnings in precedence order,
            one recommendation per blocker (same order) followed by warning
            advice and a closing cross-training or all-clear line.
        """
        rule_results: list[RuleResult] = []
        blockers: list[ValidationBlocker] = []
        warnings: list[ValidationWarning] = []

        for rule in self.registry.get_all_rules():
            if not rule.has_required_data(snapshot):
                rule_results.append(
                    RuleResult(
                        rule_id=rule.rule_id,
                        status=RuleStatus.NOT_APPLICABLE,
                        explanation=f"Missing required data: {rule.required_data}",
                    )
                )
                continue

            findings = rule.evaluate(snapshot, self.settings)
            if findings is None or findings.is_empty:
                rule_results.append(
                    RuleResult(
                        rule_id=rule.rule_id,
                        status=RuleStatus.SKIPPED,
                        explanation="Rule produced no findings.",
                    )
                )
                continue

            blockers.extend(findings.blockers)
            warnings.extend(findings.warnings)
            rule_results.append(
                RuleResult(
                    rule_id=rule.rule_id,
                    status=RuleStatus.FIRED,
                    findings=findings,
                    explanation="; ".join(
                        [b.reason for b in findings.blockers] + [w.reason for w in findings.warnings]
                    ),
                )
            )

        ordered_blockers, ordered_warnings, notes = self.precedence.order(blockers, warnings)

        blocked: set[Action] = set()
        for blocker in ordered_blockers:
            blocked |= blocker.blocked_actions

        result = ValidationResult(
            blockers=tuple(ordered_blockers),
            warnings=tuple(ordered_warnings),
            recommendations=tuple(
                self._recommendations(snapshot, ordered_blockers, ordered_warnings)
            ),
            allowed_actions=frozenset(Action) - blocked,
            trace=DecisionTrace(rule_results=tuple(rule_results), precedence_notes=notes),
        )
        logger.info(
            "Validated %s: %d blocker(s), %d warning(s)",
            snapshot.athlete_id,
            len(result.blockers),
            len(result.warnings),
        )
        return result

    def validate_action(self, snapshot: AthleteSnapshot, action: Action) -> ActionDecision:
        """Is ``action`` allowed right now? Denied if any blocker lists it."""
        result = self.validate(snapshot)
        relevant = tuple(b for b in result.blockers if action in b.blocked_actions)
        return ActionDecision(
            action=action,
            allowed=not relevant,
            blockers=relevant,
            reasons=tuple(b.reason for b in relevant),
        )

    @staticmethod
    def _recommendations(
        snapshot: AthleteSnapshot,
        blockers: list[ValidationBlocker],
        warnings: list[ValidationWarning],
    ) -> list[str]:
        lines = [b.required_resolution for b in blockers]
        for warning in warnings:
            if warning.recommendation and warning.recommendation not in lines:
                lines.append(warning.recommendation)

        injuries = snapshot.active_injuries
        if injuries:
            modalities = allowed_modalities(injuries)
            if modalities:
                names = ", ".join(m.name.replace("_", " ").lower() for m in modalities)
                lines.append(f"Allowed cross-training: {names}.")
            else:
                lines.append("No cross-training modality is compatible with the current injuries.")
        elif not blockers and not warnings:
            lines.append(ALL_CLEAR)
        return lines
