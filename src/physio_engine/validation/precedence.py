"""Precedence strategies for ordering validator findings."""

from __future__ import annotations

from abc import ABC, abstractmethod

from physio_engine.models.validation import ValidationBlocker, ValidationWarning


class PrecedenceStrategy(ABC):
    """Base class for finding-ordering strategies."""

    @abstractmethod
    def order(
        self,
        blockers: list[ValidationBlocker],
        warnings: list[ValidationWarning],
    ) -> tuple[list[ValidationBlocker], list[ValidationWarning], str]:
        """Order blockers and warnings by precedence.

        Returns the ordered blockers, the ordered warnings and a
        human-readable note for the decision trace.
        """
        ...


class TierThenSeverity(PrecedenceStrategy):
    """Tier first, severity second.

    Tier hierarchy (highest first):
        0. INJURY: always listed first
        1. PROTOCOL
        2. READINESS
        3. SCHEDULE

    Severity only breaks ties within a tier, so an injury blocker outranks
    a readiness finding even when the readiness finding is more severe.
    Equal findings keep rule evaluation order (stable sort).
    """

    def order(
        self,
        blockers: list[ValidationBlocker],
        warnings: list[ValidationWarning],
    ) -> tuple[list[ValidationBlocker], list[ValidationWarning], str]:
        ordered_blockers = sorted(blockers, key=lambda b: (b.tier, -b.severity))
        ordered_warnings = sorted(warnings, key=lambda w: (w.tier, -w.severity))

        if ordered_blockers:
            top = ordered_blockers[0]
            note = (
                f"{len(ordered_blockers)} blocker(s); highest precedence "
                f"{top.tier.name}/{top.severity.name} from {top.rule_id}"
            )
        elif ordered_warnings:
            note = f"No blockers; {len(ordered_warnings)} warning(s)"
        else:
            note = "No findings."
        return ordered_blockers, ordered_warnings, note
