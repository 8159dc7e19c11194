"""Decision trace: audit trail of how the validator reached its result."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import auto, IntEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from physio_engine.models.validation import RuleFindings


class RuleStatus(IntEnum):
    """Whether a rule fired, was skipped, or was not applicable."""

    FIRED = auto()
    SKIPPED = auto()
    NOT_APPLICABLE = auto()


@dataclass(frozen=True)
class RuleResult:
    """Record of a single rule's evaluation during a validator call."""

    rule_id: str
    status: RuleStatus
    findings: RuleFindings | None = None
    explanation: str = ""


@dataclass(frozen=True)
class DecisionTrace:
    """Complete audit trail for a single validate() call.

    Records every rule's outcome so blocking decisions are fully
    explainable to coaches and physios.
    """

    rule_results: tuple[RuleResult, ...] = field(default_factory=tuple)
    precedence_notes: str = ""

    @property
    def fired_rule_ids(self) -> list[str]:
        return [r.rule_id for r in self.rule_results if r.status == RuleStatus.FIRED]
