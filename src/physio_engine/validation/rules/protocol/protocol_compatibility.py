"""PROTOCOL rule: structured-protocol incompatibilities.

A high-intensity double-threshold protocol (e.g. the Norwegian method)
must pause under any active injury. Protocols also need eligibility and
valid zones before they can start or continue.

Reference:
    Casado et al. (2022). Training Periodization, Methods, Intensity
    Distribution, and Volume in Highly Trained and Elite Distance Runners:
    A Systematic Review. Int J Sports Physiol Perform 17(6):820-833.
"""

from __future__ import annotations

from physio_engine.config import EngineSettings
from physio_engine.models.enums import (
    PROTOCOL_MIN_READINESS_SCORE,
    Severity,
    ValidationTier,
)
from physio_engine.models.snapshot import AthleteSnapshot
from physio_engine.models.validation import RuleFindings
from physio_engine.validation.rules.base import (
    PROTOCOL_ACTIONS,
    QUALITY_ACTIONS,
    ValidationRule,
)


class ProtocolCompatibilityRule(ValidationRule):
    """Pauses or blocks protocols that conflict with injury, eligibility or zones."""

    rule_id = "protocol_compatibility"
    version = "1.0.0"
    tier = ValidationTier.PROTOCOL
    required_data = ["protocol"]

    def evaluate(self, snapshot: AthleteSnapshot, settings: EngineSettings) -> RuleFindings | None:
        protocol = snapshot.protocol
        assert protocol is not None  # guaranteed by required_data
        blockers = []
        warnings = []

        if protocol.double_threshold and snapshot.has_active_injury:
            blockers.append(self.blocker(
                Severity.CRITICAL,
                f"{protocol.name} is a double-threshold protocol and an injury is active",
                PROTOCOL_ACTIONS | QUALITY_ACTIONS,
                f"Pause {protocol.name} until the injury is resolved.",
            ))

        if not protocol.eligible:
            detail = "; ".join(protocol.ineligibility_reasons) or "prerequisites not met"
            blockers.append(self.blocker(
                Severity.CRITICAL,
                f"Not eligible for {protocol.name}: {detail}",
                PROTOCOL_ACTIONS,
                f"Meet the {protocol.name} prerequisites before starting it.",
            ))

        if snapshot.zones is None:
            blockers.append(self.blocker(
                Severity.HIGH,
                f"{protocol.name} requires valid training zones",
                PROTOCOL_ACTIONS,
                f"Complete a threshold test to establish zones for {protocol.name}.",
            ))

        readiness = snapshot.readiness
        if (
            protocol.active
            and readiness is not None
            and readiness.score < PROTOCOL_MIN_READINESS_SCORE
        ):
            warnings.append(self.warning(
                Severity.HIGH,
                f"Readiness {readiness.score:.0f} is low for {protocol.name}",
                f"Swap today's {protocol.name} quality session for easy training.",
            ))

        if not blockers and not warnings:
            return None
        return RuleFindings(blockers=tuple(blockers), warnings=tuple(warnings))
