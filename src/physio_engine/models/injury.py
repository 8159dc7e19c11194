"""Injury constraints supplied by the physio workflow (read-only to the engine)."""

from __future__ import annotations

from dataclasses import dataclass, field

from physio_engine.models.enums import (
    LOWER_LIMB_REGIONS,
    PAIN_CROSS_TRAINING_ONLY,
    PAIN_STOP,
    BodyRegion,
    InjuryType,
    MovementRestriction,
)


@dataclass(frozen=True)
class InjuryConstraint:
    """An injury as reported by the athlete or physio."""

    region: BodyRegion
    pain_level: float  # 0-10
    active: bool = True
    movement_restrictions: frozenset[MovementRestriction] = field(default_factory=frozenset)
    gait_affected: bool = False
    injury_type: InjuryType | None = None

    @property
    def is_lower_limb(self) -> bool:
        return self.region in LOWER_LIMB_REGIONS

    @property
    def is_severe(self) -> bool:
        """Pain above the stop threshold or altered gait."""
        return self.pain_level > PAIN_STOP or self.gait_affected

    @property
    def requires_cross_training(self) -> bool:
        """Pain in the 3-5 band: cross-training only."""
        return PAIN_CROSS_TRAINING_ONLY <= self.pain_level <= PAIN_STOP


def active_injuries(injuries: tuple[InjuryConstraint, ...] | list[InjuryConstraint]) -> list[InjuryConstraint]:
    """Filter to active injuries, worst pain first."""
    return sorted(
        (i for i in injuries if i.active),
        key=lambda i: (not i.gait_affected, -i.pain_level),
    )
