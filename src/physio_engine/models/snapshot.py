"""Frozen athlete snapshot: everything the validator reads for one query."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING

from physio_engine.models.enums import SessionType
from physio_engine.models.injury import InjuryConstraint, active_injuries

if TYPE_CHECKING:
    from physio_engine.math.zones import ZoneTable
    from physio_engine.models.load import LoadState
    from physio_engine.models.readiness import ReadinessDecision
    from physio_engine.models.thresholds import ThresholdPair


@dataclass(frozen=True)
class ProtocolState:
    """An active or requested structured training protocol.

    ``double_threshold`` marks high-intensity double-threshold protocols
    (e.g. the Norwegian method) which must pause under any active injury.
    """

    name: str
    active: bool = True
    double_threshold: bool = False
    eligible: bool = True
    ineligibility_reasons: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ScheduledTest:
    """A fitness test on the athlete's calendar."""

    scheduled_for: date
    name: str = "field test"
    session_type: SessionType = SessionType.FIELD_TEST


@dataclass(frozen=True)
class AthleteSnapshot:
    """Immutable snapshot of the collaborator-supplied state for one athlete.

    Freezing prevents mutation bugs inside validation rules.
    """

    athlete_id: str
    as_of: date
    injuries: tuple[InjuryConstraint, ...] = field(default_factory=tuple)
    readiness: ReadinessDecision | None = None
    load: LoadState | None = None
    protocol: ProtocolState | None = None
    thresholds: ThresholdPair | None = None
    zones: ZoneTable | None = None
    last_hard_session: date | None = None
    scheduled_tests: tuple[ScheduledTest, ...] = field(default_factory=tuple)

    @property
    def active_injuries(self) -> list[InjuryConstraint]:
        return active_injuries(self.injuries)

    @property
    def has_active_injury(self) -> bool:
        return any(i.active for i in self.injuries)
