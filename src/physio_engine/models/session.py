"""Planned sessions, their modifications and cross-training substitutes."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from physio_engine.models.enums import Modality, ModificationAction, SessionType


@dataclass(frozen=True)
class PlannedSession:
    """A scheduled session as planned by the coach or program.

    ``intensity_factor`` is relative to the planned intensity (1.0 = as planned).
    """

    session_type: SessionType
    duration_min: float
    intensity_factor: float = 1.0
    modality: Modality = Modality.RUNNING
    scheduled_for: date | None = None

    @property
    def is_running(self) -> bool:
        return self.modality == Modality.RUNNING and self.session_type != SessionType.REST


@dataclass(frozen=True)
class CrossTrainingRecommendation:
    """Equivalent volume of a substitute modality."""

    modality: Modality
    source_minutes: float
    equivalent_minutes: float
    retention_pct: float
    notes: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class SessionModification:
    """Outcome of modifying one planned session.

    ``modified`` is None only when the session was cancelled outright.
    """

    action: ModificationAction
    original: PlannedSession
    modified: PlannedSession | None
    reasons: tuple[str, ...] = field(default_factory=tuple)
    cross_training: CrossTrainingRecommendation | None = None

    @property
    def changed(self) -> bool:
        return self.action != ModificationAction.UNCHANGED
