"""PhysioEngine: facade over the engine components and its two pieces of owned state.

Owned state:
    - the daily LoadSample ledger (last-writer-wins per athlete and day)
    - the current threshold/zone profile per athlete (replace-on-write)

Everything else is computed on demand from caller-supplied inputs.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable

from physio_engine.config import EngineSettings
from physio_engine.load.ledger import LoadLedger
from physio_engine.load.model import compute_load_state, project_load_state
from physio_engine.math.training_load import calculate_trimp
from physio_engine.modification.workout_modifier import modify_session
from physio_engine.models.enums import Action
from physio_engine.models.injury import InjuryConstraint
from physio_engine.models.load import LoadSample, LoadState
from physio_engine.models.readiness import ReadinessDecision, ReadinessInput
from physio_engine.models.session import PlannedSession, SessionModification
from physio_engine.models.snapshot import AthleteSnapshot, ProtocolState, ScheduledTest
from physio_engine.models.thresholds import ThresholdPair
from physio_engine.models.validation import ActionDecision, ValidationResult
from physio_engine.readiness.scorer import score_readiness
from physio_engine.thresholds.estimator import ThresholdEstimator, ThresholdSource
from physio_engine.thresholds.store import (
    AthleteThresholdProfile,
    ProposalOutcome,
    ThresholdStore,
)
from physio_engine.validation.validator import MultiSystemValidator

logger = logging.getLogger(__name__)


class PhysioEngine:
    """Single entry point used by the surrounding coaching application.

    Usage:
        engine = PhysioEngine()
        outcome = engine.submit_thresholds("athlete-1", incremental_test, max_hr=195)
        engine.record_load("athlete-1", date(2026, 3, 1), 62.0)
        decision = engine.readiness("athlete-1", check_in)
        result = engine.validate(engine.build_snapshot("athlete-1", date.today()))
    """

    def __init__(
        self,
        settings: EngineSettings | None = None,
        ledger: LoadLedger | None = None,
        store: ThresholdStore | None = None,
        estimator: ThresholdEstimator | None = None,
        validator: MultiSystemValidator | None = None,
    ) -> None:
        self.settings = settings or EngineSettings()
        self.ledger = ledger or LoadLedger()
        self.store = store or ThresholdStore()
        self.estimator = estimator or ThresholdEstimator(self.settings)
        self.validator = validator or MultiSystemValidator(settings=self.settings)

    # -- thresholds ---------------------------------------------------------

    def estimate_thresholds(self, source: ThresholdSource) -> ThresholdPair:
        """Estimate LT1/LT2 without touching the athlete's profile."""
        return self.estimator.estimate(source)

    def submit_thresholds(
        self,
        athlete_id: str,
        source: ThresholdSource,
        max_hr: float | None = None,
        resting_hr: float = 0.0,
        max_intensity: float | None = None,
    ) -> ProposalOutcome:
        """Estimate thresholds and apply them if confidence allows."""
        pair = self.estimator.estimate(source)
        return self.store.propose(athlete_id, pair, max_hr, resting_hr, max_intensity)

    def approve_thresholds(
        self,
        athlete_id: str,
        thresholds: ThresholdPair,
        approved_by: str,
        max_hr: float | None = None,
        resting_hr: float = 0.0,
        max_intensity: float | None = None,
    ) -> AthleteThresholdProfile:
        """Coach approval of a held (low-confidence or self-reported) estimate."""
        return self.store.approve(
            athlete_id, thresholds, approved_by, max_hr, resting_hr, max_intensity
        )

    def profile(self, athlete_id: str) -> AthleteThresholdProfile | None:
        return self.store.current(athlete_id)

    # -- load -----------------------------------------------------------------

    def record_load(self, athlete_id: str, day: date, load: float) -> LoadSample:
        """Upsert one day's load (same-day resubmission replaces)."""
        return self.ledger.record(athlete_id, day, load)

    def record_session(
        self,
        athlete_id: str,
        day: date,
        duration_min: float,
        avg_hr: float,
        max_hr: float,
        resting_hr: float,
        sex: str = "M",
    ) -> LoadSample:
        """Record a day's single completed session as its Banister TRIMP load."""
        trimp = calculate_trimp(duration_min, avg_hr, max_hr, resting_hr, sex)
        return self.ledger.record(athlete_id, day, round(trimp, 1))

    def load_state(self, athlete_id: str, as_of: date | None = None) -> LoadState:
        return compute_load_state(self.ledger.samples(athlete_id), as_of, self.settings)

    def project_load(
        self, athlete_id: str, planned_load: float, day: date | None = None
    ) -> LoadState:
        """Preview the load state if ``planned_load`` were added; nothing is stored."""
        return project_load_state(
            self.ledger.samples(athlete_id), planned_load, day, self.settings
        )

    # -- readiness & modification --------------------------------------------

    def readiness(
        self, athlete_id: str, inputs: ReadinessInput, as_of: date | None = None
    ) -> ReadinessDecision:
        """Score readiness, folding in the athlete's recent load state if any."""
        load = None
        if self.ledger.samples(athlete_id):
            load = self.load_state(athlete_id, as_of or inputs.day)
        decision = score_readiness(inputs, load)
        logger.info(
            "Readiness for %s: %.1f (%s)", athlete_id, decision.score, decision.category.name
        )
        return decision

    def modify_session(
        self,
        session: PlannedSession,
        decision: ReadinessDecision,
        injuries: Iterable[InjuryConstraint] = (),
    ) -> SessionModification:
        return modify_session(session, decision, injuries, self.settings)

    # -- validation ------------------------------------------------------------

    def build_snapshot(
        self,
        athlete_id: str,
        as_of: date,
        injuries: Iterable[InjuryConstraint] = (),
        readiness: ReadinessDecision | None = None,
        protocol: ProtocolState | None = None,
        last_hard_session: date | None = None,
        scheduled_tests: Iterable[ScheduledTest] = (),
    ) -> AthleteSnapshot:
        """Combine caller-supplied state with the engine's own load and profile."""
        profile = self.store.current(athlete_id)
        load = self.load_state(athlete_id, as_of) if self.ledger.samples(athlete_id) else None
        return AthleteSnapshot(
            athlete_id=athlete_id,
            as_of=as_of,
            injuries=tuple(injuries),
            readiness=readiness,
            load=load,
            protocol=protocol,
            thresholds=profile.thresholds if profile else None,
            zones=profile.zones if profile else None,
            last_hard_session=last_hard_session,
            scheduled_tests=tuple(scheduled_tests),
        )

    def validate(self, snapshot: AthleteSnapshot) -> ValidationResult:
        return self.validator.validate(snapshot)

    def validate_action(self, snapshot: AthleteSnapshot, action: Action) -> ActionDecision:
        return self.validator.validate_action(snapshot, action)
