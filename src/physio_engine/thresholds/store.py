"""Current threshold/zone profile per athlete, replaced (never mutated) on write.

A new estimate supersedes the current profile only when it may be
auto-applied and its confidence is equal to or better than the current
one. Low-confidence or self-reported estimates wait for coach approval.
Superseded profiles are kept for audit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from physio_engine.math.zones import ZoneTable, generate_zones
from physio_engine.models.thresholds import ThresholdPair

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AthleteThresholdProfile:
    """One athlete's thresholds and the zones derived from them."""

    athlete_id: str
    thresholds: ThresholdPair
    zones: ZoneTable
    revision: int
    approved_by: str | None = None


@dataclass(frozen=True)
class ProposalOutcome:
    """Result of proposing a new estimate for an athlete."""

    applied: bool
    reason: str
    profile: AthleteThresholdProfile | None = None


class ThresholdStore:
    """In-memory store of the current profile per athlete, keyed by athlete id."""

    def __init__(self) -> None:
        self._current: dict[str, AthleteThresholdProfile] = {}
        self._history: dict[str, list[AthleteThresholdProfile]] = {}

    def current(self, athlete_id: str) -> AthleteThresholdProfile | None:
        return self._current.get(athlete_id)

    def history(self, athlete_id: str) -> tuple[AthleteThresholdProfile, ...]:
        """Superseded profiles, oldest first."""
        return tuple(self._history.get(athlete_id, ()))

    def propose(
        self,
        athlete_id: str,
        thresholds: ThresholdPair,
        max_hr: float | None = None,
        resting_hr: float = 0.0,
        max_intensity: float | None = None,
    ) -> ProposalOutcome:
        """Apply ``thresholds`` if allowed, otherwise keep the current profile.

        Raises:
            InvalidThresholdOrderError: Zones cannot be built from the pair.
        """
        existing = self._current.get(athlete_id)

        if not thresholds.auto_apply:
            codes = ", ".join(n.code for n in thresholds.notes) or "low confidence"
            logger.info("Thresholds for %s held for coach approval (%s)", athlete_id, codes)
            return ProposalOutcome(
                applied=False,
                reason=f"Requires coach approval: {codes}",
                profile=existing,
            )

        if existing is not None and thresholds.confidence < existing.thresholds.confidence:
            logger.info(
                "Thresholds for %s not applied: %s confidence below current %s",
                athlete_id,
                thresholds.confidence.name,
                existing.thresholds.confidence.name,
            )
            return ProposalOutcome(
                applied=False,
                reason=(
                    f"{thresholds.confidence.name} confidence is below the current "
                    f"{existing.thresholds.confidence.name} estimate"
                ),
                profile=existing,
            )

        profile = self._replace(athlete_id, thresholds, max_hr, resting_hr, max_intensity, None)
        return ProposalOutcome(applied=True, reason="Applied", profile=profile)

    def approve(
        self,
        athlete_id: str,
        thresholds: ThresholdPair,
        approved_by: str,
        max_hr: float | None = None,
        resting_hr: float = 0.0,
        max_intensity: float | None = None,
    ) -> AthleteThresholdProfile:
        """Coach approval: apply ``thresholds`` regardless of confidence."""
        return self._replace(athlete_id, thresholds, max_hr, resting_hr, max_intensity, approved_by)

    def _replace(
        self,
        athlete_id: str,
        thresholds: ThresholdPair,
        max_hr: float | None,
        resting_hr: float,
        max_intensity: float | None,
        approved_by: str | None,
    ) -> AthleteThresholdProfile:
        zones = generate_zones(thresholds, max_hr, resting_hr, max_intensity)
        existing = self._current.get(athlete_id)
        revision = 1
        if existing is not None:
            self._history.setdefault(athlete_id, []).append(existing)
            revision = existing.revision + 1
        profile = AthleteThresholdProfile(
            athlete_id=athlete_id,
            thresholds=thresholds,
            zones=zones,
            revision=revision,
            approved_by=approved_by,
        )
        self._current[athlete_id] = profile
        logger.info(
            "Applied %s thresholds for %s (revision %d)",
            thresholds.method.name,
            athlete_id,
            revision,
        )
        return profile
