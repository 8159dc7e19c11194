"""Workout modifier: apply readiness and injury constraints to one planned session.

Injury constraints are evaluated first and strictly dominate readiness.
Running under a restricting injury is never downgraded to easy running
when conversion is required; it routes through cross-training equivalency
or is cancelled.

Pain rules (University of Delaware soreness rules):
    pain > 5 or altered gait → stop running (convert or cancel)
    pain 3-5                 → cross-training only
    pain < 3 (lower limb)    → running at 50% volume, easy

The function is pure: the same (session, decision, injuries) always yields
the same modification.

Reference:
    Silbernagel et al. (2007). Am J Sports Med 35(6):897-906.
"""

from __future__ import annotations

from typing import Iterable

from physio_engine.config import EngineSettings
from physio_engine.modification.cross_training import exclusion_reasons, recommend_substitute
from physio_engine.models.enums import (
    CROSS_TRAINING_RETENTION_PCT,
    LOWER_LIMB_PAIN_RUN_FRACTION,
    PAIN_CROSS_TRAINING_ONLY,
    PAIN_STOP,
    ModificationAction,
    ReadinessCategory,
    SessionType,
)
from physio_engine.models.injury import InjuryConstraint, active_injuries
from physio_engine.models.readiness import ReadinessDecision
from physio_engine.models.session import PlannedSession, SessionModification


def _restricts_running(injury: InjuryConstraint) -> bool:
    return (
        injury.is_lower_limb
        or injury.gait_affected
        or injury.pain_level >= PAIN_CROSS_TRAINING_ONLY
    )


def _readiness_reason(decision: ReadinessDecision) -> str:
    return f"Readiness {decision.score:.0f}/100 ({decision.category.name})"


def _injury_reason(injury: InjuryConstraint) -> str:
    label = injury.injury_type.name if injury.injury_type is not None else injury.region.name
    gait = ", gait affected" if injury.gait_affected else ""
    return f"Active injury {label}: pain {injury.pain_level:g}/10{gait}"


def _cancel(session: PlannedSession, reasons: list[str]) -> SessionModification:
    return SessionModification(
        action=ModificationAction.CANCELLED,
        original=session,
        modified=None,
        reasons=tuple(reasons),
    )


def _convert(
    session: PlannedSession,
    decision: ReadinessDecision,
    injuries: list[InjuryConstraint],
    running_minutes: float,
    reasons: list[str],
    settings: EngineSettings,
) -> SessionModification:
    """Route ``running_minutes`` of running through cross-training, scaled for readiness."""
    session_type = session.session_type
    intensity = session.intensity_factor
    minutes = running_minutes

    if decision.category == ReadinessCategory.MAJOR_MOD:
        session_type = SessionType.RECOVERY
        intensity = 1.0
        minutes = min(running_minutes, settings.active_recovery_cap_min)
    elif decision.category == ReadinessCategory.MINOR_MOD:
        factor = 1.0 - settings.minor_mod_reduction
        minutes = running_minutes * factor
        intensity = session.intensity_factor * factor

    substitute = recommend_substitute(round(minutes, 1), injuries)
    if substitute is None:
        reasons.append("No cross-training modality is compatible with the injury")
        return _cancel(session, reasons)

    reasons.append(
        f"Converted to {substitute.equivalent_minutes:g} min {substitute.modality.name} "
        f"({substitute.retention_pct:g}% retention)"
    )
    return SessionModification(
        action=ModificationAction.CONVERTED,
        original=session,
        modified=PlannedSession(
            session_type=session_type,
            duration_min=substitute.equivalent_minutes,
            intensity_factor=round(intensity, 2),
            modality=substitute.modality,
            scheduled_for=session.scheduled_for,
        ),
        reasons=tuple(reasons),
        cross_training=substitute,
    )


def _apply_injury(
    session: PlannedSession,
    decision: ReadinessDecision,
    injuries: list[InjuryConstraint],
    settings: EngineSettings,
) -> SessionModification | None:
    if not injuries:
        return None

    if not session.is_running:
        # Cross-training session: only intervene if its modality is excluded
        excluded = exclusion_reasons(injuries)
        if session.modality not in excluded:
            return None
        reasons = [_injury_reason(i) for i in injuries]
        reasons.append(f"{session.modality.name} excluded by {', '.join(excluded[session.modality])}")
        if decision.category == ReadinessCategory.REST:
            reasons.append(_readiness_reason(decision))
            reasons.append("Training cancelled; no training load today")
            return _cancel(session, reasons)
        retention = CROSS_TRAINING_RETENTION_PCT.get(session.modality, 100.0)
        return _convert(
            session, decision, injuries, session.duration_min * retention / 100.0, reasons, settings
        )

    restricting = [i for i in injuries if _restricts_running(i)]
    if not restricting:
        return None

    reasons = [_injury_reason(i) for i in restricting]
    max_pain = max(i.pain_level for i in restricting)
    gait = any(i.gait_affected for i in restricting)
    must_convert = (
        gait
        or max_pain >= PAIN_CROSS_TRAINING_ONLY
        or decision.category in (ReadinessCategory.MAJOR_MOD, ReadinessCategory.REST)
    )

    if must_convert:
        if max_pain > PAIN_STOP or decision.category == ReadinessCategory.REST:
            if decision.category == ReadinessCategory.REST:
                reasons.append(_readiness_reason(decision))
            reasons.append("Running cancelled; no training load today")
            return _cancel(session, reasons)
        if decision.category != ReadinessCategory.PROCEED:
            reasons.append(_readiness_reason(decision))
        return _convert(session, decision, injuries, session.duration_min, reasons, settings)

    reasons.append("Pain below 3/10: running allowed at 50% volume, easy intensity")
    return SessionModification(
        action=ModificationAction.SCALED,
        original=session,
        modified=PlannedSession(
            session_type=SessionType.EASY,
            duration_min=round(session.duration_min * LOWER_LIMB_PAIN_RUN_FRACTION, 1),
            intensity_factor=1.0,
            modality=session.modality,
            scheduled_for=session.scheduled_for,
        ),
        reasons=tuple(reasons),
    )


def _apply_readiness(
    session: PlannedSession,
    decision: ReadinessDecision,
    settings: EngineSettings,
) -> SessionModification:
    reason = _readiness_reason(decision)

    if decision.category == ReadinessCategory.PROCEED:
        return SessionModification(
            action=ModificationAction.UNCHANGED,
            original=session,
            modified=session,
            reasons=(reason,),
        )

    if decision.category == ReadinessCategory.MINOR_MOD:
        factor = 1.0 - settings.minor_mod_reduction
        return SessionModification(
            action=ModificationAction.SCALED,
            original=session,
            modified=PlannedSession(
                session_type=session.session_type,
                duration_min=round(session.duration_min * factor, 1),
                intensity_factor=round(session.intensity_factor * factor, 2),
                modality=session.modality,
                scheduled_for=session.scheduled_for,
            ),
            reasons=(reason, f"Volume and intensity reduced by {settings.minor_mod_reduction:.0%}"),
        )

    if decision.category == ReadinessCategory.MAJOR_MOD:
        return SessionModification(
            action=ModificationAction.REPLACED,
            original=session,
            modified=PlannedSession(
                session_type=SessionType.RECOVERY,
                duration_min=min(session.duration_min, settings.active_recovery_cap_min),
                intensity_factor=1.0,
                modality=session.modality,
                scheduled_for=session.scheduled_for,
            ),
            reasons=(reason, "Replaced with active recovery"),
        )

    return SessionModification(
        action=ModificationAction.REST,
        original=session,
        modified=PlannedSession(
            session_type=SessionType.REST,
            duration_min=0.0,
            intensity_factor=0.0,
            modality=session.modality,
            scheduled_for=session.scheduled_for,
        ),
        reasons=(reason, "Full rest day"),
    )


def modify_session(
    session: PlannedSession,
    decision: ReadinessDecision,
    injuries: Iterable[InjuryConstraint] = (),
    settings: EngineSettings | None = None,
) -> SessionModification:
    """Produce the concrete modification for one planned session.

    Args:
        session: The session as planned.
        decision: Today's readiness decision.
        injuries: Current injury constraints; inactive ones are ignored.
        settings: Minor-modification reduction and active recovery cap.

    Returns:
        SessionModification describing the action taken and the session to run.
    """
    settings = settings or EngineSettings()

    if session.session_type == SessionType.REST:
        return SessionModification(
            action=ModificationAction.UNCHANGED,
            original=session,
            modified=session,
            reasons=("Planned rest day",),
        )

    modification = _apply_injury(session, decision, active_injuries(list(injuries)), settings)
    if modification is not None:
        return modification
    return _apply_readiness(session, decision, settings)


