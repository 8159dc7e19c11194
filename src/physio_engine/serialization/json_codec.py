"""JSON-friendly encoding of engine results and decoding of athlete snapshots.

Encoders turn frozen result objects into plain dicts (enums by lower-case
name, dates as ISO strings) for the coaching application and the CLI.
Decoders accept the same shapes and raise SnapshotFormatError on anything
they cannot map onto a model.

All functions are pure (no I/O).
"""

from __future__ import annotations

import json
from datetime import date
from enum import Enum
from typing import Any, Mapping, TypeVar

from physio_engine.exceptions import PhysioEngineError, SnapshotFormatError
from physio_engine.load.model import compute_load_state
from physio_engine.math.zones import ZoneBoundary, ZoneTable, generate_zones
from physio_engine.models.enums import (
    BodyRegion,
    ConfidenceTier,
    InjuryType,
    IntensityUnit,
    Modality,
    MovementRestriction,
    ReadinessCategory,
    SessionType,
    ThresholdMethod,
)
from physio_engine.models.injury import InjuryConstraint
from physio_engine.models.load import LoadSample, LoadState
from physio_engine.models.readiness import ReadinessDecision, ReadinessInput
from physio_engine.models.session import PlannedSession, SessionModification
from physio_engine.models.snapshot import AthleteSnapshot, ProtocolState, ScheduledTest
from physio_engine.models.thresholds import ThresholdEstimate, ThresholdPair
from physio_engine.models.validation import ActionDecision, ValidationResult
from physio_engine.readiness.scorer import score_readiness

E = TypeVar("E", bound=Enum)

_READINESS_FIELDS = ("sleep", "soreness", "fatigue", "stress", "mood", "motivation")


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


def _key(member: Enum | None) -> str | None:
    return member.name.lower() if member is not None else None


def _iso(day: date | None) -> str | None:
    return day.isoformat() if day is not None else None


def estimate_to_dict(estimate: ThresholdEstimate) -> dict:
    result = {
        "intensity": estimate.intensity,
        "unit": _key(estimate.unit),
        "confidence": _key(estimate.confidence),
        "method": _key(estimate.method),
        "heart_rate": estimate.heart_rate,
        "lactate": estimate.lactate,
    }
    if estimate.pace_s_per_km is not None:
        result["pace_s_per_km"] = round(estimate.pace_s_per_km, 2)
    return result


def thresholds_to_dict(pair: ThresholdPair) -> dict:
    """Encode an LT1/LT2 pair including its advisory notes."""
    return {
        "lt1": estimate_to_dict(pair.lt1),
        "lt2": estimate_to_dict(pair.lt2),
        "confidence": _key(pair.confidence),
        "method": _key(pair.method),
        "r_squared": pair.r_squared,
        "auto_apply": pair.auto_apply,
        "measured_on": _iso(pair.measured_on),
        "notes": [
            {"code": n.code, "message": n.message, "kind": _key(n.kind)} for n in pair.notes
        ],
    }


def _bands_to_list(bands: tuple[ZoneBoundary, ...]) -> list[dict]:
    return [{"zone": b.zone.value, "lower": b.lower, "upper": b.upper} for b in bands]


def zones_to_dict(table: ZoneTable) -> dict:
    """Encode a zone table; pace bands are included for speed-based tables."""
    result = {
        "unit": _key(table.unit),
        "intensity": _bands_to_list(table.intensity),
        "heart_rate": _bands_to_list(table.heart_rate),
    }
    if table.unit == IntensityUnit.KMH:
        result["pace_s_per_km"] = [
            {"zone": b.zone.value, "lower": round(b.lower, 1), "upper": round(b.upper, 1)}
            for b in table.pace_bands()
        ]
    return result


def load_state_to_dict(state: LoadState) -> dict:
    return {
        "as_of": _iso(state.as_of),
        "acute": round(state.acute, 2),
        "chronic": round(state.chronic, 2),
        "ratio": round(state.ratio, 3),
        "zone": _key(state.zone),
        "spike": state.spike,
        "confidence": _key(state.confidence),
        "days_of_data": state.days_of_data,
        "monotony": round(state.monotony, 3),
        "strain": round(state.strain, 1),
    }


def readiness_to_dict(decision: ReadinessDecision) -> dict:
    return {
        "score": decision.score,
        "category": _key(decision.category),
        "subjective_score": decision.subjective_score,
        "downgraded": decision.downgraded,
        "reasons": list(decision.reasons),
    }


def _session_to_dict(session: PlannedSession | None) -> dict | None:
    if session is None:
        return None
    return {
        "session_type": _key(session.session_type),
        "duration_min": session.duration_min,
        "intensity_factor": session.intensity_factor,
        "modality": _key(session.modality),
        "scheduled_for": _iso(session.scheduled_for),
    }


def modification_to_dict(modification: SessionModification) -> dict:
    result = {
        "action": _key(modification.action),
        "original": _session_to_dict(modification.original),
        "modified": _session_to_dict(modification.modified),
        "reasons": list(modification.reasons),
        "cross_training": None,
    }
    ct = modification.cross_training
    if ct is not None:
        result["cross_training"] = {
            "modality": _key(ct.modality),
            "source_minutes": ct.source_minutes,
            "equivalent_minutes": ct.equivalent_minutes,
            "retention_pct": ct.retention_pct,
            "notes": list(ct.notes),
        }
    return result


def validation_to_dict(result: ValidationResult) -> dict:
    """Encode a validation result with its decision trace."""
    return {
        "clear": result.is_clear,
        "blockers": [
            {
                "rule_id": b.rule_id,
                "tier": _key(b.tier),
                "severity": _key(b.severity),
                "reason": b.reason,
                "blocked_actions": sorted(_key(a) for a in b.blocked_actions),
                "required_resolution": b.required_resolution,
            }
            for b in result.blockers
        ],
        "warnings": [
            {
                "rule_id": w.rule_id,
                "tier": _key(w.tier),
                "severity": _key(w.severity),
                "reason": w.reason,
                "recommendation": w.recommendation,
            }
            for w in result.warnings
        ],
        "recommendations": list(result.recommendations),
        "allowed_actions": sorted(_key(a) for a in result.allowed_actions),
        "trace": {
            "precedence_notes": result.trace.precedence_notes,
            "rules": [
                {"rule_id": r.rule_id, "status": _key(r.status), "explanation": r.explanation}
                for r in result.trace.rule_results
            ],
        },
    }


def action_decision_to_dict(decision: ActionDecision) -> dict:
    return {
        "action": _key(decision.action),
        "allowed": decision.allowed,
        "reasons": list(decision.reasons),
    }


def to_json_string(payload: dict, indent: int = 2) -> str:
    return json.dumps(payload, indent=indent)


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def _enum(enum_cls: type[E], value: Any, field_name: str) -> E:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls[str(value).strip().upper()]
    except KeyError as exc:
        raise SnapshotFormatError(
            f"Unknown {field_name} {value!r}; expected one of "
            f"{[m.name.lower() for m in enum_cls]}"
        ) from exc


def _date(value: Any, field_name: str) -> date | None:
    if value is None or isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError as exc:
        raise SnapshotFormatError(f"Invalid date for {field_name}: {value!r}") from exc


def _float(value: Any, field_name: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise SnapshotFormatError(f"Non-numeric {field_name}: {value!r}") from exc


def _require(data: Mapping[str, Any], key: str, context: str) -> Any:
    if key not in data:
        raise SnapshotFormatError(f"Missing '{key}' in {context}")
    return data[key]


def readiness_input_from_dict(data: Mapping[str, Any]) -> ReadinessInput:
    """Decode a daily check-in; the six subjective fields are required."""
    values = {
        name: _float(_require(data, name, "readiness input"), name) for name in _READINESS_FIELDS
    }
    optional = {
        name: _float(data[name], name) if data.get(name) is not None else None
        for name in ("hrv_ms", "hrv_baseline_ms", "resting_hr", "resting_hr_baseline")
    }
    return ReadinessInput(**values, **optional, day=_date(data.get("day"), "day"))


def injury_from_dict(data: Mapping[str, Any]) -> InjuryConstraint:
    restrictions = frozenset(
        _enum(MovementRestriction, r, "movement restriction")
        for r in data.get("movement_restrictions", ())
    )
    injury_type = data.get("injury_type")
    return InjuryConstraint(
        region=_enum(BodyRegion, _require(data, "region", "injury"), "region"),
        pain_level=_float(_require(data, "pain_level", "injury"), "pain_level"),
        active=bool(data.get("active", True)),
        movement_restrictions=restrictions,
        gait_affected=bool(data.get("gait_affected", False)),
        injury_type=_enum(InjuryType, injury_type, "injury type") if injury_type else None,
    )


def planned_session_from_dict(data: Mapping[str, Any]) -> PlannedSession:
    return PlannedSession(
        session_type=_enum(SessionType, _require(data, "session_type", "session"), "session type"),
        duration_min=_float(_require(data, "duration_min", "session"), "duration_min"),
        intensity_factor=float(data.get("intensity_factor", 1.0)),
        modality=_enum(Modality, data.get("modality", "running"), "modality"),
        scheduled_for=_date(data.get("scheduled_for"), "scheduled_for"),
    )


def _estimate_from_dict(
    data: Mapping[str, Any], unit: IntensityUnit, method: ThresholdMethod
) -> ThresholdEstimate:
    hr = data.get("heart_rate")
    return ThresholdEstimate(
        intensity=_float(_require(data, "intensity", "threshold"), "intensity"),
        unit=unit,
        confidence=_enum(ConfidenceTier, data.get("confidence", "medium"), "confidence"),
        method=method,
        heart_rate=float(hr) if hr is not None else None,
    )


def thresholds_from_dict(data: Mapping[str, Any]) -> ThresholdPair:
    """Decode a stored LT1/LT2 pair (as held by the coaching application)."""
    unit = _enum(IntensityUnit, data.get("unit", "kmh"), "unit")
    method = _enum(ThresholdMethod, data.get("method", "field_test"), "method")
    return ThresholdPair(
        lt1=_estimate_from_dict(_require(data, "lt1", "thresholds"), unit, method),
        lt2=_estimate_from_dict(_require(data, "lt2", "thresholds"), unit, method),
        measured_on=_date(data.get("measured_on"), "measured_on"),
    )


def _readiness_from_dict(data: Mapping[str, Any], load: LoadState | None) -> ReadinessDecision:
    """Either a precomputed decision (has 'category') or a check-in to score."""
    if "category" in data:
        score = float(_require(data, "score", "readiness"))
        return ReadinessDecision(
            score=score,
            category=_enum(ReadinessCategory, data["category"], "readiness category"),
            subjective_score=float(data.get("subjective_score", score)),
            reasons=tuple(data.get("reasons", ())),
        )
    return score_readiness(readiness_input_from_dict(data), load)


def snapshot_from_dict(data: Mapping[str, Any]) -> AthleteSnapshot:
    """Decode an athlete snapshot document.

    Load state is recomputed from ``daily_loads`` and zones are generated
    from ``thresholds`` (with ``max_hr``/``resting_hr`` when heart rates
    are present), so the document only carries raw inputs.

    Raises:
        SnapshotFormatError: On missing keys, unknown enum names, bad dates
            or thresholds that cannot produce zones.
    """
    as_of = _date(_require(data, "as_of", "snapshot"), "as_of")

    load = None
    if data.get("daily_loads"):
        samples = [
            LoadSample(
                day=_date(_require(s, "day", "daily load"), "day"),
                load=_float(_require(s, "load", "daily load"), "load"),
            )
            for s in data["daily_loads"]
        ]
        load = compute_load_state(samples, as_of)

    thresholds = zones = None
    if data.get("thresholds"):
        thresholds = thresholds_from_dict(data["thresholds"])
        try:
            zones = generate_zones(
                thresholds,
                max_hr=data.get("max_hr"),
                resting_hr=float(data.get("resting_hr", 0.0)),
            )
        except (PhysioEngineError, ValueError) as exc:
            raise SnapshotFormatError(f"Cannot build zones from thresholds: {exc}") from exc

    protocol = None
    if data.get("protocol"):
        p = data["protocol"]
        protocol = ProtocolState(
            name=str(_require(p, "name", "protocol")),
            active=bool(p.get("active", True)),
            double_threshold=bool(p.get("double_threshold", False)),
            eligible=bool(p.get("eligible", True)),
            ineligibility_reasons=tuple(p.get("ineligibility_reasons", ())),
        )

    readiness = None
    if data.get("readiness"):
        readiness = _readiness_from_dict(data["readiness"], load)

    return AthleteSnapshot(
        athlete_id=str(data.get("athlete_id", "athlete")),
        as_of=as_of,
        injuries=tuple(injury_from_dict(i) for i in data.get("injuries", ())),
        readiness=readiness,
        load=load,
        protocol=protocol,
        thresholds=thresholds,
        zones=zones,
        last_hard_session=_date(data.get("last_hard_session"), "last_hard_session"),
        scheduled_tests=tuple(
            ScheduledTest(
                scheduled_for=_date(_require(t, "scheduled_for", "scheduled test"), "scheduled_for"),
                name=str(t.get("name", "field test")),
            )
            for t in data.get("scheduled_tests", ())
        ),
    )
