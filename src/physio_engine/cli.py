"""Command-line front end for one-off engine queries.

Usage:
    physio-engine thresholds stages.csv --max-hr 195 --resting-hr 48
    physio-engine race --distance 10k --time 45:30
    physio-engine load loads.csv --as-of 2026-03-01
    physio-engine readiness check_in.json
    physio-engine modify session.json
    physio-engine validate snapshot.json --action field_test

Every subcommand prints a JSON document on stdout. Engine errors exit with
status 2 and a one-line message on stderr.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date

import pandas as pd

from physio_engine.config import EngineSettings
from physio_engine.engine import PhysioEngine
from physio_engine.exceptions import PhysioEngineError, SnapshotFormatError
from physio_engine.load.model import compute_load_state
from physio_engine.math.units import parse_race_time
from physio_engine.math.zones import generate_zones
from physio_engine.models.enums import Action, IntensityUnit, RaceDistance
from physio_engine.models.load import LoadSample
from physio_engine.models.measurements import IncrementalTest, RaceResult, StageSample
from physio_engine.serialization.json_codec import (
    action_decision_to_dict,
    injury_from_dict,
    load_state_to_dict,
    modification_to_dict,
    planned_session_from_dict,
    readiness_input_from_dict,
    readiness_to_dict,
    snapshot_from_dict,
    thresholds_to_dict,
    to_json_string,
    validation_to_dict,
    zones_to_dict,
)

logger = logging.getLogger(__name__)

_STAGE_COLUMNS = ("intensity", "heart_rate", "lactate")

_RACE_DISTANCES = {
    "5k": RaceDistance.FIVE_K,
    "10k": RaceDistance.TEN_K,
    "half": RaceDistance.HALF_MARATHON,
    "marathon": RaceDistance.MARATHON,
}


def _load_json(path: str) -> dict:
    with open(path) as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as exc:
            raise SnapshotFormatError(f"{path} is not valid JSON: {exc}") from exc


def _read_stages(path: str) -> list[StageSample]:
    """Read an incremental-test CSV with intensity, heart_rate, lactate columns."""
    frame = pd.read_csv(path)
    missing = [c for c in _STAGE_COLUMNS if c not in frame.columns]
    if missing:
        raise SnapshotFormatError(f"{path} is missing column(s): {', '.join(missing)}")
    has_duration = "duration_min" in frame.columns
    return [
        StageSample(
            intensity=float(row.intensity),
            heart_rate=float(row.heart_rate),
            lactate=float(row.lactate),
            duration_min=float(row.duration_min) if has_duration else 4.0,
        )
        for row in frame.itertuples(index=False)
    ]


def _read_loads(path: str) -> list[LoadSample]:
    """Read a daily-load CSV with date and load columns."""
    frame = pd.read_csv(path, parse_dates=["date"])
    if "load" not in frame.columns:
        raise SnapshotFormatError(f"{path} is missing column: load")
    return [
        LoadSample(day=row.date.date(), load=float(row.load))
        for row in frame.itertuples(index=False)
    ]


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------


def _cmd_thresholds(engine: PhysioEngine, args: argparse.Namespace) -> dict:
    test = IncrementalTest(
        stages=tuple(_read_stages(args.stages)),
        unit=IntensityUnit[args.unit.upper()],
        self_reported=args.self_reported,
        test_date=date.fromisoformat(args.date) if args.date else None,
    )
    pair = engine.estimate_thresholds(test)
    zones = generate_zones(pair, max_hr=args.max_hr, resting_hr=args.resting_hr)
    return {"thresholds": thresholds_to_dict(pair), "zones": zones_to_dict(zones)}


def _cmd_race(engine: PhysioEngine, args: argparse.Namespace) -> dict:
    result = RaceResult(
        distance=_RACE_DISTANCES[args.distance],
        finish_time_s=parse_race_time(args.time),
        beginner=args.beginner,
    )
    pair = engine.estimate_thresholds(result)
    return {"thresholds": thresholds_to_dict(pair), "zones": zones_to_dict(generate_zones(pair))}


def _cmd_load(engine: PhysioEngine, args: argparse.Namespace) -> dict:
    as_of = date.fromisoformat(args.as_of) if args.as_of else None
    state = compute_load_state(_read_loads(args.loads), as_of, engine.settings)
    return load_state_to_dict(state)


def _cmd_readiness(engine: PhysioEngine, args: argparse.Namespace) -> dict:
    document = _load_json(args.check_in)
    inputs = readiness_input_from_dict(document)
    for sample in _samples_from(document):
        engine.record_load(args.athlete, sample.day, sample.load)
    return readiness_to_dict(engine.readiness(args.athlete, inputs))


def _cmd_modify(engine: PhysioEngine, args: argparse.Namespace) -> dict:
    document = _load_json(args.request)
    if "session" not in document or "readiness" not in document:
        raise SnapshotFormatError("Modification request needs 'session' and 'readiness'")
    session = planned_session_from_dict(document["session"])
    decision = engine.readiness(args.athlete, readiness_input_from_dict(document["readiness"]))
    injuries = [injury_from_dict(i) for i in document.get("injuries", ())]
    return modification_to_dict(engine.modify_session(session, decision, injuries))


def _cmd_validate(engine: PhysioEngine, args: argparse.Namespace) -> dict:
    snapshot = snapshot_from_dict(_load_json(args.snapshot))
    if args.action:
        return action_decision_to_dict(
            engine.validate_action(snapshot, Action[args.action.upper()])
        )
    return validation_to_dict(engine.validate(snapshot))


def _samples_from(document: dict) -> list[LoadSample]:
    try:
        return [
            LoadSample(day=date.fromisoformat(s["day"]), load=float(s["load"]))
            for s in document.get("daily_loads", ())
        ]
    except KeyError as exc:
        raise SnapshotFormatError(f"Daily load entry is missing {exc}") from exc


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="physio-engine",
        description="Training load and physiological threshold engine",
    )
    parser.add_argument("--athlete", default="athlete", help="Athlete identifier")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("thresholds", help="Estimate LT1/LT2 from an incremental test CSV")
    p.add_argument("stages", help="CSV with intensity, heart_rate, lactate[, duration_min]")
    p.add_argument("--unit", choices=["kmh", "watts"], default="kmh")
    p.add_argument("--max-hr", type=float, required=True)
    p.add_argument("--resting-hr", type=float, default=0.0)
    p.add_argument("--self-reported", action="store_true")
    p.add_argument("--date", help="Test date (YYYY-MM-DD)")
    p.set_defaults(handler=_cmd_thresholds)

    p = sub.add_parser("race", help="Estimate thresholds from a race result")
    p.add_argument("--distance", choices=sorted(_RACE_DISTANCES), required=True)
    p.add_argument("--time", required=True, help="Finish time as MM:SS or H:MM:SS")
    p.add_argument("--beginner", action="store_true")
    p.set_defaults(handler=_cmd_race)

    p = sub.add_parser("load", help="Acute/chronic load state from a daily-load CSV")
    p.add_argument("loads", help="CSV with date, load columns")
    p.add_argument("--as-of", help="Evaluation day (YYYY-MM-DD); defaults to last day")
    p.set_defaults(handler=_cmd_load)

    p = sub.add_parser("readiness", help="Score a daily check-in JSON")
    p.add_argument("check_in")
    p.set_defaults(handler=_cmd_readiness)

    p = sub.add_parser("modify", help="Adapt a planned session to readiness and injuries")
    p.add_argument("request", help="JSON with session, readiness and optional injuries")
    p.set_defaults(handler=_cmd_modify)

    p = sub.add_parser("validate", help="Cross-system validation of an athlete snapshot")
    p.add_argument("snapshot")
    p.add_argument("--action", choices=[a.name.lower() for a in Action])
    p.set_defaults(handler=_cmd_validate)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = EngineSettings.from_env()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    engine = PhysioEngine(settings=settings)
    try:
        payload = args.handler(engine, args)
    except (PhysioEngineError, ValueError) as exc:
        logger.error("%s failed: %s", args.command, exc)
        print(f"error: {exc}", file=sys.stderr)
        return 2

    print(to_json_string(payload))
    return 0


if __name__ == "__main__":
    sys.exit(main())
