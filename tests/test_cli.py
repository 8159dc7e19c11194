"""Tests for the command-line front end."""

from __future__ import annotations

import json
from datetime import date, timedelta
from pathlib import Path

import pytest

from physio_engine.cli import build_parser, main

STAGES_CSV = """intensity,heart_rate,lactate
10,140,1.2
11,150,1.8
12,158,2.4
13,165,3.1
14,172,4.2
15,180,6.1
16,188,8.5
"""

CHECK_IN = {
    "sleep": 3,
    "soreness": 8,
    "fatigue": 8,
    "stress": 7,
    "mood": 4,
    "motivation": 3,
    "hrv_ms": 54,
    "hrv_baseline_ms": 100,
    "resting_hr": 60,
    "resting_hr_baseline": 50,
}


def _write(path: Path, content: str | dict) -> str:
    path.write_text(content if isinstance(content, str) else json.dumps(content))
    return str(path)


def _run(argv: list[str], capsys: pytest.CaptureFixture[str]) -> tuple[int, dict | None, str]:
    code = main(argv)
    captured = capsys.readouterr()
    payload = json.loads(captured.out) if code == 0 else None
    return code, payload, captured.err


class TestParser:
    def test_command_required(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_unknown_action_rejected(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["validate", "s.json", "--action", "sprint"])


class TestThresholdsCommand:
    def test_stage_csv(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        stages = _write(tmp_path / "stages.csv", STAGES_CSV)
        code, payload, _ = _run(
            ["thresholds", stages, "--max-hr", "195", "--resting-hr", "48"], capsys
        )
        assert code == 0
        assert payload["thresholds"]["confidence"] == "very_high"
        assert payload["thresholds"]["auto_apply"] is True
        assert len(payload["zones"]["heart_rate"]) == 5

    def test_self_reported_flag(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        stages = _write(tmp_path / "stages.csv", STAGES_CSV)
        code, payload, _ = _run(
            ["thresholds", stages, "--max-hr", "195", "--self-reported"], capsys
        )
        assert code == 0
        assert payload["thresholds"]["auto_apply"] is False

    def test_missing_column(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        stages = _write(tmp_path / "stages.csv", "intensity,heart_rate\n10,140\n")
        code, _, err = _run(["thresholds", stages, "--max-hr", "195"], capsys)
        assert code == 2
        assert "missing column(s): lactate" in err

    def test_too_few_stages(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        short = "\n".join(STAGES_CSV.splitlines()[:4]) + "\n"
        stages = _write(tmp_path / "stages.csv", short)
        code, _, err = _run(["thresholds", stages, "--max-hr", "195"], capsys)
        assert code == 2
        assert "error:" in err


class TestRaceCommand:
    def test_ten_k(self, capsys: pytest.CaptureFixture[str]) -> None:
        code, payload, _ = _run(["race", "--distance", "10k", "--time", "45:30"], capsys)
        assert code == 0
        assert payload["thresholds"]["lt2"]["pace_s_per_km"] == pytest.approx(278.46)
        assert payload["thresholds"]["confidence"] == "very_high"
        assert payload["zones"]["heart_rate"] == []

    def test_bad_time(self, capsys: pytest.CaptureFixture[str]) -> None:
        code, _, err = _run(["race", "--distance", "10k", "--time", "45m"], capsys)
        assert code == 2
        assert "MM:SS" in err


class TestLoadCommand:
    def test_load_csv(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        start = date(2026, 1, 1)
        rows = ["date,load"] + [
            f"{(start + timedelta(days=i)).isoformat()},{60 if i < 60 else 125}"
            for i in range(63)
        ]
        loads = _write(tmp_path / "loads.csv", "\n".join(rows) + "\n")
        code, payload, _ = _run(["load", loads], capsys)
        assert code == 0
        assert payload["zone"] == "caution"
        assert payload["spike"] is True
        assert payload["days_of_data"] == 63


class TestReadinessCommand:
    def test_scenario_c(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        check_in = _write(tmp_path / "check_in.json", CHECK_IN)
        code, payload, _ = _run(["readiness", check_in], capsys)
        assert code == 0
        assert payload["category"] == "rest"
        assert payload["downgraded"] is False

    def test_invalid_json(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        check_in = _write(tmp_path / "check_in.json", "{not json")
        code, _, err = _run(["readiness", check_in], capsys)
        assert code == 2
        assert "not valid JSON" in err


class TestModifyCommand:
    def test_injury_converts_session(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        fresh = dict(sleep=9, soreness=2, fatigue=2, stress=2, mood=9, motivation=9)
        request = _write(
            tmp_path / "request.json",
            {
                "session": {"session_type": "tempo", "duration_min": 60},
                "readiness": fresh,
                "injuries": [{"region": "knee", "pain_level": 4}],
            },
        )
        code, payload, _ = _run(["modify", request], capsys)
        assert code == 0
        assert payload["action"] == "converted"
        assert payload["modified"]["modality"] == "deep_water_running"

    def test_missing_session(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        request = _write(tmp_path / "request.json", {"readiness": CHECK_IN})
        code, _, err = _run(["modify", request], capsys)
        assert code == 2
        assert "'session'" in err


class TestValidateCommand:
    def _snapshot(self, tmp_path: Path, **extra: object) -> str:
        document = {
            "as_of": "2026-03-02",
            "readiness": {"score": 82, "category": "proceed"},
            "thresholds": {
                "measured_on": "2026-02-20",
                "lt1": {"intensity": 11.4},
                "lt2": {"intensity": 13.65},
            },
            **extra,
        }
        return _write(tmp_path / "snapshot.json", document)

    def test_clear_snapshot(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        code, payload, _ = _run(["validate", self._snapshot(tmp_path)], capsys)
        assert code == 0
        assert payload["clear"] is True
        assert payload["blockers"] == []

    def test_action_query(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        snapshot = self._snapshot(tmp_path, injuries=[{"region": "ankle", "pain_level": 6}])
        code, payload, _ = _run(["validate", snapshot, "--action", "field_test"], capsys)
        assert code == 0
        assert payload["action"] == "field_test"
        assert payload["allowed"] is False
        assert payload["reasons"] == ["ANKLE injury: pain 6/10"]

    def test_unknown_enum(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        snapshot = self._snapshot(tmp_path, injuries=[{"region": "elbow", "pain_level": 2}])
        code, _, err = _run(["validate", snapshot], capsys)
        assert code == 2
        assert "Unknown region" in err
