"""Tests for environment-based settings."""

from __future__ import annotations

import pytest

from physio_engine.config import EngineSettings


class TestEngineSettings:
    def test_defaults(self) -> None:
        settings = EngineSettings.from_env({})
        assert settings == EngineSettings()
        assert settings.spike_fraction == 0.30
        assert settings.hr_drift_ceiling_fraction == 0.10

    def test_overrides(self) -> None:
        settings = EngineSettings.from_env(
            {
                "PHYSIO_ENGINE_SPIKE_FRACTION": "0.25",
                "PHYSIO_ENGINE_THRESHOLD_STALE_DAYS": "42",
                "PHYSIO_ENGINE_LOG_LEVEL": "debug",
            }
        )
        assert settings.spike_fraction == 0.25
        assert settings.threshold_stale_days == 42
        assert settings.log_level == "DEBUG"

    def test_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PHYSIO_ENGINE_FIELD_TEST_HORIZON_DAYS", "10")
        assert EngineSettings.from_env().field_test_horizon_days == 10

    def test_bad_value_raises(self) -> None:
        with pytest.raises(ValueError):
            EngineSettings.from_env({"PHYSIO_ENGINE_SPIKE_WINDOW_DAYS": "three"})
