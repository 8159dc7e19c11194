"""Environment-variable-based configuration for the physio engine.

Only tunable heuristics live here. Safety floors (the HRV/RHR rest floor,
injury dominance) are constants in ``models.enums`` and cannot be changed
through the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

ENV_PREFIX = "PHYSIO_ENGINE_"


@dataclass(frozen=True)
class EngineSettings:
    """Tunable numbers shared by the engine components."""

    hr_drift_ceiling_fraction: float = 0.10  # of heart-rate reserve
    spike_fraction: float = 0.30
    spike_window_days: int = 3
    minor_mod_reduction: float = 0.20
    active_recovery_cap_min: float = 30.0
    threshold_stale_days: int = 56
    field_test_horizon_days: int = 7
    hard_session_lookback_hours: int = 48
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> EngineSettings:
        """Build settings from ``PHYSIO_ENGINE_*`` environment variables.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.

        Returns:
            EngineSettings with any overridden values applied.
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            hr_drift_ceiling_fraction=float(
                env.get(f"{ENV_PREFIX}HR_DRIFT_CEILING", defaults.hr_drift_ceiling_fraction)
            ),
            spike_fraction=float(env.get(f"{ENV_PREFIX}SPIKE_FRACTION", defaults.spike_fraction)),
            spike_window_days=int(
                env.get(f"{ENV_PREFIX}SPIKE_WINDOW_DAYS", defaults.spike_window_days)
            ),
            minor_mod_reduction=float(
                env.get(f"{ENV_PREFIX}MINOR_MOD_REDUCTION", defaults.minor_mod_reduction)
            ),
            active_recovery_cap_min=float(
                env.get(f"{ENV_PREFIX}ACTIVE_RECOVERY_CAP_MIN", defaults.active_recovery_cap_min)
            ),
            threshold_stale_days=int(
                env.get(f"{ENV_PREFIX}THRESHOLD_STALE_DAYS", defaults.threshold_stale_days)
            ),
            field_test_horizon_days=int(
                env.get(f"{ENV_PREFIX}FIELD_TEST_HORIZON_DAYS", defaults.field_test_horizon_days)
            ),
            hard_session_lookback_hours=int(
                env.get(
                    f"{ENV_PREFIX}HARD_SESSION_LOOKBACK_HOURS",
                    defaults.hard_session_lookback_hours,
                )
            ),
            log_level=env.get(f"{ENV_PREFIX}LOG_LEVEL", defaults.log_level).upper(),
        )
