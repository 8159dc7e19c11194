"""Load model: derive a LoadState snapshot from a daily load history.

Always recomputed from the full series rather than from incremental state,
so retroactive corrections are reflected exactly once. Missing days are
zero-load days. Sparse history never raises; it is marked LOW_CONFIDENCE.

References:
    - Williams et al. (2017): EWMA-based ACWR
    - Gabbett (2016): ACWR risk zones
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable

import numpy as np
import pandas as pd

from physio_engine.config import EngineSettings
from physio_engine.math.training_load import (
    acwr_series,
    calculate_monotony,
    calculate_strain,
    classify_acwr,
    detect_spike,
)
from physio_engine.models.enums import EWMA_CHRONIC_SPAN, LoadConfidence
from physio_engine.models.load import LoadSample, LoadState


def daily_series(samples: Iterable[LoadSample], as_of: date | None = None) -> pd.Series:
    """Build a gap-free daily load series ending at ``as_of``.

    Args:
        samples: Load samples in any order. For duplicate days the last wins.
        as_of: Final day of the series; defaults to the latest sample day.
            Samples after ``as_of`` are ignored.

    Returns:
        Float series indexed by day, missing days filled with 0.0.
    """
    by_day: dict[date, float] = {}
    for sample in samples:
        by_day[sample.day] = float(sample.load)
    if not by_day:
        return pd.Series(dtype=np.float64)

    end = as_of or max(by_day)
    start = min(by_day)
    if end < start:
        return pd.Series(dtype=np.float64)

    series = pd.Series(by_day, dtype=np.float64)
    series.index = pd.to_datetime(series.index)
    full_range = pd.date_range(pd.Timestamp(start), pd.Timestamp(end), freq="D")
    return series.sort_index().reindex(full_range, fill_value=0.0)


def load_confidence(days_of_data: int) -> LoadConfidence:
    """LOW_CONFIDENCE until the chronic window has a full 28 days of history."""
    if days_of_data < EWMA_CHRONIC_SPAN:
        return LoadConfidence.LOW_CONFIDENCE
    return LoadConfidence.NORMAL


def compute_load_state(
    samples: Iterable[LoadSample],
    as_of: date | None = None,
    settings: EngineSettings | None = None,
) -> LoadState:
    """Compute acute/chronic load, ACWR, risk zone and spike flag.

    Args:
        samples: The athlete's daily load samples.
        as_of: Day to evaluate; defaults to the latest sample day.
        settings: Spike fraction and window.

    Returns:
        LoadState for ``as_of``. With no history the state is all zeros,
        DETRAINING and LOW_CONFIDENCE.
    """
    settings = settings or EngineSettings()
    samples = list(samples)
    series = daily_series(samples, as_of)
    day = as_of or (max(s.day for s in samples) if samples else date.today())

    if series.empty:
        return LoadState(
            as_of=day,
            acute=0.0,
            chronic=0.0,
            ratio=0.0,
            zone=classify_acwr(0.0),
            spike=False,
            confidence=LoadConfidence.LOW_CONFIDENCE,
            days_of_data=0,
        )

    frame = acwr_series(series)
    sampled_days = len({s.day for s in samples if s.day <= day})
    today = frame.iloc[-1]
    ratio = float(today["ratio"])
    values = series.to_numpy()

    return LoadState(
        as_of=day,
        acute=float(today["acute"]),
        chronic=float(today["chronic"]),
        ratio=ratio,
        zone=classify_acwr(ratio),
        spike=detect_spike(frame["ratio"], settings.spike_fraction, settings.spike_window_days),
        confidence=load_confidence(sampled_days),
        days_of_data=sampled_days,
        monotony=calculate_monotony(values),
        strain=calculate_strain(values),
    )


def project_load_state(
    samples: Iterable[LoadSample],
    planned_load: float,
    day: date | None = None,
    settings: EngineSettings | None = None,
) -> LoadState:
    """Preview the LoadState if ``planned_load`` were recorded on ``day``.

    ``day`` defaults to the day after the latest sample. Nothing is written.
    """
    samples = list(samples)
    if day is None:
        latest = max((s.day for s in samples), default=date.today() - timedelta(days=1))
        day = latest + timedelta(days=1)
    extended = samples + [LoadSample(day=day, load=planned_load)]
    return compute_load_state(extended, as_of=day, settings=settings)
