"""Training load calculations: TRIMP, ACWR (EWMA-based), spikes, monotony, strain.

References:
    - Banister (1991): TRIMP formula
    - Williams et al. (2017): EWMA-based ACWR
    - Gabbett (2016): ACWR injury risk thresholds
    - Foster (1998): Monotony and strain
"""

from __future__ import annotations

import math

import numpy as np
import pandas as pd

from physio_engine.models.enums import (
    ACWR_CAUTION_HIGH,
    ACWR_DANGER_THRESHOLD,
    ACWR_OPTIMAL_LOW,
    EWMA_ACUTE_SPAN,
    EWMA_CHRONIC_SPAN,
    MONOTONY_WINDOW_DAYS,
    TRIMP_COEFFICIENT_FEMALE,
    TRIMP_COEFFICIENT_MALE,
    TRIMP_EXPONENT_FEMALE,
    TRIMP_EXPONENT_MALE,
    RiskZone,
)

# Chronic load below this is treated as "no training history"
NEGLIGIBLE_CHRONIC = 1e-6


def calculate_trimp(
    duration_min: float,
    avg_hr: float,
    max_hr: float,
    resting_hr: float,
    sex: str = "M",
) -> float:
    """Calculate Banister TRIMP (Training Impulse) for a single session.

    TRIMP = duration × delta_hr_ratio × coefficient × e^(exponent × delta_hr_ratio)

    Args:
        duration_min: Session duration in minutes.
        avg_hr: Average heart rate during the session.
        max_hr: Athlete's maximum heart rate.
        resting_hr: Athlete's resting heart rate.
        sex: "M" or "F"; affects the exponential weighting.

    Returns:
        TRIMP score (arbitrary units, higher = more load).

    Reference:
        Banister (1991). Modeling elite athletic performance. In:
        Physiological Testing of Elite Athletes.
    """
    if max_hr <= resting_hr:
        return 0.0
    delta_hr_ratio = (avg_hr - resting_hr) / (max_hr - resting_hr)
    delta_hr_ratio = max(0.0, min(1.0, delta_hr_ratio))

    if sex.upper() == "F":
        coefficient = TRIMP_COEFFICIENT_FEMALE
        exponent = TRIMP_EXPONENT_FEMALE
    else:
        coefficient = TRIMP_COEFFICIENT_MALE
        exponent = TRIMP_EXPONENT_MALE

    return duration_min * delta_hr_ratio * coefficient * math.exp(exponent * delta_hr_ratio)


def ewma_series(daily_loads: pd.Series, span: int) -> pd.Series:
    """Exponentially weighted moving average of a daily load series.

    Uses ``adjust=False`` so each day's value depends only on the previous
    day's average and today's load (recursive form).

    Reference:
        Williams et al. (2017). J Sci Med Sport 20(5):493-497.
    """
    return daily_loads.astype(np.float64).ewm(span=span, adjust=False).mean()


def calculate_ewma(values: list[float] | tuple[float, ...], span: int) -> float:
    """Calculate the most recent value of an exponentially weighted moving average.

    Args:
        values: Time series of daily values (oldest first).
        span: EWMA span parameter (e.g., 7 for acute, 28 for chronic).

    Returns:
        The most recent EWMA value.
    """
    if not values:
        return 0.0
    return float(ewma_series(pd.Series(values, dtype=np.float64), span).iloc[-1])


def acwr_series(daily_loads: pd.Series) -> pd.DataFrame:
    """Acute load, chronic load and their ratio for every day of the series.

    Args:
        daily_loads: Gap-free daily loads, oldest first.

    Returns:
        DataFrame with columns ``acute``, ``chronic`` and ``ratio``. The
        ratio is 0.0 on days where chronic load is negligible.
    """
    acute = ewma_series(daily_loads, EWMA_ACUTE_SPAN)
    chronic = ewma_series(daily_loads, EWMA_CHRONIC_SPAN)
    ratio = (acute / chronic).where(chronic >= NEGLIGIBLE_CHRONIC, 0.0)
    return pd.DataFrame({"acute": acute, "chronic": chronic, "ratio": ratio})


def calculate_acwr(daily_loads: list[float] | tuple[float, ...]) -> float:
    """Calculate Acute:Chronic Workload Ratio using EWMA method.

    ACWR = acute_ewma / chronic_ewma

    Args:
        daily_loads: Daily training load values (oldest first).

    Returns:
        ACWR ratio. Returns 0.0 if there is no data or chronic load is negligible.

    Reference:
        Williams et al. (2017): EWMA preferable to rolling averages for
        injury risk detection. Gabbett (2016): ACWR thresholds.
    """
    if not daily_loads:
        return 0.0
    frame = acwr_series(pd.Series(daily_loads, dtype=np.float64))
    return float(frame["ratio"].iloc[-1])


def classify_acwr(acwr: float) -> RiskZone:
    """Classify an ACWR value into a risk zone.

    Args:
        acwr: Acute:Chronic Workload Ratio.

    Returns:
        DETRAINING (<0.8), OPTIMAL (0.8-1.3), CAUTION (1.3-1.5) or DANGER (>=1.5).

    Reference:
        Gabbett (2016), Br J Sports Med 50(5):273-280.
        Sweet spot: 0.8 - 1.3. Danger zone: >1.5.
    """
    if acwr >= ACWR_DANGER_THRESHOLD:
        return RiskZone.DANGER
    if acwr >= ACWR_CAUTION_HIGH:
        return RiskZone.CAUTION
    if acwr >= ACWR_OPTIMAL_LOW:
        return RiskZone.OPTIMAL
    return RiskZone.DETRAINING


def detect_spike(ratios: pd.Series | list[float], fraction: float, window_days: int) -> bool:
    """Check whether today's ratio jumped relative to any of the previous days.

    A spike is an increase of at least ``fraction`` (0.30 = 30%) over the
    ratio on any of the ``window_days`` days before today. Days with a zero
    ratio (no chronic history) are ignored.

    Args:
        ratios: Daily ACWR values, oldest first; the last value is today.
        fraction: Relative increase that counts as a spike.
        window_days: How many previous days to compare against.

    Returns:
        True if a spike is detected.
    """
    values = np.asarray(ratios, dtype=np.float64)
    if values.size < 2:
        return False
    today = values[-1]
    previous = values[-(window_days + 1):-1]
    for earlier in previous:
        if earlier <= 0.0:
            continue
        if (today - earlier) / earlier >= fraction:
            return True
    return False


def calculate_monotony(daily_loads: list[float] | tuple[float, ...] | np.ndarray) -> float:
    """Calculate training monotony over the most recent 7 days.

    Monotony = mean(daily_load) / std(daily_load)
    High monotony (>2.0) indicates insufficient variation.

    Args:
        daily_loads: Daily training loads (at least 7 values).

    Returns:
        Monotony value. Returns 0.0 if insufficient data.

    Reference:
        Foster (1998). Monitoring training in athletes with reference to
        overtraining syndrome. Med Sci Sports Exerc 30(7):1164-1168.
    """
    if len(daily_loads) < MONOTONY_WINDOW_DAYS:
        return 0.0
    recent = np.asarray(daily_loads, dtype=np.float64)[-MONOTONY_WINDOW_DAYS:]
    std = float(np.std(recent, ddof=0))
    if std < 1e-6:
        return 0.0
    return float(np.mean(recent)) / std


def calculate_strain(daily_loads: list[float] | tuple[float, ...] | np.ndarray) -> float:
    """Foster training strain: weekly load × monotony over the last 7 days."""
    if len(daily_loads) < MONOTONY_WINDOW_DAYS:
        return 0.0
    recent = np.asarray(daily_loads, dtype=np.float64)[-MONOTONY_WINDOW_DAYS:]
    return float(np.sum(recent)) * calculate_monotony(recent)
