"""Least-squares cubic curve fitting for lactate and heart-rate curves.

The design matrix is conditioned by mapping x onto [-1, 1] before solving
(numpy ``Polynomial.fit``), which keeps power ranges (50-500 W) as stable
as speed ranges (3-25 km/h). Raw-x coefficients are derived afterwards for
reporting only; evaluation always goes through the scaled polynomial.

Reference:
    Cheng et al. (1992). A new approach for the determination of
    ventilatory and lactate thresholds. Int J Sports Med 13(7):518-522.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
from numpy.polynomial import Polynomial

from physio_engine.exceptions import InsufficientDataError
from physio_engine.models.enums import MIN_STAGES_FOR_FIT

CUBIC_DEGREE = 3


@dataclass(frozen=True)
class CubicFit:
    """Fitted cubic y = a·x³ + b·x² + c·x + d with goodness of fit."""

    a: float
    b: float
    c: float
    d: float
    r_squared: float
    x_min: float
    x_max: float
    _poly: Polynomial = field(repr=False, compare=False)

    @property
    def coefficients(self) -> tuple[float, float, float, float]:
        return (self.a, self.b, self.c, self.d)

    def evaluate(self, x: float | np.ndarray) -> float | np.ndarray:
        """Evaluate the fitted curve at ``x`` (scalar or array)."""
        result = self._poly(x)
        if np.ndim(result) == 0:
            return float(result)
        return result

    def grid(self, points: int) -> tuple[np.ndarray, np.ndarray]:
        """Sample the curve on an evenly spaced grid over the fitted x range."""
        xs = np.linspace(self.x_min, self.x_max, points)
        return xs, self._poly(xs)


def r_squared(y: np.ndarray, y_pred: np.ndarray) -> float:
    """Coefficient of determination, clamped to [0, 1]."""
    ss_res = float(np.sum((y - y_pred) ** 2))
    ss_tot = float(np.sum((y - np.mean(y)) ** 2))
    r2 = 1.0 - ss_res / ss_tot if ss_tot > 0 else 0.0
    return max(0.0, min(1.0, r2))


def fit_cubic(
    x: list[float] | tuple[float, ...] | np.ndarray,
    y: list[float] | tuple[float, ...] | np.ndarray,
) -> CubicFit:
    """Fit a least-squares cubic polynomial to (x, y) samples.

    Args:
        x: Independent values (intensity in km/h or watts).
        y: Dependent values (lactate in mmol/L, or heart rate).

    Returns:
        CubicFit with raw-x coefficients and R².

    Raises:
        InsufficientDataError: Fewer than 4 points or fewer than 4 distinct x.
        ValueError: Mismatched lengths or non-finite values.
    """
    x_arr = np.asarray(x, dtype=np.float64)
    y_arr = np.asarray(y, dtype=np.float64)

    if x_arr.shape != y_arr.shape:
        raise ValueError(f"x and y must have the same length, got {x_arr.size} and {y_arr.size}")
    if x_arr.size < MIN_STAGES_FOR_FIT:
        raise InsufficientDataError(
            f"Cubic fit needs at least {MIN_STAGES_FOR_FIT} points, got {x_arr.size}",
            required=MIN_STAGES_FOR_FIT,
            received=int(x_arr.size),
        )
    if not (np.all(np.isfinite(x_arr)) and np.all(np.isfinite(y_arr))):
        raise ValueError("x and y must be finite numbers")
    distinct = int(np.unique(x_arr).size)
    if distinct < MIN_STAGES_FOR_FIT:
        raise InsufficientDataError(
            f"Cubic fit needs at least {MIN_STAGES_FOR_FIT} distinct x values, got {distinct}",
            required=MIN_STAGES_FOR_FIT,
            received=distinct,
        )

    poly = Polynomial.fit(x_arr, y_arr, CUBIC_DEGREE)
    raw = poly.convert().coef
    # convert() trims trailing zeros; pad back to 4 terms (d, c, b, a)
    raw = np.pad(raw, (0, CUBIC_DEGREE + 1 - raw.size))
    d, c, b, a = (float(v) for v in raw)

    return CubicFit(
        a=a,
        b=b,
        c=c,
        d=d,
        r_squared=r_squared(y_arr, poly(x_arr)),
        x_min=float(np.min(x_arr)),
        x_max=float(np.max(x_arr)),
        _poly=poly,
    )


def interpolate(x: float, xs: list[float] | np.ndarray, ys: list[float] | np.ndarray) -> float:
    """Linear interpolation of a paired series at ``x``, clamped to its ends."""
    order = np.argsort(np.asarray(xs, dtype=np.float64))
    return float(
        np.interp(
            x,
            np.asarray(xs, dtype=np.float64)[order],
            np.asarray(ys, dtype=np.float64)[order],
        )
    )
