"""Heart rate, speed/power and pace zone calculations.

Zone model: five bands anchored on LT1 and LT2.
    Z1: floor → LT1
    Z2: LT1 → LT1 + 85% of (LT2 − LT1)
    Z3: → LT2
    Z4: LT2 → LT2 × 1.06 (VO2max-approach band)
    Z5: → max HR (or max intensity)

Boundaries are computed once and shared by adjacent bands, so the bands are
always contiguous and non-overlapping.

Reference: Seiler & Kjerland (2006). Quantifying training intensity
distribution in elite endurance athletes. Scand J Med Sci Sports 16(1):49-56.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from physio_engine.exceptions import InvalidThresholdOrderError
from physio_engine.math.units import SECONDS_PER_HOUR
from physio_engine.models.enums import (
    ZONE1_PACE_CAP_MULTIPLIER,
    ZONE2_SPLIT_FRACTION,
    ZONE4_UPPER_LT2_MULTIPLIER,
    ZONE5_INTENSITY_LT2_MULTIPLIER,
    IntensityUnit,
    ZoneType,
)
from physio_engine.models.thresholds import ThresholdPair


@dataclass(frozen=True)
class ZoneBoundary:
    """A single HR, intensity or pace zone with lower and upper bounds."""

    zone: ZoneType
    lower: float
    upper: float

    def contains(self, value: float) -> bool:
        return self.lower <= value <= self.upper


@dataclass(frozen=True)
class ZoneTable:
    """Five-zone table derived from one threshold pair.

    ``heart_rate`` is empty when the thresholds carry no heart rate
    (e.g. race-based estimates).
    """

    intensity: tuple[ZoneBoundary, ...]
    unit: IntensityUnit
    heart_rate: tuple[ZoneBoundary, ...] = field(default_factory=tuple)

    def zone_for_heart_rate(self, hr: float) -> ZoneType | None:
        return _lookup(self.heart_rate, hr)

    def zone_for_intensity(self, value: float) -> ZoneType | None:
        return _lookup(self.intensity, value)

    def pace_bands(self) -> tuple[ZoneBoundary, ...]:
        """Speed bands re-expressed as pace in s/km.

        Lower bound = faster pace (lower s/km), upper = slower pace.
        Zone 1 has no slow limit in speed terms, so it is capped at 1.5× LT1 pace.
        """
        if self.unit != IntensityUnit.KMH:
            raise ValueError("Pace bands are only defined for speed-based zones")
        bands: list[ZoneBoundary] = []
        for band in self.intensity:
            faster = round(SECONDS_PER_HOUR / band.upper, 1)
            if band.lower > 0:
                slower = round(SECONDS_PER_HOUR / band.lower, 1)
            else:
                slower = round(SECONDS_PER_HOUR / band.upper * ZONE1_PACE_CAP_MULTIPLIER, 1)
            bands.append(ZoneBoundary(zone=band.zone, lower=faster, upper=slower))
        return tuple(bands)


def _lookup(bands: tuple[ZoneBoundary, ...], value: float) -> ZoneType | None:
    for band in bands:
        if band.contains(value):
            return band.zone
    return None


def _five_bands(
    floor: float, lt1: float, lt2: float, ceiling: float, ndigits: int
) -> tuple[ZoneBoundary, ...]:
    split = lt1 + ZONE2_SPLIT_FRACTION * (lt2 - lt1)
    z4_top = min(lt2 * ZONE4_UPPER_LT2_MULTIPLIER, ceiling)
    edges = [round(v, ndigits) for v in (floor, lt1, split, lt2, z4_top, ceiling)]
    return tuple(
        ZoneBoundary(zone=zone, lower=edges[i], upper=edges[i + 1])
        for i, zone in enumerate(ZoneType)
    )


def calculate_hr_zones(
    lt1_hr: float, lt2_hr: float, max_hr: float, resting_hr: float = 0.0
) -> tuple[ZoneBoundary, ...]:
    """Calculate five heart rate zones from LT1/LT2 heart rates.

    Args:
        lt1_hr: Aerobic threshold heart rate in bpm.
        lt2_hr: Anaerobic threshold heart rate in bpm.
        max_hr: Measured maximum heart rate in bpm.
        resting_hr: Zone 1 floor; 0 when unknown.

    Returns:
        Five contiguous ZoneBoundary bands in bpm.

    Raises:
        InvalidThresholdOrderError: LT1 HR >= LT2 HR, or max HR <= LT2 HR.
    """
    if lt1_hr >= lt2_hr:
        raise InvalidThresholdOrderError(
            f"LT1 heart rate ({lt1_hr}) must be below LT2 heart rate ({lt2_hr})"
        )
    if max_hr <= lt2_hr:
        raise InvalidThresholdOrderError(
            f"Max heart rate ({max_hr}) must be above LT2 heart rate ({lt2_hr})"
        )
    floor = resting_hr if 0 <= resting_hr < lt1_hr else 0.0
    return _five_bands(floor, lt1_hr, lt2_hr, max_hr, ndigits=1)


def calculate_intensity_zones(
    lt1: float, lt2: float, max_intensity: float | None = None
) -> tuple[ZoneBoundary, ...]:
    """Calculate five speed (km/h) or power (W) zones from LT1/LT2.

    Args:
        lt1: Aerobic threshold speed or power.
        lt2: Anaerobic threshold speed or power.
        max_intensity: Zone 5 ceiling; defaults to 120% of LT2.

    Raises:
        InvalidThresholdOrderError: LT1 >= LT2, or max_intensity <= LT2.
    """
    if lt1 >= lt2:
        raise InvalidThresholdOrderError(
            f"LT1 intensity ({lt1}) must be below LT2 intensity ({lt2})"
        )
    ceiling = max_intensity if max_intensity is not None else lt2 * ZONE5_INTENSITY_LT2_MULTIPLIER
    if ceiling <= lt2:
        raise InvalidThresholdOrderError(
            f"Max intensity ({ceiling}) must be above LT2 intensity ({lt2})"
        )
    return _five_bands(0.0, lt1, lt2, ceiling, ndigits=2)


def generate_zones(
    thresholds: ThresholdPair,
    max_hr: float | None = None,
    resting_hr: float = 0.0,
    max_intensity: float | None = None,
) -> ZoneTable:
    """Build the full zone table for a threshold pair.

    Never swaps out-of-order thresholds: an LT1 at or above LT2 indicates
    corrupted upstream data and is surfaced to the caller.

    Args:
        thresholds: LT1/LT2 pair from any estimation strategy.
        max_hr: Measured max HR; required when the pair carries heart rates.
        resting_hr: Optional Zone 1 heart rate floor.
        max_intensity: Optional Zone 5 intensity ceiling.

    Returns:
        ZoneTable with intensity bands and, when available, HR bands.

    Raises:
        InvalidThresholdOrderError: Thresholds out of order.
        ValueError: Heart rates present but ``max_hr`` missing, or mixed units.
    """
    if thresholds.lt1.unit != thresholds.lt2.unit:
        raise ValueError("LT1 and LT2 must use the same intensity unit")

    intensity = calculate_intensity_zones(
        thresholds.lt1.intensity, thresholds.lt2.intensity, max_intensity
    )

    heart_rate: tuple[ZoneBoundary, ...] = ()
    if thresholds.has_heart_rate:
        if max_hr is None:
            raise ValueError("max_hr is required to build heart rate zones")
        heart_rate = calculate_hr_zones(
            thresholds.lt1.heart_rate,  # type: ignore[arg-type]
            thresholds.lt2.heart_rate,  # type: ignore[arg-type]
            max_hr,
            resting_hr,
        )

    return ZoneTable(intensity=intensity, unit=thresholds.unit, heart_rate=heart_rate)
