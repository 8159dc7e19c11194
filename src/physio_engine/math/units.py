"""Pace, speed and race-time conversions."""

from __future__ import annotations

SECONDS_PER_HOUR = 3600.0


def pace_to_speed(pace_s_per_km: float) -> float:
    """Convert pace (seconds per km) to speed (km/h)."""
    if pace_s_per_km <= 0:
        raise ValueError(f"Pace must be positive, got {pace_s_per_km}")
    return SECONDS_PER_HOUR / pace_s_per_km


def speed_to_pace(speed_kmh: float) -> float:
    """Convert speed (km/h) to pace (seconds per km)."""
    if speed_kmh <= 0:
        raise ValueError(f"Speed must be positive, got {speed_kmh}")
    return SECONDS_PER_HOUR / speed_kmh


def parse_race_time(value: str) -> float:
    """Parse "MM:SS" or "H:MM:SS" into seconds.

    Examples:
        >>> parse_race_time("45:30")
        2730.0
        >>> parse_race_time("1:38:00")
        5880.0
    """
    parts = value.strip().split(":")
    if len(parts) not in (2, 3) or not all(p.isdigit() for p in parts):
        raise ValueError(f"Race time must look like MM:SS or H:MM:SS, got {value!r}")
    numbers = [int(p) for p in parts]
    if any(n >= 60 for n in numbers[1:]):
        raise ValueError(f"Minutes and seconds must be below 60, got {value!r}")
    if len(numbers) == 2:
        minutes, seconds = numbers
        return float(minutes * 60 + seconds)
    hours, minutes, seconds = numbers
    return float(hours * 3600 + minutes * 60 + seconds)


def format_pace(pace_s_per_km: float) -> str:
    """Format seconds per km as M:SS/km."""
    total = int(round(pace_s_per_km))
    return f"{total // 60}:{total % 60:02d}/km"
