"""Unit conversions and derived values used by the normalizer."""
from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional

METERS_PER_MILE = 1609.34

# UTC offsets must stay strictly inside one day
MAX_OFFSET_SECONDS = 86400

# Magnus coefficients (Alduchov & Eskridge)
MAGNUS_A = 17.625
MAGNUS_B = 243.04


def f_to_c(value: float) -> float:
    return (value - 32.0) * (5.0 / 9.0)


def c_to_f(value: float) -> float:
    return value * (9.0 / 5.0) + 32.0


def dew_point_f(temp_f: float, humidity_pct: float) -> float:
    """Approximate the dew point with the Magnus formula.

    Relative humidity is clamped into [1, 100] so that a reported 0% does not
    blow up the logarithm.
    """
    temp_c = f_to_c(temp_f)
    rh = min(max(humidity_pct, 1.0), 100.0) / 100.0
    gamma = (MAGNUS_A * temp_c) / (MAGNUS_B + temp_c) + math.log(rh)
    dew_c = (MAGNUS_B * gamma) / (MAGNUS_A - gamma)
    return c_to_f(dew_c)


def meters_to_miles(value: Optional[float]) -> Optional[float]:
    if not value:
        return None
    return value / METERS_PER_MILE


def utc_offset(value: Optional[int]) -> Optional[int]:
    """Return ``value`` when it is a usable UTC offset in seconds, else ``None``."""
    if value is None or abs(value) >= MAX_OFFSET_SECONDS:
        return None
    return value


def epoch_seconds(value: Optional[int]) -> Optional[int]:
    """Return ``value`` when it is a representable epoch timestamp, else ``None``."""
    if value is None:
        return None
    try:
        datetime.fromtimestamp(value, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None
    return value


def local_time_label(epoch: Optional[int], offset_seconds: Optional[int]) -> Optional[str]:
    """Format an epoch as ``"07:04 AM"`` in the location's local time.

    Out-of-range epochs or offsets yield ``None``.
    """
    if epoch is None:
        return None
    try:
        tz = timezone(timedelta(seconds=offset_seconds or 0))
        return datetime.fromtimestamp(epoch, tz=tz).strftime("%I:%M %p")
    except (OverflowError, OSError, ValueError):
        return None


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def fixed(value: Any, places: int) -> str:
    """Format with ``places`` decimals, rounding halves away from zero."""
    quantum = Decimal(1).scaleb(-places)
    try:
        return str(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))
    except InvalidOperation:
        # more digits than the decimal context holds; halves no longer matter
        return f"{value:.{places}f}"


__all__ = [
    "METERS_PER_MILE",
    "c_to_f",
    "dew_point_f",
    "epoch_seconds",
    "f_to_c",
    "fixed",
    "local_time_label",
    "meters_to_miles",
    "round_half_up",
    "utc_offset",
]
