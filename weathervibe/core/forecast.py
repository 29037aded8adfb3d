"""Derive the today strip and the per-day bars from 3-hour forecast blocks."""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from weathervibe.core.entities import DailyBar, ForecastBlock, ForecastSeries


SECONDS_PER_DAY = 86400
TODAY_BLOCKS = 8
MAX_DAYS = 5

_EPOCH = date(1970, 1, 1)


@dataclass(frozen=True)
class ForecastSummary:
    today: Tuple[ForecastBlock, ...]
    daily: Tuple[DailyBar, ...]


def day_key(dt: int, offset: int) -> str:
    """Local calendar day (``YYYY-MM-DD``) of an epoch timestamp."""
    return (_EPOCH + timedelta(days=(dt + offset) // SECONDS_PER_DAY)).isoformat()


def block_label(dt: int, offset: int) -> str:
    """Local ``HH:00`` label of a block."""
    local = datetime.fromtimestamp(dt + offset, tz=timezone.utc)
    return f"{local.hour:02d}:00"


def today_strip(blocks: Sequence[ForecastBlock]) -> Tuple[ForecastBlock, ...]:
    return tuple(blocks[:TODAY_BLOCKS])


def _finite(value: Optional[float]) -> Optional[float]:
    if value is None or not math.isfinite(value):
        return None
    return value


def _bounds(block: ForecastBlock) -> Tuple[Optional[float], Optional[float]]:
    point = _finite(block.temp_f)
    low = _finite(block.temp_min_f)
    high = _finite(block.temp_max_f)
    return (point if low is None else low), (point if high is None else high)


def daily_bars(blocks: Iterable[ForecastBlock], offset: int) -> Tuple[DailyBar, ...]:
    days: Dict[str, Dict[str, Optional[object]]] = {}
    for block in blocks:
        key = day_key(block.dt, offset)
        low, high = _bounds(block)
        day = days.get(key)
        if day is None:
            days[key] = {"min": low, "max": high, "icon": block.icon}
            continue
        if low is not None:
            day["min"] = low if day["min"] is None else min(day["min"], low)
        if high is not None:
            day["max"] = high if day["max"] is None else max(day["max"], high)

    bars: List[DailyBar] = [
        DailyBar(key=key, min_f=day["min"], max_f=day["max"], icon=day["icon"])
        for key, day in sorted(days.items())
    ]
    return tuple(bars[:MAX_DAYS])


def aggregate(series: ForecastSeries) -> ForecastSummary:
    """Today strip and daily bars are derived independently; they may overlap.

    Without a city there is no local offset to group by, so no daily bars.
    """
    daily = daily_bars(series.blocks, series.timezone_offset) if series.city is not None else ()
    return ForecastSummary(today=today_strip(series.blocks), daily=daily)


__all__ = [
    "ForecastSummary",
    "aggregate",
    "block_label",
    "daily_bars",
    "day_key",
    "today_strip",
]
