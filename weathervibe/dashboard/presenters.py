"""Display values for the dashboard template.

Everything here is a pure function of the normalized data so that the
template only has to place values, never compute them.
"""
from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Sequence

from weathervibe.core.conversions import fixed, round_half_up
from weathervibe.core.entities import CurrentConditions, DailyBar, ForecastBlock
from weathervibe.core.forecast import block_label


ICON_URL = "https://openweathermap.org/img/wn/{code}@2x.png"

TREND_WIDTH = 160
TREND_HEIGHT = 40
TREND_PADDING = 4
MIN_BAR_WIDTH = 6.0

_NEUTRAL_TINT = {
    "border": "tint-neutral-border",
    "bg": "tint-neutral-bg",
    "title": "tint-neutral-title",
    "bar": "tint-neutral-bar",
    "dot": "tint-neutral-dot",
}

_TINTS: Dict[str, Dict[str, str]] = {
    "severe": {
        "border": "tint-red-border",
        "bg": "tint-red-bg",
        "title": "tint-red-title",
        "bar": "tint-red-bar",
        "dot": "tint-red-dot",
    },
    "stormy": {
        "border": "tint-amber-border",
        "bg": "tint-amber-bg",
        "title": "tint-amber-title",
        "bar": "tint-amber-bar",
        "dot": "tint-amber-dot",
    },
}


def icon_url(code: Optional[str]) -> Optional[str]:
    return ICON_URL.format(code=code) if code else None


def icon_behavior(condition: Optional[str]) -> str:
    """Which animation, if any, the big icon gets."""
    c = (condition or "").lower()
    if c == "snow":
        return "snow"
    if c in ("rain", "drizzle"):
        return "rain"
    if c == "thunderstorm":
        return "storm"
    return "none"


def is_night(current: CurrentConditions, now: Optional[float] = None) -> bool:
    if current.sunrise is None or current.sunset is None:
        return False
    now = time.time() if now is None else now
    return now < current.sunrise or now > current.sunset


def storm_tint(label: str) -> Dict[str, str]:
    return _TINTS.get(label.lower(), _NEUTRAL_TINT)


def degrees(value: Optional[float]) -> str:
    return f"{round_half_up(value)}°" if value is not None else "—"


def format_mm(mm: float) -> str:
    return f"{fixed(mm, 1)} mm" if mm >= 1 else f"{fixed(mm, 2)} mm"


def _amounts(one_hour: Optional[float], three_hours: Optional[float]) -> List[str]:
    parts = []
    if one_hour is not None and one_hour > 0:
        parts.append(f"1h {format_mm(one_hour)}")
    if three_hours is not None and three_hours > 0:
        parts.append(f"3h {format_mm(three_hours)}")
    return parts


def precip_lines(current: CurrentConditions) -> List[str]:
    lines = []
    snow = _amounts(current.snow_1h_mm, current.snow_3h_mm)
    if snow:
        lines.append("Snow: " + " · ".join(snow))
    rain = _amounts(current.rain_1h_mm, current.rain_3h_mm)
    if rain:
        lines.append("Rain: " + " · ".join(rain))
    return lines


def hi_lo(current: CurrentConditions) -> Optional[str]:
    if current.temp_min_f is None or current.temp_max_f is None:
        return None
    return f"Low: {degrees(current.temp_min_f)}  High: {degrees(current.temp_max_f)}"


def place(current: CurrentConditions) -> str:
    name = current.name or ""
    return f"{name}, {current.country}" if current.country else name


def icon_alt(current: CurrentConditions) -> str:
    if current.condition:
        return f"{current.condition} icon"
    if current.description:
        return f"{current.description} icon"
    return "Weather icon"


def cloud_note(cloud_pct: Optional[float]) -> Optional[str]:
    if cloud_pct is None:
        return None
    if cloud_pct >= 75:
        return "Overcast / thick cloud deck."
    if cloud_pct >= 40:
        return "Partly to mostly cloudy."
    return "Mostly clear skies."


def dew_point_note(dew_point_f: Optional[float]) -> Optional[str]:
    if dew_point_f is None:
        return None
    if dew_point_f >= 65:
        return "Humid / sticky air."
    if dew_point_f >= 55:
        return "A bit muggy."
    if dew_point_f >= 45:
        return "Comfortable."
    return "Dry air."


def visibility_note(visibility_mi: Optional[float]) -> Optional[str]:
    if visibility_mi is None:
        return None
    return "Good visibility." if visibility_mi >= 6 else "Reduced visibility."


@dataclass(frozen=True)
class StripItem:
    label: str
    temp: str
    icon_url: Optional[str]
    description: str


def strip_items(blocks: Sequence[ForecastBlock], offset: int) -> List[StripItem]:
    return [
        StripItem(
            label=block_label(block.dt, offset),
            temp=degrees(block.temp_f),
            icon_url=icon_url(block.icon),
            description=block.description or "forecast icon",
        )
        for block in blocks
    ]


@dataclass(frozen=True)
class DailyRow:
    key: str
    weekday: str
    low: str
    high: str
    left: float
    width: float
    icon_url: Optional[str]


def weekday_label(key: str) -> str:
    return date.fromisoformat(key).strftime("%a")


def daily_rows(bars: Sequence[DailyBar]) -> List[DailyRow]:
    """Position each day's min/max bar on the shared scale of all shown days."""
    lows = [bar.min_f for bar in bars if bar.min_f is not None]
    highs = [bar.max_f for bar in bars if bar.max_f is not None]
    if not lows or not highs:
        return []
    global_min, global_max = min(lows), max(highs)

    def pct(value: float) -> float:
        if global_max == global_min:
            return 0.0
        return (value - global_min) / (global_max - global_min) * 100

    rows = []
    for bar in bars:
        if bar.min_f is None or bar.max_f is None:
            continue
        left = pct(bar.min_f)
        rows.append(
            DailyRow(
                key=bar.key,
                weekday=weekday_label(bar.key),
                low=degrees(bar.min_f),
                high=degrees(bar.max_f),
                left=round(left, 2),
                width=round(max(MIN_BAR_WIDTH, pct(bar.max_f) - left), 2),
                icon_url=icon_url(bar.icon),
            )
        )
    return rows


@dataclass(frozen=True)
class TempTrend:
    path: str
    current_x: float
    current_y: float
    width: int = TREND_WIDTH
    height: int = TREND_HEIGHT


def temp_trend(blocks: Sequence[ForecastBlock]) -> Optional[TempTrend]:
    """SVG sparkline of the next 24h of temperatures."""
    temps = [block.temp_f for block in blocks if block.temp_f is not None]
    if not temps:
        return None
    low, high = min(temps), max(temps)
    span = (high - low) or 1
    steps = max(len(temps) - 1, 1)

    def x(i: int) -> float:
        return round(TREND_PADDING + (i / steps) * (TREND_WIDTH - TREND_PADDING * 2), 2)

    def y(t: float) -> float:
        return round(TREND_HEIGHT - TREND_PADDING - ((t - low) / span) * (TREND_HEIGHT - TREND_PADDING * 2), 2)

    path = " ".join(f"{'M' if i == 0 else 'L'} {x(i)} {y(t)}" for i, t in enumerate(temps))
    return TempTrend(path=path, current_x=x(0), current_y=y(temps[0]))


__all__ = [
    "DailyRow",
    "StripItem",
    "TempTrend",
    "cloud_note",
    "daily_rows",
    "degrees",
    "dew_point_note",
    "format_mm",
    "hi_lo",
    "icon_alt",
    "icon_behavior",
    "icon_url",
    "is_night",
    "place",
    "precip_lines",
    "storm_tint",
    "strip_items",
    "temp_trend",
    "visibility_note",
]
