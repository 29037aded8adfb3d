"""Heuristic storm signal derived from current conditions.

The score is an additive rule table. Rules are grouped by the reading they
look at (condition, pressure, wind, ...) and within a group only the first
matching rule counts, so the groups are listed from the most to the least
severe bucket. The score itself does not depend on group order; the summary
does, since it quotes the first three triggered reasons.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from weathervibe.core.conversions import fixed, round_half_up
from weathervibe.core.entities import CurrentConditions, StormReadings, StormSignal


MIN_SCORE = 0
MAX_SCORE = 100
SUMMARY_REASONS = 3
NO_INDICATORS = "No strong storm indicators detected."

# (threshold, label, vibe), highest first
LABELS: Tuple[Tuple[int, str, str], ...] = (
    (75, "Severe", "Storm conditions likely / hazardous."),
    (55, "Stormy", "Keep an eye on conditions."),
    (35, "Unsettled", "Some storm signals present."),
    (20, "Quiet-ish", "Mostly calm with minor factors."),
    (MIN_SCORE, "Calm", "Low storm signal."),
)


@dataclass(frozen=True)
class StormRule:
    predicate: Callable[[StormReadings], bool]
    points: int
    reason: Callable[[StormReadings], str]


@dataclass(frozen=True)
class RuleGroup:
    name: str
    rules: Tuple[StormRule, ...]

    def evaluate(self, readings: StormReadings) -> Optional[StormRule]:
        for rule in self.rules:
            if rule.predicate(readings):
                return rule
        return None


def _static(text: str) -> Callable[[StormReadings], str]:
    return lambda _readings: text


def _condition_is(*names: str) -> Callable[[StormReadings], bool]:
    return lambda r: (r.condition or "").lower() in names


def _at_most(attr: str, limit: float) -> Callable[[StormReadings], bool]:
    def check(readings: StormReadings) -> bool:
        value = getattr(readings, attr)
        return value is not None and value <= limit

    return check


def _at_least(attr: str, limit: float, default: Optional[float] = None) -> Callable[[StormReadings], bool]:
    def check(readings: StormReadings) -> bool:
        value = getattr(readings, attr)
        if value is None:
            value = default
        return value is not None and value >= limit

    return check


def _mph(attr: str, template: str) -> Callable[[StormReadings], str]:
    return lambda r: template.format(round_half_up(getattr(r, attr)))


def _mm(attr: str, template: str) -> Callable[[StormReadings], str]:
    return lambda r: template.format(fixed(getattr(r, attr), 1))


RULE_GROUPS: Tuple[RuleGroup, ...] = (
    RuleGroup(
        "condition",
        (
            StormRule(_condition_is("thunderstorm"), 40, _static("Thunderstorm conditions reported.")),
            StormRule(_condition_is("snow"), 25, _static("Snow conditions reported.")),
            StormRule(_condition_is("rain", "drizzle"), 18, _static("Rain/drizzle conditions reported.")),
            StormRule(_condition_is("tornado", "squall"), 50, _static("Severe conditions reported.")),
        ),
    ),
    RuleGroup(
        "pressure",
        (
            StormRule(_at_most("pressure_hpa", 990), 35, _static("Very low pressure (strong storm potential).")),
            StormRule(_at_most("pressure_hpa", 1000), 25, _static("Low pressure (stormy pattern likely).")),
            StormRule(_at_most("pressure_hpa", 1008), 15, _static("Slightly low pressure.")),
            StormRule(_at_least("pressure_hpa", 1030), -8, _static("High pressure (usually steadier weather).")),
        ),
    ),
    RuleGroup(
        "wind",
        (
            StormRule(_at_least("wind_mph", 25, default=0.0), 25, _mph("wind_mph", "Strong wind ({} mph).")),
            StormRule(_at_least("wind_mph", 15, default=0.0), 12, _mph("wind_mph", "Breezy ({} mph).")),
        ),
    ),
    RuleGroup(
        "gust",
        (
            StormRule(_at_least("wind_gust_mph", 35), 20, _mph("wind_gust_mph", "Strong gusts ({} mph).")),
            StormRule(_at_least("wind_gust_mph", 25), 10, _mph("wind_gust_mph", "Gusty ({} mph).")),
        ),
    ),
    RuleGroup(
        "precipitation",
        (
            StormRule(_at_least("precip_1h_mm", 8), 35, _mm("precip_1h_mm", "Heavy precip last hour ({} mm).")),
            StormRule(_at_least("precip_1h_mm", 2), 18, _mm("precip_1h_mm", "Precip last hour ({} mm).")),
            StormRule(_at_least("precip_3h_mm", 6), 12, _mm("precip_3h_mm", "Precip last 3h ({} mm).")),
        ),
    ),
    RuleGroup(
        "visibility",
        (
            StormRule(_at_most("visibility_mi", 0.5), 25, _static("Very low visibility.")),
            StormRule(_at_most("visibility_mi", 2), 12, _static("Reduced visibility.")),
        ),
    ),
    RuleGroup(
        "clouds",
        (
            StormRule(_at_least("cloud_pct", 95), 10, _static("Overcast.")),
            StormRule(_at_least("cloud_pct", 75), 6, _static("Mostly cloudy.")),
        ),
    ),
)


def clamp(value: int, low: int = MIN_SCORE, high: int = MAX_SCORE) -> int:
    return max(low, min(high, value))


def label_for_score(score: int) -> Tuple[str, str]:
    """Return ``(label, vibe)`` for a clamped score."""
    for threshold, label, vibe in LABELS:
        if score >= threshold:
            return label, vibe
    return LABELS[-1][1], LABELS[-1][2]


def score_storm_signal(readings: StormReadings, groups: Tuple[RuleGroup, ...] = RULE_GROUPS) -> StormSignal:
    score = 0
    reasons: List[str] = []
    for group in groups:
        rule = group.evaluate(readings)
        if rule is None:
            continue
        score += rule.points
        reasons.append(rule.reason(readings))

    score = clamp(score)
    label, vibe = label_for_score(score)
    summary = " ".join(reasons[:SUMMARY_REASONS]) if reasons else NO_INDICATORS
    return StormSignal(score=score, label=label, vibe=vibe, summary=summary, reasons=tuple(reasons))


def storm_signal_for(current: CurrentConditions) -> StormSignal:
    return score_storm_signal(StormReadings.from_conditions(current))


__all__ = [
    "LABELS",
    "NO_INDICATORS",
    "RULE_GROUPS",
    "RuleGroup",
    "StormRule",
    "label_for_score",
    "score_storm_signal",
    "storm_signal_for",
]
