from __future__ import annotations

import pytest

from weathervibe.core.entities import StormReadings
from weathervibe.core.storm import (
    NO_INDICATORS,
    RULE_GROUPS,
    label_for_score,
    score_storm_signal,
)


def readings(**overrides) -> StormReadings:
    values = {"pressure_hpa": 1015.0, "wind_mph": 5.0}
    values.update(overrides)
    return StormReadings(**values)


def test_calm_conditions_trigger_nothing() -> None:
    signal = score_storm_signal(readings())

    assert signal.score == 0
    assert signal.label == "Calm"
    assert signal.vibe == "Low storm signal."
    assert signal.summary == NO_INDICATORS
    assert signal.reasons == ()


def test_score_clamps_to_100_when_many_rules_fire() -> None:
    signal = score_storm_signal(
        readings(
            condition="Thunderstorm",
            pressure_hpa=980.0,
            wind_mph=40.0,
            wind_gust_mph=55.0,
            rain_1h_mm=12.0,
            visibility_mi=0.2,
            cloud_pct=100.0,
        )
    )

    assert signal.score == 100
    assert signal.label == "Severe"
    assert signal.vibe == "Storm conditions likely / hazardous."


def test_score_clamps_to_zero_for_high_pressure() -> None:
    signal = score_storm_signal(readings(pressure_hpa=1035.0))

    assert signal.score == 0
    assert signal.label == "Calm"
    assert signal.summary == "High pressure (usually steadier weather)."


def test_high_pressure_offsets_other_points() -> None:
    signal = score_storm_signal(readings(pressure_hpa=1030.0, cloud_pct=96.0, wind_mph=18.0))

    assert signal.score == 12 + 10 - 8


@pytest.mark.parametrize(
    "score, label",
    [
        (0, "Calm"),
        (19, "Calm"),
        (20, "Quiet-ish"),
        (34, "Quiet-ish"),
        (35, "Unsettled"),
        (54, "Unsettled"),
        (55, "Stormy"),
        (74, "Stormy"),
        (75, "Severe"),
        (100, "Severe"),
    ],
)
def test_label_thresholds(score: int, label: str) -> None:
    assert label_for_score(score)[0] == label


@pytest.mark.parametrize(
    "pressure, points, reason",
    [
        (985.0, 35, "Very low pressure (strong storm potential)."),
        (990.0, 35, "Very low pressure (strong storm potential)."),
        (995.0, 25, "Low pressure (stormy pattern likely)."),
        (1000.0, 25, "Low pressure (stormy pattern likely)."),
        (1001.0, 15, "Slightly low pressure."),
        (1008.0, 15, "Slightly low pressure."),
        (1009.0, 0, None),
        (1012.0, 0, None),
        (1029.0, 0, None),
    ],
)
def test_pressure_buckets_are_exclusive(pressure: float, points: int, reason: str | None) -> None:
    signal = score_storm_signal(readings(pressure_hpa=pressure))

    assert signal.score == points
    assert list(signal.reasons) == ([reason] if reason else [])


@pytest.mark.parametrize(
    "condition, points, reason",
    [
        ("Thunderstorm", 40, "Thunderstorm conditions reported."),
        ("snow", 25, "Snow conditions reported."),
        ("Rain", 18, "Rain/drizzle conditions reported."),
        ("DRIZZLE", 18, "Rain/drizzle conditions reported."),
        ("Tornado", 50, "Severe conditions reported."),
        ("Squall", 50, "Severe conditions reported."),
        ("Clouds", 0, None),
        (None, 0, None),
    ],
)
def test_condition_rules(condition, points: int, reason) -> None:
    signal = score_storm_signal(readings(condition=condition))

    assert signal.score == points
    assert list(signal.reasons) == ([reason] if reason else [])


@pytest.mark.parametrize(
    "wind, points, reason",
    [
        (14.9, 0, None),
        (15.0, 12, "Breezy (15 mph)."),
        (24.9, 12, "Breezy (25 mph)."),
        (25.0, 25, "Strong wind (25 mph)."),
        (40.4, 25, "Strong wind (40 mph)."),
    ],
)
def test_wind_rules(wind: float, points: int, reason) -> None:
    signal = score_storm_signal(readings(wind_mph=wind))

    assert signal.score == points
    assert list(signal.reasons) == ([reason] if reason else [])


@pytest.mark.parametrize(
    "gust, points, reason",
    [
        (24.9, 0, None),
        (25.0, 10, "Gusty (25 mph)."),
        (34.9, 10, "Gusty (35 mph)."),
        (35.0, 20, "Strong gusts (35 mph)."),
        (52.5, 20, "Strong gusts (53 mph)."),
    ],
)
def test_gust_rules(gust: float, points: int, reason) -> None:
    signal = score_storm_signal(readings(wind_gust_mph=gust))

    assert signal.score == points
    assert list(signal.reasons) == ([reason] if reason else [])


def test_wind_and_gust_reasons_round_speeds() -> None:
    signal = score_storm_signal(readings(wind_mph=24.5, wind_gust_mph=34.6))

    assert signal.score == 12 + 10
    assert signal.reasons == ("Breezy (25 mph).", "Gusty (35 mph).")


def test_missing_gust_visibility_and_clouds_do_not_trigger() -> None:
    signal = score_storm_signal(readings(wind_gust_mph=None, visibility_mi=None, cloud_pct=None))

    assert signal.score == 0


def test_missing_pressure_and_wind_are_not_triggered() -> None:
    signal = score_storm_signal(StormReadings())

    assert signal.score == 0
    assert signal.summary == NO_INDICATORS


def test_precip_combines_rain_and_snow() -> None:
    signal = score_storm_signal(readings(rain_1h_mm=5.0, snow_1h_mm=3.5))

    assert signal.score == 35
    assert signal.reasons == ("Heavy precip last hour (8.5 mm).",)


@pytest.mark.parametrize(
    "rain, points, reason",
    [
        (1.9, 0, None),
        (2.0, 18, "Precip last hour (2.0 mm)."),
        (2.25, 18, "Precip last hour (2.3 mm)."),
        (7.9, 18, "Precip last hour (7.9 mm)."),
        (8.0, 35, "Heavy precip last hour (8.0 mm)."),
    ],
)
def test_last_hour_precip_rules(rain: float, points: int, reason) -> None:
    signal = score_storm_signal(readings(rain_1h_mm=rain))

    assert signal.score == points
    assert list(signal.reasons) == ([reason] if reason else [])


def test_three_hour_precip_only_counts_when_last_hour_is_light() -> None:
    light = score_storm_signal(readings(rain_1h_mm=1.0, rain_3h_mm=7.0))
    heavy = score_storm_signal(readings(rain_1h_mm=3.0, rain_3h_mm=7.0))

    assert light.score == 12
    assert light.reasons == ("Precip last 3h (7.0 mm).",)
    assert heavy.score == 18
    assert heavy.reasons == ("Precip last hour (3.0 mm).",)


@pytest.mark.parametrize(
    "visibility, points, reason",
    [(0.3, 25, "Very low visibility."), (0.5, 25, "Very low visibility."), (1.5, 12, "Reduced visibility."), (5.0, 0, None)],
)
def test_visibility_rules(visibility: float, points: int, reason) -> None:
    signal = score_storm_signal(readings(visibility_mi=visibility))

    assert signal.score == points
    assert list(signal.reasons) == ([reason] if reason else [])


@pytest.mark.parametrize(
    "clouds, points, reason",
    [(74.0, 0, None), (75.0, 6, "Mostly cloudy."), (94.0, 6, "Mostly cloudy."), (95.0, 10, "Overcast."), (100.0, 10, "Overcast.")],
)
def test_cloud_rules(clouds: float, points: int, reason) -> None:
    signal = score_storm_signal(readings(cloud_pct=clouds))

    assert signal.score == points
    assert list(signal.reasons) == ([reason] if reason else [])


def test_summary_uses_first_three_reasons_in_table_order() -> None:
    signal = score_storm_signal(
        readings(
            condition="Rain",
            pressure_hpa=1005.0,
            wind_mph=16.1,
            wind_gust_mph=26.4,
            rain_1h_mm=2.5,
            visibility_mi=1.0,
            cloud_pct=90.0,
        )
    )

    assert signal.score == 18 + 15 + 12 + 10 + 18 + 12 + 6
    assert signal.label == "Severe"
    assert signal.summary == "Rain/drizzle conditions reported. Slightly low pressure. Breezy (16 mph)."
    assert len(signal.reasons) == 7


def test_scoring_is_idempotent() -> None:
    sample = readings(condition="Snow", pressure_hpa=999.0, cloud_pct=80.0)

    assert score_storm_signal(sample) == score_storm_signal(sample)


def test_rule_groups_can_be_evaluated_independently() -> None:
    groups = {group.name: group for group in RULE_GROUPS}

    rule = groups["clouds"].evaluate(readings(cloud_pct=80.0))

    assert rule is not None
    assert rule.points == 6
    assert groups["clouds"].evaluate(readings(cloud_pct=10.0)) is None
    assert list(groups) == ["condition", "pressure", "wind", "gust", "precipitation", "visibility", "clouds"]
