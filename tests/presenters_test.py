from __future__ import annotations

import pytest

from weathervibe.core.entities import CurrentConditions, DailyBar, ForecastBlock
from weathervibe.dashboard import presenters

from payloads import DAY_START


def make_current(**overrides) -> CurrentConditions:
    values = dict(name="Providence", country="US", temp_f=70.0, humidity=50, pressure_hpa=1012, wind_mph=5.0)
    values.update(overrides)
    return CurrentConditions(**values)


def test_degrees_rounds_half_up_and_marks_missing() -> None:
    assert presenters.degrees(70.5) == "71°"
    assert presenters.degrees(-0.4) == "0°"
    assert presenters.degrees(None) == "—"


def test_precip_lines_list_snow_before_rain() -> None:
    current = make_current(rain_1h_mm=0.35, rain_3h_mm=2.0, snow_1h_mm=1.25)

    assert presenters.precip_lines(current) == ["Snow: 1h 1.3 mm", "Rain: 1h 0.35 mm · 3h 2.0 mm"]
    assert presenters.precip_lines(make_current(rain_1h_mm=0.0)) == []


@pytest.mark.parametrize(
    "mm, text",
    [(2.25, "2.3 mm"), (1.0, "1.0 mm"), (12.35, "12.4 mm"), (0.125, "0.13 mm"), (0.5, "0.50 mm")],
)
def test_format_mm_rounds_halves_up(mm: float, text: str) -> None:
    assert presenters.format_mm(mm) == text


def test_hi_lo_and_place() -> None:
    assert presenters.hi_lo(make_current(temp_min_f=61.2, temp_max_f=74.8)) == "Low: 61°  High: 75°"
    assert presenters.hi_lo(make_current(temp_min_f=61.2)) is None
    assert presenters.place(make_current()) == "Providence, US"
    assert presenters.place(make_current(country="")) == "Providence"


@pytest.mark.parametrize(
    "condition, kind",
    [("Snow", "snow"), ("Rain", "rain"), ("drizzle", "rain"), ("Thunderstorm", "storm"), ("Clear", "none"), (None, "none")],
)
def test_icon_behavior(condition, kind: str) -> None:
    assert presenters.icon_behavior(condition) == kind


def test_icon_dims_outside_daylight() -> None:
    current = make_current(sunrise=1000, sunset=2000)

    assert presenters.is_night(current, now=500) is True
    assert presenters.is_night(current, now=1500) is False
    assert presenters.is_night(current, now=2500) is True
    assert presenters.is_night(make_current(), now=500) is False


def test_storm_tint_by_label() -> None:
    assert presenters.storm_tint("Severe")["border"] == "tint-red-border"
    assert presenters.storm_tint("Stormy")["bar"] == "tint-amber-bar"
    assert presenters.storm_tint("Calm")["dot"] == "tint-neutral-dot"


@pytest.mark.parametrize(
    "value, note",
    [(None, None), (80.0, "Overcast / thick cloud deck."), (50.0, "Partly to mostly cloudy."), (10.0, "Mostly clear skies.")],
)
def test_cloud_note(value, note) -> None:
    assert presenters.cloud_note(value) == note


def test_dew_point_and_visibility_notes() -> None:
    assert presenters.dew_point_note(66.0) == "Humid / sticky air."
    assert presenters.dew_point_note(56.0) == "A bit muggy."
    assert presenters.dew_point_note(46.0) == "Comfortable."
    assert presenters.dew_point_note(30.0) == "Dry air."
    assert presenters.visibility_note(10.0) == "Good visibility."
    assert presenters.visibility_note(1.0) == "Reduced visibility."
    assert presenters.visibility_note(None) is None


def test_weekday_label() -> None:
    assert presenters.weekday_label("2023-11-14") == "Tue"


def test_daily_rows_share_one_scale() -> None:
    bars = [
        DailyBar(key="2023-11-14", min_f=40.0, max_f=60.0, icon="01d"),
        DailyBar(key="2023-11-15", min_f=50.0, max_f=51.0, icon=None),
    ]

    rows = presenters.daily_rows(bars)

    assert [row.weekday for row in rows] == ["Tue", "Wed"]
    assert (rows[0].left, rows[0].width) == (0.0, 100.0)
    assert rows[1].left == 50.0
    # narrow ranges still get a visible bar
    assert rows[1].width == presenters.MIN_BAR_WIDTH
    assert rows[0].icon_url == "https://openweathermap.org/img/wn/01d@2x.png"
    assert rows[1].icon_url is None


def test_daily_rows_with_flat_temperatures() -> None:
    rows = presenters.daily_rows([DailyBar(key="2023-11-14", min_f=50.0, max_f=50.0, icon=None)])

    assert (rows[0].left, rows[0].width) == (0.0, presenters.MIN_BAR_WIDTH)


def test_strip_items_use_local_hours() -> None:
    blocks = [ForecastBlock(dt=DAY_START + 15 * 3600, temp_f=44.6, icon="04n", description="broken clouds")]

    items = presenters.strip_items(blocks, -5 * 3600)

    assert items == [
        presenters.StripItem(
            label="10:00",
            temp="45°",
            icon_url="https://openweathermap.org/img/wn/04n@2x.png",
            description="broken clouds",
        )
    ]


def test_temp_trend_spans_the_box() -> None:
    blocks = [ForecastBlock(dt=DAY_START + i * 3 * 3600, temp_f=temp) for i, temp in enumerate([40.0, 50.0, 45.0])]

    trend = presenters.temp_trend(blocks)

    assert trend.path == "M 4.0 36.0 L 80.0 4.0 L 156.0 20.0"
    assert (trend.current_x, trend.current_y) == (4.0, 36.0)
    assert presenters.temp_trend([]) is None
