import time
from collections.abc import Generator
from datetime import UTC, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from tests.conftest import epoch
from weatherpal.weather.forecast import describe_forecast, readable_condition, select_tomorrow
from weatherpal.weather.models import ForecastPoint

NOW = datetime(2024, 5, 3, 10, 0, tzinfo=UTC)


def point(ts: int, temperature: float = 15.0, condition: str = "Clear") -> ForecastPoint:
    return ForecastPoint(timestamp=ts, temperature=temperature, condition=condition)


def test_empty_forecast_has_no_selection() -> None:
    assert select_tomorrow([], NOW) is None


def test_prefers_entry_closest_to_tomorrow_noon() -> None:
    points = [
        point(epoch(2024, 5, 3, 15)),
        point(epoch(2024, 5, 4, 9)),
        point(epoch(2024, 5, 4, 13)),
        point(epoch(2024, 5, 4, 18)),
    ]
    assert select_tomorrow(points, NOW) is points[2]


@pytest.mark.parametrize("first_index", [0, 1])
def test_tie_goes_to_earlier_entry(first_index: int) -> None:
    morning = point(epoch(2024, 5, 4, 9), condition="Rain")
    afternoon = point(epoch(2024, 5, 4, 15), condition="Clouds")
    ordered = [morning, afternoon] if first_index == 0 else [afternoon, morning]
    assert select_tomorrow([point(epoch(2024, 5, 3, 12)), *ordered], NOW) is ordered[0]


def test_falls_back_to_first_entry() -> None:
    points = [point(epoch(2024, 5, 3, 12)), point(epoch(2024, 5, 5, 12))]
    assert select_tomorrow(points, NOW) is points[0]


def test_day_after_tomorrow_is_not_a_candidate() -> None:
    points = [point(epoch(2024, 5, 5, 12)), point(epoch(2024, 5, 4, 21))]
    assert select_tomorrow(points, NOW) is points[1]


def test_month_boundary() -> None:
    now = datetime(2024, 1, 31, 20, 0, tzinfo=UTC)
    points = [point(epoch(2024, 1, 31, 23)), point(epoch(2024, 2, 1, 12))]
    assert select_tomorrow(points, now) is points[1]


def test_uses_local_calendar_date() -> None:
    eastern = timezone(timedelta(hours=-5))
    now = datetime(2024, 5, 3, 10, 0, tzinfo=eastern)
    # 03:00 UTC on the 4th is still the 3rd at UTC-5
    late_today = point(epoch(2024, 5, 4, 3))
    local_noon = point(epoch(2024, 5, 4, 17))
    assert select_tomorrow([late_today, local_noon], now) is local_noon
    assert select_tomorrow([late_today], now) is late_today


@pytest.mark.parametrize(
    ("condition", "label"),
    [
        ("Rain", "Rainy"),
        ("light drizzle", "Rainy"),
        ("Clouds", "Cloudy"),
        ("Clear", "Sunny"),
        ("Snow", "Snowy"),
        ("Thunderstorm", "Stormy"),
        ("Mist", "Mist"),
        ("Unknown", "Unknown"),
    ],
)
def test_readable_condition(condition: str, label: str) -> None:
    assert readable_condition(condition) == label


def test_describe_forecast_rounds_half_up() -> None:
    assert describe_forecast(point(0, 14.5, "Clouds")) == "Tomorrow: Cloudy (15°C)"
    assert describe_forecast(point(0, -0.5, "Snow")) == "Tomorrow: Snowy (0°C)"


BERLIN = ZoneInfo("Europe/Berlin")


@pytest.fixture
def berlin_local_time(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Make the device clock Europe/Berlin for naive datetimes."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    monkeypatch.setenv("TZ", "Europe/Berlin")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


def dst_eve_points() -> list[ForecastPoint]:
    # Clocks go forward on 31 March 2024: 09:00Z is 11:00 CEST, 12:00Z is 14:00 CEST
    return [
        point(epoch(2024, 3, 31, 12), condition="Clear"),
        point(epoch(2024, 3, 31, 9), condition="Rain"),
    ]


def test_daylight_saving_eve_in_zone() -> None:
    now = datetime(2024, 3, 30, 21, 0, tzinfo=BERLIN)
    assert select_tomorrow(dst_eve_points(), now).condition == "Rain"


@pytest.mark.usefixtures("berlin_local_time")
def test_daylight_saving_eve_on_device_clock() -> None:
    now = datetime(2024, 3, 30, 21, 0)
    assert select_tomorrow(dst_eve_points(), now).condition == "Rain"


def test_daylight_saving_end_in_zone() -> None:
    # Clocks go back on 27 October 2024: 09:30Z is 10:30 CET, 11:30Z is 12:30 CET
    now = datetime(2024, 10, 26, 22, 0, tzinfo=BERLIN)
    points = [
        point(epoch(2024, 10, 27, 9, 30), condition="Clouds"),
        point(epoch(2024, 10, 27, 11, 30), condition="Clear"),
    ]
    assert select_tomorrow(points, now).condition == "Clear"
