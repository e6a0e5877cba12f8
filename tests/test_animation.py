from collections.abc import Generator

import pytest

from weatherpal.display.animation import CharacterAnimation
from weatherpal.display.page import WEATHER_CONFIG, PageState
from weatherpal.weather.classify import WeatherCategory


@pytest.fixture
def page() -> PageState:
    return PageState()


@pytest.fixture
def rainy(page: PageState) -> Generator[CharacterAnimation, None, None]:
    # A long interval keeps the timer from firing during the test
    animation = CharacterAnimation(
        page, WEATHER_CONFIG[WeatherCategory.RAINY], interval=3600, assets_url="/static/"
    )
    yield animation
    animation.stop()


def test_start_shows_first_frame(page: PageState, rainy: CharacterAnimation) -> None:
    rainy.start()
    assert rainy.running
    assert page.character_image == "/static/Animations/rainy/rain1.png"


def test_advance_wraps_after_last_frame(page: PageState, rainy: CharacterAnimation) -> None:
    rainy.start()
    shown = [rainy.advance() for _ in range(5)]
    assert shown == [2, 3, 4, 1, 2]
    assert page.character_image == "/static/Animations/rainy/rain2.png"


def test_stopped_animation_leaves_page_alone(page: PageState, rainy: CharacterAnimation) -> None:
    rainy.start()
    rainy.stop()
    page.character_image = "other.png"
    assert rainy.advance() == 1
    assert page.character_image == "other.png"
    assert not rainy.running


def test_stop_is_idempotent(rainy: CharacterAnimation) -> None:
    rainy.stop()
    rainy.stop()
    assert not rainy.running


@pytest.mark.parametrize(
    ("category", "first_frame"),
    [
        (WeatherCategory.COLD, "Animations/cold/Frame1.png"),
        (WeatherCategory.CLOUDY, "Animations/cloudy/Cloudy1.png"),
        (WeatherCategory.SUNNY, "Animations/sunny/fun1.png"),
        (WeatherCategory.NIGHT, "Animations/sunny/fun1.png"),
    ],
)
def test_frame_paths(page: PageState, category: WeatherCategory, first_frame: str) -> None:
    animation = CharacterAnimation(page, WEATHER_CONFIG[category])
    assert animation.frame_url(1) == first_frame
