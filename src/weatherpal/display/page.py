"""In-memory state of the weather page.

``PageState`` holds every value the page shows. The session, the error
presenter and the animation timer write to it; the renderer reads a
consistent copy under the same lock.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any

from weatherpal.weather.classify import WeatherCategory

DARK_TEXT = "#000"
LIGHT_TEXT = "#fff"


@dataclass(frozen=True)
class ThemeConfig:
    """Background class and character animation for one category."""

    frames: int
    animation_path: str
    bg_class: str


WEATHER_CONFIG: dict[WeatherCategory, ThemeConfig] = {
    WeatherCategory.COLD: ThemeConfig(7, "Animations/cold/Frame", "night-bg"),
    WeatherCategory.CLOUDY: ThemeConfig(6, "Animations/cloudy/Cloudy", "cloudy-bg"),
    WeatherCategory.RAINY: ThemeConfig(4, "Animations/rainy/rain", "rainy-bg"),
    WeatherCategory.SUNNY: ThemeConfig(6, "Animations/sunny/fun", "sunny-bg"),
    WeatherCategory.NIGHT: ThemeConfig(6, "Animations/sunny/fun", "night-bg"),
}


def theme_for(category: WeatherCategory | str | None) -> ThemeConfig:
    """Theme for a category; anything unrecognised gets the sunny theme."""
    try:
        return WEATHER_CONFIG[WeatherCategory(category)]
    except ValueError:
        return WEATHER_CONFIG[WeatherCategory.SUNNY]


def text_color_for(category: WeatherCategory) -> str:
    """Dark text on the sunny background, light text everywhere else."""
    return DARK_TEXT if category is WeatherCategory.SUNNY else LIGHT_TEXT


@dataclass
class PageState:
    """Everything displayed on the weather page."""

    theme_class: str = "container"
    text_color: str = DARK_TEXT
    category: WeatherCategory | None = None

    message: str = "Loading weather..."
    sub_message: str = ""

    temperature: str = ""
    feels_like: str = ""
    feels_like_visible: bool = False
    humidity: str = ""
    air_quality: str = ""
    air_quality_color: str = ""

    forecast: str = ""
    forecast_visible: bool = False
    recommendation_title: str = ""
    recommendation_items: list[str] = field(default_factory=list)
    clothing_visible: bool = True

    character_image: str | None = None
    retry_visible: bool = False

    updated_at: datetime | None = None
    revision: int = 0

    lock: threading.RLock = field(
        default_factory=threading.RLock, repr=False, compare=False
    )

    def reset_weather(self) -> None:
        """Clear every weather-derived field back to its default."""
        with self.lock:
            blank = PageState()
            for f in fields(self):
                if f.name in ("lock", "revision", "character_image"):
                    continue
                setattr(self, f.name, getattr(blank, f.name))

    def touch(self) -> None:
        """Mark the page as changed."""
        with self.lock:
            self.revision += 1

    def snapshot(self) -> dict[str, Any]:
        """Copy of all fields, taken atomically, for rendering."""
        with self.lock:
            data = {f.name: getattr(self, f.name) for f in fields(self) if f.name != "lock"}
            data["recommendation_items"] = list(self.recommendation_items)
            return data
