"""Page rendering components for the weather display."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path
from typing import Any, Final, Optional, cast

from jinja2 import Environment, FileSystemLoader, Template, select_autoescape

from weatherpal.display.page import PageState, text_color_for, theme_for
from weatherpal.settings.application import PACKAGE_DIR
from weatherpal.utils.file import write_text_atomic
from weatherpal.utils.formatting import format_percentage, format_temperature
from weatherpal.weather.air_quality import AirQuality
from weatherpal.weather.classify import (
    WeatherCategory,
    classify_weather,
    compose_message,
    is_night,
)
from weatherpal.weather.clothing import recommend_clothing
from weatherpal.weather.forecast import describe_forecast, select_tomorrow
from weatherpal.weather.models import ForecastPoint, WeatherBatch, WeatherSnapshot

logger: Final = logging.getLogger(__name__)

# Feels-like is only worth showing when it differs this much (°C)
FEELS_LIKE_MIN_DIFF: Final = 3
RECOMMENDED_ITEMS: Final = 2


class PageUpdater:
    """Writes a fetched batch onto a page.

    The updater:
    - Classifies the current conditions and applies the matching theme
    - Fills in message, temperature, feels-like and humidity
    - Picks tomorrow's forecast point and the clothing recommendation for it
    - Shows the air quality label with its PM2.5 value

    :meth:`apply_batch` rebuilds all of these from scratch under the page
    lock, so readers never see a mix of two loads.
    """

    def __init__(self, page: PageState) -> None:
        self.page = page

    def apply_batch(self, batch: WeatherBatch, now: datetime) -> WeatherCategory:
        """Replace every weather field with values derived from ``batch``.

        Args:
            batch: Results of a successful fetch batch
            now: Local time of the load, used for night and "tomorrow"

        Returns:
            The presentation category now active
        """
        with self.page.lock:
            self.page.reset_weather()
            category = self.show_current(batch.current, now)
            self.show_forecast(batch.forecast, now)
            self.show_air_quality(batch.air_quality)
            self.page.updated_at = now
            self.page.touch()
        return category

    def apply_theme(self, category: WeatherCategory) -> None:
        theme = theme_for(category)
        self.page.category = category
        self.page.theme_class = f"container {theme.bg_class}"
        self.page.text_color = text_color_for(category)

    def show_current(self, snapshot: WeatherSnapshot, now: datetime) -> WeatherCategory:
        night = is_night(now)
        temp = snapshot.rounded_temperature
        feels_like = snapshot.rounded_feels_like

        # Classification uses the unrounded temperature, the text the rounded one
        category = classify_weather(snapshot.temperature, snapshot.condition_lower, night)
        self.apply_theme(category)

        self.page.message = compose_message(temp, snapshot.condition_lower, night)
        self.page.temperature = format_temperature(temp)
        if abs(temp - feels_like) >= FEELS_LIKE_MIN_DIFF:
            self.page.feels_like = f"Feels like {format_temperature(feels_like)}"
            self.page.feels_like_visible = True
        self.page.humidity = f"Humidity: {format_percentage(snapshot.humidity)}"
        return category

    def show_forecast(self, points: Sequence[ForecastPoint], now: datetime) -> None:
        point = select_tomorrow(points, now)
        if point is None:
            logger.info("Forecast response had no entries")
            return

        self.page.forecast = describe_forecast(point)
        self.page.forecast_visible = True

        clothing = recommend_clothing(point.rounded_temperature, point.condition.lower())
        self.page.recommendation_title = clothing.title
        self.page.recommendation_items = clothing.top(RECOMMENDED_ITEMS)

    def show_air_quality(self, air_quality: AirQuality) -> None:
        self.page.air_quality = air_quality.description
        self.page.air_quality_color = air_quality.color


class PageRenderer:
    """Handles the Jinja2 environment and renders the page.

    The template receives every field of :class:`PageState` plus any extra
    keyword arguments (e.g. whether the refresh controls are live).
    """

    page_template: Template

    def __init__(self, templates_dir: Optional[Path] = None) -> None:
        """Initialize the template renderer.

        Args:
            templates_dir: Directory containing templates (default: packaged)
        """
        self.templates_dir = templates_dir or PACKAGE_DIR / "templates"
        self.env = Environment(
            loader=FileSystemLoader(self.templates_dir),
            autoescape=select_autoescape(["html", "j2"]),
        )
        self.page_template = self.env.get_template("page.html.j2")

    def render(self, page: PageState, **extra: Any) -> str:
        """Render the page to HTML.

        Args:
            page: Page state to render
            extra: Additional template variables

        Returns:
            Rendered HTML
        """
        context = page.snapshot()
        context.update(extra)
        return cast(str, self.page_template.render(**context))

    def write(self, page: PageState, output_path: Path, **extra: Any) -> Path:
        """Render the page and write it to ``output_path``."""
        write_text_atomic(output_path, self.render(page, **extra))
        logger.debug("Page written to %s", output_path)
        return output_path
