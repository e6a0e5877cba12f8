"""Condition classification and advisory messages.

Everything here is a pure function of (temperature, condition text,
night flag). The rules are ordered: the first matching rule wins.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

NIGHT_STARTS_AT = 18
DAY_STARTS_AT = 6
COLD_BELOW_C = 15
HOT_ABOVE_C = 25

PRECIPITATION_WORDS = ("rain", "drizzle", "snow", "thunder")
OVERCAST_WORDS = ("cloud", "mist", "fog", "haze")


class WeatherCategory(str, Enum):
    """Presentation category driving theme and character animation."""

    COLD = "cold"
    CLOUDY = "cloudy"
    RAINY = "rainy"
    SUNNY = "sunny"
    NIGHT = "night"


def mentions(condition_text: str, words: tuple[str, ...]) -> bool:
    """Case-insensitive substring test against any of ``words``."""
    text = condition_text.lower()
    return any(word in text for word in words)


def is_night(now: datetime) -> bool:
    """Night is the local hour range [18, 24) and [0, 6).

    Args:
        now: Device-local wall-clock time

    Returns:
        True between 18:00 and 05:59 inclusive
    """
    return now.hour >= NIGHT_STARTS_AT or now.hour < DAY_STARTS_AT


def classify_weather(
    temperature_c: float, condition_text: str, night: bool
) -> WeatherCategory:
    """Pick the single presentation category for the current conditions.

    Precedence: precipitation, then cold, then night, then overcast, then
    sunny. Precipitation therefore wins regardless of temperature or time.

    Args:
        temperature_c: Current temperature in °C
        condition_text: Provider condition string (e.g. "Rain", "Clouds")
        night: Result of :func:`is_night` for the current time

    Returns:
        The matching WeatherCategory
    """
    if mentions(condition_text, PRECIPITATION_WORDS):
        return WeatherCategory.RAINY
    if temperature_c < COLD_BELOW_C:
        return WeatherCategory.COLD
    if night:
        return WeatherCategory.NIGHT
    if mentions(condition_text, OVERCAST_WORDS):
        return WeatherCategory.CLOUDY
    return WeatherCategory.SUNNY


def compose_message(temperature_c: float, condition_text: str, night: bool) -> str:
    """Headline message for the page.

    At night only the temperature matters; the condition text is not
    consulted. By day rain/drizzle is checked before cloud, and both before
    the hot-day rule.
    """
    cold = temperature_c < COLD_BELOW_C
    if night:
        return "It's a cold night..." if cold else "It's a lovely night..."

    if mentions(condition_text, ("rain", "drizzle")):
        return "It's cold and raining..." if cold else "It's raining today!"
    if mentions(condition_text, ("cloud",)):
        return "It's cold and cloudy..." if cold else "It's a cloudy day..."
    if temperature_c > HOT_ABOVE_C:
        return "It's a hot day!"
    return "It's a nice day!"
