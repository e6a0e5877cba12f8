"""Tomorrow's forecast: point selection and readable labels."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime
from typing import Final

from weatherpal.utils.time import TimeUtils
from weatherpal.weather.models import ForecastPoint

logger: Final = logging.getLogger(__name__)

# Checked in order; the first substring found decides the label.
CONDITION_LABELS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("rain", "drizzle"), "Rainy"),
    (("cloud",), "Cloudy"),
    (("clear",), "Sunny"),
    (("snow",), "Snowy"),
    (("thunder",), "Stormy"),
)


def select_tomorrow(
    points: Sequence[ForecastPoint], now: datetime
) -> ForecastPoint | None:
    """Pick the forecast point closest to noon on the next calendar day.

    Candidates are points whose local date is tomorrow's date. They are
    scanned in provider order and only a strictly smaller distance to noon
    replaces the current best, so ties go to the earlier entry.

    When no point falls on tomorrow, the first point of the sequence is
    returned whatever its date.

    Args:
        points: Forecast points in provider order
        now: Current local time

    Returns:
        The chosen point, or None for an empty forecast
    """
    if not points:
        return None

    target = TimeUtils.tomorrow_noon(now)
    target_date = target.date()

    closest: ForecastPoint | None = None
    best_diff = float("inf")
    for point in points:
        when = TimeUtils.epoch_to_local(point.timestamp, now)
        if when.date() != target_date:
            continue
        diff = TimeUtils.seconds_between(when, target)
        if diff < best_diff:
            best_diff = diff
            closest = point

    if closest is None:
        logger.debug("No forecast entry for %s; using the first entry", target_date)
        closest = points[0]
    return closest


def readable_condition(condition_text: str) -> str:
    """Map a provider condition to a short label, or pass it through."""
    lower = condition_text.lower()
    for words, label in CONDITION_LABELS:
        if any(word in lower for word in words):
            return label
    return condition_text


def describe_forecast(point: ForecastPoint) -> str:
    """Display string, e.g. "Tomorrow: Cloudy (14°C)"."""
    return f"Tomorrow: {readable_condition(point.condition)} ({point.rounded_temperature}°C)"
