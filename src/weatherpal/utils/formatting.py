"""Text and number formatting utilities."""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards +infinity.

    Matches what the page has always shown (2.5 -> 3, -2.5 -> -2), which
    Python's built-in banker's rounding does not. Compares the fractional
    part instead of adding 0.5, which would round 0.49999999999999994 up.

    Args:
        value: Number to round

    Returns:
        Rounded integer
    """
    floor = math.floor(value)
    return floor + 1 if value - floor >= 0.5 else floor


def format_temperature(temp: float, unit: str = "°C") -> str:
    """Format temperature value with unit.

    Args:
        temp: Temperature value
        unit: Temperature unit

    Returns:
        Formatted temperature string
    """
    return f"{round_half_up(temp)}{unit}"


def format_percentage(value: int) -> str:
    """Format an integer percentage."""
    return f"{value}%"
