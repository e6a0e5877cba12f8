"""Common utility functions and helpers for the weatherpal package."""

from weatherpal.utils.cancel import CancelToken
from weatherpal.utils.file import ensure_directory_exists
from weatherpal.utils.formatting import format_percentage, format_temperature, round_half_up
from weatherpal.utils.time import Clock, TimeUtils

__all__ = [
    "CancelToken",
    "Clock",
    "TimeUtils",
    "ensure_directory_exists",
    "format_percentage",
    "format_temperature",
    "round_half_up",
]
