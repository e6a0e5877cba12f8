# src/weatherpal/utils/time.py
"""Time and date handling utilities."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, time, timedelta
from zoneinfo import ZoneInfo

# A clock returns "now" as a datetime; the session and the forecast helpers
# take one so tests can pin the wall-clock time.
Clock = Callable[[], datetime]

NOON = time(12, 0)


class TimeUtils:
    """Time-related utility functions.

    Centralized utilities for working with dates and times:
    - Current time retrieval in the configured zone or as device wall-clock time
    - Epoch conversions that follow the timezone of a reference instant
    - Calendar helpers for the forecast day selection

    Datetimes are either naive device-local wall-clock times or aware in an
    IANA zone. Both follow the real daylight saving rules of every date they
    touch; a fixed UTC offset would not.
    """

    @staticmethod
    def now_localized(timezone_name: str | None = None) -> datetime:
        """Get the current local time.

        Args:
            timezone_name: IANA zone (e.g. "Europe/Berlin"); None uses the
                device's local wall clock

        Returns:
            Aware datetime in ``timezone_name``, or a naive local datetime
        """
        if timezone_name:
            return datetime.now(ZoneInfo(timezone_name))
        return datetime.now()

    @staticmethod
    def epoch_to_local(timestamp: int, reference: datetime) -> datetime:
        """Convert a UNIX timestamp into the timezone of ``reference``.

        Naive references are treated as device-local wall-clock time.

        Args:
            timestamp: UNIX timestamp (seconds since epoch)
            reference: Datetime whose timezone is used for the conversion

        Returns:
            Datetime in the same timezone as ``reference``
        """
        return datetime.fromtimestamp(timestamp, tz=reference.tzinfo)

    @staticmethod
    def tomorrow_noon(now: datetime) -> datetime:
        """Return 12:00:00 on the calendar day after ``now``.

        Built from tomorrow's date, so the offset is tomorrow's own one.

        Args:
            now: Reference datetime

        Returns:
            Datetime for tomorrow at noon, in ``now``'s timezone
        """
        return datetime.combine(now.date() + timedelta(days=1), NOON, tzinfo=now.tzinfo)

    @staticmethod
    def seconds_between(a: datetime, b: datetime) -> float:
        """Absolute elapsed seconds between two instants."""
        return abs(a.timestamp() - b.timestamp())
