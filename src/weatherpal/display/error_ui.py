"""Error messages shown on the weather page."""

from __future__ import annotations

import logging
from typing import Final

from weatherpal.display.page import PageState
from weatherpal.location import LocationError, LocationErrorKind

logger: Final = logging.getLogger(__name__)

MISSING_API_KEY: Final = ("Missing API key", "Set api_key in config.yaml")
GEOLOCATION_UNAVAILABLE: Final = ("Geolocation not available", "Please enable location services")
LOAD_FAILED: Final = ("Failed to load weather", "Please try again later")

LOCATION_MESSAGES: Final[dict[LocationErrorKind, tuple[str, str]]] = {
    LocationErrorKind.PERMISSION_DENIED: (
        "Location access denied",
        "Allow location access in your settings.",
    ),
    LocationErrorKind.POSITION_UNAVAILABLE: (
        "Location unavailable",
        "Check your network connection or set lat/lon in config.yaml.",
    ),
    LocationErrorKind.TIMEOUT: ("Location request timed out", "Please try again."),
    LocationErrorKind.UNKNOWN: ("Location error", "Unable to determine your location."),
}


class ErrorPresenter:
    """Writes error messages to a page.

    Errors only change the message lines (and the widgets named below);
    the weather fields of the last successful load stay as they were.
    """

    def __init__(self, page: PageState) -> None:
        self.page = page

    def show_error(self, main_message: str, sub_message: str) -> None:
        """Show a message pair and hide the clothing widget."""
        with self.page.lock:
            self.page.message = main_message
            self.page.sub_message = sub_message
            self.page.clothing_visible = False
            self.page.touch()

    def show_location_error(self, main_message: str, sub_message: str) -> None:
        """Show a message pair together with the retry control."""
        with self.page.lock:
            self.page.message = main_message
            self.page.sub_message = sub_message
            self.page.retry_visible = True
            self.page.touch()

    def show_missing_api_key(self) -> None:
        self.show_error(*MISSING_API_KEY)

    def show_geolocation_unavailable(self) -> None:
        self.show_error(*GEOLOCATION_UNAVAILABLE)

    def show_load_failed(self) -> None:
        self.show_error(*LOAD_FAILED)

    def show_location_failure(self, error: LocationError) -> None:
        """Show the message tailored to the location failure kind."""
        main_message, sub_message = LOCATION_MESSAGES.get(
            error.kind, LOCATION_MESSAGES[LocationErrorKind.UNKNOWN]
        )
        self.show_location_error(main_message, sub_message)
