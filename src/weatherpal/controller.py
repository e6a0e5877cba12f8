# filepath: src/weatherpal/controller.py
"""Core controller for the weather page."""

from __future__ import annotations

import logging
import threading
from enum import Enum
from pathlib import Path
from typing import Final

from weatherpal.display.animation import CharacterAnimation
from weatherpal.display.error_ui import ErrorPresenter
from weatherpal.display.page import PageState, theme_for
from weatherpal.display.render import PageRenderer, PageUpdater
from weatherpal.location import (
    Coordinates,
    IpLocationProvider,
    LocationError,
    LocationProvider,
    StaticLocationProvider,
)
from weatherpal.settings.application import ApplicationSettings
from weatherpal.settings.user import UserSettings
from weatherpal.utils.cancel import CancelToken
from weatherpal.utils.time import Clock, TimeUtils
from weatherpal.weather.api import WeatherAPI
from weatherpal.weather.classify import WeatherCategory
from weatherpal.weather.errors import BatchCancelled, ConfigurationError, WeatherAPIError

logger: Final = logging.getLogger(__name__)


class CycleResult(Enum):
    """How a load cycle ended."""

    RENDERED = "rendered"
    CANCELLED = "cancelled"
    LOAD_FAILED = "load_failed"
    LOCATION_FAILED = "location_failed"
    NO_LOCATION = "no_location"
    CONFIG_ERROR = "config_error"

    @property
    def ok(self) -> bool:
        return self is CycleResult.RENDERED


class WeatherSession:
    """Main controller class for the weather page.

    This class orchestrates one load cycle at a time:
    - Asking the location provider for a position
    - Fetching current weather, forecast and air quality as one batch
    - Writing the results (or an error message) onto the page
    - Restarting the character animation for the new category

    The session owns the only state that outlives a cycle: the cancel
    token of the batch in flight and the running animation. Starting a
    cycle cancels the previous batch; a successful render stops the
    previous animation before starting the next one.
    """

    def __init__(
        self,
        settings: UserSettings,
        weather_api: WeatherAPI | None = None,
        location_provider: LocationProvider | None = None,
        clock: Clock | None = None,
        page: PageState | None = None,
        renderer: PageRenderer | None = None,
        output_path: Path | None = None,
        debug: bool = False,
    ) -> None:
        """Initialize the session.

        Args:
            settings: Validated user settings
            weather_api: Optional custom weather API client
            location_provider: Optional custom location provider
            clock: Returns the current local time (default: device clock)
            page: Page state to write to (default: a fresh page)
            renderer: When given, the page is written after every change
            output_path: Where ``renderer`` writes (default: from settings)
            debug: Enable debug logging
        """
        # Configure logging
        logging.basicConfig(
            level=logging.DEBUG if debug else logging.INFO,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )

        self.settings = settings
        self.app_settings = ApplicationSettings(settings)

        # Allow dependency injection or create defaults
        self.weather_api = weather_api or WeatherAPI(
            settings.api_key, timeout=settings.request_timeout
        )
        self.location_provider: LocationProvider | None = (
            location_provider or self._default_location_provider()
        )
        self.clock: Clock = clock or (lambda: TimeUtils.now_localized(settings.timezone))

        self.page = page or PageState()
        self.errors = ErrorPresenter(self.page)
        self.updater = PageUpdater(self.page)
        self.renderer = renderer
        self.output_path = output_path or self.app_settings.paths.preview_file
        self.interactive = False

        self.current_cancellation: CancelToken | None = None
        self.current_animation: CharacterAnimation | None = None
        self._lock = threading.Lock()

    def _default_location_provider(self) -> LocationProvider | None:
        """Fixed coordinates when configured, else IP geolocation if set up."""
        coords = self.settings.coordinates
        if coords is not None:
            return StaticLocationProvider(coords)
        geo = self.settings.geolocation
        if not geo.url:
            return None
        return IpLocationProvider(
            url=geo.url,
            timeout=geo.timeout,
            maximum_age=geo.maximum_age,
            enabled=geo.enabled,
        )

    # ── public hooks ─────────────────────────────────────────────────────────

    def refresh(self) -> CycleResult:
        """Re-run the whole location → fetch → render cycle.

        This is the public refresh hook behind the page's Refresh and Retry
        controls. It never retries on its own.

        Returns:
            How the cycle ended
        """
        if self.location_provider is None:
            logger.warning("No location provider configured")
            self.errors.show_geolocation_unavailable()
            self._publish()
            return CycleResult.NO_LOCATION

        try:
            coords = self.location_provider.locate()
        except LocationError as err:
            logger.warning("Geolocation error: %s %s", err.kind.name, err.message)
            self.errors.show_location_failure(err)
            self._publish()
            return CycleResult.LOCATION_FAILED

        return self.load_for_coords(coords)

    def load_for_coords(self, coords: Coordinates) -> CycleResult:
        """Fetch and render the weather for ``coords``.

        Any batch still in flight is cancelled first. Only the batch that
        is current when its results arrive may change the page.

        Args:
            coords: Position to load

        Returns:
            How the cycle ended
        """
        try:
            self._check_configuration()
        except ConfigurationError as err:
            logger.error("%s", err)
            self.errors.show_missing_api_key()
            self._publish()
            return CycleResult.CONFIG_ERROR

        token = self._begin_cycle()
        logger.debug("Loading weather for %s", coords)

        try:
            batch = self.weather_api.fetch_batch(coords, token)
        except BatchCancelled as exc:
            logger.debug("Weather load abandoned: %s", exc.reason)
            return CycleResult.CANCELLED
        except WeatherAPIError as err:
            if not self._is_current(token):
                logger.debug("Ignoring failure of a superseded batch: %s", err)
                return CycleResult.CANCELLED
            logger.error("Weather load failed: %s", err)
            self.errors.show_load_failed()
            self._publish()
            return CycleResult.LOAD_FAILED

        with self._lock:
            if token is not self.current_cancellation or token.cancelled:
                logger.debug("Discarding results of a superseded batch")
                return CycleResult.CANCELLED
            category = self.updater.apply_batch(batch, self.clock())
            self._restart_animation(category)

        logger.info("Weather updated: %s", category.value)
        self._publish()
        return CycleResult.RENDERED

    def close(self) -> None:
        """Cancel any batch in flight and stop the animation."""
        with self._lock:
            if self.current_cancellation is not None:
                self.current_cancellation.cancel("session closed")
            if self.current_animation is not None:
                self.current_animation.stop()
                self.current_animation = None

    # ── internals ────────────────────────────────────────────────────────────

    def _check_configuration(self) -> None:
        if not self.settings.has_api_key:
            raise ConfigurationError("OpenWeather API key is not set")

    def _begin_cycle(self) -> CancelToken:
        with self._lock:
            if self.current_cancellation is not None:
                self.current_cancellation.cancel("superseded")
            token = CancelToken(self.settings.request_timeout)
            self.current_cancellation = token
            return token

    def _is_current(self, token: CancelToken) -> bool:
        with self._lock:
            return token is self.current_cancellation and not token.cancelled

    def _restart_animation(self, category: WeatherCategory) -> None:
        if self.current_animation is not None:
            self.current_animation.stop()
        animation = CharacterAnimation(
            self.page,
            theme_for(category),
            interval=self.settings.animation_interval,
            assets_url=self.settings.assets_url,
        )
        animation.start()
        self.current_animation = animation

    def _publish(self) -> None:
        if self.renderer is None:
            return
        self.renderer.write(self.page, self.output_path, interactive=self.interactive)
