"""Weather API client for OpenWeather."""

from __future__ import annotations

import logging
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from typing import Any, Dict, Final, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from weatherpal.location import Coordinates
from weatherpal.utils.cancel import CancelToken

from .air_quality import AirQuality
from .errors import BatchCancelled, NetworkError, ParseError, WeatherAPIError
from .models import (
    AirPollutionResponse,
    CurrentWeatherResponse,
    ForecastPoint,
    ForecastResponse,
    WeatherBatch,
    WeatherSnapshot,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

# API endpoints
BASE_URL: Final = "https://api.openweathermap.org/data/2.5"
CURRENT_PATH: Final = "/weather"
FORECAST_PATH: Final = "/forecast"
AIR_POLLUTION_PATH: Final = "/air_pollution"
UNITS: Final = "metric"

# How often the batch join re-checks the cancel token (seconds)
POLL_INTERVAL: Final = 0.05

# Human‑readable explanations for common HTTP errors
HTTP_ERROR_MAP: Final = {
    400: "Bad request - check lat/lon or parameters",
    401: "Invalid or missing API key",
    403: "Account blocked / key revoked",
    404: "Coordinates returned no data",
    429: "Rate limit exceeded",
    500: "OpenWeather internal error",
    502: "Bad gateway at OpenWeather",
    503: "Service unavailable (maintenance)",
    504: "Gateway timeout",
}


class WeatherAPI:
    """OpenWeather client for current weather, forecast and air quality.

    Each request honours a :class:`CancelToken`: a cancelled or expired
    token turns into :class:`BatchCancelled` instead of a result. The
    three requests of a load cycle are issued together by
    :meth:`fetch_batch`, which succeeds only if all of them do.
    """

    def __init__(self, api_key: str, timeout: float = 12.0, base_url: str = BASE_URL) -> None:
        """Initialize the weather API client.

        Args:
            api_key: OpenWeather API key
            timeout: Batch timeout in seconds
            base_url: API root, overridable for testing
        """
        self.api_key = api_key
        self.timeout = timeout
        self.base_url = base_url.rstrip("/")

    # ── single requests ──────────────────────────────────────────────────────

    def params(self, coords: Coordinates, with_units: bool = True) -> Dict[str, Any]:
        """Query parameters shared by the three endpoints."""
        params: Dict[str, Any] = {
            "lat": coords.lat,
            "lon": coords.lon,
            "appid": self.api_key,
        }
        if with_units:
            params["units"] = UNITS
        return params

    def fetch_json(
        self, path: str, params: Dict[str, Any], token: CancelToken
    ) -> Dict[str, Any]:
        """GET an endpoint and decode its JSON body.

        Args:
            path: Endpoint path below the API root (e.g. "/weather")
            params: Query parameters
            token: Cancellation handle of the current batch

        Returns:
            The decoded JSON object

        Raises:
            BatchCancelled: When the token was cancelled or expired
            NetworkError: When the request could not be completed
            WeatherAPIError: For non-2xx responses (subclass by status)
            ParseError: When the body is not a JSON object
        """
        if token.cancelled:
            raise BatchCancelled(token.reason or "cancelled")

        remaining = token.remaining()
        timeout = self.timeout if remaining is None else max(remaining, 0.001)
        url = f"{self.base_url}{path}"

        try:
            resp = requests.get(url, params=params, timeout=timeout)
        except requests.Timeout as exc:
            if token.cancelled:
                raise BatchCancelled(token.reason or "timeout") from exc
            logger.warning("OpenWeather %s timed out: %s", path, exc)
            raise NetworkError(f"Request timed out: {exc}", exc) from exc
        except requests.RequestException as exc:
            logger.warning("OpenWeather %s network error: %s", path, exc)
            raise NetworkError(f"Network error: {exc}", exc) from exc

        if token.cancelled:
            raise BatchCancelled(token.reason or "cancelled")

        if not 200 <= resp.status_code < 300:
            body: Dict[str, Any] = {
                "message": HTTP_ERROR_MAP.get(
                    resp.status_code, f"Request failed ({resp.status_code})"
                )
            }
            try:
                decoded = resp.json()
            except ValueError:
                decoded = None
            if isinstance(decoded, dict) and decoded.get("message"):
                body.update(decoded)
            logger.error("OpenWeather %s error: %s - %s", path, resp.status_code, body["message"])
            raise WeatherAPIError.from_response(body, resp.status_code)

        try:
            data = resp.json()
        except ValueError as exc:
            raise ParseError(f"Invalid JSON from {path}: {exc}", exc) from exc
        if not isinstance(data, dict):
            raise ParseError(f"Expected a JSON object from {path}")
        return data

    def _fetch_model(
        self, model: type[M], path: str, params: Dict[str, Any], token: CancelToken
    ) -> M:
        data = self.fetch_json(path, params, token)
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            raise ParseError(f"Unexpected response shape from {path}", exc) from exc

    def fetch_current(self, coords: Coordinates, token: CancelToken) -> WeatherSnapshot:
        """Current conditions at ``coords``."""
        return self._fetch_model(
            CurrentWeatherResponse, CURRENT_PATH, self.params(coords), token
        ).to_snapshot()

    def fetch_forecast(self, coords: Coordinates, token: CancelToken) -> list[ForecastPoint]:
        """Multi-day forecast points at ``coords``, in provider order."""
        return self._fetch_model(
            ForecastResponse, FORECAST_PATH, self.params(coords), token
        ).to_points()

    def fetch_air_quality(self, coords: Coordinates, token: CancelToken) -> AirQuality:
        """Air quality sample at ``coords``."""
        return self._fetch_model(
            AirPollutionResponse,
            AIR_POLLUTION_PATH,
            self.params(coords, with_units=False),
            token,
        ).to_air_quality()

    # ── batch ────────────────────────────────────────────────────────────────

    def fetch_batch(self, coords: Coordinates, token: CancelToken) -> WeatherBatch:
        """Fetch current weather, forecast and air quality concurrently.

        The batch is all-or-nothing: the first failing request fails the
        whole batch and no partial result is returned. Requests still in
        flight when the batch fails or is cancelled are left to finish in
        the background and their results are discarded.

        Args:
            coords: Position to fetch for
            token: Cancellation handle of this batch

        Returns:
            WeatherBatch with all three results

        Raises:
            BatchCancelled: When the token is cancelled or expires first
            WeatherAPIError: The first failure among the three requests
        """
        pool = ThreadPoolExecutor(max_workers=3, thread_name_prefix="weatherpal-fetch")
        try:
            current = pool.submit(self.fetch_current, coords, token)
            forecast = pool.submit(self.fetch_forecast, coords, token)
            air_quality = pool.submit(self.fetch_air_quality, coords, token)
            self._join([current, forecast, air_quality], token)
            return WeatherBatch(
                current=current.result(),
                forecast=forecast.result(),
                air_quality=air_quality.result(),
            )
        finally:
            pool.shutdown(wait=False, cancel_futures=True)

    @staticmethod
    def _join(futures: list[Future[Any]], token: CancelToken) -> None:
        pending = set(futures)
        while pending:
            if token.cancelled:
                raise BatchCancelled(token.reason or "cancelled")
            done, pending = wait(pending, timeout=POLL_INTERVAL, return_when=FIRST_EXCEPTION)
            for future in done:
                exc = future.exception()
                if exc is not None:
                    raise exc
        if token.cancelled:
            raise BatchCancelled(token.reason or "cancelled")

