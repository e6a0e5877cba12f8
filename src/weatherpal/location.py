"""Location providers: where is the user?

A provider answers one question, ``locate()``, with a latitude/longitude
pair or a :class:`LocationError` carrying one of four failure kinds. The
session maps each kind to its own message and a retry control.
"""

from __future__ import annotations

import logging
import threading
import time
import urllib.parse
from dataclasses import dataclass
from enum import Enum
from typing import Final, Protocol, runtime_checkable

import requests
from requests.exceptions import RequestException
from typing_extensions import TypedDict

logger: Final = logging.getLogger(__name__)

DEFAULT_GEOLOCATION_URL: Final = "http://ip-api.com/json/"
ALLOWED_SCHEMES: Final = ("http", "https")


def validate_url(url: str) -> str:
    """Return ``url`` unchanged if it is an absolute http(s) URL.

    Raises:
        ValueError: For anything else (missing scheme or host, other schemes)
    """
    parsed = urllib.parse.urlparse(url)
    if parsed.scheme not in ALLOWED_SCHEMES or not parsed.netloc:
        raise ValueError(f"Invalid URL: {url}")
    return url


@dataclass(frozen=True)
class Coordinates:
    """Latitude/longitude in floating-point degrees."""

    lat: float
    lon: float

    def __str__(self) -> str:
        return f"{self.lat:.4f},{self.lon:.4f}"


class LocationErrorKind(Enum):
    """Why a position could not be determined."""

    PERMISSION_DENIED = 1
    POSITION_UNAVAILABLE = 2
    TIMEOUT = 3
    UNKNOWN = 4


class LocationError(Exception):
    """Raised by a provider when no position can be produced."""

    def __init__(self, kind: LocationErrorKind, message: str = "") -> None:
        super().__init__(message or kind.name)
        self.kind = kind
        self.message = message


@runtime_checkable
class LocationProvider(Protocol):
    """Protocol for one-shot position requests."""

    def locate(self) -> Coordinates:
        """Return the current position.

        Raises:
            LocationError: When the position cannot be determined
        """
        ...


class StaticLocationProvider:
    """Provider that always answers with configured coordinates."""

    def __init__(self, coords: Coordinates) -> None:
        self.coords = coords

    def locate(self) -> Coordinates:
        return self.coords


class GeoIpResponse(TypedDict, total=False):
    """Fields of the ip-api.com JSON response used here."""

    status: str
    message: str
    lat: float
    lon: float


class IpLocationProvider:
    """Approximate position from the public IP address.

    This is a low-accuracy fix. A successful fix is reused for
    ``maximum_age`` seconds; failures are never cached.
    """

    def __init__(
        self,
        url: str = DEFAULT_GEOLOCATION_URL,
        timeout: float = 10.0,
        maximum_age: float = 300.0,
        enabled: bool = True,
    ) -> None:
        """Initialize with the lookup endpoint.

        Args:
            url: Geolocation endpoint returning ip-api.com style JSON
            timeout: Timeout for the HTTP request in seconds
            maximum_age: Seconds a previous fix may be reused (0 disables)
            enabled: When False every request is denied
        """
        self.url = validate_url(url)
        self.timeout = timeout
        self.maximum_age = maximum_age
        self.enabled = enabled
        self._lock = threading.Lock()
        self._cached: tuple[float, Coordinates] | None = None

    def locate(self) -> Coordinates:
        """Look up the position, reusing a recent fix when allowed.

        Raises:
            LocationError: PERMISSION_DENIED when disabled, TIMEOUT when the
                lookup timed out, POSITION_UNAVAILABLE when the service could
                not be reached or had no answer, UNKNOWN otherwise
        """
        if not self.enabled:
            raise LocationError(
                LocationErrorKind.PERMISSION_DENIED, "Geolocation is disabled in settings"
            )

        with self._lock:
            if self._cached is not None:
                fixed_at, coords = self._cached
                if time.monotonic() - fixed_at <= self.maximum_age:
                    logger.debug("Reusing location fix %s", coords)
                    return coords

        coords = self._lookup()
        with self._lock:
            self._cached = (time.monotonic(), coords)
        return coords

    def _lookup(self) -> Coordinates:
        try:
            resp = requests.get(self.url, timeout=self.timeout)
        except requests.Timeout as exc:
            raise LocationError(LocationErrorKind.TIMEOUT, str(exc)) from exc
        except RequestException as exc:
            raise LocationError(LocationErrorKind.POSITION_UNAVAILABLE, str(exc)) from exc

        if resp.status_code != 200:
            raise LocationError(
                LocationErrorKind.POSITION_UNAVAILABLE,
                f"Geolocation service returned HTTP {resp.status_code}",
            )

        try:
            data: GeoIpResponse = resp.json()
            if data.get("status", "success") != "success":
                raise LocationError(
                    LocationErrorKind.POSITION_UNAVAILABLE,
                    data.get("message", "Geolocation lookup failed"),
                )
            return Coordinates(lat=float(data["lat"]), lon=float(data["lon"]))
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            raise LocationError(LocationErrorKind.UNKNOWN, str(exc)) from exc
