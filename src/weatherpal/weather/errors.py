"""Exceptions raised during a load cycle.

Three families:

- ``ConfigurationError``: the cycle cannot start (no API key).
- ``WeatherAPIError`` and subclasses: a request of the fetch batch failed.
  The whole batch fails with it and the page shows "Failed to load weather".
- ``BatchCancelled``: the batch was superseded or ran out of time. Not a
  failure; the page is left alone.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class ConfigurationError(Exception):
    """The configuration cannot support a load cycle (missing API key)."""


class WeatherAPIError(Exception):
    """A request to OpenWeather did not produce usable data.

    ``code`` is the HTTP status, or 0 when no response was received or the
    body could not be decoded. ``response`` keeps the decoded error body
    when there was one.
    """

    default_message = "Request failed"

    def __init__(
        self, code: int, message: str, response: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(f"[{code}] {message}")
        self.code: int = code
        self.message: str = message
        self.response: Optional[Dict[str, Any]] = response

    @classmethod
    def from_response(
        cls, response: Dict[str, Any], status_code: int = 0
    ) -> WeatherAPIError:
        """Build the error matching an HTTP status.

        401/403 become AuthenticationError, 404 NotFoundError, 429
        RateLimitError, any other 4xx ClientError and 5xx ServerError.

        Args:
            response: Decoded error body; OpenWeather puts the text in ``message``
            status_code: HTTP status code

        Returns:
            An instance of the matching subclass
        """
        error_cls: type[WeatherAPIError] = STATUS_ERRORS.get(status_code, cls)
        if error_cls is cls and 400 <= status_code < 500:
            error_cls = ClientError
        elif error_cls is cls and status_code >= 500:
            error_cls = ServerError
        message = response.get("message") or error_cls.default_message
        return error_cls(status_code, str(message), response)


class NetworkError(WeatherAPIError):
    """No response: connection refused, DNS failure, request timeout."""

    def __init__(
        self, message: str, original_error: Optional[Exception] = None
    ) -> None:
        super().__init__(0, message)
        self.original_error = original_error


class ParseError(WeatherAPIError):
    """A 2xx response whose body is not the expected JSON object."""

    def __init__(
        self, message: str, original_error: Optional[Exception] = None
    ) -> None:
        super().__init__(0, message)
        self.original_error = original_error


class AuthenticationError(WeatherAPIError):
    default_message = "Authentication failed"


class NotFoundError(WeatherAPIError):
    default_message = "Resource not found"


class RateLimitError(WeatherAPIError):
    default_message = "Rate limit exceeded"


class ClientError(WeatherAPIError):
    default_message = "Client error"


class ServerError(WeatherAPIError):
    default_message = "Server error"


STATUS_ERRORS: Dict[int, type[WeatherAPIError]] = {
    401: AuthenticationError,
    403: AuthenticationError,
    404: NotFoundError,
    429: RateLimitError,
}


class BatchCancelled(Exception):
    """The fetch batch was abandoned before it completed.

    ``reason`` is "superseded" when a newer cycle started, "timeout" when
    the batch deadline passed, or whatever the canceller supplied.
    """

    def __init__(self, reason: str = "cancelled") -> None:
        super().__init__(f"Fetch batch {reason}")
        self.reason = reason
