import pytest

from weatherpal.weather.errors import (
    AuthenticationError,
    BatchCancelled,
    ClientError,
    NetworkError,
    NotFoundError,
    ParseError,
    RateLimitError,
    ServerError,
    WeatherAPIError,
)


@pytest.mark.parametrize(
    ("status", "cls"),
    [
        (400, ClientError),
        (401, AuthenticationError),
        (403, AuthenticationError),
        (404, NotFoundError),
        (429, RateLimitError),
        (500, ServerError),
        (503, ServerError),
        (302, WeatherAPIError),
    ],
)
def test_from_response_picks_subclass(status: int, cls: type[WeatherAPIError]) -> None:
    err = WeatherAPIError.from_response({"message": "nope"}, status)
    assert type(err) is cls
    assert err.code == status
    assert err.message == "nope"
    assert str(err) == f"[{status}] nope"


def test_from_response_default_messages() -> None:
    assert WeatherAPIError.from_response({}, 401).message == "Authentication failed"
    assert WeatherAPIError.from_response({}, 502).message == "Server error"


def test_wrapped_errors_keep_original() -> None:
    cause = ValueError("bad")
    for err in (NetworkError("offline", cause), ParseError("garbled", cause)):
        assert err.code == 0
        assert err.original_error is cause
        assert isinstance(err, WeatherAPIError)


def test_batch_cancelled_is_not_a_failure() -> None:
    exc = BatchCancelled("superseded")
    assert not isinstance(exc, WeatherAPIError)
    assert exc.reason == "superseded"
    assert str(exc) == "Fetch batch superseded"
