from unittest.mock import Mock, patch

import pytest
import requests

from weatherpal.location import (
    Coordinates,
    IpLocationProvider,
    LocationError,
    LocationErrorKind,
    LocationProvider,
    StaticLocationProvider,
)

GEO_URL = "http://geo.example.test/json/"


def geo_response(status_code: int = 200, payload: object = None) -> Mock:
    resp = Mock()
    resp.status_code = status_code
    resp.json.return_value = payload
    return resp


def test_static_provider() -> None:
    coords = Coordinates(lat=40.7, lon=-74.0)
    provider = StaticLocationProvider(coords)
    assert isinstance(provider, LocationProvider)
    assert provider.locate() is coords


def test_invalid_url_rejected() -> None:
    with pytest.raises(ValueError):
        IpLocationProvider(url="not a url")


def test_ip_lookup_success() -> None:
    provider = IpLocationProvider(url=GEO_URL, timeout=3)
    payload = {"status": "success", "lat": 51.5, "lon": -0.12, "city": "London"}
    with patch("weatherpal.location.requests.get", return_value=geo_response(200, payload)) as mock_get:
        assert provider.locate() == Coordinates(lat=51.5, lon=-0.12)

    mock_get.assert_called_once_with(GEO_URL, timeout=3)


def test_recent_fix_is_reused() -> None:
    provider = IpLocationProvider(url=GEO_URL, maximum_age=300)
    payload = {"status": "success", "lat": 1.0, "lon": 2.0}
    with patch("weatherpal.location.requests.get", return_value=geo_response(200, payload)) as mock_get:
        provider.locate()
        provider.locate()

    assert mock_get.call_count == 1


def test_failures_are_not_cached() -> None:
    provider = IpLocationProvider(url=GEO_URL)
    good = geo_response(200, {"status": "success", "lat": 1.0, "lon": 2.0})
    with patch(
        "weatherpal.location.requests.get",
        side_effect=[requests.ConnectionError("down"), good],
    ) as mock_get:
        with pytest.raises(LocationError):
            provider.locate()
        assert provider.locate() == Coordinates(lat=1.0, lon=2.0)

    assert mock_get.call_count == 2


def test_disabled_provider_denies_without_request() -> None:
    provider = IpLocationProvider(url=GEO_URL, enabled=False)
    with patch("weatherpal.location.requests.get") as mock_get:
        with pytest.raises(LocationError) as exc_info:
            provider.locate()

    assert exc_info.value.kind is LocationErrorKind.PERMISSION_DENIED
    mock_get.assert_not_called()


@pytest.mark.parametrize(
    ("side_effect", "kind"),
    [
        (requests.Timeout("timed out"), LocationErrorKind.TIMEOUT),
        (requests.ConnectionError("unreachable"), LocationErrorKind.POSITION_UNAVAILABLE),
        (geo_response(500, {}), LocationErrorKind.POSITION_UNAVAILABLE),
        (
            geo_response(200, {"status": "fail", "message": "private range"}),
            LocationErrorKind.POSITION_UNAVAILABLE,
        ),
        (geo_response(200, {"status": "success"}), LocationErrorKind.UNKNOWN),
        (geo_response(200, ["not", "an", "object"]), LocationErrorKind.UNKNOWN),
    ],
)
def test_lookup_failure_kinds(side_effect: object, kind: LocationErrorKind) -> None:
    provider = IpLocationProvider(url=GEO_URL)
    with patch("weatherpal.location.requests.get", side_effect=[side_effect]):
        with pytest.raises(LocationError) as exc_info:
            provider.locate()

    assert exc_info.value.kind is kind


def test_unparseable_body_is_unknown() -> None:
    resp = geo_response(200)
    resp.json.side_effect = ValueError("bad json")
    provider = IpLocationProvider(url=GEO_URL)
    with patch("weatherpal.location.requests.get", return_value=resp):
        with pytest.raises(LocationError) as exc_info:
            provider.locate()

    assert exc_info.value.kind is LocationErrorKind.UNKNOWN


@pytest.mark.parametrize("url", ["ip-api.com/json", "ftp://geo.example.test/", "http://"])
def test_non_http_urls_rejected(url: str) -> None:
    with pytest.raises(ValueError, match="Invalid URL"):
        IpLocationProvider(url=url)
