from pathlib import Path

import pytest

from weatherpal.location import Coordinates
from weatherpal.settings import AppPaths, ApplicationSettings, UserSettings

CONFIG_YAML = """\
api_key: "${OWM_API_KEY}"
lat: 42.774
lon: -78.787
request_timeout: 8
geolocation:
  enabled: false
"""


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(CONFIG_YAML)
    return path


def test_load_interpolates_environment(config_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OWM_API_KEY", "secret-key")
    settings = UserSettings.load(config_file)

    assert settings.api_key == "secret-key"
    assert settings.has_api_key
    assert settings.coordinates == Coordinates(lat=42.774, lon=-78.787)
    assert settings.request_timeout == 8
    assert settings.geolocation.enabled is False


def test_unset_variable_leaves_key_empty(config_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OWM_API_KEY", raising=False)
    settings = UserSettings.load(config_file)
    assert settings.api_key == ""
    assert not settings.has_api_key


def test_load_from_env_var(config_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WEATHERPAL_CONFIG", str(config_file))
    assert UserSettings.load().lat == 42.774


def test_env_var_pointing_nowhere(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WEATHERPAL_CONFIG", str(tmp_path / "missing.yaml"))
    with pytest.raises(FileNotFoundError):
        UserSettings.load()


def test_empty_file_gives_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("")
    settings = UserSettings.load(path)
    assert settings.coordinates is None
    assert settings.geolocation.url == "http://ip-api.com/json/"
    assert settings.animation_interval == 1.5


@pytest.mark.parametrize(
    "body",
    [
        "lat: 10\n",
        "lat: 95\nlon: 0\n",
        "request_timeout: 0\n",
        "api_key: [unclosed\n",
    ],
)
def test_invalid_config(tmp_path: Path, body: str) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(body)
    with pytest.raises(RuntimeError):
        UserSettings.load(path)


def test_placeholder_key_is_not_a_key() -> None:
    assert not UserSettings(api_key="YOUR_KEY_HERE").has_api_key


def test_application_paths(tmp_path: Path) -> None:
    app = ApplicationSettings(UserSettings(output_dir=tmp_path / "out"))
    assert app.paths.preview_file == tmp_path / "out" / "index.html"
    assert (app.paths.templates_dir / "page.html.j2").exists()
    assert isinstance(app.paths, AppPaths)


@pytest.mark.parametrize(
    "url",
    ["ip-api.com/json", "ftp://ip-api.com/json/", "http://", "not a url"],
)
def test_invalid_geolocation_url_rejected(tmp_path: Path, url: str) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(f"geolocation:\n  url: {url!r}\n")
    with pytest.raises(RuntimeError, match="Invalid URL"):
        UserSettings.load(path)


def test_geolocation_url_may_be_disabled(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("geolocation:\n  url: null\n")
    assert UserSettings.load(path).geolocation.url is None


def test_timezone_setting(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("timezone: Europe/Berlin\n")
    assert UserSettings.load(path).timezone == "Europe/Berlin"

    path.write_text("timezone: Mars/Olympus_Mons\n")
    with pytest.raises(RuntimeError, match="Unknown timezone"):
        UserSettings.load(path)
