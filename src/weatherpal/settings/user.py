"""User-configurable settings loaded from config.yaml."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import ClassVar
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from weatherpal.location import DEFAULT_GEOLOCATION_URL, Coordinates, validate_url

# Load environment variables from .env file(s)
load_dotenv()

API_KEY_PLACEHOLDER = "YOUR_KEY_HERE"
CONFIG_ENV_VAR = "WEATHERPAL_CONFIG"


def _interpolate_env(content: str) -> str:
    return re.sub(r"\$\{(\w+)\}", lambda m: os.getenv(m.group(1), ""), content)


class GeolocationSettings(BaseModel):
    """How the user's position is looked up when no coordinates are set.

    The lookup is a low-accuracy IP fix; a fix younger than
    ``maximum_age`` seconds is reused.
    """

    enabled: bool = Field(True, description="Allow looking up the position")
    url: str | None = Field(
        DEFAULT_GEOLOCATION_URL, description="IP geolocation endpoint (null: no lookup)"
    )
    timeout: float = Field(10.0, gt=0, description="Lookup timeout (seconds)")
    maximum_age: float = Field(300.0, ge=0, description="Reuse a fix this long (seconds)")

    @field_validator("url")
    @classmethod
    def check_url(cls, v: str | None) -> str | None:
        return None if v is None else validate_url(v)


class UserSettings(BaseModel):
    """User settings for the weather page. These values can be overridden
    by user settings in config.yaml.

    The API key may be left empty so the file validates; a load cycle then
    stops with a "Missing API key" message instead of fetching.
    """

    # Default search paths for configuration
    DEFAULT_CONFIG_PATHS: ClassVar[list[Path]] = [
        Path("config.yaml"),
        Path("~/.config/weatherpal/config.yaml").expanduser(),
        Path("/etc/weatherpal/config.yaml"),
    ]

    api_key: str = Field("", description="OpenWeather API key")

    # Location settings: fixed coordinates win over geolocation
    lat: float | None = Field(None, ge=-90, le=90, description="Latitude")
    lon: float | None = Field(None, ge=-180, le=180, description="Longitude")
    geolocation: GeolocationSettings = Field(default_factory=GeolocationSettings)

    # Fetch settings
    request_timeout: float = Field(
        12.0, gt=0, description="Timeout for the whole fetch batch (seconds)"
    )

    # Display settings
    animation_interval: float = Field(
        1.5, gt=0, description="Seconds between character animation frames"
    )
    assets_url: str = Field(
        "", description="Prefix for animation frame images (e.g. a static URL)"
    )
    output_dir: Path = Field(Path("preview"), description="Where the page is written")
    timezone: str | None = Field(
        None, description="IANA zone for night and tomorrow (null: device local time)"
    )

    # ---- validators ----
    @field_validator("timezone")
    @classmethod
    def check_timezone(cls, v: str | None) -> str | None:
        if v is None:
            return v
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {v}") from exc
        return v

    @model_validator(mode="after")
    def check_coordinates_pair(self) -> UserSettings:
        if (self.lat is None) != (self.lon is None):
            raise ValueError("lat and lon must be set together")
        return self

    # ---- convenience methods ----
    @property
    def has_api_key(self) -> bool:
        """Whether an API key other than the sample placeholder is set."""
        key = self.api_key.strip()
        return bool(key) and key != API_KEY_PLACEHOLDER

    @property
    def coordinates(self) -> Coordinates | None:
        """Configured coordinates, if both are set."""
        if self.lat is None or self.lon is None:
            return None
        return Coordinates(lat=self.lat, lon=self.lon)

    @classmethod
    def find_config(cls) -> Path:
        """Locate the config file: $WEATHERPAL_CONFIG, then the default paths.

        Raises:
            FileNotFoundError: If no config file is found
        """
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            path = Path(env_path)
            if not path.exists():
                raise FileNotFoundError(f"Config file from {CONFIG_ENV_VAR} not found: {path}")
            return path

        for default_path in cls.DEFAULT_CONFIG_PATHS:
            if default_path.exists():
                return default_path
        raise FileNotFoundError(
            f"No configuration file found. Create config.yaml or set {CONFIG_ENV_VAR}."
        )

    @classmethod
    def load(cls, path: Path | None = None) -> UserSettings:
        """Load configuration from a YAML file.

        ``${VAR}`` references are replaced with environment values (empty
        when unset) before parsing, so the API key can live in ``.env``.

        Args:
            path: Path to config file (optional, see :meth:`find_config`)

        Returns:
            Validated UserSettings object

        Raises:
            FileNotFoundError: If no config file is found
            RuntimeError: If the config file cannot be parsed or is invalid
        """
        path = path or cls.find_config()

        try:
            data = yaml.safe_load(_interpolate_env(path.read_text())) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise RuntimeError(f"Unable to read config YAML: {exc}") from exc

        try:
            return cls.model_validate(data)
        except ValidationError as err:
            raise RuntimeError(f"Invalid configuration:\n{err}") from err
