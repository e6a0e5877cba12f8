"""Typed models for the OpenWeather 2.5 payloads used by the page.

Three endpoints feed a load cycle: ``/weather``, ``/forecast`` and
``/air_pollution``. Only the fields the page reads are modelled. Parsing is
optional-safe: absent or malformed values fall back to the defaults listed
on each model, so the classifier never sees the raw provider shape.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from weatherpal.models.base import ProviderModel
from weatherpal.utils.formatting import round_half_up
from weatherpal.weather.air_quality import AirQuality

# ─────────────────────────── parsed values ───────────────────────────────────


class WeatherSnapshot(BaseModel):
    """Current conditions at the user's location.

    Defaults: temperature 0 °C, humidity 0 %, condition "". A missing
    feels-like temperature is replaced by the rounded temperature.
    """

    temperature: float = 0.0
    feels_like: float = 0.0
    humidity: int = 0
    condition: str = ""

    model_config = ConfigDict(frozen=True)

    @property
    def rounded_temperature(self) -> int:
        return round_half_up(self.temperature)

    @property
    def rounded_feels_like(self) -> int:
        return round_half_up(self.feels_like)

    @property
    def condition_lower(self) -> str:
        return self.condition.lower()


class ForecastPoint(BaseModel):
    """One entry of the multi-day forecast."""

    timestamp: int = Field(0, description="Epoch seconds")
    temperature: float = 0.0
    condition: str = "Unknown"

    model_config = ConfigDict(frozen=True)

    @property
    def rounded_temperature(self) -> int:
        return round_half_up(self.temperature)


@dataclass(frozen=True)
class WeatherBatch:
    """Results of one fetch batch; only ever built when all three succeeded."""

    current: WeatherSnapshot
    forecast: list[ForecastPoint] = field(default_factory=list)
    air_quality: AirQuality = field(default_factory=AirQuality)


# ─────────────────────────── provider blocks ─────────────────────────────────


class MainBlock(ProviderModel):
    """The ``main`` object shared by current and forecast entries."""

    temp: float = 0.0
    feels_like: float | None = None
    humidity: int = 0

    @field_validator("temp", mode="before")
    @classmethod
    def parse_temp(cls, v: Any) -> float | None:
        return cls.coerce_float(v)

    @field_validator("feels_like", mode="before")
    @classmethod
    def parse_feels_like(cls, v: Any) -> float | None:
        return cls.coerce_float(v, None)

    @field_validator("humidity", mode="before")
    @classmethod
    def parse_humidity(cls, v: Any) -> int:
        return cls.coerce_int(v)


class ConditionBlock(ProviderModel):
    """An element of the ``weather`` array; only ``main`` is used."""

    main: str | None = None

    @field_validator("main", mode="before")
    @classmethod
    def parse_main(cls, v: Any) -> str | None:
        return None if v is None else str(v)


class _ConditionsMixin(ProviderModel):
    main: MainBlock = Field(default_factory=MainBlock)
    weather: list[ConditionBlock] = Field(default_factory=list)

    @field_validator("main", mode="before")
    @classmethod
    def parse_main_block(cls, v: Any) -> Any:
        return cls.coerce_mapping(v)

    @field_validator("weather", mode="before")
    @classmethod
    def parse_weather(cls, v: Any) -> Any:
        return cls.coerce_list(v)

    @property
    def condition(self) -> str | None:
        """The first condition's ``main`` text, if the provider sent one."""
        return self.weather[0].main if self.weather else None


# ─────────────────────────── endpoint responses ──────────────────────────────


class CurrentWeatherResponse(_ConditionsMixin):
    """Payload of ``/weather``."""

    def to_snapshot(self) -> WeatherSnapshot:
        """Build the validated snapshot, applying the documented defaults."""
        temperature = self.main.temp
        feels_like = self.main.feels_like
        if feels_like is None:
            feels_like = float(round_half_up(temperature))
        return WeatherSnapshot(
            temperature=temperature,
            feels_like=feels_like,
            humidity=self.main.humidity,
            condition=self.condition or "",
        )


class ForecastEntry(_ConditionsMixin):
    """An element of the ``/forecast`` ``list`` array."""

    dt: int = 0

    @field_validator("dt", mode="before")
    @classmethod
    def parse_dt(cls, v: Any) -> int:
        return cls.coerce_int(v)

    def to_point(self) -> ForecastPoint:
        condition = self.condition
        return ForecastPoint(
            timestamp=self.dt,
            temperature=self.main.temp,
            condition="Unknown" if condition is None else condition,
        )


class ForecastResponse(ProviderModel):
    """Payload of ``/forecast``: entries are kept in provider order."""

    entries: list[ForecastEntry] = Field(default_factory=list, alias="list")

    @field_validator("entries", mode="before")
    @classmethod
    def parse_entries(cls, v: Any) -> Any:
        return cls.coerce_list(v)

    def to_points(self) -> list[ForecastPoint]:
        return [entry.to_point() for entry in self.entries]


class AqiMain(ProviderModel):
    aqi: int = 0

    @field_validator("aqi", mode="before")
    @classmethod
    def parse_aqi(cls, v: Any) -> int:
        return cls.coerce_int(v)


class AirPollutionEntry(ProviderModel):
    main: AqiMain = Field(default_factory=AqiMain)
    components: dict[str, float] = Field(default_factory=dict)

    @field_validator("main", mode="before")
    @classmethod
    def parse_main(cls, v: Any) -> Any:
        return cls.coerce_mapping(v)

    @field_validator("components", mode="before")
    @classmethod
    def parse_components(cls, v: Any) -> dict[str, float]:
        if not isinstance(v, dict):
            return {}
        parsed = {str(k): cls.coerce_float(value, None) for k, value in v.items()}
        return {k: value for k, value in parsed.items() if value is not None}


class AirPollutionResponse(ProviderModel):
    """Payload of ``/air_pollution``; only the first entry is read."""

    entries: list[AirPollutionEntry] = Field(default_factory=list, alias="list")

    @field_validator("entries", mode="before")
    @classmethod
    def parse_entries(cls, v: Any) -> Any:
        return cls.coerce_list(v)

    def to_air_quality(self) -> AirQuality:
        if not self.entries:
            return AirQuality()
        first = self.entries[0]
        return AirQuality(
            index=first.main.aqi,
            pm2_5=first.components.get("pm2_5", 0.0),
        )
