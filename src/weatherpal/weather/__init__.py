"""Weather package - holds the API client, models, classifiers and errors."""

__version__ = "0.1.0"

from .air_quality import AirQuality, aqi_label
from .api import WeatherAPI
from .classify import WeatherCategory, classify_weather, compose_message, is_night
from .clothing import ClothingBucket, ClothingRecommendation, recommend_clothing
from .errors import (
    BatchCancelled,
    ConfigurationError,
    NetworkError,
    ParseError,
    WeatherAPIError,
)
from .forecast import describe_forecast, readable_condition, select_tomorrow
from .models import ForecastPoint, WeatherBatch, WeatherSnapshot

# Define what gets imported with: from weatherpal.weather import *
__all__ = [
    "AirQuality",
    "BatchCancelled",
    "ClothingBucket",
    "ClothingRecommendation",
    "ConfigurationError",
    "ForecastPoint",
    "NetworkError",
    "ParseError",
    "WeatherAPI",
    "WeatherAPIError",
    "WeatherBatch",
    "WeatherCategory",
    "WeatherSnapshot",
    "aqi_label",
    "classify_weather",
    "compose_message",
    "describe_forecast",
    "is_night",
    "readable_condition",
    "recommend_clothing",
    "select_tomorrow",
]
