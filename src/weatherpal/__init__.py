"""Browser-style weather page: location, OpenWeather data, clothing advice."""

__version__ = "0.1.0"
