"""Application settings management.

This package provides:
- UserSettings: User-configurable settings loaded from config.yaml
- ApplicationSettings: Internal application settings and defaults
"""

from weatherpal.settings.application import AppPaths, ApplicationSettings
from weatherpal.settings.user import GeolocationSettings, UserSettings

__all__ = ["AppPaths", "ApplicationSettings", "GeolocationSettings", "UserSettings"]
