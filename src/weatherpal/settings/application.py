"""Internal application settings derived from user settings."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from weatherpal.settings.user import UserSettings

PACKAGE_DIR = Path(__file__).resolve().parents[1]


@dataclass
class AppPaths:
    """Application file and directory paths.

    Centralizes the template location and the output directory the page
    is written to.
    """

    templates_dir: Path
    preview_dir: Path
    preview_html: str = "index.html"

    @classmethod
    def from_user_settings(cls, user_settings: UserSettings) -> AppPaths:
        """Create paths from the packaged templates and the configured output dir."""
        return cls(
            templates_dir=PACKAGE_DIR / "templates",
            preview_dir=user_settings.output_dir,
        )

    @property
    def preview_file(self) -> Path:
        return self.preview_dir / self.preview_html


class ApplicationSettings:
    """Application settings container.

    Combines user-provided configuration with application defaults.

    Examples:
        user_settings = UserSettings.load()
        app_settings = ApplicationSettings(user_settings)
        template_dir = app_settings.paths.templates_dir
    """

    def __init__(self, user_settings: UserSettings, paths: AppPaths | None = None):
        """Initialize application settings with configuration sources."""
        self.user = user_settings
        self.paths = paths or AppPaths.from_user_settings(user_settings)
