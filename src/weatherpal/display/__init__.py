"""Display package - page state, rendering, errors and the character animation."""

from weatherpal.display.animation import CharacterAnimation
from weatherpal.display.error_ui import ErrorPresenter
from weatherpal.display.page import WEATHER_CONFIG, PageState, ThemeConfig, theme_for
from weatherpal.display.render import PageRenderer, PageUpdater

__all__ = [
    "WEATHER_CONFIG",
    "CharacterAnimation",
    "ErrorPresenter",
    "PageRenderer",
    "PageState",
    "PageUpdater",
    "ThemeConfig",
    "theme_for",
]
