"""Character animation: a repeating background-image frame cycle."""

from __future__ import annotations

import logging
import threading
from typing import Final

from weatherpal.display.page import PageState, ThemeConfig

logger: Final = logging.getLogger(__name__)

DEFAULT_INTERVAL: Final = 1.5


class CharacterAnimation:
    """Cycles the character image of a page through a theme's frames.

    Frame images are ``{assets_url}{animation_path}{n}.png`` for n in
    1..frames. Frame 1 is shown as soon as the animation starts; a timer
    then advances one frame per interval and wraps around. A stopped
    animation never touches the page again.
    """

    def __init__(
        self,
        page: PageState,
        theme: ThemeConfig,
        interval: float = DEFAULT_INTERVAL,
        assets_url: str = "",
    ) -> None:
        self.page = page
        self.theme = theme
        self.interval = interval
        self.assets_url = assets_url
        self.frame = 0
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._running = False

    def frame_url(self, number: int) -> str:
        return f"{self.assets_url}{self.theme.animation_path}{number}.png"

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        """Show frame 1 and start the repeating timer."""
        with self._lock:
            self._running = True
            self.frame = 1
            self._show(self.frame)
            self._schedule()

    def stop(self) -> None:
        """Cancel the timer; safe to call more than once."""
        with self._lock:
            self._running = False
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def advance(self) -> int:
        """Move to the next frame (wrapping) and show it.

        Returns:
            The frame number now shown, or the current one when stopped
        """
        with self._lock:
            if not self._running:
                return self.frame
            # The first tick already shows frame 2; frame 1 is up for one interval
            self.frame = self.frame % self.theme.frames + 1
            self._show(self.frame)
            return self.frame

    def _show(self, number: int) -> None:
        with self.page.lock:
            self.page.character_image = self.frame_url(number)

    def _schedule(self) -> None:
        self._timer = threading.Timer(self.interval, self._tick)
        self._timer.daemon = True
        self._timer.start()

    def _tick(self) -> None:
        self.advance()
        with self._lock:
            if self._running:
                self._schedule()
