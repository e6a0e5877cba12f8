"""Cooperative cancellation handle for a fetch batch."""

from __future__ import annotations

import logging
import threading
import time
from typing import Final

logger: Final = logging.getLogger(__name__)


class CancelToken:
    """Cancellation handle shared by the requests of one fetch batch.

    A token is cancelled either explicitly (a newer load cycle started) or
    implicitly once its deadline passes. Nothing is interrupted: workers
    and the session poll the token and drop their results.
    """

    def __init__(self, timeout: float | None = None) -> None:
        """Create a token.

        Args:
            timeout: Seconds until the token expires on its own (None: never)
        """
        self._event = threading.Event()
        self._reason: str | None = None
        self.deadline: float | None = (
            time.monotonic() + timeout if timeout is not None else None
        )

    def cancel(self, reason: str = "cancelled") -> None:
        """Cancel the token; the first reason given wins."""
        if not self._event.is_set():
            self._reason = reason
            self._event.set()
            logger.debug("Batch cancelled: %s", reason)

    @property
    def expired(self) -> bool:
        """Whether the deadline has passed."""
        return self.deadline is not None and time.monotonic() >= self.deadline

    @property
    def cancelled(self) -> bool:
        """Whether the batch should be abandoned."""
        if not self._event.is_set() and self.expired:
            self.cancel("timeout")
        return self._event.is_set()

    @property
    def reason(self) -> str | None:
        """Why the token was cancelled, if it was."""
        return self._reason

    def remaining(self) -> float | None:
        """Seconds left before the deadline (None when there is none)."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())
