"""Input debouncing for the free-text query.

Coalesces rapid text changes so the filter only runs after a quiet window
(300ms by default). Only the most recent text is delivered.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable

logger = logging.getLogger("pokedex-mcp.query")

# Default debounce window in seconds
DEBOUNCE_SECONDS = 0.3


class QueryDebouncer:
    """Delays a callback until input has been idle for ``delay`` seconds.

    Must be used from inside a running event loop.
    """

    def __init__(
        self,
        callback: Callable[[str], Any],
        delay: float = DEBOUNCE_SECONDS,
    ) -> None:
        self._callback = callback
        self.delay = delay
        self._handle: asyncio.TimerHandle | None = None
        self._pending_text: str | None = None

    @property
    def pending(self) -> bool:
        """True while a submitted text is waiting for the window to elapse."""
        return self._handle is not None

    def submit(self, text: str) -> None:
        """Record new input, restarting the quiet window."""
        loop = asyncio.get_running_loop()
        if self._handle is not None:
            self._handle.cancel()
        self._pending_text = text
        self._handle = loop.call_later(self.delay, self._fire)

    def flush(self) -> None:
        """Deliver the pending text immediately, if any."""
        if self._handle is None:
            return
        self._handle.cancel()
        self._fire()

    def cancel(self) -> None:
        """Drop the pending text without delivering it."""
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._pending_text = None

    def _fire(self) -> None:
        text = self._pending_text
        self._handle = None
        self._pending_text = None
        if text is None:
            return
        try:
            self._callback(text)
        except Exception:
            logger.exception("Debounced query callback failed")
