"""Debounce scheduler: turns a burst of triggers into a single callback."""

import asyncio
from typing import Callable, Optional


class DebounceScheduler:
    """Run ``callback`` once the triggers have stopped for ``interval_ms``.

    Every call to trigger() cancels the pending timer and arms a new one, so
    only the last trigger of a burst ever reaches the callback. Must be used
    from inside a running event loop.
    """

    def __init__(self, interval_ms: int, callback: Callable[[], None]) -> None:
        self.interval_ms = interval_ms
        self._callback = callback
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def trigger(self) -> None:
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.interval_ms / 1000, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        self._callback()
