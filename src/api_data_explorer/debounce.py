"""Cancellable delayed callbacks for coalescing bursts of input."""

import asyncio
from collections.abc import Callable
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class Debouncer(Generic[T]):
    """Call `callback` with the last pushed value once input has been quiet for `delay` seconds.

    Each push cancels the pending timer and starts a new one, so only the
    surviving timer fires. Must be used from within a running event loop.
    """

    def __init__(self, delay: float, callback: Callable[[T], Any]):
        if delay < 0:
            raise ValueError("delay must be >= 0")
        self.delay = delay
        self._callback = callback
        self._task: asyncio.Task[None] | None = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def push(self, value: T) -> None:
        self.cancel()
        self._task = asyncio.get_running_loop().create_task(self._fire_later(value))

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def wait(self) -> None:
        """Wait until the pending timer has fired or been cancelled."""
        task = self._task
        if task is not None:
            await asyncio.wait({task})

    async def _fire_later(self, value: T) -> None:
        await asyncio.sleep(self.delay)
        self._task = None
        self._callback(value)
