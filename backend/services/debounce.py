"""Single-timer debouncing on the running asyncio loop."""

import asyncio
import inspect
import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)


class Debouncer:
    """Run callback once input pauses for ``delay`` seconds.

    Only one timer is ever pending. Each call cancels the previous one and
    starts a new timer with the latest arguments, so the last call wins.
    Coroutine callbacks are scheduled as tasks when the timer fires.
    """

    def __init__(self, delay: float, callback: Callable[..., Any]):
        self.delay = delay
        self.callback = callback
        self._handle: asyncio.TimerHandle | None = None
        self._task: asyncio.Task | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def call(self, *args: Any) -> None:
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire, args)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    async def wait(self) -> None:
        """Wait for the task started by the last fired timer, if any."""
        if self._task is not None:
            await self._task

    def close(self) -> None:
        """Cancel the pending timer and any callback still running."""
        self.cancel()
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    def _fire(self, args: tuple) -> None:
        self._handle = None
        result = self.callback(*args)
        if inspect.isawaitable(result):
            self._task = asyncio.ensure_future(result)
            self._task.add_done_callback(self._log_failure)

    @staticmethod
    def _log_failure(task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Debounced callback failed: %s", exc, exc_info=exc)
