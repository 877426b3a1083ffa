"""Trailing-edge debouncing for interactive inputs."""

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)


class Debouncer:
    """Run an async action once its trigger has been quiet for `delay` seconds.

    Every `trigger()` re-arms the timer, so a burst of calls results in a
    single run `delay` seconds after the last one. Once the timer has fired
    the action is no longer cancellable; callers that care about stale
    completions must check that themselves.
    """

    def __init__(self, delay: float, action: Callable[[], Awaitable[None]]) -> None:
        self.delay = delay
        self._action = action
        self._timer: asyncio.Task | None = None
        self._last: asyncio.Task | None = None

    @property
    def pending(self) -> bool:
        """True while a timer is armed and has not fired yet."""
        return self._timer is not None and not self._timer.done()

    def trigger(self) -> None:
        """(Re)arm the timer. Must be called from a running event loop."""
        self.cancel()
        task = asyncio.get_running_loop().create_task(self._run_after_delay())
        self._timer = task
        self._last = task

    def cancel(self) -> None:
        """Drop the armed timer, if any."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    async def wait(self) -> None:
        """Wait for the most recently armed timer and its action to finish."""
        if self._last is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await self._last

    async def _run_after_delay(self) -> None:
        await asyncio.sleep(self.delay)
        self._timer = None
        try:
            await self._action()
        except Exception as e:
            logger.exception(f"Debounced action failed: {e}")
