"""EditDebouncer: coalesce bursts of edits into one round trip.

Typing into a value field produces an edit per keystroke.  Each edit calls
``notify()``; the debouncer waits until no further notification arrived for
``quiet_window`` seconds and then runs a single ``run_async`` cycle on the
coordinator.
"""

from __future__ import annotations

import asyncio
import logging

from feed_structure.coordinator import (
    RoundTripCoordinator,
    RoundTripResult,
    RoundTripState,
)

__all__ = ["EditDebouncer"]

logger = logging.getLogger(__name__)


class EditDebouncer:
    """Schedules round trips on the running asyncio loop.

    Args:
        coordinator: The document's coordinator.
        quiet_window: Seconds of inactivity before a round trip starts.
            Defaults to the coordinator's ``EngineConfig.quiet_window``.
    """

    def __init__(
        self,
        coordinator: RoundTripCoordinator,
        quiet_window: float | None = None,
    ) -> None:
        if quiet_window is None:
            quiet_window = coordinator.config.quiet_window
        if quiet_window < 0:
            msg = f"quiet_window must be >= 0, got {quiet_window}"
            raise ValueError(msg)
        self._coordinator = coordinator
        self._quiet_window = quiet_window
        self._handle: asyncio.TimerHandle | None = None
        self._task: asyncio.Task[RoundTripResult] | None = None
        self._coalesced = 0

    @property
    def quiet_window(self) -> float:
        return self._quiet_window

    @property
    def pending(self) -> bool:
        """True while a round trip is scheduled but has not started."""
        return self._handle is not None

    @property
    def task(self) -> asyncio.Task[RoundTripResult] | None:
        """The most recently started round-trip task."""
        return self._task

    def notify(self) -> None:
        """Record an edit and restart the quiet window.

        Must be called from within the event loop thread.
        """
        loop = asyncio.get_running_loop()
        if self._handle is not None:
            self._handle.cancel()
            self._coalesced += 1
        self._handle = loop.call_later(self._quiet_window, self._fire)

    async def flush(self) -> RoundTripResult:
        """Skip the remaining quiet window and run the round trip now."""
        self.cancel()
        if self._task is not None and not self._task.done():
            result = await self._task
            if self._coordinator.state != RoundTripState.DIRTY:
                return result
        return await self._coordinator.run_async()

    def cancel(self) -> None:
        """Drop a scheduled round trip without running it."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._coalesced = 0

    def _fire(self) -> None:
        self._handle = None
        if self._coalesced:
            logger.debug("Coalesced %d edit notification(s)", self._coalesced + 1)
        self._coalesced = 0
        self._task = asyncio.ensure_future(self._coordinator.run_async())
        self._task.add_done_callback(_log_failure)


def _log_failure(task: asyncio.Task[RoundTripResult]) -> None:
    """Retrieve the exception of a scheduled run nobody is awaiting."""
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.warning("Scheduled round trip failed: %s", exc, exc_info=exc)
