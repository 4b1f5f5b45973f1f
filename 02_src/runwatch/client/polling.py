"""Fixed-interval polling."""

import asyncio
import inspect
from typing import Awaitable, Callable

from ..logging_config import get_logger
from .scope import Scope

logger = get_logger(__name__)


PollAction = Callable[[], Awaitable[None] | None]


class PollingLoop:
    """Runs an action immediately, then every ``interval`` seconds.

    Ticks follow the wall clock, not the end of the previous run, so slow
    actions may overlap. Ticks missed while the event loop was blocked are
    skipped rather than replayed. Stopping cancels future ticks only; an action
    already running finishes on its own. Errors raised by the action are
    logged and never surfaced.

    ``action`` may be reassigned at any time; each tick uses the current one.
    """

    def __init__(
        self,
        action: PollAction,
        interval: float,
        enabled: bool = True,
        scope: Scope | None = None,
    ):
        self.action = action
        self._interval = interval
        self._enabled = enabled
        self._timer: asyncio.Task | None = None
        self._in_flight: set[asyncio.Task] = set()
        self._scope = scope

        if scope is not None:
            scope.on_close(self.stop)

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return self._timer is not None and not self._timer.done()

    @property
    def in_flight(self) -> set[asyncio.Task]:
        return set(self._in_flight)

    def start(self) -> None:
        """Fire now and schedule the following ticks. Needs a running loop."""
        if self.running or not self._enabled or self._interval <= 0:
            return
        if self._scope is not None and not self._scope.alive:
            return
        self._timer = asyncio.create_task(self._run())
        self._fire()

    def stop(self) -> None:
        """Cancel pending ticks."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled
        if enabled:
            self.start()
        else:
            self.stop()

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        next_tick = loop.time()
        while True:
            next_tick += self._interval
            await asyncio.sleep(max(0.0, next_tick - loop.time()))
            self._fire()

            # Missed ticks are dropped, not replayed: restart the schedule from now
            if loop.time() - next_tick >= self._interval:
                next_tick = loop.time()

    def _fire(self) -> None:
        try:
            result = self.action()
        except Exception as e:
            logger.error("Polling action failed: %s", e, exc_info=True)
            return

        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self._in_flight.add(task)
            task.add_done_callback(self._action_done)

    def _action_done(self, task: asyncio.Task) -> None:
        self._in_flight.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error("Polling action failed: %s", error, exc_info=error)
