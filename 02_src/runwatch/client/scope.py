"""Lifetime of a consuming UI surface."""

import asyncio
from typing import Any, Callable, Coroutine

from ..logging_config import get_logger

logger = get_logger(__name__)


class Scope:
    """Liveness token shared by the primitives a UI surface owns.

    Closing a scope stops future work (timers registered with ``on_close``)
    but lets in-flight requests finish; their owners check ``alive`` before
    applying results.
    """

    def __init__(self) -> None:
        self._alive = True
        self._close_callbacks: list[Callable[[], None]] = []
        self._tasks: set[asyncio.Task] = set()

    @property
    def alive(self) -> bool:
        return self._alive

    def on_close(self, callback: Callable[[], None]) -> None:
        """Run callback when the scope closes (immediately if already closed)."""
        if not self._alive:
            callback()
            return
        self._close_callbacks.append(callback)

    def spawn(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task:
        """Schedule coro on the running loop and keep a reference to the task."""
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    @property
    def pending(self) -> set[asyncio.Task]:
        return set(self._tasks)

    def close(self) -> None:
        """End the scope. Idempotent."""
        if not self._alive:
            return
        self._alive = False
        callbacks, self._close_callbacks = self._close_callbacks, []
        for callback in callbacks:
            callback()
        logger.debug("Scope closed with %d task(s) in flight", len(self._tasks))

    async def __aenter__(self) -> "Scope":
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.close()
