"""Registry of delayed tasks owned by one chat session."""

import asyncio
import logging
from typing import Any, Callable, Coroutine, Optional

logger = logging.getLogger(__name__)


class SessionClosedError(Exception):
    """Raised when work is scheduled on a session that was torn down."""


class PendingTasks:
    """
    Tracks every in-flight task of a session so teardown can cancel them.

    Tasks remove themselves when they finish. ``cancel_all`` may be called
    any number of times; after the first call nothing new can be spawned.
    """

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task] = set()
        self._closed = False

    def __len__(self) -> int:
        return len(self._tasks)

    @property
    def closed(self) -> bool:
        return self._closed

    def spawn(self, coro: Coroutine[Any, Any, Any], name: Optional[str] = None) -> asyncio.Task:
        if self._closed:
            coro.close()
            raise SessionClosedError("Cannot schedule work on a closed session")
        task = asyncio.create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def call_later(
        self, delay: float, callback: Callable[[], None], name: Optional[str] = None
    ) -> asyncio.Task:
        """Run ``callback`` after ``delay`` seconds unless cancelled first."""
        return self.spawn(self._delayed(delay, callback), name=name)

    @staticmethod
    async def _delayed(delay: float, callback: Callable[[], None]) -> None:
        await asyncio.sleep(delay)
        callback()

    def cancel_all(self) -> int:
        """Cancel every pending task. Returns how many were cancelled."""
        self._closed = True
        cancelled = 0
        for task in list(self._tasks):
            if not task.done():
                task.cancel()
                cancelled += 1
        if cancelled:
            logger.debug("Cancelled %d pending task(s)", cancelled)
        return cancelled

    async def wait(self) -> None:
        """Wait until every pending task (including newly spawned ones) is done."""
        while self._tasks:
            await asyncio.wait(set(self._tasks))
