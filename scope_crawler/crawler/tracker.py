"""
Outstanding-work tracking for crawl tasks.

Every spawned task bumps a counter; its done-callback decrements it. The
crawl is finished when the counter drops back to zero.
"""
from __future__ import annotations

import asyncio
from typing import Any, Coroutine, Set

from scope_crawler.logger import get_logger


class WorkTracker:
    """Spawns crawl tasks and waits until all of them (transitively) finish."""

    def __init__(self) -> None:
        self.outstanding = 0
        self.spawned = 0
        self.finished = 0
        self._tasks: Set[asyncio.Task[Any]] = set()
        self._idle = asyncio.Event()
        self._idle.set()
        self.logger = get_logger("tracker")

    def spawn(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task[Any]:
        # callbacks and spawns all run on the event loop thread
        self.outstanding += 1
        self.spawned += 1
        self._idle.clear()
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        self.outstanding -= 1
        self.finished += 1
        if not task.cancelled() and task.exception() is not None:
            exc = task.exception()
            self.logger.error("Crawl task crashed: %s", exc, exc_info=exc)
        if self.outstanding == 0:
            self._idle.set()

    async def wait(self) -> None:
        """Block until no spawned task is outstanding."""
        await self._idle.wait()
