"""
Fixed-size permit pool that caps simultaneous fetches.
"""
from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator


class WorkerPool:
    """Counting semaphore with in-flight accounting."""

    def __init__(self, size: int) -> None:
        if size < 1:
            raise ValueError("worker pool size must be >= 1")
        self.size = size
        self._sem = asyncio.Semaphore(size)
        self.in_flight = 0
        self.peak = 0

    async def acquire(self) -> None:
        await self._sem.acquire()
        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)

    def release(self) -> None:
        self.in_flight -= 1
        self._sem.release()

    @asynccontextmanager
    async def slot(self) -> AsyncIterator[None]:
        """Hold one permit for the body of the ``async with`` block."""
        await self.acquire()
        try:
            yield
        finally:
            self.release()
