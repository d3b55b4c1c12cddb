"""
Concurrency-safe set of URLs already claimed by a crawl task.
"""
from __future__ import annotations

import threading
from typing import Set


class VisitedSet:
    """Grow-only set; :meth:`claim` is the single dedup point of a crawl."""

    def __init__(self) -> None:
        self._urls: Set[str] = set()
        self._lock = threading.Lock()

    def claim(self, url: str) -> bool:
        """Mark *url* visited. Return True only for the first caller."""
        with self._lock:
            if url in self._urls:
                return False
            self._urls.add(url)
            return True

    def __contains__(self, url: object) -> bool:
        with self._lock:
            return url in self._urls

    def __len__(self) -> int:
        with self._lock:
            return len(self._urls)
