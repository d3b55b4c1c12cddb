from __future__ import annotations

import asyncio
import time
from typing import Any, Optional, Protocol

from aiohttp import ClientSession

from scope_crawler.config import CrawlerConfig
from scope_crawler.crawler.fetcher import Fetcher
from scope_crawler.crawler.models import CrawlStats, CrawlTarget, PageRecord
from scope_crawler.crawler.pool import WorkerPool
from scope_crawler.crawler.scope import in_scope, normalize_url
from scope_crawler.crawler.tracker import WorkTracker
from scope_crawler.crawler.visited import VisitedSet
from scope_crawler.errors import FetchError, ParseError, WriteError
from scope_crawler.logger import get_logger
from scope_crawler.parser.html_parser import parse_html

__all__ = ("AsyncCrawler", "PageFetcher", "RecordSink")


class PageFetcher(Protocol):
    async def fetch(self, url: str) -> str: ...


class RecordSink(Protocol):
    def append(self, record: Any) -> None: ...


class AsyncCrawler:
    """Асинхронный краулер: обход в пределах префикса стартового URL до max_depth."""

    def __init__(
        self,
        config: CrawlerConfig,
        sink: RecordSink,
        fetcher: Optional[PageFetcher] = None,
    ) -> None:
        self.config = config
        self.seed = config.base_url
        self.sink = sink
        self.fetcher = fetcher
        self.visited = VisitedSet()
        self.pool = WorkerPool(config.worker_limit)
        self.stats = CrawlStats()
        self.session: Optional[ClientSession] = None
        self.logger = get_logger("crawler")
        self._tracker: Optional[WorkTracker] = None

    async def __aenter__(self) -> AsyncCrawler:
        if self.fetcher is None:
            self.session = ClientSession(headers={"User-Agent": self.config.user_agent})
            self.fetcher = Fetcher(self.session, timeout=self.config.timeout)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def crawl(self) -> CrawlStats:
        """Spawn the root task and wait until every descendant is done."""
        if self.fetcher is None:
            raise RuntimeError("Fetcher not initialized; use 'async with AsyncCrawler(...)'")
        self.logger.info("Старт обхода: %s (max_depth=%d)", self.seed, self.config.max_depth)
        start = time.monotonic()
        self._tracker = WorkTracker()
        self._spawn(CrawlTarget(self.seed, 0))
        await self._tracker.wait()
        self.stats.spawned = self._tracker.spawned
        self.stats.finished = self._tracker.finished
        self.stats.peak_fetches = self.pool.peak
        duration = time.monotonic() - start
        self.logger.info(
            "Завершено: %d страниц за %.2f с (дубликатов %d, ошибок загрузки %d)",
            self.stats.pages, duration, self.stats.duplicates, self.stats.fetch_failures,
        )
        return self.stats

    def _spawn(self, target: CrawlTarget) -> None:
        assert self._tracker is not None
        self._tracker.spawn(self._crawl_task(target))

    async def _crawl_task(self, target: CrawlTarget) -> None:
        url, depth = target.url, target.depth
        if depth > self.config.max_depth:
            self.stats.depth_limited += 1
            return

        # the permit covers claim + fetch only
        async with self.pool.slot():
            if not self.visited.claim(url):
                self.stats.duplicates += 1
                self.logger.debug("Already visited: %s", url)
                return
            try:
                body = await self.fetcher.fetch(url)  # type: ignore[union-attr]
            except FetchError as exc:
                self.stats.fetch_failures += 1
                self.logger.warning("Failed to fetch %s: %s", url, exc.reason)
                return

        page = parse_html(body)
        if page.rejected:
            self.stats.rejected_markup += 1
            self.logger.warning("Parser rejected markup of %s; storing raw body", url)
        try:
            self.sink.append(PageRecord(url=url, html=page.html))
            self.stats.pages += 1
        except WriteError as exc:
            self.stats.write_failures += 1
            self.logger.error("Error writing record for %s: %s", url, exc)

        for href in page.links:
            try:
                next_url = normalize_url(url, href)
            except ParseError as exc:
                self.stats.skipped_invalid += 1
                self.logger.debug("Skipping invalid link on %s: %s", url, exc)
                continue
            if not in_scope(self.seed, next_url):
                self.stats.skipped_out_of_scope += 1
                continue
            if self.config.link_delay > 0:
                await asyncio.sleep(self.config.link_delay)
            self._spawn(CrawlTarget(next_url, depth + 1))

        self.logger.info("Visited: %s (depth %d)", url, depth)
