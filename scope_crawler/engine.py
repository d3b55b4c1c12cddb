# File: scope_crawler/engine.py
"""scope_crawler.engine: оркестрация запуска обхода и запись итоговой конфигурации."""

from __future__ import annotations

import asyncio
import time
from datetime import datetime, timedelta
from typing import Optional

from scope_crawler.config import CrawlerConfig
from scope_crawler.crawler.crawler import AsyncCrawler, PageFetcher
from scope_crawler.crawler.models import RunConfig
from scope_crawler.errors import WriteError
from scope_crawler.logger import get_logger
from scope_crawler.report.jsonl import CONFIG_FILE, OUTPUT_FILE, JsonlSink, create_run_dir

__all__ = ["Engine", "start_crawl"]

logger = get_logger("engine")


async def start_crawl(
    config: CrawlerConfig,
    *,
    fetcher: Optional[PageFetcher] = None,
    now: Optional[datetime] = None,
) -> RunConfig:
    """
    Создаёт каталог запуска и оба JSONL-файла, выполняет обход и дописывает
    запись RunConfig после того, как завершились все задачи.

    Ошибки создания каталога/файлов (FatalSetupError) пробрасываются до начала обхода.
    """
    run_dir = create_run_dir(config.output_dir, now)
    logger.info("Run directory: %s", run_dir)

    with JsonlSink(run_dir / OUTPUT_FILE) as pages, JsonlSink(run_dir / CONFIG_FILE) as summary:
        started = time.monotonic()
        async with AsyncCrawler(config, pages, fetcher) as crawler:
            stats = await crawler.crawl()
        elapsed = timedelta(seconds=time.monotonic() - started)

        run_config = RunConfig(
            base_url=config.base_url, max_depth=config.max_depth, elapsed=elapsed, run_dir=run_dir,
        )
        try:
            summary.append(run_config)
        except WriteError as exc:
            logger.error("Error writing run config: %s", exc)

    logger.info(
        "Crawl finished in %s: %d pages, %d tasks, peak %d concurrent fetches",
        elapsed, stats.pages, stats.finished, stats.peak_fetches,
    )
    return run_config


class Engine:
    """Синхронный фасад над start_crawl."""

    def __init__(self, config: CrawlerConfig, fetcher: Optional[PageFetcher] = None) -> None:
        self.config = config
        self.fetcher = fetcher

    def run(self) -> RunConfig:
        """Запускает обход в новом event loop и возвращает итоговый RunConfig."""
        logger.info("Starting crawl…")
        try:
            return asyncio.run(start_crawl(self.config, fetcher=self.fetcher))
        except Exception as exc:
            logger.error("Crawl failed: %s", exc)
            raise
