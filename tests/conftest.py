# File: tests/conftest.py
import asyncio
from pathlib import Path
from typing import Dict, List, Optional

import pytest

from scope_crawler.config import CrawlerConfig
from scope_crawler.errors import FetchError, WriteError


class FakeFetcher:
    """
    In-memory fetch collaborator.
    Returns pages from a dict, raises FetchError for URLs listed in *failing*
    or missing from *pages*; records every call and the peak concurrency.
    """

    def __init__(self, pages: Dict[str, str], failing: Optional[set] = None,
                 gate: Optional[asyncio.Event] = None) -> None:
        self.pages = pages
        self.failing = failing or set()
        self.gate = gate
        self.calls: List[str] = []
        self.active = 0
        self.peak = 0

    async def fetch(self, url: str) -> str:
        self.calls.append(url)
        self.active += 1
        self.peak = max(self.peak, self.active)
        try:
            if self.gate is not None and url != SEED:
                await self.gate.wait()
            else:
                await asyncio.sleep(0)
            if url in self.failing or url not in self.pages:
                raise FetchError(url, "connection refused")
            return self.pages[url]
        finally:
            self.active -= 1


class ListSink:
    """Record sink that keeps records in memory."""

    def __init__(self, fail_for: Optional[set] = None) -> None:
        self.records: List[dict] = []
        self.fail_for = fail_for or set()

    def append(self, record) -> None:
        data = record.as_record()
        if data.get("url") in self.fail_for:
            raise WriteError(f"disk full while writing {data['url']}")
        self.records.append(data)

    @property
    def urls(self) -> List[str]:
        return [r["url"] for r in self.records]


SEED = "https://a.test/x"


def links_page(*hrefs: str) -> str:
    anchors = "".join(f'<a href="{h}">{h}</a>' for h in hrefs)
    return f"<html><body>{anchors}</body></html>"


@pytest.fixture()
def crawl_config(tmp_path: Path) -> CrawlerConfig:
    """
    Return a CrawlerConfig for tests: no per-link delay, output under tmp_path.
    """
    return CrawlerConfig(
        base_url=SEED,
        max_depth=1,
        output_dir=tmp_path / "data",
        worker_limit=10,
        timeout=2.0,
        link_delay=0,
    )


@pytest.fixture()
def sink() -> ListSink:
    return ListSink()
