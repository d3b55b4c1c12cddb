"""
Data models for the ScopeCrawler crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import Any, Dict, Optional


@dataclass(slots=True, frozen=True)
class CrawlTarget:
    """A URL scheduled for one crawl task at a given depth."""

    url: str
    depth: int = 0


@dataclass(slots=True, frozen=True)
class PageRecord:
    """Holds the URL and canonical HTML of a fetched page."""

    url: str
    html: str

    def as_record(self) -> Dict[str, Any]:
        return {"url": self.url, "html": self.html}


@dataclass(slots=True, frozen=True)
class RunConfig:
    """Summary of one finished run, written once to config.jsonl."""

    base_url: str
    max_depth: int
    elapsed: timedelta
    # where the run was written; not part of the stored record
    run_dir: Optional[Path] = field(default=None, compare=False)

    def as_record(self) -> Dict[str, Any]:
        # elapsed is stored as integer nanoseconds
        return {
            "base_url": self.base_url,
            "max_depth": self.max_depth,
            "time": self.elapsed // timedelta(microseconds=1) * 1000,
        }


@dataclass(slots=True)
class CrawlStats:
    """Counters collected while a crawl runs."""

    pages: int = 0
    duplicates: int = 0
    fetch_failures: int = 0
    write_failures: int = 0
    skipped_invalid: int = 0
    skipped_out_of_scope: int = 0
    rejected_markup: int = 0
    depth_limited: int = 0
    spawned: int = 0
    finished: int = 0
    peak_fetches: int = 0
