"""scope_crawler.crawler: обход страниц, дедупликация, пул загрузок и фильтр области."""

from scope_crawler.crawler.crawler import AsyncCrawler
from scope_crawler.crawler.models import CrawlStats, CrawlTarget, PageRecord, RunConfig

__all__ = ["AsyncCrawler", "CrawlStats", "CrawlTarget", "PageRecord", "RunConfig"]
