"""
Fetcher module: plain HTTP GET with a fixed timeout and no retries.
"""
from __future__ import annotations

import asyncio

from aiohttp import ClientError, ClientSession, ClientTimeout
from scope_crawler.errors import FetchError
from scope_crawler.logger import get_logger


class Fetcher:
    """Downloads page bodies through a shared aiohttp session."""

    def __init__(self, session: ClientSession, timeout: float = 10.0) -> None:
        self.session = session
        self.timeout = ClientTimeout(total=timeout)
        self.logger = get_logger("fetcher")

    async def fetch(self, url: str) -> str:
        """
        Return the response body of *url* as text.

        Any HTTP status is accepted; transport errors, timeouts and
        malformed URLs raise FetchError.
        """
        try:
            async with self.session.get(url, timeout=self.timeout) as resp:
                body = await resp.text(errors="replace")
                self.logger.debug("GET %s -> %s (%d chars)", url, resp.status, len(body))
                return body
        except asyncio.TimeoutError as exc:
            raise FetchError(url, f"timed out after {self.timeout.total} s") from exc
        except (ClientError, ValueError) as exc:
            raise FetchError(url, exc) from exc
