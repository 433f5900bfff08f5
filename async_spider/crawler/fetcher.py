# async_spider/crawler/fetcher.py
"""
Fetcher module: one bounded-time HTTP GET per resource with a fixed retry budget.
"""
from __future__ import annotations

import asyncio
from typing import Optional
from urllib.parse import urljoin

from aiohttp import ClientError, ClientSession, ClientTimeout, TCPConnector

from async_spider.config import SpiderConfig
from async_spider.crawler.models import Node
from async_spider.logger import logger
from async_spider.parser.node_parser import decode


def build_timeout(config: SpiderConfig) -> ClientTimeout:
    """Whole request bounded by request_timeout, socket connect by connect_timeout."""
    return ClientTimeout(total=config.request_timeout, sock_connect=config.connect_timeout)


def build_session(config: SpiderConfig) -> ClientSession:
    """
    Session shared by every task of a traversal.

    The connector has no pool limit: every claimed node gets its own
    connection instead of queueing for a pooled one.
    """
    return ClientSession(
        connector=TCPConnector(limit=0),
        timeout=build_timeout(config),
        headers={"User-Agent": config.user_agent},
        raise_for_status=False,
    )


class Fetcher:
    """Resolves paths against the base URL and fetches them as :class:`Node`."""

    def __init__(self, session: ClientSession, config: SpiderConfig) -> None:
        self.session = session
        self.config = config
        self.logger = logger
        self._base = str(config.base_url)

    def resolve(self, path: str) -> str:
        return urljoin(self._base, path)

    async def fetch(self, path: str) -> Optional[Node]:
        """
        Fetch *path* and decode the body.

        Returns None on any status other than 200 (no retry) or when every
        attempt failed with a transport error or timeout.
        """
        url = self.resolve(path)
        attempts = 0
        while True:
            try:
                async with self.session.get(url, raise_for_status=False) as resp:
                    if resp.status != 200:
                        self.logger.debug("GET %s -> HTTP %s", url, resp.status)
                        return None
                    body = await resp.text(errors="replace")
                    return decode(body)
            except (ClientError, asyncio.TimeoutError) as exc:
                attempts += 1
                if attempts > self.config.retry_times:
                    self.logger.warning("Failed %s after %d attempts: %r", url, attempts, exc)
                    return None
                self.logger.debug("Retry %d/%d for %s: %r", attempts, self.config.retry_times, url, exc)
