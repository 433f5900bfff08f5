# File: async_spider/engine.py
"""async_spider.engine: Запуск обхода по конфигурации."""

from __future__ import annotations

from typing import Optional

from async_spider.aggregator import CrawlReport
from async_spider.config import SpiderConfig
from async_spider.crawler.crawler import AsyncSpider

__all__ = ["start_crawl"]


async def start_crawl(cfg: SpiderConfig, timeout: Optional[float] = None) -> CrawlReport:
    """
    Открывает сессию, выполняет один обход и возвращает CrawlReport.

    Parameters
    ----------
    cfg : SpiderConfig
        Конфигурация обхода.
    timeout : float, optional
        Общий таймаут обхода; по умолчанию ``cfg.crawl_timeout``.

    Raises
    ------
    CrawlTimeoutError
        Если обход не завершился вовремя.
    """
    async with AsyncSpider(cfg) as spider:
        return await spider.crawl(timeout=timeout)
