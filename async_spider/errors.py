# File: async_spider/errors.py
"""async_spider.errors: Иерархия исключений обходчика."""


class SpiderError(Exception):
    """Base class for AsyncSpider errors."""


class CrawlTimeoutError(SpiderError, TimeoutError):
    """Обход не завершился до истечения общего таймаута."""

    def __init__(self, timeout: float, visited: int = 0) -> None:
        super().__init__(f"Crawl did not finish within {timeout:g} seconds ({visited} paths claimed)")
        self.timeout = timeout
        self.visited = visited


__all__ = ["SpiderError", "CrawlTimeoutError"]
