# === FILE: async_spider/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import enum
import time
from dataclasses import dataclass, field
from typing import List, Optional, Set

from aiohttp import ClientSession

from async_spider.aggregator import CrawlReport, MessageAggregator
from async_spider.config import SpiderConfig
from async_spider.crawler.fetcher import Fetcher, build_session
from async_spider.crawler.visited import VisitedSet
from async_spider.errors import CrawlTimeoutError
from async_spider.logger import logger

__all__ = ("AsyncSpider", "CrawlState")


class CrawlState(enum.Enum):
    SEEDING = "seeding"
    RUNNING = "running"
    COMPLETED = "completed"
    TIMED_OUT = "timed-out"


@dataclass(slots=True)
class _Traversal:
    """Shared state of a single crawl() call; never reused between calls."""
    visited: VisitedSet = field(default_factory=VisitedSet)
    messages: MessageAggregator = field(default_factory=MessageAggregator)
    unavailable: List[str] = field(default_factory=list)
    tasks: Set[asyncio.Task] = field(default_factory=set)
    done: asyncio.Event = field(default_factory=asyncio.Event)
    in_flight: int = 0


class AsyncSpider:
    """
    Асинхронный паук: обходит граф ресурсов сервера, по одной задаче на узел.

    Each claimed path gets its own task. The in-flight counter is raised before
    a task is created and lowered only after the task has scheduled all of its
    successors, so zero means the whole reachable graph has been processed.
    """

    def __init__(self, config: SpiderConfig) -> None:
        self.config = config
        self.session: Optional[ClientSession] = None
        self.state: Optional[CrawlState] = None
        self.logger = logger
        self._fetcher: Optional[Fetcher] = None

    async def __aenter__(self) -> AsyncSpider:
        self.session = build_session(self.config)
        self._fetcher = Fetcher(self.session, self.config)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def crawl(self, start_path: Optional[str] = None, timeout: Optional[float] = None) -> CrawlReport:
        """
        Traverse everything reachable from *start_path* and return the sorted messages.

        Raises CrawlTimeoutError when the traversal does not finish within
        *timeout* seconds; nothing collected so far is returned in that case.
        """
        if self._fetcher is None:
            raise RuntimeError("Session not initialized")
        start_path = self.config.start_path if start_path is None else start_path
        timeout = self.config.crawl_timeout if timeout is None else timeout

        self.logger.info("Старт обхода: %s (start=%s)", self.config.base_url, start_path)
        started = time.monotonic()
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        run = _Traversal()

        self.state = CrawlState.SEEDING
        self._fork(run, start_path)
        if run.in_flight == 0:
            run.done.set()
        self.state = CrawlState.RUNNING

        try:
            await self._wait(run, deadline)
        finally:
            if not run.done.is_set():
                await self._abandon(run)

        if not run.done.is_set():
            self.state = CrawlState.TIMED_OUT
            self.logger.warning(
                "Обход не завершён за %.2f с: %d путей занято, сообщения отброшены",
                timeout,
                len(run.visited),
            )
            raise CrawlTimeoutError(timeout, len(run.visited))

        if run.tasks:
            await asyncio.gather(*run.tasks, return_exceptions=True)
        self.state = CrawlState.COMPLETED
        report = CrawlReport(
            messages=run.messages.drain_sorted(),
            visited=len(run.visited),
            unavailable=sorted(run.unavailable),
            duration=time.monotonic() - started,
        )
        self.logger.info(
            "Завершено: %d путей, %d сообщений, %d недоступно за %.2f с",
            report.visited,
            len(report.messages),
            len(report.unavailable),
            report.duration,
        )
        return report

    async def _wait(self, run: _Traversal, deadline: float) -> None:
        loop = asyncio.get_running_loop()
        while not run.done.is_set():
            remaining = deadline - loop.time()
            if remaining <= 0:
                return
            try:
                await asyncio.wait_for(run.done.wait(), timeout=min(remaining, self.config.poll_interval))
            except asyncio.TimeoutError:
                continue

    def _fork(self, run: _Traversal, path: str) -> None:
        if not run.visited.claim(path):
            return
        run.in_flight += 1
        task = asyncio.create_task(self._visit(run, path))
        run.tasks.add(task)
        task.add_done_callback(lambda t: self._on_task_done(run, t))

    async def _visit(self, run: _Traversal, path: str) -> None:
        assert self._fetcher is not None
        try:
            node = await self._fetcher.fetch(path)
            if node is None:
                run.unavailable.append(path)
                return
            if node.has_message:
                run.messages.append(node.message)
            for successor in node.successors:
                self._fork(run, successor)
        finally:
            run.in_flight -= 1
            if run.in_flight == 0:
                run.done.set()

    def _on_task_done(self, run: _Traversal, task: asyncio.Task) -> None:
        run.tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            self.logger.error("Task failed: %r", task.exception())

    async def _abandon(self, run: _Traversal) -> None:
        pending = list(run.tasks)
        for task in pending:
            task.cancel()
        if pending:
            self.logger.debug("Cancelling %d outstanding tasks", len(pending))
            await asyncio.gather(*pending, return_exceptions=True)
