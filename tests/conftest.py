# File: tests/conftest.py
from __future__ import annotations

import asyncio
import json
from collections import Counter
from collections.abc import AsyncIterator
from typing import Any, Callable, Dict, Union

import pytest
import pytest_asyncio
from aiohttp import web

from async_spider.config import SpiderConfig
from async_spider.logger import init_logging

#: graph entry: node fields, a bare HTTP status, a raw body or a custom handler
GraphEntry = Union[Dict[str, Any], int, str, Callable[..., Any]]


def pytest_configure(config):
    """Register custom markers so that `--strict-markers` does not fail."""
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )


def node_body(message: Any = None, successors: Any = None) -> str:
    """Render a node body the way the server does."""
    payload: Dict[str, Any] = {}
    if message is not None:
        payload["message"] = message
    if successors is not None:
        payload["successors"] = successors
    return json.dumps(payload)


def make_config(base_url: str, **overrides: Any) -> SpiderConfig:
    """SpiderConfig with timeouts small enough for tests."""
    params: Dict[str, Any] = dict(
        base_url=base_url,
        request_timeout=2.0,
        connect_timeout=1.0,
        crawl_timeout=10.0,
        poll_interval=0.05,
    )
    params.update(overrides)
    return SpiderConfig(**params)


def build_graph_app(graph: Dict[str, GraphEntry], hits: Counter) -> web.Application:
    """
    Serve *graph* from one catch-all route.

    Unknown paths answer 404. Every request is counted in *hits* by path.
    """
    app = web.Application()

    async def handle(request: web.Request) -> web.StreamResponse:
        path = request.path
        hits[path] += 1
        entry = graph.get(path)
        if entry is None:
            return web.Response(status=404)
        if callable(entry):
            return await entry(request)
        if isinstance(entry, int):
            return web.Response(status=entry)
        if isinstance(entry, str):
            return web.Response(text=entry, content_type="application/json")
        return web.Response(text=node_body(**entry), content_type="application/json")

    app.router.add_get("/{tail:.*}", handle)
    return app


async def _serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app, shutdown_timeout=1.0)
    await runner.setup()
    site = web.TCPSite(runner, "127.0.0.1", port, backlog=1024)
    await site.start()
    try:
        yield f"http://127.0.0.1:{port}"
    finally:
        await runner.cleanup()


class GraphServer:
    """Handle returned by the ``graph_server`` fixture."""

    def __init__(self, port: int) -> None:
        self.port = port
        self.hits: Counter = Counter()
        self._gen: AsyncIterator[str] | None = None
        self.base_url = ""

    async def start(self, graph: Dict[str, GraphEntry]) -> str:
        self._gen = _serve_app(build_graph_app(graph, self.hits), self.port)
        self.base_url = await self._gen.__anext__()
        return self.base_url

    async def stop(self) -> None:
        if self._gen is not None:
            await self._gen.aclose()
            self._gen = None


@pytest_asyncio.fixture
async def graph_server(unused_tcp_port: int) -> AsyncIterator[GraphServer]:
    server = GraphServer(unused_tcp_port)
    try:
        yield server
    finally:
        await server.stop()


def slow_node(delay: float, **fields: Any) -> Callable[..., Any]:
    """Handler that answers with a node after *delay* seconds."""

    async def handler(_request: web.Request) -> web.Response:
        await asyncio.sleep(delay)
        return web.Response(text=node_body(**fields), content_type="application/json")

    return handler


@pytest.fixture(autouse=True)
def fresh_logging():
    """Rebind the project logger to the current (captured) stderr for each test."""
    yield init_logging(level="DEBUG")
