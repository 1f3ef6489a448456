# File: tests/conftest.py
from __future__ import annotations

import asyncio
from collections import Counter
from typing import Awaitable, Callable, Dict, Union

import pytest
import pytest_asyncio
from aiohttp import web

from site_mapper.crawler.models import CrawlEdge, CrawlNode, CrawlResult, CrawlStats

Route = Union[str, Callable[[web.Request], Awaitable[web.StreamResponse]]]


def html_page(title: str | None, *hrefs: str) -> str:
    """Minimal HTML document with an optional <title> and one <a> per href."""
    head = f"<head><title>{title}</title></head>" if title is not None else "<head></head>"
    body = "".join(f'<a href="{href}">{href}</a>' for href in hrefs)
    return f"<html>{head}<body>{body}</body></html>"


def slow_page(delay: float, body: str) -> Callable[[web.Request], Awaitable[web.Response]]:
    async def handler(_):
        await asyncio.sleep(delay)
        return web.Response(text=body, content_type="text/html")

    return handler


class SiteServer:
    """A running aiohttp test site and the number of hits per path."""

    def __init__(self, base: str, hits: Counter) -> None:
        self.base = base
        self.hits = hits

    def url(self, path: str = "/") -> str:
        return f"{self.base}{path}"


@pytest_asyncio.fixture
async def serve_site(unused_tcp_port_factory):
    """
    Factory fixture: ``await serve_site({"/": "<html>…", "/slow": handler})``.

    String routes are served as text/html; callables are used as handlers.
    """
    runners: list[web.AppRunner] = []

    async def _serve(routes: Dict[str, Route]) -> SiteServer:
        hits: Counter = Counter()

        @web.middleware
        async def count_hits(request, handler):
            hits[request.path] += 1
            return await handler(request)

        app = web.Application(middlewares=[count_hits])
        for path, route in routes.items():
            if callable(route):
                app.router.add_get(path, route)
            else:
                app.router.add_get(path, _static(route))

        port = unused_tcp_port_factory()
        runner = web.AppRunner(app)
        await runner.setup()
        site = web.TCPSite(runner, "127.0.0.1", port)
        await site.start()
        runners.append(runner)
        return SiteServer(f"http://127.0.0.1:{port}", hits)

    yield _serve

    for runner in runners:
        await runner.cleanup()


def _static(body: str):
    async def handler(_):
        return web.Response(text=body, content_type="text/html")

    return handler


@pytest.fixture()
def sample_result() -> CrawlResult:
    """Small hand-built graph for report tests."""
    nodes = [
        CrawlNode(title="Home", url="http://example.com/", meta={"depth": 0}),
        CrawlNode(title="About <us>", url="http://example.com/about", meta={"depth": 1}),
        CrawlNode(title="Search", url="http://example.com/search?q=a&page=2", meta={"depth": 1}),
    ]
    edges = [CrawlEdge(source=1, target=0), CrawlEdge(source=2, target=0)]
    return CrawlResult(nodes=nodes, edges=edges, stats=CrawlStats(pages=3, links=2, crawled=5))
