# === FILE: site_mapper/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import time
from typing import Any, Optional

from aiohttp import ClientSession, ClientTimeout

from site_mapper.config import CrawlerConfig
from site_mapper.crawler.canonical import Origin, is_binary, origin, same_origin
from site_mapper.crawler.fetcher import Fetcher, FetchError
from site_mapper.crawler.frontier import Frontier
from site_mapper.crawler.graph import GraphAssembler
from site_mapper.crawler.link_extractor import extract_page
from site_mapper.crawler.models import CrawlResult, FrontierEntry
from site_mapper.logger import get_logger

__all__ = ("AsyncCrawler", "crawl")


class AsyncCrawler:
    """
    Breadth-first same-origin crawler producing a node/edge graph.

    ``concurrency=1`` (the default) fetches one page at a time and yields
    deterministic BFS order. With more workers the frontier and the visited
    set stay shared and dedup stays exact, but whether a link becomes an
    edge depends on which fetch finishes first.
    """

    def __init__(self, config: CrawlerConfig, session: Optional[ClientSession] = None) -> None:
        self.config = config
        self.session = session
        self._own_session = session is None
        self.logger = get_logger("crawler")
        self._cancelled = asyncio.Event()
        self._in_flight = 0

    async def __aenter__(self) -> AsyncCrawler:
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": self.config.user_agent},
                raise_for_status=False,
            )
            self._own_session = True
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._own_session and self.session and not self.session.closed:
            await self.session.close()

    def cancel(self) -> None:
        """Stop dispatching new fetches; pages already recorded are kept."""
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    async def crawl(self) -> CrawlResult:
        if not self.session:
            raise RuntimeError("Session not initialized")
        start_url = str(self.config.start_url)
        frontier = Frontier(start_url, self.config.max_depth)
        graph = GraphAssembler(forward_edges=self.config.forward_edges)
        fetcher = Fetcher(self.session, self.config.timeout)
        start_origin = origin(frontier.root)
        wakeup = asyncio.Condition()
        self._in_flight = 0

        self.logger.info(
            "Starting crawl from %s (max %d pages, depth %d)",
            start_url, self.config.max_pages, self.config.max_depth,
        )
        started = time.monotonic()
        workers = [
            asyncio.create_task(self._worker(frontier, graph, fetcher, start_origin, wakeup))
            for _ in range(self.config.concurrency)
        ]
        try:
            done, pending = await asyncio.wait(
                workers,
                timeout=self.config.crawl_timeout,
                return_when=asyncio.FIRST_EXCEPTION,
            )
            for task in done:
                if not task.cancelled() and task.exception() is not None:
                    raise task.exception()
            if pending:
                self.logger.warning(
                    "Crawl did not finish within %s seconds, returning %d pages",
                    self.config.crawl_timeout, len(graph),
                )
                self.cancel()
        finally:
            for w in workers:
                w.cancel()
            await asyncio.gather(*workers, return_exceptions=True)

        result = graph.result(frontier.visited_count)
        duration = time.monotonic() - started
        self.logger.info(
            "Finished: %d pages, %d links, %d urls seen in %.2f s",
            result.stats.pages, result.stats.links, result.stats.crawled, duration,
        )
        return result

    async def _worker(
        self,
        frontier: Frontier,
        graph: GraphAssembler,
        fetcher: Fetcher,
        start_origin: Optional[Origin],
        wakeup: asyncio.Condition,
    ) -> None:
        while True:
            async with wakeup:
                entry = await self._next_entry(frontier, graph, wakeup)
                if entry is None:
                    wakeup.notify_all()
                    return
                self._in_flight += 1
            try:
                await self._visit(entry, frontier, graph, fetcher, start_origin)
            finally:
                async with wakeup:
                    self._in_flight -= 1
                    wakeup.notify_all()

    async def _next_entry(
        self, frontier: Frontier, graph: GraphAssembler, wakeup: asyncio.Condition
    ) -> Optional[FrontierEntry]:
        """Dequeue the next entry, waiting while other workers may still add some."""
        while True:
            if self.cancelled or len(graph) >= self.config.max_pages:
                return None
            if frontier and len(graph) + self._in_flight < self.config.max_pages:
                entry = frontier.pop()
                if entry is not None:
                    return entry
                continue
            if self._in_flight == 0:
                return None
            await wakeup.wait()

    async def _visit(
        self,
        entry: FrontierEntry,
        frontier: Frontier,
        graph: GraphAssembler,
        fetcher: Fetcher,
        start_origin: Optional[Origin],
    ) -> None:
        self.logger.info("Crawling %s (depth %d)", entry.url, entry.depth)
        try:
            page = await fetcher.fetch(entry.url)
        except FetchError as exc:
            self.logger.warning("Error crawling %s: %s", entry.url, exc)
            return

        # no await from here on: a page is recorded with all its edges or not at all
        parsed = extract_page(page)
        source = graph.add_node(parsed.title, entry.url, entry.depth)
        for link in parsed.links:
            if not same_origin(link, start_origin) or is_binary(link):
                continue
            if entry.depth < self.config.max_depth:
                frontier.push(link, entry.depth + 1)
            graph.link(source, link)


async def crawl(
    start_url: str,
    max_pages: int = 200,
    max_depth: int = 3,
    *,
    session: Optional[ClientSession] = None,
    **options: Any,
) -> CrawlResult:
    """
    Crawl *start_url* and return its same-origin link graph.

    Extra keyword options are :class:`~site_mapper.config.CrawlerConfig`
    fields (``concurrency``, ``timeout``, ``forward_edges``...).
    """
    config = CrawlerConfig(start_url=start_url, max_pages=max_pages, max_depth=max_depth, **options)
    async with AsyncCrawler(config, session=session) as crawler:
        return await crawler.crawl()
