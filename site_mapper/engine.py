# File: site_mapper/engine.py
"""site_mapper.engine: orchestration layer used by the CLI to run a crawl."""

from __future__ import annotations

import asyncio
from typing import Optional

from site_mapper.config import CrawlerConfig
from site_mapper.crawler.crawler import AsyncCrawler
from site_mapper.crawler.models import CrawlResult
from site_mapper.logger import logger

__all__ = ["start_crawl", "run_crawl"]


async def start_crawl(cfg: CrawlerConfig) -> CrawlResult:
    """
    Run the async crawler inside its session context and return the graph.

    Parameters
    ----------
    cfg : CrawlerConfig
        Crawl configuration.

    Returns
    -------
    CrawlResult
        Nodes, edges and stats of the crawl.
    """
    async with AsyncCrawler(cfg) as crawler:
        return await crawler.crawl()


def run_crawl(cfg: CrawlerConfig, timeout: Optional[float] = None) -> CrawlResult:
    """Blocking wrapper around :func:`start_crawl` with an optional hard timeout."""
    logger.info("Starting crawl…")
    try:
        if timeout:
            return asyncio.run(asyncio.wait_for(start_crawl(cfg), timeout=timeout))
        return asyncio.run(start_crawl(cfg))
    except asyncio.TimeoutError:
        logger.error("Crawl did not finish within %s seconds", timeout)
        raise
    except Exception as exc:
        logger.error("Crawl failed: %s", exc)
        raise
