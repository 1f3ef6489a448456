# site_mapper/__init__.py
"""
SiteMapper package initializer.
Defines package version and exposes the crawl API.
The CLI lives in :mod:`site_mapper.cli` (``site-mapper`` console script).
"""
__version__ = "0.1.0"

from site_mapper.crawler import AsyncCrawler, CrawlResult, crawl  # noqa: E402

__all__ = ["__version__", "AsyncCrawler", "CrawlResult", "crawl"]
