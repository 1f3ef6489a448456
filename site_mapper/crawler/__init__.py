"""site_mapper.crawler: same-origin BFS crawler and its building blocks."""
from site_mapper.crawler.canonical import canonicalize, is_binary, same_origin
from site_mapper.crawler.crawler import AsyncCrawler, crawl
from site_mapper.crawler.fetcher import CrawlerError, FetchError
from site_mapper.crawler.models import CrawlEdge, CrawlNode, CrawlResult, CrawlStats

__all__ = [
    "AsyncCrawler",
    "CrawlEdge",
    "CrawlNode",
    "CrawlResult",
    "CrawlStats",
    "CrawlerError",
    "FetchError",
    "canonicalize",
    "crawl",
    "is_binary",
    "same_origin",
]
