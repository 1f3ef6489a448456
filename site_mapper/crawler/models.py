"""
Data models for the SiteMapper crawler.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(slots=True)
class PageData:
    """Canonical URL and HTML body of a fetched page.

    ``base_url`` is the address the body was served from after redirects;
    relative links resolve against it.
    """

    url: str
    content: str
    base_url: Optional[str] = None


@dataclass(slots=True)
class ParsedPage:
    """Title and canonical outbound links of a page, in document order."""

    url: str
    title: str
    links: List[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class FrontierEntry:
    url: str
    depth: int


@dataclass(frozen=True, slots=True)
class CrawlNode:
    """One fetched page. Its position in ``CrawlResult.nodes`` is its id."""

    title: str
    url: str
    meta: Dict[str, Any] = field(default_factory=dict)

    @property
    def depth(self) -> int:
        return self.meta.get("depth", 0)


@dataclass(frozen=True, slots=True)
class CrawlEdge:
    source: int
    target: int
    type: str = "link"


@dataclass(frozen=True, slots=True)
class CrawlStats:
    pages: int = 0
    links: int = 0
    crawled: int = 0


@dataclass(slots=True)
class CrawlResult:
    """Graph produced by one crawl: nodes, edges and summary statistics."""

    nodes: List[CrawlNode] = field(default_factory=list)
    edges: List[CrawlEdge] = field(default_factory=list)
    stats: CrawlStats = field(default_factory=CrawlStats)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def urls(self) -> List[str]:
        """Node URLs in node order, skipping empty ones."""
        return [node.url for node in self.nodes if node.url]
