"""
Graph assembly: turns visited pages into index-stable nodes and observed
links into edges.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Set, Tuple

from site_mapper.crawler.models import CrawlEdge, CrawlNode, CrawlResult, CrawlStats

__all__ = ("GraphAssembler",)


class GraphAssembler:
    """
    Collects nodes and edges of one crawl.

    By default an edge is recorded only when its target is already a node
    at the moment the link is observed, so every edge endpoint is a valid
    index. With ``forward_edges`` the remaining links are resolved once the
    crawl is over, when every node is known.
    """

    def __init__(self, forward_edges: bool = False) -> None:
        self.forward_edges = forward_edges
        self.nodes: List[CrawlNode] = []
        self.edges: List[CrawlEdge] = []
        self._index: Dict[str, int] = {}
        self._edge_keys: Set[Tuple[int, int]] = set()
        self._pending: List[Tuple[int, str]] = []

    def __len__(self) -> int:
        return len(self.nodes)

    def index_of(self, url: str) -> Optional[int]:
        return self._index.get(url)

    def add_node(self, title: str, url: str, depth: int) -> int:
        if url in self._index:
            raise ValueError(f"Duplicate node for {url}")
        index = len(self.nodes)
        self.nodes.append(CrawlNode(title=title, url=url, meta={"depth": depth}))
        self._index[url] = index
        return index

    def link(self, source: int, target_url: str) -> Optional[CrawlEdge]:
        """Record a link from node *source* to *target_url* if the target is a node."""
        target = self._index.get(target_url)
        if target is None:
            if self.forward_edges:
                self._pending.append((source, target_url))
            return None
        return self._add_edge(source, target)

    def _add_edge(self, source: int, target: int) -> Optional[CrawlEdge]:
        if (source, target) in self._edge_keys:
            return None
        self._edge_keys.add((source, target))
        edge = CrawlEdge(source=source, target=target)
        self.edges.append(edge)
        return edge

    def result(self, crawled: int) -> CrawlResult:
        for source, target_url in self._pending:
            target = self._index.get(target_url)
            if target is not None:
                self._add_edge(source, target)
        self._pending.clear()
        return CrawlResult(
            nodes=list(self.nodes),
            edges=list(self.edges),
            stats=CrawlStats(pages=len(self.nodes), links=len(self.edges), crawled=crawled),
        )
