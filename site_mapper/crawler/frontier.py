"""
Breadth-first crawl frontier: a FIFO queue of (url, depth) entries plus the
visited set that deduplicates them.
"""
from __future__ import annotations

from collections import deque
from typing import AbstractSet, Deque, Optional, Set

from site_mapper.crawler.canonical import canonicalize, is_binary
from site_mapper.crawler.models import FrontierEntry
from site_mapper.logger import get_logger

__all__ = ("Frontier",)

logger = get_logger("frontier")


class Frontier:
    """
    FIFO frontier owned by a single crawl run.

    URLs are marked visited when they are enqueued, not when they are
    dequeued, so a URL discovered at two depths is queued once, at the
    shallower one. ``push`` has no suspension point; asyncio workers
    sharing one frontier can never enqueue the same URL twice.
    """

    def __init__(self, start_url: str, max_depth: int) -> None:
        root = canonicalize(start_url)
        if root is None:
            raise ValueError(f"Invalid start URL: {start_url!r}")
        self.root = root
        self.max_depth = max_depth
        self._queue: Deque[FrontierEntry] = deque()
        self._visited: Set[str] = set()
        self.push(root, 0)

    def push(self, url: str, depth: int) -> bool:
        """Enqueue a canonical *url* unless it was seen before."""
        if url in self._visited:
            return False
        self._visited.add(url)
        self._queue.append(FrontierEntry(url, depth))
        return True

    def pop(self) -> Optional[FrontierEntry]:
        """Next entry in FIFO order, skipping too-deep and binary ones."""
        while self._queue:
            entry = self._queue.popleft()
            if entry.depth > self.max_depth:
                logger.debug("Skipping %s: depth %d > %d", entry.url, entry.depth, self.max_depth)
                continue
            if is_binary(entry.url):
                logger.debug("Skipping binary %s", entry.url)
                continue
            return entry
        return None

    def seen(self, url: str) -> bool:
        return url in self._visited

    @property
    def visited(self) -> AbstractSet[str]:
        return frozenset(self._visited)

    @property
    def visited_count(self) -> int:
        return len(self._visited)

    def __len__(self) -> int:
        return len(self._queue)

    def __bool__(self) -> bool:
        return bool(self._queue)
