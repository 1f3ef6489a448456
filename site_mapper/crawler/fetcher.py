# site_mapper/crawler/fetcher.py
"""
Fetcher module: a single GET per URL, no retry, HTML only.
"""
from __future__ import annotations

import asyncio
from typing import Optional

from aiohttp import ClientError, ClientSession, ClientTimeout

from site_mapper.crawler.canonical import origin
from site_mapper.crawler.models import PageData

__all__ = ("CrawlerError", "FetchError", "Fetcher")

_HTML_TYPES = ("text/html", "application/xhtml+xml")


class CrawlerError(Exception):
    """Base class for crawler errors."""


class FetchError(CrawlerError):
    """A page could not be retrieved; the crawl goes on without it."""

    def __init__(self, url: str, reason: str, status: Optional[int] = None) -> None:
        super().__init__(reason)
        self.url = url
        self.reason = reason
        self.status = status


class Fetcher:
    """Retrieves pages through a shared aiohttp session."""

    def __init__(self, session: ClientSession, timeout: Optional[float] = None) -> None:
        self.session = session
        self._timeout = ClientTimeout(total=timeout) if timeout else None

    async def fetch(self, url: str) -> PageData:
        """
        GET *url* once and return its HTML body.

        Redirects are followed within the same origin only. Raises FetchError
        on transport errors, timeouts, non-2xx responses, redirects to another
        origin and non-HTML content types. Anything else propagates.
        """
        kwargs = {"timeout": self._timeout} if self._timeout else {}
        try:
            async with self.session.get(url, raise_for_status=False, **kwargs) as resp:
                if not 200 <= resp.status < 300:
                    raise FetchError(url, f"HTTP {resp.status}", resp.status)
                final_url = str(resp.url)
                if origin(final_url) != origin(url):
                    raise FetchError(url, f"redirected to other origin {final_url}", resp.status)
                mime = resp.headers.get("Content-Type", "").split(";", 1)[0].strip().lower()
                if mime and mime not in _HTML_TYPES:
                    raise FetchError(url, f"unsupported content type {mime}", resp.status)
                text = await resp.text(errors="replace")
                return PageData(url, text, base_url=final_url)
        except asyncio.TimeoutError as exc:
            raise FetchError(url, "timed out") from exc
        except ClientError as exc:
            raise FetchError(url, str(exc) or type(exc).__name__) from exc
