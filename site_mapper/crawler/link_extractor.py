"""
Title and link extraction for fetched pages.
"""
from __future__ import annotations

from typing import List
from urllib.parse import urlsplit

from bs4 import BeautifulSoup
from bs4.element import Tag

from site_mapper.crawler.canonical import canonicalize
from site_mapper.crawler.models import PageData, ParsedPage


def extract_title(soup: BeautifulSoup, url: str) -> str:
    """``<title>`` text, or the URL path when the page has none."""
    tag = soup.find("title")
    title = tag.get_text(strip=True) if isinstance(tag, Tag) else ""
    return title or (urlsplit(url).path or "/")


def extract_links(soup: BeautifulSoup, base_url: str) -> List[str]:
    """
    Canonical absolute URLs of every ``<a href>`` in document order.

    Malformed and non-http(s) references are skipped. Origin filtering is
    left to the caller.
    """
    links: List[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href = tag.get("href")
        if not isinstance(href, str):
            continue
        url = canonicalize(href, base_url)
        if url is not None:
            links.append(url)
    return links


def extract_page(page: PageData) -> ParsedPage:
    soup = BeautifulSoup(page.content, "html.parser")
    return ParsedPage(
        url=page.url,
        title=extract_title(soup, page.url),
        links=extract_links(soup, page.base_url or page.url),
    )
