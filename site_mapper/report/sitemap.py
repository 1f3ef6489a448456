# File: site_mapper/report/sitemap.py
"""site_mapper.report.sitemap: sitemap.xml and CSV export of crawled pages."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Union

from lxml import etree

from site_mapper.crawler.models import CrawlResult

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
CSV_HEADER = ("ID", "Title", "URL", "Depth")


def build_sitemap_xml(result: CrawlResult) -> bytes:
    """Build a sitemaps.org ``<urlset>`` with one ``<url><loc>`` per node that has a URL.

    Args:
        result: crawl graph.

    Returns:
        UTF-8 encoded XML document with declaration.
    """
    urlset = etree.Element(f"{{{SITEMAP_NS}}}urlset", nsmap={None: SITEMAP_NS})
    for url in result.urls():
        entry = etree.SubElement(urlset, f"{{{SITEMAP_NS}}}url")
        loc = etree.SubElement(entry, f"{{{SITEMAP_NS}}}loc")
        loc.text = url
    return etree.tostring(urlset, xml_declaration=True, encoding="UTF-8", pretty_print=True)


def render_sitemap_xml(result: CrawlResult, output_path: Union[str, Path]) -> Path:
    """Write :func:`build_sitemap_xml` output to *output_path*."""
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(build_sitemap_xml(result))
    return output


def render_sitemap_csv(result: CrawlResult, output_path: Union[str, Path]) -> Path:
    """Write one row per node: its index, title, URL and depth."""
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    with output.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(CSV_HEADER)
        for index, node in enumerate(result.nodes):
            writer.writerow((index, node.title, node.url, node.depth))
    return output
