"""site_mapper.report: exporters for crawl graphs (JSON, sitemap XML/CSV, HTML)."""

from site_mapper.report.html_report import render_html
from site_mapper.report.json_report import render_json
from site_mapper.report.sitemap import build_sitemap_xml, render_sitemap_csv, render_sitemap_xml

__all__ = [
    "build_sitemap_xml",
    "render_html",
    "render_json",
    "render_sitemap_csv",
    "render_sitemap_xml",
]
