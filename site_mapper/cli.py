#!/usr/bin/env python3
"""
Command line entry point of SiteMapper.

Commands:
  crawl     Crawl a site and print/save its link graph
  config    Show the effective configuration

Common options:
  --config PATH       YAML/JSON config (default: configs/default.yaml if present)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (console only if omitted)
  --log-format FORMAT Logging format (e.g. "%(asctime)s %(levelname)s %(message)s")

crawl options:
  --max-pages INT     Maximum number of pages (override max_pages)
  --max-depth INT     Maximum link depth (override max_depth)
  --concurrency INT   Fetches in flight (override concurrency)
  --forward-edges     Also record links to pages visited later
  --json PATH         Save the graph as JSON
  --xml PATH          Save a sitemap.xml
  --csv PATH          Save a sitemap CSV
  --html PATH         Save an HTML report
  --template DIR      Directory with Jinja2 templates
  --pretty            Indent JSON printed on stdout
  --crawl-timeout SEC Timeout of the whole crawl (seconds)

Also:
  --version, -v       Show the SiteMapper version

Example:
  site-mapper crawl https://example.com --max-pages 50 --xml sitemap.xml
"""
import asyncio
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from site_mapper import __version__
from site_mapper.config import CrawlerConfig, load_settings
from site_mapper.engine import start_crawl
from site_mapper.logger import DEFAULT_FORMAT, init_logging
from site_mapper.report.html_report import render_html
from site_mapper.report.json_report import dumps, render_json
from site_mapper.report.sitemap import render_sitemap_csv, render_sitemap_xml

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def build_config(ctx: click.Context, **overrides) -> CrawlerConfig:
    """Merge file settings with non-empty CLI overrides and validate them."""
    data = dict(ctx.obj['settings'])
    data.update({key: value for key, value in overrides.items() if value is not None})
    try:
        return CrawlerConfig(**data)
    except ValidationError as e:
        print_error(f'Invalid configuration: {e}')


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteMapper, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to a YAML or JSON config file.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file (console only if omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Logging format string'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """SiteMapper command group."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        settings = load_settings(config_path)
    except Exception as e:
        print_error(f'Failed to load configuration: {e}')
    ctx.ensure_object(dict)
    ctx.obj['settings'] = settings


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('url', required=False)
@click.option('--max-pages', '-p', 'max_pages', type=int, default=None,
              help='Maximum number of pages (override max_pages)')
@click.option('--max-depth', '-d', 'max_depth', type=int, default=None,
              help='Maximum link depth (override max_depth)')
@click.option('--concurrency', 'concurrency', type=int, default=None,
              help='Fetches in flight (override concurrency)')
@click.option('--forward-edges', 'forward_edges', is_flag=True,
              help='Also record links to pages visited later')
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save the graph as JSON'
)
@click.option(
    '--xml', '-x', 'xml_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save a sitemap.xml'
)
@click.option(
    '--csv', 'csv_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save a sitemap CSV'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save an HTML report'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Directory with Jinja2 templates (packaged template by default)'
)
@click.option(
    '--pretty', is_flag=True,
    help='Indent JSON printed on stdout (2 spaces)'
)
@click.option(
    '--crawl-timeout', 'crawl_timeout',
    type=float,
    default=None,
    help='Timeout of the whole crawl (seconds); partial results are kept'
)
@click.pass_context
def crawl(ctx, url, max_pages, max_depth, concurrency, forward_edges,
          json_output, xml_output, csv_output, html_output, template_dir, pretty, crawl_timeout):
    """Crawl URL and produce its same-origin link graph."""
    cfg = build_config(
        ctx,
        start_url=url,
        max_pages=max_pages,
        max_depth=max_depth,
        concurrency=concurrency,
        forward_edges=forward_edges or None,
        crawl_timeout=crawl_timeout,
    )
    click.echo(f'Crawling {cfg.start_url}', err=True)
    try:
        result = asyncio.run(start_crawl(cfg))
    except Exception as e:
        print_error(f'Crawl failed: {e}')

    # Nothing to save: print to stdout
    if not any((json_output, xml_output, csv_output, html_output)):
        click.echo(dumps(result, pretty=pretty))
        return

    outputs = (
        ('JSON report', json_output, lambda p: render_json(result, p)),
        ('Sitemap XML', xml_output, lambda p: render_sitemap_xml(result, p)),
        ('Sitemap CSV', csv_output, lambda p: render_sitemap_csv(result, p)),
        ('HTML report', html_output, lambda p: render_html(result, template_dir, p)),
    )
    for label, path, render in outputs:
        if not path:
            continue
        try:
            saved = render(path)
        except Exception as e:
            print_error(f'Failed to save {label}: {e}')
        click.echo(f'{label}: {saved}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.argument('url', required=False)
@click.pass_context
def show_config(ctx, url):
    """Show the effective configuration as JSON."""
    cfg = build_config(ctx, start_url=url)
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
