# site_mapper/report/json_report.py

"""
JSON export of a crawl graph.

Serializes a CrawlResult into the ``{nodes, edges, stats}`` document.
"""
import json
from pathlib import Path

from site_mapper.crawler.models import CrawlResult


def dumps(result: CrawlResult, *, pretty: bool = False) -> str:
    """Return the JSON text of *result*."""
    return json.dumps(result.to_dict(), ensure_ascii=False, indent=2 if pretty else None)


def render_json(result: CrawlResult, output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Save *result* as JSON at *output_path*.

    :param result: crawl graph
    :param output_path: path of the JSON file
    :param pretty: indent with two spaces
    :return: Path of the saved file

    Example:
    ```python
    from site_mapper.report.json_report import render_json
    report_path = render_json(result, 'reports/graph.json')
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(result.to_dict(), f, ensure_ascii=False, indent=2 if pretty else None)

    return output
