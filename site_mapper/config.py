"""
Loading and validation of the SiteMapper crawl configuration.
Pydantic describes the schema and checks the data.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, HttpUrl


class CrawlerConfig(BaseModel):
    """Settings for a single crawl run."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    start_url: HttpUrl = Field(..., description="URL the crawl starts from; also fixes the origin.")
    max_pages: int = Field(200, ge=1, description="Hard limit on the number of graph nodes.")
    max_depth: int = Field(3, ge=0, description="Maximum link depth from the start URL.")
    timeout: float = Field(10.0, gt=0, description="Timeout of a single request (seconds).")
    crawl_timeout: Optional[float] = Field(
        None, gt=0, description="Timeout of the whole crawl; partial results are kept."
    )
    user_agent: str = Field("SiteMapperBot/1.0", min_length=1, description="User-Agent header.")
    concurrency: int = Field(1, ge=1, le=32, description="Number of fetches in flight.")
    forward_edges: bool = Field(
        False, description="Also record links to pages that were visited later."
    )


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def load_settings(path: Union[str, Path, None]) -> Dict[str, Any]:
    """
    Read a YAML or JSON config file into a plain dict without validating it.

    With ``path=None`` the default ``configs/default.yaml`` is used when it
    exists, otherwise an empty mapping is returned.
    """
    if path is None:
        if not _DEFAULT_CFG.is_file():
            return {}
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: Union[str, Path, None], **overrides: Any) -> CrawlerConfig:
    """
    Read YAML or JSON and return a validated CrawlerConfig.

    Keyword overrides whose value is ``None`` are ignored, so CLI options that
    were not given keep the file's value.
    """
    data = load_settings(path)
    data.update({key: value for key, value in overrides.items() if value is not None})
    return CrawlerConfig(**data)
