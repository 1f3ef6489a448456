# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from site_mapper.config import CrawlerConfig, load_config, load_settings


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,suffix,expect_exc",
    [
        ("start_url: http://example.com\nmax_pages: 5", ".yaml", None),
        (json.dumps({"start_url": "http://example.com", "max_pages": 5}), ".json", None),
        ("{}", ".yaml", ValidationError),
        ("max_pages: [1", ".yaml", ValueError),
        ("- just\n- a list", ".yml", TypeError),
        ("{not json", ".json", ValueError),
        ("start_url = 'x'", ".toml", ValueError),
    ],
)
def test_load_config_variants(tmp_path, content, suffix, expect_exc):
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, CrawlerConfig)
        assert str(cfg.start_url) == "http://example.com/"
        assert cfg.max_pages == 5
        assert cfg.max_depth == 3


def test_defaults():
    cfg = CrawlerConfig(start_url="http://example.com")
    assert cfg.max_pages == 200
    assert cfg.max_depth == 3
    assert cfg.concurrency == 1
    assert cfg.forward_edges is False
    assert cfg.crawl_timeout is None


@pytest.mark.parametrize(
    "field,value",
    [("max_pages", 0), ("max_depth", -1), ("timeout", 0), ("concurrency", 0), ("user_agent", "")],
)
def test_invalid_values_rejected(field, value):
    with pytest.raises(ValidationError):
        CrawlerConfig(start_url="http://example.com", **{field: value})


def test_unknown_keys_rejected():
    with pytest.raises(ValidationError):
        CrawlerConfig(start_url="http://example.com", follow_robots=True)


def test_config_is_frozen():
    cfg = CrawlerConfig(start_url="http://example.com")
    with pytest.raises(ValidationError):
        cfg.max_pages = 10


def test_overrides_skip_none(tmp_path):
    cfg_path = write_file(tmp_path, "start_url: http://example.com\nmax_depth: 1", ".yaml")
    cfg = load_config(cfg_path, max_depth=None, max_pages=7, start_url="https://other.com/x")
    assert cfg.max_depth == 1
    assert cfg.max_pages == 7
    assert str(cfg.start_url) == "https://other.com/x"


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path / "absent.yaml")


def test_default_file_optional(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert load_settings(None) == {}

    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text("max_depth: 2\n", encoding="utf-8")
    assert load_settings(None) == {"max_depth": 2}
