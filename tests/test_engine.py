# File: tests/test_engine.py
import asyncio

import pytest

import site_mapper.engine as engine
from site_mapper.config import CrawlerConfig


@pytest.fixture()
def config() -> CrawlerConfig:
    return CrawlerConfig(start_url="http://example.com", max_pages=2)


def test_run_crawl_returns_result(monkeypatch, config, sample_result):
    async def fake(cfg):
        assert cfg is config
        return sample_result

    monkeypatch.setattr(engine, "start_crawl", fake)
    assert engine.run_crawl(config) is sample_result


def test_run_crawl_timeout(monkeypatch, config):
    async def slow(cfg):
        await asyncio.sleep(5)

    monkeypatch.setattr(engine, "start_crawl", slow)
    with pytest.raises(asyncio.TimeoutError):
        engine.run_crawl(config, timeout=0.1)


def test_run_crawl_propagates_errors(monkeypatch, config):
    async def broken(cfg):
        raise RuntimeError("transport down")

    monkeypatch.setattr(engine, "start_crawl", broken)
    with pytest.raises(RuntimeError, match="transport down"):
        engine.run_crawl(config)
