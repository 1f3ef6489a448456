# File: tests/test_graph.py
import pytest

from site_mapper.crawler.graph import GraphAssembler
from site_mapper.crawler.models import CrawlEdge, CrawlNode


def test_nodes_get_stable_indices():
    graph = GraphAssembler()
    assert graph.add_node("Home", "http://a.com/", 0) == 0
    assert graph.add_node("About", "http://a.com/about", 1) == 1
    assert graph.index_of("http://a.com/about") == 1
    assert graph.index_of("http://a.com/missing") is None
    assert graph.nodes[1] == CrawlNode(title="About", url="http://a.com/about", meta={"depth": 1})
    assert len(graph) == 2


def test_duplicate_node_rejected():
    graph = GraphAssembler()
    graph.add_node("Home", "http://a.com/", 0)
    with pytest.raises(ValueError):
        graph.add_node("Home again", "http://a.com/", 1)


def test_edges_only_to_existing_nodes():
    graph = GraphAssembler()
    home = graph.add_node("Home", "http://a.com/", 0)
    about = graph.add_node("About", "http://a.com/about", 1)

    assert graph.link(about, "http://a.com/") == CrawlEdge(source=1, target=0, type="link")
    assert graph.link(home, "http://a.com/later") is None
    assert graph.edges == [CrawlEdge(1, 0)]


def test_repeated_links_collapse_and_self_links_are_kept():
    graph = GraphAssembler()
    home = graph.add_node("Home", "http://a.com/", 0)
    about = graph.add_node("About", "http://a.com/about", 1)
    graph.link(about, "http://a.com/")
    assert graph.link(about, "http://a.com/") is None
    graph.link(home, "http://a.com/")
    assert graph.edges == [CrawlEdge(1, 0), CrawlEdge(0, 0)]


def test_result_stats():
    graph = GraphAssembler()
    graph.add_node("Home", "http://a.com/", 0)
    graph.add_node("About", "http://a.com/about", 1)
    graph.link(1, "http://a.com/")
    result = graph.result(crawled=7)
    assert result.stats.pages == 2
    assert result.stats.links == 1
    assert result.stats.crawled == 7
    assert result.to_dict() == {
        "nodes": [
            {"title": "Home", "url": "http://a.com/", "meta": {"depth": 0}},
            {"title": "About", "url": "http://a.com/about", "meta": {"depth": 1}},
        ],
        "edges": [{"source": 1, "target": 0, "type": "link"}],
        "stats": {"pages": 2, "links": 1, "crawled": 7},
    }


def test_forward_edges_resolved_at_the_end():
    graph = GraphAssembler(forward_edges=True)
    home = graph.add_node("Home", "http://a.com/", 0)
    assert graph.link(home, "http://a.com/about") is None
    graph.link(home, "http://a.com/never-fetched")
    graph.add_node("About", "http://a.com/about", 1)

    result = graph.result(crawled=3)
    assert result.edges == [CrawlEdge(0, 1)]


def test_forward_links_ignored_by_default():
    graph = GraphAssembler()
    home = graph.add_node("Home", "http://a.com/", 0)
    graph.link(home, "http://a.com/about")
    graph.add_node("About", "http://a.com/about", 1)
    assert graph.result(crawled=2).edges == []
