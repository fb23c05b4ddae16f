"""Tests for centrality metrics and top-node rankings."""

import pytest

from casegraph.analysis.builder import build_graph
from casegraph.analysis.centrality import CentralityEngine
from casegraph.analysis.paths import PathAnalyzer
from conftest import entity


def _engine(graph, **kwargs):
    return CentralityEngine(graph, PathAnalyzer(graph), **kwargs)


class TestCentralityEngine:
    def test_path_degree(self, path_graph):
        degree = _engine(path_graph).degree_centrality()
        assert degree == {"A": 0.5, "B": 1.0, "C": 0.5}

    def test_path_closeness(self, path_graph):
        closeness = _engine(path_graph).closeness_centrality()
        assert closeness["B"] == 1.0
        assert closeness["A"] == pytest.approx(2 / 3)

    def test_path_betweenness(self, path_graph):
        betweenness = _engine(path_graph).betweenness_centrality()
        assert betweenness["B"] == pytest.approx(1.0)
        assert betweenness["A"] == 0.0
        assert betweenness["C"] == 0.0

    def test_star_hub_has_full_betweenness(self, star_graph):
        betweenness = _engine(star_graph).betweenness_centrality()
        # 5 leaves -> 10 pairs through the hub; 6 connected of 7 nodes
        assert betweenness[0] == pytest.approx(10 / 15)

    def test_isolated_node_is_zero(self, star_graph):
        metrics = _engine(star_graph).calculate()
        assert metrics.degree_centrality[99] == 0.0
        assert metrics.closeness_centrality[99] == 0.0
        assert metrics.betweenness_centrality[99] == 0.0

    def test_values_bounded(self, mixed_graph):
        metrics = _engine(mixed_graph).calculate()
        for values in (
            metrics.degree_centrality,
            metrics.closeness_centrality,
            metrics.betweenness_centrality,
        ):
            assert set(values) == set(mixed_graph.nodes)
            assert all(0.0 <= v <= 1.0 for v in values.values())

    def test_single_node(self):
        graph = build_graph([entity(1)], [])
        metrics = _engine(graph).calculate()
        assert metrics.degree_centrality == {1: 0.0}
        assert metrics.betweenness_centrality == {1: 0.0}

    def test_sampled_betweenness_covers_all_nodes(self, mixed_graph):
        values = _engine(mixed_graph, betweenness_samples=3).betweenness_centrality()
        assert set(values) == set(mixed_graph.nodes)


class TestTopNodes:
    def test_rankings(self, path_graph):
        top = _engine(path_graph).calculate().top_central_nodes
        assert set(top) == {"by_degree", "by_closeness", "by_betweenness", "overall"}
        assert top["by_degree"][0]["id"] == "B"
        assert top["by_degree"][0]["metric"] == "degree"
        assert top["overall"][0] == {"id": "B", "name": "Entity B", "combined_score": 3.0}

    def test_top_n_limits_length(self, star_graph):
        top = _engine(star_graph, top_n=2).calculate().top_central_nodes
        assert all(len(entries) <= 2 for entries in top.values())

    def test_ties_keep_insertion_order(self, triangle_graph):
        top = _engine(triangle_graph).calculate().top_central_nodes
        assert [entry["id"] for entry in top["by_degree"]] == [1, 2, 3]
