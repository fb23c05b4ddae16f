"""Tests for the visualization payload."""

import pytest

from casegraph.analysis.builder import build_graph
from casegraph.analysis.metrics import calculate_basic_metrics
from casegraph.analysis.visualization import VisualizationDataPreparer
from casegraph.config import CONFIG
from conftest import entity, relationship


def _prepare(graph, preparer=None, **kwargs):
    preparer = preparer or VisualizationDataPreparer()
    return preparer.prepare(graph, calculate_basic_metrics(graph), **kwargs)


class TestNodePayload:
    def test_sizes_scale_with_degree(self, path_graph):
        nodes = {node["id"]: node for node in _prepare(path_graph).nodes}
        assert nodes["B"]["size"] == 30
        assert nodes["A"]["size"] == 19

    def test_sizes_within_range(self, mixed_graph):
        assert all(8 <= node["size"] <= 30 for node in _prepare(mixed_graph).nodes)

    def test_all_isolated_get_min_size(self):
        payload = _prepare(build_graph([entity(1), entity(2)], []))
        assert [node["size"] for node in payload.nodes] == [8, 8]

    def test_colors(self):
        payload = _prepare(build_graph([entity(1, "person"), entity(2, "satellite")], []))
        assert payload.nodes[0]["color"] == "#ef4444"
        assert payload.nodes[1]["color"] == CONFIG["DEFAULT_NODE_COLOR"]

    def test_positions(self, mixed_graph):
        nodes = {node["id"]: node for node in _prepare(mixed_graph).nodes}
        assert (nodes["p1"]["x"], nodes["p1"]["y"]) == (10.0, 20.0)
        assert (nodes["p1"]["fx"], nodes["p1"]["fy"]) == (10.0, 20.0)
        assert nodes["p2"]["x"] is None
        assert nodes["p2"]["fx"] is None

    def test_positions_can_be_omitted(self, mixed_graph):
        nodes = {node["id"]: node for node in _prepare(mixed_graph, include_positions=False).nodes}
        assert nodes["p1"]["x"] is None
        assert nodes["p1"]["fx"] == 10.0

    def test_community_membership(self, two_pairs_graph):
        payload = _prepare(two_pairs_graph, communities=[[1, 2], [3, 4]])
        assert [node["community"] for node in payload.nodes] == [0, 0, 1, 1]

    def test_no_community_key_without_communities(self, path_graph):
        assert all("community" not in node for node in _prepare(path_graph).nodes)


class TestLinkPayload:
    def test_link_fields(self, star_graph):
        link = _prepare(star_graph).links[0]
        assert link["source"] == 0
        assert link["target"] == 1
        assert link["color"] == "#3b82f6"
        assert link["strength"] == "strong"
        assert link["weight"] == 3
        assert link["stroke_width"] == 3

    def test_weights_can_be_flattened(self, star_graph):
        assert {link["weight"] for link in _prepare(star_graph, include_weights=False).links} == {1}

    def test_unknown_relationship_type(self):
        graph = build_graph([entity(1), entity(2)], [relationship("r", 1, 2, "rival", "weak")])
        link = _prepare(graph).links[0]
        assert link["color"] == CONFIG["DEFAULT_EDGE_COLOR"]
        assert link["stroke_width"] == 1

    def test_metadata_counts(self, mixed_graph):
        payload = _prepare(mixed_graph)
        assert payload.metadata["node_count"] == len(payload.nodes) == 6
        assert payload.metadata["link_count"] == len(payload.links) == 7
        assert payload.metadata["edge_types"] == ["family", "professional", "financial", "connected"]


class TestColorOverrides:
    def test_override_does_not_leak(self, path_graph):
        custom = VisualizationDataPreparer(node_type_colors={"person": "#000000"})
        assert _prepare(path_graph, custom).nodes[0]["color"] == "#000000"
        assert _prepare(path_graph).nodes[0]["color"] == "#ef4444"
        assert CONFIG["NODE_TYPE_COLORS"]["person"] == "#ef4444"

    def test_empty_override_is_respected(self, path_graph):
        preparer = VisualizationDataPreparer(node_type_colors={}, relationship_colors={})
        payload = _prepare(path_graph, preparer)
        assert {node["color"] for node in payload.nodes} == {CONFIG["DEFAULT_NODE_COLOR"]}
        assert {link["color"] for link in payload.links} == {CONFIG["DEFAULT_EDGE_COLOR"]}

    def test_tables_are_read_only(self):
        preparer = VisualizationDataPreparer()
        with pytest.raises(TypeError):
            preparer.node_type_colors["person"] = "#000000"
