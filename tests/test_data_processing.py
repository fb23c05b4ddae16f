"""Tests for folder loading, export and presentation slices."""

import json

import pytest

from casegraph.analysis import analyze_graph
from casegraph.config import ANALYSIS_VERSION
from casegraph.data_processing import (
    ANALYSIS_SECTIONS,
    ensure_within_limit,
    export_analysis,
    filter_visualization,
    load_folder_export,
    slice_analysis,
)
from casegraph.exceptions import GraphTooLargeError


@pytest.fixture
def mixed_result(mixed_records):
    return analyze_graph(*mixed_records)


class TestLoadFolderExport:
    def test_valid(self, mixed_records):
        entities, relationships = mixed_records
        content = json.dumps({"entities": entities, "relationships": relationships})
        loaded = load_folder_export(content)
        assert loaded == (entities, relationships)

    def test_missing_keys_are_empty(self):
        assert load_folder_export("{}") == ([], [])

    @pytest.mark.parametrize("content", ["[]", '{"entities": {}}', "not json"])
    def test_invalid(self, content):
        with pytest.raises(ValueError):
            load_folder_export(content)

    @pytest.mark.parametrize(
        "content",
        [
            '{"entities": [{"id": 1}], "relationships": [5]}',
            '{"entities": ["a"], "relationships": []}',
            '{"entities": [{"id": 1}, null]}',
        ],
    )
    def test_non_object_records_rejected(self, content):
        with pytest.raises(ValueError, match="not JSON objects"):
            load_folder_export(content)

    def test_bytes_are_decoded(self):
        payload = json.dumps({"entities": [{"id": 1, "name": "Zo\u00eb"}]}).encode("utf-8")
        entities, relationships = load_folder_export(payload)
        assert entities == [{"id": 1, "name": "Zo\u00eb"}]
        assert relationships == []

    def test_non_utf8_bytes_rejected(self):
        with pytest.raises(ValueError, match="UTF-8"):
            load_folder_export(b'{"entities": [{"name": "\xff\xfe"}]}')


class TestEnsureWithinLimit:
    def test_over_limit(self):
        with pytest.raises(GraphTooLargeError) as excinfo:
            ensure_within_limit([1, 2, 3], limit=2)
        assert excinfo.value.node_count == 3
        assert excinfo.value.limit == 2

    def test_within_limit(self):
        ensure_within_limit([1, 2], limit=2)

    def test_zero_disables(self):
        ensure_within_limit(list(range(10)), limit=0)


class TestExportAnalysis:
    def test_envelope(self, mixed_result):
        exported = export_analysis(mixed_result)
        assert exported["version"] == ANALYSIS_VERSION
        assert exported["timestamp"]
        summary = exported["analysis"]["summary"]
        assert summary == {
            "node_count": 6,
            "edge_count": 7,
            "density": 0.467,
            "health_score": 90,
            "health_grade": "A+",
        }
        assert exported["analysis"]["recommendations"] == exported["analysis"]["metrics"]["recommendations"]
        json.dumps(exported, default=str)

    def test_slice(self, mixed_result):
        assert slice_analysis(mixed_result, "path_analysis")["component_count"] == 1
        assert set(ANALYSIS_SECTIONS) == set(mixed_result.to_dict())

    def test_unknown_slice(self, mixed_result):
        with pytest.raises(KeyError):
            slice_analysis(mixed_result, "sentiment")


class TestFilterVisualization:
    def test_no_filters_keeps_everything(self, mixed_result):
        payload = filter_visualization(mixed_result.visualization_data)
        assert payload.metadata["node_count"] == 6
        assert payload.metadata["link_count"] == 7

    def test_node_type_filter_drops_dangling_links(self, mixed_result):
        payload = filter_visualization(mixed_result.visualization_data, node_types=["person", "organization"])
        assert {node["id"] for node in payload.nodes} == {"p1", "p2", "o1"}
        assert {link["id"] for link in payload.links} == {"r1", "r2", "r3"}
        assert payload.metadata["node_types"] == ["person", "organization"]

    def test_edge_type_filter(self, mixed_result):
        payload = filter_visualization(mixed_result.visualization_data, edge_types=["financial"])
        assert payload.metadata["node_count"] == 6
        assert {link["id"] for link in payload.links} == {"r4", "r5"}

    def test_min_degree(self, star_records):
        result = analyze_graph(*star_records)
        payload = filter_visualization(result.visualization_data, min_degree=1)
        assert 99 not in {node["id"] for node in payload.nodes}

    def test_render_cap_prefers_degree(self, star_records):
        result = analyze_graph(*star_records)
        payload = filter_visualization(result.visualization_data, max_nodes=2)
        assert [node["id"] for node in payload.nodes] == [0, 1]
        assert payload.metadata["link_count"] == 1

    def test_render_cap_keeps_protected(self, star_records):
        result = analyze_graph(*star_records)
        payload = filter_visualization(result.visualization_data, max_nodes=2, protected_nodes=[99])
        assert {node["id"] for node in payload.nodes} == {0, 99}

    def test_source_payload_untouched(self, mixed_result):
        before = len(mixed_result.visualization_data.nodes)
        filtered = filter_visualization(mixed_result.visualization_data, max_nodes=1)
        filtered.nodes[0]["name"] = "changed"
        assert len(mixed_result.visualization_data.nodes) == before
        assert "changed" not in {node["name"] for node in mixed_result.visualization_data.nodes}
