"""Folder export loading, analysis export and presentation slices.

Everything here works on an already computed :class:`AnalysisResult`; slicing
or filtering never re-runs the analysis.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set, Tuple, Union

from casegraph.config import ANALYSIS_VERSION, MAX_ANALYSIS_NODES
from casegraph.exceptions import GraphTooLargeError
from casegraph.models import AnalysisResult, VisualizationData

ANALYSIS_SECTIONS = (
    "basic_metrics",
    "centrality_metrics",
    "clustering_metrics",
    "community_detection",
    "path_analysis",
    "network_health_score",
    "recommendations",
    "visualization_data",
    "validation",
)


def load_folder_export(content: Union[str, bytes]) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]:
    """Parse a JSON folder export into (entities, relationships).

    Accepts ``{"entities": [...], "relationships": [...]}``; a missing key is
    treated as an empty collection. Raw upload bytes must be UTF-8.
    """
    if isinstance(content, bytes):
        try:
            content = content.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ValueError(f"Folder export is not valid UTF-8: {exc}") from exc
    payload = json.loads(content)
    if not isinstance(payload, dict):
        raise ValueError("Folder export must be a JSON object with 'entities' and 'relationships'")
    entities = payload.get("entities") or []
    relationships = payload.get("relationships") or []
    if not isinstance(entities, list) or not isinstance(relationships, list):
        raise ValueError("'entities' and 'relationships' must be JSON arrays")
    for label, records in (("entities", entities), ("relationships", relationships)):
        bad = [idx for idx, record in enumerate(records) if not isinstance(record, dict)]
        if bad:
            raise ValueError(f"{label} record(s) at index {bad[:5]} are not JSON objects")
    logging.info("Loaded folder export: %d entities, %d relationships", len(entities), len(relationships))
    return entities, relationships


def ensure_within_limit(entities: Sequence[Any], limit: int = MAX_ANALYSIS_NODES) -> None:
    if limit > 0 and len(entities) > limit:
        raise GraphTooLargeError(len(entities), limit)


def export_analysis(result: AnalysisResult, version: str = ANALYSIS_VERSION) -> Dict[str, Any]:
    metrics = result.to_dict()
    return {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": version,
        "analysis": {
            "summary": {
                "node_count": result.basic_metrics.node_count,
                "edge_count": result.basic_metrics.edge_count,
                "density": result.basic_metrics.density,
                "health_score": result.network_health_score.score,
                "health_grade": result.network_health_score.grade,
            },
            "metrics": metrics,
            "recommendations": metrics["recommendations"],
        },
    }


def slice_analysis(result: AnalysisResult, section: str) -> Any:
    if section not in ANALYSIS_SECTIONS:
        raise KeyError(f"Unknown analysis section: {section}")
    return result.to_dict()[section]


def filter_visualization(
    payload: VisualizationData,
    node_types: Optional[Iterable[str]] = None,
    edge_types: Optional[Iterable[str]] = None,
    min_degree: int = 0,
    max_nodes: int = 0,
    protected_nodes: Optional[Iterable[Any]] = None,
) -> VisualizationData:
    """Subset of the payload for display.

    When ``max_nodes`` is positive the highest-degree nodes are kept, with
    ``protected_nodes`` always taking priority. Links survive only when both
    endpoints do.
    """
    type_set = set(node_types) if node_types is not None else None
    edge_type_set = set(edge_types) if edge_types is not None else None

    candidates = [
        node
        for node in payload.nodes
        if (type_set is None or node["type"] in type_set) and node["degree"] >= min_degree
    ]

    if max_nodes > 0 and len(candidates) > max_nodes:
        protected = set(protected_nodes or [])
        ranked = sorted(
            enumerate(candidates),
            key=lambda item: (item[1]["id"] not in protected, -item[1]["degree"], item[0]),
        )
        keep_ids = {node["id"] for _, node in ranked[:max_nodes]}
        logging.info("Render cap applied: showing %d of %d nodes", len(keep_ids), len(candidates))
        candidates = [node for node in candidates if node["id"] in keep_ids]

    kept: Set[Any] = {node["id"] for node in candidates}
    links = [
        link
        for link in payload.links
        if link["source"] in kept
        and link["target"] in kept
        and (edge_type_set is None or link["type"] in edge_type_set)
    ]

    return VisualizationData(
        nodes=[dict(node) for node in candidates],
        links=[dict(link) for link in links],
        metadata={
            "node_count": len(candidates),
            "link_count": len(links),
            "node_types": list(dict.fromkeys(node["type"] for node in candidates)),
            "edge_types": list(dict.fromkeys(link["type"] for link in links)),
        },
    )
