"""Structural suggestions for the investigator."""

from __future__ import annotations

from typing import Any, Dict, List

from casegraph.analysis.metrics import graph_density
from casegraph.config import HIGH_DEGREE_RATIO, LOW_DENSITY_MIN_NODES, LOW_DENSITY_THRESHOLD, TOP_N
from casegraph.models import BasicMetrics, Graph, PathAnalysis
from casegraph.utils import round_metric


def empty_graph_recommendation() -> Dict[str, Any]:
    return {
        "type": "empty_graph",
        "priority": "high",
        "title": "Empty graph",
        "description": "No entities in this folder",
        "action": "Start by adding entities to analyze",
    }


def generate_recommendations(
    graph: Graph,
    basic: BasicMetrics,
    paths: PathAnalysis,
) -> List[Dict[str, Any]]:
    recommendations: List[Dict[str, Any]] = []
    node_count = graph.node_count

    if basic.isolated_nodes:
        recommendations.append(
            {
                "type": "isolated_nodes",
                "priority": "high",
                "title": "Isolated nodes detected",
                "description": f"{len(basic.isolated_nodes)} entity(ies) without any connection",
                "action": "Create relationships to connect these entities to the network",
                "affected_nodes": list(basic.isolated_nodes),
            }
        )

    density = graph_density(node_count, graph.edge_count)
    if density < LOW_DENSITY_THRESHOLD and node_count > LOW_DENSITY_MIN_NODES:
        recommendations.append(
            {
                "type": "low_density",
                "priority": "medium",
                "title": "Sparse network",
                "description": "The network could reveal more connections",
                "action": "Look for additional relationships between entities",
                "current_density": round_metric(density),
            }
        )

    if paths.component_count > 1:
        recommendations.append(
            {
                "type": "disconnected_components",
                "priority": "medium",
                "title": "Disconnected components",
                "description": f"{paths.component_count} separate groups of entities",
                "action": "Identify links between the different groups",
                "component_count": paths.component_count,
            }
        )

    hubs = sorted(
        (node for node in graph.nodes.values() if node.degree > node_count * HIGH_DEGREE_RATIO),
        key=lambda node: node.degree,
        reverse=True,
    )
    if hubs:
        recommendations.append(
            {
                "type": "high_degree_nodes",
                "priority": "info",
                "title": "Central nodes identified",
                "description": "Highly connected entities (key points)",
                "action": "Check how important these entities are to the investigation",
                "nodes": [{"id": n.id, "name": n.name, "degree": n.degree} for n in hubs[:TOP_N]],
            }
        )

    return recommendations
