"""Size, density and degree statistics."""

from __future__ import annotations

from casegraph.models import BasicMetrics, Graph
from casegraph.utils import round_metric, safe_mean, safe_ratio


def graph_density(node_count: int, edge_count: int) -> float:
    """Edges over possible unordered pairs, capped at 1 for multigraphs."""
    if node_count <= 1:
        return 0.0
    return min(1.0, safe_ratio(edge_count, node_count * (node_count - 1) / 2))


def calculate_basic_metrics(graph: Graph) -> BasicMetrics:
    degrees = [node.degree for node in graph.nodes.values()]
    isolated = [node for node in graph.nodes.values() if node.degree == 0]

    return BasicMetrics(
        node_count=graph.node_count,
        edge_count=graph.edge_count,
        density=round_metric(graph_density(graph.node_count, graph.edge_count)),
        avg_degree=round_metric(safe_mean(degrees), 2),
        max_degree=max(degrees) if degrees else 0,
        min_degree=min(degrees) if degrees else 0,
        isolated_node_count=len(isolated),
        isolated_nodes=[{"id": node.id, "name": node.name} for node in isolated],
        node_type_distribution=dict(graph.node_types),
        edge_type_distribution=dict(graph.edge_types),
    )
