"""Local and global clustering, triangle count and transitivity.

Both the per-node coefficients and transitivity are derived from a single
call to :func:`neighbor_links`, so the reported numbers cannot drift apart.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import networkx as nx

from casegraph.analysis.builder import to_networkx
from casegraph.models import ClusteringMetrics, Graph
from casegraph.utils import round_metric, safe_mean, safe_ratio


def neighbor_links(nx_graph: nx.Graph) -> Dict[Any, int]:
    """Number of edges among each node's neighbours (triangles through the node)."""
    return dict(nx.triangles(nx_graph))


def calculate_clustering_metrics(graph: Graph, nx_graph: Optional[nx.Graph] = None) -> ClusteringMetrics:
    G = nx_graph if nx_graph is not None else to_networkx(graph)
    links = neighbor_links(G)

    local: Dict[Any, float] = {}
    eligible = []
    triplets = 0
    for node_id in graph.nodes:
        k = len(graph.neighbors(node_id))
        if k < 2:
            local[node_id] = 0.0
            continue
        possible = k * (k - 1) / 2
        local[node_id] = safe_ratio(links.get(node_id, 0), possible)
        eligible.append(local[node_id])
        triplets += possible

    link_total = sum(links.get(node_id, 0) for node_id in graph.nodes)
    triangle_count = link_total // 3

    return ClusteringMetrics(
        local_clustering=local,
        global_clustering=round_metric(safe_mean(eligible)),
        triangle_count=triangle_count,
        transitivity=safe_ratio(3 * triangle_count, triplets),
    )
