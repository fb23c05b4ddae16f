"""Community partitioning and modularity.

The default method is greedy neighbour clustering: a single pass in id order
where each unassigned node opens a community and pulls in its unassigned
direct neighbours. It is cheap (O(N + E)) and total, but it does not optimize
modularity. ``method="louvain"`` runs networkx's Louvain implementation
instead when partition quality matters more than speed.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Set

import networkx as nx

from casegraph.analysis.builder import to_networkx
from casegraph.models import CommunityDetection, Graph
from casegraph.utils import round_metric, sorted_ids

GREEDY_NEIGHBOR = "greedy_neighbor"
LOUVAIN = "louvain"


def greedy_neighbor_communities(graph: Graph) -> List[List[Any]]:
    communities: List[List[Any]] = []
    assigned: Set[Any] = set()
    for node_id in sorted_ids(graph.nodes):
        if node_id in assigned:
            continue
        community = [node_id]
        assigned.add(node_id)
        for neighbor in sorted_ids(graph.neighbors(node_id)):
            if neighbor not in assigned:
                community.append(neighbor)
                assigned.add(neighbor)
        communities.append(community)
    return communities


def louvain_communities(graph: Graph, nx_graph: Optional[nx.Graph] = None, seed: int = 0) -> List[List[Any]]:
    G = nx_graph if nx_graph is not None else to_networkx(graph)
    groups = nx.community.louvain_communities(G, seed=seed)
    order = {node_id: idx for idx, node_id in enumerate(sorted_ids(graph.nodes))}
    communities = [sorted_ids(group) for group in groups]
    communities.sort(key=lambda c: (-len(c), order[c[0]]))
    return communities


def modularity(graph: Graph, communities: List[List[Any]]) -> float:
    """Sum over communities of internal/m - (total_degree^2)/(4m^2)."""
    m = graph.edge_count
    if m == 0:
        return 0.0

    membership: Dict[Any, int] = {}
    for idx, community in enumerate(communities):
        for node_id in community:
            membership[node_id] = idx

    internal = [0] * len(communities)
    for edge in graph.edges:
        source_idx = membership.get(edge.source)
        if source_idx is not None and source_idx == membership.get(edge.target):
            internal[source_idx] += 1

    score = 0.0
    for idx, community in enumerate(communities):
        total_degree = sum(graph.nodes[node_id].degree for node_id in community)
        score += internal[idx] / m - (total_degree * total_degree) / (4 * m * m)
    return score


def detect_communities(
    graph: Graph,
    method: str = GREEDY_NEIGHBOR,
    nx_graph: Optional[nx.Graph] = None,
) -> CommunityDetection:
    if method == LOUVAIN:
        communities = louvain_communities(graph, nx_graph)
    elif method == GREEDY_NEIGHBOR:
        communities = greedy_neighbor_communities(graph)
    else:
        raise ValueError(f"Unknown community detection method: {method}")

    logging.debug("Detected %d communities using %s", len(communities), method)
    return CommunityDetection(
        communities=communities,
        community_count=len(communities),
        modularity=round_metric(modularity(graph, communities)),
        community_stats=[
            {
                "id": idx,
                "size": len(community),
                "nodes": [{"id": node_id, "name": graph.name_of(node_id)} for node_id in community],
            }
            for idx, community in enumerate(communities)
        ],
        method=method,
    )
