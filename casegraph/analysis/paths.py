"""Shortest-path distances and connectivity.

Distances are hop counts from a breadth-first search started at every node,
so the whole matrix costs O(N * (N + E)). That is fine for investigation
folders of a few thousand entities; larger inputs should be bounded by the
caller before analysis.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import networkx as nx

from casegraph.analysis.builder import to_networkx
from casegraph.models import Graph, PathAnalysis
from casegraph.utils import profile_time, round_metric, safe_mean, sorted_ids


class PathAnalyzer:
    def __init__(self, graph: Graph, nx_graph: Optional[nx.Graph] = None):
        self.graph = graph
        self.nx_graph = nx_graph if nx_graph is not None else to_networkx(graph)
        self._distances: Optional[Dict[Any, Dict[Any, int]]] = None
        self._components: Optional[List[List[Any]]] = None

    @property
    def distances(self) -> Dict[Any, Dict[Any, int]]:
        """Reachable hop counts per source node, including the source itself at 0."""
        if self._distances is None:
            self._distances = self._compute_distances()
        return self._distances

    @profile_time
    def _compute_distances(self) -> Dict[Any, Dict[Any, int]]:
        return {
            source: dict(lengths)
            for source, lengths in nx.all_pairs_shortest_path_length(self.nx_graph)
        }

    def connected_components(self) -> List[List[Any]]:
        """Components ordered by size, largest first; ties keep discovery order."""
        if self._components is None:
            components = [sorted_ids(c) for c in nx.connected_components(self.nx_graph)]
            components.sort(key=len, reverse=True)
            self._components = components
        return self._components

    def pair_distances(self) -> List[int]:
        """Finite distances over unordered pairs of distinct nodes."""
        order = {node_id: idx for idx, node_id in enumerate(self.graph.nodes)}
        values: List[int] = []
        for source, lengths in self.distances.items():
            source_idx = order[source]
            for target, distance in lengths.items():
                if order[target] > source_idx:
                    values.append(distance)
        return values

    def analyze(self) -> PathAnalysis:
        values = self.pair_distances()
        components = self.connected_components()
        diameter = max(values) if values else 0

        logging.debug(
            "Path analysis: %d reachable pairs, %d component(s)", len(values), len(components)
        )
        return PathAnalysis(
            diameter=diameter,
            avg_path_length=round_metric(safe_mean(values), 2),
            max_distance=diameter,
            is_connected=len(components) == 1,
            component_count=len(components),
            largest_component_size=len(components[0]) if components else 0,
            components=[
                {"id": idx, "size": len(component), "nodes": component}
                for idx, component in enumerate(components)
            ],
        )
