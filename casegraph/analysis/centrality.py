"""Degree, closeness and betweenness centrality with top-node rankings."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import networkx as nx

from casegraph.analysis.paths import PathAnalyzer
from casegraph.config import TOP_N
from casegraph.models import CentralityMetrics, Graph
from casegraph.utils import profile_time, round_metric, safe_ratio

_METRIC_KEYS = (("degree", "by_degree"), ("closeness", "by_closeness"), ("betweenness", "by_betweenness"))


class CentralityEngine:
    def __init__(
        self,
        graph: Graph,
        paths: PathAnalyzer,
        top_n: int = TOP_N,
        betweenness_samples: Optional[int] = None,
    ):
        self.graph = graph
        self.paths = paths
        self.top_n = top_n
        self.betweenness_samples = betweenness_samples

    def degree_centrality(self) -> Dict[Any, float]:
        n = self.graph.node_count
        if n <= 1:
            return {node_id: 0.0 for node_id in self.graph.nodes}
        return {node_id: safe_ratio(node.degree, n - 1) for node_id, node in self.graph.nodes.items()}

    def closeness_centrality(self) -> Dict[Any, float]:
        centrality: Dict[Any, float] = {}
        distances = self.paths.distances
        for node_id in self.graph.nodes:
            reachable = distances.get(node_id, {})
            if len(reachable) > 1:
                centrality[node_id] = safe_ratio(len(reachable) - 1, sum(reachable.values()))
            else:
                centrality[node_id] = 0.0
        return centrality

    @profile_time
    def betweenness_centrality(self) -> Dict[Any, float]:
        """Brandes' algorithm, normalized by (N-1)(N-2)/2 unordered pairs.

        With ``betweenness_samples`` set below N, only that many pivot nodes
        are used and the result is an estimate.
        """
        G = self.paths.nx_graph
        n = G.number_of_nodes()
        if n <= 2:
            return {node_id: 0.0 for node_id in self.graph.nodes}
        k = self.betweenness_samples
        if k is not None and k < n:
            scores = nx.betweenness_centrality(G, k=k, normalized=True, seed=42)
        else:
            scores = nx.betweenness_centrality(G, normalized=True)
        return {node_id: float(scores.get(node_id, 0.0)) for node_id in self.graph.nodes}

    def top_nodes(self, values: Dict[Any, float], metric: str) -> List[Dict[str, Any]]:
        ranked = sorted(self.graph.nodes, key=lambda node_id: values.get(node_id, 0.0), reverse=True)
        return [
            {
                "id": node_id,
                "name": self.graph.name_of(node_id),
                "value": values.get(node_id, 0.0),
                "metric": metric,
            }
            for node_id in ranked[: self.top_n]
        ]

    def combine_top_nodes(self, top_lists: List[List[Dict[str, Any]]]) -> List[Dict[str, Any]]:
        """Sum inverse-rank scores across metrics and keep the best ``top_n``."""
        scores: Dict[Any, float] = {}
        for top_list in top_lists:
            size = len(top_list)
            for index, entry in enumerate(top_list):
                scores[entry["id"]] = scores.get(entry["id"], 0.0) + safe_ratio(size - index, size)
        ranked = sorted(scores.items(), key=lambda item: item[1], reverse=True)[: self.top_n]
        return [
            {
                "id": node_id,
                "name": self.graph.name_of(node_id) or "Unknown",
                "combined_score": round_metric(score),
            }
            for node_id, score in ranked
        ]

    def calculate(self) -> CentralityMetrics:
        values = {
            "degree": self.degree_centrality(),
            "closeness": self.closeness_centrality(),
            "betweenness": self.betweenness_centrality(),
        }
        top = {key: self.top_nodes(values[metric], metric) for metric, key in _METRIC_KEYS}
        top["overall"] = self.combine_top_nodes([top[key] for _, key in _METRIC_KEYS])
        return CentralityMetrics(
            degree_centrality=values["degree"],
            closeness_centrality=values["closeness"],
            betweenness_centrality=values["betweenness"],
            top_central_nodes=top,
        )
