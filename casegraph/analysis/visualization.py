"""Render-ready node/link payload built from the graph model."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

from casegraph.config import CONFIG, EDGE_WIDTHS, NODE_SIZE_RANGE
from casegraph.models import BasicMetrics, Edge, Graph, Node, VisualizationData
from casegraph.utils import safe_ratio


class VisualizationDataPreparer:
    """Map nodes and edges to sizes and colours for a force-directed renderer.

    Each instance keeps its own read-only copy of the colour tables, so
    per-request overrides never leak into other analyses.
    """

    def __init__(
        self,
        node_type_colors: Optional[Mapping[str, str]] = None,
        relationship_colors: Optional[Mapping[str, str]] = None,
        default_node_color: Optional[str] = None,
        default_edge_color: Optional[str] = None,
        size_range=NODE_SIZE_RANGE,
    ):
        self.node_type_colors = MappingProxyType(
            dict(CONFIG["NODE_TYPE_COLORS"] if node_type_colors is None else node_type_colors)
        )
        self.relationship_colors = MappingProxyType(
            dict(CONFIG["RELATIONSHIP_COLORS"] if relationship_colors is None else relationship_colors)
        )
        self.default_node_color = default_node_color or CONFIG["DEFAULT_NODE_COLOR"]
        self.default_edge_color = default_edge_color or CONFIG["DEFAULT_EDGE_COLOR"]
        self.min_size, self.max_size = size_range

    def node_color(self, node_type: str) -> str:
        return self.node_type_colors.get(node_type, self.default_node_color)

    def edge_color(self, edge_type: str) -> str:
        return self.relationship_colors.get(edge_type, self.default_edge_color)

    def node_size(self, degree: int, max_degree: int) -> float:
        if max_degree <= 0:
            return float(self.min_size)
        return self.min_size + (self.max_size - self.min_size) * safe_ratio(degree, max_degree)

    @staticmethod
    def edge_width(strength: str) -> int:
        return EDGE_WIDTHS.get(strength, EDGE_WIDTHS["medium"])

    def _node_payload(
        self,
        node: Node,
        max_degree: int,
        include_positions: bool,
        community: Optional[int],
    ) -> Dict[str, Any]:
        position = node.position or {}
        pinned = bool(position.get("x") or position.get("y"))
        payload = {
            "id": node.id,
            "name": node.name,
            "type": node.type,
            "degree": node.degree,
            "size": self.node_size(node.degree, max_degree),
            "color": self.node_color(node.type),
            "x": position.get("x") if include_positions else None,
            "y": position.get("y") if include_positions else None,
            "fx": position.get("x") if pinned else None,
            "fy": position.get("y") if pinned else None,
        }
        if community is not None:
            payload["community"] = community
        return payload

    def _link_payload(self, edge: Edge, include_weights: bool) -> Dict[str, Any]:
        return {
            "id": edge.id,
            "source": edge.source,
            "target": edge.target,
            "type": edge.type,
            "strength": edge.strength,
            "weight": edge.weight if include_weights else 1,
            "color": self.edge_color(edge.type),
            "stroke_width": self.edge_width(edge.strength),
        }

    def prepare(
        self,
        graph: Graph,
        basic: BasicMetrics,
        include_positions: bool = True,
        include_weights: bool = True,
        communities: Optional[List[List[Any]]] = None,
    ) -> VisualizationData:
        membership: Dict[Any, int] = {}
        for idx, community in enumerate(communities or []):
            for node_id in community:
                membership[node_id] = idx

        nodes = [
            self._node_payload(node, basic.max_degree, include_positions, membership.get(node.id))
            for node in graph.nodes.values()
        ]
        links = [self._link_payload(edge, include_weights) for edge in graph.edges]
        return VisualizationData(
            nodes=nodes,
            links=links,
            metadata={
                "node_count": len(nodes),
                "link_count": len(links),
                "node_types": list(graph.node_types),
                "edge_types": list(graph.edge_types),
            },
        )
