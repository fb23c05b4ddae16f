"""Data models for the investigation graph and its analysis result."""

from __future__ import annotations

import json
from collections import Counter
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Set


@dataclass
class Node:
    id: Any
    name: str
    type: str
    attributes: Dict[str, Any] = field(default_factory=dict)
    degree: int = 0
    in_degree: int = 0
    out_degree: int = 0
    strength: int = 0
    position: Optional[Dict[str, float]] = None


@dataclass
class Edge:
    id: Any
    source: Any
    target: Any
    type: str
    strength: str = "medium"
    weight: int = 2
    description: Optional[str] = None


@dataclass
class Graph:
    nodes: Dict[Any, Node] = field(default_factory=dict)
    edges: List[Edge] = field(default_factory=list)
    adjacency: Dict[Any, Set[Any]] = field(default_factory=dict)
    node_types: Counter = field(default_factory=Counter)
    edge_types: Counter = field(default_factory=Counter)

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def neighbors(self, node_id: Any) -> Set[Any]:
        return self.adjacency.get(node_id, set())

    def name_of(self, node_id: Any) -> Optional[str]:
        node = self.nodes.get(node_id)
        return node.name if node else None


@dataclass
class ValidationReport:
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    stats: Dict[str, int] = field(default_factory=dict)


@dataclass
class BasicMetrics:
    node_count: int = 0
    edge_count: int = 0
    density: float = 0.0
    avg_degree: float = 0.0
    max_degree: int = 0
    min_degree: int = 0
    isolated_node_count: int = 0
    isolated_nodes: List[Dict[str, Any]] = field(default_factory=list)
    node_type_distribution: Dict[str, int] = field(default_factory=dict)
    edge_type_distribution: Dict[str, int] = field(default_factory=dict)


@dataclass
class CentralityMetrics:
    degree_centrality: Dict[Any, float] = field(default_factory=dict)
    closeness_centrality: Dict[Any, float] = field(default_factory=dict)
    betweenness_centrality: Dict[Any, float] = field(default_factory=dict)
    top_central_nodes: Dict[str, List[Dict[str, Any]]] = field(
        default_factory=lambda: {"by_degree": [], "by_closeness": [], "by_betweenness": [], "overall": []}
    )


@dataclass
class ClusteringMetrics:
    local_clustering: Dict[Any, float] = field(default_factory=dict)
    global_clustering: float = 0.0
    triangle_count: int = 0
    transitivity: float = 0.0


@dataclass
class CommunityDetection:
    communities: List[List[Any]] = field(default_factory=list)
    community_count: int = 0
    modularity: float = 0.0
    community_stats: List[Dict[str, Any]] = field(default_factory=list)
    method: str = "greedy_neighbor"


@dataclass
class PathAnalysis:
    diameter: int = 0
    avg_path_length: float = 0.0
    max_distance: int = 0
    is_connected: bool = False
    component_count: int = 0
    largest_component_size: int = 0
    components: List[Dict[str, Any]] = field(default_factory=list)


@dataclass
class HealthScore:
    score: int = 0
    max_score: int = 100
    percentage: int = 0
    grade: str = "F"
    factors: Dict[str, int] = field(
        default_factory=lambda: {"size": 0, "density": 0, "connectivity": 0, "diversity": 0}
    )
    recommendations: List[Dict[str, str]] = field(default_factory=list)


@dataclass
class VisualizationData:
    nodes: List[Dict[str, Any]] = field(default_factory=list)
    links: List[Dict[str, Any]] = field(default_factory=list)
    metadata: Dict[str, Any] = field(
        default_factory=lambda: {"node_count": 0, "link_count": 0, "node_types": [], "edge_types": []}
    )


@dataclass
class AnalysisResult:
    basic_metrics: BasicMetrics = field(default_factory=BasicMetrics)
    centrality_metrics: CentralityMetrics = field(default_factory=CentralityMetrics)
    clustering_metrics: ClusteringMetrics = field(default_factory=ClusteringMetrics)
    community_detection: CommunityDetection = field(default_factory=CommunityDetection)
    path_analysis: PathAnalysis = field(default_factory=PathAnalysis)
    network_health_score: HealthScore = field(default_factory=HealthScore)
    recommendations: List[Dict[str, Any]] = field(default_factory=list)
    visualization_data: VisualizationData = field(default_factory=VisualizationData)
    validation: ValidationReport = field(default_factory=ValidationReport)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_json(self, **kwargs: Any) -> str:
        return json.dumps(self.to_dict(), default=str, **kwargs)
