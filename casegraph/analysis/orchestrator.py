"""Single entry point that sequences every analysis step."""

from __future__ import annotations

import enum
import logging
from typing import Any, Iterable, Mapping, Optional

from casegraph.analysis.builder import build_graph, to_networkx, validate_graph
from casegraph.analysis.centrality import CentralityEngine
from casegraph.analysis.clustering import calculate_clustering_metrics
from casegraph.analysis.communities import GREEDY_NEIGHBOR, detect_communities
from casegraph.analysis.health import calculate_health_score
from casegraph.analysis.metrics import calculate_basic_metrics
from casegraph.analysis.paths import PathAnalyzer
from casegraph.analysis.recommendations import empty_graph_recommendation, generate_recommendations
from casegraph.analysis.visualization import VisualizationDataPreparer
from casegraph.config import BETWEENNESS_SAMPLE_SIZE, TOP_N
from casegraph.models import AnalysisResult
from casegraph.utils import profile_time


class AnalysisState(enum.Enum):
    EMPTY = "empty"
    BUILT = "built"
    ANALYZED = "analyzed"
    DONE = "done"


class GraphAnalysisOrchestrator:
    """Run one analysis over a folder's entities and relationships.

    Options (all optional):

    - ``include_positions`` / ``include_weights``: visualization payload flags.
    - ``community_method``: ``"greedy_neighbor"`` (default) or ``"louvain"``.
    - ``top_n``: length of the central-node rankings.
    - ``betweenness_samples``: pivot count for approximate betweenness.
    - ``node_type_colors`` / ``relationship_colors``: colour overrides.

    A relationship that references a missing entity raises
    :class:`~casegraph.exceptions.GraphConstructionError` before any metric is
    computed.
    """

    def __init__(self, options: Optional[Mapping[str, Any]] = None):
        self.options = dict(options or {})
        self.state: Optional[AnalysisState] = None

    def _transition(self, state: AnalysisState) -> None:
        logging.debug("Graph analysis state: %s -> %s", self.state, state)
        self.state = state

    @staticmethod
    def empty_result() -> AnalysisResult:
        return AnalysisResult(recommendations=[empty_graph_recommendation()])

    @profile_time
    def analyze(
        self,
        entities: Iterable[Mapping[str, Any]],
        relationships: Iterable[Mapping[str, Any]],
    ) -> AnalysisResult:
        self.state = None
        entities = list(entities)
        relationships = list(relationships)
        logging.info(
            "Starting graph analysis: %d entities, %d relationships", len(entities), len(relationships)
        )

        if not entities:
            if relationships:
                logging.warning("Ignoring %d relationships without entities", len(relationships))
            self._transition(AnalysisState.EMPTY)
            result = self.empty_result()
            self._transition(AnalysisState.DONE)
            return result

        graph = build_graph(entities, relationships)
        self._transition(AnalysisState.BUILT)

        opts = self.options
        nx_graph = to_networkx(graph)
        validation = validate_graph(graph)
        basic = calculate_basic_metrics(graph)
        paths = PathAnalyzer(graph, nx_graph)
        path_analysis = paths.analyze()
        centrality = CentralityEngine(
            graph,
            paths,
            top_n=opts.get("top_n", TOP_N),
            betweenness_samples=opts.get("betweenness_samples", BETWEENNESS_SAMPLE_SIZE),
        ).calculate()
        clustering = calculate_clustering_metrics(graph, nx_graph)
        communities = detect_communities(
            graph, opts.get("community_method", GREEDY_NEIGHBOR), nx_graph
        )
        health = calculate_health_score(basic, path_analysis)
        recommendations = generate_recommendations(graph, basic, path_analysis)
        preparer = VisualizationDataPreparer(
            node_type_colors=opts.get("node_type_colors"),
            relationship_colors=opts.get("relationship_colors"),
        )
        visualization = preparer.prepare(
            graph,
            basic,
            include_positions=opts.get("include_positions", True),
            include_weights=opts.get("include_weights", True),
            communities=communities.communities,
        )
        self._transition(AnalysisState.ANALYZED)

        result = AnalysisResult(
            basic_metrics=basic,
            centrality_metrics=centrality,
            clustering_metrics=clustering,
            community_detection=communities,
            path_analysis=path_analysis,
            network_health_score=health,
            recommendations=recommendations,
            visualization_data=visualization,
            validation=validation,
        )
        self._transition(AnalysisState.DONE)
        logging.info(
            "Graph analysis completed: %d nodes, %d edges, health score %d (%s)",
            basic.node_count,
            basic.edge_count,
            health.score,
            health.grade,
        )
        return result


def analyze_graph(
    entities: Iterable[Mapping[str, Any]],
    relationships: Iterable[Mapping[str, Any]],
    options: Optional[Mapping[str, Any]] = None,
) -> AnalysisResult:
    return GraphAnalysisOrchestrator(options).analyze(entities, relationships)
