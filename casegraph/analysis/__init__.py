"""Graph analysis engine for investigation folders."""

from casegraph.analysis.orchestrator import AnalysisState, GraphAnalysisOrchestrator, analyze_graph

__all__ = ["AnalysisState", "GraphAnalysisOrchestrator", "analyze_graph"]
