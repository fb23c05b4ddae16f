"""Tabular views of an analysis result for the dashboard."""

from __future__ import annotations

import pandas as pd

from casegraph.analysis.health import FACTOR_MAX
from casegraph.models import AnalysisResult


def centrality_frame(result: AnalysisResult) -> pd.DataFrame:
    centrality = result.centrality_metrics
    clustering = result.clustering_metrics.local_clustering
    rows = [
        {
            "Node ID": node["id"],
            "Name": node["name"],
            "Type": node["type"],
            "Degree": node["degree"],
            "degree": centrality.degree_centrality.get(node["id"], 0.0),
            "closeness": centrality.closeness_centrality.get(node["id"], 0.0),
            "betweenness": centrality.betweenness_centrality.get(node["id"], 0.0),
            "clustering": clustering.get(node["id"], 0.0),
        }
        for node in result.visualization_data.nodes
    ]
    columns = ["Node ID", "Name", "Type", "Degree", "degree", "closeness", "betweenness", "clustering"]
    df = pd.DataFrame(rows, columns=columns)
    return df.sort_values("degree", ascending=False, kind="stable").reset_index(drop=True)


def health_factor_frame(result: AnalysisResult) -> pd.DataFrame:
    factors = result.network_health_score.factors
    return pd.DataFrame(
        [{"Factor": name.title(), "Points": points, "Max": FACTOR_MAX} for name, points in factors.items()]
    )


def community_frame(result: AnalysisResult) -> pd.DataFrame:
    rows = [
        {
            "Community": stat["id"],
            "Size": stat["size"],
            "Members": ", ".join(str(member["name"]) for member in stat["nodes"]),
        }
        for stat in result.community_detection.community_stats
    ]
    return pd.DataFrame(rows, columns=["Community", "Size", "Members"])


def component_frame(result: AnalysisResult) -> pd.DataFrame:
    rows = [
        {"Component": comp["id"], "Size": comp["size"], "Nodes": ", ".join(str(n) for n in comp["nodes"][:10])}
        for comp in result.path_analysis.components
    ]
    return pd.DataFrame(rows, columns=["Component", "Size", "Nodes"])
