"""Sidebar: folder export upload and view options."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import streamlit as st

from casegraph.analysis import analyze_graph
from casegraph.analysis.communities import GREEDY_NEIGHBOR, LOUVAIN
from casegraph.config import MAX_ANALYSIS_NODES
from casegraph.data_processing import ensure_within_limit, load_folder_export
from casegraph.exceptions import GraphAnalysisError
from casegraph.models import AnalysisResult


@dataclass
class SidebarState:
    result: Optional[AnalysisResult] = None
    folder_name: str = ""
    node_types: List[str] = field(default_factory=list)
    edge_types: List[str] = field(default_factory=list)
    min_degree: int = 0
    max_nodes: int = 0
    color_by_community: bool = False
    show_labels: bool = True


@st.cache_data(show_spinner=False)
def _cached_analysis(content: bytes, community_method: str) -> AnalysisResult:
    entities, relationships = load_folder_export(content)
    ensure_within_limit(entities, MAX_ANALYSIS_NODES)
    return analyze_graph(entities, relationships, {"community_method": community_method})


def render_sidebar() -> SidebarState:
    state = SidebarState()
    with st.sidebar:
        st.header("Folder")
        uploaded = st.file_uploader("Folder export (JSON)", type=["json"])
        community_label = st.selectbox(
            "Community detection",
            ["Greedy neighbour clustering", "Louvain (modularity)"],
        )
        community_method = LOUVAIN if community_label.startswith("Louvain") else GREEDY_NEIGHBOR

        if uploaded is None:
            st.info("Upload a folder export with 'entities' and 'relationships'.")
            return state

        state.folder_name = uploaded.name
        try:
            with st.spinner("Analyzing graph..."):
                state.result = _cached_analysis(uploaded.getvalue(), community_method)
        except GraphAnalysisError as exc:
            logging.error("Analysis failed for %s: %s", uploaded.name, exc)
            st.error(str(exc))
            return state
        except ValueError as exc:
            st.error(f"Invalid folder export: {exc}")
            return state

        metadata = state.result.visualization_data.metadata
        st.header("Graph view")
        state.node_types = st.multiselect("Entity types", metadata["node_types"], default=metadata["node_types"])
        state.edge_types = st.multiselect(
            "Relationship types", metadata["edge_types"], default=metadata["edge_types"]
        )
        state.min_degree = st.slider(
            "Minimum degree", min_value=0, max_value=max(1, state.result.basic_metrics.max_degree), value=0
        )
        state.max_nodes = st.number_input("Render cap (0 = none)", min_value=0, value=0, step=50)
        state.color_by_community = st.checkbox("Colour by community", value=False)
        state.show_labels = st.checkbox("Show labels", value=True)
    return state
