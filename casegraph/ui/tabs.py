"""Main tab area: metrics, network view and export."""

from __future__ import annotations

import json

import plotly.express as px
import streamlit as st
import streamlit.components.v1 as components

from casegraph.config import CONFIG, GRAPH_CANVAS_HEIGHT
from casegraph.data_processing import export_analysis, filter_visualization
from casegraph.ui.frames import centrality_frame, community_frame, component_frame, health_factor_frame
from casegraph.ui.sidebar import SidebarState
from casegraph.utils import slugify_filename
from casegraph.visualizer import build_network

_PRIORITY_ICONS = {"high": "🔴", "medium": "🟠", "info": "🔵"}


def _render_overview(state: SidebarState) -> None:
    result = state.result
    basic = result.basic_metrics
    health = result.network_health_score
    paths = result.path_analysis

    cols = st.columns(5)
    cols[0].metric("Entities", basic.node_count)
    cols[1].metric("Relationships", basic.edge_count)
    cols[2].metric("Density", f"{basic.density:.3f}")
    cols[3].metric("Components", paths.component_count)
    cols[4].metric("Health", f"{health.score}/{health.max_score}", health.grade)

    factor_df = health_factor_frame(result)
    fig = px.bar(factor_df, x="Factor", y="Points", range_y=[0, 25], color="Factor", title="Health factors")
    st.plotly_chart(fig, use_container_width=True)
    for hint in health.recommendations:
        st.caption(f"{hint['factor'].title()}: {hint['message']} ({hint['impact']})")

    st.subheader("Recommendations")
    for rec in result.recommendations:
        with st.expander(f"{_PRIORITY_ICONS.get(rec['priority'], '')} {rec['title']}"):
            st.write(rec["description"])
            st.write(f"**Action:** {rec['action']}")
            for key in ("affected_nodes", "nodes"):
                if rec.get(key):
                    st.dataframe(rec[key], use_container_width=True)

    if result.validation.warnings:
        st.subheader("Validation")
        for warning in result.validation.warnings:
            st.warning(warning)


def _render_network(state: SidebarState) -> None:
    payload = filter_visualization(
        state.result.visualization_data,
        node_types=state.node_types,
        edge_types=state.edge_types,
        min_degree=state.min_degree,
        max_nodes=int(state.max_nodes),
    )
    total = state.result.visualization_data.metadata["node_count"]
    if payload.metadata["node_count"] < total:
        st.info(f"Showing {payload.metadata['node_count']} of {total} entities.")
    if not payload.nodes:
        st.info("No entities match the current filters.")
        return
    net = build_network(payload, color_by_community=state.color_by_community, show_labels=state.show_labels)
    components.html(net.generate_html(), height=GRAPH_CANVAS_HEIGHT + 20, scrolling=False)

    legend = " ".join(
        f"<span style='color:{CONFIG['NODE_TYPE_COLORS'].get(t, CONFIG['DEFAULT_NODE_COLOR'])}'>●</span> {t}"
        for t in payload.metadata["node_types"]
    )
    st.markdown(legend, unsafe_allow_html=True)


def _render_structure(state: SidebarState) -> None:
    result = state.result
    st.subheader("Centrality")
    df = centrality_frame(result)
    st.dataframe(df, use_container_width=True)
    st.download_button(
        "Download centrality as CSV",
        data=df.to_csv(index=False).encode("utf-8"),
        file_name="centrality.csv",
        mime="text/csv",
    )
    overall = result.centrality_metrics.top_central_nodes["overall"]
    if overall:
        st.write("**Most central entities:** " + ", ".join(str(n["name"]) for n in overall))

    clustering = result.clustering_metrics
    cols = st.columns(3)
    cols[0].metric("Global clustering", f"{clustering.global_clustering:.3f}")
    cols[1].metric("Transitivity", f"{clustering.transitivity:.3f}")
    cols[2].metric("Triangles", clustering.triangle_count)

    communities = result.community_detection
    st.subheader(f"Communities ({communities.community_count}, modularity {communities.modularity:.3f})")
    st.dataframe(community_frame(result), use_container_width=True)

    paths = result.path_analysis
    st.subheader("Paths")
    cols = st.columns(3)
    cols[0].metric("Diameter", paths.diameter)
    cols[1].metric("Average path length", f"{paths.avg_path_length:.2f}")
    cols[2].metric("Largest component", paths.largest_component_size)
    st.dataframe(component_frame(result), use_container_width=True)


def render_tabs(state: SidebarState) -> None:
    if state.result is None:
        st.info("No folder loaded.")
        return

    tabs = st.tabs(["Overview", "Network", "Structure", "Export"])
    with tabs[0]:
        _render_overview(state)
    with tabs[1]:
        _render_network(state)
    with tabs[2]:
        _render_structure(state)
    with tabs[3]:
        exported = export_analysis(state.result)
        st.json(exported["analysis"]["summary"])
        st.download_button(
            "Download analysis as JSON",
            data=json.dumps(exported, default=str, indent=2).encode("utf-8"),
            file_name=f"{slugify_filename(state.folder_name)}-analysis.json",
            mime="application/json",
        )
