"""PyVis rendering of the visualization payload.

The analysis core only emits plain node/link dictionaries; layout and the
mutable physics state live in the browser-side vis.js network built here.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Tuple

from pyvis.network import Network

from casegraph.config import CONFIG, GRAPH_CANVAS_HEIGHT
from casegraph.models import VisualizationData

VIS_FONT_FACE = "IBM Plex Sans, Arial, sans-serif"


def _hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    hex_color = hex_color.lstrip("#")
    if len(hex_color) != 6:
        raise ValueError(f"Invalid hex color: {hex_color}")
    return tuple(int(hex_color[i : i + 2], 16) for i in (0, 2, 4))


def _rgb_to_hex(rgb: Tuple[int, int, int]) -> str:
    return "#{:02X}{:02X}{:02X}".format(*rgb)


def _blend_hex(color: str, target: str, ratio: float) -> str:
    ratio = max(0.0, min(1.0, ratio))
    src = _hex_to_rgb(color)
    dst = _hex_to_rgb(target)
    return _rgb_to_hex(tuple(round(a + (b - a) * ratio) for a, b in zip(src, dst)))


def _node_color(base: str) -> Dict[str, Any]:
    return {
        "background": base,
        "border": _blend_hex(base, "#1F2A37", 0.35),
        "highlight": {"background": _blend_hex(base, "#FFFFFF", 0.18), "border": _blend_hex(base, "#0F172A", 0.45)},
    }


def _hsl_to_hex(hue: float, saturation: float, lightness: float) -> str:
    def hue_to_rgb(p: float, q: float, t: float) -> float:
        t = t % 1.0
        if t < 1 / 6:
            return p + (q - p) * 6 * t
        if t < 1 / 2:
            return q
        if t < 2 / 3:
            return p + (q - p) * (2 / 3 - t) * 6
        return p

    q = lightness * (1 + saturation) if lightness < 0.5 else lightness + saturation - lightness * saturation
    p = 2 * lightness - q
    channels = (hue_to_rgb(p, q, hue + 1 / 3), hue_to_rgb(p, q, hue), hue_to_rgb(p, q, hue - 1 / 3))
    return _rgb_to_hex(tuple(int(round(c * 255)) for c in channels))


def community_palette(count: int) -> List[str]:
    """Base community colours, extended with golden-ratio hues when needed."""
    palette = list(CONFIG["COMMUNITY_COLORS"])
    idx = len(palette)
    while len(palette) < count:
        palette.append(_hsl_to_hex((idx * 0.61803398875) % 1.0, 0.55, 0.55))
        idx += 1
    return palette[:count]


def _edge_label(edge_type: str) -> str:
    return str(edge_type).replace("_", " ").title()


def build_network(
    payload: VisualizationData,
    color_by_community: bool = False,
    show_labels: bool = True,
    height: int = GRAPH_CANVAS_HEIGHT,
) -> Network:
    net = Network(
        height=f"{height}px",
        width="100%",
        directed=True,
        notebook=False,
        bgcolor="#FCFAF6",
        font_color="#1F2A37",
    )

    palette: List[str] = []
    if color_by_community:
        community_count = 1 + max((n.get("community", -1) for n in payload.nodes), default=-1)
        palette = community_palette(community_count)

    names = {node["id"]: node["name"] for node in payload.nodes}
    for node in payload.nodes:
        base = node["color"]
        if palette and node.get("community") is not None:
            base = palette[node["community"]]
        options: Dict[str, Any] = {
            "label": node["name"] if show_labels else " ",
            "title": f"{node['name']}\nType: {node['type']}\nDegree: {node['degree']}",
            "color": _node_color(base),
            "size": node["size"],
            "font": {"face": VIS_FONT_FACE, "color": "#1F2A37", "strokeWidth": 3, "strokeColor": "rgba(248, 244, 237, 0.92)"},
            "borderWidth": 2,
        }
        if node.get("fx") is not None and node.get("fy") is not None:
            options.update({"x": node["fx"], "y": node["fy"], "fixed": True, "physics": False})
        net.add_node(node["id"], **options)

    for link in payload.links:
        label = _edge_label(link["type"])
        net.add_edge(
            link["source"],
            link["target"],
            label=label,
            title=f"{label}: {names.get(link['source'])} -> {names.get(link['target'])} ({link['strength']})",
            color={"color": link["color"], "highlight": _blend_hex(link["color"], "#FFFFFF", 0.15)},
            width=link["stroke_width"],
            arrows={"to": {"enabled": True, "scaleFactor": 0.6}},
            font={"size": 9, "align": "middle", "face": VIS_FONT_FACE, "color": "#2D3748"},
        )

    net.options = {
        "layout": {"improvedLayout": True, "randomSeed": 23},
        "edges": {"smooth": {"type": "dynamic", "roundness": 0.35}},
        "physics": {
            "enabled": True,
            "solver": "forceAtlas2Based",
            "forceAtlas2Based": {"gravitationalConstant": -50, "springLength": 120, "avoidOverlap": 0.8},
            "stabilization": {"enabled": True, "iterations": 150, "fit": True},
        },
        "interaction": {"hover": True, "navigationButtons": True, "tooltipDelay": 120},
    }
    logging.debug("Built network with %d nodes and %d edges", len(net.nodes), len(net.edges))
    return net
