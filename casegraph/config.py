"""Configuration constants for analysis and rendering."""

import os

APP_TITLE = "Case Graph Explorer"
ANALYSIS_VERSION = "1.0.0"

STRENGTH_WEIGHTS = {"weak": 1, "medium": 2, "strong": 3}
DEFAULT_STRENGTH = "medium"
EDGE_WIDTHS = {"weak": 1, "medium": 2, "strong": 3}

NODE_SIZE_RANGE = (8, 30)
TOP_N = 5
HIGH_DEGREE_RATIO = 0.2
LOW_DENSITY_THRESHOLD = 0.1
LOW_DENSITY_MIN_NODES = 5

# None keeps betweenness exact; an int samples that many pivots.
BETWEENNESS_SAMPLE_SIZE = None

MAX_ANALYSIS_NODES = int(os.environ.get("CASEGRAPH_MAX_NODES", "2000"))
GRAPH_CANVAS_HEIGHT = 640

CONFIG = {
    "NODE_TYPE_COLORS": {
        "person": "#ef4444",
        "place": "#10b981",
        "organization": "#3b82f6",
        "vehicle": "#f59e0b",
        "account": "#8b5cf6",
        "event": "#ec4899",
        "document": "#6b7280",
        "phone": "#06b6d4",
        "email": "#84cc16",
        "website": "#f97316",
    },
    "RELATIONSHIP_COLORS": {
        "family": "#ef4444",
        "professional": "#3b82f6",
        "criminal": "#dc2626",
        "financial": "#059669",
        "social": "#8b5cf6",
        "connected": "#6b7280",
    },
    "DEFAULT_NODE_COLOR": "#9ca3af",
    "DEFAULT_EDGE_COLOR": "#9ca3af",
    "COMMUNITY_COLORS": [
        "#3D5A80",
        "#E07A5F",
        "#2A9D8F",
        "#E9C46A",
        "#8E7DBE",
        "#F28482",
        "#457B9D",
        "#6D597A",
    ],
}
