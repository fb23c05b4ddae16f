"""Exceptions raised by graph construction and the caller layer."""

from typing import Any, List, Optional


class GraphAnalysisError(Exception):
    """Base class for errors surfaced by the analysis package."""


class GraphConstructionError(GraphAnalysisError):
    """Raised when the input records cannot form a consistent graph.

    ``missing`` lists the entity ids a relationship referenced but the folder
    does not contain; ``edge_id`` names that relationship.
    """

    def __init__(self, message: str, edge_id: Any = None, missing: Optional[List[Any]] = None):
        super().__init__(message)
        self.edge_id = edge_id
        self.missing = list(missing or [])


class GraphTooLargeError(GraphAnalysisError):
    """Raised by callers when a folder exceeds the configured node ceiling."""

    def __init__(self, node_count: int, limit: int):
        super().__init__(f"Graph has {node_count} nodes; the analysis limit is {limit}")
        self.node_count = node_count
        self.limit = limit
