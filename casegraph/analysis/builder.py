"""Turn folder entity/relationship records into the in-memory graph model."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Tuple

import networkx as nx

from casegraph.config import DEFAULT_STRENGTH, STRENGTH_WEIGHTS
from casegraph.exceptions import GraphConstructionError
from casegraph.models import Edge, Graph, Node, ValidationReport


def relationship_weight(strength: Optional[str]) -> Tuple[str, int]:
    """Normalize a strength label and return it with its numeric weight."""
    label = (strength or "").strip().lower() if isinstance(strength, str) else ""
    if label not in STRENGTH_WEIGHTS:
        if strength:
            logging.debug("Unknown relationship strength %r, using %s", strength, DEFAULT_STRENGTH)
        label = DEFAULT_STRENGTH
    return label, STRENGTH_WEIGHTS[label]


def _extract_position(entity: Mapping[str, Any]) -> Optional[Dict[str, float]]:
    x = entity.get("x")
    y = entity.get("y")
    if x is None and y is None:
        return None
    try:
        return {"x": float(x or 0), "y": float(y or 0)}
    except (TypeError, ValueError):
        logging.debug("Ignoring non-numeric position for entity %s", entity.get("id"))
        return None


def build_graph(
    entities: Iterable[Mapping[str, Any]],
    relationships: Iterable[Mapping[str, Any]],
) -> Graph:
    graph = Graph()

    for entity in entities:
        entity_id = entity.get("id")
        if entity_id in graph.nodes:
            raise GraphConstructionError(f"Duplicate entity id {entity_id!r}")
        node_type = entity.get("type") or "unknown"
        graph.nodes[entity_id] = Node(
            id=entity_id,
            name=entity.get("name") or str(entity_id),
            type=node_type,
            attributes=dict(entity.get("attributes") or {}),
            position=_extract_position(entity),
        )
        graph.adjacency[entity_id] = set()
        graph.node_types[node_type] += 1

    for rel in relationships:
        source = rel.get("from_entity")
        target = rel.get("to_entity")
        missing = list(dict.fromkeys(e for e in (source, target) if e not in graph.nodes))
        if missing:
            logging.error("Relationship %s references unknown entities %s", rel.get("id"), missing)
            raise GraphConstructionError(
                f"Relationship {rel.get('id')!r} references non-existent entity id(s) "
                + ", ".join(repr(m) for m in missing),
                edge_id=rel.get("id"),
                missing=missing,
            )

        strength, weight = relationship_weight(rel.get("strength"))
        edge_type = rel.get("type") or "connected"
        edge = Edge(
            id=rel.get("id"),
            source=source,
            target=target,
            type=edge_type,
            strength=strength,
            weight=weight,
            description=rel.get("description"),
        )
        graph.edges.append(edge)

        if source != target:
            graph.adjacency[source].add(target)
            graph.adjacency[target].add(source)

        from_node = graph.nodes[source]
        from_node.out_degree += 1
        from_node.degree += 1
        from_node.strength += weight

        to_node = graph.nodes[target]
        to_node.in_degree += 1
        to_node.degree += 1
        to_node.strength += weight

        graph.edge_types[edge_type] += 1

    logging.debug("Built graph with %d nodes and %d edges", graph.node_count, graph.edge_count)
    return graph


def validate_graph(graph: Graph) -> ValidationReport:
    errors: List[str] = []
    warnings: List[str] = []

    for edge in graph.edges:
        if edge.source not in graph.nodes:
            errors.append(f"Edge {edge.id} references non-existent source node {edge.source}")
        if edge.target not in graph.nodes:
            errors.append(f"Edge {edge.id} references non-existent target node {edge.target}")

    self_loops = [edge for edge in graph.edges if edge.source == edge.target]
    if self_loops:
        warnings.append(f"{len(self_loops)} self-referencing edge(s) detected")

    seen: Set[Tuple[frozenset, str]] = set()
    duplicates: List[Any] = []
    for edge in graph.edges:
        key = (frozenset((edge.source, edge.target)), edge.type)
        if key in seen:
            duplicates.append(edge.id)
        else:
            seen.add(key)
    if duplicates:
        warnings.append(f"{len(duplicates)} duplicate edge(s) detected")

    for warning in warnings:
        logging.warning("Graph validation: %s", warning)

    return ValidationReport(
        is_valid=not errors,
        errors=errors,
        warnings=warnings,
        stats={
            "node_count": graph.node_count,
            "edge_count": graph.edge_count,
            "self_loops": len(self_loops),
            "duplicates": len(duplicates),
        },
    )


def to_networkx(graph: Graph) -> nx.Graph:
    """Simple undirected view over the deduplicated adjacency sets."""
    G = nx.Graph()
    for node_id in graph.nodes:
        G.add_node(node_id)
    for node_id, neighbors in graph.adjacency.items():
        for neighbor in neighbors:
            G.add_edge(node_id, neighbor)
    return G
