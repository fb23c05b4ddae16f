"""Pytest configuration and fixtures for casegraph tests."""

from typing import Any, Dict, List, Tuple

import pytest

from casegraph.analysis.builder import build_graph

Records = Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]


def entity(entity_id, entity_type="person", name=None, **extra) -> Dict[str, Any]:
    record = {"id": entity_id, "name": name or f"Entity {entity_id}", "type": entity_type}
    record.update(extra)
    return record


def relationship(rel_id, source, target, rel_type="connected", strength="medium") -> Dict[str, Any]:
    return {"id": rel_id, "from_entity": source, "to_entity": target, "type": rel_type, "strength": strength}


@pytest.fixture
def path_records() -> Records:
    """A - B - C."""
    entities = [entity("A"), entity("B"), entity("C")]
    relationships = [relationship("r1", "A", "B"), relationship("r2", "B", "C")]
    return entities, relationships


@pytest.fixture
def triangle_records() -> Records:
    entities = [entity(1), entity(2), entity(3)]
    relationships = [relationship("r1", 1, 2), relationship("r2", 2, 3), relationship("r3", 3, 1)]
    return entities, relationships


@pytest.fixture
def two_pairs_records() -> Records:
    """Two disconnected pairs: 1-2 and 3-4."""
    entities = [entity(1), entity(2), entity(3), entity(4)]
    relationships = [relationship("r1", 1, 2), relationship("r2", 3, 4)]
    return entities, relationships


@pytest.fixture
def star_records() -> Records:
    """Hub 0 linked to five leaves plus one isolated entity."""
    entities = [entity(0, "organization", name="Hub")] + [entity(i) for i in range(1, 6)] + [entity(99, "place")]
    relationships = [relationship(f"r{i}", 0, i, "professional", "strong") for i in range(1, 6)]
    return entities, relationships


@pytest.fixture
def mixed_records() -> Records:
    """Six entities of five types with three relationship types."""
    entities = [
        entity("p1", "person", name="Alice", x=10, y=20),
        entity("p2", "person", name="Bob"),
        entity("o1", "organization", name="Acme"),
        entity("a1", "account", name="Offshore"),
        entity("v1", "vehicle", name="Van"),
        entity("e1", "event", name="Meeting"),
    ]
    relationships = [
        relationship("r1", "p1", "p2", "family", "strong"),
        relationship("r2", "p1", "o1", "professional"),
        relationship("r3", "p2", "o1", "professional", "weak"),
        relationship("r4", "o1", "a1", "financial", "strong"),
        relationship("r5", "a1", "v1", "financial"),
        relationship("r6", "v1", "e1", "connected"),
        relationship("r7", "e1", "p1", "connected"),
    ]
    return entities, relationships


@pytest.fixture
def path_graph(path_records):
    return build_graph(*path_records)


@pytest.fixture
def triangle_graph(triangle_records):
    return build_graph(*triangle_records)


@pytest.fixture
def two_pairs_graph(two_pairs_records):
    return build_graph(*two_pairs_records)


@pytest.fixture
def star_graph(star_records):
    return build_graph(*star_records)


@pytest.fixture
def mixed_graph(mixed_records):
    return build_graph(*mixed_records)
