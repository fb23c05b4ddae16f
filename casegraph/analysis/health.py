"""Composite 0-100 network health score."""

from __future__ import annotations

from typing import Dict, List

from casegraph.analysis.metrics import graph_density
from casegraph.models import BasicMetrics, HealthScore, PathAnalysis

FACTOR_MAX = 25

_GRADE_BANDS = ((90, "A+"), (80, "A"), (70, "B+"), (60, "B"), (50, "C+"), (40, "C"), (30, "D"))

_FACTOR_HINTS = {
    "size": ("Add more entities to enrich the network", "Improves the depth of the analysis"),
    "density": ("Create more relationships between existing entities", "Reveals hidden connections"),
    "connectivity": ("Connect the isolated groups of entities", "Unifies the investigation network"),
    "diversity": ("Diversify entity and relationship types", "Enables a more complete analysis"),
}


def size_factor(node_count: int) -> int:
    if node_count >= 20:
        return 25
    if node_count >= 10:
        return 20
    if node_count >= 5:
        return 15
    if node_count >= 2:
        return 10
    return 0


def density_factor(density: float) -> int:
    if density >= 0.3:
        return 25
    if density >= 0.2:
        return 20
    if density >= 0.1:
        return 15
    if density >= 0.05:
        return 10
    return 0


def connectivity_factor(component_count: int, node_count: int) -> int:
    if component_count == 1:
        return 25
    if component_count <= 2:
        return 15
    if component_count <= node_count * 0.3:
        return 10
    return 0


def diversity_factor(node_type_count: int, edge_type_count: int) -> int:
    if node_type_count >= 5 and edge_type_count >= 3:
        return 25
    if node_type_count >= 3 and edge_type_count >= 2:
        return 20
    if node_type_count >= 2:
        return 15
    return 10


def health_grade(score: float) -> str:
    for threshold, grade in _GRADE_BANDS:
        if score >= threshold:
            return grade
    return "F"


def factor_recommendations(factors: Dict[str, int]) -> List[Dict[str, str]]:
    hints = []
    for factor, (message, impact) in _FACTOR_HINTS.items():
        if factors.get(factor, 0) < FACTOR_MAX:
            hints.append({"factor": factor, "message": message, "impact": impact})
    return hints


def calculate_health_score(basic: BasicMetrics, paths: PathAnalysis) -> HealthScore:
    factors = {
        "size": size_factor(basic.node_count),
        "density": density_factor(graph_density(basic.node_count, basic.edge_count)),
        "connectivity": connectivity_factor(paths.component_count, basic.node_count),
        "diversity": diversity_factor(
            len(basic.node_type_distribution), len(basic.edge_type_distribution)
        ),
    }
    score = sum(factors.values())
    return HealthScore(
        score=score,
        max_score=4 * FACTOR_MAX,
        percentage=score,
        grade=health_grade(score),
        factors=factors,
        recommendations=factor_recommendations(factors),
    )
