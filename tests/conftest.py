"""
Pytest fixtures for hangout-rank tests. Small hand-checkable visit graphs.
"""

from __future__ import annotations

import pytest

from hangout_rank.analysis_engine.graph import Graph
from hangout_rank.config.settings import RankConfig

MBS = "Marina Bay Sands"
GBB = "Gardens by the Bay"
ZOO = "Singapore Zoo"
CHINATOWN = "Chinatown"
SENTOSA = "Sentosa"

SINGAPORE_EDGES = [
    (MBS, GBB),
    (GBB, ZOO),
    (ZOO, MBS),
    (CHINATOWN, GBB),
    (SENTOSA, ZOO),
    (MBS, SENTOSA),
]


@pytest.fixture
def singapore_graph() -> Graph:
    """Six-edge visit graph: MBS -> GBB -> Zoo -> MBS cycle plus Chinatown and Sentosa feeders."""
    return Graph.from_edges(SINGAPORE_EDGES)


@pytest.fixture
def cycle_graph() -> Graph:
    """Unweighted three-node cycle A -> B -> C -> A."""
    return Graph.from_edges([("A", "B"), ("B", "C"), ("C", "A")])


@pytest.fixture
def cycle_with_isolated_graph() -> Graph:
    """Three-node cycle plus a node with no in- or out-edges."""
    graph = Graph.from_edges([("A", "B"), ("B", "C"), ("C", "A")])
    graph.add_node("Changi")
    return graph


@pytest.fixture
def single_node_graph() -> Graph:
    graph = Graph()
    graph.add_node("Merlion Park")
    return graph


@pytest.fixture
def config() -> RankConfig:
    return RankConfig()
