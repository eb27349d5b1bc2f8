"""
Weighted directed graph of visit transitions.

Edges represent source -> target moves between places; repeated transitions
accumulate into one weight. Node order is insertion order and is the basis of
every matrix index handed to the solvers. The graph freezes the first time a
matrix view is requested, so solvers can share it read-only (also across
threads) and row/column i always names the same node.
"""

from __future__ import annotations

import math
import threading
from collections.abc import Hashable, Iterable, Iterator, Mapping
from typing import Any

import numpy as np

from hangout_rank.core.exceptions import InvalidGraphError
from hangout_rank.rank_logging import get_logger

logger = get_logger(__name__)

Node = Hashable


def _edge_parts(edge: Any) -> tuple[Node, Node, float]:
    """Unpack (source, target) or (source, target, weight)."""
    if len(edge) == 2:
        source, target = edge
        return source, target, 1.0
    if len(edge) == 3:
        source, target, weight = edge
        return source, target, float(weight)
    raise InvalidGraphError(f"Edge must be (source, target[, weight]), got {edge!r}")


class Graph:
    """
    Immutable-once-used weighted digraph.

    Build with add_edge / add_node (or Graph.from_edges), then hand to solvers.
    Any matrix view freezes the graph; later mutation raises InvalidGraphError.
    """

    def __init__(self) -> None:
        self._index: dict[Node, int] = {}
        self._nodes: list[Node] = []
        self._weights: dict[tuple[int, int], float] = {}
        self._frozen = False
        self._matrix_cache: dict[str, np.ndarray] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_edges(cls, edges: Iterable[Any], nodes: Iterable[Node] = ()) -> Graph:
        """
        Build a graph from (source, target) or (source, target, weight) tuples.

        nodes: extra nodes registered first (e.g. places with no transitions).
        """
        graph = cls()
        for node in nodes:
            graph.add_node(node)
        for edge in edges:
            source, target, weight = _edge_parts(edge)
            graph.add_edge(source, target, weight)
        return graph

    # --- building ---

    def _check_mutable(self) -> None:
        if self._frozen:
            raise InvalidGraphError("Graph is frozen: it has already been used by a solver")

    def add_node(self, node: Node) -> int:
        """Register a node (no-op if present). Returns its matrix index."""
        self._check_mutable()
        idx = self._index.get(node)
        if idx is None:
            idx = len(self._nodes)
            self._index[node] = idx
            self._nodes.append(node)
        return idx

    def add_edge(self, source: Node, target: Node, weight: float = 1.0) -> None:
        """
        Add weight to edge source -> target, creating nodes as needed.

        Weight must be finite and >= 0. A zero weight registers both nodes but
        adds no edge until some positive weight accumulates on the pair.
        """
        self._check_mutable()
        weight = float(weight)
        if not math.isfinite(weight):
            raise InvalidGraphError(f"Edge weight must be finite, got {weight} for {source!r}->{target!r}")
        if weight < 0:
            raise InvalidGraphError(f"Edge weight must be >= 0, got {weight} for {source!r}->{target!r}")
        i = self.add_node(source)
        j = self.add_node(target)
        if weight == 0.0:
            return
        self._weights[(i, j)] = self._weights.get((i, j), 0.0) + weight

    # --- views ---

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> Graph:
        self._frozen = True
        return self

    def nodes(self) -> tuple[Node, ...]:
        return tuple(self._nodes)

    def num_nodes(self) -> int:
        return len(self._nodes)

    def num_edges(self) -> int:
        return len(self._weights)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node: object) -> bool:
        return node in self._index

    def index_of(self, node: Node) -> int:
        try:
            return self._index[node]
        except KeyError:
            raise InvalidGraphError(f"Unknown node: {node!r}") from None

    def weight(self, source: Node, target: Node) -> float:
        """Accumulated weight of source -> target (0.0 if absent)."""
        i = self._index.get(source)
        j = self._index.get(target)
        if i is None or j is None:
            return 0.0
        return self._weights.get((i, j), 0.0)

    def edges(self) -> Iterator[tuple[Node, Node, float]]:
        """Yield (source, target, weight) in insertion order of first transition."""
        for (i, j), w in self._weights.items():
            yield self._nodes[i], self._nodes[j], w

    def out_degree(self, node: Node, weighted: bool = False) -> float:
        i = self.index_of(node)
        return sum(w if weighted else 1.0 for (s, _), w in self._weights.items() if s == i)

    def in_degree(self, node: Node, weighted: bool = False) -> float:
        j = self.index_of(node)
        return sum(w if weighted else 1.0 for (_, t), w in self._weights.items() if t == j)

    def require_nodes(self) -> int:
        """Return n, or raise InvalidGraphError for an empty graph."""
        n = len(self._nodes)
        if n == 0:
            raise InvalidGraphError("Graph has no nodes")
        return n

    # --- matrices ---

    def _cached(self, key: str, build: Any) -> np.ndarray:
        with self._lock:
            self._frozen = True
            matrix = self._matrix_cache.get(key)
            if matrix is None:
                matrix = build()
                matrix.setflags(write=False)
                self._matrix_cache[key] = matrix
                logger.debug(
                    "graph_matrix_built",
                    matrix=key,
                    num_nodes=len(self._nodes),
                    num_edges=len(self._weights),
                )
            return matrix

    def adjacency_matrix(self, weighted: bool = True) -> np.ndarray:
        """
        Dense n x n adjacency: entry [i, j] is the weight of i -> j (1.0 if unweighted).

        Freezes the graph. The returned array is read-only and shared; copy before editing.
        """
        self.require_nodes()

        def build() -> np.ndarray:
            n = len(self._nodes)
            matrix = np.zeros((n, n), dtype=np.float64)
            for (i, j), w in self._weights.items():
                matrix[i, j] = w if weighted else 1.0
            return matrix

        return self._cached("adjacency_weighted" if weighted else "adjacency", build)

    def authority_matrix(self, weighted: bool = True) -> np.ndarray:
        """Symmetric M = A^T A (co-citation counts). Read-only, cached."""
        adjacency = self.adjacency_matrix(weighted)
        return self._cached(
            "authority_weighted" if weighted else "authority",
            lambda: adjacency.T @ adjacency,
        )

    def vector_from_mapping(self, values: Any, name: str = "vector") -> np.ndarray:
        """
        Turn a node -> value mapping (or a length-n sequence) into an array in node order.

        Missing nodes get 0. Unknown nodes raise InvalidGraphError.
        """
        n = self.require_nodes()
        if isinstance(values, Mapping):
            out = np.zeros(n, dtype=np.float64)
            for node, value in values.items():
                out[self.index_of(node)] = float(value)
            return out
        out = np.asarray(values, dtype=np.float64).reshape(-1)
        if out.shape[0] != n:
            raise InvalidGraphError(f"{name} has length {out.shape[0]}, graph has {n} nodes")
        return out.copy()

    def scores_from_vector(self, vector: np.ndarray) -> dict[Node, float]:
        """Map an array in node order back to {node: float}."""
        return {node: float(vector[i]) for i, node in enumerate(self._nodes)}

    def __repr__(self) -> str:
        return f"Graph(nodes={len(self._nodes)}, edges={len(self._weights)}, frozen={self._frozen})"
