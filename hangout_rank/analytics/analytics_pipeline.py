"""
Analytics pipeline: run the link-analysis solvers on one graph and compare them.

Single entrypoint for callers holding a finished edge list or Graph:
graph -> pagerank / hits / randomized_hits / subspace_hits -> evaluate_scores.
Each solver run is isolated: a NumericalError (or any other engine error) in
one solver is logged and recorded, and the remaining solvers still run.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Hashable, Iterable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from functools import partial
from typing import Any

from hangout_rank.analysis_engine.evaluator import evaluate_scores
from hangout_rank.analysis_engine.graph import Graph
from hangout_rank.analysis_engine.hits import hits
from hangout_rank.analysis_engine.models import IterationResult
from hangout_rank.analysis_engine.pagerank import pagerank
from hangout_rank.analysis_engine.randomized_hits import randomized_hits
from hangout_rank.analysis_engine.subspace_hits import subspace_hits
from hangout_rank.config.settings import RankConfig
from hangout_rank.core.exceptions import ConfigurationError, InvalidGraphError, RankError
from hangout_rank.rank_logging import bind_algorithm, get_logger

logger = get_logger(__name__)

Solver = Callable[..., IterationResult]

SOLVERS: dict[str, Solver] = {
    "pagerank": pagerank,
    "hits": hits,
    "randomized_hits": randomized_hits,
    "subspace_hits": subspace_hits,
}
DEFAULT_ALGORITHMS = tuple(SOLVERS)


def _resolve_algorithms(algorithms: Sequence[str] | None) -> list[str]:
    names = list(algorithms) if algorithms is not None else list(DEFAULT_ALGORITHMS)
    if not names:
        raise ConfigurationError("At least one algorithm is required")
    unknown = [name for name in names if name not in SOLVERS]
    if unknown:
        raise ConfigurationError(f"Unknown algorithm(s): {unknown}; expected one of {list(SOLVERS)}")
    return list(dict.fromkeys(names))


def _run_solver_safe(
    name: str,
    graph: Graph,
    config: RankConfig,
    personalization: Mapping[Hashable, float] | None,
) -> tuple[str, IterationResult | None, str | None]:
    """
    Run one solver from SOLVERS; personalization goes to PageRank only.
    Engine errors are caught and logged; returns (name, result, error).
    Errors outside the engine's taxonomy propagate.
    """
    solver = SOLVERS[name]
    if name == "pagerank" and personalization is not None:
        solver = partial(solver, personalization=personalization)
    try:
        return name, solver(graph, config), None
    except RankError as e:
        bind_algorithm(__name__, name).warning(
            "analytics_solver_failed",
            error_type=type(e).__name__,
            error=str(e),
            exc_info=True,
        )
        return name, None, f"{type(e).__name__}: {e}"


def run_link_analysis(
    graph: Graph,
    config: RankConfig | None = None,
    *,
    algorithms: Sequence[str] | None = None,
    personalization: Mapping[Hashable, float] | None = None,
    concurrency: int = 1,
) -> dict[str, Any]:
    """
    Run the requested solvers over one graph and compare their rankings.

    Args:
        graph: Graph built from the visit-transition edge list; frozen by this call.
        config: Solver settings; defaults if None.
        algorithms: Subset of SOLVERS keys; all four if None. Duplicates are ignored.
        personalization: Optional teleport target handed to PageRank only.
        concurrency: Number of solver threads (1 = sequential, in algorithm order).

    Returns dict: graph (node/edge counts), results (name -> IterationResult),
    errors (name -> message), evaluation (EvaluationReport or None if no solver
    succeeded), runtime_sec.

    Raises:
        InvalidGraphError: graph has no nodes.
        ConfigurationError: unknown algorithm name.
    """
    config = config or RankConfig()
    names = _resolve_algorithms(algorithms)
    graph.require_nodes()
    graph.freeze()
    started = time.perf_counter()
    logger.info(
        "analytics_pipeline_start",
        num_nodes=graph.num_nodes(),
        num_edges=graph.num_edges(),
        algorithms=names,
        concurrency=concurrency,
    )

    outcomes: dict[str, tuple[IterationResult | None, str | None]] = {}
    if concurrency <= 1:
        for name in names:
            _, result, error = _run_solver_safe(name, graph, config, personalization)
            outcomes[name] = (result, error)
    else:
        with ThreadPoolExecutor(max_workers=min(concurrency, len(names))) as executor:
            futures = {
                executor.submit(_run_solver_safe, name, graph, config, personalization): name
                for name in names
            }
            for fut in as_completed(futures):
                name, result, error = fut.result()
                outcomes[name] = (result, error)

    results: dict[str, IterationResult] = {}
    errors: dict[str, str] = {}
    for name in names:
        result, error = outcomes[name]
        if result is not None:
            results[name] = result
        else:
            errors[name] = error or "unknown error"

    evaluation = evaluate_scores(results, top_k=config.top_k) if results else None
    runtime = time.perf_counter() - started
    logger.info(
        "analytics_pipeline_done",
        succeeded=list(results),
        failed=list(errors),
        runtime_sec=round(runtime, 6),
    )
    return {
        "graph": {"num_nodes": graph.num_nodes(), "num_edges": graph.num_edges()},
        "results": results,
        "errors": errors,
        "evaluation": evaluation,
        "runtime_sec": runtime,
    }


def analyze_edges(
    edges: Iterable[Any],
    config: RankConfig | None = None,
    *,
    nodes: Iterable[Hashable] = (),
    **kwargs: Any,
) -> dict[str, Any]:
    """
    Build a Graph from (source, target[, weight]) tuples and run run_link_analysis.

    nodes: extra nodes with no transitions (registered first).
    Raises InvalidGraphError if the edge list and nodes are both empty.
    """
    graph = Graph.from_edges(edges, nodes=nodes)
    if graph.num_nodes() == 0:
        raise InvalidGraphError("Edge list is empty")
    return run_link_analysis(graph, config, **kwargs)
