"""
Tests for solver logging: run-scoped records carry the algorithm name and the events
the engine actually emits.
"""

from __future__ import annotations

from structlog.testing import capture_logs

from hangout_rank.analysis_engine.graph import Graph
from hangout_rank.analysis_engine.hits import hits
from hangout_rank.analysis_engine.pagerank import pagerank
from hangout_rank.config.settings import RankConfig
from hangout_rank.rank_logging.logger import event_to_event_type


def _events(records, name):
    return [record for record in records if record["event"] == name]


def test_converged_run_logs_solver_done(singapore_graph):
    """A converged PageRank run emits one info solver_done bound to the algorithm."""
    with capture_logs() as records:
        result = pagerank(singapore_graph)
    done = _events(records, "solver_done")
    assert len(done) == 1
    assert done[0]["algorithm"] == "pagerank"
    assert done[0]["iterations"] == result.iterations
    assert done[0]["converged"] is True
    assert done[0]["log_level"] == "info"
    assert _events(records, "solver_max_iter_reached") == []


def test_capped_run_logs_warning(singapore_graph):
    """Stopping at max_iter is a warning, not an error."""
    with capture_logs() as records:
        hits(singapore_graph, RankConfig(max_iter=1))
    capped = _events(records, "solver_max_iter_reached")
    assert len(capped) == 1
    assert capped[0]["algorithm"] == "hits"
    assert capped[0]["iterations"] == 1
    assert capped[0]["log_level"] == "warning"


def test_zero_update_logged_once():
    """HITS on a graph with no edges substitutes the uniform vector and warns once."""
    graph = Graph.from_edges([], nodes=["Changi", "Jewel"])
    with capture_logs() as records:
        result = hits(graph)
    zero = _events(records, "power_iteration_zero_update")
    assert len(zero) == 1
    assert zero[0]["algorithm"] == "hits"
    assert result.degenerate


def test_json_records_use_event_type():
    out = event_to_event_type(None, "info", {"event": "solver_done", "iterations": 3})
    assert out == {"event_type": "solver_done", "iterations": 3}
