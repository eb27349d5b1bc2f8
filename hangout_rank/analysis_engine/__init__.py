"""
Analysis engine package: link analysis over the visit-transition graph.

Builds the weighted digraph, runs the shared power iteration behind PageRank,
HITS, Randomised-HITS and Subspace-HITS, and compares the resulting rankings.
"""

from hangout_rank.analysis_engine.evaluator import (
    EvaluationReport,
    ScoreStats,
    evaluate_scores,
    score_stats,
    spearman_matrix,
    top_k_nodes,
)
from hangout_rank.analysis_engine.graph import Graph
from hangout_rank.analysis_engine.hits import hits
from hangout_rank.analysis_engine.models import (
    IterationResult,
    IterationState,
    ScoreVector,
    rescale_to_sum_one,
)
from hangout_rank.analysis_engine.pagerank import pagerank, transition_matrix
from hangout_rank.analysis_engine.power_iteration import (
    PowerIterationOutcome,
    l1_normalize,
    l2_normalize,
    power_iterate,
)
from hangout_rank.analysis_engine.randomized_hits import randomized_hits
from hangout_rank.analysis_engine.subspace_hits import dominant_eigenbasis, subspace_hits

__all__ = [
    "Graph",
    "IterationResult",
    "IterationState",
    "ScoreVector",
    "rescale_to_sum_one",
    "PowerIterationOutcome",
    "power_iterate",
    "l1_normalize",
    "l2_normalize",
    "pagerank",
    "transition_matrix",
    "hits",
    "randomized_hits",
    "subspace_hits",
    "dominant_eigenbasis",
    "EvaluationReport",
    "ScoreStats",
    "evaluate_scores",
    "score_stats",
    "spearman_matrix",
    "top_k_nodes",
]
