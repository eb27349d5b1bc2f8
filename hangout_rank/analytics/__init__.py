"""
Link-analysis pipeline.

Runs the ranking solvers on a visit-transition graph and compares them.
Modules: analytics_pipeline.
"""

from hangout_rank.analytics.analytics_pipeline import (
    SOLVERS,
    analyze_edges,
    run_link_analysis,
)

__all__ = [
    "SOLVERS",
    "analyze_edges",
    "run_link_analysis",
]
