"""
structlog configuration for the link-analysis engine.

Records go to stderr. LOG_LEVEL sets the threshold (default INFO) and
LOG_FORMAT picks the renderer: "json" (default) or "console". In JSON output
structlog's positional event is written as event_type.

Events emitted by the engine:

    graph_matrix_built            debug    a cached adjacency or A^T A view was built
    pagerank_setup                debug    dangling-node count and teleport mode
    subspace_hits_basis           debug    eigensubspace size and top eigenvalue
    power_iteration_zero_update   warning  an update produced the zero vector
    power_iteration_done          debug    the loop stopped (converged or capped)
    solver_done                   info     a solver run converged
    solver_max_iter_reached       warning  a solver run stopped at max_iter
    evaluator_node_sets_differ    warning  score vectors cover different nodes
    evaluation_done               info     cross-algorithm comparison finished
    analytics_pipeline_start      info
    analytics_pipeline_done       info
    analytics_solver_failed       warning  one solver raised; the others continue

Solver-scoped records carry algorithm (via bind_algorithm) and iterations.
No hangout_rank imports here: every other module imports this one.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog

EVENT_TYPE_KEY = "event_type"


def _level_from_env() -> int:
    level = logging.getLevelName(os.getenv("LOG_LEVEL", "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO


def _json_from_env() -> bool:
    return os.getenv("LOG_FORMAT", "json").strip().lower() == "json"


def event_to_event_type(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Move structlog's event into event_type."""
    if "event" in event_dict:
        event_dict.setdefault(EVENT_TYPE_KEY, event_dict.pop("event"))
    return event_dict


def configure_logging(level: int | None = None, json_output: bool | None = None) -> None:
    """(Re)configure structlog. Arguments left as None are read from LOG_LEVEL / LOG_FORMAT."""
    level = _level_from_env() if level is None else level
    json_output = _json_from_env() if json_output is None else json_output

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
        structlog.processors.StackInfoRenderer(),
    ]
    if json_output:
        processors += [
            structlog.processors.format_exc_info,
            event_to_event_type,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


if not structlog.is_configured():
    configure_logging()


def get_logger(name: str) -> structlog.BoundLogger:
    """Module logger; every record carries logger=<name>."""
    return structlog.get_logger(name).bind(logger=name)


def bind_algorithm(name: str, algorithm: str, **context: Any) -> structlog.BoundLogger:
    """
    Logger for one solver run.

    Built at call time, so it picks up the configuration active when the run
    starts. algorithm and any extra context are attached to every record:

        log = bind_algorithm(__name__, "pagerank")
        log.info("solver_done", iterations=42, converged=True)
    """
    return structlog.get_logger(name).bind(logger=name, algorithm=algorithm, **context)
