"""
Environment variable loading for hangout-rank.

- RANK_ALPHA: PageRank link-following probability (default 0.85)
- RANK_EPS: Randomised-HITS teleport probability (default 0.15)
- RANK_TOL: L1 convergence threshold (default 1e-8)
- RANK_MAX_ITER: iteration cap (default 200)
- RANK_K_SUB: Subspace-HITS eigensubspace dimension (default 1)
- RANK_WEIGHTED: use edge weights (default true)
- RANK_TOP_K: evaluator top-K length (default 10)
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Project root: config is hangout_rank/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def load_rank_env() -> None:
    """Load .env from project root. Safe to call multiple times; existing env wins."""
    load_dotenv(_ENV_PATH, override=False)


def env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    return float(raw)


def env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    return int(raw)


def env_bool(name: str, default: bool) -> bool:
    """
    Parse a boolean flag from env.
    Accepts 1/true/yes/on and 0/false/no/off (case-insensitive); anything else keeps the default.
    """
    raw = (os.getenv(name) or "").strip().lower()
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    return default
