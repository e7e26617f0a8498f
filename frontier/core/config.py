"""Tunables for traversal dispatch and the direction-optimizing engine."""

from __future__ import annotations

import os
from dataclasses import dataclass

OPTIMIZATION_THRESHOLD = 10_000
"""Graphs with more nodes than this use the CSR + DOBFS path."""

THRESHOLD_ENV_VAR = "FRONTIER_OPTIMIZATION_THRESHOLD"

DEFAULT_ALPHA = 15.0
DEFAULT_BETA = 20.0


@dataclass(frozen=True)
class BFSConfig:
    """Direction switching thresholds.

    alpha: go bottom-up once frontier out-edges exceed ``edge_count / alpha``.
    beta: go back top-down once the frontier drops below ``node_count / beta``.
    """

    alpha: float = DEFAULT_ALPHA
    beta: float = DEFAULT_BETA

    def __post_init__(self) -> None:
        if self.alpha <= 0:
            raise ValueError(f"alpha must be positive, got {self.alpha}")
        if self.beta <= 0:
            raise ValueError(f"beta must be positive, got {self.beta}")


def threshold_from_env() -> int:
    """Read the optimization cutoff, falling back to the built-in default."""
    raw = os.environ.get(THRESHOLD_ENV_VAR)
    if raw is None or not raw.strip():
        return OPTIMIZATION_THRESHOLD
    try:
        value = int(raw)
    except ValueError as e:
        raise ValueError(f"{THRESHOLD_ENV_VAR} must be an integer, got {raw!r}") from e
    if value < 0:
        raise ValueError(f"{THRESHOLD_ENV_VAR} must be non-negative, got {value}")
    return value
