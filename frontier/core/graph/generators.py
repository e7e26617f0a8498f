"""Deterministic graph generators for tests, demos and the CLI.

All generators use integer node ids ``0..n-1`` and a seeded
``random.Random`` where randomness is involved, so the same arguments
always produce the same graph.
"""

from __future__ import annotations

import math
import random
from collections.abc import Callable

from frontier.core.graph.base import Graph


def path_graph(n: int, directed: bool = False) -> Graph:
    """0 - 1 - 2 - ... - (n-1)."""
    graph = Graph(directed=directed)
    for i in range(n):
        graph.add_node(i)
    for i in range(1, n):
        graph.add_edge(i - 1, i)
    return graph


def cycle_graph(n: int, directed: bool = False) -> Graph:
    graph = path_graph(n, directed=directed)
    if n > 2:
        graph.add_edge(n - 1, 0)
    return graph


def star_graph(n: int, directed: bool = False) -> Graph:
    """Hub 0 connected to leaves 1..n-1."""
    graph = Graph(directed=directed)
    if n > 0:
        graph.add_node(0)
    for i in range(1, n):
        graph.add_edge(0, i)
    return graph


def grid_graph(n: int, directed: bool = False) -> Graph:
    """4-connected grid with ``ceil(sqrt(n))`` columns, truncated to n nodes."""
    graph = Graph(directed=directed)
    cols = max(1, math.ceil(math.sqrt(n)))
    for i in range(n):
        graph.add_node(i)
        if i % cols and i - 1 >= 0:
            graph.add_edge(i - 1, i)
        if i - cols >= 0:
            graph.add_edge(i - cols, i)
    return graph


def complete_graph(n: int, directed: bool = False) -> Graph:
    graph = Graph(directed=directed)
    for i in range(n):
        graph.add_node(i)
        for j in range(i):
            graph.add_edge(j, i)
            if directed:
                graph.add_edge(i, j)
    return graph


def binary_tree_graph(n: int, directed: bool = False) -> Graph:
    """Heap-shaped tree: node i has children 2i+1 and 2i+2."""
    graph = Graph(directed=directed)
    for i in range(n):
        graph.add_node(i)
        if i > 0:
            graph.add_edge((i - 1) // 2, i)
    return graph


def small_world_graph(
    n: int,
    k: int = 2,
    shortcut_every: int = 100,
    seed: int = 42,
    directed: bool = False,
) -> Graph:
    """Ring lattice (each node linked to its k successors) plus random shortcuts.

    One long-range edge is added from every ``shortcut_every``-th node.
    """
    rng = random.Random(seed)
    graph = Graph(directed=directed)
    for i in range(n):
        graph.add_node(i)
    for i in range(n):
        for step in range(1, k + 1):
            j = (i + step) % n
            if j != i:
                graph.add_edge(i, j)
        if shortcut_every and i % shortcut_every == 0 and n > 1:
            target = rng.randrange(n)
            if target != i and not graph.has_edge(i, target):
                graph.add_edge(i, target)
    return graph


def random_graph(n: int, p: float = 0.1, seed: int = 42, directed: bool = False) -> Graph:
    """G(n, p) graph. O(n^2); meant for small inputs."""
    if not 0.0 <= p <= 1.0:
        raise ValueError(f"p must be in [0, 1], got {p}")
    rng = random.Random(seed)
    graph = Graph(directed=directed)
    for i in range(n):
        graph.add_node(i)
    for i in range(n):
        for j in range(n) if directed else range(i + 1, n):
            if i != j and rng.random() < p:
                graph.add_edge(i, j)
    return graph


GENERATORS: dict[str, Callable[..., Graph]] = {
    "path": path_graph,
    "cycle": cycle_graph,
    "star": star_graph,
    "grid": grid_graph,
    "complete": complete_graph,
    "tree": binary_tree_graph,
    "small-world": small_world_graph,
    "random": random_graph,
}


def generate(kind: str, n: int, seed: int = 42, directed: bool = False) -> Graph:
    """Build a graph by generator name."""
    try:
        factory = GENERATORS[kind]
    except KeyError:
        choices = ", ".join(sorted(GENERATORS))
        raise ValueError(f"Unknown graph type '{kind}'. Choose from: {choices}") from None
    if kind in ("small-world", "random"):
        return factory(n, seed=seed, directed=directed)
    return factory(n, directed=directed)
