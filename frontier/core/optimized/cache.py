"""Side table from mutable graph instances to their CompactGraph snapshots.

Entries are keyed by object identity and are never refreshed
automatically: mutating a graph after it has been snapshotted leaves the
cached CompactGraph stale until invalidate() is called for it.
"""

from __future__ import annotations

import logging
import threading
import weakref
from typing import Any

from frontier.core.graph.protocol import ReadableGraph
from frontier.core.optimized.compact import CompactGraph

logger = logging.getLogger(__name__)


class CompactGraphCache:
    """Thread-safe build-or-fetch cache of CompactGraph snapshots.

    Weak-referenceable graphs are held weakly, so an entry disappears with
    its graph. Other graphs are keyed by ``id()`` and held strongly until
    invalidated, which keeps the id from being recycled.
    """

    def __init__(self, include_weights: bool = False) -> None:
        self._include_weights = include_weights
        self._weak: weakref.WeakKeyDictionary[Any, CompactGraph] = weakref.WeakKeyDictionary()
        self._strong: dict[int, tuple[Any, CompactGraph]] = {}
        self._lock = threading.Lock()
        self.builds = 0
        self.hits = 0

    def get(self, graph: ReadableGraph) -> CompactGraph:
        """Return the cached snapshot of *graph*, building it on first use.

        The build runs under the cache lock so concurrent first callers
        never see a partially built snapshot.
        """
        with self._lock:
            compact = self._lookup(graph)
            if compact is not None:
                self.hits += 1
                return compact

            compact = CompactGraph.from_graph(graph, include_weights=self._include_weights)
            self._store(graph, compact)
            self.builds += 1
            logger.debug("Cached CompactGraph for %r: %r", graph, compact)
            return compact

    def invalidate(self, graph: ReadableGraph) -> bool:
        """Drop the snapshot for *graph*. Returns True if one was cached."""
        with self._lock:
            try:
                if graph in self._weak:
                    del self._weak[graph]
                    return True
            except TypeError:
                pass
            return self._strong.pop(id(graph), None) is not None

    def clear(self) -> None:
        with self._lock:
            self._weak.clear()
            self._strong.clear()

    def _lookup(self, graph: ReadableGraph) -> CompactGraph | None:
        try:
            return self._weak.get(graph)
        except TypeError:
            entry = self._strong.get(id(graph))
            return entry[1] if entry is not None else None

    def _store(self, graph: ReadableGraph, compact: CompactGraph) -> None:
        try:
            self._weak[graph] = compact
        except TypeError:
            self._strong[id(graph)] = (graph, compact)

    def __contains__(self, graph: object) -> bool:
        with self._lock:
            return self._lookup(graph) is not None  # type: ignore[arg-type]

    def __len__(self) -> int:
        with self._lock:
            return len(self._weak) + len(self._strong)

    def __repr__(self) -> str:
        return f"CompactGraphCache(entries={len(self)}, builds={self.builds}, hits={self.hits})"


default_cache = CompactGraphCache()
