"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the builder can run.

    from algorithms import REGISTRY, get_algorithm

REGISTRY maps AlgorithmKind value → AlgoInfo.  The run engine and the
HTTP layer both consume it, so adding an algorithm is: write the engine,
add one entry here.

Engines share one calling convention:
    fn(adjacency, start_id)            needs_end = False
    fn(adjacency, start_id, end_id)    needs_end = True
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from algorithms.bfs      import bfs      as _bfs
from algorithms.dfs      import dfs      as _dfs
from algorithms.dijkstra import dijkstra as _dijkstra
from algorithms.step     import (
    AlgorithmKind,
    AlgorithmResult,
    AlgorithmStep,
    ShortestPathResult,
    TraversalResult,
)


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class AlgoInfo:
    kind:             AlgorithmKind
    label:            str                 # human label, e.g. "Breadth-First Search"
    fn:               Callable            # the engine
    needs_end:        bool = False        # requires an end node?
    complexity_time:  str  = ""
    complexity_space: str  = ""
    description:      str  = ""

    @property
    def key(self) -> str:
        return self.kind.value

    def to_dict(self) -> dict:
        return {
            "key":             self.key,
            "label":           self.label,
            "needsEnd":        self.needs_end,
            "complexityTime":  self.complexity_time,
            "complexitySpace": self.complexity_space,
            "description":     self.description,
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "bfs": AlgoInfo(
        kind=AlgorithmKind.BFS, label="BFS (Breadth-First Search)", fn=_bfs,
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Explores layer by layer from the start node.",
    ),

    "dfs": AlgoInfo(
        kind=AlgorithmKind.DFS, label="DFS (Depth-First Search)", fn=_dfs,
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Dives down one branch before backtracking.",
    ),

    "dijkstra": AlgoInfo(
        kind=AlgorithmKind.DIJKSTRA, label="Dijkstra (Shortest Path)", fn=_dijkstra,
        needs_end=True,
        complexity_time="O(V²)", complexity_space="O(V)",
        description="Cheapest path by total edge weight. Non-negative weights only.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key) -> Optional[AlgoInfo]:
    """AlgoInfo by key string or AlgorithmKind, or None."""
    if isinstance(key, AlgorithmKind):
        key = key.value
    if not isinstance(key, str):
        return None
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """All registered algorithms in insertion order."""
    return list(REGISTRY.values())


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "get_algorithm",
    "list_algorithms",
    "AlgorithmKind",
    "AlgorithmResult",
    "AlgorithmStep",
    "ShortestPathResult",
    "TraversalResult",
]
