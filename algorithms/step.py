"""
step.py — Algorithm Trace Types
================================
Every engine returns an ordered trace of AlgorithmSteps; the playback
engine replays it as highlight updates.

    AlgorithmStep(node_id="b", edge_id="e1")   # b was reached through e1
    AlgorithmStep(node_id="a")                 # the start node, no edge

Results are a small tagged union keyed by AlgorithmKind:

    TraversalResult      kind = BFS | DFS       steps only
    ShortestPathResult   kind = DIJKSTRA        steps + path + total_weight

`path` / `total_weight` are both None when the end node is unreachable.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union


class AlgorithmKind(Enum):
    BFS      = "bfs"
    DFS      = "dfs"
    DIJKSTRA = "dijkstra"


@dataclass(frozen=True)
class AlgorithmStep:
    """
    Attributes:
        node_id : Node visited (BFS / DFS) or finalised (Dijkstra).
        edge_id : Edge that first discovered the node; None for the start node.
    """

    node_id: str
    edge_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"nodeId": self.node_id, "edgeId": self.edge_id}


@dataclass(frozen=True)
class TraversalResult:
    kind:  AlgorithmKind
    steps: List[AlgorithmStep] = field(default_factory=list)

    def visited(self) -> List[str]:
        return [s.node_id for s in self.steps]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type":  self.kind.value,
            "steps": [s.to_dict() for s in self.steps],
        }


@dataclass(frozen=True)
class ShortestPathResult:
    steps:        List[AlgorithmStep] = field(default_factory=list)
    path:         Optional[List[str]] = None
    total_weight: Optional[float]     = None
    kind:         AlgorithmKind       = AlgorithmKind.DIJKSTRA

    @property
    def found(self) -> bool:
        return self.path is not None

    def visited(self) -> List[str]:
        return [s.node_id for s in self.steps]

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "type":  self.kind.value,
            "steps": [s.to_dict() for s in self.steps],
        }
        if self.path is not None:
            data["path"] = list(self.path)
            data["totalWeight"] = self.total_weight
        return data


AlgorithmResult = Union[TraversalResult, ShortestPathResult]
