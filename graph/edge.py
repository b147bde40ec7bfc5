"""
edge.py — Graph Edge
====================
Connects two nodes and carries a real-valued weight.

Design decisions:
  - `source` and `target` are node-id strings, NOT Node references.
    This keeps edges serialisable and avoids circular references.
  - Weight defaults to 1 — BFS / DFS never read it.
  - Directedness is NOT stored per edge.  The store's GraphMode decides
    whether an edge is one arc or two, so toggling the mode never touches
    edge identity or weight.
  - `source_handle` / `target_handle` are presentation hints (which port of
    the node the connection was dragged from).  Algorithms ignore them.
"""

from enum import Enum
from typing import Optional

from graph.ids import generate_id


# ---------------------------------------------------------------------------
# Graph Mode
# ---------------------------------------------------------------------------
class GraphMode(Enum):
    DIRECTED   = "directed"
    UNDIRECTED = "undirected"

    def toggled(self) -> "GraphMode":
        if self is GraphMode.DIRECTED:
            return GraphMode.UNDIRECTED
        return GraphMode.DIRECTED


# ---------------------------------------------------------------------------
# Edge
# ---------------------------------------------------------------------------
class Edge:
    """
    Attributes:
        id            : Unique identifier, fixed at creation.
        source        : ID of the tail node.
        target        : ID of the head node.
        weight        : Numeric cost (default 1).
        source_handle : Optional port hint on the source node.
        target_handle : Optional port hint on the target node.
    """

    __slots__ = ("id", "source", "target", "weight", "source_handle", "target_handle")

    def __init__(
        self,
        source: str,
        target: str,
        weight: float = 1.0,
        edge_id: Optional[str] = None,
        source_handle: Optional[str] = None,
        target_handle: Optional[str] = None,
    ):
        self.id:            str           = edge_id or generate_id("edge")
        self.source:        str           = source
        self.target:        str           = target
        self.weight:        float         = float(weight)
        self.source_handle: Optional[str] = source_handle
        self.target_handle: Optional[str] = target_handle

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def connects(self, node_a: str, node_b: str, mode: GraphMode) -> bool:
        """True if this edge already links node_a → node_b under `mode`."""
        if self.source == node_a and self.target == node_b:
            return True
        if mode is GraphMode.UNDIRECTED:
            return self.source == node_b and self.target == node_a
        return False

    def touches(self, node_id: str) -> bool:
        return self.source == node_id or self.target == node_id

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        data = {
            "id":     self.id,
            "source": self.source,
            "target": self.target,
            "weight": self.weight,
        }
        if self.source_handle is not None:
            data["sourceHandle"] = self.source_handle
        if self.target_handle is not None:
            data["targetHandle"] = self.target_handle
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Edge":
        weight = data.get("weight")
        if weight is None:
            weight = (data.get("data") or {}).get("weight")
        for field in ("id", "source", "target"):
            if not isinstance(data[field], str):
                raise TypeError(f"edge {field} must be a string, not {type(data[field]).__name__}")
        for field in ("sourceHandle", "targetHandle"):
            if data.get(field) is not None and not isinstance(data[field], str):
                raise TypeError(f"edge {field} must be a string")
        if isinstance(weight, bool):
            raise TypeError("edge weight must be a number")
        return cls(
            source=data["source"],
            target=data["target"],
            weight=1.0 if weight is None else weight,
            edge_id=data["id"],
            source_handle=data.get("sourceHandle"),
            target_handle=data.get("targetHandle"),
        )

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Edge({self.source} — {self.target}, w={self.weight})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Edge) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
