"""
node.py — Graph Node
====================
Immutable identity (id), mutable position and label.

Serialised shape:
    {"id": "node_…", "position": {"x": 12.0, "y": 40.5}, "label": "Node 3"}

`from_dict` also accepts the older nested export shape where the label
lives under `data.label`.
"""

import re
from typing import Optional, Tuple

from graph.ids import generate_id


# Auto-generated labels look like "Node 7"; only these feed the label counter.
DEFAULT_LABEL_RE = re.compile(r"^Node\s+(\d+)$")


def default_label(n: int) -> str:
    return f"Node {n}"


class Node:
    """
    Attributes:
        id    : Unique identifier, fixed at creation.
        label : Human-readable name shown on the canvas (renamable).
        x, y  : Canvas coordinates.
    """

    __slots__ = ("id", "label", "x", "y")

    def __init__(
        self,
        x: float = 0.0,
        y: float = 0.0,
        label: Optional[str] = None,
        node_id: Optional[str] = None,
    ):
        self.id: str    = node_id or generate_id("node")
        self.label: str = label if label is not None else self.id
        self.x: float   = float(x)
        self.y: float   = float(y)

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def move_to(self, x: float, y: float) -> None:
        self.x = float(x)
        self.y = float(y)

    def label_number(self) -> Optional[int]:
        """N for a label of the exact form "Node N", else None."""
        match = DEFAULT_LABEL_RE.match(self.label or "")
        return int(match.group(1)) if match else None

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":       self.id,
            "position": {"x": self.x, "y": self.y},
            "label":    self.label,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Node":
        position = data.get("position") or {}
        label = data.get("label")
        if label is None:
            label = (data.get("data") or {}).get("label")
        if not isinstance(data["id"], str):
            raise TypeError(f"node id must be a string, not {type(data['id']).__name__}")
        if label is not None and not isinstance(label, str):
            raise TypeError(f"node label must be a string, not {type(label).__name__}")
        return cls(
            x=position.get("x", 0.0),
            y=position.get("y", 0.0),
            label=label,
            node_id=data["id"],
        )

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Node(id={self.id}, label={self.label}, pos=({self.x:.2f},{self.y:.2f}))"

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
